"""
Minimal translation layer for the console.

Strings are looked up by dotted key in the active language and fall back to
English, then to the key itself. The language comes from the `app_lang`
cookie and is applied at the start of every request.
"""
from flask import g, request, current_app

LANGUAGE_COOKIE_KEY = 'app_lang'
FALLBACK_LANGUAGE = 'en'

TRANSLATIONS = {
    'en': {
        'app.title': 'Carelia Admin',
        'nav.dashboard': 'Dashboard',
        'nav.categories': 'Categories',
        'nav.courses': 'Courses',
        'nav.users': 'Users',
        'nav.settings': 'Settings',
        'nav.logout': 'Logout',
        'nav.logoutTitle': 'Log out',
        'nav.logoutConfirm': 'Are you sure you want to log out?',

        'common.cancel': 'Cancel',
        'common.close': 'Close',
        'common.delete': 'Delete',
        'common.deleting': 'Deleting...',
        'common.edit': 'Edit',
        'common.save': 'Save',
        'common.saving': 'Saving...',
        'common.search': 'Search',
        'common.loadError': 'Could not load data. Please try again.',
        'common.removeFile': 'Remove file',
        'common.yes': 'Yes',
        'common.no': 'No',

        'auth.login.welcome': 'Welcome back',
        'auth.login.subtitle': 'Sign in to the admin panel',
        'auth.login.emailLabel': 'Email',
        'auth.login.passwordLabel': 'Password',
        'auth.login.rememberMe': 'Remember me',
        'auth.login.signIn': 'Sign in',
        'auth.login.missingFields': 'Email and password are required.',
        'auth.login.invalidEmail': 'Please enter a valid email address.',
        'auth.login.failed': 'Login failed. Please check your credentials.',
        'auth.logout.done': 'You have been logged out.',

        'dashboard.title': 'Dashboard',
        'dashboard.subtitle': 'Welcome to Carelia Admin Panel',
        'dashboard.stats.users': 'Total Users',
        'dashboard.stats.courses': 'Courses',
        'dashboard.stats.categories': 'Categories',
        'dashboard.stats.lessons': 'Lessons',
        'dashboard.stats.activeUsers': 'Active Users',
        'dashboard.stats.published': 'Published Courses',
        'dashboard.activity': 'Recent Activity',
        'dashboard.noActivity': 'No recent activity.',
        'dashboard.loadError': 'Could not load dashboard data.',

        'categories.title': 'Categories',
        'categories.subtitle': 'Organize courses into categories',
        'categories.addCategory': 'Add Category',
        'categories.allCategories': 'All Categories',
        'categories.searchPlaceholder': 'Search categories...',
        'categories.empty': 'No categories found.',
        'categories.loadError': 'Could not load categories.',
        'categories.table.category': 'Category',
        'categories.table.description': 'Description',
        'categories.table.status': 'Status',
        'categories.table.actions': 'Actions',
        'categories.status.active': 'Active',
        'categories.status.inactive': 'Inactive',
        'categories.labels.noImage': 'No image',
        'categories.form.nameLabel': 'Name',
        'categories.form.slugLabel': 'Slug',
        'categories.form.descriptionLabel': 'Description',
        'categories.form.imageLabel': 'Image',
        'categories.form.imageDropLabel': 'Upload image',
        'categories.form.imageDropSub': 'PNG or JPG',
        'categories.form.activeLabel': 'Active',
        'categories.form.validation.nameRequired': 'Please enter a category name.',
        'categories.form.validation.slugRequired': 'Please enter a slug.',
        'categories.form.saveError': 'Failed to save category.',
        'categories.form.saved': 'Category saved.',
        'categories.modals.addTitle': 'Add Category',
        'categories.modals.editTitle': 'Edit Category',
        'categories.modals.deleteTitle': 'Delete Category',
        'categories.modals.deleteConfirm': 'Delete "{name}"? Courses in this category are not deleted.',
        'categories.modals.deleteError': 'Failed to delete category.',
        'categories.modals.deleted': 'Category deleted.',

        'courses.title': 'Courses Management',
        'courses.subtitle': 'Manage and organize your courses',
        'courses.addCourse': 'Add Course',
        'courses.allCourses': 'All Courses',
        'courses.searchPlaceholder': 'Search courses...',
        'courses.allCategoriesOption': 'All categories',
        'courses.empty': 'No courses found.',
        'courses.loadError': 'Could not load courses.',
        'courses.table.course': 'Course',
        'courses.table.category': 'Category',
        'courses.table.duration': 'Duration',
        'courses.table.level': 'Level',
        'courses.table.views': 'Views',
        'courses.table.status': 'Status',
        'courses.table.actions': 'Actions',
        'courses.durationWeeks': '{weeks} weeks',
        'courses.status.published': 'Published',
        'courses.status.draft': 'Draft',
        'courses.levels.beginner': 'Beginner',
        'courses.levels.intermediate': 'Intermediate',
        'courses.levels.advanced': 'Advanced',
        'courses.actions.publish': 'Publish',
        'courses.actions.unpublish': 'Unpublish',
        'courses.actions.build': 'Lessons & materials',
        'courses.form.titleLabel': 'Title',
        'courses.form.subtitleLabel': 'Subtitle',
        'courses.form.descriptionLabel': 'Description',
        'courses.form.categoryLabel': 'Category',
        'courses.form.categoryPlaceholder': 'Select a category',
        'courses.form.durationLabel': 'Duration (weeks)',
        'courses.form.levelLabel': 'Level',
        'courses.form.publishedLabel': 'Published',
        'courses.form.coverLabel': 'Cover image',
        'courses.form.coverDropLabel': 'Upload cover',
        'courses.form.trailerLabel': 'Trailer video',
        'courses.form.trailerDropLabel': 'Upload trailer',
        'courses.form.validation.titleRequired': 'Please enter a course title.',
        'courses.form.validation.categoryRequired': 'Please select a category.',
        'courses.form.saveError': 'Failed to save course.',
        'courses.form.saved': 'Course saved.',
        'courses.modals.addTitle': 'Add Course',
        'courses.modals.editTitle': 'Edit Course',
        'courses.modals.deleteTitle': 'Delete Course',
        'courses.modals.deleteConfirm': 'Delete "{name}"? Lessons and materials are not removed automatically.',
        'courses.modals.deleteError': 'Failed to delete course.',
        'courses.modals.deleted': 'Course deleted.',
        'courses.statusError': 'Failed to change the course status.',
        'courses.statusChanged': 'Course status updated.',

        'courseBuilder.backToCourses': 'Back to courses',
        'courseBuilder.notFound': 'Course not found.',
        'courseBuilder.loadError': 'Could not load course.',
        'courseBuilder.stats': '{lessons} lessons, {materials} materials',
        'courseBuilder.lessons.title': 'Lessons',
        'courseBuilder.lessons.subtitle': 'Ordered list of lessons in this course',
        'courseBuilder.lessons.addLesson': 'Add Lesson',
        'courseBuilder.lessons.empty': 'No lessons yet.',
        'courseBuilder.lessons.freePreview': 'Free preview',
        'courseBuilder.lessons.durationLabel': '{minutes} min',
        'courseBuilder.lessons.noDuration': 'No duration',
        'courseBuilder.lessons.addModalTitle': 'Add Lesson',
        'courseBuilder.lessons.editModalTitle': 'Edit Lesson',
        'courseBuilder.lessons.deleteModalTitle': 'Delete Lesson',
        'courseBuilder.lessons.deleteConfirm': 'Delete lesson "{name}"?',
        'courseBuilder.lessons.deleteError': 'Failed to delete lesson.',
        'courseBuilder.lessons.deleted': 'Lesson deleted.',
        'courseBuilder.lessons.saveError': 'Failed to save lesson.',
        'courseBuilder.lessons.saved': 'Lesson saved.',
        'courseBuilder.lessons.validation.titleRequired': 'Please enter a lesson title.',
        'courseBuilder.lessons.form.titleLabel': 'Title',
        'courseBuilder.lessons.form.descriptionLabel': 'Description',
        'courseBuilder.lessons.form.orderLabel': 'Order',
        'courseBuilder.lessons.form.durationLabel': 'Duration (seconds)',
        'courseBuilder.lessons.form.freePreviewLabel': 'Free preview',
        'courseBuilder.lessons.form.objectivesLabel': 'Objectives',
        'courseBuilder.lessons.form.objectivesHint': 'One objective per line',
        'courseBuilder.lessons.form.videoLabel': 'Video',
        'courseBuilder.lessons.form.videoDropLabel': 'Upload video',
        'courseBuilder.lessons.form.videoDropSub': 'MP4 or WebM',
        'courseBuilder.materials.title': 'Materials',
        'courseBuilder.materials.subtitle': 'Downloads attached to this course',
        'courseBuilder.materials.addMaterial': 'Add Material',
        'courseBuilder.materials.empty': 'No materials yet.',
        'courseBuilder.materials.addModalTitle': 'Add Material',
        'courseBuilder.materials.editModalTitle': 'Edit Material',
        'courseBuilder.materials.deleteModalTitle': 'Delete Material',
        'courseBuilder.materials.deleteConfirm': 'Delete material "{name}"?',
        'courseBuilder.materials.deleteError': 'Failed to delete material.',
        'courseBuilder.materials.deleted': 'Material deleted.',
        'courseBuilder.materials.saveError': 'Failed to save material.',
        'courseBuilder.materials.saved': 'Material saved.',
        'courseBuilder.materials.validation.titleRequired': 'Please enter a material title.',
        'courseBuilder.materials.form.titleLabel': 'Title',
        'courseBuilder.materials.form.typeLabel': 'Type',
        'courseBuilder.materials.form.fileLabel': 'File',
        'courseBuilder.materials.form.fileDropLabel': 'Upload file',
        'courseBuilder.materials.form.fileDropSub': 'PDF, audio or document',
        'courseBuilder.materials.types.pdf': 'PDF',
        'courseBuilder.materials.types.audio': 'Audio',
        'courseBuilder.materials.types.worksheet': 'Worksheet',
        'courseBuilder.materials.types.other': 'Other',

        'users.title': 'Users',
        'users.subtitle': 'Manage platform users',
        'users.allUsers': 'All Users',
        'users.searchPlaceholder': 'Search users...',
        'users.empty': 'No users found.',
        'users.loadError': 'Could not load users.',
        'users.notFound': 'User not found.',
        'users.table.user': 'User',
        'users.table.email': 'Email',
        'users.table.role': 'Role',
        'users.table.joined': 'Joined',
        'users.table.status': 'Status',
        'users.table.actions': 'Actions',
        'users.roles.admin': 'Admin',
        'users.roles.learner': 'Learner',
        'users.status.active': 'Active',
        'users.status.blocked': 'Blocked',
        'users.actions.view': 'View',
        'users.actions.block': 'Block',
        'users.actions.activate': 'Activate',
        'users.modals.userInfo': 'User information',
        'users.modals.blockTitle': 'Block user',
        'users.modals.activateTitle': 'Activate user',
        'users.modals.confirmText': 'Are you sure you want to {action} {name}?',
        'users.statusError': 'Failed to update user status.',
        'users.statusChanged': 'User status updated.',

        'settings.title': 'Settings',
        'settings.editTitle': 'Edit Profile',
        'settings.editProfile': 'Edit Profile',
        'settings.fullName': 'Full Name',
        'settings.email': 'Email Address',
        'settings.createdAt': 'Account Created Date',
        'settings.role': 'Role',
        'settings.lastLogin': 'Last Login',
        'settings.status': 'Account Status',
        'settings.profileImage': 'Profile image',
        'settings.profileSettings': 'Profile Settings',
        'settings.passwordSettings': 'Change Password',
        'settings.currentPassword': 'Current password',
        'settings.newPassword': 'New password',
        'settings.confirmPassword': 'Confirm new password',
        'settings.updatePassword': 'Update Password',
        'settings.saveChanges': 'Save Changes',
        'settings.validation.fullNameRequired': 'Please enter your full name.',
        'settings.validation.emailInvalid': 'Please enter a valid email address.',
        'settings.validation.passwordFields': 'Please fill all password fields.',
        'settings.validation.passwordMismatch': 'New password and confirm password do not match.',
        'settings.profileSaved': 'Profile updated.',
        'settings.profileError': 'Failed to update profile.',
        'settings.passwordSaved': 'Password updated.',
        'settings.passwordError': 'Failed to update password.',
        'settings.loadError': 'Could not refresh your profile.',
        'settings.language': 'Language',
    },
    'de': {
        'nav.dashboard': 'Übersicht',
        'nav.categories': 'Kategorien',
        'nav.courses': 'Kurse',
        'nav.users': 'Benutzer',
        'nav.settings': 'Einstellungen',
        'nav.logout': 'Abmelden',
        'common.cancel': 'Abbrechen',
        'common.close': 'Schließen',
        'common.delete': 'Löschen',
        'common.edit': 'Bearbeiten',
        'common.save': 'Speichern',
        'common.loadError': 'Daten konnten nicht geladen werden.',
        'auth.login.welcome': 'Willkommen zurück',
        'auth.login.signIn': 'Anmelden',
        'auth.login.rememberMe': 'Angemeldet bleiben',
        'auth.login.failed': 'Anmeldung fehlgeschlagen.',
        'categories.title': 'Kategorien',
        'categories.addCategory': 'Kategorie hinzufügen',
        'categories.empty': 'Keine Kategorien gefunden.',
        'categories.status.active': 'Aktiv',
        'categories.status.inactive': 'Inaktiv',
        'categories.form.validation.nameRequired': 'Bitte einen Namen eingeben.',
        'categories.form.validation.slugRequired': 'Bitte einen Slug eingeben.',
        'courses.title': 'Kursverwaltung',
        'courses.empty': 'Keine Kurse gefunden.',
        'courses.status.published': 'Veröffentlicht',
        'courses.status.draft': 'Entwurf',
        'courses.form.validation.titleRequired': 'Bitte einen Kurstitel eingeben.',
        'courses.form.validation.categoryRequired': 'Bitte eine Kategorie auswählen.',
        'courseBuilder.lessons.title': 'Lektionen',
        'courseBuilder.materials.title': 'Materialien',
        'users.title': 'Benutzer',
        'users.empty': 'Keine Benutzer gefunden.',
        'users.status.active': 'Aktiv',
        'users.status.blocked': 'Gesperrt',
        'settings.title': 'Einstellungen',
    },
}

SUPPORTED_LANGUAGES = tuple(TRANSLATIONS)

def get_language():
    return getattr(g, 'lang', None) or current_app.config.get('DEFAULT_LANGUAGE', FALLBACK_LANGUAGE)

def t(key, **params):
    """Translate `key` in the active language, formatting `{name}` placeholders."""
    lang = get_language()
    text = TRANSLATIONS.get(lang, {}).get(key) or TRANSLATIONS[FALLBACK_LANGUAGE].get(key, key)
    if params:
        try:
            return text.format(**params)
        except (KeyError, IndexError):
            return text
    return text

def _apply_language():
    lang = request.cookies.get(LANGUAGE_COOKIE_KEY)
    g.lang = lang if lang in TRANSLATIONS else current_app.config.get('DEFAULT_LANGUAGE', FALLBACK_LANGUAGE)

def init_i18n(app):
    app.before_request(_apply_language)
    app.jinja_env.globals['t'] = t
    app.jinja_env.globals['get_language'] = get_language
    app.jinja_env.globals['SUPPORTED_LANGUAGES'] = SUPPORTED_LANGUAGES
