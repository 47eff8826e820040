"""
Entity editors for categories, courses, lessons and materials.

Each editor knows its defaults, how a submitted form maps onto the draft,
its required-field validation, which staged files are uploaded (and with
which scope) and how the draft becomes an API payload.
"""
from models.learning import Category, Course, Lesson, Material, COURSE_LEVELS, MATERIAL_TYPES
from services import learning_admin_service
from editors.draft import EditorState
from utils.text_utils import slugify, split_objectives, join_objectives, parse_int, parse_bool


def file_size(file):
    """Size of an uploaded FileStorage without consuming its stream."""
    if file.content_length:
        return file.content_length
    stream = file.stream
    position = stream.tell()
    stream.seek(0, 2)
    size = stream.tell()
    stream.seek(position)
    return size


class EntityEditor:
    preview_field = None
    # staged file field -> (draft url field, upload scope)
    upload_fields = {}
    text_fields = ()
    # Submitted as-is, whitespace included
    raw_fields = ()
    int_fields = ()
    bool_fields = ()
    save_error = 'common.loadError'
    delete_error = 'common.loadError'

    def defaults(self, **context):
        raise NotImplementedError

    def extra_fields(self, entity):
        return None

    def open_new(self, **context):
        return EditorState().open_new(self.defaults(**context))

    def open_existing(self, entity):
        return EditorState().open_existing(entity, self.preview_field, self.extra_fields(entity))

    def apply_form(self, state, form, files=None):
        """Copy submitted form values and staged files onto the draft."""
        changes = {}
        for name in self.text_fields:
            if name in form:
                changes[name] = (form.get(name) or '').strip()
        for name in self.raw_fields:
            if name in form:
                changes[name] = form.get(name) or ''
        for name in self.int_fields:
            if name in form:
                changes[name] = parse_int(form.get(name), 0)
        for name in self.bool_fields:
            # Unchecked checkboxes are not submitted
            changes[name] = parse_bool(form.get(name, ''))
        for url_field in {url for url, _scope in self.upload_fields.values()}:
            # Existing URLs round-trip through hidden inputs
            if url_field in form:
                changes[url_field] = (form.get(url_field) or '').strip()
            if form.get(f'clear_{url_field}'):
                changes[url_field] = ''
        state = state.update(**changes)

        for file_field in self.upload_fields:
            staged = (files or {}).get(file_field)
            if staged is not None and staged.filename:
                state = state.stage_file(file_field, staged)
        return state

    def validate(self, draft):
        return None

    def on_upload(self, draft, file_field, file):
        """Extra draft changes derived from an uploaded file."""
        return {}

    def build_payload(self, draft):
        raise NotImplementedError

    def create(self, payload):
        raise NotImplementedError

    def update(self, entity_id, payload):
        raise NotImplementedError

    def delete(self, entity_id):
        raise NotImplementedError


class CategoryEditor(EntityEditor):
    preview_field = 'image_url'
    upload_fields = {'image_file': ('image_url', 'category')}
    text_fields = ('name', 'slug')
    raw_fields = ('description',)
    bool_fields = ('is_active',)
    save_error = 'categories.form.saveError'
    delete_error = 'categories.modals.deleteError'

    def defaults(self, **context):
        return {
            'name': '',
            'slug': '',
            'description': '',
            'image_url': '',
            'is_active': True,
            'slug_touched': False,
        }

    def extra_fields(self, entity):
        return {'slug_touched': True}

    def set_name(self, state, name):
        """Unsaved categories follow their name until the slug is edited by hand."""
        changes = {'name': name}
        if state.is_new and not state.draft.get('slug_touched'):
            changes['slug'] = slugify(name)
        return state.update(**changes)

    def set_slug(self, state, slug):
        return state.update(slug=slug, slug_touched=True)

    def apply_form(self, state, form, files=None):
        name = (form.get('name') or '').strip()
        slug = (form.get('slug') or '').strip()
        touched = parse_bool(form.get('slug_touched', '')) or (bool(slug) and slug != slugify(name))
        state = super().apply_form(state, form, files)
        if touched:
            state = self.set_slug(state, slug)
        return self.set_name(state, name)

    def validate(self, draft):
        if not (draft.get('name') or '').strip():
            return 'categories.form.validation.nameRequired'
        if not (draft.get('slug') or '').strip():
            return 'categories.form.validation.slugRequired'
        return None

    def build_payload(self, draft):
        return Category(
            name=draft['name'].strip(),
            slug=draft['slug'].strip().lower(),
            description=draft.get('description') or '',
            image_url=draft.get('image_url') or '',
            is_active=draft.get('is_active', True) is not False,
        ).to_payload()

    def create(self, payload):
        return learning_admin_service.create_category(payload)

    def update(self, entity_id, payload):
        return learning_admin_service.update_category(entity_id, payload)

    def delete(self, entity_id):
        return learning_admin_service.delete_category(entity_id)


class CourseEditor(EntityEditor):
    preview_field = 'cover_image'
    upload_fields = {
        'cover_file': ('cover_image', 'courseThumbnail'),
        'trailer_file': ('trailer_url', 'lessonVideo'),
    }
    text_fields = ('title', 'subtitle', 'category_id', 'level')
    raw_fields = ('description',)
    int_fields = ('duration_weeks',)
    bool_fields = ('is_published',)
    save_error = 'courses.form.saveError'
    delete_error = 'courses.modals.deleteError'

    def defaults(self, categories=(), **context):
        categories = list(categories or [])
        return {
            'title': '',
            'subtitle': '',
            'description': '',
            'category_id': categories[0].id if categories else '',
            'duration_weeks': 4,
            'level': 'beginner',
            'cover_image': '',
            'trailer_url': '',
            'is_published': False,
        }

    def validate(self, draft):
        if not (draft.get('title') or '').strip():
            return 'courses.form.validation.titleRequired'
        if not draft.get('category_id'):
            return 'courses.form.validation.categoryRequired'
        return None

    def build_payload(self, draft):
        level = draft.get('level') or 'beginner'
        return Course(
            category_id=draft['category_id'],
            title=draft['title'].strip(),
            subtitle=draft.get('subtitle') or '',
            description=draft.get('description') or '',
            duration_weeks=parse_int(draft.get('duration_weeks'), 0),
            level=level if level in COURSE_LEVELS else 'beginner',
            cover_image=draft.get('cover_image') or '',
            trailer_url=draft.get('trailer_url') or '',
            is_published=bool(draft.get('is_published')),
        ).to_payload()

    def create(self, payload):
        return learning_admin_service.create_course(payload)

    def update(self, entity_id, payload):
        return learning_admin_service.update_course(entity_id, payload)

    def delete(self, entity_id):
        return learning_admin_service.delete_course(entity_id)


class LessonEditor(EntityEditor):
    preview_field = 'video_url'
    upload_fields = {'video_file': ('video_url', 'lessonVideo')}
    text_fields = ('title',)
    raw_fields = ('description', 'objectives_text')
    int_fields = ('order', 'duration_sec')
    bool_fields = ('is_free_preview',)
    save_error = 'courseBuilder.lessons.saveError'
    delete_error = 'courseBuilder.lessons.deleteError'

    def __init__(self, course_id):
        self.course_id = course_id

    def defaults(self, lessons=(), **context):
        return {
            'course_id': self.course_id,
            'title': '',
            'description': '',
            'order': len(lessons or []) + 1,
            'video_url': '',
            'duration_sec': 0,
            'is_free_preview': False,
            'objectives': [],
            'objectives_text': '',
        }

    def extra_fields(self, entity):
        return {'objectives_text': join_objectives(entity.objectives)}

    def validate(self, draft):
        if not (draft.get('title') or '').strip():
            return 'courseBuilder.lessons.validation.titleRequired'
        return None

    def build_payload(self, draft):
        return Lesson(
            course_id=self.course_id,
            title=draft['title'].strip(),
            description=draft.get('description') or '',
            order=parse_int(draft.get('order'), 0),
            video_url=draft.get('video_url') or '',
            duration_sec=parse_int(draft.get('duration_sec'), 0),
            is_free_preview=bool(draft.get('is_free_preview')),
            objectives=split_objectives(draft.get('objectives_text')),
        ).to_payload()

    def create(self, payload):
        return learning_admin_service.create_lesson(payload)

    def update(self, entity_id, payload):
        return learning_admin_service.update_lesson(entity_id, payload)

    def delete(self, entity_id):
        return learning_admin_service.delete_lesson(entity_id)


class MaterialEditor(EntityEditor):
    preview_field = 'url'
    upload_fields = {'file': ('url', 'material')}
    text_fields = ('title', 'type', 'mime')
    int_fields = ('size',)
    save_error = 'courseBuilder.materials.saveError'
    delete_error = 'courseBuilder.materials.deleteError'

    def __init__(self, course_id):
        self.course_id = course_id

    def defaults(self, **context):
        return {
            'course_id': self.course_id,
            'title': '',
            'type': 'pdf',
            'url': '',
            'mime': '',
            'size': 0,
        }

    def validate(self, draft):
        if not (draft.get('title') or '').strip():
            return 'courseBuilder.materials.validation.titleRequired'
        return None

    def on_upload(self, draft, file_field, file):
        return {'mime': file.mimetype or '', 'size': file_size(file)}

    def build_payload(self, draft):
        material_type = draft.get('type') or 'other'
        return Material(
            course_id=self.course_id,
            title=draft['title'].strip(),
            type=material_type if material_type in MATERIAL_TYPES else 'other',
            url=draft.get('url') or '',
            mime=draft.get('mime') or '',
            size=parse_int(draft.get('size'), 0),
        ).to_payload()

    def create(self, payload):
        return learning_admin_service.create_material(payload)

    def update(self, entity_id, payload):
        return learning_admin_service.update_material(entity_id, payload)

    def delete(self, entity_id):
        return learning_admin_service.delete_material(entity_id)
