import io

from werkzeug.datastructures import FileStorage, MultiDict

from editors.accounts import ProfileEditor, validate_password_change
from editors.learning import CategoryEditor, CourseEditor, LessonEditor, MaterialEditor
from models.accounts import AdminUser
from models.learning import Category, Course, Lesson


def _upload(name='cover.png', mimetype='image/png', content=b'12345'):
    return FileStorage(stream=io.BytesIO(content), filename=name, content_type=mimetype)


class TestCategoryEditor:
    def test_new_category_slug_follows_name(self):
        editor = CategoryEditor()
        state = editor.set_name(editor.open_new(), "Stress Relief 101!")
        assert state.draft['slug'] == "stress-relief-101"
        assert state.draft['is_active'] is True

    def test_manual_slug_stops_auto_derivation(self):
        editor = CategoryEditor()
        state = editor.set_slug(editor.open_new(), 'custom')
        state = editor.set_name(state, 'Something Else')
        assert state.draft['slug'] == 'custom'

    def test_saved_category_keeps_slug_when_renamed(self):
        editor = CategoryEditor()
        state = editor.open_existing(Category(id='c1', name='Calm', slug='calm'))
        state = editor.set_name(state, 'Deep Calm')
        assert state.draft['slug'] == 'calm'

    def test_apply_form_derives_slug_for_new_category(self):
        editor = CategoryEditor()
        form = MultiDict({'name': 'Mind & Body', 'slug': '', 'description': ' text ', 'is_active': '1'})
        state = editor.apply_form(editor.open_new(), form)
        assert state.draft['slug'] == 'mind-body'
        assert state.draft['description'] == ' text '
        assert state.draft['is_active'] is True

    def test_apply_form_keeps_hand_edited_slug(self):
        editor = CategoryEditor()
        form = MultiDict({'name': 'Mind & Body', 'slug': 'mb', 'slug_touched': ''})
        state = editor.apply_form(editor.open_new(), form)
        assert state.draft['slug'] == 'mb'

    def test_apply_form_unchecked_checkbox_is_false(self):
        editor = CategoryEditor()
        state = editor.apply_form(editor.open_new(), MultiDict({'name': 'A', 'slug': 'a'}))
        assert state.draft['is_active'] is False

    def test_validation_messages(self):
        editor = CategoryEditor()
        assert editor.validate({'name': ' ', 'slug': 'x'}) == 'categories.form.validation.nameRequired'
        assert editor.validate({'name': 'A', 'slug': ''}) == 'categories.form.validation.slugRequired'
        assert editor.validate({'name': 'A', 'slug': 'a'}) is None

    def test_payload_lowercases_slug(self):
        payload = CategoryEditor().build_payload({
            'name': ' Calm ', 'slug': ' Calm-Down ', 'description': '', 'image_url': '', 'is_active': True,
        })
        assert payload == {
            'name': 'Calm', 'slug': 'calm-down', 'description': '', 'imageUrl': '', 'isActive': True,
        }

    def test_apply_form_reads_stored_url_and_clear_flag(self):
        editor = CategoryEditor()
        state = editor.open_existing(Category(id='c1', name='A', slug='a', image_url='http://cdn/old.png'))
        kept = editor.apply_form(state, MultiDict({'name': 'A', 'slug': 'a', 'image_url': 'http://cdn/old.png'}))
        assert kept.draft['image_url'] == 'http://cdn/old.png'
        cleared = editor.apply_form(state, MultiDict({
            'name': 'A', 'slug': 'a', 'image_url': 'http://cdn/old.png', 'clear_image_url': '1',
        }))
        assert cleared.draft['image_url'] == ''

    def test_apply_form_stages_selected_file_only(self):
        editor = CategoryEditor()
        files = MultiDict({'image_file': _upload()})
        state = editor.apply_form(editor.open_new(), MultiDict({'name': 'A'}), files)
        assert 'image_file' in state.draft['staged']

        empty = MultiDict({'image_file': FileStorage(stream=io.BytesIO(b''), filename='')})
        state = editor.apply_form(editor.open_new(), MultiDict({'name': 'A'}), empty)
        assert state.draft['staged'] == {}


class TestCourseEditor:
    def test_new_course_defaults_to_first_category_and_beginner(self):
        categories = [Category(id='c1', name='Calm'), Category(id='c2', name='Focus')]
        draft = CourseEditor().open_new(categories=categories).draft
        assert draft['level'] == 'beginner'
        assert draft['category_id'] == 'c1'
        assert draft['duration_weeks'] == 4
        assert draft['is_published'] is False

    def test_new_course_without_categories_has_empty_category(self):
        draft = CourseEditor().open_new(categories=[]).draft
        assert draft['category_id'] == ''
        assert draft['level'] == 'beginner'

    def test_validation(self):
        editor = CourseEditor()
        assert editor.validate({'title': '', 'category_id': 'c1'}) == 'courses.form.validation.titleRequired'
        assert editor.validate({'title': 'Yoga', 'category_id': ''}) == 'courses.form.validation.categoryRequired'
        assert editor.validate({'title': 'Yoga', 'category_id': 'c1'}) is None

    def test_payload_uses_wire_names(self):
        state = CourseEditor().open_existing(Course(id='k1', category_id='c1', title='Yoga', level='advanced'))
        payload = CourseEditor().build_payload(state.draft)
        assert payload['categoryId'] == 'c1'
        assert payload['level'] == 'advanced'
        assert payload['durationWeeks'] == 4
        assert 'views' not in payload

    def test_upload_scopes(self):
        assert CourseEditor.upload_fields == {
            'cover_file': ('cover_image', 'courseThumbnail'),
            'trailer_file': ('trailer_url', 'lessonVideo'),
        }


class TestLessonEditor:
    def test_default_order_follows_existing_lessons(self):
        lessons = [Lesson(id='l1'), Lesson(id='l2')]
        draft = LessonEditor('k1').open_new(lessons=lessons).draft
        assert draft['order'] == 3
        assert draft['course_id'] == 'k1'
        assert draft['is_free_preview'] is False

    def test_objectives_are_joined_for_editing(self):
        lesson = Lesson(id='l1', title='Breath', objectives=['Learn breathing', 'Understand triggers'])
        draft = LessonEditor('k1').open_existing(lesson).draft
        assert draft['objectives_text'] == 'Learn breathing\nUnderstand triggers'

    def test_objectives_are_split_on_save(self):
        editor = LessonEditor('k1')
        form = MultiDict({
            'title': 'Breath',
            'objectives_text': 'Learn breathing\n\nUnderstand triggers\n  ',
            'order': '2',
            'duration_sec': '600',
            'is_free_preview': 'on',
        })
        state = editor.apply_form(editor.open_new(lessons=[]), form)
        payload = editor.build_payload(state.draft)
        assert payload['objectives'] == ['Learn breathing', 'Understand triggers']
        assert payload['order'] == 2
        assert payload['durationSec'] == 600
        assert payload['isFreePreview'] is True
        assert payload['courseId'] == 'k1'


class TestMaterialEditor:
    def test_defaults_to_pdf(self):
        draft = MaterialEditor('k1').open_new().draft
        assert draft['type'] == 'pdf'

    def test_upload_replaces_mime_and_size(self):
        extra = MaterialEditor('k1').on_upload({}, 'file', _upload('sheet.pdf', 'application/pdf', b'abcdef'))
        assert extra == {'mime': 'application/pdf', 'size': 6}

    def test_unknown_type_is_sent_as_other(self):
        payload = MaterialEditor('k1').build_payload({'title': 'Sheet', 'type': 'video'})
        assert payload['type'] == 'other'

    def test_validation(self):
        editor = MaterialEditor('k1')
        assert editor.validate({'title': ''}) == 'courseBuilder.materials.validation.titleRequired'
        assert editor.validate({'title': 'Sheet'}) is None


class TestProfileEditor:
    def test_validation(self):
        editor = ProfileEditor()
        assert editor.validate({'full_name': '', 'email': 'a@b.co'}) == 'settings.validation.fullNameRequired'
        assert editor.validate({'full_name': 'Ana', 'email': 'nope'}) == 'settings.validation.emailInvalid'
        assert editor.validate({'full_name': 'Ana', 'email': 'ana@example.com'}) is None

    def test_opens_from_admin_profile(self):
        admin = AdminUser(id='a1', full_name='Ana', email='ana@example.com', profile_image='http://cdn/a.png')
        draft = ProfileEditor().open_existing(admin).draft
        assert draft['preview_url'] == 'http://cdn/a.png'
        assert ProfileEditor().build_payload(draft) == {
            'fullName': 'Ana', 'email': 'ana@example.com', 'profileImage': 'http://cdn/a.png',
        }


def test_password_change_validation():
    assert validate_password_change('', 'new', 'new') == 'settings.validation.passwordFields'
    assert validate_password_change('old', 'new', 'other') == 'settings.validation.passwordMismatch'
    assert validate_password_change('old', 'new', 'new') is None
