"""
Learning content service: one function per API call for categories, courses,
lessons, materials and uploads. Responses are unwrapped from their envelope
and mapped to model objects.
"""
from werkzeug.utils import secure_filename

from models.learning import Category, Course, Lesson, Material
from utils.http_client import get, post, put, delete
from utils.logging_utils import upload_logger, log_info

UPLOAD_SCOPES = ('category', 'courseThumbnail', 'lessonVideo', 'material', 'other')


# ---------- UPLOADS ----------

def upload_learning_file(file, scope='other'):
    """
    Upload a file to the storage provider through the API.

    Args:
        file: werkzeug FileStorage taken from the submitted form
        scope (str): storage routing hint, one of UPLOAD_SCOPES

    Returns:
        str: public URL of the stored file
    """
    filename = secure_filename(file.filename or '') or 'upload'
    files = {'file': (filename, file.stream, file.mimetype or 'application/octet-stream')}
    if scope not in UPLOAD_SCOPES:
        scope = 'other'

    body = post('/admin/learning/upload', data={'scope': scope}, files=files)
    log_info(upload_logger, "File uploaded", scope=scope, filename=filename)
    return body.get('url') or ''


# ---------- CATEGORIES ----------

def list_categories():
    body = get('/admin/learning/categories')
    return [Category.from_api(item) for item in _items(body, 'categories')]

def list_active_categories():
    """Public list, only active categories."""
    body = get('/learning/categories')
    return [Category.from_api(item) for item in _items(body, 'categories')]

def get_category(category_id):
    body = get(f'/admin/learning/categories/{category_id}')
    return Category.from_api(body.get('category') or {})

def create_category(payload):
    body = post('/admin/learning/categories', json=payload)
    return Category.from_api(body.get('category') or {})

def update_category(category_id, payload):
    body = put(f'/admin/learning/categories/{category_id}', json=payload)
    return Category.from_api(body.get('category') or {})

def delete_category(category_id):
    delete(f'/admin/learning/categories/{category_id}')
    return True


# ---------- COURSES ----------

def list_courses(category_id=None):
    params = {'categoryId': category_id} if category_id else None
    body = get('/admin/learning/courses', params=params)
    return [Course.from_api(item) for item in _items(body, 'courses')]

def get_course(course_id):
    body = get(f'/admin/learning/courses/{course_id}')
    return Course.from_api(body.get('course') or {})

def create_course(payload):
    body = post('/admin/learning/courses', json=payload)
    return Course.from_api(body.get('course') or {})

def update_course(course_id, payload):
    body = put(f'/admin/learning/courses/{course_id}', json=payload)
    return Course.from_api(body.get('course') or {})

def publish_course(course_id):
    body = post(f'/admin/learning/courses/{course_id}/publish')
    return Course.from_api(body.get('course') or {})

def unpublish_course(course_id):
    body = post(f'/admin/learning/courses/{course_id}/unpublish')
    return Course.from_api(body.get('course') or {})

def delete_course(course_id):
    delete(f'/admin/learning/courses/{course_id}')
    return True

def search_courses(q=None, category_id=None, sort=None, page=None, limit=None):
    """
    Public course search. Empty filters are left out of the query string.

    Returns:
        dict: {'items': [Course], 'total': int, 'page': int, 'limit': int}
    """
    params = {
        'q': q,
        'categoryId': category_id,
        'sort': sort,
        'page': page,
        'limit': limit,
    }
    params = {key: value for key, value in params.items() if value not in (None, '')}
    body = get('/learning/search', params=params or None)
    items = [Course.from_api(item) for item in body.get('items') or []]
    return {
        'items': items,
        'total': body.get('total', len(items)),
        'page': body.get('page', page or 1),
        'limit': body.get('limit', limit),
    }

def get_course_public(course_id):
    """Full public view of a course: {'course', 'lessons', 'materials'}."""
    body = get(f'/learning/{course_id}')
    course = body.get('course')
    return {
        'course': Course.from_api(course) if course else None,
        'lessons': [Lesson.from_api(item) for item in body.get('lessons') or []],
        'materials': [Material.from_api(item) for item in body.get('materials') or []],
    }


# ---------- LESSONS ----------

def list_lessons(course_id=None):
    params = {'courseId': course_id} if course_id else None
    body = get('/admin/learning/lessons', params=params)
    return [Lesson.from_api(item) for item in _items(body, 'lessons')]

def get_lesson(lesson_id):
    body = get(f'/admin/learning/lessons/{lesson_id}')
    return Lesson.from_api(body.get('lesson') or {})

def create_lesson(payload):
    body = post('/admin/learning/lessons', json=payload)
    return Lesson.from_api(body.get('lesson') or {})

def update_lesson(lesson_id, payload):
    body = put(f'/admin/learning/lessons/{lesson_id}', json=payload)
    return Lesson.from_api(body.get('lesson') or {})

def delete_lesson(lesson_id):
    delete(f'/admin/learning/lessons/{lesson_id}')
    return True


# ---------- MATERIALS ----------

def list_materials(course_id=None):
    params = {'courseId': course_id} if course_id else None
    body = get('/admin/learning/materials', params=params)
    return [Material.from_api(item) for item in _items(body, 'materials')]

def get_material(material_id):
    body = get(f'/admin/learning/materials/{material_id}')
    return Material.from_api(body.get('material') or {})

def create_material(payload):
    body = post('/admin/learning/materials', json=payload)
    return Material.from_api(body.get('material') or {})

def update_material(material_id, payload):
    body = put(f'/admin/learning/materials/{material_id}', json=payload)
    return Material.from_api(body.get('material') or {})

def delete_material(material_id):
    delete(f'/admin/learning/materials/{material_id}')
    return True


def _items(body, key):
    # List endpoints answer either {'items': [...]} or {'<entity>s': [...]}
    return body.get('items') or body.get(key) or []
