from flask import Blueprint, render_template, redirect, url_for, request

from editors.learning import CourseEditor
from editors.workflow import save_form, delete_entity
from models.learning import Course, COURSE_LEVELS
from services.learning_admin_service import (
    list_categories, list_courses, get_course, publish_course, unpublish_course,
)
from utils.http_client import ApiError
from utils.i18n import t
from utils.logging_utils import console_logger, log_info
from utils.security_middleware import csrf_protect
from utils.security_utils import require_admin_session
from utils.text_utils import filter_rows
from utils.view_utils import report_api_error, flash_message

course_bp = Blueprint('course_bp', __name__, url_prefix='/courses')


def _load_categories():
    try:
        return list_categories()
    except ApiError as e:
        report_api_error('categories.loadError', "Category list failed", e)
        return []


def _with_category_names(courses, categories):
    names = {category.id: category.name for category in categories}
    for course in courses:
        if not course.category_name:
            course.category_name = names.get(course.category_id, '')
    return courses


def find_courses(query, category_id, categories):
    """Admin course list, drafts included, narrowed by category upstream and by text here."""
    rows = _with_category_names(list_courses(category_id or None), categories)
    return filter_rows(rows, query, lambda c: (c.title, c.subtitle, c.category_name))


def _render_form(state, action, categories, status=200):
    title = t('courses.modals.addTitle') if state.is_new else t('courses.modals.editTitle')
    return render_template('course_form.html', state=state, draft=state.draft, title=title,
                           action=action, categories=categories, levels=COURSE_LEVELS), status


def _save(state, action, categories):
    outcome = save_form(CourseEditor(), state, request.form, request.files)
    if not outcome.ok:
        return _render_form(outcome.state, action, categories, 400)
    flash_message('courses.form.saved')
    return redirect(url_for('course_bp.courses'))


@course_bp.route('')
@require_admin_session
def courses():
    query = (request.args.get('q') or '').strip()
    category_id = (request.args.get('categoryId') or '').strip()

    categories = _load_categories()
    visible = []
    try:
        visible = find_courses(query, category_id, categories)
    except ApiError as e:
        report_api_error('courses.loadError', "Course list failed", e, category_id=category_id)

    return render_template('courses.html', courses=visible, categories=categories,
                           query=query, category_id=category_id)


@course_bp.route('/new', methods=['GET', 'POST'])
@require_admin_session
@csrf_protect
def new_course():
    action = url_for('course_bp.new_course')
    categories = _load_categories()
    state = CourseEditor().open_new(categories=categories)
    if request.method == 'GET':
        return _render_form(state, action, categories)
    return _save(state, action, categories)


@course_bp.route('/<course_id>/edit', methods=['GET', 'POST'])
@require_admin_session
@csrf_protect
def edit_course(course_id):
    action = url_for('course_bp.edit_course', course_id=course_id)
    editor = CourseEditor()
    categories = _load_categories()
    if request.method == 'POST':
        return _save(editor.open_existing(Course(id=course_id)), action, categories)

    try:
        course = get_course(course_id)
    except ApiError as e:
        report_api_error('courses.loadError', "Course load failed", e, course_id=course_id)
        return redirect(url_for('course_bp.courses'))
    return _render_form(editor.open_existing(course), action, categories)


@course_bp.route('/<course_id>/delete', methods=['GET', 'POST'])
@require_admin_session
@csrf_protect
def delete_course(course_id):
    if request.method == 'POST':
        state = delete_entity(CourseEditor(), Course(id=course_id))
        if state.error:
            flash_message(state.error, 'error')
        else:
            flash_message('courses.modals.deleted')
        return redirect(url_for('course_bp.courses'))

    try:
        course = get_course(course_id)
    except ApiError as e:
        report_api_error('courses.loadError', "Course load failed", e, course_id=course_id)
        return redirect(url_for('course_bp.courses'))
    return render_template(
        'confirm_delete.html',
        title=t('courses.modals.deleteTitle'),
        message=t('courses.modals.deleteConfirm', name=course.title),
        action=url_for('course_bp.delete_course', course_id=course_id),
        cancel_url=url_for('course_bp.courses'),
    )


@course_bp.route('/<course_id>/publish', methods=['POST'])
@require_admin_session
@csrf_protect
def publish(course_id):
    return _change_status(course_id, publish_course, published=True)


@course_bp.route('/<course_id>/unpublish', methods=['POST'])
@require_admin_session
@csrf_protect
def unpublish(course_id):
    return _change_status(course_id, unpublish_course, published=False)


def _change_status(course_id, call, published):
    try:
        call(course_id)
        log_info(console_logger, "Course status changed", course_id=course_id, published=published)
        flash_message('courses.statusChanged')
    except ApiError as e:
        report_api_error('courses.statusError', "Course status change failed", e, course_id=course_id)
    return redirect(url_for('course_bp.courses'))
