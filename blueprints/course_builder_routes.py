"""
Course builder: one course with its ordered lessons and its materials, plus
the lesson and material editors.
"""
from flask import Blueprint, render_template, redirect, url_for, request

from editors.learning import LessonEditor, MaterialEditor
from editors.workflow import save_form, delete_entity
from models.learning import Lesson, Material, MATERIAL_TYPES, sort_lessons
from services.learning_admin_service import (
    get_course_public, list_lessons, get_lesson, get_material,
)
from utils.http_client import ApiError
from utils.i18n import t
from utils.security_middleware import csrf_protect
from utils.security_utils import require_admin_session
from utils.view_utils import report_api_error, flash_message

course_builder_bp = Blueprint('course_builder_bp', __name__, url_prefix='/courses/<course_id>')


def _builder_url(course_id):
    return url_for('course_builder_bp.builder', course_id=course_id)


@course_builder_bp.route('')
@require_admin_session
def builder(course_id):
    try:
        data = get_course_public(course_id)
    except ApiError as e:
        report_api_error('courseBuilder.loadError', "Course builder load failed", e, course_id=course_id)
        data = {'course': None, 'lessons': [], 'materials': []}

    if data['course'] is None:
        return render_template('course_builder.html', course=None, lessons=[], materials=[]), 404

    return render_template(
        'course_builder.html',
        course=data['course'],
        lessons=sort_lessons(data['lessons']),
        materials=data['materials'],
    )


# ---------- LESSONS ----------

def _render_lesson_form(course_id, state, action, status=200):
    key = 'courseBuilder.lessons.addModalTitle' if state.is_new else 'courseBuilder.lessons.editModalTitle'
    return render_template('lesson_form.html', state=state, draft=state.draft, title=t(key),
                           action=action, cancel_url=_builder_url(course_id)), status


def _save_lesson(course_id, state, action):
    outcome = save_form(LessonEditor(course_id), state, request.form, request.files)
    if not outcome.ok:
        return _render_lesson_form(course_id, outcome.state, action, 400)
    flash_message('courseBuilder.lessons.saved')
    return redirect(_builder_url(course_id))


@course_builder_bp.route('/lessons/new', methods=['GET', 'POST'])
@require_admin_session
@csrf_protect
def new_lesson(course_id):
    action = url_for('course_builder_bp.new_lesson', course_id=course_id)
    lessons = []
    try:
        lessons = list_lessons(course_id)
    except ApiError as e:
        report_api_error('courseBuilder.loadError', "Lesson list failed", e, course_id=course_id)

    state = LessonEditor(course_id).open_new(lessons=lessons)
    if request.method == 'GET':
        return _render_lesson_form(course_id, state, action)
    return _save_lesson(course_id, state, action)


@course_builder_bp.route('/lessons/<lesson_id>/edit', methods=['GET', 'POST'])
@require_admin_session
@csrf_protect
def edit_lesson(course_id, lesson_id):
    action = url_for('course_builder_bp.edit_lesson', course_id=course_id, lesson_id=lesson_id)
    editor = LessonEditor(course_id)
    if request.method == 'POST':
        return _save_lesson(course_id, editor.open_existing(Lesson(id=lesson_id, course_id=course_id)), action)

    try:
        lesson = get_lesson(lesson_id)
    except ApiError as e:
        report_api_error('courseBuilder.loadError', "Lesson load failed", e, lesson_id=lesson_id)
        return redirect(_builder_url(course_id))
    return _render_lesson_form(course_id, editor.open_existing(lesson), action)


@course_builder_bp.route('/lessons/<lesson_id>/delete', methods=['GET', 'POST'])
@require_admin_session
@csrf_protect
def delete_lesson(course_id, lesson_id):
    if request.method == 'POST':
        state = delete_entity(LessonEditor(course_id), Lesson(id=lesson_id))
        if state.error:
            flash_message(state.error, 'error')
        else:
            flash_message('courseBuilder.lessons.deleted')
        return redirect(_builder_url(course_id))

    try:
        lesson = get_lesson(lesson_id)
    except ApiError as e:
        report_api_error('courseBuilder.loadError', "Lesson load failed", e, lesson_id=lesson_id)
        return redirect(_builder_url(course_id))
    return render_template(
        'confirm_delete.html',
        title=t('courseBuilder.lessons.deleteModalTitle'),
        message=t('courseBuilder.lessons.deleteConfirm', name=lesson.title),
        action=url_for('course_builder_bp.delete_lesson', course_id=course_id, lesson_id=lesson_id),
        cancel_url=_builder_url(course_id),
    )


# ---------- MATERIALS ----------

def _render_material_form(course_id, state, action, status=200):
    key = 'courseBuilder.materials.addModalTitle' if state.is_new else 'courseBuilder.materials.editModalTitle'
    return render_template('material_form.html', state=state, draft=state.draft, title=t(key),
                           action=action, types=MATERIAL_TYPES,
                           cancel_url=_builder_url(course_id)), status


def _save_material(course_id, state, action):
    outcome = save_form(MaterialEditor(course_id), state, request.form, request.files)
    if not outcome.ok:
        return _render_material_form(course_id, outcome.state, action, 400)
    flash_message('courseBuilder.materials.saved')
    return redirect(_builder_url(course_id))


@course_builder_bp.route('/materials/new', methods=['GET', 'POST'])
@require_admin_session
@csrf_protect
def new_material(course_id):
    action = url_for('course_builder_bp.new_material', course_id=course_id)
    state = MaterialEditor(course_id).open_new()
    if request.method == 'GET':
        return _render_material_form(course_id, state, action)
    return _save_material(course_id, state, action)


@course_builder_bp.route('/materials/<material_id>/edit', methods=['GET', 'POST'])
@require_admin_session
@csrf_protect
def edit_material(course_id, material_id):
    action = url_for('course_builder_bp.edit_material', course_id=course_id, material_id=material_id)
    editor = MaterialEditor(course_id)
    if request.method == 'POST':
        return _save_material(course_id, editor.open_existing(Material(id=material_id, course_id=course_id)), action)

    try:
        material = get_material(material_id)
    except ApiError as e:
        report_api_error('courseBuilder.loadError', "Material load failed", e, material_id=material_id)
        return redirect(_builder_url(course_id))
    return _render_material_form(course_id, editor.open_existing(material), action)


@course_builder_bp.route('/materials/<material_id>/delete', methods=['GET', 'POST'])
@require_admin_session
@csrf_protect
def delete_material(course_id, material_id):
    if request.method == 'POST':
        state = delete_entity(MaterialEditor(course_id), Material(id=material_id))
        if state.error:
            flash_message(state.error, 'error')
        else:
            flash_message('courseBuilder.materials.deleted')
        return redirect(_builder_url(course_id))

    try:
        material = get_material(material_id)
    except ApiError as e:
        report_api_error('courseBuilder.loadError', "Material load failed", e, material_id=material_id)
        return redirect(_builder_url(course_id))
    return render_template(
        'confirm_delete.html',
        title=t('courseBuilder.materials.deleteModalTitle'),
        message=t('courseBuilder.materials.deleteConfirm', name=material.title),
        action=url_for('course_builder_bp.delete_material', course_id=course_id, material_id=material_id),
        cancel_url=_builder_url(course_id),
    )
