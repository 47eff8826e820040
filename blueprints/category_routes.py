from flask import Blueprint, render_template, redirect, url_for, request

from editors.learning import CategoryEditor
from editors.workflow import save_form, delete_entity
from models.learning import Category
from services.learning_admin_service import list_categories, get_category
from utils.http_client import ApiError
from utils.i18n import t
from utils.security_middleware import csrf_protect
from utils.security_utils import require_admin_session
from utils.text_utils import filter_rows
from utils.view_utils import report_api_error, flash_message

category_bp = Blueprint('category_bp', __name__, url_prefix='/categories')


def _render_form(state, action, status=200):
    title = t('categories.modals.addTitle') if state.is_new else t('categories.modals.editTitle')
    return render_template('category_form.html', state=state, draft=state.draft,
                           title=title, action=action), status


def _save(state, action):
    editor = CategoryEditor()
    outcome = save_form(editor, state, request.form, request.files)
    if not outcome.ok:
        return _render_form(outcome.state, action, 400)
    flash_message('categories.form.saved')
    return redirect(url_for('category_bp.categories'))


@category_bp.route('')
@require_admin_session
def categories():
    query = (request.args.get('q') or '').strip()
    rows = []
    try:
        rows = list_categories()
    except ApiError as e:
        report_api_error('categories.loadError', "Category list failed", e)

    visible = filter_rows(rows, query, lambda c: (c.name, c.description))
    return render_template('categories.html', categories=visible, query=query, total=len(rows))


@category_bp.route('/new', methods=['GET', 'POST'])
@require_admin_session
@csrf_protect
def new_category():
    action = url_for('category_bp.new_category')
    state = CategoryEditor().open_new()
    if request.method == 'GET':
        return _render_form(state, action)
    return _save(state, action)


@category_bp.route('/<category_id>/edit', methods=['GET', 'POST'])
@require_admin_session
@csrf_protect
def edit_category(category_id):
    action = url_for('category_bp.edit_category', category_id=category_id)
    editor = CategoryEditor()
    if request.method == 'POST':
        return _save(editor.open_existing(Category(id=category_id)), action)

    try:
        category = get_category(category_id)
    except ApiError as e:
        report_api_error('categories.loadError', "Category load failed", e, category_id=category_id)
        return redirect(url_for('category_bp.categories'))
    return _render_form(editor.open_existing(category), action)


@category_bp.route('/<category_id>/delete', methods=['GET', 'POST'])
@require_admin_session
@csrf_protect
def delete_category(category_id):
    if request.method == 'POST':
        state = delete_entity(CategoryEditor(), Category(id=category_id))
        if state.error:
            flash_message(state.error, 'error')
        else:
            flash_message('categories.modals.deleted')
        return redirect(url_for('category_bp.categories'))

    try:
        category = get_category(category_id)
    except ApiError as e:
        report_api_error('categories.loadError', "Category load failed", e, category_id=category_id)
        return redirect(url_for('category_bp.categories'))
    return render_template(
        'confirm_delete.html',
        title=t('categories.modals.deleteTitle'),
        message=t('categories.modals.deleteConfirm', name=category.name),
        action=url_for('category_bp.delete_category', category_id=category_id),
        cancel_url=url_for('category_bp.categories'),
    )
