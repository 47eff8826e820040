from flask import Blueprint, render_template, redirect, url_for, request

from services.admin_service import list_admin_users, update_user_status
from utils.http_client import ApiError
from utils.i18n import t
from utils.logging_utils import console_logger, log_info, log_warning
from utils.security_middleware import csrf_protect
from utils.security_utils import require_admin_session
from utils.text_utils import filter_rows
from utils.view_utils import report_api_error, flash_message

user_bp = Blueprint('user_bp', __name__, url_prefix='/users')


def role_label(user):
    return t(f'users.roles.{user.role}')


def find_user(user_id):
    """There is no single-user endpoint; look the user up in the list."""
    for user in list_admin_users():
        if user.id == user_id:
            return user
    return None


def _load_user_or_redirect(user_id):
    try:
        user = find_user(user_id)
    except ApiError as e:
        report_api_error('users.loadError', "User load failed", e, user_id=user_id)
        return None, redirect(url_for('user_bp.users'))
    if user is None:
        flash_message('users.notFound', 'error')
        return None, redirect(url_for('user_bp.users'))
    return user, None


@user_bp.route('')
@require_admin_session
def users():
    query = (request.args.get('q') or '').strip()
    rows = []
    try:
        rows = list_admin_users()
    except ApiError as e:
        report_api_error('users.loadError', "User list failed", e)

    visible = filter_rows(rows, query, lambda u: (u.full_name, u.email, role_label(u)))
    return render_template('users.html', users=visible, query=query, role_label=role_label)


@user_bp.route('/<user_id>')
@require_admin_session
def user_detail(user_id):
    user, response = _load_user_or_redirect(user_id)
    if response:
        return response
    return render_template('user_detail.html', user=user, role_label=role_label)


@user_bp.route('/<user_id>/status', methods=['GET', 'POST'])
@require_admin_session
@csrf_protect
def user_status(user_id):
    if request.method == 'GET':
        user, response = _load_user_or_redirect(user_id)
        if response:
            return response
        return render_template('user_status_confirm.html', user=user)

    status = request.form.get('status', '')
    try:
        update_user_status(user_id, status)
        log_info(console_logger, "User status changed", user_id=user_id, status=status)
        flash_message('users.statusChanged')
    except ValueError:
        log_warning(console_logger, "Unknown user status submitted", user_id=user_id, status=status)
        flash_message('users.statusError', 'error')
    except ApiError as e:
        report_api_error('users.statusError', "User status change failed", e, user_id=user_id)
    return redirect(url_for('user_bp.users'))
