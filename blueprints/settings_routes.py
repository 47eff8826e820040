from flask import Blueprint, render_template, redirect, url_for, request

from editors.accounts import ProfileEditor, validate_password_change
from editors.workflow import save_form
from models.accounts import AdminUser
from services.admin_auth_service import fetch_current_admin, change_admin_password, cached_admin
from utils.http_client import ApiError
from utils.i18n import t
from utils.security_middleware import csrf_protect
from utils.security_utils import require_admin_session
from utils.view_utils import report_api_error, flash_message

settings_bp = Blueprint('settings_bp', __name__, url_prefix='/settings')


def _current_admin():
    """Fresh profile from /me, or the session snapshot when that fails."""
    try:
        admin = fetch_current_admin()
    except ApiError as e:
        report_api_error('settings.loadError', "Profile load failed", e)
        admin = None
    return admin or cached_admin() or AdminUser()


def _render_settings(admin, password_error=None, status=200):
    return render_template('settings.html', admin=admin,
                           password_error=t(password_error) if password_error else None), status


@settings_bp.route('')
@require_admin_session
def settings():
    return _render_settings(_current_admin())


@settings_bp.route('/edit', methods=['GET', 'POST'])
@require_admin_session
@csrf_protect
def edit_profile():
    editor = ProfileEditor()
    if request.method == 'GET':
        state = editor.open_existing(_current_admin())
        return render_template('settings_edit.html', state=state, draft=state.draft)

    admin = cached_admin() or AdminUser()
    outcome = save_form(editor, editor.open_existing(admin), request.form, request.files)
    if not outcome.ok:
        return render_template('settings_edit.html', state=outcome.state, draft=outcome.state.draft), 400
    flash_message('settings.profileSaved')
    return redirect(url_for('settings_bp.settings'))


@settings_bp.route('/password', methods=['POST'])
@require_admin_session
@csrf_protect
def change_password():
    current_password = request.form.get('current_password') or ''
    new_password = request.form.get('new_password') or ''
    confirm_password = request.form.get('confirm_password') or ''

    error = validate_password_change(current_password, new_password, confirm_password)
    if error:
        return _render_settings(cached_admin() or AdminUser(), password_error=error, status=400)

    try:
        change_admin_password(current_password, new_password)
    except ApiError as e:
        report_api_error('settings.passwordError', "Password change failed", e)
        return redirect(url_for('settings_bp.settings'))

    flash_message('settings.passwordSaved')
    return redirect(url_for('settings_bp.settings'))
