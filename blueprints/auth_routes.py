from flask import Blueprint, render_template, redirect, url_for, request, make_response

from services.admin_auth_service import admin_login, admin_logout
from utils.http_client import ApiError
from utils.i18n import t, LANGUAGE_COOKIE_KEY, SUPPORTED_LANGUAGES
from utils.logging_utils import security_logger, log_info, log_warning
from utils.rate_limiter import rate_limit
from utils.security_middleware import csrf_protect
from utils.security_utils import (
    validate_email, is_admin_authenticated, is_safe_next_path,
    set_admin_token_cookie, clear_admin_token_cookie,
)
from utils.text_utils import parse_bool
from utils.view_utils import flash_message

auth_bp = Blueprint('auth_bp', __name__)

LANGUAGE_COOKIE_MAX_AGE = 365 * 24 * 60 * 60


@auth_bp.route('/login', methods=['GET', 'POST'])
@csrf_protect
@rate_limit('auth')
def login():
    next_path = request.values.get('next', '')
    if request.method == 'GET':
        if is_admin_authenticated():
            return redirect(url_for('dashboard_bp.dashboard'))
        return render_template('login.html', form={'email': '', 'remember': True}, next_path=next_path, message='')

    email = (request.form.get('email') or '').strip()
    password = request.form.get('password') or ''
    remember = parse_bool(request.form.get('remember', ''))
    form = {'email': email, 'remember': remember}

    message = ''
    if not email or not password:
        message = t('auth.login.missingFields')
    elif not validate_email(email):
        message = t('auth.login.invalidEmail')
    if message:
        log_warning(security_logger, "Login rejected - invalid input", email=email)
        return render_template('login.html', form=form, next_path=next_path, message=message), 400

    try:
        token, _admin = admin_login(email, password)
    except ApiError as e:
        log_warning(security_logger, "Login failed", email=email, status=e.status_code, error=str(e))
        return render_template('login.html', form=form, next_path=next_path,
                               message=t('auth.login.failed')), 401

    target = next_path if is_safe_next_path(next_path) else url_for('dashboard_bp.dashboard')
    response = make_response(redirect(target))
    return set_admin_token_cookie(response, token, remember=remember)


@auth_bp.route('/logout', methods=['GET', 'POST'])
@csrf_protect
def logout():
    if request.method == 'GET':
        return render_template('logout_confirm.html')

    admin_logout()
    log_info(security_logger, "Admin logout")
    flash_message('auth.logout.done', 'info')
    response = make_response(redirect(url_for('auth_bp.login')))
    return clear_admin_token_cookie(response)


@auth_bp.route('/lang/<code>')
def set_language(code):
    """Persist the language preference; applied on every following request."""
    next_path = request.args.get('next', '')
    target = next_path if is_safe_next_path(next_path) else url_for('dashboard_bp.dashboard')
    response = make_response(redirect(target))
    if code in SUPPORTED_LANGUAGES:
        response.set_cookie(LANGUAGE_COOKIE_KEY, code, max_age=LANGUAGE_COOKIE_MAX_AGE, samesite='Lax')
    return response
