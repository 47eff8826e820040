import os
import re
from functools import wraps
from flask import request, jsonify, redirect, url_for, current_app

from utils.logging_utils import security_logger, log_info

ADMIN_TOKEN_COOKIE_KEY = 'admin_jwt'
ADMIN_PROFILE_SESSION_KEY = 'admin_user'

# Token lifetime in days, depending on "remember me"
REMEMBER_ME_DAYS = 7
SHORT_SESSION_DAYS = 1

def validate_email(email):
    """Validate email format."""
    if not email:
        return False
    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return re.match(pattern, email) is not None

def get_admin_token():
    """Return the bearer token stored in the admin cookie, or None."""
    return request.cookies.get(ADMIN_TOKEN_COOKIE_KEY) or None

def is_admin_authenticated():
    """Presence of the token cookie is the only condition, no expiry check."""
    return bool(get_admin_token())

def set_admin_token_cookie(response, token, remember=True):
    """Store the bearer token for 7 days (remember me) or 1 day."""
    days = REMEMBER_ME_DAYS if remember else SHORT_SESSION_DAYS
    response.set_cookie(
        ADMIN_TOKEN_COOKIE_KEY,
        token,
        max_age=days * 24 * 60 * 60,
        samesite='Lax',
        secure=current_app.config.get('SESSION_COOKIE_SECURE', False),
    )
    return response

def clear_admin_token_cookie(response):
    response.delete_cookie(ADMIN_TOKEN_COOKIE_KEY)
    return response

def require_admin_session(f):
    """Decorator gating console pages on the admin token cookie.

    HTML requests are redirected to the login screen; JSON endpoints get a 401.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_admin_authenticated():
            log_info(security_logger, "Unauthenticated access redirected", path=request.path)
            if request.path.startswith('/api/'):
                return jsonify({'error': 'Not authorized'}), 401
            return redirect(url_for('auth_bp.login', next=request.path))
        return f(*args, **kwargs)
    return decorated_function

def is_safe_next_path(target):
    """Only allow local absolute paths as post-login redirect targets."""
    return bool(target) and target.startswith('/') and not target.startswith('//')

def get_env_variable(var_name, default_value=None, required=False):
    """Safely get environment variable with optional default."""
    value = os.environ.get(var_name, default_value)
    if required and value is None:
        raise ValueError(f"Required environment variable {var_name} is not set")
    return value
