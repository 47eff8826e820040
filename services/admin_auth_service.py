"""
Admin authentication and profile calls.

The token cookie itself is written by the auth blueprint (it needs the
response object); this module returns the token and keeps the profile
snapshot in the session in sync with every profile answer.
"""
from flask import session

from models.accounts import AdminUser
from utils.http_client import ApiError, get, post
from utils.logging_utils import security_logger, log_info
from utils.security_utils import ADMIN_PROFILE_SESSION_KEY


def admin_login(email, password):
    """
    Exchange credentials for a token.

    Returns:
        tuple: (token, AdminUser)

    Raises:
        ApiError: when the call fails or the answer has no token
    """
    body = post('/admin/auth/login', json={'email': email, 'password': password})
    token = body.get('token')
    if not token:
        raise ApiError('No token in response', payload=body)

    admin = AdminUser.from_api(body.get('admin'))
    store_profile_snapshot(admin)
    log_info(security_logger, "Admin login successful", email=email)
    return token, admin


def admin_logout():
    """Forget the cached profile; the caller clears the token cookie."""
    session.pop(ADMIN_PROFILE_SESSION_KEY, None)


def fetch_current_admin():
    body = get('/admin/auth/me')
    admin = AdminUser.from_api(body.get('admin'))
    if admin:
        store_profile_snapshot(admin)
    return admin


def update_admin_profile(payload):
    """payload may contain fullName, email, profileImage."""
    body = post('/admin/auth/profile', json=payload)
    admin = AdminUser.from_api(body.get('admin'))
    if admin:
        store_profile_snapshot(admin)
    return admin


def change_admin_password(current_password, new_password):
    post('/admin/auth/change-password', json={
        'currentPassword': current_password,
        'newPassword': new_password,
    })
    log_info(security_logger, "Admin password changed")


def store_profile_snapshot(admin):
    if admin:
        session[ADMIN_PROFILE_SESSION_KEY] = admin.to_snapshot()


def cached_admin():
    """Profile snapshot from the session, used before /me answers."""
    return AdminUser.from_api(session.get(ADMIN_PROFILE_SESSION_KEY))
