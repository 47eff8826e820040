from models.accounts import PlatformUser, USER_STATUSES
from utils.http_client import get, put


# Dashboard
def get_dashboard_stats():
    body = get('/admin/dashboard/stats')
    return body.get('stats') or {}

def get_dashboard_activity():
    body = get('/admin/dashboard/activity')
    return body.get('items') or []


# Users
def list_admin_users():
    body = get('/admin/users')
    return [PlatformUser.from_api(item) for item in body.get('users') or []]

def update_user_status(user_id, status):
    """status: 'active' | 'blocked'"""
    if status not in USER_STATUSES:
        raise ValueError(f"Unknown user status: {status}")
    body = put(f'/admin/users/{user_id}/status', json={'status': status})
    user = body.get('user')
    return PlatformUser.from_api(user) if user else None
