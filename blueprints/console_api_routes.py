"""
JSON endpoints used by the console's inline scripts.
"""
from dataclasses import asdict

from flask import Blueprint, jsonify, request, get_template_attribute

from blueprints.course_routes import find_courses
from models.accounts import PlatformUser
from services.admin_service import update_user_status
from services.learning_admin_service import list_categories
from utils.http_client import ApiError
from utils.i18n import t
from utils.logging_utils import console_logger, log_error, log_info
from utils.rate_limiter import rate_limit
from utils.security_middleware import csrf_protect
from utils.security_utils import require_admin_session
from utils.text_utils import slugify

console_api_bp = Blueprint('console_api_bp', __name__, url_prefix='/api/console')


@console_api_bp.route('/slugify')
@require_admin_session
def slug_preview():
    return jsonify({'slug': slugify(request.args.get('name', ''))})


@console_api_bp.route('/courses/search')
@require_admin_session
@rate_limit('api')
def course_search():
    """Keystroke-driven course search; every change re-queries the admin course list."""
    query = (request.args.get('q') or '').strip()
    category_id = (request.args.get('categoryId') or '').strip()
    try:
        items = find_courses(query, category_id, list_categories())
    except ApiError as e:
        log_error(console_logger, "Course search failed", error=str(e), status=e.status_code)
        return jsonify({'error': t('courses.loadError')}), 502

    return jsonify({
        'items': [asdict(course) for course in items],
        'total': len(items),
    })


@console_api_bp.route('/users/<user_id>/status', methods=['PUT'])
@require_admin_session
@csrf_protect
@rate_limit('api')
def user_status(user_id):
    data = request.get_json(silent=True) or {}
    status = data.get('status', '')
    try:
        user = update_user_status(user_id, status)
    except ValueError:
        return jsonify({'error': t('users.statusError')}), 400
    except ApiError as e:
        log_error(console_logger, "User status change failed", user_id=user_id, error=str(e))
        return jsonify({'error': t('users.statusError')}), 502

    if user is None:
        user = PlatformUser(id=user_id, status=status)
    log_info(console_logger, "User status changed", user_id=user_id, status=user.status)

    status_pill = get_template_attribute('macros/ui.html', 'status_pill')
    return jsonify({
        'user': asdict(user),
        'pill': str(status_pill('user', user.status, t(f'users.status.{user.status}'))),
    })
