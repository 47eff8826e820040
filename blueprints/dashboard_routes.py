from flask import Blueprint, render_template, redirect, url_for

from services.admin_service import get_dashboard_stats, get_dashboard_activity
from utils.http_client import ApiError
from utils.security_utils import require_admin_session
from utils.view_utils import report_api_error

dashboard_bp = Blueprint('dashboard_bp', __name__)

# Stat card order on the dashboard: (stats key, label key)
STAT_CARDS = (
    ('users', 'dashboard.stats.users'),
    ('activeUsers', 'dashboard.stats.activeUsers'),
    ('courses', 'dashboard.stats.courses'),
    ('publishedCourses', 'dashboard.stats.published'),
    ('categories', 'dashboard.stats.categories'),
    ('lessons', 'dashboard.stats.lessons'),
)


@dashboard_bp.route('/')
def index():
    return redirect(url_for('dashboard_bp.dashboard'))


@dashboard_bp.route('/dashboard')
@require_admin_session
def dashboard():
    stats = {}
    activity = []
    try:
        stats = get_dashboard_stats()
        activity = get_dashboard_activity()
    except ApiError as e:
        report_api_error('dashboard.loadError', "Dashboard load failed", e)

    cards = [(label, stats.get(key, 0)) for key, label in STAT_CARDS]
    return render_template('dashboard.html', cards=cards, activity=activity)
