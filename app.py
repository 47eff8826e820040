from flask import Flask, redirect, url_for, render_template
from flask_cors import CORS

from config import Config
from utils.http_client import HttpClient
from utils.i18n import init_i18n
from utils.logging_utils import setup_logging, console_logger, log_info
from utils.security_middleware import SecurityMiddleware, generate_csrf_token
from utils.ui_helpers import register_template_helpers

# Import blueprints
from blueprints.auth_routes import auth_bp
from blueprints.dashboard_routes import dashboard_bp
from blueprints.category_routes import category_bp
from blueprints.course_routes import course_bp
from blueprints.course_builder_routes import course_builder_bp
from blueprints.user_routes import user_bp
from blueprints.settings_routes import settings_bp
from blueprints.console_api_routes import console_api_bp
from services.admin_auth_service import cached_admin


def create_app(config_overrides=None, http_session=None):
    """
    Create and configure the console application.

    Args:
        config_overrides (dict): values applied on top of Config
        http_session: requests.Session-like object used for API calls
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    if not app.config.get('TESTING'):
        setup_logging(app.config['LOG_LEVEL'], app.config.get('LOG_FILE'))

    # Only the console JSON endpoints are callable cross-origin
    CORS(app, resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}})

    SecurityMiddleware(app)
    init_i18n(app)
    register_template_helpers(app)

    app.extensions['api_client'] = HttpClient(
        app.config['API_BASE_URL'],
        timeout=app.config['API_TIMEOUT'],
        session=http_session,
    )

    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(category_bp)
    app.register_blueprint(course_bp)
    app.register_blueprint(course_builder_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(settings_bp)
    app.register_blueprint(console_api_bp)

    # Imported macros only see globals
    app.jinja_env.globals['csrf_token'] = generate_csrf_token

    @app.context_processor
    def inject_console_context():
        return {'current_admin': cached_admin()}

    @app.errorhandler(404)
    def not_found(error):
        # Unknown console paths land on the dashboard, which is gated
        return redirect(url_for('dashboard_bp.dashboard'))

    @app.errorhandler(413)
    def too_large(error):
        return render_template('error.html', message='Uploaded file is too large.'), 413

    log_info(console_logger, "Console initialised", api_base_url=app.config['API_BASE_URL'])
    return app


app = create_app()

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=5173, debug=True)
