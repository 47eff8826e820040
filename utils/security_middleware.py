from flask import request, jsonify, session, render_template, current_app
from functools import wraps
import secrets

from utils.logging_utils import security_logger, log_warning

class SecurityMiddleware:
    def __init__(self, app=None):
        self.app = app
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """Initialize the security middleware with the Flask app."""
        app.before_request(self.before_request)
        app.after_request(self.after_request)

        app.extensions['security_middleware'] = self

    def before_request(self):
        """Reject requests that look like scanner traffic."""
        if self.is_suspicious_request():
            log_warning(security_logger, "Suspicious request rejected",
                        path=request.path, remote_addr=request.remote_addr)
            return jsonify({'error': 'Forbidden'}), 403

    def after_request(self, response):
        return self.ensure_security_headers(response)

    def ensure_security_headers(self, response):
        """Ensure security headers are present in the response."""
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'

        # Uploaded media is served by the storage provider, so allow https sources
        response.headers['Content-Security-Policy'] = (
            "default-src 'self'; "
            "script-src 'self' 'unsafe-inline'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data: blob: https:; "
            "media-src 'self' blob: https:; "
            "frame-src 'self' blob: https:; "
            "connect-src 'self';"
        )

        if current_app.config.get('SESSION_COOKIE_SECURE'):
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        return response

    def is_suspicious_request(self):
        """Check if the current request looks suspicious."""
        user_agent = request.headers.get('User-Agent', '').lower()
        suspicious_agents = ['sqlmap', 'nikto', 'nessus', 'burp']
        for agent in suspicious_agents:
            if agent in user_agent:
                return True

        suspicious_patterns = ['../', 'union select', 'drop table', '<script']
        full_url = request.url.lower()
        for pattern in suspicious_patterns:
            if pattern in full_url:
                return True

        return False

def generate_csrf_token():
    """Generate (once per session) the CSRF token embedded in console forms."""
    if 'csrf_token' not in session:
        session['csrf_token'] = secrets.token_urlsafe(32)
    return session['csrf_token']

def validate_csrf_token():
    """Validate CSRF token from the form, JSON body or X-CSRF-Token header."""
    token = session.get('csrf_token')
    if not token:
        return False

    request_token = request.form.get('csrf_token') or request.headers.get('X-CSRF-Token')
    if not request_token and request.is_json:
        json_data = request.get_json(silent=True)
        request_token = json_data.get('csrf_token') if json_data else None

    return bool(request_token) and secrets.compare_digest(token, request_token)

def csrf_protect(f):
    """Decorator to protect routes from CSRF attacks."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if request.method in ['GET', 'HEAD', 'OPTIONS', 'TRACE']:
            return f(*args, **kwargs)

        if not current_app.config.get('CSRF_ENABLED', True):
            return f(*args, **kwargs)

        if not validate_csrf_token():
            log_warning(security_logger, "CSRF validation failed", path=request.path)
            if request.path.startswith('/api/'):
                return jsonify({'error': 'CSRF token missing or invalid'}), 403
            return render_template('error.html', message='CSRF token missing or invalid'), 403

        return f(*args, **kwargs)
    return decorated_function
