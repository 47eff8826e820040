import time
from functools import wraps
from flask import request, jsonify, current_app
import hashlib

from utils.logging_utils import security_logger, log_warning

# Simple in-memory rate limiter, per process
class RateLimiter:
    def __init__(self):
        self.requests = {}
        self.limits = {}

    def set_limit(self, key, max_requests, window_seconds):
        """Set rate limit for a key."""
        self.limits[key] = {
            'max_requests': max_requests,
            'window_seconds': window_seconds
        }

    def is_allowed(self, key, limit_key):
        """Check if a request under `key` is allowed by the `limit_key` limit."""
        if limit_key not in self.limits:
            return True

        limit = self.limits[limit_key]
        now = time.time()

        # Remove old requests outside the window
        recent = [
            req_time for req_time in self.requests.get(key, [])
            if now - req_time < limit['window_seconds']
        ]

        if len(recent) < limit['max_requests']:
            recent.append(now)
            self.requests[key] = recent
            return True

        self.requests[key] = recent
        return False

    def reset(self):
        self.requests.clear()

    def get_client_key(self, request_obj):
        """Generate a key based on IP address and endpoint."""
        ip = request_obj.remote_addr or 'unknown'
        endpoint = request_obj.endpoint or 'unknown'
        return hashlib.md5(f"{ip}:{endpoint}".encode()).hexdigest()

# Global rate limiter instance
rate_limiter = RateLimiter()

rate_limiter.set_limit('auth', 5, 60)  # login form submissions
rate_limiter.set_limit('api', 100, 60)  # console JSON endpoints

def rate_limit(limit_key='api'):
    """Decorator to apply rate limiting to state-changing requests of a route."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if request.method == 'GET' and limit_key == 'auth':
                return f(*args, **kwargs)
            if not current_app.config.get('RATE_LIMIT_ENABLED', True):
                return f(*args, **kwargs)
            client_key = f"{rate_limiter.get_client_key(request)}:{limit_key}"
            if not rate_limiter.is_allowed(client_key, limit_key):
                log_warning(security_logger, "Rate limit exceeded",
                            endpoint=request.endpoint, limit=limit_key)
                return jsonify({'error': 'Rate limit exceeded. Please try again later.'}), 429
            return f(*args, **kwargs)
        return decorated_function
    return decorator
