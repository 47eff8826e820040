"""
Configuration settings for the admin console
"""
import os
from dotenv import load_dotenv

from utils.security_utils import get_env_variable

# Load environment variables
load_dotenv()


def _as_bool(value):
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """
    Configuration class for the console.
    Values are read once from the environment (and .env) at import time.
    """

    SECRET_KEY = get_env_variable('SECRET_KEY', 'carelia-admin-secret-key')

    # Upstream learning platform API
    API_BASE_URL = get_env_variable('API_BASE_URL', 'http://localhost:5000/api').rstrip('/')
    API_TIMEOUT = float(get_env_variable('API_TIMEOUT', '30'))

    # Origins allowed to call the console JSON endpoints
    CORS_ORIGINS = [
        origin.strip()
        for origin in get_env_variable('CORS_ORIGINS', 'http://localhost:5173').split(',')
        if origin.strip()
    ]

    DEFAULT_LANGUAGE = get_env_variable('DEFAULT_LANGUAGE', 'en')

    SESSION_COOKIE_SECURE = _as_bool(get_env_variable('SESSION_COOKIE_SECURE', 'false'))
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Uploads are passed through to the API, not stored locally
    MAX_CONTENT_LENGTH = int(get_env_variable('MAX_CONTENT_LENGTH', str(200 * 1024 * 1024)))

    LOG_LEVEL = get_env_variable('LOG_LEVEL', 'INFO').upper()
    LOG_FILE = os.environ.get('LOG_FILE')

    TESTING = False
