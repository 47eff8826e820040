from flask import flash

from utils.i18n import t
from utils.logging_utils import console_logger, log_error


def report_api_error(message_key, log_message, error, **data):
    """Log a failed API call and surface its static localized message."""
    log_error(console_logger, log_message, error=str(error), status=getattr(error, 'status_code', None), **data)
    flash(t(message_key), 'error')


def flash_message(message_key, category='success', **params):
    flash(t(message_key, **params), category)
