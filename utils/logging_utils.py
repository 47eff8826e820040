import logging
import os

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Map string log levels to constants
log_level_map = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL
}

def setup_logging(log_level=logging.INFO, log_file=None):
    """
    Set up structured logging for the console.

    Args:
        log_level: The logging level, either a constant or a name like 'DEBUG'
        log_file: Path to log file (optional, defaults to console only)
    """
    if isinstance(log_level, str):
        log_level = log_level_map.get(log_level.upper(), logging.INFO)

    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    return root_logger

def get_logger(name):
    """Get a logger instance with the specified name."""
    return logging.getLogger(name)

# Pre-configured logger instances
console_logger = get_logger('console')
api_logger = get_logger('api')
security_logger = get_logger('security')
upload_logger = get_logger('upload')

def _with_data(message, data):
    if data:
        return f"{message} | Data: {data}"
    return message

def log_info(logger, message, **kwargs):
    """Log an info message with optional structured data."""
    logger.info(_with_data(message, kwargs))

def log_warning(logger, message, **kwargs):
    """Log a warning message with optional structured data."""
    logger.warning(_with_data(message, kwargs))

def log_error(logger, message, **kwargs):
    """Log an error message with optional structured data."""
    logger.error(_with_data(message, kwargs))

def log_debug(logger, message, **kwargs):
    """Log a debug message with optional structured data."""
    logger.debug(_with_data(message, kwargs))
