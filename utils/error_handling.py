import functools
import logging
from utils import constants
from utils.exceptions import AppConfigError

def handle_errors(operation_name: str):
    """Decorator for consistent error handling around loader operations."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except AppConfigError:
                # Re-raise our custom exceptions
                raise
            except Exception as e:
                # Wrap unexpected errors
                logger = args[0].logger if args and hasattr(args[0], 'logger') else logging.getLogger(constants.LOGGER_NAME)
                logger.error(f"{operation_name} failed: {e}", exc_info=True)
                raise AppConfigError(f"{operation_name} failed: {str(e)}") from e
        return wrapper
    return decorator
