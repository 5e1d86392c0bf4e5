"""
Error Handling for the G-Set library
Exception hierarchy for boundary failures plus centralized error logging.
"""

import logging
import traceback
import time
from typing import Any, Dict, Optional, Callable
from functools import wraps
from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class GSetError(Exception):
    """Base exception for G-Set errors"""

    def __init__(self, message: str, severity: ErrorSeverity = ErrorSeverity.MEDIUM,
                 error_code: Optional[str] = None, context: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.timestamp = time.time()


class DecodeError(GSetError):
    """Encoded set could not be turned back into a GrowOnlySet"""
    pass


class ConfigurationError(GSetError):
    """Configuration-related errors"""
    pass


class ErrorHandler:
    """Centralized error handling and logging"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.error_count = {}
        self.error_history = []
        self.max_history_size = 1000

    def handle_error(self, error: Exception, context: Optional[Dict] = None,
                     reraise: bool = False) -> Optional[Dict]:
        """Handle an error with appropriate logging and context"""
        if isinstance(error, GSetError):
            context = context or error.context or {}
            severity = error.severity
            error_code = error.error_code
            message = error.message
        else:
            context = context or {}
            severity = ErrorSeverity.MEDIUM
            error_code = type(error).__name__
            message = str(error)

        error_info = {
            'type': type(error).__name__,
            'message': message,
            'context': context,
            'timestamp': time.time(),
            'traceback': traceback.format_exc()
        }

        self.error_history.append(error_info)
        if len(self.error_history) > self.max_history_size:
            self.error_history.pop(0)

        error_type = type(error).__name__
        self.error_count[error_type] = self.error_count.get(error_type, 0) + 1

        extra = {'context': context, 'error_info': error_info}
        if severity == ErrorSeverity.CRITICAL:
            self.logger.critical(f"CRITICAL ERROR [{error_code}]: {message}", extra=extra)
        elif severity == ErrorSeverity.HIGH:
            self.logger.error(f"HIGH ERROR [{error_code}]: {message}", extra=extra)
        elif severity == ErrorSeverity.MEDIUM:
            self.logger.warning(f"MEDIUM ERROR [{error_code}]: {message}", extra=extra)
        else:
            self.logger.info(f"LOW ERROR [{error_code}]: {message}", extra=extra)

        if reraise:
            raise error

        return error_info

    def get_error_summary(self) -> Dict:
        """Get summary of errors encountered"""
        return {
            'total_errors': len(self.error_history),
            'error_counts': self.error_count.copy(),
            'recent_errors': self.error_history[-10:] if self.error_history else []
        }


def with_error_handling(reraise: bool = False, default_return: Any = None):
    """Decorator routing exceptions through the owner's error_handler"""
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                error_handler = None
                if args and hasattr(args[0], 'error_handler'):
                    error_handler = args[0].error_handler

                if error_handler:
                    error_handler.handle_error(e, {
                        'function': func.__name__,
                        'kwargs': str(kwargs)
                    }, reraise=reraise)
                else:
                    logging.error(f"Error in {func.__name__}: {e}")
                    if reraise:
                        raise

                return default_return
        return wrapper
    return decorator
