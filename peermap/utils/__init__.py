from .logger import setup_logger, get_logger
from .validators import validate_response_map, validate_response

__all__ = [
    'setup_logger', 'get_logger',
    'validate_response_map', 'validate_response'
]
