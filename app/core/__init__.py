"""
Core module initialization
"""

from .config import config
from .logger import logger
from .errors import ErrorResponse, ErrorResponseModel

__all__ = [
    "config",
    "logger",
    "ErrorResponse",
    "ErrorResponseModel",
]
