"""
Base service interface for business logic layer.
Services orchestrate business operations using adapters.
"""

from abc import ABC
import logging


class BaseService(ABC):
    """
    Base service providing common functionality.
    All service classes should inherit from this class.
    """

    def __init__(self, logger_name: str):
        self.logger = logging.getLogger(logger_name)

    @staticmethod
    def _format(message: str, **kwargs) -> str:
        extra_data = " ".join([f"{k}={v}" for k, v in kwargs.items()])
        return f"{message} {extra_data}".strip()

    def log_info(self, message: str, **kwargs):
        """Log info message with structured data"""
        self.logger.info(self._format(message, **kwargs))

    def log_error(self, message: str, exc_info: bool = False, **kwargs):
        """Log error message with structured data"""
        self.logger.error(self._format(message, **kwargs), exc_info=exc_info)
