from abc import ABC, abstractmethod
from loguru import logger


class BaseLogger(ABC):
    """Abstract base class for loggers."""

    def __init__(self, log_level: str = "INFO"):
        self.logger = logger
        self.log_level = log_level

    @abstractmethod
    def log_pass(self, pass_number: int, name: str):
        """Log the start of a conversion pass."""
        pass

    @abstractmethod
    def log_summary(self, warnings: int, errors: int):
        """Log the warning and error totals of a conversion."""
        pass

    @abstractmethod
    def log_error(self, message: str):
        """Log an error message."""
        pass

    @abstractmethod
    def log_warning(self, message: str):
        """Log a warning message."""
        pass

    @abstractmethod
    def log_info(self, message: str):
        """Log an info message."""
        pass

    @abstractmethod
    def log_debug(self, message: str):
        """Log a debug message."""
        pass
