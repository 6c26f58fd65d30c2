from core.abstract_factory import TypeAbstractFactory
from core.exceptions import InvalidConfigurationError, TokenAcquisitionError
from core.logging import configure_logging

__all__ = [
    "TypeAbstractFactory",
    "InvalidConfigurationError",
    "TokenAcquisitionError",
    "configure_logging",
]
