"""Single-action services returning uniform outcome values.

Exports the service base class, the outcome value, error descriptors, the
framework misuse exceptions, and the package version resolved from installed
distribution information.

Example:
    >>> from single_action_service import __version__
    >>> isinstance(__version__, str)
    True
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .base import ServiceBase, ServiceMeta
from .descriptor import ErrorDescriptor
from .errors import (
    DuplicateErrorNameError,
    ErrorsAlreadyDeclaredError,
    ErrorsNotDeclaredError,
    InvalidDescriptorError,
    InvalidOutcomeError,
    ServiceConfigurationError,
    UnknownErrorNameError,
)
from .registry import OutcomeTypeRegistry, default_registry
from .result import Outcome

try:
    __version__ = version("single-action-service")
except PackageNotFoundError:  # pragma: no cover - running from a source tree
    __version__ = "0.0.0"

__all__ = [
    "DuplicateErrorNameError",
    "ErrorDescriptor",
    "ErrorsAlreadyDeclaredError",
    "ErrorsNotDeclaredError",
    "InvalidDescriptorError",
    "InvalidOutcomeError",
    "Outcome",
    "OutcomeTypeRegistry",
    "ServiceBase",
    "ServiceConfigurationError",
    "ServiceMeta",
    "UnknownErrorNameError",
    "__version__",
    "default_registry",
]
