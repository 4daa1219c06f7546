"""Outcome values returned by services.

An outcome is built once by a service factory and only read afterwards.

Example:
    >>> outcome = Outcome.succeeded(42)
    >>> outcome.is_success, outcome.data, outcome.error_code
    (True, 42, None)
    >>> failed = Outcome.failed(code="errors.unknown")
    >>> failed.is_failure, failed.error_code
    (True, 'errors.unknown')
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from .descriptor import ErrorDescriptor
from .errors import InvalidOutcomeError, UnknownErrorNameError

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Tri-state service result: success flag, payload, error code.

    Args:
        success: Whether the service succeeded.
        data: Payload returned for both successes and failures.
        error_code: Classification of a failure; always ``None`` on success.

    Specialized subclasses built by the registry add one
    ``is_<name>_failure`` property per declared error and list the
    descriptors in ``errors``.
    """

    success: bool
    data: T | None = None
    error_code: Any = None

    errors: ClassVar[tuple[ErrorDescriptor, ...]] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.success, bool):
            raise InvalidOutcomeError(
                f"outcome success flag must be a bool, got {type(self.success).__name__}"
            )
        if self.success and self.error_code is not None:
            raise InvalidOutcomeError(
                f"successful outcome cannot carry error code {self.error_code!r}"
            )

    @classmethod
    def succeeded(cls, data: T | None = None) -> Outcome[T]:
        """Create a successful outcome carrying ``data``."""
        return cls(True, data)

    @classmethod
    def failed(cls, data: T | None = None, code: Any = None) -> Outcome[T]:
        """Create a failed outcome carrying ``data`` and ``code``."""
        return cls(False, data, code)

    @property
    def is_success(self) -> bool:
        return self.success

    @property
    def is_failure(self) -> bool:
        return not self.success

    @property
    def error(self) -> ErrorDescriptor | None:
        """Declared error matching this outcome's code, if any.

        Example:
            >>> Outcome.failed(code="errors.unknown").error is None
            True
        """
        if self.success:
            return None
        for descriptor in self.errors:
            if descriptor.code == self.error_code:
                return descriptor
        return None

    def matches(self, name: str) -> bool:
        """Return whether this outcome is the declared error ``name``.

        Args:
            name: Declared error name, e.g. ``"divide_by_zero"``.

        Returns:
            ``True`` when this is a failure whose code equals the code of the
            declared error.

        Raises:
            UnknownErrorNameError: If the outcome type declares no such error.
        """
        for descriptor in self.errors:
            if descriptor.name == name:
                return not self.success and self.error_code == descriptor.code
        raise UnknownErrorNameError(
            f"{type(self).__name__} declares no error named {name!r}",
            recovery_hint="check the names passed to declare_errors",
        )
