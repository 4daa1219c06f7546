"""Framework misuse contracts.

Services return outcomes for expected business failures and never raise for
them. The exceptions below are reserved for misuse of the framework itself:
malformed error declarations, conflicting re-declarations, or calling a
generated factory that was never declared.
"""

from __future__ import annotations

from typing import Literal

ServiceConfigurationCode = Literal[
    "invalid_descriptor",
    "duplicate_error_name",
    "errors_not_declared",
    "errors_already_declared",
    "unknown_error_name",
    "invalid_outcome",
]


class ServiceConfigurationError(Exception):
    """Misuse of the service framework.

    Raised at class-definition time where possible so misconfigured services
    never become usable. ``code`` is stable for callers and tests.
    """

    def __init__(
        self,
        code: ServiceConfigurationCode,
        message: str,
        *,
        recovery_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.recovery_hint = recovery_hint


class InvalidDescriptorError(ServiceConfigurationError):
    """An error descriptor is malformed (missing or unusable name)."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("invalid_descriptor", message, recovery_hint=recovery_hint)


class DuplicateErrorNameError(ServiceConfigurationError):
    """Two descriptors for one service share a name."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("duplicate_error_name", message, recovery_hint=recovery_hint)


class ErrorsNotDeclaredError(ServiceConfigurationError, AttributeError):
    """A generated failure factory was requested before any declaration."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("errors_not_declared", message, recovery_hint=recovery_hint)


class ErrorsAlreadyDeclaredError(ServiceConfigurationError):
    """A service re-declared its errors with a different table."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("errors_already_declared", message, recovery_hint=recovery_hint)


class UnknownErrorNameError(ServiceConfigurationError, LookupError):
    """A lookup named an error the service never declared."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("unknown_error_name", message, recovery_hint=recovery_hint)


class InvalidOutcomeError(ServiceConfigurationError):
    """An outcome was built with inconsistent fields."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("invalid_outcome", message, recovery_hint=recovery_hint)
