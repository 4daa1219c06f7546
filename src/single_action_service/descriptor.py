"""Pydantic model for declared service errors.

Example:
    >>> error = ErrorDescriptor(name="divide_by_zero", code="errors.div_zero")
    >>> error.factory_name
    'divide_by_zero_failure'
    >>> error.predicate_name
    'is_divide_by_zero_failure'
"""

from __future__ import annotations

import keyword
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from .errors import InvalidDescriptorError

FACTORY_SUFFIX = "_failure"
PREDICATE_PREFIX = "is_"


class ErrorDescriptor(BaseModel):
    """One recognized failure kind of a service.

    Attributes:
        name: Identifier used to build the generated factory and predicate
            names. Must be unique within one service.
        code: Opaque classification value carried by failure outcomes.

    Example:
        >>> ErrorDescriptor(name=" already_exists ", code="errors.exists").name
        'already_exists'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    code: Any = None

    @model_validator(mode="before")
    @classmethod
    def check_name(cls, value: object) -> object:
        # InvalidDescriptorError is not a ValueError, so pydantic lets it
        # propagate instead of folding it into a ValidationError.
        if not isinstance(value, Mapping):
            return value
        name = value.get("name")
        if name is None:
            raise InvalidDescriptorError(
                "error descriptor is missing a name",
                recovery_hint="pass name=<identifier> for every declared error",
            )
        if not isinstance(name, str):
            raise InvalidDescriptorError(
                f"error descriptor name must be a string, got {type(name).__name__}"
            )
        normalized = name.strip()
        if not normalized:
            raise InvalidDescriptorError("error descriptor name must not be empty")
        if not normalized.isidentifier() or keyword.iskeyword(normalized):
            raise InvalidDescriptorError(
                f"error descriptor name {normalized!r} is not a valid identifier",
                recovery_hint="use snake_case names such as 'already_exists'",
            )
        return {**value, "name": normalized}

    @property
    def factory_name(self) -> str:
        return f"{self.name}{FACTORY_SUFFIX}"

    @property
    def predicate_name(self) -> str:
        return f"{PREDICATE_PREFIX}{self.name}{FACTORY_SUFFIX}"

    @classmethod
    def coerce(cls, value: ErrorDescriptor | Mapping[str, Any]) -> ErrorDescriptor:
        """Return ``value`` as a descriptor.

        Args:
            value: A descriptor, or a mapping with ``name`` and ``code`` keys.

        Returns:
            The validated ``ErrorDescriptor``.

        Raises:
            InvalidDescriptorError: If ``value`` cannot describe an error.
        """
        if isinstance(value, ErrorDescriptor):
            return value
        if not isinstance(value, Mapping):
            raise InvalidDescriptorError(
                f"cannot build an error descriptor from {type(value).__name__}"
            )
        try:
            return cls.model_validate(dict(value))
        except ValidationError as exc:
            raise InvalidDescriptorError(
                f"invalid error descriptor {dict(value)!r}: {exc.errors()[0]['msg']}"
            ) from exc
