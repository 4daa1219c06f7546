"""Per-service specialized outcome types.

The registry owns the "has this service been configured" record. Each
service class maps to exactly one outcome subtype carrying an
``is_<name>_failure`` property per declared error.
"""

from __future__ import annotations

import threading
import weakref
from collections.abc import Iterable, Mapping
from typing import Any

from . import log
from .descriptor import ErrorDescriptor
from .errors import DuplicateErrorNameError, ErrorsAlreadyDeclaredError
from .result import Outcome


def _predicate(code: Any) -> property:
    def check(self: Outcome) -> bool:
        return not self.success and self.error_code == code

    return property(check)


def _derived_qualname(owner: type, suffix: str) -> str:
    head, _, tail = owner.__qualname__.rpartition(".")
    name = f"{tail}{suffix}"
    return f"{head}.{name}" if head else name


def check_unique_names(
    descriptors: Iterable[ErrorDescriptor],
    *,
    inherited: Iterable[ErrorDescriptor] = (),
) -> None:
    """Raise ``DuplicateErrorNameError`` if any name appears twice."""
    seen = {descriptor.name for descriptor in inherited}
    inherited_names = set(seen)
    for descriptor in descriptors:
        if descriptor.name in seen:
            where = "an inherited error" if descriptor.name in inherited_names else "another error"
            raise DuplicateErrorNameError(
                f"error name {descriptor.name!r} is already used by {where}",
                recovery_hint="give every declared error a distinct name",
            )
        seen.add(descriptor.name)


def error_table(descriptors: Iterable[ErrorDescriptor]) -> dict[str, Any]:
    return {descriptor.name: descriptor.code for descriptor in descriptors}


class OutcomeTypeRegistry:
    """Create-once store of specialized outcome types keyed by service class."""

    def __init__(self) -> None:
        self._types: weakref.WeakKeyDictionary[type, type[Outcome]] = (
            weakref.WeakKeyDictionary()
        )
        self._lock = threading.RLock()

    def __contains__(self, owner: object) -> bool:
        with self._lock:
            return owner in self._types

    def lookup(self, owner: type) -> type[Outcome] | None:
        with self._lock:
            return self._types.get(owner)

    def ensure(
        self,
        owner: type,
        descriptors: Iterable[ErrorDescriptor | Mapping[str, Any]],
        *,
        base: type[Outcome] = Outcome,
        suffix: str = "Result",
    ) -> type[Outcome]:
        """Return the specialized outcome type for ``owner``, creating it once.

        Args:
            owner: Service class the type belongs to.
            descriptors: Errors declared directly on ``owner``.
            base: Outcome type inherited from ``owner``'s parents; its
                ``errors`` are kept and must not be redeclared.
            suffix: Appended to ``owner``'s name to derive the type name.

        Returns:
            The registered outcome subtype.

        Raises:
            InvalidDescriptorError: If a descriptor is malformed.
            DuplicateErrorNameError: If two errors share a name. Nothing is
                registered.
            ErrorsAlreadyDeclaredError: If ``owner`` was registered with a
                different name to code table.
        """
        declared = tuple(ErrorDescriptor.coerce(item) for item in descriptors)
        check_unique_names(declared, inherited=base.errors)
        errors = base.errors + declared
        with self._lock:
            existing = self._types.get(owner)
            if existing is not None:
                if error_table(existing.errors) != error_table(errors):
                    raise ErrorsAlreadyDeclaredError(
                        f"{owner.__qualname__} already declared errors "
                        f"{sorted(error_table(existing.errors))}",
                        recovery_hint="declare every error in a single declare_errors call",
                    )
                log.trace(existing.__qualname__, f"reused for {owner.__qualname__}")
                return existing
            created = self._build(owner, declared, errors, base=base, suffix=suffix)
            self._types[owner] = created
        self._warn_on_codes(created)
        log.debug(
            created.__qualname__,
            f"created with errors {', '.join(item.name for item in errors) or '(none)'}",
        )
        return created

    def _build(
        self,
        owner: type,
        declared: tuple[ErrorDescriptor, ...],
        errors: tuple[ErrorDescriptor, ...],
        *,
        base: type[Outcome],
        suffix: str,
    ) -> type[Outcome]:
        namespace: dict[str, Any] = {
            "__module__": owner.__module__,
            "__qualname__": _derived_qualname(owner, suffix),
            "__doc__": f"Outcome of {owner.__qualname__}.",
            "errors": errors,
        }
        for descriptor in declared:
            namespace[descriptor.predicate_name] = _predicate(descriptor.code)
        return type(f"{owner.__name__}{suffix}", (base,), namespace)

    def _warn_on_codes(self, outcome_type: type[Outcome]) -> None:
        seen: list[Any] = []
        for descriptor in outcome_type.errors:
            if descriptor.code is None:
                log.warning(outcome_type.__qualname__, f"error {descriptor.name!r} has no code")
            elif descriptor.code in seen:
                log.warning(
                    outcome_type.__qualname__,
                    f"error {descriptor.name!r} reuses code {descriptor.code!r}",
                )
            else:
                seen.append(descriptor.code)


default_registry = OutcomeTypeRegistry()
