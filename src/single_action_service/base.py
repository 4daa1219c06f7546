"""Base service class.

Services extend ServiceBase and return exactly one outcome per invocation:
``self.success(data)``, ``self.failure(data, code=...)`` or a generated
``self.<name>_failure(data)``. Errors are declared once per class, either with
the ``errors=`` class keyword or by calling ``declare_errors``::

    class Division(ServiceBase, errors=[{"name": "divide_by_zero", "code": "errors.div_zero"}]):
        def __call__(self, dividend: int, divisor: int) -> Outcome[int]:
            if divisor == 0:
                return self.divide_by_zero_failure(divisor)
            return self.success(dividend // divisor)

Callers branch on ``outcome.is_success`` or on the generated
``outcome.is_divide_by_zero_failure`` predicate. Business failures are never
raised; ServiceConfigurationError is reserved for misuse of this class.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from .descriptor import FACTORY_SUFFIX, ErrorDescriptor
from .errors import ErrorsNotDeclaredError, UnknownErrorNameError
from .registry import OutcomeTypeRegistry, default_registry
from .result import Outcome

FailureFactory = Callable[..., Outcome]


def _failure_factory(owner: type, descriptor: ErrorDescriptor) -> FailureFactory:
    code = descriptor.code

    def factory(self: ServiceBase, data: Any = None) -> Outcome:
        return self.failure(data, code=code)

    factory.__name__ = descriptor.factory_name
    factory.__qualname__ = f"{owner.__qualname__}.{descriptor.factory_name}"
    factory.__doc__ = f"Return a failure outcome with code {code!r}."
    return factory


def _inherited_outcome_type(cls: type) -> type[Outcome]:
    for parent in cls.__mro__[1:]:
        outcome_type = parent.__dict__.get("_outcome_type")
        if outcome_type is not None:
            return outcome_type
    return Outcome


def _is_factory_name(name: str) -> bool:
    return name.endswith(FACTORY_SUFFIX) and not name.startswith("_")


def _not_declared(owner: type, name: str) -> ErrorsNotDeclaredError:
    return ErrorsNotDeclaredError(
        f"{owner.__qualname__} has no declared errors (requested {name!r})",
        recovery_hint="call declare_errors before building named failures",
    )


class ServiceMeta(type):
    """Reports missing declarations when a factory is looked up on the class."""

    def __getattr__(cls, name: str) -> Any:
        if _is_factory_name(name) and not cls.is_configured():
            raise _not_declared(cls, name)
        raise AttributeError(f"type object {cls.__name__!r} has no attribute {name!r}")


class ServiceBase(metaclass=ServiceMeta):
    """Base for single-action services returning outcomes.

    Class attributes:
        result_suffix: Appended to the class name to name the outcome type.
        outcome_registry: Registry that owns the specialized outcome types.
        errors: Declared descriptors, inherited ones first.
        failure_factories: Declared error name to ``factory(service, data)``.
    """

    result_suffix: ClassVar[str] = "Result"
    outcome_registry: ClassVar[OutcomeTypeRegistry] = default_registry
    errors: ClassVar[tuple[ErrorDescriptor, ...]] = ()
    failure_factories: ClassVar[Mapping[str, FailureFactory]] = MappingProxyType({})
    _outcome_type: ClassVar[type[Outcome]] = Outcome

    def __init_subclass__(
        cls,
        errors: Iterable[ErrorDescriptor | Mapping[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        if errors is not None:
            cls.declare_errors(errors)

    @classmethod
    def declare_errors(
        cls, descriptors: Iterable[ErrorDescriptor | Mapping[str, Any]]
    ) -> type[Outcome]:
        """Declare the errors this service can return.

        For each descriptor a ``<name>_failure(data=None)`` method is added to
        the class and an ``is_<name>_failure`` predicate to its outcome type.
        Declaring the same table again is a no-op; a different table raises
        ``ErrorsAlreadyDeclaredError``.

        Args:
            descriptors: ``ErrorDescriptor`` objects or ``{"name", "code"}``
                mappings.

        Returns:
            The specialized outcome type of this class.
        """
        base = _inherited_outcome_type(cls)
        outcome_type = cls.outcome_registry.ensure(
            cls, descriptors, base=base, suffix=cls.result_suffix
        )
        for descriptor in outcome_type.errors[len(base.errors) :]:
            setattr(cls, descriptor.factory_name, _failure_factory(cls, descriptor))
        cls._outcome_type = outcome_type
        cls.errors = outcome_type.errors
        cls.failure_factories = MappingProxyType(
            {
                descriptor.name: getattr(cls, descriptor.factory_name)
                for descriptor in outcome_type.errors
            }
        )
        return outcome_type

    @classmethod
    def outcome_type(cls) -> type[Outcome]:
        return cls._outcome_type

    @classmethod
    def is_configured(cls) -> bool:
        return cls._outcome_type is not Outcome

    def success(self, data: Any = None) -> Outcome:
        """Return a successful outcome carrying ``data``."""
        return self.outcome_type().succeeded(data)

    def failure(self, data: Any = None, code: Any = None) -> Outcome:
        """Return a failed outcome carrying ``data`` and ``code``.

        Works whether or not errors were declared; the code does not have to
        belong to a declared error.
        """
        return self.outcome_type().failed(data, code)

    def failure_for(self, name: str, data: Any = None) -> Outcome:
        """Return the failure outcome of the declared error ``name``.

        Raises:
            ErrorsNotDeclaredError: If the service declared no errors.
            UnknownErrorNameError: If ``name`` was not declared.
        """
        if not self.is_configured():
            raise _not_declared(type(self), name)
        try:
            factory = self.failure_factories[name]
        except KeyError as exc:
            raise UnknownErrorNameError(
                f"{type(self).__qualname__} declares no error named {name!r}",
                recovery_hint=f"declared errors: {', '.join(self.failure_factories)}",
            ) from exc
        return factory(self, data)

    def __getattr__(self, name: str) -> Any:
        if any(name in klass.__dict__ for klass in type(self).__mro__):
            # a class attribute exists but raised; let its own error through
            return object.__getattribute__(self, name)
        if _is_factory_name(name) and not self.is_configured():
            raise _not_declared(type(self), name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
