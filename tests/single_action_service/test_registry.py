import gc

import pytest

from single_action_service import (
    DuplicateErrorNameError,
    ErrorDescriptor,
    ErrorsAlreadyDeclaredError,
    InvalidDescriptorError,
    Outcome,
    OutcomeTypeRegistry,
)

NOT_FOUND = ErrorDescriptor(name="not_found", code="errors.not_found")
CONFLICT = ErrorDescriptor(name="conflict", code="errors.conflict")


class Lookup:
    pass


def test_ensure_creates_named_subtype_with_predicates() -> None:
    registry = OutcomeTypeRegistry()

    outcome_type = registry.ensure(Lookup, [NOT_FOUND, CONFLICT])

    assert issubclass(outcome_type, Outcome)
    assert outcome_type.__name__ == "LookupResult"
    assert outcome_type.__module__ == Lookup.__module__
    assert outcome_type.errors == (NOT_FOUND, CONFLICT)
    failed = outcome_type.failed(code="errors.conflict")
    assert failed.is_conflict_failure is True
    assert failed.is_not_found_failure is False
    assert Lookup in registry
    assert registry.lookup(Lookup) is outcome_type


def test_ensure_uses_custom_suffix() -> None:
    registry = OutcomeTypeRegistry()

    outcome_type = registry.ensure(Lookup, [NOT_FOUND], suffix="Outcome")

    assert outcome_type.__name__ == "LookupOutcome"


def test_qualname_follows_nested_owner() -> None:
    class Outer:
        class Inner:
            pass

    registry = OutcomeTypeRegistry()

    outcome_type = registry.ensure(Outer.Inner, [NOT_FOUND])

    assert outcome_type.__qualname__ == f"{Outer.__qualname__}.InnerResult"


def test_ensure_is_idempotent_for_the_same_table() -> None:
    registry = OutcomeTypeRegistry()

    first = registry.ensure(Lookup, [NOT_FOUND, CONFLICT])
    second = registry.ensure(
        Lookup,
        [
            {"name": "conflict", "code": "errors.conflict"},
            {"name": "not_found", "code": "errors.not_found"},
        ],
    )

    assert second is first


def test_ensure_rejects_a_different_table() -> None:
    registry = OutcomeTypeRegistry()
    registry.ensure(Lookup, [NOT_FOUND])

    with pytest.raises(ErrorsAlreadyDeclaredError) as exc_info:
        registry.ensure(Lookup, [NOT_FOUND, CONFLICT])

    assert exc_info.value.code == "errors_already_declared"
    assert registry.lookup(Lookup).errors == (NOT_FOUND,)


def test_duplicate_names_register_nothing() -> None:
    registry = OutcomeTypeRegistry()

    with pytest.raises(DuplicateErrorNameError):
        registry.ensure(
            Lookup,
            [NOT_FOUND, ErrorDescriptor(name="not_found", code="errors.other")],
        )

    assert Lookup not in registry
    assert registry.lookup(Lookup) is None


def test_invalid_mapping_registers_nothing() -> None:
    registry = OutcomeTypeRegistry()

    with pytest.raises(InvalidDescriptorError):
        registry.ensure(Lookup, [NOT_FOUND, {"code": "errors.nameless"}])

    assert Lookup not in registry


def test_names_must_not_shadow_inherited_errors() -> None:
    registry = OutcomeTypeRegistry()
    parent_type = registry.ensure(Lookup, [NOT_FOUND])

    class Child:
        pass

    with pytest.raises(DuplicateErrorNameError, match="inherited"):
        registry.ensure(Child, [NOT_FOUND], base=parent_type)


def test_child_type_extends_parent_type() -> None:
    registry = OutcomeTypeRegistry()
    parent_type = registry.ensure(Lookup, [NOT_FOUND])

    class Child:
        pass

    child_type = registry.ensure(Child, [CONFLICT], base=parent_type)

    assert issubclass(child_type, parent_type)
    assert child_type.errors == (NOT_FOUND, CONFLICT)
    assert child_type.failed(code="errors.not_found").is_not_found_failure


def test_predicates_are_false_on_success_even_for_none_codes() -> None:
    registry = OutcomeTypeRegistry()
    outcome_type = registry.ensure(Lookup, [ErrorDescriptor(name="uncoded")])

    assert outcome_type.succeeded().is_uncoded_failure is False
    assert outcome_type.failed().is_uncoded_failure is True


def test_registry_does_not_keep_classes_alive() -> None:
    registry = OutcomeTypeRegistry()

    class Throwaway:
        pass

    registry.ensure(Throwaway, [NOT_FOUND])
    del Throwaway
    gc.collect()

    assert len(registry._types) == 0


def test_missing_codes_and_reused_codes_are_warned(capsys: pytest.CaptureFixture[str]) -> None:
    registry = OutcomeTypeRegistry()

    registry.ensure(
        Lookup,
        [
            ErrorDescriptor(name="uncoded"),
            ErrorDescriptor(name="first", code="errors.same"),
            ErrorDescriptor(name="second", code="errors.same"),
        ],
    )

    err = capsys.readouterr().err
    assert "[LookupResult] error 'uncoded' has no code" in err
    assert "[LookupResult] error 'second' reuses code 'errors.same'" in err


def test_debug_logging_reports_created_types(capsys: pytest.CaptureFixture[str]) -> None:
    import single_action_service.log as log

    log.set_level("debug")
    registry = OutcomeTypeRegistry()

    registry.ensure(Lookup, [NOT_FOUND])

    assert "[LookupResult] created with errors not_found" in capsys.readouterr().out
