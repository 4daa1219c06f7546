from dataclasses import FrozenInstanceError

import pytest

from single_action_service import InvalidOutcomeError, Outcome, UnknownErrorNameError


def test_succeeded_outcome_exposes_payload() -> None:
    outcome = Outcome.succeeded({"id": 1})

    assert outcome.is_success is True
    assert outcome.is_failure is False
    assert outcome.data == {"id": 1}
    assert outcome.error_code is None
    assert outcome.error is None


def test_succeeded_outcome_without_payload() -> None:
    outcome = Outcome.succeeded()

    assert outcome.is_success
    assert outcome.data is None


def test_failed_outcome_carries_code_and_payload() -> None:
    outcome = Outcome.failed(["bad input"], code="errors.invalid")

    assert outcome.is_failure is True
    assert outcome.is_success is False
    assert outcome.data == ["bad input"]
    assert outcome.error_code == "errors.invalid"


def test_failed_outcome_may_omit_code() -> None:
    outcome = Outcome.failed("boom")

    assert outcome.is_failure
    assert outcome.error_code is None


def test_outcome_fields_cannot_be_reassigned() -> None:
    outcome = Outcome.succeeded(1)

    with pytest.raises(FrozenInstanceError):
        outcome.success = False  # type: ignore[misc]


def test_success_with_error_code_is_rejected() -> None:
    with pytest.raises(InvalidOutcomeError) as exc_info:
        Outcome(True, None, "errors.invalid")
    assert exc_info.value.code == "invalid_outcome"


def test_non_bool_success_flag_is_rejected() -> None:
    with pytest.raises(InvalidOutcomeError):
        Outcome(1, None)  # type: ignore[arg-type]


def test_matches_on_base_outcome_raises_for_unknown_names() -> None:
    with pytest.raises(UnknownErrorNameError) as exc_info:
        Outcome.failed(code="errors.invalid").matches("invalid")
    assert exc_info.value.code == "unknown_error_name"
    assert isinstance(exc_info.value, LookupError)


def test_outcomes_compare_by_value() -> None:
    assert Outcome.failed(0, code="errors.x") == Outcome.failed(0, code="errors.x")
    assert Outcome.succeeded(1) != Outcome.failed(1)
