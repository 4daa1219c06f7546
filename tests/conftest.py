# ruff: noqa: E402

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import single_action_service.log as log
from single_action_service import OutcomeTypeRegistry, ServiceBase


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SINGLE_ACTION_SERVICE_LOG_LEVEL", raising=False)
    monkeypatch.setenv("SINGLE_ACTION_SERVICE_NO_COLOR", "1")
    log.set_level(None)


@pytest.fixture
def registry(monkeypatch: pytest.MonkeyPatch) -> OutcomeTypeRegistry:
    fresh = OutcomeTypeRegistry()
    monkeypatch.setattr(ServiceBase, "outcome_registry", fresh)
    return fresh
