import json

import pytest
import structlog
from structlog.testing import capture_logs

from owner_linkage.collision import CollisionRegistry, resolve
from owner_linkage.logging import configure_logging
from owner_linkage.models import resolve_calculator

from conftest import build_entity


@pytest.fixture(autouse=True)
def _reset_structlog():
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


def test_json_lines_on_stderr(capsys) -> None:
    configure_logging("INFO")
    structlog.get_logger("owner_linkage.test").info("probe", fire_number="72")
    line = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert line["event"] == "probe"
    assert line["level"] == "info"
    assert line["fire_number"] == "72"


def test_level_filters(capsys) -> None:
    configure_logging("WARNING")
    structlog.get_logger("owner_linkage.test").info("hidden")
    assert "hidden" not in capsys.readouterr().err


def test_resolver_events() -> None:
    registry = CollisionRegistry()
    with capture_logs() as logs:
        resolve(registry, build_entity("P1", "John", "Smith"), "7")
        resolve(registry, build_entity("P2", "John", "Smith"), "7")
        resolve(registry, build_entity("P3", "Mary", "Jones"), "7")
        resolve(registry, build_entity("P4", "Alice", "Walker"), None)
    assert [entry["event"] for entry in logs] == [
        "collision_registered",
        "collision_merged",
        "collision_suffixed",
        "collision_no_identifier",
    ]


def test_unknown_calculator_warns() -> None:
    with capture_logs() as logs:
        resolve_calculator("legacyComparator")
    assert logs == [
        {"event": "unknown_calculator", "log_level": "warning", "name": "legacyComparator",
         "fallback": "default_weighted_comparison"}
    ]
