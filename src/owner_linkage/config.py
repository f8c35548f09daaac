from __future__ import annotations

import os
from dataclasses import dataclass, field


def _f(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


def _s(name: str, default: str) -> str:
    value = os.getenv(name)
    return value.strip() if value else default


def _set(name: str, default: tuple[str, ...]) -> frozenset[str]:
    raw = os.getenv(name)
    if not raw:
        return frozenset(default)
    return frozenset(part.strip().lower() for part in raw.split(",") if part.strip())


# Island roads as they appear in appraisal street fields (lower-cased).
DEFAULT_LOCAL_STREETS = (
    "beach avenue",
    "center road",
    "chapel street",
    "cooneymus road",
    "corn neck road",
    "dodge street",
    "high street",
    "lakeside drive",
    "mansion road",
    "mohegan trail",
    "ocean avenue",
    "old town road",
    "payne road",
    "pilot hill road",
    "spring street",
    "water street",
    "west beach road",
    "west side road",
)

DEFAULT_LOCAL_CITIES = ("block island", "new shoreham")


@dataclass(frozen=True)
class MatchingConfig:
    # Best entity score at which a colliding record is folded into an existing owner
    same_owner_threshold: float = field(
        default_factory=lambda: _f("OWNER_LINKAGE_SAME_OWNER_THRESHOLD", 0.75)
    )

    # Island-local address detection
    local_zip: str = field(default_factory=lambda: _s("OWNER_LINKAGE_LOCAL_ZIP", "02807"))
    local_cities: frozenset[str] = field(
        default_factory=lambda: _set("OWNER_LINKAGE_LOCAL_CITIES", DEFAULT_LOCAL_CITIES)
    )
    local_streets: frozenset[str] = field(
        default_factory=lambda: _set("OWNER_LINKAGE_LOCAL_STREETS", DEFAULT_LOCAL_STREETS)
    )


CONFIG = MatchingConfig()
