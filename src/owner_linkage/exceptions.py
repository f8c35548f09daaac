from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ComparisonTypeMismatch(TypeError):
    """Raised when two different composite kinds are compared.

    This is a programming error: callers must only compare an Address with an
    Address, an Entity with an Entity, and so on.
    """

    left_kind: str
    right_kind: str

    def __str__(self) -> str:  # pragma: no cover - human readable
        return f"cannot compare {self.left_kind} with {self.right_kind}"


@dataclass
class SuffixExhausted(RuntimeError):
    """Raised when a base fire number already has owners bound to every letter A-Z."""

    base: str
    owners: int

    def __str__(self) -> str:  # pragma: no cover - human readable
        return f"no suffix left at fire number {self.base} ({self.owners} owners registered)"
