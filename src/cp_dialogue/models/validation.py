"""Validation result model for dialogue documents."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a structural check.

    Attributes:
        is_valid: ``True`` when no problem was found.
        errors: Human-readable descriptions of every problem, in the order
            they were found.
    """

    is_valid: bool = True
    errors: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.is_valid
