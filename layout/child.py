"""Child descriptors.

A child is one unit asking for a share of the container size: a column in a
terminal table, for instance. It carries its size constraints and whatever
content the caller wants back when combining sizes with their meaning.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Optional


class ConstraintError(ValueError):
    """Raised when a child or container is configured with impossible constraints."""

    pass


def _check_size(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConstraintError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ConstraintError(f"{name} must be >= 0, got {value}")
    return value


@dataclass(frozen=True)
class Child:
    """Size constraints of one child, plus the caller's content.

    Instances are immutable: every configuration method returns a new child.

        Child("name").clamp(5, 10)
        Child("price").with_size(8).optional_with_priority(7)
        Child("comments").with_min(10).with_grow(2.0)
    """

    content: Any = None
    min_size: int = 0
    max_size: Optional[int] = None  # None is unbounded
    fixed_size: Optional[int] = None
    grow: float = 1.0
    is_optional: bool = False
    priority: int = 0  # bigger is more important, only used when optional

    def __post_init__(self) -> None:
        _check_size("min_size", self.min_size)
        if self.max_size is not None:
            _check_size("max_size", self.max_size)
            if self.min_size > self.max_size:
                raise ConstraintError(
                    f"min_size ({self.min_size}) > max_size ({self.max_size}) for {self.content!r}"
                )
        if self.fixed_size is not None:
            _check_size("fixed_size", self.fixed_size)
            if self.fixed_size < self.min_size:
                raise ConstraintError(
                    f"fixed_size ({self.fixed_size}) < min_size ({self.min_size}) for {self.content!r}"
                )
            if self.max_size is not None and self.fixed_size > self.max_size:
                raise ConstraintError(
                    f"fixed_size ({self.fixed_size}) > max_size ({self.max_size}) for {self.content!r}"
                )
        if isinstance(self.grow, bool) or not isinstance(self.grow, (int, float)):
            raise ConstraintError(f"grow must be a number, got {self.grow!r}")
        if not math.isfinite(self.grow) or self.grow < 0:
            raise ConstraintError(f"grow must be a finite number >= 0, got {self.grow}")
        if isinstance(self.priority, bool) or not isinstance(self.priority, int):
            raise ConstraintError(f"priority must be an integer, got {self.priority!r}")

    @property
    def baseline(self) -> int:
        """Size requested before any growth: the fixed size if set, else the minimum."""
        return self.fixed_size if self.fixed_size is not None else self.min_size

    def room_above(self, size: int) -> Optional[int]:
        """How much a child currently at `size` may still grow (None: unbounded)."""
        if self.max_size is None:
            return None
        return max(0, self.max_size - size)

    def optional_with_priority(self, priority: int) -> Child:
        return replace(self, is_optional=True, priority=priority)

    def optional(self) -> Child:
        return self.optional_with_priority(0)

    def with_min(self, min_size: int) -> Child:
        return replace(self, min_size=min_size)

    def with_max(self, max_size: int) -> Child:
        return replace(self, max_size=max_size)

    def clamp(self, min_size: int, max_size: int) -> Child:
        return replace(self, min_size=min_size, max_size=max_size)

    def with_size(self, size: int) -> Child:
        """Pin the child to exactly `size`: it neither grows nor shrinks."""
        return replace(self, min_size=size, max_size=size, fixed_size=size)

    def with_fixed(self, size: int) -> Child:
        """Start from `size` before growth, still free to grow up to the max size."""
        return replace(self, fixed_size=size)

    def with_grow(self, grow: float) -> Child:
        return replace(self, grow=grow)

    def __str__(self) -> str:
        bounds = f"{self.min_size}..{'' if self.max_size is None else self.max_size}"
        extra = f" optional(p={self.priority})" if self.is_optional else ""
        return f"{self.content} [{bounds}] grow={self.grow:g}{extra}"
