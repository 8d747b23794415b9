"""Size allocation engine.

Splits a total size among an ordered list of children:

1. mandatory children are placed at their baseline size, shrinking toward
   their minimums if the total is too small;
2. optional children are admitted by decreasing priority, each one dropped
   when its baseline (plus a margin) no longer fits;
3. the space left is grown into by weight, capped by each child's max size.

Margins only separate children that end up included. The computation is pure:
children are never mutated and no state survives between calls.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from engine.distribution import grow_shares, shrink_reductions
from layout.child import Child

logger = logging.getLogger(__name__)


class AllocationError(ValueError):
    """The total size is incompatible with the structure of the children."""

    def __init__(self, message: str, total_size: int, required: int):
        super().__init__(message)
        self.total_size = total_size
        self.required = required


class MarginExceedsTotal(AllocationError):
    """Margins between mandatory children alone do not fit in the total."""

    pass


class InsufficientSpace(AllocationError):
    """Mandatory minimums plus margins do not fit, even with every optional child dropped."""

    pass


@dataclass(frozen=True)
class Allocation:
    """Result of an allocation, aligned 1:1 with the input children."""

    sizes: Tuple[int, ...]
    included: Tuple[bool, ...]
    total_size: int
    margin_between: int

    @property
    def used(self) -> int:
        count = sum(self.included)
        margins = self.margin_between * (count - 1) if count else 0
        return sum(self.sizes) + margins

    @property
    def unused(self) -> int:
        return self.total_size - self.used

    @property
    def dropped(self) -> List[int]:
        return [i for i, inc in enumerate(self.included) if not inc]


def _check_amount(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")


def drop_order(children: Sequence[Child]) -> List[int]:
    """Indices of optional children, from the most to the least resistant to dropping.

    Bigger priority first; among equal priorities the later child comes
    first, so the earliest one is the first to go.
    """
    optional = [i for i, c in enumerate(children) if c.is_optional]
    return sorted(optional, key=lambda i: (-children[i].priority, -i))


def allocate(total_size: int, margin_between: int, children: Sequence[Child]) -> Allocation:
    """Compute the size of each child.

    Args:
        total_size: Size to split, margins included.
        margin_between: Gap between two adjacent included children.
        children: Children in display order.

    Returns:
        Allocation with one size per child, 0 for dropped optional children.

    Raises:
        MarginExceedsTotal: margins between mandatory children exceed the total.
        InsufficientSpace: mandatory minimums plus margins exceed the total.
    """
    _check_amount("total_size", total_size)
    _check_amount("margin_between", margin_between)
    n = len(children)
    sizes = [0] * n
    included = [False] * n

    mandatory = [i for i, c in enumerate(children) if not c.is_optional]
    margins = margin_between * (len(mandatory) - 1) if mandatory else 0
    if margins > total_size:
        raise MarginExceedsTotal(
            f"Margins between {len(mandatory)} mandatory children ({margins}) exceed total size {total_size}",
            total_size=total_size,
            required=margins,
        )

    # mandatory children, at baseline
    for i in mandatory:
        sizes[i] = children[i].baseline
        included[i] = True
    available = total_size - margins - sum(sizes)

    if available < 0:
        minimums = sum(children[i].min_size for i in mandatory)
        if minimums + margins > total_size:
            raise InsufficientSpace(
                f"Mandatory minimums ({minimums}) plus margins ({margins}) exceed total size {total_size}",
                total_size=total_size,
                required=minimums + margins,
            )
        slacks = {i: sizes[i] - children[i].min_size for i in mandatory}
        reductions = shrink_reductions(-available, slacks)
        for i, r in reductions.items():
            sizes[i] -= r
        logger.debug("Shrank mandatory children by %d toward their minimums", -available)
        available = 0

    # optional children, most important first
    count = len(mandatory)
    for i in drop_order(children):
        child = children[i]
        margin = margin_between if count > 0 else 0
        if child.baseline + margin > available:
            logger.debug(
                "Dropping optional child %d (%r, priority %d): needs %d, %d left",
                i, child.content, child.priority, child.baseline + margin, available,
            )
            continue
        sizes[i] = child.baseline
        included[i] = True
        available -= child.baseline + margin
        count += 1

    # growth
    if available > 0:
        growers = [
            (i, c.grow, c.room_above(sizes[i]))
            for i, c in enumerate(children)
            if included[i]
        ]
        for i, extra in grow_shares(available, growers).items():
            sizes[i] += extra
            available -= extra
        if available > 0:
            logger.debug("%d units left unallocated after growth", available)

    return Allocation(
        sizes=tuple(sizes),
        included=tuple(included),
        total_size=total_size,
        margin_between=margin_between,
    )
