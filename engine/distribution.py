"""Integer apportioning helpers used by the allocator.

Both helpers split an integer amount among children without ever producing
fractional sizes:

- grow_shares: hand out leftover space by growth weight, capped by each
  child's room below its max size.
- shrink_reductions: take back a deficit from children sized above their
  minimum, proportionally to that slack.
"""
from __future__ import annotations

from fractions import Fraction
from typing import Dict, List, Optional, Sequence, Tuple

# (index, weight, room) with room None for unbounded
Grower = Tuple[int, float, Optional[int]]


def _largest_first(weights: Dict[int, Fraction]) -> List[int]:
    """Indices by decreasing weight, earliest position first on ties."""
    return sorted(weights, key=lambda i: (-weights[i], i))


def split_by_weight(amount: int, weights: Dict[int, Fraction]) -> Dict[int, int]:
    """Split `amount` proportionally to `weights`, summing exactly to `amount`.

    Each index gets the floor of its exact share; the units lost to rounding
    go one by one to the largest weights (earliest position on ties).
    """
    total = sum(weights.values())
    if amount <= 0 or total <= 0:
        return {i: 0 for i in weights}
    shares = {i: int(amount * w / total) for i, w in weights.items()}
    remainder = amount - sum(shares.values())
    for i in _largest_first(weights)[:remainder]:
        shares[i] += 1
    return shares


def grow_shares(leftover: int, growers: Sequence[Grower]) -> Dict[int, int]:
    """Distribute `leftover` among growers by weight, never past their room.

    When a grower's integer share exceeds its room, it is capped there and the
    split is redone for the others with what is still left. Stops once a split
    caps nobody, or nobody can grow anymore. Whatever cannot be placed is
    simply not returned: the sum of the result may be below `leftover`.
    """
    added: Dict[int, int] = {i: 0 for i, _, _ in growers}
    active = {i: (Fraction(w), room) for i, w, room in growers if w > 0 and room != 0}
    remaining = leftover
    while remaining > 0 and active:
        shares = split_by_weight(remaining, {i: w for i, (w, _) in active.items()})
        capped = [
            i for i, (_, room) in active.items()
            if room is not None and shares[i] > room
        ]
        if not capped:
            for i, share in shares.items():
                added[i] += share
            return added
        for i in capped:
            room = active.pop(i)[1]
            added[i] += room
            remaining -= room
    return added


def shrink_reductions(deficit: int, slacks: Dict[int, int]) -> Dict[int, int]:
    """How much to take from each child to absorb `deficit`.

    `slacks` maps index to how far the child sits above its minimum; the sum
    of slacks must be at least `deficit`. No reduction exceeds its slack.
    """
    total = sum(slacks.values())
    if deficit > total:
        raise ValueError(f"Cannot shrink by {deficit}, only {total} above minimums")
    if deficit <= 0:
        return {i: 0 for i in slacks}
    reductions = {i: deficit * s // total for i, s in slacks.items()}
    remainder = deficit - sum(reductions.values())
    order = sorted((i for i in slacks if slacks[i] > reductions[i]), key=lambda i: (-slacks[i], i))
    for i in order[:remainder]:
        reductions[i] += 1
    return reductions
