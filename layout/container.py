from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from engine.allocator import Allocation, allocate
from layout.child import Child, ConstraintError


@dataclass(frozen=True)
class Placement:
    """A child with its allocated size, None if it was dropped."""

    child: Child
    size: Optional[int]

    @property
    def content(self) -> Any:
        return self.child.content

    @property
    def included(self) -> bool:
        return self.size is not None


@dataclass
class ContainerBuilder:
    available: int
    margin_between: int = 0
    children: List[Child] = field(default_factory=list)

    def with_margin_between(self, margin: int) -> ContainerBuilder:
        self.margin_between = margin
        return self

    def with_child(self, child: Child) -> ContainerBuilder:
        self.add(child)
        return self

    def add(self, child: Child) -> None:
        if not isinstance(child, Child):
            raise ConstraintError(f"Expected a Child, got {type(child).__name__}")
        self.children.append(child)

    def build(self) -> Container:
        """Validate the configuration and allocate sizes.

        Raises ConstraintError on a malformed configuration and an
        AllocationError when the children cannot fit in the available size.
        """
        for name, value in (("available", self.available), ("margin_between", self.margin_between)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConstraintError(f"{name} must be a non-negative integer, got {value!r}")
        children = tuple(self.children)
        return Container(children=children, allocation=allocate(self.available, self.margin_between, children))


@dataclass(frozen=True)
class Container:
    children: Tuple[Child, ...]
    allocation: Allocation

    @staticmethod
    def builder_in(available: int) -> ContainerBuilder:
        return ContainerBuilder(available=available)

    @property
    def total_size(self) -> int:
        return self.allocation.total_size

    @property
    def margin_between(self) -> int:
        return self.allocation.margin_between

    def sizes(self) -> List[int]:
        """Sizes in the order children were added, 0 for dropped ones."""
        return list(self.allocation.sizes)

    def content(self, index: int) -> Any:
        return self.children[index].content

    def placements(self) -> List[Placement]:
        return [
            Placement(child, size if inc else None)
            for child, size, inc in zip(self.children, self.allocation.sizes, self.allocation.included)
        ]

    def included(self) -> List[Placement]:
        """Placements of the children that made it in, in order."""
        return [p for p in self.placements() if p.included]
