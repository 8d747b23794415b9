from __future__ import annotations
from typing import Any, Dict, List, Optional
import pandas as pd
from layout.container import Container

def allocation_summary(container: Container) -> Dict[str, Any]:
    alloc = container.allocation
    return {
        "total_size": alloc.total_size,
        "margin_between": alloc.margin_between,
        "used": alloc.used,
        "unused": alloc.unused,
        "dropped": [container.content(i) for i in alloc.dropped],
    }

def allocation_table(container: Container) -> pd.DataFrame:
    placements = container.placements()
    children = [p.child for p in placements]
    return pd.DataFrame({
        "content": [c.content for c in children],
        "min": [c.min_size for c in children],
        # nullable ints, so unbounded/unset cells stay empty instead of NaN
        "max": pd.array([c.max_size for c in children], dtype="Int64"),
        "fixed": pd.array([c.fixed_size for c in children], dtype="Int64"),
        "grow": [float(c.grow) for c in children],
        "priority": pd.array([c.priority if c.is_optional else None for c in children], dtype="Int64"),
        "included": [p.included for p in placements],
        "size": [p.size or 0 for p in placements],
    })

def header_rows(container: Container, separator: Optional[str] = None) -> List[str]:
    """Two lines: each included child's content, then its size, centered in its width."""
    if separator is None:
        m = container.margin_between
        separator = "|".center(m) if m else ""
    names: List[str] = []
    sizes: List[str] = []
    for p in container.included():
        names.append(f"{str(p.content)[:p.size]:^{p.size}}")
        sizes.append(f"{str(p.size)[:p.size]:^{p.size}}")
    return [separator.join(names), separator.join(sizes)]
