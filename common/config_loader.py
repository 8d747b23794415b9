from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
import yaml
from layout.child import ConstraintError

def load_yaml(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

def _non_negative_int(path: str | Path, name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConstraintError(f"{path}: '{name}' must be a non-negative integer, got {value!r}")
    return value

@dataclass(frozen=True)
class LoadedLayout:
    width: Optional[int]
    margin_between: int
    children: List[Dict[str, Any]] = field(default_factory=list)

def load_layout(path: str | Path = "config/columns.yaml") -> LoadedLayout:
    raw = load_yaml(path)
    if not isinstance(raw, dict):
        raise ConstraintError(f"{path}: layout must be a mapping, got {type(raw).__name__}")
    children = raw.get("children") or []
    if not isinstance(children, list):
        raise ConstraintError(f"{path}: 'children' must be a list, got {type(children).__name__}")
    width = raw.get("width")
    return LoadedLayout(
        width=_non_negative_int(path, "width", width) if width is not None else None,
        margin_between=_non_negative_int(path, "margin_between", raw.get("margin_between", 0)),
        children=[c if isinstance(c, dict) else {"content": c} for c in children],
    )
