"""Column sizing CLI.

Provides commands for:
- sizes: Print the allocated size of each column
- header: Print the column names and sizes, laid out at the allocated widths
- table: Print the constraints and allocation of every column
"""
from __future__ import annotations

import argparse
import logging
import shutil
from typing import Any, Dict, List, Optional

import yaml

from common.config_loader import LoadedLayout, load_layout
from engine.allocator import AllocationError
from layout.child import Child, ConstraintError
from layout.container import Container
from reporting.summary import allocation_summary, allocation_table, header_rows

CHILD_KEYS = frozenset(["content", "min", "max", "clamp", "size", "fixed", "grow", "optional", "priority"])

# size pins both bounds; clamp sets both bounds
CONFLICTING_KEYS = {
    "size": frozenset(["min", "max", "clamp", "fixed"]),
    "clamp": frozenset(["min", "max"]),
}


def build_child(info: Dict[str, Any]) -> Child:
    """Build a child from one entry of a layout file."""
    unknown = set(info) - CHILD_KEYS
    if unknown:
        raise ConstraintError(f"Unknown keys for child {info.get('content')!r}: {', '.join(sorted(unknown))}")

    for key, others in CONFLICTING_KEYS.items():
        clash = sorted(others & set(info)) if key in info else []
        if clash:
            raise ConstraintError(
                f"Child {info.get('content')!r}: '{key}' cannot be combined with {', '.join(clash)}"
            )

    min_size, max_size = info.get("min", 0), info.get("max")
    if "clamp" in info:
        bounds = info["clamp"]
        if not isinstance(bounds, (list, tuple)) or len(bounds) != 2:
            raise ConstraintError(f"clamp must be [min, max], got {bounds!r}")
        min_size, max_size = bounds
    child = Child(info.get("content"), min_size=min_size, max_size=max_size)
    if "size" in info:
        child = child.with_size(info["size"])
    if "fixed" in info:
        child = child.with_fixed(info["fixed"])
    if "grow" in info:
        child = child.with_grow(info["grow"])

    optional = info.get("optional")
    if "priority" in info:
        priority = info["priority"]
        if optional is False or (
            isinstance(optional, int) and not isinstance(optional, bool) and optional != priority
        ):
            raise ConstraintError(
                f"Child {info.get('content')!r}: priority {priority!r} contradicts optional: {optional!r}"
            )
        child = child.optional_with_priority(info["priority"])
    elif optional is True:
        child = child.optional()
    elif isinstance(optional, int) and not isinstance(optional, bool):
        child = child.optional_with_priority(optional)
    elif optional not in (False, None):
        raise ConstraintError(f"optional must be true/false or a priority, got {optional!r}")
    return child


def build_children(layout: LoadedLayout) -> List[Child]:
    return [build_child(info) for info in layout.children]


def build_container(layout: LoadedLayout, width: int, margin_between: Optional[int] = None) -> Container:
    """Build and allocate a container from a loaded layout."""
    margin = layout.margin_between if margin_between is None else margin_between
    builder = Container.builder_in(width).with_margin_between(margin)
    for child in build_children(layout):
        builder.add(child)
    return builder.build()


def resolve_width(args, layout: LoadedLayout) -> int:
    """Explicit --width, then the layout's width, then the terminal width."""
    if args.width is not None:
        return args.width
    if args.terminal or layout.width is None:
        return shutil.get_terminal_size().columns
    return layout.width


def _load(args) -> Container:
    layout = load_layout(args.layout)
    width = resolve_width(args, layout)
    return build_container(layout, width, args.margin)


def cmd_sizes(args) -> int:
    """Handle sizes command: one size per column."""
    container = _load(args)
    for i, size in enumerate(container.sizes()):
        print(f"{container.content(i)}: {size}")
    return 0


def cmd_header(args) -> int:
    """Handle header command: column names and sizes at their widths."""
    container = _load(args)
    print(f"width: {container.total_size}")
    for line in header_rows(container):
        print(line)
    return 0


def cmd_table(args) -> int:
    """Handle table command: constraints and allocation of every column."""
    container = _load(args)
    df = allocation_table(container)
    print(df.to_string(index=False))

    summary = allocation_summary(container)
    print("\nSummary:")
    for k, v in summary.items():
        if isinstance(v, list):
            print(f"  {k}: {', '.join(str(x) for x in v) or '-'}")
        else:
            print(f"  {k}: {v}")
    return 0


def _run(args) -> int:
    try:
        return args.func(args)
    except (AllocationError, ConstraintError) as e:
        print(f"Error: {e}")
        return 1
    except FileNotFoundError as e:
        print(f"Error: layout file not found: {e.filename}")
        return 1
    except yaml.YAMLError as e:
        print(f"Error: invalid layout file: {e}")
        return 1


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    p = argparse.ArgumentParser(
        prog="cli.main",
        description="Column sizing CLI: split a width among columns",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    # Common arguments for all commands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--layout", default="config/columns.yaml", help="Column layout file")
    common.add_argument("--width", type=int, default=None, help="Total width (default: layout width, else terminal)")
    common.add_argument("--terminal", action="store_true", help="Use the terminal width, ignoring the layout width")
    common.add_argument("--margin", type=int, default=None, help="Margin between columns (default: from layout)")
    common.add_argument("-v", "--verbose", action="store_true", help="Log allocation decisions")

    sizes_p = sub.add_parser("sizes", parents=[common], help="Print column sizes")
    sizes_p.set_defaults(func=cmd_sizes)

    header_p = sub.add_parser("header", parents=[common], help="Print a header row at the allocated widths")
    header_p.set_defaults(func=cmd_header)

    table_p = sub.add_parser("table", parents=[common], help="Print constraints and allocation per column")
    table_p.set_defaults(func=cmd_table)

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    raise SystemExit(_run(args))


if __name__ == "__main__":
    main()
