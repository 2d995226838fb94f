from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .catalog.loader import load_catalog
from .errors import CatalogError, SnapshotError
from .logging_config import configure_logging
from .render import render_ascii
from .serialization.codec import decode_snapshot
from .serialization.snapshot import BlockSnapshot, import_snapshot

logger = logging.getLogger(__name__)


def _read_snapshot(path: Path) -> BlockSnapshot:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SnapshotError(f"Cannot read {path}: {e}") from e
    return decode_snapshot(text, source=str(path))


def _cmd_validate(args: argparse.Namespace) -> int:
    paths = []
    for raw in args.paths:
        root = Path(raw)
        if root.is_dir():
            paths.extend(sorted(root.rglob("*.json")))
        else:
            paths.append(root)

    success = True
    for p in paths:
        try:
            snapshot = _read_snapshot(p)
            print(f"OK: {p} ({len(snapshot)} cells)")
        except SnapshotError as e:
            success = False
            print(f"INVALID: {p}\n{e}\n")
    return 0 if success else 1


def _cmd_show(args: argparse.Namespace) -> int:
    try:
        snapshot = _read_snapshot(Path(args.path))
    except SnapshotError as e:
        print(f"INVALID: {args.path}\n{e}")
        return 1
    print(f"name:  {snapshot.name or '(unnamed)'}")
    print(f"scale: {snapshot.scale:g}")
    print(f"cells: {len(snapshot)}")
    preview = render_ascii(snapshot)
    if preview:
        print()
        print(preview)
    return 0


def _cmd_resolve(args: argparse.Namespace) -> int:
    try:
        catalog = load_catalog(args.catalog)
        snapshot = _read_snapshot(Path(args.path))
    except (CatalogError, SnapshotError) as e:
        print(f"ERROR: {e}")
        return 1
    result = import_snapshot(snapshot, catalog)
    print(f"resolved: {result.resolved}")
    print(f"skipped:  {len(result.skipped)}")
    for cell in result.skipped:
        print(f" - cell ({cell.i}, {cell.j}) connections={cell.connections}")
    return 0 if result.complete else 1


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="dungeon-creator", description="Dungeon block snapshot tools")
    p.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ...)")
    sub = p.add_subparsers(dest="cmd", required=True)

    v = sub.add_parser("validate", help="Validate snapshot files against the snapshot schema")
    v.add_argument("paths", nargs="+", help="Snapshot files or directories to scan")
    v.set_defaults(func=_cmd_validate)

    s = sub.add_parser("show", help="Print a snapshot summary and text preview")
    s.add_argument("path", help="Snapshot file")
    s.set_defaults(func=_cmd_show)

    r = sub.add_parser("resolve", help="Check that every snapshot cell resolves to a catalog piece")
    r.add_argument("path", help="Snapshot file")
    r.add_argument("--catalog", required=True, help="Catalog JSON file")
    r.set_defaults(func=_cmd_resolve)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = logging.WARNING
    if args.log_level:
        level = getattr(logging, str(args.log_level).upper(), logging.WARNING)
    configure_logging(level)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
