"""`gocross dists`: list the go dists the toolchain supports, optionally filtered."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from gocross.config import default_config
from gocross.errors import CatalogParseError, ToolchainQueryError, UnsupportedTargetError
from gocross.log import make_logger
from gocross.models import DistInfo
from gocross.targets import parse_targets
from gocross.toolchain import build_options, fetch_catalog, load_catalog


def format_table(dists: list[DistInfo]) -> str:
    rows = [("OS/ARCH", "CGO", "FIRST CLASS")]
    rows += [(str(d), "yes" if d.cgo_supported else "no", "yes" if d.first_class else "no") for d in dists]
    width = max(len(r[0]) for r in rows)
    return "\n".join(f"{r[0]:<{width}}  {r[1]:<3}  {r[2]}" for r in rows)


def run_dists(
    targets: list[str] | None = None,
    json_out: bool = False,
    first_class: bool = False,
    go: str | None = None,
    catalog_path: Path | None = None,
    timeout: float | None = None,
    verbose: bool = False,
) -> int:
    """Print the (filtered) catalog as a table or JSON. Returns 0/1."""
    logger = make_logger(verbose)
    go = go or default_config()["go"]
    filters, accepted = parse_targets(targets or [], logger)
    try:
        catalog = (
            load_catalog(catalog_path)
            if catalog_path is not None
            else fetch_catalog(go, timeout=timeout, logger=logger)
        )
        dists = build_options(filters, logger=logger, catalog=catalog)
    except UnsupportedTargetError as e:
        print(f"❌ Unsupported targets: {', '.join(accepted)}", file=sys.stderr)
        print(f"   {e}", file=sys.stderr)
        return 1
    except (ToolchainQueryError, CatalogParseError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    if first_class:
        dists = [d for d in dists if d.first_class]
    if json_out:
        print(json.dumps([d.to_json() for d in dists], indent=2))
    else:
        print(format_table(dists))
    return 0


def run_dists_argv(argv: list[str] | None = None) -> None:
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []
    ap = argparse.ArgumentParser(prog="gocross dists", description="List supported go dists")
    ap.add_argument("--target", "-t", action="append", default=[], metavar="OS[/ARCH]")
    ap.add_argument("--json", dest="json_out", action="store_true", help="Print JSON")
    ap.add_argument("--first-class", action="store_true", help="Only first-class ports")
    ap.add_argument("--go", default=None, help="Go toolchain binary")
    ap.add_argument("--catalog", type=Path, default=None, help="Read a saved `go tool dist list -json` file")
    ap.add_argument("--timeout", type=float, default=None)
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)
    sys.exit(
        run_dists(
            targets=args.target,
            json_out=args.json_out,
            first_class=args.first_class,
            go=args.go,
            catalog_path=args.catalog,
            timeout=args.timeout,
            verbose=args.verbose,
        )
    )
