"""`gocross build`: cross-compile the project for every matching go dist."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from gocross.config import resolve_config
from gocross.dispatch import build_all, summarize
from gocross.errors import (
    CatalogParseError,
    ConfigError,
    ProjectNameError,
    ToolchainQueryError,
    UnsupportedTargetError,
)
from gocross.helpers import format_duration, project_name, resolve_project_dir
from gocross.log import make_logger
from gocross.models import BuildConfig, BuildJobResult
from gocross.targets import parse_targets
from gocross.toolchain import build_options


def build_parser(prog: str = "gocross build") -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog=prog, description="Cross-compile a Go project for many OS/ARCH targets in parallel"
    )
    ap.add_argument(
        "--target",
        "-t",
        action="append",
        default=[],
        metavar="OS[/ARCH]",
        help="OS to target, optionally narrowed with /ARCH. Repeatable. Default: every go dist",
    )
    ap.add_argument("-o", dest="output_dir", default=None, help="Output directory (default: PROJECT_DIR/build)")
    ap.add_argument("-n", dest="binary_name", default=None, help="Binary base name (default: project name)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Print additional information")
    ap.add_argument("--jobs", "-j", type=int, default=None, help="Max concurrent builds (default: one per target)")
    ap.add_argument("--timeout", type=float, default=None, help="Seconds allowed for the dist query")
    ap.add_argument("--go", default=None, help="Go toolchain binary (default: $GOCROSS_GO or go)")
    ap.add_argument("--config", type=Path, default=None, help="Config file (default: PROJECT_DIR/gocross.yaml)")
    ap.add_argument("project_dir", nargs="?", default=None, help="Project directory (default: cwd)")
    return ap


def _report(result: BuildJobResult, logger: logging.Logger) -> None:
    took = format_duration(result.duration)
    if result.ok:
        logger.info("  ✅ %s -> %s (%s)", result.dist, result.output_path, took)
        if result.output.strip():
            logger.debug("%s", result.output.rstrip())
        return
    logger.error("  ❌ %s: %s (%s)", result.dist, result.error, took)
    if result.output.strip():
        logger.error("%s", result.output.rstrip())


def run_build(
    project_dir: str | None = None,
    targets: list[str] | None = None,
    output_dir: str | None = None,
    binary_name: str | None = None,
    verbose: bool = False,
    jobs: int | None = None,
    timeout: float | None = None,
    go: str | None = None,
    config_path: Path | None = None,
) -> int:
    """Resolve targets, build them all, print a summary. Returns 0 when every build succeeded, else 1."""
    logger = make_logger(verbose)
    try:
        proj = resolve_project_dir(project_dir)
        name = project_name(proj)
        cfg = resolve_config(
            proj,
            {
                "targets": targets,
                "output_dir": output_dir,
                "binary_name": binary_name,
                "jobs": jobs,
                "timeout": timeout,
                "go": go,
            },
            config_path,
        )
    except ProjectNameError as e:
        print(f"❌ project name: {e}", file=sys.stderr)
        return 1
    except ConfigError as e:
        print(f"❌ config: {e}", file=sys.stderr)
        return 1

    if cfg["jobs"] is not None and cfg["jobs"] < 1:
        print(f"❌ --jobs must be >= 1, got {cfg['jobs']}", file=sys.stderr)
        return 1

    logger.debug("project dir: %s", proj)
    logger.debug("project name: %s", name)

    filters, accepted = parse_targets(cfg["targets"], logger)
    out_dir = Path(os.path.abspath(cfg["output_dir"])) if cfg["output_dir"] else proj / "build"
    logger.debug("output directory: %s", out_dir)

    try:
        dists = build_options(filters, go=cfg["go"], timeout=cfg["timeout"], logger=logger)
    except UnsupportedTargetError as e:
        print(f"❌ Unsupported targets: {', '.join(accepted)}", file=sys.stderr)
        print(f"   {e}", file=sys.stderr)
        return 1
    except (ToolchainQueryError, CatalogParseError) as e:
        print(f"❌ build options: {e}", file=sys.stderr)
        return 1

    config = BuildConfig(
        project_dir=proj,
        output_dir=out_dir,
        binary_name=cfg["binary_name"] or name,
        targets=tuple(filters),
        go=cfg["go"],
        build_flags=tuple(cfg["build_flags"]),
        cgo_enabled=cfg["cgo_enabled"],
    )

    logger.info("🔨 Building %s for %d target(s)...", config.binary_name, len(dists))
    results = build_all(
        config,
        dists,
        max_workers=cfg["jobs"],
        on_result=lambda r: _report(r, logger),
        logger=logger,
    )
    summary = summarize(results)
    if summary.ok:
        print(f"🎉 {summary}")
        return 0
    failed = sorted(str(r.dist) for r in results if not r.ok)
    print(f"❌ {summary}: {', '.join(failed)}", file=sys.stderr)
    return 1


def run_build_argv(argv: list[str] | None = None) -> None:
    """Parse argv and run the build. argv defaults to sys.argv[2:] when called from main."""
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []  # skip 'gocross build'
    args = build_parser().parse_args(argv)
    rc = run_build(
        project_dir=args.project_dir,
        targets=args.target,
        output_dir=args.output_dir,
        binary_name=args.binary_name,
        verbose=args.verbose,
        jobs=args.jobs,
        timeout=args.timeout,
        go=args.go,
        config_path=args.config,
    )
    sys.exit(rc)
