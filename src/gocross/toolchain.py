"""Query the Go toolchain for the OS/ARCH combinations it can build (`go tool dist list -json`).

fetch_catalog never filters. build_options composes fetch + targets.resolve and turns an
empty result for non-empty filters into UnsupportedTargetError.
"""

from __future__ import annotations

import json
import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from gocross.errors import CatalogParseError, ToolchainQueryError, UnsupportedTargetError
from gocross.models import DistInfo, TargetFilter
from gocross.targets import resolve, unmatched

log = logging.getLogger(__name__)


def dist_list_command(go: str = "go") -> list[str]:
    return [go, "tool", "dist", "list", "-json"]


def parse_catalog(raw: str | bytes) -> list[DistInfo]:
    """Decode catalog JSON into DistInfo. Raises CatalogParseError."""
    try:
        data: Any = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        msg = f"json parse: {e}"
        raise CatalogParseError(msg) from e
    if not isinstance(data, list):
        msg = f"json parse: expected a list of dists, got {type(data).__name__}"
        raise CatalogParseError(msg)
    return [DistInfo.from_json(item) for item in data]


def load_catalog(path: Path) -> list[DistInfo]:
    """Read a saved `go tool dist list -json` output."""
    try:
        raw = path.read_text()
    except OSError as e:
        msg = f"dist: cannot read catalog {path}: {e}"
        raise ToolchainQueryError(msg) from e
    return parse_catalog(raw)


def fetch_catalog(
    go: str = "go",
    timeout: float | None = None,
    logger: logging.Logger | None = None,
) -> list[DistInfo]:
    """Run the toolchain catalog query. timeout (seconds) aborts a hung query.

    Raises ToolchainQueryError (launch, exit status, timeout) or CatalogParseError.
    """
    logger = logger or log
    cmd = dist_list_command(go)
    logger.debug("dist query: %s", " ".join(cmd))
    try:
        r = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        msg = f"dist: {' '.join(cmd)} timed out after {timeout}s"
        raise ToolchainQueryError(msg) from e
    except OSError as e:
        msg = f"dist: cannot run {go!r}: {e}"
        raise ToolchainQueryError(msg) from e
    if r.returncode != 0:
        detail = (r.stderr or "").strip()
        msg = f"dist: {' '.join(cmd)} exited {r.returncode}" + (f": {detail}" if detail else "")
        raise ToolchainQueryError(msg)
    catalog = parse_catalog(r.stdout)
    logger.debug("dist query returned %d platform(s)", len(catalog))
    return catalog


def build_options(
    targets: Sequence[TargetFilter],
    go: str = "go",
    timeout: float | None = None,
    logger: logging.Logger | None = None,
    catalog: Sequence[DistInfo] | None = None,
) -> list[DistInfo]:
    """Catalog narrowed to targets. Pass catalog to skip the toolchain query.

    Raises UnsupportedTargetError when targets is non-empty and nothing matched.
    """
    logger = logger or log
    if catalog is None:
        catalog = fetch_catalog(go, timeout=timeout, logger=logger)
    if not targets:
        return list(catalog)
    dists = resolve(targets, catalog)
    missing = unmatched(targets, catalog)
    if not dists:
        raise UnsupportedTargetError(str(t) for t in targets)
    for t in missing:
        logger.warning("No supported go dist for target %s", t)
    return dists
