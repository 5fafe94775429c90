"""Target filters: parse OS[/ARCH] strings and narrow a toolchain catalog to them."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from gocross.errors import InvalidTargetError
from gocross.models import DistInfo, TargetFilter

log = logging.getLogger(__name__)


def parse_target(raw: str) -> TargetFilter:
    """Parse "os" or "os/arch" (case-insensitive). Raises InvalidTargetError on empty or 2+ '/'."""
    if not raw:
        msg = "invalid target specification: empty"
        raise InvalidTargetError(msg)
    parts = raw.lower().split("/")
    if len(parts) == 1:
        return TargetFilter(os=parts[0])
    if len(parts) == 2:
        return TargetFilter(os=parts[0], arch=parts[1])
    msg = f"invalid target specification: {raw!r}"
    raise InvalidTargetError(msg)


def parse_targets(
    raws: Iterable[str], logger: logging.Logger | None = None
) -> tuple[list[TargetFilter], list[str]]:
    """Parse every raw string; warn about and drop invalid ones. Returns (filters, accepted raws)."""
    logger = logger or log
    filters: list[TargetFilter] = []
    accepted: list[str] = []
    for raw in raws:
        try:
            filters.append(parse_target(raw))
        except InvalidTargetError:
            logger.warning("Unable to parse %r to valid OS/ARCH, ignoring", raw)
            continue
        accepted.append(raw)
    return filters, accepted


def matches(target: TargetFilter, dist: DistInfo) -> bool:
    if not target.arch:
        return target.os == dist.os
    return target.os == dist.os and target.arch == dist.arch


def resolve(filters: Sequence[TargetFilter], catalog: Sequence[DistInfo]) -> list[DistInfo]:
    """Dists to build: filter order outer, catalog order inner. Empty filters select everything.

    A dist matched by two filters appears twice.
    """
    if not filters:
        return list(catalog)
    return [dist for target in filters for dist in catalog if matches(target, dist)]


def unmatched(filters: Sequence[TargetFilter], catalog: Sequence[DistInfo]) -> list[TargetFilter]:
    """Filters that select nothing from catalog."""
    return [t for t in filters if not any(matches(t, d) for d in catalog)]
