"""Fan out one `go build` per resolved dist and join every result.

A failing job is captured in its BuildJobResult; it never cancels or affects sibling jobs.
With max_workers=None every target gets its own worker (one concurrent build per dist).
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path

from gocross.errors import BuildFailedError
from gocross.models import BuildConfig, BuildJobResult, DistInfo

log = logging.getLogger(__name__)

WINDOWS_OS = frozenset({"windows", "nt"})
EXE_SUFFIX = ".exe"


def output_filename(binary_name: str, dist: DistInfo) -> str:
    """{binary}-{os}_{arch}, plus .exe for windows/nt."""
    name = f"{binary_name}-{dist.os}_{dist.arch}"
    if dist.os in WINDOWS_OS:
        name += EXE_SUFFIX
    return name


def output_path(config: BuildConfig, dist: DistInfo) -> Path:
    return Path(config.output_dir) / output_filename(config.binary_name, dist)


def _absolute(p: Path | str) -> Path:
    return Path(os.path.abspath(p))


def build_command(config: BuildConfig, dist: DistInfo) -> list[str]:
    """-o and package paths are made absolute; go runs with cwd=project_dir."""
    return [
        config.go,
        "build",
        *config.build_flags,
        "-o",
        str(_absolute(output_path(config, dist))),
        str(_absolute(config.project_dir)),
    ]


def build_env(
    config: BuildConfig, dist: DistInfo, base: Mapping[str, str] | None = None
) -> dict[str, str]:
    """Process environment (or base) with GOOS/GOARCH set for dist; CGO_ENABLED when configured."""
    env = dict(os.environ if base is None else base)
    env.update(dist.env())
    if config.cgo_enabled is not None:
        env["CGO_ENABLED"] = "1" if config.cgo_enabled else "0"
    return env


def build_one(
    config: BuildConfig, dist: DistInfo, logger: logging.Logger | None = None
) -> BuildJobResult:
    """Run one build. Never raises for build failures; they land in result.error."""
    logger = logger or log
    out = _absolute(output_path(config, dist))
    cmd = build_command(config, dist)
    logger.debug("build %s: %s", dist, " ".join(cmd))
    start = time.monotonic()
    try:
        r = subprocess.run(
            cmd,
            cwd=str(_absolute(config.project_dir)),
            env=build_env(config, dist),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except OSError as e:
        return BuildJobResult(
            dist=dist, output_path=out, error=e, duration=time.monotonic() - start
        )
    output = r.stdout or ""
    error = None
    if r.returncode != 0:
        error = BuildFailedError(str(dist), r.returncode, output)
    return BuildJobResult(
        dist=dist,
        output_path=out,
        output=output,
        error=error,
        duration=time.monotonic() - start,
    )


def build_all(
    config: BuildConfig,
    dists: Sequence[DistInfo],
    max_workers: int | None = None,
    on_result: Callable[[BuildJobResult], None] | None = None,
    logger: logging.Logger | None = None,
) -> list[BuildJobResult]:
    """Build every dist concurrently and return one result per dist, in completion order.

    max_workers caps concurrent builds (None = one worker per dist). on_result is called
    from the collecting thread as each job finishes.
    """
    logger = logger or log
    if not dists:
        return []
    if max_workers is not None and max_workers < 1:
        msg = f"max_workers must be >= 1, got {max_workers}"
        raise ValueError(msg)
    _absolute(config.output_dir).mkdir(parents=True, exist_ok=True)
    workers = len(dists) if max_workers is None else min(max_workers, len(dists))
    logger.debug("dispatching %d build(s) on %d worker(s)", len(dists), workers)

    results: list[BuildJobResult] = []
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="gocross-build") as executor:
        futures = {executor.submit(build_one, config, dist, logger): dist for dist in dists}
        for future in as_completed(futures):
            dist = futures[future]
            try:
                result = future.result()
            except Exception as e:
                # build_one handles subprocess errors; this is env or command construction
                logger.exception("build %s crashed", dist)
                result = BuildJobResult(dist=dist, output_path=_absolute(output_path(config, dist)), error=e)
            results.append(result)
            if on_result is not None:
                try:
                    on_result(result)
                except Exception:
                    logger.exception("on_result callback failed for %s", dist)
    return results


@dataclass(frozen=True)
class BuildSummary:
    total: int
    succeeded: int
    failed: int

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def __str__(self) -> str:
        if self.ok:
            return f"{self.succeeded} of {self.total} builds succeeded"
        return f"{self.failed} of {self.total} builds failed"


def summarize(results: Sequence[BuildJobResult]) -> BuildSummary:
    failed = sum(1 for r in results if not r.ok)
    return BuildSummary(total=len(results), succeeded=len(results) - failed, failed=failed)
