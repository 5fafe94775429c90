"""Cross-compile one Go project for many OS/ARCH targets in parallel."""

from .dispatch import build_all, build_one, output_filename, output_path, summarize
from .models import BuildConfig, BuildJobResult, DistInfo, TargetFilter
from .targets import parse_target, resolve
from .toolchain import build_options, fetch_catalog

__all__ = [
    "BuildConfig",
    "BuildJobResult",
    "DistInfo",
    "TargetFilter",
    "build_all",
    "build_one",
    "build_options",
    "fetch_catalog",
    "output_filename",
    "output_path",
    "parse_target",
    "resolve",
    "summarize",
]
