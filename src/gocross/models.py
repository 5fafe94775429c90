"""Value types shared by the target filter, toolchain inspector, and build dispatcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from gocross.errors import CatalogParseError


@dataclass(frozen=True)
class TargetFilter:
    """One user request: an OS, optionally narrowed to one architecture ("" = any)."""

    os: str
    arch: str = ""

    def __str__(self) -> str:
        return f"{self.os}/{self.arch}" if self.arch else self.os


@dataclass(frozen=True)
class DistInfo:
    """One OS/ARCH combination supported by the toolchain (`go tool dist list -json` entry)."""

    os: str
    arch: str
    cgo_supported: bool = False
    first_class: bool = False

    @classmethod
    def from_json(cls, data: Any) -> DistInfo:
        """Build from one catalog object. Raises CatalogParseError on wrong shape or missing keys."""
        if not isinstance(data, dict):
            msg = f"catalog entry is not an object: {data!r}"
            raise CatalogParseError(msg)
        missing = [k for k in ("GOOS", "GOARCH") if k not in data]
        if missing:
            msg = f"catalog entry missing {', '.join(missing)}: {data!r}"
            raise CatalogParseError(msg)
        goos, goarch = data["GOOS"], data["GOARCH"]
        if not isinstance(goos, str) or not isinstance(goarch, str):
            msg = f"GOOS/GOARCH must be strings: {data!r}"
            raise CatalogParseError(msg)
        for key in ("CgoSupported", "FirstClass"):
            if key in data and not isinstance(data[key], bool):
                msg = f"{key} must be a bool: {data!r}"
                raise CatalogParseError(msg)
        return cls(
            os=goos,
            arch=goarch,
            cgo_supported=data.get("CgoSupported", False),
            first_class=data.get("FirstClass", False),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "GOOS": self.os,
            "GOARCH": self.arch,
            "CgoSupported": self.cgo_supported,
            "FirstClass": self.first_class,
        }

    def env(self) -> dict[str, str]:
        """Environment overrides selecting this target for `go build`."""
        return {"GOOS": self.os, "GOARCH": self.arch}

    def __str__(self) -> str:
        return f"{self.os}/{self.arch}"


@dataclass(frozen=True)
class BuildConfig:
    """Parameters of one invocation. Shared read-only by every build job."""

    project_dir: Path
    output_dir: Path
    binary_name: str
    targets: tuple[TargetFilter, ...] = ()
    go: str = "go"
    build_flags: tuple[str, ...] = ()
    cgo_enabled: bool | None = None

    @classmethod
    def default(cls) -> BuildConfig:
        return cls(project_dir=Path("./"), output_dir=Path("./build"), binary_name="build")


@dataclass
class BuildJobResult:
    """Outcome of one dispatched build. error is None on success."""

    dist: DistInfo
    output_path: Path
    output: str = ""
    error: Exception | None = None
    duration: float = field(default=0.0, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None
