"""Pytest fixtures for gocross tests."""

import json
from pathlib import Path

import pytest

from gocross.models import BuildConfig, DistInfo

# Example input only, not the real `go tool dist list` output.
SAMPLE_DISTS = [
    DistInfo("windows", "x86", cgo_supported=True, first_class=True),
    DistInfo("darwin", "arm64", cgo_supported=True, first_class=True),
    DistInfo("linux", "x86", cgo_supported=True, first_class=True),
    DistInfo("linux", "arm64", cgo_supported=True, first_class=True),
    DistInfo("bsd", "arm64", cgo_supported=True, first_class=False),
]


@pytest.fixture
def catalog() -> list[DistInfo]:
    return list(SAMPLE_DISTS)


@pytest.fixture
def catalog_json() -> str:
    """SAMPLE_DISTS as `go tool dist list -json` would print them."""
    return json.dumps([d.to_json() for d in SAMPLE_DISTS], indent="\t")


@pytest.fixture
def go_project(tmp_path: Path) -> Path:
    """Minimal Go module directory named myproject."""
    proj = tmp_path / "myproject"
    proj.mkdir()
    (proj / "go.mod").write_text("module example.com/myproject\n\ngo 1.22\n")
    (proj / "main.go").write_text('package main\n\nfunc main() { println("hi") }\n')
    return proj


@pytest.fixture
def build_config(go_project: Path) -> BuildConfig:
    return BuildConfig(
        project_dir=go_project,
        output_dir=go_project / "build",
        binary_name="app",
    )
