"""Error kinds raised by gocross. CLI treats all but InvalidTargetError and BuildFailedError as fatal."""

from __future__ import annotations

from collections.abc import Iterable


class GocrossError(Exception):
    """Base for every gocross error."""


class InvalidTargetError(GocrossError, ValueError):
    """A raw OS[/ARCH] string is empty or has more than one '/'."""


class ToolchainQueryError(GocrossError, RuntimeError):
    """`go tool dist list` could not be launched, timed out, or exited non-zero."""


class CatalogParseError(GocrossError, ValueError):
    """The toolchain catalog output is not the expected JSON."""


class UnsupportedTargetError(GocrossError):
    """Filters were given but no catalog entry matched any of them."""

    def __init__(self, targets: Iterable[str]) -> None:
        self.targets = list(targets)
        joined = ", ".join(self.targets) if self.targets else "(none)"
        super().__init__(f"no supported go dist matches target(s): {joined}")


class BuildFailedError(GocrossError):
    """`go build` exited non-zero for one target."""

    def __init__(self, target: str, returncode: int, output: str = "") -> None:
        self.target = target
        self.returncode = returncode
        self.output = output
        super().__init__(f"build failed for {target} (exit {returncode})")


class ProjectNameError(GocrossError):
    """The project name could not be derived from the project path."""


class ConfigError(GocrossError, ValueError):
    """gocross.yaml is malformed or holds a value of the wrong type."""
