"""Main CLI entry point for gocross."""

import sys

from gocross.cli import build as build_cli
from gocross.cli import dists as dists_cli


def main() -> None:
    """Main CLI entry point."""
    if len(sys.argv) < 2:
        print("Usage: gocross <command> [args...]", file=sys.stderr)
        print("Commands:", file=sys.stderr)
        print(
            "  build [--target OS[/ARCH]]... [-o DIR] [-n NAME] [-v] [PROJECT_DIR]"
            "  - Cross-compile for every matching go dist",
            file=sys.stderr,
        )
        print(
            "  dists [--target OS[/ARCH]]... [--json] [--first-class]"
            "  - List go dists supported by the toolchain",
            file=sys.stderr,
        )
        sys.exit(1)

    command = sys.argv[1]

    if command == "build":
        build_cli.run_build_argv()
    elif command == "dists":
        dists_cli.run_dists_argv()
    else:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
