"""Command-line entry points: `gocross build`, `gocross dists`."""
