"""Core hydration primitives independent of the CLI."""
