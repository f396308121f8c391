"""User interfaces built on top of the hydration pipeline."""
