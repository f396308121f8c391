"""Adapters binding the hydration core to concrete document formats."""
