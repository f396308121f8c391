"""Built-in page rules."""
