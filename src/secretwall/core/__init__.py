"""Cross-cutting infrastructure: logging and error handling."""
