"""HTTP utilities."""
