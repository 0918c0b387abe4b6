"""HTTP Schemas."""
