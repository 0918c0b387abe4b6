"""Social Account Controllers."""
