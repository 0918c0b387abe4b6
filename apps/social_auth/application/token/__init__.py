"""Social token lifecycle."""
