"""Service setup (config, DI, logging)."""
