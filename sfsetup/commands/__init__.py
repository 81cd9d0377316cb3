"""sfsetup CLI commands."""
