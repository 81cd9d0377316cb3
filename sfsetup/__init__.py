"""sfsetup - guided Site Factory local environment onboarding."""

__version__ = "1.0.0"
