"""modlog.core package."""
