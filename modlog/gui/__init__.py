"""modlog.gui package."""
