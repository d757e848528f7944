"""modlog.gui.widgets package."""
