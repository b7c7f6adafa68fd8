"""Asset contract timeline sources."""
