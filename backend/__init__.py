"""
Timeline Backend - HTTP adapter for the asset contract timeline.

This package provides a FastAPI backend that accepts decoded asset export
rows and returns timeline snapshots in the format expected by the
Gantt renderer.
"""
