"""
Asset contract timeline engine.

Turns a multilingual hardware asset export (headers + rows) into a
location → product → asset hierarchy, a flat Gantt task list and the
two-row calendar axis used to render it.
"""
