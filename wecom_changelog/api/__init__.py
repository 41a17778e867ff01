"""
HTTP API layer: routes, dependencies, middleware and request models.
"""
