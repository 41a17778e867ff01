"""
Domain layer: business services, repository interfaces and exceptions.
"""
