"""
Core infrastructure: configuration, logging and application assembly.
"""
