"""
Messaging platform integrations.
"""
