"""
Database wrapper, its configuration and error types.
"""
