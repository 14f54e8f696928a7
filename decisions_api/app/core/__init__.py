"""
Core application services: configuration and logging.
"""
