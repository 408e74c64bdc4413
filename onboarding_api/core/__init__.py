"""
Core module - configuration, logging and error types.
"""
