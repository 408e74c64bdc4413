"""
Services module - file staging, validation, persistence and review logic.
"""
