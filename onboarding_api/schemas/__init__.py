"""
Schemas module - Request/Response schemas for API endpoints.

Difference from models:
- Models: one record type per table (snake_case, what gets INSERTed)
- Schemas: API contract (camelCase, what clients send/receive)
"""
