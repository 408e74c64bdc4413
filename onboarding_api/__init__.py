"""
Employee Onboarding API
Stores onboarding form submissions and serves them for review.

Architecture:
- PostgreSQL: employees plus seven dependent tables, written in one transaction
- Upload directory: ID proofs, signatures, education / employment documents
"""

__version__ = "1.0.0"
