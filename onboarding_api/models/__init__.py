"""
Models module - record types for the onboarding tables.
"""
from onboarding_api.models.records import (
    AddressRecord,
    BankDetailsRecord,
    EducationRecord,
    EmployeeRecord,
    EmploymentHistoryRecord,
    GovernmentIdsRecord,
    PreviousEmploymentRecord,
    SignatureRecord,
    TableRecord,
)

__all__ = [
    "AddressRecord",
    "BankDetailsRecord",
    "EducationRecord",
    "EmployeeRecord",
    "EmploymentHistoryRecord",
    "GovernmentIdsRecord",
    "PreviousEmploymentRecord",
    "SignatureRecord",
    "TableRecord",
]
