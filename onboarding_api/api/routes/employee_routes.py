"""
Employee Routes

GET /employees - All submissions, denormalized
PUT /employees/{employee_id}/status - Update review status
DELETE /employees - Clear every record and uploaded file
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from onboarding_api.api.deps import get_app_settings, get_database, get_file_url_builder
from onboarding_api.core.config import Settings
from onboarding_api.core.exceptions import OnboardingError
from onboarding_api.db.postgres import Database
from onboarding_api.schemas.converters import UrlBuilder
from onboarding_api.schemas.schemas import ClearResponse, EmployeeResponse, MessageResponse, StatusUpdate
from onboarding_api.services import employee_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["Employees"])


def _database_error(message: str, e: SQLAlchemyError, settings: Settings) -> OnboardingError:
    logger.exception(message)
    return OnboardingError(message, status_code=500, details=str(e) if settings.debug else None)


@router.get("", response_model=List[EmployeeResponse])
def get_employees(
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
    file_url: UrlBuilder = Depends(get_file_url_builder),
):
    """
    Get every employee with government IDs, address, bank, signature,
    education and employment history. File paths come back as URLs.
    """
    try:
        return employee_service.list_employees(database, file_url)
    except SQLAlchemyError as e:
        raise _database_error("Database query error", e, settings)


@router.put("/{employee_id}/status", response_model=MessageResponse)
def update_employee_status(
    employee_id: int,
    update: StatusUpdate,
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
):
    """Update review status. Succeeds even when no employee matched."""
    try:
        employee_service.update_status(database, employee_id, update.status)
    except SQLAlchemyError as e:
        raise _database_error("Error updating status", e, settings)

    return MessageResponse(message="Status updated successfully")


@router.delete("", response_model=ClearResponse)
def clear_employees(
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
):
    """Delete ALL onboarding records and uploaded files. Irreversible."""
    try:
        removed = employee_service.clear_all(database, settings.upload_dir)
    except SQLAlchemyError as e:
        raise _database_error("Error clearing records", e, settings)

    return ClearResponse(message="All records cleared successfully", filesRemoved=removed)
