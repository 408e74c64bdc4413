"""
Onboarding Routes

POST /submit-onboarding - Submit the onboarding form (multipart)
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from onboarding_api.api.deps import get_app_settings, get_database, get_upload_rules
from onboarding_api.core.config import Settings
from onboarding_api.core.exceptions import OnboardingError, UploadRejected
from onboarding_api.db.postgres import Database
from onboarding_api.schemas.schemas import SubmitResponse
from onboarding_api.services.file_storage import UploadBatch, intake_form
from onboarding_api.services.form_validation import validate_submission
from onboarding_api.services.onboarding_service import submit_onboarding
from onboarding_api.utils.file_upload import UploadRules

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Onboarding"])


@router.post("/submit-onboarding", response_model=SubmitResponse)
async def submit_onboarding_form(
    request: Request,
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
    rules: UploadRules = Depends(get_upload_rules),
):
    """
    Submit the complete onboarding form.

    Multipart fields:
    - scalar personal / ID / address / bank fields (camelCase)
    - educationDetails, employmentDetails: JSON arrays
    - aadhaarFile, panFile, signatureFile: one file each (required)
    - educationDocs, employmentDocs: up to max_multi_file_count files each

    Process:
    1. Stage uploaded files (type / size / count checks)
    2. Validate the form
    3. Insert every table in one transaction, promote files on success
    """
    batch = UploadBatch(settings.staging_dir, settings.upload_dir)
    try:
        # Closing the form releases the spooled upload temp files
        async with request.form() as form_data:
            values = await intake_form(form_data, rules, batch)
            form = validate_submission(values, batch)
            employee_id = await run_in_threadpool(submit_onboarding, database, form, batch)
    except UploadRejected as e:
        logger.info("Rejected upload on field %s: %s", e.field, e.message)
        await run_in_threadpool(batch.discard)
        raise
    except OnboardingError:
        await run_in_threadpool(batch.discard)
        raise
    except SQLAlchemyError as e:
        logger.exception("Error submitting onboarding form")
        await run_in_threadpool(batch.discard)
        raise OnboardingError(
            "Error submitting form",
            status_code=500,
            details=str(e) if settings.debug else None
        )
    except Exception:
        await run_in_threadpool(batch.discard)
        raise

    return SubmitResponse(message="Form submitted successfully", employeeId=employee_id)
