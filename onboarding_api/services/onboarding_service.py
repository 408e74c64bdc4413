"""
Onboarding Service - persists one submission.

All eight tables are written inside a single transaction:
1. INSERT employees ... RETURNING id
2. one row per one-to-one table (government_ids, previous_employment,
   addresses, bank_details, signatures)
3. one row per education entry, one per employment entry (experienced only)

The staged files are promoted into the upload directory right before the
commit. If anything fails the transaction rolls back and every file
written for the request is removed.
"""

import logging

from onboarding_api.db.postgres import Database
from onboarding_api.schemas.converters import dependent_records, employee_record
from onboarding_api.schemas.schemas import OnboardingForm
from onboarding_api.services.file_storage import UploadBatch

logger = logging.getLogger(__name__)


def submit_onboarding(database: Database, form: OnboardingForm, batch: UploadBatch) -> int:
    """
    Store a validated submission and return the new employee id.

    Blocking: call through run_in_threadpool from async routes.
    """
    try:
        with database.session() as db:
            employee = employee_record(form)
            result = db.execute(employee.insert_sql(returning="id"), employee.params())
            employee_id = result.scalar_one()

            records = dependent_records(form, batch, employee_id)
            for record in records:
                db.execute(record.insert_sql(), record.params())

            # Rows now point at the final paths, move the files there before COMMIT
            batch.promote()
    except Exception:
        batch.discard()
        raise

    logger.info(
        "Stored onboarding submission for employee %s (%s, %d rows, %d files)",
        employee_id, form.employment_status.value, len(records) + 1, len(batch.files)
    )
    return employee_id
