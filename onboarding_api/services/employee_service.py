"""
Employee Service - review side of the onboarding data.

- list_employees: denormalized view of every submission
- update_status: set the review status on the signature row
- clear_all: wipe every table and the upload directory
"""

import logging
from typing import List

from sqlalchemy import text

from onboarding_api.db.postgres import Database
from onboarding_api.db.tables import DELETE_ORDER
from onboarding_api.schemas.converters import (
    UrlBuilder, education_from_row, employee_from_row, employment_from_row, group_by_employee
)
from onboarding_api.schemas.schemas import EmployeeResponse
from onboarding_api.services.file_storage import clear_directory

logger = logging.getLogger(__name__)

# One-to-one tables are LEFT JOINed so an employee with a missing
# dependent row still shows up, with nulls in those columns.
EMPLOYEES_SQL = """
    SELECT
        e.id, e.full_name, e.email, e.phone_no, e.alternate_number, e.guardian_name,
        e.guardian_contact, e.marital_status, e.gender, e.blood_group, e.date_of_birth,
        e.employment_status,
        g.aadhar_no, g.aadhar_file, g.pan_no, g.pan_file,
        p.pf_no, p.uan_no,
        a.current_address, a.current_city, a.current_state, a.current_pincode,
        a.permanent_address, a.permanent_city, a.permanent_state, a.permanent_pincode,
        b.bank_name, b.account_no, b.ifsc_code, b.branch_name,
        s.signature_file, s.consent, s.status
    FROM employees e
    LEFT JOIN government_ids g ON e.id = g.employee_id
    LEFT JOIN previous_employment p ON e.id = p.employee_id
    LEFT JOIN addresses a ON e.id = a.employee_id
    LEFT JOIN bank_details b ON e.id = b.employee_id
    LEFT JOIN signatures s ON e.id = s.employee_id
    ORDER BY e.id
"""

# Fetched separately and grouped in memory: joining one-to-many rows
# would repeat every one-to-one column per entry.
EDUCATION_SQL = "SELECT * FROM education ORDER BY employee_id, id"
EMPLOYMENT_SQL = "SELECT * FROM employment_history ORDER BY employee_id, id"


def list_employees(database: Database, file_url: UrlBuilder) -> List[EmployeeResponse]:
    employees = database.execute_raw_sql(EMPLOYEES_SQL)
    education = group_by_employee(database.execute_raw_sql(EDUCATION_SQL))
    employment = group_by_employee(database.execute_raw_sql(EMPLOYMENT_SQL))

    return [
        employee_from_row(
            row,
            [education_from_row(r, file_url) for r in education.get(row["id"], [])],
            [employment_from_row(r, file_url) for r in employment.get(row["id"], [])],
            file_url,
        )
        for row in employees
    ]


def update_status(database: Database, employee_id: int, status: str) -> int:
    """Set signatures.status for one employee. Returns the number of rows touched."""
    with database.session() as db:
        result = db.execute(
            text("UPDATE signatures SET status = :status WHERE employee_id = :id"),
            {"status": status, "id": employee_id}
        )
        updated = result.rowcount

    logger.info("Status of employee %s set to %r (%d row(s))", employee_id, status, updated)
    return updated


def clear_all(database: Database, upload_dir: str) -> int:
    """
    Delete every row of every onboarding table, then every uploaded file.

    Rows go in one transaction; files are removed after the commit and a
    failed unlink is only logged. Returns the number of files removed.
    """
    with database.session() as db:
        for table in DELETE_ORDER:
            db.execute(text(f"DELETE FROM {table}"))

    removed = clear_directory(upload_dir)
    logger.info("Cleared all onboarding records and %d uploaded file(s)", removed)
    return removed
