"""
Table definitions for the onboarding schema.

Declared with SQLAlchemy Core so the same DDL runs on PostgreSQL and on
the SQLite databases used by the tests. Queries stay hand-written SQL.

    employees 1--1 government_ids
              1--1 previous_employment
              1--1 addresses
              1--1 bank_details
              1--1 signatures
              1--* education
              1--* employment_history
"""

from sqlalchemy import (
    Boolean, Column, Date, DateTime, ForeignKey, Integer, MetaData, String, Table, Text, func
)

metadata = MetaData()


def _employee_fk() -> Column:
    return Column(
        "employee_id", Integer,
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False, index=True
    )


employees = Table(
    "employees", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("full_name", String(150), nullable=False),
    Column("email", String(150), nullable=False),
    Column("phone_no", String(20), nullable=False),
    Column("alternate_number", String(20)),
    Column("guardian_name", String(150)),
    Column("guardian_contact", String(20)),
    Column("marital_status", String(20)),
    Column("gender", String(20)),
    Column("blood_group", String(10)),
    Column("date_of_birth", Date),
    Column("employment_status", String(20), nullable=False),
    Column("created_at", DateTime, server_default=func.now()),
)

government_ids = Table(
    "government_ids", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    _employee_fk(),
    Column("aadhar_no", String(20), nullable=False),
    Column("aadhar_file", String(500)),
    Column("pan_no", String(20), nullable=False),
    Column("pan_file", String(500)),
)

previous_employment = Table(
    "previous_employment", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    _employee_fk(),
    Column("pf_no", String(50)),
    Column("uan_no", String(50)),
)

addresses = Table(
    "addresses", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    _employee_fk(),
    Column("current_address", Text),
    Column("current_city", String(100)),
    Column("current_state", String(100)),
    Column("current_pincode", String(10)),
    Column("permanent_address", Text),
    Column("permanent_city", String(100)),
    Column("permanent_state", String(100)),
    Column("permanent_pincode", String(10)),
)

bank_details = Table(
    "bank_details", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    _employee_fk(),
    Column("bank_name", String(150)),
    Column("account_no", String(34)),
    Column("ifsc_code", String(11)),
    Column("branch_name", String(150)),
)

education = Table(
    "education", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    _employee_fk(),
    Column("level", String(100), nullable=False),
    Column("stream", String(150)),
    Column("institution", String(200)),
    Column("year", String(10)),
    Column("score", String(20)),
    Column("doc_path", String(500)),
)

employment_history = Table(
    "employment_history", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    _employee_fk(),
    Column("company_name", String(200), nullable=False),
    Column("designation", String(150)),
    Column("last_project", String(200)),
    Column("start_date", Date),
    Column("end_date", Date),
    Column("doc_path", String(500)),
)

signatures = Table(
    "signatures", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    _employee_fk(),
    Column("signature_file", String(500)),
    Column("consent", Boolean, nullable=False, default=False),
    Column("status", String(20), server_default="pending"),
)

# Children before parent, the order bulk delete must follow
DELETE_ORDER = [
    "signatures",
    "employment_history",
    "education",
    "bank_details",
    "addresses",
    "previous_employment",
    "government_ids",
    "employees",
]
