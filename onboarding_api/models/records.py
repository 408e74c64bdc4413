"""
Row types, one per onboarding table.

Field names are the snake_case column names, so model_dump() is the
bind-parameter dict for the INSERT built by insert_sql().
"""

from typing import ClassVar, Optional

from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.sql.elements import TextClause


class TableRecord(BaseModel):
    __tablename__: ClassVar[str]

    @classmethod
    def columns(cls) -> list:
        return list(cls.model_fields)

    @classmethod
    def insert_sql(cls, returning: Optional[str] = None) -> TextClause:
        columns = cls.columns()
        sql = (
            f"INSERT INTO {cls.__tablename__} ({', '.join(columns)}) "
            f"VALUES ({', '.join(':' + c for c in columns)})"
        )
        if returning:
            sql += f" RETURNING {returning}"
        return text(sql)

    def params(self) -> dict:
        return self.model_dump()


class EmployeeRecord(TableRecord):
    __tablename__ = "employees"

    full_name: str
    email: str
    phone_no: str
    alternate_number: Optional[str] = None
    guardian_name: str
    guardian_contact: str
    marital_status: str
    gender: str
    blood_group: str
    # ISO text; both PostgreSQL and SQLite cast it into the DATE column
    date_of_birth: str
    employment_status: str


class GovernmentIdsRecord(TableRecord):
    __tablename__ = "government_ids"

    employee_id: int
    aadhar_no: str
    aadhar_file: Optional[str] = None
    pan_no: str
    pan_file: Optional[str] = None


class PreviousEmploymentRecord(TableRecord):
    __tablename__ = "previous_employment"

    employee_id: int
    pf_no: Optional[str] = None
    uan_no: Optional[str] = None


class AddressRecord(TableRecord):
    __tablename__ = "addresses"

    employee_id: int
    current_address: str
    current_city: str
    current_state: str
    current_pincode: str
    permanent_address: str
    permanent_city: str
    permanent_state: str
    permanent_pincode: str


class BankDetailsRecord(TableRecord):
    __tablename__ = "bank_details"

    employee_id: int
    bank_name: str
    account_no: str
    ifsc_code: str
    branch_name: str


class EducationRecord(TableRecord):
    __tablename__ = "education"

    employee_id: int
    level: str
    stream: Optional[str] = None
    institution: Optional[str] = None
    year: Optional[str] = None
    score: Optional[str] = None
    doc_path: Optional[str] = None


class EmploymentHistoryRecord(TableRecord):
    __tablename__ = "employment_history"

    employee_id: int
    company_name: str
    designation: Optional[str] = None
    last_project: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    doc_path: Optional[str] = None


class SignatureRecord(TableRecord):
    __tablename__ = "signatures"

    employee_id: int
    signature_file: Optional[str] = None
    consent: bool = False
