"""
Conversion between the wire schemas (camelCase, schemas.py) and the
table records (snake_case, models/records.py).
"""

import os
from datetime import date
from typing import Callable, Dict, List, Optional

from onboarding_api.models.records import (
    AddressRecord, BankDetailsRecord, EducationRecord, EmployeeRecord, EmploymentHistoryRecord,
    GovernmentIdsRecord, PreviousEmploymentRecord, SignatureRecord, TableRecord
)
from onboarding_api.schemas.schemas import (
    EducationResponse, EmployeeResponse, EmploymentResponse, OnboardingForm, ReviewStatus
)
from onboarding_api.services.file_storage import UploadBatch

UrlBuilder = Callable[[Optional[str]], Optional[str]]


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def _doc_at(paths: List[str], index: int) -> Optional[str]:
    return paths[index] if index < len(paths) else None


# ============================================================
# FORM -> RECORDS
# ============================================================

def employee_record(form: OnboardingForm) -> EmployeeRecord:
    return EmployeeRecord(
        full_name=form.full_name,
        email=form.email,
        phone_no=form.phone_no,
        alternate_number=form.alternate_number,
        guardian_name=form.guardian_name,
        guardian_contact=form.guardian_contact,
        marital_status=form.marital_status,
        gender=form.gender,
        blood_group=form.blood_group,
        date_of_birth=form.date_of_birth.isoformat(),
        employment_status=form.employment_status.value,
    )


def dependent_records(form: OnboardingForm, batch: UploadBatch, employee_id: int) -> List[TableRecord]:
    """
    Every row that hangs off the employee, in insert order.

    The i-th educationDocs / employmentDocs file belongs to the i-th
    entry; entries without a matching file get no document. Employment
    rows are only produced for experienced hires.
    """
    records: List[TableRecord] = [
        GovernmentIdsRecord(
            employee_id=employee_id,
            aadhar_no=form.aadhar_no,
            aadhar_file=batch.final_path("aadhaarFile"),
            pan_no=form.pan_no,
            pan_file=batch.final_path("panFile"),
        ),
        PreviousEmploymentRecord(employee_id=employee_id, pf_no=form.pf_no, uan_no=form.uan_no),
        AddressRecord(
            employee_id=employee_id,
            current_address=form.current_address,
            current_city=form.current_city,
            current_state=form.current_state,
            current_pincode=form.current_pincode,
            permanent_address=form.permanent_address,
            permanent_city=form.permanent_city,
            permanent_state=form.permanent_state,
            permanent_pincode=form.permanent_pincode,
        ),
        BankDetailsRecord(
            employee_id=employee_id,
            bank_name=form.bank_name,
            account_no=form.account_no,
            ifsc_code=form.ifsc_code,
            branch_name=form.branch_name,
        ),
    ]

    education_docs = [f.final_path for f in batch.files_for("educationDocs")]
    for i, entry in enumerate(form.education_details):
        records.append(EducationRecord(
            employee_id=employee_id,
            level=entry.level,
            stream=entry.stream,
            institution=entry.institution,
            year=entry.year,
            score=entry.score,
            doc_path=_doc_at(education_docs, i),
        ))

    if form.is_experienced:
        employment_docs = [f.final_path for f in batch.files_for("employmentDocs")]
        for i, entry in enumerate(form.employment_details):
            records.append(EmploymentHistoryRecord(
                employee_id=employee_id,
                company_name=entry.company_name,
                designation=entry.designation,
                last_project=entry.last_project,
                start_date=_iso(entry.start_date),
                end_date=_iso(entry.end_date),
                doc_path=_doc_at(employment_docs, i),
            ))

    records.append(SignatureRecord(
        employee_id=employee_id,
        signature_file=batch.final_path("signatureFile"),
        consent=form.consent_checkbox,
    ))
    return records


# ============================================================
# ROWS -> EMPLOYEE VIEW
# ============================================================

def file_url_builder(url_prefix: str) -> UrlBuilder:
    """Stored path -> '<prefix>/<basename>', None stays None."""
    prefix = url_prefix.rstrip("/")

    def build(path: Optional[str]) -> Optional[str]:
        if not path:
            return None
        return f"{prefix}/{os.path.basename(path)}"

    return build


def education_from_row(row: dict, file_url: UrlBuilder) -> EducationResponse:
    return EducationResponse(
        level=row["level"],
        stream=row["stream"],
        institution=row["institution"],
        year=row["year"],
        score=row["score"],
        doc=file_url(row["doc_path"]),
    )


def employment_from_row(row: dict, file_url: UrlBuilder) -> EmploymentResponse:
    return EmploymentResponse(
        company_name=row["company_name"],
        designation=row["designation"],
        last_project=row["last_project"],
        start_date=row["start_date"],
        end_date=row["end_date"],
        doc=file_url(row["doc_path"]),
    )


def employee_from_row(
    row: dict,
    education: List[EducationResponse],
    employment: List[EmploymentResponse],
    file_url: UrlBuilder,
) -> EmployeeResponse:
    return EmployeeResponse(
        id=row["id"],
        full_name=row["full_name"],
        email=row["email"],
        phone_no=row["phone_no"],
        alternate_number=row["alternate_number"],
        guardian_name=row["guardian_name"],
        guardian_contact=row["guardian_contact"],
        marital_status=row["marital_status"],
        gender=row["gender"],
        blood_group=row["blood_group"],
        date_of_birth=row["date_of_birth"],
        employment_status=row["employment_status"],
        aadhar_no=row["aadhar_no"],
        aadhar_file=file_url(row["aadhar_file"]),
        pan_no=row["pan_no"],
        pan_file=file_url(row["pan_file"]),
        pf_no=row["pf_no"],
        uan_no=row["uan_no"],
        current_address=row["current_address"],
        current_city=row["current_city"],
        current_state=row["current_state"],
        current_pincode=row["current_pincode"],
        permanent_address=row["permanent_address"],
        permanent_city=row["permanent_city"],
        permanent_state=row["permanent_state"],
        permanent_pincode=row["permanent_pincode"],
        bank_name=row["bank_name"],
        account_no=row["account_no"],
        ifsc_code=row["ifsc_code"],
        branch_name=row["branch_name"],
        signature=file_url(row["signature_file"]),
        consent=row["consent"],
        status=row["status"] or ReviewStatus.pending.value,
        education_details=education,
        employment_details=employment,
    )


def group_by_employee(rows: List[dict]) -> Dict[int, List[dict]]:
    grouped: Dict[int, List[dict]] = {}
    for row in rows:
        grouped.setdefault(row["employee_id"], []).append(row)
    return grouped
