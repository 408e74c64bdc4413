import json

import pytest

from factories import make_form
from onboarding_api.core.exceptions import FormValidationError
from onboarding_api.schemas.schemas import EmploymentStatus
from onboarding_api.services.file_storage import StoredFile, UploadBatch
from onboarding_api.services.form_validation import validate_submission


def batch_with(*fields) -> UploadBatch:
    batch = UploadBatch("staging", "uploads")
    for i, field in enumerate(fields):
        name = f"{i}.pdf"
        batch.files.append(StoredFile(field, name, name, f"staging/{name}", f"uploads/{name}"))
    return batch


@pytest.fixture
def full_batch():
    return batch_with("aadhaarFile", "panFile", "signatureFile")


def violation_fields(exc_info) -> set:
    return {v["field"] for v in exc_info.value.violations}


def test_valid_form_is_parsed_and_normalized(full_batch):
    form = validate_submission(make_form(employmentStatus="  EXPERIENCED "), full_batch)

    assert form.employment_status == EmploymentStatus.experienced
    assert form.is_experienced
    assert form.full_name == "Priya Sharma"
    assert form.bank_name == "HDFC Bank"
    assert form.date_of_birth.isoformat() == "1994-03-15"
    assert len(form.education_details) == 2
    assert form.employment_details[0].company_name == "Infosys"
    assert form.employment_details[0].start_date.isoformat() == "2016-07-01"


def test_blank_optional_fields_become_none(full_batch):
    form = validate_submission(make_form(alternateNumber="  ", pfNo=""), full_batch)

    assert form.alternate_number is None
    assert form.pf_no is None
    assert form.uan_no == "100200300400"


def test_numeric_json_values_are_kept_as_text(full_batch):
    form = validate_submission(make_form(), full_batch)

    assert form.education_details[1].year == "2012"


@pytest.mark.parametrize("raw, expected", [("on", True), ("TRUE", True), ("yes", True), ("off", False), ("", False)])
def test_consent_checkbox(full_batch, raw, expected):
    form = validate_submission(make_form(consentCheckbox=raw), full_batch)
    assert form.consent_checkbox is expected


def test_missing_consent_means_no_consent(full_batch):
    form = validate_submission(make_form(consentCheckbox=None), full_batch)
    assert form.consent_checkbox is False


def test_every_violation_is_reported_at_once():
    with pytest.raises(FormValidationError) as exc_info:
        validate_submission({}, batch_with())

    fields = violation_fields(exc_info)
    for expected in ("fullName", "email", "employmentStatus", "bankNameAsPerForm",
                     "educationDetails", "aadhaarFile", "panFile", "signatureFile"):
        assert expected in fields
    assert "pfNo" not in fields
    assert "alternateNumber" not in fields


def test_blank_required_field_is_a_violation(full_batch):
    with pytest.raises(FormValidationError) as exc_info:
        validate_submission(make_form(fullName="   ", ifscCode=""), full_batch)

    assert violation_fields(exc_info) == {"fullName", "ifscCode"}
    assert exc_info.value.violations[0]["message"] == "This field is required"


def test_unknown_employment_status_is_rejected(full_batch):
    with pytest.raises(FormValidationError) as exc_info:
        validate_submission(make_form(employmentStatus="intern"), full_batch)

    assert violation_fields(exc_info) == {"employmentStatus"}


def test_malformed_education_json_is_a_client_error(full_batch):
    with pytest.raises(FormValidationError) as exc_info:
        validate_submission(make_form(educationDetails="[{level: oops"), full_batch)

    assert violation_fields(exc_info) == {"educationDetails"}


def test_nested_entry_errors_point_at_the_entry(full_batch):
    education = json.dumps([{"level": "Graduation"}, {"stream": "Arts"}])

    with pytest.raises(FormValidationError) as exc_info:
        validate_submission(make_form(educationDetails=education), full_batch)

    assert violation_fields(exc_info) == {"educationDetails[1].level"}


def test_empty_education_list_is_accepted(full_batch):
    form = validate_submission(make_form(educationDetails="[]"), full_batch)

    assert form.education_details == []


def test_experienced_with_no_employment_entries_is_accepted(full_batch):
    form = validate_submission(make_form(employmentDetails="[]"), full_batch)

    assert form.is_experienced
    assert form.employment_details == []


def test_fresher_does_not_need_employment_entries(full_batch):
    form = validate_submission(make_form(employmentStatus="fresher", employmentDetails=""), full_batch)

    assert form.employment_status == EmploymentStatus.fresher
    assert form.employment_details == []


def test_invalid_email_is_rejected(full_batch):
    with pytest.raises(FormValidationError) as exc_info:
        validate_submission(make_form(email="not-an-email"), full_batch)

    assert violation_fields(exc_info) == {"email"}
    assert exc_info.value.violations[0]["message"].startswith("value is not a valid email address")


def test_email_is_kept_as_typed(full_batch):
    form = validate_submission(make_form(email="Priya.Sharma@Example.COM"), full_batch)

    assert form.email == "Priya.Sharma@Example.COM"


def test_missing_signature_file_is_reported(full_batch):
    with pytest.raises(FormValidationError) as exc_info:
        validate_submission(make_form(), batch_with("aadhaarFile", "panFile"))

    assert violation_fields(exc_info) == {"signatureFile"}
