import asyncio
import io
import os
import re

import pytest
from starlette.datastructures import Headers, UploadFile

from onboarding_api.core.config import Settings
from onboarding_api.core.exceptions import UploadRejected
from onboarding_api.services.file_storage import UploadBatch, clear_directory
from onboarding_api.utils.file_upload import (
    UploadRules, check_field_count, check_file_size, check_file_type, generate_stored_name,
    get_file_extension, get_supported_formats
)


@pytest.fixture
def rules():
    return UploadRules.from_settings(Settings(_env_file=None, max_upload_size_mb=1))


def make_upload(filename: str, content: bytes, content_type: str = "application/pdf") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


# ============================================================
# RULES
# ============================================================

def test_get_file_extension():
    assert get_file_extension("Scan.PDF") == ".pdf"
    assert get_file_extension("archive.tar.gz") == ".gz"
    assert get_file_extension("README") == ""
    assert get_file_extension("report.v2/final") == ""
    assert get_file_extension("../../etc/passwd") == ""
    assert get_file_extension("scan.p@d f") == ".pdf"


def test_stored_name_keeps_extension_and_is_unique():
    first = generate_stored_name("My Aadhaar.JPG")
    second = generate_stored_name("My Aadhaar.JPG")

    assert re.fullmatch(r"\d{13}-[0-9a-f]{8}\.jpg", first)
    assert first != second


def test_stored_name_never_contains_a_path():
    for filename in ("report.v2/final", "dir/sub/scan.pdf", "C:\\Users\\me\\pan.PNG"):
        stored = generate_stored_name(filename)

        assert re.fullmatch(r"\d{13}-[0-9a-f]{8}(\.[a-z0-9]+)?", stored), stored


def test_allowed_types_pass(rules):
    check_file_type(rules, "aadhaarFile", "aadhaar.pdf", "application/pdf")
    check_file_type(rules, "signatureFile", "sign.JPEG", "image/jpeg")
    check_file_type(rules, "panFile", "pan.png", "image/png; charset=binary")


def test_disallowed_extension_names_the_field(rules):
    with pytest.raises(UploadRejected) as exc_info:
        check_file_type(rules, "panFile", "pan.exe", "application/pdf")

    assert exc_info.value.field == "panFile"
    assert exc_info.value.status_code == 400


def test_mismatched_mime_type_is_rejected(rules):
    with pytest.raises(UploadRejected):
        check_file_type(rules, "aadhaarFile", "aadhaar.pdf", "text/html")


def test_accept_all_variant_skips_type_and_size_checks():
    rules = UploadRules.from_settings(Settings(_env_file=None, enforce_upload_rules=False))

    check_file_type(rules, "aadhaarFile", "aadhaar.docx", "application/msword")
    check_file_size(rules, "aadhaarFile", 50 * 1024 * 1024)


def test_field_counts(rules):
    check_field_count(rules, "educationDocs", 10)

    with pytest.raises(UploadRejected) as exc_info:
        check_field_count(rules, "educationDocs", 11)
    assert exc_info.value.field == "educationDocs"

    with pytest.raises(UploadRejected):
        check_field_count(rules, "signatureFile", 2)

    with pytest.raises(UploadRejected) as exc_info:
        check_field_count(rules, "resume", 1)
    assert "Unexpected file field" in exc_info.value.message


def test_size_limit(rules):
    check_file_size(rules, "panFile", 1024 * 1024)
    with pytest.raises(UploadRejected):
        check_file_size(rules, "panFile", 1024 * 1024 + 1)


def test_supported_formats(rules):
    formats = get_supported_formats(rules)

    assert formats["enforced"] is True
    assert formats["extensions"] == [".jpeg", ".jpg", ".pdf", ".png"]
    assert formats["max_size_mb"] == 1
    fields = {f["name"]: f for f in formats["fields"]}
    assert fields["aadhaarFile"] == {"name": "aadhaarFile", "max_count": 1, "required": True}
    assert fields["educationDocs"]["max_count"] == 10
    assert fields["educationDocs"]["required"] is False


# ============================================================
# STAGING
# ============================================================

def test_stage_promote(tmp_path, rules):
    staging, uploads = tmp_path / "staging", tmp_path / "uploads"
    staging.mkdir()
    uploads.mkdir()
    batch = UploadBatch(str(staging), str(uploads))

    stored = asyncio.run(batch.stage("aadhaarFile", make_upload("aadhaar.pdf", b"%PDF-1.4 data"), rules))

    assert os.path.isfile(stored.staged_path)
    assert not os.path.exists(stored.final_path)
    assert batch.final_path("aadhaarFile") == stored.final_path

    batch.promote()

    assert not os.path.exists(stored.staged_path)
    with open(stored.final_path, "rb") as f:
        assert f.read() == b"%PDF-1.4 data"


def test_discard_removes_staged_and_promoted_files(tmp_path, rules):
    staging, uploads = tmp_path / "staging", tmp_path / "uploads"
    staging.mkdir()
    uploads.mkdir()
    batch = UploadBatch(str(staging), str(uploads))

    asyncio.run(batch.stage("aadhaarFile", make_upload("a.pdf", b"a"), rules))
    batch.promote()
    asyncio.run(batch.stage("panFile", make_upload("p.pdf", b"p"), rules))

    batch.discard()

    assert os.listdir(staging) == []
    assert os.listdir(uploads) == []
    assert batch.files == []


def test_oversized_file_is_rejected_and_cleaned_up(tmp_path, rules):
    staging = tmp_path / "staging"
    staging.mkdir()
    batch = UploadBatch(str(staging), str(tmp_path / "uploads"))
    big = make_upload("big.pdf", b"x" * (1024 * 1024 + 10))

    with pytest.raises(UploadRejected) as exc_info:
        asyncio.run(batch.stage("educationDocs", big, rules))
    assert exc_info.value.field == "educationDocs"

    batch.discard()
    assert os.listdir(staging) == []


def test_clear_directory_only_removes_files(tmp_path):
    (tmp_path / "a.pdf").write_bytes(b"a")
    (tmp_path / "b.png").write_bytes(b"b")
    (tmp_path / "nested").mkdir()

    assert clear_directory(str(tmp_path)) == 2
    assert os.listdir(tmp_path) == ["nested"]
    assert clear_directory(str(tmp_path / "missing")) == 0
