"""
File Upload Utility - rules for the onboarding file fields.

Accepted formats (when rules are enforced):
- PDF (.pdf)
- Images (.jpg, .jpeg, .png)

Max file size: 5MB by default, configurable.
"""

import os
import re
import secrets
import time
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional

from onboarding_api.core.config import Settings
from onboarding_api.core.exceptions import UploadRejected

SINGLE_FILE_FIELDS = ("aadhaarFile", "panFile", "signatureFile")
MULTI_FILE_FIELDS = ("educationDocs", "employmentDocs")
REQUIRED_FILE_FIELDS = SINGLE_FILE_FIELDS


@dataclass(frozen=True)
class UploadRules:
    """What the intake accepts. enforce=False is the accept-all variant."""

    field_limits: Dict[str, int]
    allowed_extensions: FrozenSet[str] = frozenset()
    allowed_mime_types: FrozenSet[str] = frozenset()
    max_size_bytes: Optional[int] = None
    enforce: bool = True
    chunk_size: int = field(default=1024 * 1024)

    @classmethod
    def from_settings(cls, settings: Settings) -> "UploadRules":
        limits = {name: 1 for name in SINGLE_FILE_FIELDS}
        limits.update({name: settings.max_multi_file_count for name in MULTI_FILE_FIELDS})
        return cls(
            field_limits=limits,
            allowed_extensions=frozenset(ext.lower() for ext in settings.allowed_extensions),
            allowed_mime_types=frozenset(mime.lower() for mime in settings.allowed_mime_types),
            max_size_bytes=settings.max_upload_size_bytes if settings.enforce_upload_rules else None,
            enforce=settings.enforce_upload_rules,
        )


def get_file_extension(filename: str) -> str:
    """
    Get lowercase file extension of the last path component.

    Only letters and digits are kept, so the result is safe to append to
    a stored file name. "report.v2/final" has no extension.
    """
    base = os.path.basename(filename.replace("\\", "/"))
    ext = re.sub(r"[^A-Za-z0-9]", "", os.path.splitext(base)[1]).lower()
    return "." + ext if ext else ""


def generate_stored_name(filename: str) -> str:
    """Timestamp + random suffix + original extension, e.g. 1718000000000-9f2c4a1b.pdf"""
    millis = int(time.time() * 1000)
    return f"{millis}-{secrets.token_hex(4)}{get_file_extension(filename)}"


def check_field_count(rules: UploadRules, field_name: str, count: int) -> None:
    """Raise if field_name is unknown or has received more than its limit."""
    limit = rules.field_limits.get(field_name)
    if limit is None:
        raise UploadRejected(field_name, f"Unexpected file field '{field_name}'")
    if count > limit:
        raise UploadRejected(field_name, f"Too many files for '{field_name}'. Maximum: {limit}")


def check_file_type(rules: UploadRules, field_name: str, filename: str, content_type: Optional[str]) -> None:
    """Validate extension and declared MIME type."""
    if not rules.enforce:
        return

    ext = get_file_extension(filename)
    if ext not in rules.allowed_extensions:
        raise UploadRejected(
            field_name,
            f"Unsupported file type '{ext or filename}' for '{field_name}'. "
            f"Allowed: {', '.join(sorted(rules.allowed_extensions))}"
        )

    mime = (content_type or '').split(';', 1)[0].strip().lower()
    if mime not in rules.allowed_mime_types:
        raise UploadRejected(
            field_name,
            f"Unsupported content type '{mime or 'unknown'}' for '{field_name}'"
        )


def check_file_size(rules: UploadRules, field_name: str, size: int) -> None:
    if rules.max_size_bytes is not None and size > rules.max_size_bytes:
        max_mb = rules.max_size_bytes / (1024 * 1024)
        raise UploadRejected(field_name, f"File too large for '{field_name}'. Maximum size: {max_mb:g}MB")


def get_supported_formats(rules: UploadRules) -> dict:
    """Get info about accepted upload formats."""
    return {
        "enforced": rules.enforce,
        "extensions": sorted(rules.allowed_extensions) if rules.enforce else [],
        "mime_types": sorted(rules.allowed_mime_types) if rules.enforce else [],
        "max_size_mb": rules.max_size_bytes / (1024 * 1024) if rules.max_size_bytes else None,
        "fields": [
            {"name": name, "max_count": limit, "required": name in REQUIRED_FILE_FIELDS}
            for name, limit in rules.field_limits.items()
        ]
    }
