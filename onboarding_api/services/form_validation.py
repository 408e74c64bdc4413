"""
Form validation for onboarding submissions.

Runs the OnboardingForm schema once and adds the required-file checks.
Every violation is collected and reported together as [{"field": ..., "message": ...}].
"""

import logging
from typing import Dict, List

from pydantic import ValidationError

from onboarding_api.core.exceptions import FormValidationError
from onboarding_api.schemas.schemas import OnboardingForm
from onboarding_api.services.file_storage import UploadBatch
from onboarding_api.utils.file_upload import REQUIRED_FILE_FIELDS

logger = logging.getLogger(__name__)

REQUIRED_MESSAGE_TYPES = {"missing", "string_too_short"}


def _field_path(loc: tuple) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif path:
            path += f".{part}"
        else:
            path = str(part)
    return path


def violations_from_error(error: ValidationError) -> List[dict]:
    violations = []
    for err in error.errors():
        if err["type"] in REQUIRED_MESSAGE_TYPES:
            message = "This field is required"
        elif err["type"] == "value_error" and "error" in err.get("ctx", {}):
            # Our own ValueError text, without pydantic's "Value error, " prefix
            message = str(err["ctx"]["error"])
        else:
            message = err["msg"]
        violations.append({"field": _field_path(err["loc"]), "message": message})
    return violations


def validate_submission(values: Dict[str, str], batch: UploadBatch) -> OnboardingForm:
    """Return the parsed form or raise FormValidationError listing every problem."""
    violations: List[dict] = []
    form = None

    try:
        form = OnboardingForm.model_validate(values)
    except ValidationError as e:
        violations.extend(violations_from_error(e))

    for field_name in REQUIRED_FILE_FIELDS:
        if batch.first(field_name) is None:
            violations.append({"field": field_name, "message": "File is required"})

    if violations:
        logger.info("Rejected onboarding submission: %d violation(s)", len(violations))
        raise FormValidationError(violations)

    return form
