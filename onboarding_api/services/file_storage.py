"""
Upload staging for onboarding submissions.

Files of one request move through three steps:
1. stage    - streamed into the staging directory while the request is read
2. promote  - moved into the upload directory just before the DB commit
3. discard  - on any failure, every staged or promoted file is removed

Only promoted files are ever referenced by committed rows.
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Optional

from starlette.concurrency import run_in_threadpool
from starlette.datastructures import FormData, UploadFile

from onboarding_api.utils.file_upload import (
    UploadRules, check_field_count, check_file_size, check_file_type, generate_stored_name
)

logger = logging.getLogger(__name__)


@dataclass
class StoredFile:
    field: str
    original_name: str
    stored_name: str
    staged_path: str
    final_path: str
    promoted: bool = False

    @property
    def current_path(self) -> str:
        return self.final_path if self.promoted else self.staged_path


class UploadBatch:
    """All files written for a single submission."""

    def __init__(self, staging_dir: str, upload_dir: str):
        self.staging_dir = staging_dir
        self.upload_dir = upload_dir
        self.files: List[StoredFile] = []

    def files_for(self, field: str) -> List[StoredFile]:
        return [f for f in self.files if f.field == field]

    def first(self, field: str) -> Optional[StoredFile]:
        matches = self.files_for(field)
        return matches[0] if matches else None

    def final_path(self, field: str) -> Optional[str]:
        stored = self.first(field)
        return stored.final_path if stored else None

    async def stage(self, field: str, upload: UploadFile, rules: UploadRules) -> StoredFile:
        """Stream one upload into the staging directory, enforcing the size limit."""
        stored_name = generate_stored_name(upload.filename)
        stored = StoredFile(
            field=field,
            original_name=upload.filename,
            stored_name=stored_name,
            staged_path=os.path.join(self.staging_dir, stored_name),
            final_path=os.path.join(self.upload_dir, stored_name),
        )
        # Tracked before writing so a partial file is discarded too
        self.files.append(stored)

        written = 0
        out = await run_in_threadpool(open, stored.staged_path, "wb")
        try:
            while True:
                chunk = await upload.read(rules.chunk_size)
                if not chunk:
                    break
                written += len(chunk)
                check_file_size(rules, field, written)
                await run_in_threadpool(out.write, chunk)
        finally:
            await run_in_threadpool(out.close)

        logger.debug("Staged %s (%s, %d bytes) as %s", upload.filename, field, written, stored_name)
        return stored

    def promote(self) -> None:
        """Move every staged file into the upload directory."""
        for stored in self.files:
            if not stored.promoted:
                os.replace(stored.staged_path, stored.final_path)
                stored.promoted = True

    def discard(self) -> None:
        """
        Best-effort removal of everything this batch wrote.

        Blocking; async callers go through run_in_threadpool.
        """
        for stored in self.files:
            path = stored.current_path
            try:
                os.remove(path)
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning("Could not remove uploaded file %s: %s", path, e)
        self.files = []


def ensure_upload_dirs(*dirs: str) -> None:
    for path in dirs:
        os.makedirs(path, exist_ok=True)


async def intake_form(form: FormData, rules: UploadRules, batch: UploadBatch) -> Dict[str, str]:
    """
    Split a multipart form into scalar values and staged files.

    Returns the scalar fields; files end up in batch. Raises
    UploadRejected on the first file that breaks the rules; the caller
    discards the batch.
    """
    values: Dict[str, str] = {}
    counts: Dict[str, int] = {}

    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            # Browsers send an empty part for untouched file inputs
            if not value.filename:
                continue
            counts[key] = counts.get(key, 0) + 1
            check_field_count(rules, key, counts[key])
            check_file_type(rules, key, value.filename, value.content_type)
            await batch.stage(key, value, rules)
        elif key not in values:
            values[key] = value

    return values


def clear_directory(path: str) -> int:
    """Unlink every regular file directly under path; returns how many went."""
    removed = 0
    if not os.path.isdir(path):
        return removed
    for entry in os.scandir(path):
        if not entry.is_file():
            continue
        try:
            os.remove(entry.path)
            removed += 1
        except OSError as e:
            logger.warning("Could not remove uploaded file %s: %s", entry.path, e)
    return removed
