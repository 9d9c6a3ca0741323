"""Feedback Store - flat-file JSON persistence for alt text feedback."""

import json
import os
import stat
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from ..errors import StorageIOError
from ..models.feedback import FeedbackInput, FeedbackRecord
from ..observability import logger


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2026-01-01T10:00:00.000Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class FeedbackStore:
    """
    Append-only feedback storage backed by a single JSON array file.

    Every append reads the whole file, adds one record and writes the whole
    file back. The rewrite goes through a temporary file and os.replace, so a
    failed write never leaves a partial record behind.

    There is no locking: two processes appending at the same time can race
    and one of the records may be lost. Records are never updated or deleted.
    """

    DEFAULT_FEEDBACK_PATH = "feedback-data.json"

    def __init__(
        self,
        file_path: Optional[str] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.file_path = Path(file_path or self.DEFAULT_FEEDBACK_PATH)
        self._clock = clock
        self.initialize()

    def initialize(self):
        """Create the backing file with an empty array if it does not exist."""
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            if not self.file_path.exists():
                self._write_all([])
                logger.info(f"Initialized feedback store at {self.file_path}")
        except OSError as e:
            raise StorageIOError(f"Cannot initialize feedback store at {self.file_path}: {e}") from e

    def append(self, feedback: FeedbackInput) -> FeedbackRecord:
        """Store a feedback entry. Returns the stored record with id and timestamp."""
        raw_records = self._read_raw()

        now = self._clock()
        record = FeedbackRecord.from_input(
            feedback,
            record_id=self._next_id(now, raw_records),
            timestamp=format_timestamp(now),
        )
        raw_records.append(record.to_dict())

        try:
            self._write_all(raw_records)
        except OSError as e:
            logger.error(f"Error saving feedback: {e}")
            raise StorageIOError(f"Cannot write feedback store {self.file_path}: {e}") from e

        logger.debug(f"Stored feedback {record.id} (rating={record.rating})")
        return record

    def read_all(self) -> list[FeedbackRecord]:
        """Get the full feedback history in insertion order."""
        return [FeedbackRecord.from_dict(item) for item in self._read_raw()]

    def _read_raw(self) -> list[dict]:
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageIOError(f"Cannot read feedback store {self.file_path}: {e}") from e

        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise StorageIOError(f"Feedback store {self.file_path} is not a JSON array of records")
        return data

    def _write_all(self, raw_records: list[dict]):
        """Write the whole array through a temp file in the same directory."""
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{self.file_path.name}.", suffix=".tmp", dir=str(self.file_path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(raw_records, f, indent=2, ensure_ascii=False)
            os.chmod(tmp_path, self._file_mode())
            os.replace(tmp_path, self.file_path)
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def _file_mode(self) -> int:
        """Keep the current file mode, or the umask default for a new file."""
        if self.file_path.exists():
            return stat.S_IMODE(self.file_path.stat().st_mode)
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask

    @staticmethod
    def _next_id(now: datetime, raw_records: list[dict]) -> str:
        """Millisecond clock value, bumped past the newest stored id if needed."""
        candidate = int(now.timestamp() * 1000)
        if raw_records:
            try:
                newest = int(raw_records[-1].get("id", ""))
            except (TypeError, ValueError):
                newest = None
            if newest is not None and candidate <= newest:
                candidate = newest + 1
        return str(candidate)
