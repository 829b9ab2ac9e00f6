import contextlib
import json
import logging
import os
import tempfile
import threading
import uuid
from pathlib import Path
from typing import List, Union

from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from ....application.ports.appointments_repo import AppointmentsRepository
from ....exceptions import CorruptStoreError, StoreError
from ....schemas.appointments.appointment import Appointment

logger = logging.getLogger(__name__)


class JsonFileAppointmentsRepository(AppointmentsRepository):
    """Appointments persisted as a single JSON array in one file.

    Every append reloads the whole array, pushes one record and writes the
    whole array back. The cycle runs under ``_write_lock`` so that two appends
    can never interleave, whichever thread or event loop issues them. Reads
    take no lock and see either the pre- or post-append array, since the file
    is swapped in with an atomic rename.
    """

    def __init__(self, data_file: Union[str, Path]) -> None:
        self.data_file = Path(data_file)
        self._write_lock = threading.Lock()

    def generate_id(self) -> str:
        return str(uuid.uuid4())

    async def ensure_exists(self) -> None:
        await run_in_threadpool(self._ensure_exists)

    async def load_all(self) -> List[Appointment]:
        return await run_in_threadpool(self._load_all)

    async def append(self, record: Appointment) -> Appointment:
        return await run_in_threadpool(self._append, record)

    def _ensure_exists(self) -> None:
        with self._write_lock:
            self._bootstrap()

    def _load_all(self) -> List[Appointment]:
        self._ensure_exists()
        return self._read_records()

    def _append(self, record: Appointment) -> Appointment:
        with self._write_lock:
            self._bootstrap()
            records = self._read_records()
            records.append(record)
            self._write_records(records)
        logger.info(f"Stored appointment {record.id} ({len(records)} total)")
        return record

    # Callers must hold _write_lock
    def _bootstrap(self) -> None:
        if self.data_file.exists():
            return
        try:
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError(f"Unable to create data directory: {e}") from e
        self._write_records([])
        logger.info(f"Initialized empty appointment store at {self.data_file}")

    def _read_records(self) -> List[Appointment]:
        try:
            raw = self.data_file.read_text(encoding="utf-8")
        except OSError as e:
            raise StoreError(f"Unable to read appointment store: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Appointment store {self.data_file} is not valid JSON: {e}")
            raise CorruptStoreError("Appointment store is not valid JSON") from e

        if not isinstance(data, list):
            logger.error(f"Appointment store {self.data_file} does not hold a JSON array")
            raise CorruptStoreError("Appointment store is not a JSON array")

        try:
            return [Appointment.model_validate(item) for item in data]
        except ValidationError as e:
            logger.error(f"Appointment store {self.data_file} holds malformed records: {e}")
            raise CorruptStoreError("Appointment store holds malformed records") from e

    def _write_records(self, records: List[Appointment]) -> None:
        payload = json.dumps([r.model_dump() for r in records], indent=2)
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=self.data_file.parent,
                prefix=f".{self.data_file.name}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.data_file)
        except OSError as e:
            if tmp_path:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_path)
            raise StoreError(f"Unable to write appointment store: {e}") from e
