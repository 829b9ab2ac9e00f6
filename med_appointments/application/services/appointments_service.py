from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, List

from ..ports.appointments_repo import AppointmentsRepository
from ...schemas.appointments.appointment import Appointment
from .appointment_validator import validate_create


def utc_timestamp() -> str:
    """Current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class AppointmentsService:
    repo: AppointmentsRepository
    clock: Callable[[], str] = field(default=utc_timestamp)

    async def list_appointments(self) -> List[Appointment]:
        return await self.repo.load_all()

    async def create(self, payload: Any) -> Appointment:
        fields = validate_create(payload)
        record = Appointment(
            id=self.repo.generate_id(),
            createdAt=self.clock(),
            **fields.model_dump(),
        )
        return await self.repo.append(record)
