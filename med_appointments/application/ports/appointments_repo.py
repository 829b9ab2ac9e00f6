from typing import List, Protocol

from ...schemas.appointments.appointment import Appointment


class AppointmentsRepository(Protocol):
    async def ensure_exists(self) -> None:
        ...

    async def load_all(self) -> List[Appointment]:
        ...

    async def append(self, record: Appointment) -> Appointment:
        ...

    def generate_id(self) -> str:
        ...
