# med_appointments/schemas/appointments/appointment.py
from pydantic import BaseModel, ConfigDict, field_validator
from typing import Any, List


class AppointmentCreate(BaseModel):
    """Inbound payload; absent or non-string fields become empty strings."""

    model_config = ConfigDict(extra="ignore")

    patientName: str = ""
    doctorName: str = ""
    dateTime: str = ""
    reason: str = ""

    @field_validator("patientName", "doctorName", "dateTime", "reason", mode="before")
    @classmethod
    def blank_if_not_string(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""


class ValidatedAppointment(BaseModel):
    patientName: str
    doctorName: str
    dateTime: str  # verbatim trimmed input
    reason: str


class Appointment(BaseModel):
    # Unknown keys already on disk survive the whole-array rewrite
    model_config = ConfigDict(extra="allow")

    id: str
    patientName: str
    doctorName: str
    dateTime: str
    reason: str
    createdAt: str  # ISO-8601 UTC


class AppointmentList(BaseModel):
    appointments: List[Appointment]
