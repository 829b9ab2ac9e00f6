from typing import Any, Mapping, Union

from dateutil import parser as date_parser

from ...exceptions import InvalidDateError, MissingFieldsError
from ...schemas.appointments.appointment import AppointmentCreate, ValidatedAppointment


def is_valid_date(value: str) -> bool:
    try:
        date_parser.parse(value)
    except (ValueError, OverflowError):
        return False
    return True


def validate_create(payload: Union[AppointmentCreate, Mapping[str, Any], None]) -> ValidatedAppointment:
    """Check an inbound appointment payload and return its trimmed fields.

    Raises MissingFieldsError when any of the four fields is empty after
    trimming, and InvalidDateError when ``dateTime`` is not a parseable
    calendar date/time. ``dateTime`` is returned verbatim, not canonicalized.
    """
    if not isinstance(payload, AppointmentCreate):
        payload = AppointmentCreate.model_validate(dict(payload) if isinstance(payload, Mapping) else {})

    patient_name = payload.patientName.strip()
    doctor_name = payload.doctorName.strip()
    date_time = payload.dateTime.strip()
    reason = payload.reason.strip()

    if not patient_name or not doctor_name or not date_time or not reason:
        raise MissingFieldsError()

    if not is_valid_date(date_time):
        raise InvalidDateError()

    return ValidatedAppointment(
        patientName=patient_name,
        doctorName=doctor_name,
        dateTime=date_time,
        reason=reason,
    )
