import pytest

from med_appointments.application.services.appointment_validator import is_valid_date, validate_create
from med_appointments.exceptions import InvalidDateError, MissingFieldsError
from med_appointments.schemas.appointments.appointment import AppointmentCreate


def test_validate_trims_fields(valid_payload):
    payload = {k: f"  {v}\t" for k, v in valid_payload.items()}
    out = validate_create(payload)
    assert out.patientName == "John Doe"
    assert out.doctorName == "Dr. Smith"
    assert out.dateTime == "2024-01-01T10:00"
    assert out.reason == "Routine checkup"


def test_validate_keeps_date_verbatim(valid_payload):
    valid_payload["dateTime"] = "January 5, 2025 3:30 PM"
    assert validate_create(valid_payload).dateTime == "January 5, 2025 3:30 PM"


@pytest.mark.parametrize("field", ["patientName", "doctorName", "dateTime", "reason"])
def test_validate_rejects_blank_field(valid_payload, field):
    valid_payload[field] = "   "
    with pytest.raises(MissingFieldsError) as exc:
        validate_create(valid_payload)
    assert exc.value.message == "All fields are required."


def test_validate_treats_absent_and_non_string_as_empty(valid_payload):
    del valid_payload["reason"]
    with pytest.raises(MissingFieldsError):
        validate_create(valid_payload)

    valid_payload["reason"] = 42
    with pytest.raises(MissingFieldsError):
        validate_create(valid_payload)


def test_validate_accepts_model_input(valid_payload):
    out = validate_create(AppointmentCreate(**valid_payload))
    assert out.patientName == "John Doe"


def test_validate_non_mapping_payload_is_empty():
    with pytest.raises(MissingFieldsError):
        validate_create(["not", "an", "object"])
    with pytest.raises(MissingFieldsError):
        validate_create(None)


def test_validate_rejects_bad_date(valid_payload):
    valid_payload["dateTime"] = "not-a-date"
    with pytest.raises(InvalidDateError) as exc:
        validate_create(valid_payload)
    assert exc.value.message == "Date and time must be valid."


def test_missing_fields_checked_before_date():
    with pytest.raises(MissingFieldsError):
        validate_create({"patientName": "p", "dateTime": "not-a-date"})


def test_is_valid_date():
    assert is_valid_date("2024-01-01T10:00")
    assert is_valid_date("2024-02-29")
    assert not is_valid_date("2023-02-30")
    assert not is_valid_date("tomorrow-ish")
