import pytest
from fastapi.testclient import TestClient

from med_appointments.core.config import Settings
from med_appointments.main import create_app


@pytest.fixture
def frontend_dir(tmp_path):
    root = tmp_path / "frontend"
    (root / "css").mkdir(parents=True)
    (root / "guide").mkdir()
    (root / "index.html").write_text("<h1>Appointments</h1>", encoding="utf-8")
    (root / "app.js").write_text("console.log('ready');", encoding="utf-8")
    (root / "css" / "site.css").write_text("body { margin: 0; }", encoding="utf-8")
    (root / "guide" / "index.html").write_text("<h1>Guide</h1>", encoding="utf-8")
    (root / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (root / "archive.bin").write_bytes(b"\x00\x01\x02")
    (tmp_path / "secret.txt").write_text("top secret", encoding="utf-8")
    return root


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data" / "appointments.json"


@pytest.fixture
def settings(data_file, frontend_dir):
    return Settings(DATA_FILE=data_file, FRONTEND_DIR=frontend_dir, LOG_LEVEL="WARNING")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def valid_payload():
    return {
        "patientName": "John Doe",
        "doctorName": "Dr. Smith",
        "dateTime": "2024-01-01T10:00",
        "reason": "Routine checkup",
    }
