"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Any, Dict, List

from doctracker.client import FetchResult, ReminderResult
from doctracker.logger import get_logger, reset_logger
from doctracker.state import DashboardController

APPS_SCRIPT_URL = "https://script.google.com/macros/s/test-deployment/exec"


@pytest.fixture(autouse=True)
def quiet_logger(monkeypatch):
    """Keep tests off the console and out of the log directory."""
    reset_logger()
    get_logger(enable_console=False, enable_file=False)
    monkeypatch.setenv("DOCTRACKER_PREFERS_DARK", "0")
    yield
    reset_logger()


@pytest.fixture
def complete_record() -> Dict[str, Any]:
    """Applicant row with every document uploaded."""
    return {
        "Full Name": "Ali Khan",
        "Email address": "ali.khan@example.com",
        "Current Designation": "Site Engineer",
        "Mobile Number": "9876543210",
        "Pan Card for ID Proof": "https://drive.google.com/open?id=pan",
        "Aadhaar Card and Voter Card Both Side ( for Address Proof )": "https://drive.google.com/open?id=aadhaar",
        "Educational Qualification Documents uploading": "https://drive.google.com/open?id=edu",
        "Upload Passport Size Photo": "https://drive.google.com/open?id=photo",
        "Do you have any work experience?": "YES",
        "Upload Experience Certificate ( releasing Letter)": "https://drive.google.com/open?id=exp",
        "3 Months Salary Slip / Offer Letter (Of last organization, if applicable)": "https://drive.google.com/open?id=slip",
        "Updated Bank statement Last three months": "https://drive.google.com/open?id=bank",
        "Bank Passbook / Cancelled Cheque (For salary account verification)": "https://drive.google.com/open?id=cheque",
        "Medical Fitness Certificate": "https://drive.google.com/open?id=medical",
        "Marital Status": "Single",
    }


@pytest.fixture
def jane_record() -> Dict[str, Any]:
    return {
        "Full Name": "Jane Doe",
        "Email address": "jane@x.com",
        "Marital Status": "Married",
    }


@pytest.fixture
def sheet_rows(complete_record, jane_record) -> List[Dict[str, Any]]:
    return [
        complete_record,
        jane_record,
        {"Email address": "nobody@example.com"},
        {
            "Full Name": "Priya Sharma",
            "Email address": "priya@example.com",
            "Designation": "Accountant",
            "Mobile Number": "9123456789",
            "Pan Card for ID Proof": "https://drive.google.com/open?id=pan2",
        },
    ]


class FakeEndpoint:
    """Records calls and returns canned results in place of the HTTP client."""

    def __init__(self, fetch_result: FetchResult, reminder_result: ReminderResult = None):
        self.fetch_result = fetch_result
        self.reminder_result = reminder_result or ReminderResult(sent_at="10:30 AM")
        self.fetch_calls: List[str] = []
        self.sent: List[Any] = []

    def fetch(self, endpoint, timeout=None):
        self.fetch_calls.append(endpoint)
        return self.fetch_result

    def send(self, endpoint, candidate, timeout=None):
        self.sent.append(candidate)
        return self.reminder_result


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def apps_script_url() -> str:
    return APPS_SCRIPT_URL


@pytest.fixture
def fake_endpoint_factory():
    """Build a FakeEndpoint serving the given rows, or the given fetch failure."""
    def _make(records=None, error=None, reminder_result=None) -> FakeEndpoint:
        fetch_result = FetchResult(error=error) if error else FetchResult(records=list(records or []))
        return FakeEndpoint(fetch_result, reminder_result)
    return _make


@pytest.fixture
def controller_factory(clock, tmp_path):
    """Build a controller wired to a FakeEndpoint."""
    def _make(endpoint: FakeEndpoint, api_url: str = APPS_SCRIPT_URL, **kwargs) -> DashboardController:
        kwargs.setdefault("preferences_file", tmp_path / "preferences.json")
        return DashboardController(
            api_url,
            fetch=endpoint.fetch,
            send=endpoint.send,
            clock=clock,
            **kwargs,
        )
    return _make


@pytest.fixture
def fake_endpoint(sheet_rows) -> FakeEndpoint:
    return FakeEndpoint(FetchResult(records=sheet_rows))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def controller(fake_endpoint, controller_factory) -> DashboardController:
    return controller_factory(fake_endpoint)
