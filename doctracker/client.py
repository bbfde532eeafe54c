"""
Client for the Apps Script web app that serves the onboarding sheet.

Both calls make a single attempt and never raise: failures come back as
result values carrying a human-readable reason.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests
from bs4 import BeautifulSoup

from .env import DEFAULT_TIMEOUT
from .logger import get_logger
from .rules import Candidate

# Apps Script cannot answer the OPTIONS pre-flight a JSON content type triggers
REMINDER_CONTENT_TYPE = "text/plain;charset=utf-8"
SENT_AT_FORMAT = "%I:%M %p"


@dataclass(frozen=True)
class FetchResult:
    records: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ReminderResult:
    sent_at: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _describe_non_json(resp: requests.Response) -> str:
    text = resp.text or ""
    if "<html" in text.lower():
        soup = BeautifulSoup(text, "html.parser")
        title = soup.title.get_text(strip=True) if soup.title else ""
        if title:
            return f"Received an HTML page ({title}) instead of JSON"
        return "Received an HTML page instead of JSON"
    return "Response was not valid JSON"


def _request_error(e: requests.exceptions.RequestException) -> Tuple[str, str]:
    """Map a requests exception to (error_type, reason)."""
    if isinstance(e, requests.exceptions.HTTPError):
        status = e.response.status_code if e.response is not None else "HTTPError"
        return f"HTTPError_{status}", f"Network response was not ok (HTTP {status})"
    if isinstance(e, requests.exceptions.Timeout):
        return "Timeout", "Request timed out"
    if isinstance(e, requests.exceptions.ConnectionError):
        return "ConnectionError", f"Could not connect to endpoint: {e}"
    return "RequestException", f"Request error: {e}"


def extract_records(data: Any) -> Tuple[List[Dict[str, Any]], Optional[str]]:
    """
    Accept either a bare list of rows or an object with a ``data`` list.

    Returns (records, error); error is set for an explicit ``error`` field
    or any other shape.
    """
    if isinstance(data, dict) and data.get("error"):
        return [], str(data["error"])
    if isinstance(data, list):
        return data, None
    if isinstance(data, dict) and isinstance(data.get("data"), list):
        return data["data"], None
    return [], "Data format isn't recognized"


def fetch_all(endpoint: str, timeout: float = DEFAULT_TIMEOUT) -> FetchResult:
    """Read every applicant row from the endpoint."""
    logger = get_logger()
    logger.record_fetch_attempt()
    logger.debug("Fetching candidate records", url=endpoint)

    try:
        resp = requests.get(endpoint, timeout=timeout)
        resp.raise_for_status()
    except requests.exceptions.RequestException as e:
        error_type, reason = _request_error(e)
        logger.record_fetch_failure(error_type)
        logger.error("Candidate fetch failed", url=endpoint, error=reason)
        return FetchResult(error=reason)

    try:
        data = resp.json()
    except ValueError:
        reason = _describe_non_json(resp)
        logger.record_fetch_failure("InvalidJSON")
        logger.error("Candidate fetch returned non-JSON body", url=endpoint, error=reason)
        return FetchResult(error=reason)

    records, reason = extract_records(data)
    if reason is not None:
        logger.record_fetch_failure("EndpointError")
        logger.error("Candidate fetch rejected", url=endpoint, error=reason)
        return FetchResult(error=reason)

    logger.record_fetch_success()
    logger.info("Fetched candidate records", count=len(records))
    return FetchResult(records=records)


def reminder_payload(candidate: Candidate) -> Dict[str, Any]:
    return {
        "name": candidate.name,
        "email": candidate.email,
        "missingDocs": list(candidate.missing_docs),
    }


def send_reminder(
    endpoint: str,
    candidate: Candidate,
    timeout: float = DEFAULT_TIMEOUT,
    now: Optional[Callable[[], datetime]] = None,
) -> ReminderResult:
    """
    Ask the endpoint to email the candidate about their missing documents.

    On success the result carries the local send time at minute resolution;
    it is for display only.
    """
    logger = get_logger()
    logger.record_reminder_attempt()
    body = json.dumps(reminder_payload(candidate))

    try:
        resp = requests.post(
            endpoint,
            data=body.encode("utf-8"),
            headers={"Content-Type": REMINDER_CONTENT_TYPE},
            timeout=timeout,
        )
        resp.raise_for_status()
    except requests.exceptions.RequestException as e:
        error_type, reason = _request_error(e)
        logger.record_reminder_failure(error_type)
        logger.warning("Reminder request failed", email=candidate.email, error=reason)
        return ReminderResult(error=reason)

    try:
        data = resp.json()
    except ValueError:
        reason = _describe_non_json(resp)
        logger.record_reminder_failure("InvalidJSON")
        logger.warning("Reminder response was not JSON", email=candidate.email, error=reason)
        return ReminderResult(error=reason)

    if not isinstance(data, dict) or not data.get("success"):
        reason = str(data.get("error") or "Unknown error") if isinstance(data, dict) else "Unknown error"
        logger.record_reminder_failure("ReminderRejected")
        logger.warning("Reminder rejected by endpoint", email=candidate.email, error=reason)
        return ReminderResult(error=reason)

    sent_at = (now or datetime.now)().strftime(SENT_AT_FORMAT)
    logger.record_reminder_sent()
    logger.info("Reminder sent", email=candidate.email, missing=len(candidate.missing_docs))
    return ReminderResult(sent_at=sent_at)
