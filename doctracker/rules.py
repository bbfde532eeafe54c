from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

UNKNOWN_NAME = "Unknown"
INLINE_DOC_LIMIT = 3

# (sheet column, label) in the order the checklist is evaluated
ID_DOCS: List[Tuple[str, str]] = [
    ("Pan Card for ID Proof", "Pan Card"),
    ("Aadhaar Card and Voter Card Both Side ( for Address Proof )", "Aadhaar / Voter Card"),
    ("Educational Qualification Documents uploading", "Educational Documents"),
    ("Upload Passport Size Photo", "Passport Photo"),
]
EXPERIENCE_DOCS: List[Tuple[str, str]] = [
    ("Upload Experience Certificate ( releasing Letter)", "Experience Certificate"),
    ("3 Months Salary Slip / Offer Letter (Of last organization, if applicable)", "Salary Slip / Offer Letter"),
]
BANK_AND_MEDICAL_DOCS: List[Tuple[str, str]] = [
    ("Updated Bank statement Last three months", "Bank Statement"),
    ("Bank Passbook / Cancelled Cheque (For salary account verification)", "Cancelled Cheque"),
    ("Medical Fitness Certificate", "Medical Fitness Certificate"),
]
MARRIAGE_DOCS: List[Tuple[str, str]] = [
    ("Marriage certificate", "Marriage Certificate"),
]

WORK_EXPERIENCE_FIELD = "Do you have any work experience?"
MARITAL_STATUS_FIELD = "Marital Status"


@dataclass(frozen=True)
class Candidate:
    name: str
    email: str = ""
    designation: str = ""
    mobile: str = ""
    missing_docs: Tuple[str, ...] = field(default_factory=tuple)
    last_reminder_sent_at: Optional[str] = None

    @property
    def all_clear(self) -> bool:
        return not self.missing_docs

    @property
    def can_remind(self) -> bool:
        return not self.all_clear

    @property
    def inline_docs(self) -> Tuple[str, ...]:
        return self.missing_docs[:INLINE_DOC_LIMIT]

    @property
    def overflow_docs(self) -> Tuple[str, ...]:
        return self.missing_docs[INLINE_DOC_LIMIT:]


def is_missing(value: Any) -> bool:
    """Absent, None, falsy, or whitespace-only values count as missing."""
    return not value or str(value).strip() == ""


def _first_present(record: Dict[str, Any], *keys: str, default: str = "") -> str:
    for k in keys:
        v = record.get(k)
        if v:
            return str(v)
    return default


def missing_documents(record: Dict[str, Any]) -> List[str]:
    """
    Return the labels of every onboarding document absent from the record.

    Experience documents are only required when the work experience answer
    is exactly "YES"; the marriage certificate only when the marital status
    is exactly "Married". Both comparisons are case-sensitive.
    """
    checks = list(ID_DOCS)
    if record.get(WORK_EXPERIENCE_FIELD) == "YES":
        checks.extend(EXPERIENCE_DOCS)
    checks.extend(BANK_AND_MEDICAL_DOCS)
    if record.get(MARITAL_STATUS_FIELD) == "Married":
        checks.extend(MARRIAGE_DOCS)

    return [label for key, label in checks if is_missing(record.get(key))]


def evaluate_record(record: Dict[str, Any]) -> Candidate:
    return Candidate(
        name=_first_present(record, "Full Name", default=UNKNOWN_NAME),
        email=_first_present(record, "Email address"),
        designation=_first_present(record, "Current Designation", "Designation"),
        # NOTE: falling back to Gender looks like a sheet-mapping slip, kept
        # so the table matches what operators already see.
        mobile=_first_present(record, "Mobile Number", "Gender"),
        missing_docs=tuple(missing_documents(record)),
    )


def evaluate_records(records: Iterable[Dict[str, Any]]) -> List[Candidate]:
    """Evaluate every record, dropping rows without a usable name."""
    candidates = []
    for record in records:
        if not isinstance(record, dict):
            continue
        candidate = evaluate_record(record)
        if candidate.name != UNKNOWN_NAME:
            candidates.append(candidate)
    return candidates
