from typing import Iterable

from .rules import Candidate


def matches(candidate: Candidate, term: str) -> bool:
    """
    Case-insensitive substring match on name, email and designation.
    Mobile is matched as a raw substring.
    """
    needle = term.lower()
    return (
        needle in candidate.name.lower()
        or needle in candidate.email.lower()
        or needle in candidate.designation.lower()
        or term in candidate.mobile
    )


def filter_candidates(candidates: Iterable[Candidate], term: str | None = None) -> list[Candidate]:
    term = term or ""
    return [c for c in candidates if matches(c, term)]
