"""Plain-text rendering of the dashboard for the terminal."""

from typing import List, Sequence

from .rules import Candidate

HEADERS = ["#", "CANDIDATE", "DESIGNATION", "EMAIL", "MOBILE", "MISSING DOCUMENTS", "ACTION"]
ALL_CLEAR = "All Clear!"
EMPTY_STATE = "No candidates found matching your criteria."
LOADING = "Parsing candidate data..."

_RESET = "\033[0m"
_PALETTES = {
    "light": {"pill": "\033[33m", "ok": "\033[32m", "error": "\033[31m"},
    "dark": {"pill": "\033[93m", "ok": "\033[92m", "error": "\033[91m"},
}


def _paint(text: str, role: str, theme: str, color: bool) -> str:
    if not color:
        return text
    return f"{_PALETTES.get(theme, _PALETTES['light'])[role]}{text}{_RESET}"


def docs_cell(candidate: Candidate) -> str:
    if candidate.all_clear:
        return ALL_CLEAR
    cell = ", ".join(candidate.inline_docs)
    if candidate.overflow_docs:
        cell += f" +{len(candidate.overflow_docs)} more"
    return cell


def action_cell(candidate: Candidate) -> str:
    if not candidate.can_remind:
        return "Done"
    if candidate.last_reminder_sent_at:
        return f"Sent at {candidate.last_reminder_sent_at}"
    return "Send Reminder"


def candidate_row(candidate: Candidate, row: int) -> List[str]:
    return [
        str(row),
        candidate.name,
        candidate.designation,
        candidate.email,
        candidate.mobile,
        docs_cell(candidate),
        action_cell(candidate),
    ]


def render_table(candidates: Sequence[Candidate], theme: str = "light", color: bool = False) -> str:
    """Render candidates as a numbered text table, or the empty-state line."""
    if not candidates:
        return EMPTY_STATE

    rows = [candidate_row(c, i) for i, c in enumerate(candidates, start=1)]
    widths = [len(h) for h in HEADERS]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def fmt(cells: List[str]) -> str:
        return "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)).rstrip()

    lines = [fmt(HEADERS), fmt(["-" * w for w in widths])]
    for candidate, row in zip(candidates, rows):
        line = fmt(row)
        role = "ok" if candidate.all_clear else "pill"
        lines.append(_paint(line, role, theme, color))
    return "\n".join(lines)


def render_more(name: str, docs: Sequence[str]) -> str:
    lines = [f"Missing Documents: {name}", "Additionally Missing:"]
    lines.extend(f"  - {doc}" for doc in docs)
    return "\n".join(lines)


def render_error(message: str, theme: str = "light", color: bool = False) -> str:
    return _paint(message, "error", theme, color)
