from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class AttendanceStatus(Enum):
    PRESENT = 'Present'
    ABSENT = 'Absent'

    @classmethod
    def parse(cls, token: str) -> 'AttendanceStatus':
        """Parse a persisted status token. Raises ValueError for anything else."""
        return cls(token)


@dataclass(frozen=True)
class AttendanceEntry:
    date: str  # YYYY-MM-DD, not validated
    status: AttendanceStatus

    @property
    def is_present(self) -> bool:
        return self.status is AttendanceStatus.PRESENT


@dataclass(frozen=True)
class MonthlySummary:
    present: int
    absent: int
    percentage: float


def mark_attendance(entries: List[AttendanceEntry], date: str, present: bool) -> AttendanceEntry:
    """
    Append one entry to the ledger.
    Earlier entries for the same date are kept; nothing is deduplicated.
    """
    status = AttendanceStatus.PRESENT if present else AttendanceStatus.ABSENT
    entry = AttendanceEntry(date=date, status=status)
    entries.append(entry)
    return entry


def attendance_percentage(entries: List[AttendanceEntry]) -> float:
    if not entries:
        return 0.0
    present_count = sum(1 for entry in entries if entry.is_present)
    return 100 * present_count / len(entries)


def entry_on_date(entries: List[AttendanceEntry], date: str) -> Optional[AttendanceEntry]:
    """First entry for the date in insertion order, or None."""
    return next((entry for entry in entries if entry.date == date), None)


def month_key(date: str) -> str:
    """Positional MM-YYYY key of a YYYY-MM-DD date string."""
    return f"{date[5:7]}-{date[0:4]}"


def monthly_aggregate(entries: List[AttendanceEntry], month_year: str) -> Optional[MonthlySummary]:
    """
    Present/absent counts and percentage for one MM-YYYY month.
    Returns None when the ledger has no entries in that month, so callers
    can skip the student instead of reporting 0%.
    """
    matching = [entry for entry in entries if month_key(entry.date) == month_year]
    if not matching:
        return None

    present = sum(1 for entry in matching if entry.is_present)
    total = len(matching)
    return MonthlySummary(
        present=present,
        absent=total - present,
        percentage=100 * present / total
    )
