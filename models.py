# In-memory student records. The roster is persisted as plain text by
# file_handler.py; there is no database.
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import attendance as ledger
from attendance import AttendanceEntry, MonthlySummary
from grade_policy import SUBJECT_COUNT, gpa_on_five_scale


def _empty_marks() -> List[float]:
    return [0.0] * SUBJECT_COUNT


@dataclass
class StudentRecord:
    name: str
    roll_no: int
    student_class: str
    age: int
    gender: str
    marks: List[float] = field(default_factory=_empty_marks)
    # Derived from marks by grade_policy.apply_grade_policy
    percentage: float = 0.0
    grade: str = 'F'
    gpa: float = 0.0
    attendance: List[AttendanceEntry] = field(default_factory=list)

    def mark_attendance(self, date: str, present: bool) -> AttendanceEntry:
        return ledger.mark_attendance(self.attendance, date, present)

    def attendance_percentage(self) -> float:
        return ledger.attendance_percentage(self.attendance)

    def entry_on_date(self, date: str) -> Optional[AttendanceEntry]:
        return ledger.entry_on_date(self.attendance, date)

    def monthly_aggregate(self, month_year: str) -> Optional[MonthlySummary]:
        return ledger.monthly_aggregate(self.attendance, month_year)

    @property
    def gpa_5(self) -> float:
        return gpa_on_five_scale(self.gpa)

    def to_dict(self) -> Dict:
        """JSON-ready view of the record."""
        return {
            'roll_no': self.roll_no,
            'name': self.name,
            'class': self.student_class,
            'age': self.age,
            'gender': self.gender,
            'marks': list(self.marks),
            'percentage': round(self.percentage, 2),
            'grade': self.grade,
            'gpa': round(self.gpa, 2),
            'gpa_5': round(self.gpa_5, 2),
            'attendance_percentage': round(self.attendance_percentage(), 2),
        }
