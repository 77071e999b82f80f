"""
Report rows built from the roster.

Each function returns plain dictionaries so callers can render them as JSON,
tables or worksheets.
"""
from typing import Dict, List

from exceptions import EmptyClassError
from models import StudentRecord
from roster import Roster


def class_report(roster: Roster, student_class: str) -> List[Dict]:
    """
    One row per student in the class: roll, name, grade, percentage, gpa and
    attendance percentage.
    """
    students = roster.students_in_class(student_class)
    if not students:
        raise EmptyClassError(student_class)

    return [
        {
            'roll_no': s.roll_no,
            'name': s.name,
            'grade': s.grade,
            'percentage': round(s.percentage, 2),
            'gpa': round(s.gpa, 2),
            'attendance_percentage': round(s.attendance_percentage(), 2),
        }
        for s in students
    ]


def gpa_report(roster: Roster) -> List[Dict]:
    """5.0 scale GPA for every student."""
    return [{'name': s.name, 'gpa_5': round(s.gpa_5, 2)} for s in roster]


def attendance_on_date(roster: Roster, date: str) -> List[Dict]:
    """Status of every student with an entry on the date. Students without one are left out."""
    rows = []
    for student in roster:
        entry = student.entry_on_date(date)
        if entry is not None:
            rows.append({
                'roll_no': student.roll_no,
                'name': student.name,
                'status': entry.status.value,
            })
    return rows


def monthly_attendance(roster: Roster, month_year: str) -> List[Dict]:
    """
    Present/absent counts for an MM-YYYY month.
    Students with no entries in the month are skipped rather than shown at 0%.
    """
    rows = []
    for student in roster:
        summary = student.monthly_aggregate(month_year)
        if summary is None:
            continue
        rows.append({
            'roll_no': student.roll_no,
            'name': student.name,
            'present': summary.present,
            'absent': summary.absent,
            'percentage': round(summary.percentage, 2),
        })
    return rows


def student_detail(student: StudentRecord) -> Dict:
    detail = student.to_dict()
    detail['attendance'] = [
        {'date': entry.date, 'status': entry.status.value}
        for entry in student.attendance
    ]
    return detail
