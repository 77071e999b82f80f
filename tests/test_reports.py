import pytest

import reports
from exceptions import EmptyClassError


def test_class_report(roster):
    rows = reports.class_report(roster, '10A')

    assert rows == [
        {'roll_no': 1, 'name': 'Alice', 'grade': 'A', 'percentage': 90.0, 'gpa': 4.0,
         'attendance_percentage': 75.0},
        {'roll_no': 2, 'name': 'Bob', 'grade': 'F', 'percentage': 50.0, 'gpa': 0.0,
         'attendance_percentage': 0.0},
    ]


def test_class_report_empty_class(roster):
    with pytest.raises(EmptyClassError):
        reports.class_report(roster, '12C')


def test_gpa_report(roster):
    assert reports.gpa_report(roster) == [
        {'name': 'Alice', 'gpa_5': 5.0},
        {'name': 'Bob', 'gpa_5': 0.0},
        {'name': 'Chen', 'gpa_5': 3.75},
    ]


def test_attendance_on_date_skips_students_without_entry(roster):
    assert reports.attendance_on_date(roster, '2024-03-01') == [
        {'roll_no': 1, 'name': 'Alice', 'status': 'Present'},
        {'roll_no': 2, 'name': 'Bob', 'status': 'Absent'},
    ]
    assert reports.attendance_on_date(roster, '2030-01-01') == []


def test_monthly_attendance_skips_students_without_entries(roster):
    assert reports.monthly_attendance(roster, '03-2024') == [
        {'roll_no': 1, 'name': 'Alice', 'present': 3, 'absent': 0, 'percentage': 100.0},
        {'roll_no': 2, 'name': 'Bob', 'present': 0, 'absent': 1, 'percentage': 0.0},
    ]
    assert reports.monthly_attendance(roster, '04-2024') == [
        {'roll_no': 1, 'name': 'Alice', 'present': 0, 'absent': 1, 'percentage': 0.0},
    ]


def test_student_detail(roster):
    detail = reports.student_detail(roster.find_by_roll(2))

    assert detail['class'] == '10A'
    assert detail['grade'] == 'F'
    assert detail['attendance'] == [{'date': '2024-03-01', 'status': 'Absent'}]
