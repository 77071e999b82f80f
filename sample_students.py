#!/usr/bin/env python3
"""
Build a small sample roster and write it to the native store for testing.
"""
from attendance import AttendanceEntry, AttendanceStatus
from file_handler import save_roster
from models import StudentRecord
from roster import Roster

SAMPLE_DATES = ['2024-03-04', '2024-03-05', '2024-03-06', '2024-03-07']


def create_sample_roster():
    """Create a sample roster with marks and a week of attendance."""
    sample_data = [
        # Class 10A
        {'name': 'John', 'roll_no': 1, 'class': '10A', 'age': 15, 'gender': 'Male',
         'marks': [92, 88, 95, 90, 91], 'present': 'PPPP'},
        {'name': 'Emma', 'roll_no': 2, 'class': '10A', 'age': 15, 'gender': 'Female',
         'marks': [78, 85, 80, 82, 79], 'present': 'PPAP'},
        {'name': 'Michael', 'roll_no': 3, 'class': '10A', 'age': 16, 'gender': 'Male',
         'marks': [55, 62, 48, 60, 58], 'present': 'PAAP'},
        {'name': 'Sarah', 'roll_no': 4, 'class': '10A', 'age': 15, 'gender': 'Female',
         'marks': [70, 72, 68, 75, 71], 'present': 'PPPA'},

        # Class 10B
        {'name': 'Christopher', 'roll_no': 5, 'class': '10B', 'age': 16, 'gender': 'Male',
         'marks': [88, 84, 90, 86, 87], 'present': 'PPPP'},
        {'name': 'Amanda', 'roll_no': 6, 'class': '10B', 'age': 15, 'gender': 'Female',
         'marks': [65, 60, 63, 67, 62], 'present': 'APPP'},
        {'name': 'James', 'roll_no': 7, 'class': '10B', 'age': 16, 'gender': 'Male',
         'marks': [95, 97, 93, 96, 94], 'present': 'PPPP'},

        # Class 11A
        {'name': 'Andrew', 'roll_no': 8, 'class': '11A', 'age': 17, 'gender': 'Male',
         'marks': [81, 79, 83, 85, 80], 'present': 'PPAA'},
        {'name': 'Stephanie', 'roll_no': 9, 'class': '11A', 'age': 16, 'gender': 'Female',
         'marks': [74, 69, 72, 70, 71], 'present': 'PPPP'},
    ]

    roster = Roster()
    for data in sample_data:
        student = StudentRecord(
            name=data['name'],
            roll_no=data['roll_no'],
            student_class=data['class'],
            age=data['age'],
            gender=data['gender'],
            marks=[float(mark) for mark in data['marks']],
            attendance=[
                AttendanceEntry(date, AttendanceStatus.PRESENT if flag == 'P' else AttendanceStatus.ABSENT)
                for date, flag in zip(SAMPLE_DATES, data['present'])
            ]
        )
        roster.add(student)

    return roster


if __name__ == "__main__":
    roster = create_sample_roster()
    output_file = save_roster(roster, 'sample_students.txt')

    print(f"Sample roster created in '{output_file}'")
    print(f"Total students: {len(roster)}")
    print(f"Classes: {roster.classes()}")
    for student_class in roster.classes():
        stats = roster.statistics(student_class)
        print(f"Class {student_class}: {stats.count} students, grades {stats.grade_distribution}")
