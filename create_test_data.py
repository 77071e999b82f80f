#!/usr/bin/env python3
"""
Create a large random roster for load testing the student roster manager.
"""
import random
from datetime import date, timedelta

from faker import Faker

from file_handler import export_csv, save_roster
from models import StudentRecord
from roster import Roster

CLASSES = ['6A', '6B', '7A', '7B', '8A', '8B', '9A', '9B', '10A', '10B']


def school_days(start: date, count: int):
    """The first `count` weekdays from start, as YYYY-MM-DD strings."""
    days = []
    current = start
    while len(days) < count:
        if current.weekday() < 5:
            days.append(current.isoformat())
        current += timedelta(days=1)
    return days


def create_random_roster(count=100, seed=None, start=date(2024, 3, 1), days=20):
    """Create a roster of `count` students with random marks and attendance."""
    fake = Faker('en_IN')  # Indian locale for better names
    rng = random.Random(seed)
    if seed is not None:
        fake.seed_instance(seed)

    dates = school_days(start, days)
    roster = Roster()

    for i in range(count):
        gender = rng.choice(['Male', 'Female'])
        if gender == 'Male':
            first_name = fake.first_name_male()
        else:
            first_name = fake.first_name_female()

        # The native store is whitespace delimited, so keep names to one token
        name = ''.join(first_name.split())

        # Each student has a base ability, marks scatter around it
        ability = rng.uniform(40, 98)
        marks = [round(min(100.0, max(0.0, rng.gauss(ability, 6))), 1) for _ in range(5)]

        student = StudentRecord(
            name=name,
            roll_no=i + 1,
            student_class=rng.choice(CLASSES),
            age=rng.randint(11, 17),
            gender=gender,
            marks=marks
        )
        attendance_rate = rng.uniform(0.6, 1.0)
        for day in dates:
            student.mark_attendance(day, rng.random() < attendance_rate)

        roster.add(student)

    return roster


if __name__ == "__main__":
    print("Creating test data for the student roster")
    print("=" * 50)

    roster = create_random_roster(count=300)
    output_file = save_roster(roster, 'test_students.txt')
    csv_file = export_csv(roster, 'test_students.csv')

    print(f"Test roster created: '{output_file}' and '{csv_file}'")
    print(f"Total Students: {len(roster)}")
    print("\nClass-wise Distribution:")
    for student_class in roster.classes():
        stats = roster.statistics(student_class)
        print(f"   Class {student_class}: {stats.count} students, "
              f"avg {stats.average_percentage:.1f}%, attendance {stats.average_attendance:.1f}%")
