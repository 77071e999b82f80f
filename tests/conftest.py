import pytest

from models import StudentRecord
from roster import Roster


def make_student(roll_no, name='Student', student_class='10A', marks=None, age=15, gender='Male'):
    return StudentRecord(
        name=name,
        roll_no=roll_no,
        student_class=student_class,
        age=age,
        gender=gender,
        marks=list(marks) if marks is not None else [0.0] * 5
    )


@pytest.fixture
def roster():
    """Two 10A students (A and F grades) and one 10B student."""
    roster = Roster()
    roster.add(make_student(1, 'Alice', '10A', [90, 90, 90, 90, 90], gender='Female'))
    roster.add(make_student(2, 'Bob', '10A', [50, 50, 50, 50, 50]))
    roster.add(make_student(3, 'Chen', '10B', [82, 78, 85, 80, 75], age=16))

    alice = roster.find_by_roll(1)
    for date, present in [('2024-03-01', True), ('2024-03-02', True),
                          ('2024-03-03', True), ('2024-04-01', False)]:
        alice.mark_attendance(date, present)
    roster.find_by_roll(2).mark_attendance('2024-03-01', False)
    return roster


@pytest.fixture
def flask_client(tmp_path, roster):
    import app as roster_app

    flask_app = roster_app.app
    flask_app.config.update(
        TESTING=True,
        ROSTER_FILE=str(tmp_path / 'students.txt'),
        EXPORT_FOLDER=str(tmp_path / 'exports'),
        UPLOAD_FOLDER=str(tmp_path / 'uploads'),
        ADMIN_USERNAME=None,
        ADMIN_PASSWORD=None,
        ROSTER=roster,
    )
    with flask_app.test_client() as client:
        yield client
    flask_app.config.pop('ROSTER', None)
