import logging
from collections import Counter
from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Mapping, Optional, Sequence

from exceptions import EmptyClassError, StudentNotFound
from grade_policy import SUBJECT_COUNT, GradePolicy, apply_grade_policy, evaluate, gpa_on_five_scale
from models import StudentRecord


@dataclass
class ClassStatistics:
    student_class: str
    count: int
    average_percentage: float
    average_gpa: float
    average_gpa_five: float
    average_attendance: float
    grade_distribution: Dict[str, int]

    def to_dict(self) -> Dict:
        return {
            'class': self.student_class,
            'count': self.count,
            'average_percentage': round(self.average_percentage, 2),
            'average_gpa': round(self.average_gpa, 2),
            'average_gpa_5': round(self.average_gpa_five, 2),
            'average_attendance': round(self.average_attendance, 2),
            'grade_distribution': dict(self.grade_distribution),
        }


class Roster:
    """
    Ordered collection of student records.

    Roll numbers are the lookup key but are not required to be unique;
    lookups scan in order and the first match wins.
    """

    def __init__(self, students: Optional[List[StudentRecord]] = None,
                 grade_policy: GradePolicy = evaluate):
        self.logger = logging.getLogger(__name__)
        self.grade_policy = grade_policy
        self.students: List[StudentRecord] = []
        for student in students or []:
            self.add(student)

    def __len__(self) -> int:
        return len(self.students)

    def __iter__(self) -> Iterator[StudentRecord]:
        return iter(self.students)

    def recalculate(self, record: StudentRecord) -> StudentRecord:
        return apply_grade_policy(record, self.grade_policy)

    def add(self, record: StudentRecord) -> StudentRecord:
        self.recalculate(record)
        self.students.append(record)
        return record

    def _index_of(self, roll_no: int) -> int:
        for index, student in enumerate(self.students):
            if student.roll_no == roll_no:
                return index
        raise StudentNotFound(roll_no)

    def find_by_roll(self, roll_no: int) -> Optional[StudentRecord]:
        try:
            return self.students[self._index_of(roll_no)]
        except StudentNotFound:
            return None

    def update(self, roll_no: int, name: str, student_class: str,
               age: int, gender: str) -> StudentRecord:
        """
        Overwrite the identity fields of the first student with this roll.
        Marks and attendance are kept.
        """
        index = self._index_of(roll_no)
        updated = replace(
            self.students[index],
            name=name,
            student_class=student_class,
            age=age,
            gender=gender
        )
        self.students[index] = self.recalculate(updated)
        return updated

    def delete(self, roll_no: int) -> int:
        """Remove every student with this roll. Returns how many were removed."""
        original_count = len(self.students)
        self.students = [s for s in self.students if s.roll_no != roll_no]

        removed = original_count - len(self.students)
        if removed == 0:
            raise StudentNotFound(roll_no)

        self.logger.info(f"Deleted {removed} student(s) with roll {roll_no}")
        return removed

    def set_marks(self, roll_no: int, marks: Sequence[float]) -> StudentRecord:
        if len(marks) != SUBJECT_COUNT:
            raise ValueError(f"Expected {SUBJECT_COUNT} marks, got {len(marks)}")

        index = self._index_of(roll_no)
        updated = replace(self.students[index], marks=[float(mark) for mark in marks])
        self.students[index] = self.recalculate(updated)
        return updated

    def mark_attendance(self, roll_no: int, date: str, present: bool) -> StudentRecord:
        student = self.students[self._index_of(roll_no)]
        student.mark_attendance(date, present)
        return student

    def take_attendance(self, date: str, statuses: Mapping[int, bool]) -> int:
        """
        Record one entry for every student on the given date.
        Students missing from statuses are marked absent.
        """
        for student in self.students:
            student.mark_attendance(date, bool(statuses.get(student.roll_no, False)))

        self.logger.info(f"Attendance marked for {date}")
        return len(self.students)

    def sort_by_roll(self):
        # list.sort is stable, so duplicate rolls keep their relative order
        self.students.sort(key=lambda s: s.roll_no)

    def students_in_class(self, student_class: str) -> List[StudentRecord]:
        return [s for s in self.students if s.student_class == student_class]

    def classes(self) -> List[str]:
        return sorted(set(s.student_class for s in self.students))

    def statistics(self, student_class: str) -> ClassStatistics:
        class_students = self.students_in_class(student_class)
        if not class_students:
            raise EmptyClassError(student_class)

        count = len(class_students)
        average_gpa = sum(s.gpa for s in class_students) / count
        grade_count = Counter(s.grade for s in class_students)

        return ClassStatistics(
            student_class=student_class,
            count=count,
            average_percentage=sum(s.percentage for s in class_students) / count,
            average_gpa=average_gpa,
            average_gpa_five=gpa_on_five_scale(average_gpa),
            average_attendance=sum(s.attendance_percentage() for s in class_students) / count,
            grade_distribution={grade: grade_count[grade] for grade in sorted(grade_count)}
        )

    def topper(self, student_class: str) -> Optional[StudentRecord]:
        """Highest percentage in the class; the earliest student wins a tie."""
        topper = None
        max_percentage = -1.0
        for student in self.students:
            if student.student_class == student_class and student.percentage > max_percentage:
                max_percentage = student.percentage
                topper = student
        return topper
