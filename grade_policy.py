from typing import Callable, List, Sequence, Tuple

SUBJECT_COUNT = 5

# (minimum percentage, grade, gpa), checked top to bottom
GRADE_BANDS: List[Tuple[float, str, float]] = [
    (90, 'A', 4.0),
    (80, 'B', 3.0),
    (70, 'C', 2.0),
    (60, 'D', 1.0),
]
FAIL_GRADE = ('F', 0.0)

GradePolicy = Callable[[float], Tuple[str, float]]


def evaluate(percentage: float) -> Tuple[str, float]:
    """
    Map a percentage to its letter grade and 4.0-scale GPA.
    Out of range values are not clamped and fall through to F.
    """
    for minimum, grade, gpa in GRADE_BANDS:
        if percentage >= minimum:
            return grade, gpa
    return FAIL_GRADE


def grade_for(percentage: float) -> str:
    return evaluate(percentage)[0]


def gpa_for(percentage: float) -> float:
    return evaluate(percentage)[1]


def gpa_on_five_scale(gpa: float) -> float:
    """Scaled view used for reporting only, never stored."""
    return gpa * 5.0 / 4.0


def percentage_of(marks: Sequence[float]) -> float:
    return sum(marks) / SUBJECT_COUNT


def apply_grade_policy(record, policy: GradePolicy = evaluate):
    """
    Recompute percentage, grade and gpa of a record from its current marks.
    """
    record.percentage = percentage_of(record.marks)
    record.grade, record.gpa = policy(record.percentage)
    return record
