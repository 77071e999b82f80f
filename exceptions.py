"""Custom exceptions for the student roster."""
from typing import Optional


class RosterException(Exception):
    """Base exception for roster operations."""
    status_code = 400

    def __init__(self, detail: str, status_code: Optional[int] = None):
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class StudentNotFound(RosterException):
    """Raised when no student matches a roll number."""
    def __init__(self, roll_no: int):
        super().__init__(f"Student {roll_no} not found", status_code=404)
        self.roll_no = roll_no


class EmptyClassError(RosterException):
    """Raised when a class report or statistic is requested for a class with no students."""
    def __init__(self, student_class: str):
        super().__init__(f"No students found in class {student_class}", status_code=404)
        self.student_class = student_class


class MalformedImportRow(RosterException):
    """Raised when a CSV import row cannot be parsed. Aborts the whole import."""
    def __init__(self, line_number: Optional[int], message: str):
        detail = f"Line {line_number}: {message}" if line_number else message
        super().__init__(detail, status_code=400)
        self.line_number = line_number
