import os
import logging
from datetime import datetime
from typing import Iterator, List, Optional

import pandas as pd

from attendance import AttendanceEntry, AttendanceStatus
from exceptions import MalformedImportRow
from grade_policy import SUBJECT_COUNT
from models import StudentRecord
from roster import Roster

DEFAULT_STORE = 'students.txt'
DEFAULT_CSV = 'students.csv'
CSV_COLUMNS = ['Roll', 'Name', 'Class', 'Age', 'Gender', 'Percentage', 'Grade', 'GPA', 'Attendance%']


class FileHandler:
    """
    Reads and writes the roster.

    Native store: one whitespace separated line per student
        name roll class age gender m0 m1 m2 m3 m4 count [date status]*count gpa
    Values are not escaped, so names, classes and genders must be single tokens.
    """

    def __init__(self, export_folder: str = 'exports'):
        self.logger = logging.getLogger(__name__)
        self.export_folder = export_folder

    # --- native store ---

    def _format_record(self, student: StudentRecord) -> str:
        fields = [student.name, str(student.roll_no), student.student_class,
                  str(student.age), student.gender]
        fields.extend(repr(float(mark)) for mark in student.marks)
        fields.append(str(len(student.attendance)))
        for entry in student.attendance:
            fields.extend([entry.date, entry.status.value])
        fields.append(f"{student.gpa:.2f}")
        return ' '.join(fields)

    def save_roster(self, roster: Roster, filepath: str = DEFAULT_STORE) -> str:
        with open(filepath, 'w') as f:
            for student in roster:
                f.write(self._format_record(student) + '\n')

        self.logger.info(f"Saved {len(roster)} students to {filepath}")
        return filepath

    def _parse_record(self, tokens: Iterator[str]) -> Optional[StudentRecord]:
        """
        Consume one record from the token stream.
        Returns None at a clean end of input, raises StopIteration on a
        truncated record and ValueError on a bad field.
        """
        name = next(tokens, None)
        if name is None:
            return None
        roll_no = int(next(tokens))
        student_class = next(tokens)
        age = int(next(tokens))
        gender = next(tokens)
        marks = [float(next(tokens)) for _ in range(SUBJECT_COUNT)]

        entry_count = int(next(tokens))
        if entry_count < 0:
            raise ValueError(f"Negative attendance count {entry_count}")
        entries = []
        for _ in range(entry_count):
            date = next(tokens)
            status = AttendanceStatus.parse(next(tokens))
            entries.append(AttendanceEntry(date=date, status=status))

        # Stored gpa must be present but is recomputed by the roster
        float(next(tokens))

        return StudentRecord(
            name=name,
            roll_no=roll_no,
            student_class=student_class,
            age=age,
            gender=gender,
            marks=marks,
            attendance=entries
        )

    def load_roster(self, filepath: str = DEFAULT_STORE) -> Roster:
        """
        Load a roster from the native store.

        Parsing stops at the first incomplete or malformed record and the
        students read so far are returned. A missing file gives an empty roster.
        """
        roster = Roster()
        if not os.path.exists(filepath):
            self.logger.info(f"No roster file at {filepath}, starting empty")
            return roster

        with open(filepath) as f:
            tokens = iter(f.read().split())

        while True:
            try:
                record = self._parse_record(tokens)
            except StopIteration:
                self.logger.warning(f"Stopped loading {filepath} after {len(roster)} students: truncated record")
                break
            except ValueError as e:
                self.logger.warning(f"Stopped loading {filepath} after {len(roster)} students: {str(e)}")
                break
            if record is None:
                break
            roster.add(record)

        self.logger.info(f"Loaded {len(roster)} students from {filepath}")
        return roster

    def backup(self, roster: Roster, timestamp: Optional[datetime] = None) -> str:
        """
        Write a timestamped copy of the native store to the export folder.
        """
        timestamp = timestamp or datetime.now()
        filename = timestamp.strftime('backup_%Y%m%d_%H%M%S.txt')
        filepath = os.path.join(self.export_folder, filename)

        os.makedirs(self.export_folder, exist_ok=True)
        self.save_roster(roster, filepath)

        self.logger.info(f"Backup created: {filepath}")
        return filepath

    # --- CSV interchange ---

    def export_csv(self, roster: Roster, filepath: Optional[str] = None) -> str:
        if filepath is None:
            os.makedirs(self.export_folder, exist_ok=True)
            filepath = os.path.join(self.export_folder, DEFAULT_CSV)

        rows = []
        for student in roster:
            rows.append([
                student.roll_no,
                student.name,
                student.student_class,
                student.age,
                student.gender,
                f"{student.percentage:.2f}",
                student.grade,
                f"{student.gpa:.2f}",
                f"{student.attendance_percentage():.2f}%",
            ])

        df = pd.DataFrame(rows, columns=CSV_COLUMNS)
        df.to_csv(filepath, index=False)

        self.logger.info(f"Exported {len(rows)} students to {filepath}")
        return filepath

    def _parse_number(self, value: str, convert, column: str, line_number: int):
        try:
            return convert(value.strip())
        except ValueError:
            raise MalformedImportRow(line_number, f"{column} is not a number: {value!r}")

    def read_csv(self, filepath: str) -> List[StudentRecord]:
        """
        Parse a CSV export back into records without touching any roster.
        Any unparseable row raises MalformedImportRow.
        """
        try:
            df = pd.read_csv(filepath, dtype=str, keep_default_na=False, index_col=False)
        except pd.errors.EmptyDataError:
            self.logger.warning(f"CSV file {filepath} is empty")
            return []
        except pd.errors.ParserError as e:
            raise MalformedImportRow(None, str(e))

        if len(df.columns) < 8:
            raise MalformedImportRow(1, f"Expected columns {', '.join(CSV_COLUMNS)}")

        records = []
        # Line 1 is the header
        for line_number, row in enumerate(df.itertuples(index=False), start=2):
            # Short rows are padded with NaN by pandas
            if any(not isinstance(value, str) for value in row[:8]):
                raise MalformedImportRow(line_number, "missing fields")

            roll_no = self._parse_number(row[0], int, 'Roll', line_number)
            age = self._parse_number(row[3], int, 'Age', line_number)
            percentage = self._parse_number(row[5], float, 'Percentage', line_number)
            self._parse_number(row[7], float, 'GPA', line_number)

            records.append(StudentRecord(
                name=row[1],
                roll_no=roll_no,
                student_class=row[2],
                age=age,
                gender=row[4],
                # Subject marks are not exported; five copies of the
                # percentage reproduce it exactly
                marks=[percentage] * SUBJECT_COUNT
            ))

        return records

    def import_csv(self, roster: Roster, filepath: str) -> int:
        """
        Append every student from a CSV export to the roster.
        Grade and GPA are recomputed; nothing is added if any row is malformed.
        """
        records = self.read_csv(filepath)
        for record in records:
            roster.add(record)

        self.logger.info(f"Imported {len(records)} students from {filepath}")
        return len(records)


# Global wrapper functions for convenience
def load_roster(filepath: str = DEFAULT_STORE) -> Roster:
    return file_handler.load_roster(filepath)


def save_roster(roster: Roster, filepath: str = DEFAULT_STORE) -> str:
    return file_handler.save_roster(roster, filepath)


def export_csv(roster: Roster, filepath: Optional[str] = None) -> str:
    return file_handler.export_csv(roster, filepath)


def import_csv(roster: Roster, filepath: str) -> int:
    return file_handler.import_csv(roster, filepath)


def backup(roster: Roster) -> str:
    return file_handler.backup(roster)


# Global instance for import
file_handler = FileHandler()
