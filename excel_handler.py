import openpyxl
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.workbook import Workbook
import os
import logging
from datetime import datetime
from typing import Optional

from exceptions import EmptyClassError
from reports import class_report
from roster import Roster


class ExcelHandler:
    def __init__(self, export_folder: str = 'exports'):
        self.logger = logging.getLogger(__name__)
        self.export_folder = export_folder

    def _grade_fill(self, grade: str) -> Optional[PatternFill]:
        colors = {'A': "D9EAD3", 'F': "FFE6E6"}
        color = colors.get(grade)
        if color is None:
            return None
        return PatternFill(start_color=color, end_color=color, fill_type="solid")

    def export_class_report(self, roster: Roster, student_class: str) -> Optional[str]:
        """
        Export the report of one class to an Excel file.
        Returns None if the class is empty or the workbook cannot be written.
        """
        try:
            rows = class_report(roster, student_class)
            stats = roster.statistics(student_class)

            wb = openpyxl.Workbook()
            ws = wb.active
            if ws is not None:
                ws.title = f"Class {student_class}"

            # Set up styles
            header_font = Font(bold=True, size=12)
            header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
            border = Border(
                left=Side(style='thin'),
                right=Side(style='thin'),
                top=Side(style='thin'),
                bottom=Side(style='thin')
            )
            center_alignment = Alignment(horizontal='center', vertical='center')

            ws['A1'] = f"Class Report - {student_class}"
            ws['A1'].font = Font(bold=True, size=14)
            ws.merge_cells('A1:F1')

            headers = ['Roll', 'Name', 'Grade', 'Percentage', 'GPA', 'Attendance %']
            for col, header in enumerate(headers, 1):
                cell = ws.cell(row=3, column=col, value=header)
                cell.font = header_font
                cell.fill = header_fill
                cell.border = border
                cell.alignment = center_alignment

            row_num = 4
            for row in rows:
                row_data = [
                    row['roll_no'],
                    row['name'],
                    row['grade'],
                    row['percentage'],
                    row['gpa'],
                    row['attendance_percentage'],
                ]
                fill = self._grade_fill(row['grade'])
                for col, value in enumerate(row_data, 1):
                    cell = ws.cell(row=row_num, column=col, value=value)
                    cell.border = border
                    cell.alignment = center_alignment
                    if fill is not None:
                        cell.fill = fill
                row_num += 1

            # Summary
            ws.cell(row=row_num + 1, column=1, value="Summary:")
            ws.cell(row=row_num + 1, column=1).font = Font(bold=True)

            summary = [
                f"Total Students: {stats.count}",
                f"Average Percentage: {stats.average_percentage:.2f}%",
                f"Average GPA (4.0 scale): {stats.average_gpa:.2f}",
                f"Average GPA (5.0 scale): {stats.average_gpa_five:.2f}",
                f"Average Attendance: {stats.average_attendance:.2f}%",
            ]
            for grade, count in stats.grade_distribution.items():
                summary.append(f"Grade {grade}: {count} students")

            for offset, line in enumerate(summary, 2):
                ws.cell(row=row_num + offset, column=1, value=line)

            # Auto-adjust column widths
            last_row = row_num + len(summary) + 1
            for col_idx in range(1, len(headers) + 1):
                max_length = 0
                column_letter = get_column_letter(col_idx)
                for row_idx in range(3, last_row + 1):
                    cell = ws.cell(row=row_idx, column=col_idx)
                    if cell.value is not None:
                        max_length = max(max_length, len(str(cell.value)))
                adjusted_width = min(max_length + 2, 50)  # Cap at 50 characters
                ws.column_dimensions[column_letter].width = adjusted_width

            os.makedirs(self.export_folder, exist_ok=True)
            filename = f"class_{student_class}_report.xlsx"
            filepath = os.path.join(self.export_folder, filename)
            wb.save(filepath)

            self.logger.info(f"Exported class report to {filepath}")
            return filepath

        except EmptyClassError as e:
            self.logger.error(f"Error exporting class report: {e.detail}")
            return None
        except Exception as e:
            self.logger.error(f"Error exporting class report: {str(e)}")
            return None

    def export_roster_workbook(self, roster: Roster) -> Optional[str]:
        """
        Create a workbook with every student and a per-class summary sheet.
        """
        try:
            wb = Workbook()
            ws = wb.active
            ws.title = "Students"

            headers = ['Roll', 'Name', 'Class', 'Age', 'Gender',
                       'Mark 1', 'Mark 2', 'Mark 3', 'Mark 4', 'Mark 5',
                       'Percentage', 'Grade', 'GPA', 'GPA (5.0)', 'Attendance %']
            for col, header in enumerate(headers, 1):
                cell = ws.cell(row=1, column=col, value=header)
                cell.font = Font(bold=True)
                cell.fill = PatternFill(start_color="D9EAD3", end_color="D9EAD3", fill_type="solid")

            for row_num, student in enumerate(roster, 2):
                row_data = [student.roll_no, student.name, student.student_class,
                            student.age, student.gender]
                row_data.extend(student.marks)
                row_data.extend([
                    round(student.percentage, 2),
                    student.grade,
                    round(student.gpa, 2),
                    round(student.gpa_5, 2),
                    round(student.attendance_percentage(), 2),
                ])
                for col, value in enumerate(row_data, 1):
                    ws.cell(row=row_num, column=col, value=value)

            for col_idx in range(1, len(headers) + 1):
                ws.column_dimensions[get_column_letter(col_idx)].width = 14

            # Class summary sheet
            summary_ws = wb.create_sheet("Class Summary")
            summary_ws.merge_cells('A1:G1')
            title_cell = summary_ws.cell(row=1, column=1, value="Student Roster - Class Summary")
            title_cell.font = Font(size=16, bold=True)
            title_cell.alignment = Alignment(horizontal='center')

            summary_ws.cell(row=2, column=1, value=f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
            summary_ws.cell(row=2, column=1).font = Font(size=10, italic=True)

            current_row = 4
            summary_headers = ['Class', 'Students', 'Avg %', 'Avg GPA', 'Avg GPA (5.0)',
                               'Avg Attendance %', 'Topper']
            for col, header in enumerate(summary_headers, 1):
                cell = summary_ws.cell(row=current_row, column=col, value=header)
                cell.font = Font(bold=True)
                cell.fill = PatternFill(start_color="D9EAD3", end_color="D9EAD3", fill_type="solid")
            current_row += 1

            for student_class in roster.classes():
                stats = roster.statistics(student_class)
                topper = roster.topper(student_class)
                row_data = [
                    student_class,
                    stats.count,
                    round(stats.average_percentage, 2),
                    round(stats.average_gpa, 2),
                    round(stats.average_gpa_five, 2),
                    round(stats.average_attendance, 2),
                    f"{topper.roll_no} - {topper.name}" if topper else "",
                ]
                for col, value in enumerate(row_data, 1):
                    summary_ws.cell(row=current_row, column=col, value=value)
                current_row += 1

            for col_idx in range(1, len(summary_headers) + 1):
                summary_ws.column_dimensions[get_column_letter(col_idx)].width = 18

            os.makedirs(self.export_folder, exist_ok=True)
            filename = f"roster_summary_{datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
            filepath = os.path.join(self.export_folder, filename)
            wb.save(filepath)

            self.logger.info(f"Created roster workbook: {filepath}")
            return filepath

        except Exception as e:
            self.logger.error(f"Error creating roster workbook: {str(e)}")
            return None
