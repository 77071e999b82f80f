import os
import logging
from functools import wraps
from flask import Flask, request, jsonify, send_file, session
from werkzeug.utils import secure_filename
from excel_handler import ExcelHandler
from exceptions import RosterException, StudentNotFound
from file_handler import FileHandler
from models import StudentRecord
from roster import Roster
from sample_students import create_sample_roster
import reports

# Set up logging
logging.basicConfig(level=logging.DEBUG)

app = Flask(__name__)
app.secret_key = os.environ.get("SESSION_SECRET", "dev-secret-key-change-in-production")

# Configuration
UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER', 'uploads')
EXPORT_FOLDER = os.environ.get('EXPORT_FOLDER', 'exports')
ALLOWED_EXTENSIONS = {'csv'}

app.config['UPLOAD_FOLDER'] = UPLOAD_FOLDER
app.config['EXPORT_FOLDER'] = EXPORT_FOLDER
app.config['ROSTER_FILE'] = os.environ.get('ROSTER_FILE', 'students.txt')
app.config['MAX_CONTENT_LENGTH'] = 16 * 1024 * 1024  # 16MB max file size

# Optional credentials; when unset every route is open
app.config['ADMIN_USERNAME'] = os.environ.get('ROSTER_ADMIN_USER')
app.config['ADMIN_PASSWORD'] = os.environ.get('ROSTER_ADMIN_PASSWORD')

# Ensure directories exist
os.makedirs(UPLOAD_FOLDER, exist_ok=True)
os.makedirs(EXPORT_FOLDER, exist_ok=True)


def file_handler():
    return FileHandler(app.config['EXPORT_FOLDER'])


def excel_handler():
    return ExcelHandler(app.config['EXPORT_FOLDER'])


def get_roster() -> Roster:
    if 'ROSTER' not in app.config:
        app.config['ROSTER'] = file_handler().load_roster(app.config['ROSTER_FILE'])
    return app.config['ROSTER']


def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def credentials_configured():
    return bool(app.config.get('ADMIN_USERNAME') and app.config.get('ADMIN_PASSWORD'))


def login_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if credentials_configured() and not session.get('authenticated'):
            return jsonify({'error': 'Authentication required'}), 401
        return view(*args, **kwargs)
    return wrapped


def student_fields(data):
    """Identity fields from a JSON body. Raises KeyError/ValueError on bad input."""
    return {
        'name': str(data['name']).strip(),
        'student_class': str(data['class']).strip(),
        'age': int(data['age']),
        'gender': str(data['gender']).strip(),
    }


@app.errorhandler(RosterException)
def handle_roster_exception(e):
    return jsonify({'error': e.detail}), e.status_code


@app.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    if not credentials_configured():
        return jsonify({'authenticated': True})

    if (data.get('username') == app.config['ADMIN_USERNAME']
            and data.get('password') == app.config['ADMIN_PASSWORD']):
        session['authenticated'] = True
        return jsonify({'authenticated': True})

    logging.warning("Failed login attempt")
    return jsonify({'error': 'Invalid credentials'}), 401


@app.route('/logout', methods=['POST'])
def logout():
    session.pop('authenticated', None)
    return jsonify({'authenticated': False})


@app.route('/students', methods=['GET'])
@login_required
def list_students():
    return jsonify([s.to_dict() for s in get_roster()])


@app.route('/students', methods=['POST'])
@login_required
def add_student():
    try:
        data = request.get_json(silent=True) or {}
        fields = student_fields(data)
        roll_no = int(data['roll_no'])
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({'error': f'Invalid student data: {str(e)}'}), 400

    student = get_roster().add(StudentRecord(roll_no=roll_no, **fields))
    return jsonify(student.to_dict()), 201


@app.route('/students/<int:roll_no>', methods=['GET'])
@login_required
def get_student(roll_no):
    student = get_roster().find_by_roll(roll_no)
    if student is None:
        raise StudentNotFound(roll_no)
    return jsonify(reports.student_detail(student))


@app.route('/students/<int:roll_no>', methods=['PUT'])
@login_required
def update_student(roll_no):
    try:
        fields = student_fields(request.get_json(silent=True) or {})
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({'error': f'Invalid student data: {str(e)}'}), 400

    student = get_roster().update(roll_no, **fields)
    return jsonify(student.to_dict())


@app.route('/students/<int:roll_no>', methods=['DELETE'])
@login_required
def delete_student(roll_no):
    removed = get_roster().delete(roll_no)
    return jsonify({'deleted': removed})


@app.route('/students/<int:roll_no>/marks', methods=['PUT'])
@login_required
def enter_marks(roll_no):
    data = request.get_json(silent=True) or {}
    try:
        marks = [float(mark) for mark in data['marks']]
        student = get_roster().set_marks(roll_no, marks)
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({'error': f'Invalid marks: {str(e)}'}), 400

    return jsonify(student.to_dict())


@app.route('/students/<int:roll_no>/attendance', methods=['POST'])
@login_required
def mark_student_attendance(roll_no):
    data = request.get_json(silent=True) or {}
    if 'date' not in data:
        return jsonify({'error': 'date is required'}), 400

    student = get_roster().mark_attendance(roll_no, data['date'], bool(data.get('present', False)))
    return jsonify(reports.student_detail(student))


@app.route('/attendance', methods=['POST'])
@login_required
def take_attendance():
    """Mark every student for one date; rolls missing from `present` are absent."""
    data = request.get_json(silent=True) or {}
    if 'date' not in data:
        return jsonify({'error': 'date is required'}), 400

    try:
        statuses = {int(roll): bool(flag) for roll, flag in (data.get('present') or {}).items()}
    except (AttributeError, ValueError) as e:
        return jsonify({'error': f'Invalid attendance data: {str(e)}'}), 400

    marked = get_roster().take_attendance(data['date'], statuses)
    return jsonify({'date': data['date'], 'marked': marked})


@app.route('/attendance/monthly/<month_year>')
@login_required
def monthly_attendance(month_year):
    return jsonify(reports.monthly_attendance(get_roster(), month_year))


@app.route('/attendance/<date>')
@login_required
def attendance_by_date(date):
    return jsonify(reports.attendance_on_date(get_roster(), date))


@app.route('/sort_students', methods=['POST'])
@login_required
def sort_students():
    roster = get_roster()
    roster.sort_by_roll()
    return jsonify([s.roll_no for s in roster])


@app.route('/gpa_report')
@login_required
def gpa_report():
    return jsonify(reports.gpa_report(get_roster()))


@app.route('/classes/<student_class>/report')
@login_required
def class_report(student_class):
    return jsonify(reports.class_report(get_roster(), student_class))


@app.route('/classes/<student_class>/statistics')
@login_required
def class_statistics(student_class):
    return jsonify(get_roster().statistics(student_class).to_dict())


@app.route('/classes/<student_class>/topper')
@login_required
def class_topper(student_class):
    topper = get_roster().topper(student_class)
    if topper is None:
        return jsonify({'error': f'No students found in class {student_class}'}), 404
    return jsonify(topper.to_dict())


@app.route('/classes/<student_class>/report.xlsx')
@login_required
def export_class_report(student_class):
    try:
        filepath = excel_handler().export_class_report(get_roster(), student_class)
        if filepath and os.path.exists(filepath):
            return send_file(os.path.abspath(filepath), as_attachment=True,
                             download_name=os.path.basename(filepath))
        return jsonify({'error': f'Could not export report for class {student_class}'}), 404

    except Exception as e:
        logging.error(f"Error exporting class report: {str(e)}")
        return jsonify({'error': 'Error exporting class report'}), 500


@app.route('/export_roster_workbook')
@login_required
def export_roster_workbook():
    try:
        filepath = excel_handler().export_roster_workbook(get_roster())
        if filepath and os.path.exists(filepath):
            return send_file(os.path.abspath(filepath), as_attachment=True,
                             download_name=os.path.basename(filepath))
        return jsonify({'error': 'Error exporting roster workbook'}), 500

    except Exception as e:
        logging.error(f"Error exporting roster workbook: {str(e)}")
        return jsonify({'error': 'Error exporting roster workbook'}), 500


@app.route('/save', methods=['POST'])
@login_required
def save_data():
    try:
        filepath = file_handler().save_roster(get_roster(), app.config['ROSTER_FILE'])
        return jsonify({'saved': len(get_roster()), 'file': filepath})

    except Exception as e:
        logging.error(f"Error saving roster: {str(e)}")
        return jsonify({'error': 'Error saving roster'}), 500


@app.route('/backup', methods=['POST'])
@login_required
def backup_data():
    try:
        filepath = file_handler().backup(get_roster())
        return jsonify({'file': os.path.basename(filepath)})

    except Exception as e:
        logging.error(f"Error creating backup: {str(e)}")
        return jsonify({'error': 'Error creating backup'}), 500


@app.route('/export_csv')
@login_required
def export_csv():
    try:
        filepath = file_handler().export_csv(get_roster())
        return send_file(os.path.abspath(filepath), as_attachment=True,
                         download_name=os.path.basename(filepath))

    except Exception as e:
        logging.error(f"Error exporting CSV: {str(e)}")
        return jsonify({'error': 'Error exporting CSV'}), 500


@app.route('/import_csv', methods=['POST'])
@login_required
def import_csv():
    if 'file' not in request.files:
        return jsonify({'error': 'No file selected'}), 400

    file = request.files['file']
    if not file.filename or not allowed_file(file.filename):
        return jsonify({'error': 'Invalid file type. Please upload a .csv file'}), 400

    filename = secure_filename(file.filename)
    filepath = os.path.join(app.config['UPLOAD_FOLDER'], filename)
    os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)
    file.save(filepath)

    # MalformedImportRow propagates to the error handler; nothing is added
    imported = file_handler().import_csv(get_roster(), filepath)
    return jsonify({'imported': imported})


@app.route('/load_sample_data', methods=['POST'])
@login_required
def load_sample_data():
    app.config['ROSTER'] = create_sample_roster()
    return jsonify({'loaded': len(app.config['ROSTER'])})


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=5000, debug=True)
