import io
import os

import app as roster_app
from file_handler import FileHandler


def test_list_students(flask_client):
    response = flask_client.get('/students')

    assert response.status_code == 200
    assert [s['roll_no'] for s in response.get_json()] == [1, 2, 3]


def test_add_student(flask_client):
    response = flask_client.post('/students', json={
        'roll_no': 10, 'name': 'Lena', 'class': '10B', 'age': 16, 'gender': 'Female'
    })

    assert response.status_code == 201
    body = response.get_json()
    assert body['grade'] == 'F'
    assert body['marks'] == [0.0] * 5


def test_add_student_invalid(flask_client):
    response = flask_client.post('/students', json={'roll_no': 'ten', 'name': 'Lena'})
    assert response.status_code == 400


def test_get_student(flask_client):
    response = flask_client.get('/students/1')

    assert response.status_code == 200
    assert response.get_json()['attendance'][0] == {'date': '2024-03-01', 'status': 'Present'}


def test_unknown_student_is_404(flask_client):
    assert flask_client.get('/students/42').status_code == 404
    assert flask_client.delete('/students/42').status_code == 404
    assert flask_client.put('/students/42/marks', json={'marks': [1, 2, 3, 4, 5]}).status_code == 404
    response = flask_client.post('/students/42/attendance', json={'date': '2024-03-01', 'present': True})
    assert response.status_code == 404
    assert response.get_json()['error'] == 'Student 42 not found'


def test_update_student(flask_client):
    response = flask_client.put('/students/2', json={
        'name': 'Robert', 'class': '10B', 'age': 16, 'gender': 'Male'
    })

    assert response.status_code == 200
    assert response.get_json()['class'] == '10B'
    assert response.get_json()['percentage'] == 50.0


def test_delete_student(flask_client):
    response = flask_client.delete('/students/2')

    assert response.get_json() == {'deleted': 1}
    assert flask_client.get('/students/2').status_code == 404


def test_enter_marks(flask_client):
    response = flask_client.put('/students/2/marks', json={'marks': [80, 80, 80, 80, 80]})

    assert response.status_code == 200
    assert response.get_json()['grade'] == 'B'
    assert flask_client.put('/students/2/marks', json={'marks': [80]}).status_code == 400


def test_take_attendance_and_reports(flask_client):
    response = flask_client.post('/attendance', json={'date': '2024-05-02', 'present': {'1': True, '3': True}})
    assert response.get_json() == {'date': '2024-05-02', 'marked': 3}

    by_date = flask_client.get('/attendance/2024-05-02').get_json()
    assert [row['status'] for row in by_date] == ['Present', 'Absent', 'Present']

    monthly = flask_client.get('/attendance/monthly/05-2024').get_json()
    assert [row['roll_no'] for row in monthly] == [1, 2, 3]


def test_class_statistics_and_topper(flask_client):
    stats = flask_client.get('/classes/10A/statistics').get_json()
    assert stats['average_percentage'] == 70.0
    assert stats['grade_distribution'] == {'A': 1, 'F': 1}

    assert flask_client.get('/classes/10A/topper').get_json()['name'] == 'Alice'


def test_empty_class_is_404(flask_client):
    assert flask_client.get('/classes/12C/statistics').status_code == 404
    assert flask_client.get('/classes/12C/topper').status_code == 404
    assert flask_client.get('/classes/12C/report').status_code == 404


def test_sort_students(flask_client):
    flask_client.post('/students', json={
        'roll_no': 0, 'name': 'Zed', 'class': '10A', 'age': 15, 'gender': 'Male'
    })
    assert flask_client.post('/sort_students').get_json() == [0, 1, 2, 3]


def test_save_and_backup(flask_client):
    response = flask_client.post('/save')
    assert response.get_json()['saved'] == 3

    loaded = FileHandler().load_roster(roster_app.app.config['ROSTER_FILE'])
    assert len(loaded) == 3

    backup_name = flask_client.post('/backup').get_json()['file']
    assert os.path.exists(os.path.join(roster_app.app.config['EXPORT_FOLDER'], backup_name))


def test_export_csv(flask_client):
    response = flask_client.get('/export_csv')

    assert response.status_code == 200
    assert response.data.decode().splitlines()[1] == '1,Alice,10A,15,Female,90.00,A,4.00,75.00%'


def test_import_csv(flask_client):
    csv_data = b'Roll,Name,Class,Age,Gender,Percentage,Grade,GPA,Attendance%\n20,Mia,11A,17,Female,72.00,C,2.00,0.00%\n'
    response = flask_client.post('/import_csv', data={'file': (io.BytesIO(csv_data), 'new.csv')},
                                 content_type='multipart/form-data')

    assert response.get_json() == {'imported': 1}
    assert flask_client.get('/students/20').get_json()['grade'] == 'C'


def test_import_csv_bad_row(flask_client):
    csv_data = b'Roll,Name,Class,Age,Gender,Percentage,Grade,GPA,Attendance%\n20,Mia,11A,old,Female,72.00,C,2.00,0.00%\n'
    response = flask_client.post('/import_csv', data={'file': (io.BytesIO(csv_data), 'bad.csv')},
                                 content_type='multipart/form-data')

    assert response.status_code == 400
    assert len(flask_client.get('/students').get_json()) == 3


def test_class_report_workbook(flask_client):
    response = flask_client.get('/classes/10A/report.xlsx')
    assert response.status_code == 200
    assert flask_client.get('/classes/12C/report.xlsx').status_code == 404


def test_load_sample_data(flask_client):
    response = flask_client.post('/load_sample_data')
    assert response.get_json()['loaded'] == len(flask_client.get('/students').get_json())


def test_login_required_when_credentials_configured(flask_client):
    roster_app.app.config.update(ADMIN_USERNAME='admin', ADMIN_PASSWORD='secret')

    assert flask_client.get('/students').status_code == 401
    assert flask_client.post('/login', json={'username': 'admin', 'password': 'wrong'}).status_code == 401

    flask_client.post('/login', json={'username': 'admin', 'password': 'secret'})
    assert flask_client.get('/students').status_code == 200

    flask_client.post('/logout')
    assert flask_client.get('/students').status_code == 401
