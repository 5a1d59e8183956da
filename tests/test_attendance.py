import datetime

import pytest
from django.utils import timezone

from apps.attendance.models import Attendance
from apps.attendance.services import (
    delete_attendance,
    record_attendance,
    reset_lesson_statuses,
    student_attendance_summary,
    students_for_lesson,
    update_attendance,
)
from apps.enrollments.models import Enrollment
from apps.lessons.models import Day, Lesson

MONDAY = datetime.date(2024, 9, 2)


@pytest.fixture
def lesson(offering):
    return Lesson.objects.create(
        subject_offering=offering, day=Day.MONDAY,
        start_time=datetime.time(9), end_time=datetime.time(10),
    )


def test_students_for_lesson_include_semester_students_and_enrollees(
        lesson, offering, make_student, semester2):
    in_semester = make_student("insemester")
    enrolled = make_student("enrolled", semester=semester2)
    Enrollment.objects.create(student=enrolled, subject_offering=offering)
    dropped = make_student("dropped", semester=semester2)
    Enrollment.objects.create(student=dropped, subject_offering=offering,
                              status=Enrollment.Status.DROPPED)

    students = set(students_for_lesson(lesson))
    assert students == {in_semester, enrolled}


def test_record_attendance_creates_rows_and_completes_lesson(lesson, make_student):
    first, second = make_student("first"), make_student("second")
    rows, replaced = record_attendance(lesson, MONDAY, {first.pk: True, second.pk: False})

    assert len(rows) == 2
    assert replaced is False
    lesson.refresh_from_db()
    assert lesson.status == Lesson.Status.COMPLETED
    assert Attendance.objects.get(student=first).present is True


def test_record_attendance_twice_replaces_rows(lesson, student):
    record_attendance(lesson, MONDAY, {student.pk: False})
    _rows, replaced = record_attendance(lesson, MONDAY, {student.pk: True})

    assert replaced is True
    assert Attendance.objects.filter(lesson=lesson, date=MONDAY).count() == 1
    assert Attendance.objects.get(lesson=lesson, date=MONDAY).present is True


def test_update_attendance_only_removes_given_ids(lesson, make_student):
    first, second = make_student("first"), make_student("second")
    record_attendance(lesson, MONDAY, {first.pk: True, second.pk: True})
    first_row = Attendance.objects.get(student=first)

    update_attendance(lesson, MONDAY, {first.pk: False}, attendance_ids=[first_row.pk])

    assert Attendance.objects.filter(lesson=lesson, date=MONDAY).count() == 2
    assert Attendance.objects.get(student=first).present is False


def test_update_attendance_with_stale_ids_replaces_current_rows(lesson, make_student):
    first, second = make_student("first"), make_student("second")
    record_attendance(lesson, MONDAY, {first.pk: True, second.pk: True})
    stale_ids = list(Attendance.objects.values_list("pk", flat=True))
    record_attendance(lesson, MONDAY, {first.pk: True, second.pk: True})

    update_attendance(lesson, MONDAY, {first.pk: False, second.pk: True}, attendance_ids=stale_ids)

    assert Attendance.objects.filter(lesson=lesson, date=MONDAY).count() == 2
    assert Attendance.objects.get(student=first).present is False


def test_delete_attendance(lesson, student):
    record_attendance(lesson, MONDAY, {student.pk: True})
    assert delete_attendance(lesson, MONDAY) == 1
    assert not Attendance.objects.exists()


def test_attendance_date_defaults_to_local_date(lesson, student):
    row = Attendance.objects.create(student=student, lesson=lesson, present=True)
    assert type(row.date) is datetime.date
    assert row.date == timezone.localdate()


def test_reset_lesson_statuses_resets_lessons_marked_yesterday(lesson, offering, student):
    record_attendance(lesson, MONDAY, {student.pk: True})
    older = Lesson.objects.create(
        subject_offering=offering, day=Day.TUESDAY,
        start_time=datetime.time(9), end_time=datetime.time(10),
        status=Lesson.Status.COMPLETED,
    )
    record_attendance(older, MONDAY - datetime.timedelta(days=6), {student.pk: True})

    assert reset_lesson_statuses(today=MONDAY + datetime.timedelta(days=1)) == 1
    lesson.refresh_from_db()
    older.refresh_from_db()
    assert lesson.status == Lesson.Status.SCHEDULED
    assert older.status == Lesson.Status.COMPLETED


def test_reset_lesson_statuses_task_runs_service(lesson, student):
    from tasks.system_tasks import reset_lesson_statuses_task

    record_attendance(lesson, timezone.localdate() - datetime.timedelta(days=1), {student.pk: True})
    result = reset_lesson_statuses_task.apply().get()

    assert result == {"success": True, "updated": 1}


def test_attendance_summary_percentages(lesson, student):
    record_attendance(lesson, MONDAY, {student.pk: True})
    record_attendance(lesson, MONDAY + datetime.timedelta(days=7), {student.pk: False})
    record_attendance(lesson, MONDAY + datetime.timedelta(days=14), {student.pk: True})
    record_attendance(lesson, MONDAY + datetime.timedelta(days=21), {student.pk: True})

    summary = student_attendance_summary(student)
    assert summary == [{
        "subjectOfferingId": lesson.subject_offering_id,
        "subject": "Algorithms",
        "totalLessons": 4,
        "attendedLessons": 3,
        "percentage": 75.0,
    }]


def test_attendance_sheet_post_records_marks(client, login, teacher, lesson, make_student):
    present, absent = make_student("present"), make_student("absent")
    login(teacher)
    response = client.post("/attendance/sheet/", {
        "lesson": lesson.pk,
        "date": MONDAY.isoformat(),
        "present": [str(present.pk)],
    })

    assert response.status_code == 302
    assert Attendance.objects.get(student=present).present is True
    assert Attendance.objects.get(student=absent).present is False


def test_attendance_sheet_post_with_stale_ids(client, login, teacher, lesson, make_student):
    present, absent = make_student("present"), make_student("absent")
    record_attendance(lesson, MONDAY, {present.pk: False, absent.pk: False})
    stale_ids = [str(pk) for pk in Attendance.objects.values_list("pk", flat=True)]
    # re-recorded elsewhere, so the ids above no longer exist
    record_attendance(lesson, MONDAY, {present.pk: False, absent.pk: True})
    login(teacher)

    response = client.post("/attendance/sheet/", {
        "lesson": lesson.pk,
        "date": MONDAY.isoformat(),
        "present": [str(present.pk)],
        "attendance_ids": stale_ids,
    })

    assert response.status_code == 302
    assert Attendance.objects.filter(lesson=lesson, date=MONDAY).count() == 2
    assert Attendance.objects.get(student=present).present is True
    assert Attendance.objects.get(student=absent).present is False


def test_attendance_api_for_own_parent(client, login, parent, student, lesson):
    record_attendance(lesson, MONDAY, {student.pk: True})
    login(parent)
    response = client.get(f"/api/students/{student.pk}/attendance/")

    assert response.status_code == 200
    assert response.json()["attendance"][0]["attendedLessons"] == 1


def test_attendance_api_forbidden_for_other_parent(client, login, make_parent, student):
    login(make_parent("stranger"))
    response = client.get(f"/api/students/{student.pk}/attendance/")
    assert response.status_code == 403


def test_attendance_api_requires_login(client, student):
    response = client.get(f"/api/students/{student.pk}/attendance/")
    assert response.status_code == 401
