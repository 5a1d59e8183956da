import datetime

import pytest
from django.core.exceptions import ValidationError

from apps.corecode.models import Subject, SubjectOffering
from apps.lessons.models import Day, Lesson
from apps.lessons.scheduling import (
    INVALID_RANGE,
    SLOT_TAKEN,
    TEACHER_BUSY,
    check_lesson_conflicts,
    create_weekly_schedule,
    group_by_day,
)


def t(value):
    return datetime.time.fromisoformat(value)


@pytest.fixture
def lesson(offering):
    return Lesson.objects.create(
        subject_offering=offering, day=Day.MONDAY, start_time=t("09:00"), end_time=t("10:00")
    )


@pytest.fixture
def other_offering(semester1, teacher):
    return SubjectOffering.objects.create(
        subject=Subject.objects.create(name="Databases"), semester=semester1, teacher=teacher
    )


def test_overlap_with_same_offering_is_rejected(lesson, offering):
    with pytest.raises(ValidationError) as exc:
        check_lesson_conflicts(subject_offering=offering, day=Day.MONDAY,
                               start_time=t("09:30"), end_time=t("10:30"))
    assert exc.value.messages == [str(SLOT_TAKEN)]


def test_overlap_with_same_teacher_is_rejected(lesson, other_offering):
    with pytest.raises(ValidationError) as exc:
        check_lesson_conflicts(subject_offering=other_offering, day=Day.MONDAY,
                               start_time=t("08:30"), end_time=t("09:30"))
    assert exc.value.messages == [str(TEACHER_BUSY)]


def test_touching_lessons_do_not_conflict(lesson, offering):
    check_lesson_conflicts(subject_offering=offering, day=Day.MONDAY,
                           start_time=t("10:00"), end_time=t("11:00"))


def test_same_time_on_another_day_is_allowed(lesson, offering):
    check_lesson_conflicts(subject_offering=offering, day=Day.TUESDAY,
                           start_time=t("09:00"), end_time=t("10:00"))


def test_other_teacher_may_use_the_slot(lesson, semester1, make_teacher):
    offering = SubjectOffering.objects.create(
        subject=Subject.objects.create(name="Networks"), semester=semester1,
        teacher=make_teacher("teacher2"),
    )
    check_lesson_conflicts(subject_offering=offering, day=Day.MONDAY,
                           start_time=t("09:00"), end_time=t("10:00"))


def test_updating_a_lesson_ignores_itself(lesson, offering):
    check_lesson_conflicts(subject_offering=offering, day=Day.MONDAY,
                           start_time=t("09:15"), end_time=t("10:15"), exclude_pk=lesson.pk)


def test_end_before_start_is_rejected(offering):
    with pytest.raises(ValidationError) as exc:
        check_lesson_conflicts(subject_offering=offering, day=Day.MONDAY,
                               start_time=t("11:00"), end_time=t("10:00"))
    assert exc.value.messages == [str(INVALID_RANGE)]


def test_lesson_full_clean_runs_conflict_check(lesson, offering):
    clash = Lesson(subject_offering=offering, day=Day.MONDAY,
                   start_time=t("09:00"), end_time=t("09:45"))
    with pytest.raises(ValidationError):
        clash.full_clean()


def test_weekly_schedule_creates_all_periods(semester1, offering, other_offering):
    lessons = create_weekly_schedule(semester1, [
        {"day": Day.MONDAY, "subject_offering": offering, "start_time": t("09:00"), "end_time": t("10:00")},
        {"day": Day.MONDAY, "subject_offering": other_offering, "start_time": t("10:00"), "end_time": t("11:00")},
        {"day": Day.WEDNESDAY, "subject_offering": offering, "start_time": t("09:00"), "end_time": t("10:00")},
    ])
    assert len(lessons) == 3
    assert Lesson.objects.count() == 3


def test_weekly_schedule_conflict_inside_batch_rolls_back(semester1, offering, other_offering):
    with pytest.raises(ValidationError) as exc:
        create_weekly_schedule(semester1, [
            {"day": Day.MONDAY, "subject_offering": offering, "start_time": t("09:00"), "end_time": t("10:00")},
            {"day": Day.MONDAY, "subject_offering": other_offering, "start_time": t("09:30"), "end_time": t("10:30")},
        ])
    assert exc.value.messages[0].startswith("Period 2:")
    assert Lesson.objects.count() == 0


def test_weekly_schedule_rejects_offering_of_other_semester(semester2, offering):
    with pytest.raises(ValidationError):
        create_weekly_schedule(semester2, [
            {"day": Day.FRIDAY, "subject_offering": offering, "start_time": t("09:00"), "end_time": t("10:00")},
        ])
    assert Lesson.objects.count() == 0


def test_weekly_schedule_requires_periods(semester1):
    with pytest.raises(ValidationError):
        create_weekly_schedule(semester1, [])


def test_group_by_day_orders_days_and_times(offering):
    late = Lesson.objects.create(subject_offering=offering, day=Day.FRIDAY,
                                 start_time=t("14:00"), end_time=t("15:00"))
    early = Lesson.objects.create(subject_offering=offering, day=Day.FRIDAY,
                                  start_time=t("08:00"), end_time=t("09:00"))
    timetable = group_by_day([late, early])

    assert list(timetable) == list(Day.values)
    assert timetable[Day.FRIDAY] == [early, late]
    assert timetable[Day.MONDAY] == []


def test_weekly_schedule_view_creates_lessons(principal_client, semester1, course, offering):
    response = principal_client.post("/lessons/weekly-schedule/", {
        "course": course.pk,
        "semester": semester1.pk,
        "periods-TOTAL_FORMS": "1",
        "periods-INITIAL_FORMS": "0",
        "periods-MIN_NUM_FORMS": "0",
        "periods-MAX_NUM_FORMS": "1000",
        "periods-0-day": Day.TUESDAY,
        "periods-0-subject_offering": offering.pk,
        "periods-0-start_time": "13:00",
        "periods-0-end_time": "14:00",
    })
    assert response.status_code == 302
    assert Lesson.objects.filter(day=Day.TUESDAY).count() == 1


def test_teacher_timetable_shows_only_own_lessons(client, login, lesson, semester1, make_teacher):
    other = make_teacher("teacher2")
    Lesson.objects.create(
        subject_offering=SubjectOffering.objects.create(
            subject=Subject.objects.create(name="Graphics"), semester=semester1, teacher=other,
        ),
        day=Day.THURSDAY, start_time=t("09:00"), end_time=t("10:00"),
    )
    login(other)
    response = client.get("/lessons/")
    assert response.status_code == 200
    assert b"Graphics" in response.content
    assert b"Algorithms" not in response.content
