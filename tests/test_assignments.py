import datetime

import pytest
from django.core.exceptions import ValidationError
from django.utils import timezone

from apps.announcements.models import Announcement
from apps.assignments.models import Assignment
from apps.corecode.models import Course


def make_assignment(title, course=None, semester=None, days=7):
    start = timezone.now()
    return Assignment.objects.create(
        title=title, start_date=start, due_date=start + datetime.timedelta(days=days),
        course=course, semester=semester,
    )


def test_for_student_matches_open_and_targeted_assignments(student, course, semester1, semester2):
    other_course = Course.objects.create(name="History", duration=1)
    everyone = make_assignment("Everyone")
    same_course = make_assignment("Course wide", course=course)
    same_semester = make_assignment("Semester one", course=course, semester=semester1)
    make_assignment("Semester two", course=course, semester=semester2)
    make_assignment("Other course", course=other_course)

    titles = set(Assignment.objects.for_student(student).values_list("title", flat=True))

    assert titles == {everyone.title, same_course.title, same_semester.title}


def test_due_date_before_start_is_rejected(course):
    start = timezone.now()
    assignment = Assignment(title="Essay", start_date=start,
                            due_date=start - datetime.timedelta(hours=1), course=course)
    with pytest.raises(ValidationError) as exc:
        assignment.full_clean()
    assert "due_date" in exc.value.message_dict


def test_due_date_equal_to_start_is_allowed(course):
    start = timezone.now()
    Assignment(title="Quiz", start_date=start, due_date=start, course=course).full_clean()


def test_semester_of_another_course_is_rejected(course, semester1):
    other_course = Course.objects.create(name="History", duration=1)
    start = timezone.now()
    assignment = Assignment(title="Essay", start_date=start, due_date=start,
                            course=other_course, semester=semester1)
    with pytest.raises(ValidationError) as exc:
        assignment.full_clean()
    assert "semester" in exc.value.message_dict


@pytest.mark.django_db
def test_active_announcements_include_both_boundary_days():
    day = datetime.date(2024, 9, 10)
    one_day = datetime.timedelta(days=1)
    Announcement.objects.create(title="Starts today", description="-",
                                start_date=day, end_date=day + one_day)
    Announcement.objects.create(title="Ends today", description="-",
                                start_date=day - one_day, end_date=day)
    Announcement.objects.create(title="Ended", description="-",
                                start_date=day - one_day * 3, end_date=day - one_day)
    Announcement.objects.create(title="Upcoming", description="-",
                                start_date=day + one_day, end_date=day + one_day * 3)

    titles = set(Announcement.objects.active(day).values_list("title", flat=True))

    assert titles == {"Starts today", "Ends today"}


@pytest.mark.django_db
def test_active_announcements_default_to_today():
    Announcement.objects.create(title="Today", description="-")
    assert [a.title for a in Announcement.objects.active()] == ["Today"]
