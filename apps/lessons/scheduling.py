"""
Lesson timetable rules.

Two lessons overlap when ``start_a < end_b and end_a > start_b``; lessons that
only touch (one ends when the other starts) do not conflict.
"""
import logging
from collections import OrderedDict

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils.translation import gettext_lazy as _

from .models import Day, Lesson

logger = logging.getLogger(__name__)

SLOT_TAKEN = _("There is already a lesson scheduled during this time slot.")
TEACHER_BUSY = _("The teacher is already assigned to another lesson during this time slot.")
INVALID_RANGE = _("End time must be after start time.")


def overlapping(queryset, start_time, end_time):
    return queryset.filter(start_time__lt=end_time, end_time__gt=start_time)


def check_lesson_conflicts(*, subject_offering, day, start_time, end_time,
                           exclude_pk=None):
    """
    Raise ValidationError when a lesson at this slot would clash with an
    existing lesson of the same offering or of the same teacher.
    """
    if start_time >= end_time:
        raise ValidationError(INVALID_RANGE)

    same_day = Lesson.objects.filter(day=day)
    if exclude_pk:
        same_day = same_day.exclude(pk=exclude_pk)

    if overlapping(same_day.filter(subject_offering=subject_offering),
                   start_time, end_time).exists():
        raise ValidationError(SLOT_TAKEN)

    if overlapping(same_day.filter(subject_offering__teacher_id=subject_offering.teacher_id),
                   start_time, end_time).exists():
        raise ValidationError(TEACHER_BUSY)


def create_weekly_schedule(semester, periods):
    """
    Create all ``periods`` for a semester or none of them.

    Each period is a dict with ``day``, ``subject_offering``, ``start_time``
    and ``end_time``. Periods are written one by one inside a single
    transaction, so each one is checked against the stored lessons and the
    periods already accepted from the same batch; the first conflict rolls
    the whole batch back.
    """
    if not periods:
        raise ValidationError(_("Add at least one period to the schedule."))

    lessons = []
    with transaction.atomic():
        for index, period in enumerate(periods, start=1):
            offering = period["subject_offering"]
            if offering.semester_id != semester.pk:
                raise ValidationError(
                    _("Period %(index)s: %(offering)s is not offered in %(semester)s."),
                    params={"index": index, "offering": offering, "semester": semester},
                )
            try:
                check_lesson_conflicts(
                    subject_offering=offering,
                    day=period["day"],
                    start_time=period["start_time"],
                    end_time=period["end_time"],
                )
            except ValidationError as e:
                raise ValidationError(
                    _("Period %(index)s: %(error)s"),
                    params={"index": index, "error": " ".join(e.messages)},
                )
            lessons.append(Lesson.objects.create(
                subject_offering=offering,
                day=period["day"],
                start_time=period["start_time"],
                end_time=period["end_time"],
            ))

    logger.info("Weekly schedule for %s created with %s lessons", semester, len(lessons))
    return lessons


def group_by_day(lessons):
    """Group lessons into an ordered Monday..Friday mapping sorted by start time"""
    timetable = OrderedDict((day, []) for day in Day.values)
    for lesson in lessons:
        timetable[lesson.day].append(lesson)
    for day_lessons in timetable.values():
        day_lessons.sort(key=lambda lesson: lesson.start_time)
    return timetable
