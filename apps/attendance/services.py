"""
Attendance bookkeeping for lessons
"""
import logging
from datetime import timedelta

from django.db import transaction
from django.db.models import Count, Q
from django.utils import timezone

from apps.enrollments.models import Enrollment
from apps.lessons.models import Lesson
from apps.students.models import Student

from .models import Attendance

logger = logging.getLogger(__name__)


def students_for_lesson(lesson):
    """Students expected at a lesson: active enrollees or the offering's semester"""
    offering = lesson.subject_offering
    return Student.objects.filter(
        Q(enrollments__subject_offering=offering,
          enrollments__status=Enrollment.Status.ACTIVE)
        | Q(current_semester_id=offering.semester_id)
    ).distinct().order_by('surname', 'name')


def _create_rows(lesson, date, marks):
    return Attendance.objects.bulk_create([
        Attendance(student_id=student_id, lesson=lesson, date=date, present=present)
        for student_id, present in marks.items()
    ])


def record_attendance(lesson, date, marks):
    """
    Store ``marks`` ({student_id: present}) for a lesson on a date.

    Existing rows for the same lesson and date are replaced and the lesson is
    marked completed. Returns ``(rows, replaced)``.
    """
    with transaction.atomic():
        deleted, _ = Attendance.objects.filter(lesson=lesson, date=date).delete()
        rows = _create_rows(lesson, date, marks)
        Lesson.objects.filter(pk=lesson.pk).update(status=Lesson.Status.COMPLETED)
    lesson.status = Lesson.Status.COMPLETED

    logger.info("Attendance for lesson %s on %s %s (%s rows)",
                lesson.pk, date, "replaced" if deleted else "created", len(rows))
    return rows, bool(deleted)


def update_attendance(lesson, date, marks, attendance_ids=None):
    """
    Recreate attendance rows. Without ``attendance_ids`` every row of the
    lesson on that date is removed first; with them, those rows and the
    current rows of the students in ``marks`` are removed.
    """
    with transaction.atomic():
        existing = Attendance.objects.filter(lesson=lesson, date=date)
        if attendance_ids:
            # ids may be stale if the sheet was re-recorded meanwhile
            existing = existing.filter(Q(pk__in=attendance_ids) | Q(student_id__in=list(marks)))
        existing.delete()
        rows = _create_rows(lesson, date, marks)
    logger.info("Attendance for lesson %s on %s updated (%s rows)", lesson.pk, date, len(rows))
    return rows


def delete_attendance(lesson, date):
    deleted, _ = Attendance.objects.filter(lesson=lesson, date=date).delete()
    logger.info("Attendance for lesson %s on %s deleted (%s rows)", lesson.pk, date, deleted)
    return deleted


def get_attendance(lesson, date):
    return Attendance.objects.filter(lesson=lesson, date=date).select_related(
        'student'
    ).order_by('student__surname', 'student__name')


def reset_lesson_statuses(today=None):
    """
    Put lessons completed yesterday back to scheduled so they can be taken
    again the following week. Returns the number of lessons reset.
    """
    today = today or timezone.localdate()
    yesterday = today - timedelta(days=1)
    count = Lesson.objects.filter(
        status=Lesson.Status.COMPLETED,
        pk__in=Attendance.objects.filter(date=yesterday).values('lesson_id'),
    ).update(status=Lesson.Status.SCHEDULED)
    logger.info("Reset %s lesson statuses for %s", count, yesterday)
    return count


def student_attendance_summary(student):
    """Per subject offering: total records, attended count and percentage"""
    rows = (
        Attendance.objects.filter(student=student)
        .values(
            'lesson__subject_offering_id',
            'lesson__subject_offering__subject__name',
        )
        .annotate(total=Count('id'), attended=Count('id', filter=Q(present=True)))
        .order_by('lesson__subject_offering__subject__name')
    )
    summary = []
    for row in rows:
        total = row['total']
        percentage = round(row['attended'] / total * 100, 1) if total else 0.0
        summary.append({
            'subjectOfferingId': row['lesson__subject_offering_id'],
            'subject': row['lesson__subject_offering__subject__name'],
            'totalLessons': total,
            'attendedLessons': row['attended'],
            'percentage': percentage,
        })
    return summary
