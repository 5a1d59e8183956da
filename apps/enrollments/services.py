"""
Services for enrolling students into subject offerings and moving them
between semesters
"""
import logging

from django.db import transaction
from django.utils.translation import gettext_lazy as _

from apps.corecode.models import SubjectOffering
from apps.students.models import Student

from .models import Enrollment

logger = logging.getLogger(__name__)


class EnrollmentError(Exception):
    """Raised when an enrollment operation cannot be carried out"""
    pass


class EnrollmentService:

    @classmethod
    def enroll(cls, student, subject_offering):
        if Enrollment.objects.filter(student=student, subject_offering=subject_offering).exists():
            raise EnrollmentError(_("This student is already enrolled in this subject"))
        enrollment = Enrollment.objects.create(student=student, subject_offering=subject_offering)
        logger.info("Student %s enrolled in offering %s", student.username, subject_offering.pk)
        return enrollment

    @classmethod
    def batch_enroll(cls, student_ids, offering_ids):
        """
        Enroll every student into every offering, skipping existing pairs.

        Returns ``(created, skipped)``.
        """
        student_ids = {int(pk) for pk in student_ids if str(pk).strip()}
        offering_ids = {int(pk) for pk in offering_ids if str(pk).strip()}
        if not student_ids:
            raise EnrollmentError(_("At least one student must be selected"))
        if not offering_ids:
            raise EnrollmentError(_("At least one subject offering must be selected"))

        with transaction.atomic():
            existing = set(
                Enrollment.objects.filter(
                    student_id__in=student_ids, subject_offering_id__in=offering_ids
                ).values_list('student_id', 'subject_offering_id')
            )
            to_create = [
                Enrollment(student_id=student_id, subject_offering_id=offering_id)
                for student_id in sorted(student_ids)
                for offering_id in sorted(offering_ids)
                if (student_id, offering_id) not in existing
            ]
            Enrollment.objects.bulk_create(to_create)

        created = len(to_create)
        skipped = len(student_ids) * len(offering_ids) - created
        logger.info("Batch enrollment: %s created, %s skipped", created, skipped)
        return created, skipped

    @classmethod
    def remove(cls, enrollment_id):
        deleted = Enrollment.objects.filter(pk=enrollment_id).delete()[0]
        if not deleted:
            raise EnrollmentError(_("Enrollment not found"))
        logger.info("Enrollment %s removed", enrollment_id)

    @classmethod
    def bulk_remove(cls, enrollment_ids):
        if not enrollment_ids:
            raise EnrollmentError(_("No enrollment IDs provided"))
        deleted = Enrollment.objects.filter(pk__in=enrollment_ids).delete()[0]
        logger.info("Bulk removed %s enrollments", deleted)
        return deleted

    @classmethod
    def promote(cls, course, from_semester, to_semester):
        """
        Move the course's students from one semester to the next and enroll
        them in every offering of the new semester.

        Returns the number of students promoted.
        """
        if from_semester.course_id != course.pk or to_semester.course_id != course.pk:
            raise EnrollmentError(_("Both semesters must belong to the selected course"))
        if from_semester.pk == to_semester.pk:
            raise EnrollmentError(_("Choose a different target semester"))

        with transaction.atomic():
            student_ids = list(
                Student.objects.select_for_update().filter(
                    course=course, current_semester=from_semester
                ).values_list('pk', flat=True)
            )
            Student.objects.filter(pk__in=student_ids).update(current_semester=to_semester)

            offering_ids = list(
                SubjectOffering.objects.filter(semester=to_semester).values_list('pk', flat=True)
            )
            if student_ids and offering_ids:
                cls.batch_enroll(student_ids, offering_ids)

        logger.info("Promoted %s students of %s from semester %s to %s",
                    len(student_ids), course.code, from_semester.number, to_semester.number)
        return len(student_ids)


def active_subjects_for(student):
    """Subjects the student is actively enrolled in, with offering and semester"""
    enrollments = Enrollment.objects.filter(
        student=student, status=Enrollment.Status.ACTIVE
    ).select_related('subject_offering__subject', 'subject_offering__semester', 'subject_offering__teacher')

    subjects = {}
    for enrollment in enrollments:
        offering = enrollment.subject_offering
        entry = subjects.setdefault(offering.subject_id, {
            'id': offering.subject_id,
            'name': offering.subject.name,
            'offerings': [],
        })
        entry['offerings'].append({
            'id': offering.pk,
            'teacher': offering.teacher.full_name,
            'semester': {
                'id': offering.semester_id,
                'number': offering.semester.number,
            },
        })
    return sorted(subjects.values(), key=lambda s: s['name'])
