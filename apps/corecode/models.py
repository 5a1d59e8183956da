"apps/corecode/models.py"

import logging
import random

from django.db import models, transaction
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

logger = logging.getLogger(__name__)


class Course(models.Model):
    """Course (programme) made of numbered semesters"""

    name = models.CharField(max_length=200, unique=True)
    code = models.CharField(
        max_length=4,
        unique=True,
        editable=False,
        help_text=_("Auto-generated 4 digit course code"),
    )
    duration = models.PositiveSmallIntegerField(
        help_text=_("Duration of the course in years")
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.code:
            self.code = self.generate_code()
        super().save(*args, **kwargs)

    @classmethod
    def generate_code(cls):
        """Pick a random 4 digit code not used by another course"""
        taken = set(cls.objects.values_list("code", flat=True))
        free = [str(n) for n in range(1000, 10000) if str(n) not in taken]
        if not free:
            raise ValueError("No course codes left")
        return random.choice(free)

    @property
    def semester_count(self):
        return self.semesters.count()

    def sync_semesters(self, count):
        """
        Make the course have semesters numbered 1..count.

        Missing numbers are created, numbers above count are deleted and
        existing semesters (with their offerings) are left untouched.
        """
        with transaction.atomic():
            existing = set(self.semesters.values_list("number", flat=True))
            today = timezone.localdate()
            Semester.objects.bulk_create([
                Semester(course=self, number=n, start_date=today, end_date=today)
                for n in range(1, count + 1)
                if n not in existing
            ])
            removed, _ = self.semesters.filter(number__gt=count).delete()
        logger.info("Course %s synced to %s semesters (removed rows: %s)",
                    self.code, count, removed)


class Semester(models.Model):
    """Semester"""

    course = models.ForeignKey(
        Course, on_delete=models.CASCADE, related_name="semesters"
    )
    number = models.PositiveSmallIntegerField()
    start_date = models.DateField(default=timezone.localdate)
    end_date = models.DateField(default=timezone.localdate)

    class Meta:
        ordering = ["course__name", "number"]
        unique_together = ["course", "number"]

    def __str__(self):
        return f"{self.course} - Semester {self.number}"


class Subject(models.Model):
    """Subject"""

    name = models.CharField(max_length=200, unique=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class SubjectOffering(models.Model):
    """A subject taught by a specific teacher in a specific semester"""

    subject = models.ForeignKey(
        Subject, on_delete=models.CASCADE, related_name="subject_offerings"
    )
    semester = models.ForeignKey(
        Semester, on_delete=models.CASCADE, related_name="subject_offerings"
    )
    teacher = models.ForeignKey(
        "teachers.Teacher", on_delete=models.CASCADE, related_name="subject_offerings"
    )

    class Meta:
        ordering = ["semester__course__name", "semester__number", "subject__name"]
        unique_together = ["subject", "semester", "teacher"]

    def __str__(self):
        return f"{self.subject} ({self.semester}) - {self.teacher.full_name}"
