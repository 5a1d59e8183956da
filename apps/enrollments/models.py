from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Enrollment(models.Model):
    """A student taking a subject offering"""

    class Status(models.TextChoices):
        ACTIVE = 'ACTIVE', _('Active')
        DROPPED = 'DROPPED', _('Dropped')
        COMPLETED = 'COMPLETED', _('Completed')

    student = models.ForeignKey(
        'students.Student', on_delete=models.CASCADE, related_name='enrollments'
    )
    subject_offering = models.ForeignKey(
        'corecode.SubjectOffering', on_delete=models.CASCADE, related_name='enrollments'
    )
    enrollment_date = models.DateTimeField(default=timezone.now)
    status = models.CharField(
        max_length=10, choices=Status.choices, default=Status.ACTIVE
    )

    class Meta:
        ordering = ['-enrollment_date']
        unique_together = ['student', 'subject_offering']

    def __str__(self):
        return f"{self.student} - {self.subject_offering}"
