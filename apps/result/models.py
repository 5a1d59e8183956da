from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

SCORE_VALIDATORS = [MinValueValidator(0)]


class Result(models.Model):
    student = models.ForeignKey(
        'students.Student', on_delete=models.CASCADE, related_name='results'
    )
    subject = models.ForeignKey(
        'corecode.Subject', on_delete=models.CASCADE, related_name='results'
    )
    internal = models.FloatField(validators=SCORE_VALIDATORS)
    external = models.FloatField(validators=SCORE_VALIDATORS)
    attendance = models.FloatField(validators=SCORE_VALIDATORS)
    total = models.FloatField(validators=SCORE_VALIDATORS)
    date_created = models.DateTimeField(auto_now_add=True)
    date_updated = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ['student', 'subject']
        ordering = ['student__surname', 'student__name', 'subject__name']
        verbose_name = _('Result')

    def __str__(self):
        return f"{self.student} - {self.subject}"

    def to_dict(self):
        return {
            'id': self.pk,
            'studentId': self.student_id,
            'subjectId': self.subject_id,
            'internal': self.internal,
            'external': self.external,
            'attendance': self.attendance,
            'total': self.total,
            'student': {
                'id': self.student_id,
                'username': self.student.username,
                'name': self.student.name,
                'surname': self.student.surname,
            },
            'subject': {
                'id': self.subject_id,
                'name': self.subject.name,
            },
            'updatedAt': self.date_updated.isoformat() if self.date_updated else None,
        }
