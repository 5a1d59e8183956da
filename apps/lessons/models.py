from django.db import models
from django.utils.translation import gettext_lazy as _


class Day(models.TextChoices):
    MONDAY = 'MONDAY', _('Monday')
    TUESDAY = 'TUESDAY', _('Tuesday')
    WEDNESDAY = 'WEDNESDAY', _('Wednesday')
    THURSDAY = 'THURSDAY', _('Thursday')
    FRIDAY = 'FRIDAY', _('Friday')


class Lesson(models.Model):
    """A weekly period of a subject offering"""

    class Status(models.TextChoices):
        SCHEDULED = 'SCHEDULED', _('Scheduled')
        COMPLETED = 'COMPLETED', _('Completed')
        CANCELLED = 'CANCELLED', _('Cancelled')

    subject_offering = models.ForeignKey(
        'corecode.SubjectOffering',
        on_delete=models.CASCADE,
        related_name='lessons'
    )
    day = models.CharField(max_length=10, choices=Day.choices)
    start_time = models.TimeField()
    end_time = models.TimeField()
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.SCHEDULED
    )
    is_makeup_class = models.BooleanField(default=False, verbose_name=_("Makeup Class"))
    reason = models.TextField(blank=True, help_text=_("Reason for a makeup or cancelled class"))
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['day', 'start_time']

    def __str__(self):
        return (f"{self.subject_offering.subject} {self.get_day_display()} "
                f"{self.start_time:%H:%M}-{self.end_time:%H:%M}")

    @property
    def teacher(self):
        return self.subject_offering.teacher

    def clean(self):
        from .scheduling import check_lesson_conflicts

        if not self.subject_offering_id or not self.start_time or not self.end_time:
            return
        check_lesson_conflicts(
            subject_offering=self.subject_offering,
            day=self.day,
            start_time=self.start_time,
            end_time=self.end_time,
            exclude_pk=self.pk,
        )
