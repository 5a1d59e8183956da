from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.urls import reverse
from django.utils.translation import gettext_lazy as _


class AssignmentQuerySet(models.QuerySet):
    def for_student(self, student):
        """Assignments open to everyone or targeted at the student's course and semester"""
        return self.filter(
            Q(course__isnull=True) | Q(course_id=student.course_id),
            Q(semester__isnull=True) | Q(semester_id=student.current_semester_id),
        )


class Assignment(models.Model):
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    start_date = models.DateTimeField()
    due_date = models.DateTimeField()
    course = models.ForeignKey(
        'corecode.Course', on_delete=models.CASCADE, null=True, blank=True,
        related_name='assignments'
    )
    semester = models.ForeignKey(
        'corecode.Semester', on_delete=models.CASCADE, null=True, blank=True,
        related_name='assignments'
    )
    attachment = models.URLField(blank=True, verbose_name=_("Attachment URL"))
    created_at = models.DateTimeField(auto_now_add=True)

    objects = AssignmentQuerySet.as_manager()

    class Meta:
        ordering = ['-due_date']

    def __str__(self):
        return self.title

    def get_absolute_url(self):
        return reverse('assignments:assignment_detail', kwargs={'pk': self.pk})

    def clean(self):
        errors = {}
        if self.start_date and self.due_date and self.due_date < self.start_date:
            errors['due_date'] = _("Due date cannot be before the start date")
        if self.semester_id and self.course_id and self.semester.course_id != self.course_id:
            errors['semester'] = _("The semester does not belong to the selected course")
        if errors:
            raise ValidationError(errors)
