from django.db import models
from django.utils import timezone


class Attendance(models.Model):
    """Presence of one student at one lesson on one date"""

    student = models.ForeignKey(
        'students.Student', on_delete=models.CASCADE, related_name='attendances'
    )
    lesson = models.ForeignKey(
        'lessons.Lesson', on_delete=models.CASCADE, related_name='attendances'
    )
    date = models.DateField(default=timezone.localdate)
    present = models.BooleanField(default=False)

    class Meta:
        ordering = ['-date', 'student__surname', 'student__name']
        unique_together = ['student', 'lesson', 'date']

    def __str__(self):
        state = "present" if self.present else "absent"
        return f"{self.student} - {self.lesson} - {self.date} ({state})"
