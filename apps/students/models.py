from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.urls import reverse
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.teachers.models import Sex


class Parent(models.Model):
    """Parent/Guardian model"""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='parent_profile'
    )
    username = models.CharField(max_length=150, unique=True)
    name = models.CharField(max_length=200, verbose_name=_("First Name"))
    surname = models.CharField(max_length=200, verbose_name=_("Surname"))
    email = models.EmailField(unique=True, null=True, blank=True)
    phone = models.CharField(max_length=20)
    address = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['surname', 'name']
        verbose_name = _('Parent')
        verbose_name_plural = _('Parents')

    def __str__(self):
        return f"{self.full_name} ({self.phone})"

    @property
    def full_name(self):
        return f"{self.name} {self.surname}"

    def save(self, *args, **kwargs):
        # unique=True must not collide on blank emails
        if not self.email:
            self.email = None
        super().save(*args, **kwargs)


class Student(models.Model):
    """Student enrolled in a course and currently in one of its semesters"""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='student_profile'
    )
    username = models.CharField(max_length=150, unique=True)
    name = models.CharField(max_length=200, verbose_name=_("First Name"))
    surname = models.CharField(max_length=200, verbose_name=_("Surname"))
    email = models.EmailField(null=True, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    address = models.TextField()
    img = models.URLField(blank=True, verbose_name=_("Photo URL"))
    blood_type = models.CharField(max_length=5, verbose_name=_("Blood Type"))
    sex = models.CharField(max_length=10, choices=Sex.choices)
    birthday = models.DateField()

    # Academic Information
    course = models.ForeignKey(
        'corecode.Course',
        on_delete=models.PROTECT,
        related_name='students'
    )
    current_semester = models.ForeignKey(
        'corecode.Semester',
        on_delete=models.PROTECT,
        related_name='students',
        verbose_name=_("Current Semester")
    )
    parent = models.ForeignKey(
        Parent,
        on_delete=models.PROTECT,
        related_name='students',
        verbose_name=_("Parent/Guardian")
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['surname', 'name']
        verbose_name = _('Student')
        verbose_name_plural = _('Students')

    def __str__(self):
        return f"{self.username} - {self.full_name}"

    def get_absolute_url(self):
        return reverse('students:student_detail', kwargs={'pk': self.pk})

    @property
    def full_name(self):
        return f"{self.name} {self.surname}"

    @property
    def age(self):
        """Calculate age from date of birth"""
        today = timezone.now().date()
        born = self.birthday
        return today.year - born.year - ((today.month, today.day) < (born.month, born.day))

    def clean(self):
        if (self.current_semester_id and self.course_id
                and self.current_semester.course_id != self.course_id):
            raise ValidationError({
                'current_semester': _("The semester must belong to the student's course")
            })
