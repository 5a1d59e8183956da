from django.conf import settings
from django.db import models
from django.urls import reverse
from django.utils.translation import gettext_lazy as _


class Sex(models.TextChoices):
    MALE = 'MALE', _('Male')
    FEMALE = 'FEMALE', _('Female')


class Teacher(models.Model):
    """Teacher profile linked to its login account"""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='teacher_profile'
    )
    username = models.CharField(max_length=150, unique=True)
    name = models.CharField(max_length=200, verbose_name=_("First Name"))
    surname = models.CharField(max_length=200, verbose_name=_("Surname"))
    email = models.EmailField(null=True, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    address = models.TextField(blank=True)
    img = models.URLField(blank=True, verbose_name=_("Photo URL"))
    blood_type = models.CharField(max_length=5, verbose_name=_("Blood Type"))
    sex = models.CharField(max_length=10, choices=Sex.choices)
    birthday = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['surname', 'name']
        verbose_name = _('Teacher')
        verbose_name_plural = _('Teachers')

    def __str__(self):
        return self.full_name

    def get_absolute_url(self):
        return reverse('teachers:teacher_detail', kwargs={'pk': self.pk})

    @property
    def full_name(self):
        return f"{self.name} {self.surname}"
