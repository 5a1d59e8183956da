import secrets
from datetime import timedelta

from django.conf import settings
from django.db import models
from django.urls import reverse
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.teachers.models import Sex


def default_admission_fee():
    return settings.ADMISSION_FEE


class AdmissionForm(models.Model):
    """An applicant's intake record progressing through verification"""

    class Status(models.TextChoices):
        PENDING = 'PENDING', _('Pending')
        PARENT_VERIFIED = 'PARENT_VERIFIED', _('Parent Verified')
        PAYMENT_VERIFIED = 'PAYMENT_VERIFIED', _('Payment Verified')
        COMPLETED = 'COMPLETED', _('Completed')
        REJECTED = 'REJECTED', _('Rejected')

    class ParentVerification(models.TextChoices):
        PENDING = 'PENDING', _('Pending')
        VERIFIED = 'VERIFIED', _('Verified')

    TERMINAL_STATUSES = (Status.COMPLETED, Status.REJECTED)

    application_number = models.CharField(
        max_length=50,
        unique=True,
        editable=False,
        help_text=_("Auto-generated application number")
    )

    # Applicant
    student_name = models.CharField(max_length=200, verbose_name=_("First Name"))
    student_surname = models.CharField(max_length=200, verbose_name=_("Surname"))
    email = models.EmailField(null=True, blank=True)
    phone = models.CharField(max_length=20)
    address = models.TextField()
    birthday = models.DateField()
    blood_type = models.CharField(max_length=5, verbose_name=_("Blood Type"))
    sex = models.CharField(max_length=10, choices=Sex.choices)
    img = models.URLField(blank=True, verbose_name=_("Photo URL"))
    course = models.ForeignKey(
        'corecode.Course',
        on_delete=models.PROTECT,
        related_name='admissions'
    )

    # Parent
    parent_name = models.CharField(max_length=200)
    parent_phone = models.CharField(max_length=20)
    parent_email = models.EmailField()
    parent_address = models.TextField(blank=True)
    parent = models.ForeignKey(
        'students.Parent',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='admissions'
    )

    # Workflow
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING
    )
    parent_verification_status = models.CharField(
        max_length=10,
        choices=ParentVerification.choices,
        default=ParentVerification.PENDING
    )
    rejection_reason = models.TextField(blank=True)
    student = models.OneToOneField(
        'students.Student',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='admission',
        verbose_name=_("Created Student")
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = _('Admission Form')
        verbose_name_plural = _('Admission Forms')

    def __str__(self):
        return f"{self.application_number} - {self.full_name}"

    def save(self, *args, **kwargs):
        # Generate application number if new
        if not self.application_number:
            year_month = timezone.now().strftime('%Y%m')
            last_app = AdmissionForm.objects.filter(
                application_number__startswith=f'ADM-{year_month}'
            ).order_by('-application_number').first()

            new_num = 1
            if last_app and last_app.application_number:
                try:
                    new_num = int(last_app.application_number.split('-')[-1]) + 1
                except (ValueError, IndexError):
                    pass

            self.application_number = f"ADM-{year_month}-{new_num:04d}"
        super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse('admissions:admission_detail', kwargs={'pk': self.pk})

    @property
    def full_name(self):
        return f"{self.student_name} {self.student_surname}"

    @property
    def parent_verified(self):
        return self.parent_verification_status == self.ParentVerification.VERIFIED

    @property
    def payment_approved(self):
        payment = getattr(self, 'payment', None)
        return payment is not None and payment.status == Payment.Status.APPROVED

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES

    def derive_status(self):
        """Status implied by the two verification flags"""
        if self.parent_verified and self.payment_approved:
            return self.Status.COMPLETED
        if self.parent_verified:
            return self.Status.PARENT_VERIFIED
        if self.payment_approved:
            return self.Status.PAYMENT_VERIFIED
        return self.Status.PENDING


class Payment(models.Model):
    """Admission fee payment backed by an uploaded receipt"""

    class Status(models.TextChoices):
        PENDING = 'PENDING', _('Pending')
        APPROVED = 'APPROVED', _('Approved')
        REJECTED = 'REJECTED', _('Rejected')

    admission = models.OneToOneField(
        AdmissionForm,
        on_delete=models.CASCADE,
        related_name='payment'
    )
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=default_admission_fee
    )
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.PENDING
    )
    img = models.URLField(verbose_name=_("Receipt URL"))
    verified_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='verified_payments'
    )
    verified_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.admission.application_number} - {self.amount} ({self.status})"


class VerificationToken(models.Model):
    """Single use token mailed to the parent"""

    token = models.CharField(max_length=64, unique=True)
    admission = models.ForeignKey(
        AdmissionForm,
        on_delete=models.CASCADE,
        related_name='verification_tokens'
    )
    expires = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.admission.application_number} (expires {self.expires:%Y-%m-%d %H:%M})"

    @classmethod
    def issue(cls, admission):
        return cls.objects.create(
            token=secrets.token_hex(32),
            admission=admission,
            expires=timezone.now() + timedelta(hours=settings.ADMISSION_TOKEN_TTL_HOURS),
        )

    @property
    def is_expired(self):
        return self.expires < timezone.now()


class AdmissionLog(models.Model):
    """Audit log for admission transitions"""
    admission = models.ForeignKey(
        AdmissionForm,
        on_delete=models.CASCADE,
        related_name='logs'
    )
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True
    )
    action = models.CharField(max_length=50)
    notes = models.TextField(blank=True)
    from_status = models.CharField(max_length=20)
    to_status = models.CharField(max_length=20)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.admission.application_number}: {self.action} ({self.from_status} -> {self.to_status})"
