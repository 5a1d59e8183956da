"""
Admission workflow background tasks.

Emails are queued from ``transaction.on_commit`` so a worker never sees an
admission row that was rolled back.
"""

import logging

from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string

logger = logging.getLogger(__name__)


def verification_link(token: str) -> str:
    return f"{settings.SITE_URL}/admission/verify-parent/?token={token}"


@shared_task(
    bind=True,
    name="admissions.send_parent_verification_email",
    autoretry_for=(Exception,),
    retry_backoff=True,
    retry_kwargs={"max_retries": 3},
)
def send_parent_verification_email(self, admission_id: int, token: str):
    """
    Mail the parent the link that verifies their email address.
    """
    from apps.admissions.models import AdmissionForm

    try:
        admission = AdmissionForm.objects.select_related("course").get(pk=admission_id)
    except AdmissionForm.DoesNotExist:
        logger.warning("[%s] Admission %s not found", self.request.id, admission_id)
        return {"status": "missing", "admission_id": admission_id}

    context = {
        "admission": admission,
        "verification_link": verification_link(token),
        "school_name": settings.SCHOOL_NAME,
        "ttl_hours": settings.ADMISSION_TOKEN_TTL_HOURS,
    }
    send_mail(
        subject=f"Email Verification - {admission.application_number}",
        message=render_to_string("admissions/emails/parent_verification.txt", context),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[admission.parent_email],
        html_message=render_to_string("admissions/emails/parent_verification.html", context),
        fail_silently=False,
    )

    logger.info("[%s] Verification email sent for %s", self.request.id,
                admission.application_number)
    return {"status": "sent", "admission_id": admission_id}


@shared_task(
    bind=True,
    name="admissions.send_confirmation_email",
    autoretry_for=(Exception,),
    retry_backoff=True,
    retry_kwargs={"max_retries": 3},
)
def send_admission_confirmation_email(
    self,
    recipient: str,
    student_name: str,
    student_surname: str,
    course_name: str,
    role: str,
    username: str,
    password: str,
):
    """
    Mail login credentials of a freshly provisioned account.
    """
    context = {
        "student_name": student_name,
        "student_surname": student_surname,
        "course_name": course_name,
        "role": role,
        "username": username,
        "password": password,
        "login_url": f"{settings.SITE_URL}/accounts/login/",
        "school_name": settings.SCHOOL_NAME,
    }
    send_mail(
        subject=f"Admission Confirmed - {settings.SCHOOL_NAME}",
        message=render_to_string("admissions/emails/admission_confirmation.txt", context),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[recipient],
        fail_silently=False,
    )

    logger.info("[%s] Confirmation email sent to %s account %s", self.request.id, role, username)
    return {"status": "sent", "role": role, "username": username}
