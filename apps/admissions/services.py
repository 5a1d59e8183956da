"""
Admission workflow: submission, parent and payment verification and the
one-time provisioning of the student and parent accounts.
"""
import logging

from django.db import transaction
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.corecode.identity import (
    ROLE_PARENT,
    ROLE_STUDENT,
    IdentityError,
    IdentityProvider,
    generate_password,
    generate_username,
)
from apps.corecode.models import Semester
from apps.students.models import Parent, Student

from .models import AdmissionForm, AdmissionLog, Payment, VerificationToken

logger = logging.getLogger(__name__)


class AdmissionError(Exception):
    """Raised when an admission cannot move to the requested state"""
    pass


def _queue_verification_email(admission_id, token):
    from tasks.admission_tasks import send_parent_verification_email

    transaction.on_commit(
        lambda: send_parent_verification_email.delay(admission_id, token)
    )


def _queue_credentials_email(recipient, admission, role, username, password):
    from tasks.admission_tasks import send_admission_confirmation_email

    kwargs = {
        "recipient": recipient,
        "student_name": admission.student_name,
        "student_surname": admission.student_surname,
        "course_name": admission.course.name,
        "role": role,
        "username": username,
        "password": password,
    }
    transaction.on_commit(lambda: send_admission_confirmation_email.delay(**kwargs))


class AdmissionService:

    @classmethod
    def find_parent(cls, username):
        if not username:
            return None
        return Parent.objects.filter(username=username).first()

    @classmethod
    def submit(cls, data, receipt_url="", existing_parent=None):
        """
        Create an admission from validated form data.

        With ``existing_parent`` the parent's details are copied and the
        admission starts parent-verified; otherwise a verification link is
        mailed to ``parent_email``.
        """
        with transaction.atomic():
            admission = AdmissionForm(**data)
            if existing_parent is not None:
                admission.parent = existing_parent
                admission.parent_name = existing_parent.full_name
                admission.parent_phone = existing_parent.phone
                admission.parent_email = existing_parent.email or admission.parent_email
                admission.parent_address = existing_parent.address
                admission.parent_verification_status = AdmissionForm.ParentVerification.VERIFIED
                admission.status = AdmissionForm.Status.PARENT_VERIFIED
            admission.save()

            if receipt_url:
                Payment.objects.create(admission=admission, img=receipt_url)

            AdmissionLog.objects.create(
                admission=admission,
                action='SUBMITTED',
                notes=_('Existing parent %(username)s attached') % {
                    'username': existing_parent.username
                } if existing_parent is not None else '',
                from_status='',
                to_status=admission.status,
            )

            if existing_parent is None:
                token = VerificationToken.issue(admission)
                _queue_verification_email(admission.pk, token.token)

        logger.info("Admission submitted: %s (status=%s)",
                    admission.application_number, admission.status)
        return admission

    @classmethod
    def verify_parent_email(cls, token):
        record = VerificationToken.objects.select_related('admission').filter(token=token).first()
        if record is None:
            raise AdmissionError(_("Invalid verification token"))
        if record.is_expired:
            raise AdmissionError(_("Verification token has expired"))

        with transaction.atomic():
            admission = cls._lock(record.admission_id)
            admission.parent_verification_status = AdmissionForm.ParentVerification.VERIFIED
            cls._advance(admission, None, 'PARENT_VERIFIED')
            record.delete()

        logger.info("Parent email verified for %s", admission.application_number)
        return admission

    @classmethod
    def verify_payment(cls, payment_id, actor):
        with transaction.atomic():
            admission = cls._lock_for_payment(payment_id)
            payment = admission.payment
            payment.status = Payment.Status.APPROVED
            payment.verified_by = actor
            payment.verified_at = timezone.now()
            payment.save()
            cls._advance(admission, actor, 'PAYMENT_VERIFIED')

        logger.info("Payment %s approved by %s", payment_id, actor)
        return admission

    @classmethod
    def reject_payment(cls, payment_id, actor, reason=""):
        with transaction.atomic():
            admission = cls._lock_for_payment(payment_id)
            payment = admission.payment
            payment.status = Payment.Status.REJECTED
            payment.verified_by = actor
            payment.verified_at = timezone.now()
            payment.save()
            cls._reject(admission, actor, 'PAYMENT_REJECTED', reason)

        logger.info("Payment %s rejected by %s", payment_id, actor)
        return admission

    @classmethod
    def reject_admission(cls, admission_id, actor, reason=""):
        with transaction.atomic():
            admission = cls._lock(admission_id)
            cls._reject(admission, actor, 'REJECTED', reason)

        logger.info("Admission %s rejected by %s", admission.application_number, actor)
        return admission

    # Internals

    @classmethod
    def _lock(cls, admission_id):
        try:
            admission = AdmissionForm.objects.select_for_update().get(pk=admission_id)
        except AdmissionForm.DoesNotExist:
            raise AdmissionError(_("Admission form not found"))
        if admission.is_terminal:
            raise AdmissionError(
                _("Admission %(number)s is already %(status)s") % {
                    'number': admission.application_number,
                    'status': admission.get_status_display().lower(),
                }
            )
        return admission

    @classmethod
    def _lock_for_payment(cls, payment_id):
        admission_id = Payment.objects.filter(pk=payment_id).values_list(
            'admission_id', flat=True
        ).first()
        if admission_id is None:
            raise AdmissionError(_("Payment not found"))
        return cls._lock(admission_id)

    @classmethod
    def _reject(cls, admission, actor, action, reason):
        from_status = admission.status
        admission.status = AdmissionForm.Status.REJECTED
        admission.rejection_reason = reason
        admission.save()
        AdmissionLog.objects.create(
            admission=admission,
            actor=actor,
            action=action,
            notes=reason,
            from_status=from_status,
            to_status=admission.status,
        )

    @classmethod
    def _advance(cls, admission, actor, action):
        from_status = admission.status
        admission.status = admission.derive_status()
        if admission.status == AdmissionForm.Status.COMPLETED:
            try:
                cls._provision(admission, actor)
            except IdentityError as exc:
                raise AdmissionError(str(exc)) from exc
        admission.save()
        AdmissionLog.objects.create(
            admission=admission,
            actor=actor,
            action=action,
            from_status=from_status,
            to_status=admission.status,
        )

    @classmethod
    def _provision(cls, admission, actor):
        """Create the parent (when needed) and the student of a completed admission"""
        if admission.student_id:
            return admission.student

        semester = Semester.objects.filter(course=admission.course, number=1).first()
        if semester is None:
            raise AdmissionError(
                _("Course %(course)s has no first semester") % {'course': admission.course}
            )

        parent = admission.parent
        if parent is None:
            parent = Parent.objects.filter(email__iexact=admission.parent_email).first()
        if parent is None:
            password = generate_password()
            username = generate_username('parent', admission.parent_name)
            user = IdentityProvider.create_account(
                username=username,
                password=password,
                first_name=admission.parent_name,
                last_name=admission.student_surname,
                role=ROLE_PARENT,
                email=admission.parent_email,
            )
            parent = Parent.objects.create(
                user=user,
                username=username,
                name=admission.parent_name,
                surname=admission.student_surname,
                email=admission.parent_email,
                phone=admission.parent_phone,
                address=admission.parent_address or admission.address,
            )
            _queue_credentials_email(admission.parent_email, admission, ROLE_PARENT,
                                     username, password)
        admission.parent = parent

        password = generate_password()
        username = generate_username('student', admission.student_name)
        user = IdentityProvider.create_account(
            username=username,
            password=password,
            first_name=admission.student_name,
            last_name=admission.student_surname,
            role=ROLE_STUDENT,
            email=admission.email or "",
        )
        student = Student.objects.create(
            user=user,
            username=username,
            name=admission.student_name,
            surname=admission.student_surname,
            email=admission.email or None,
            phone=admission.phone,
            address=admission.address,
            img=admission.img,
            blood_type=admission.blood_type,
            sex=admission.sex,
            birthday=admission.birthday,
            course=admission.course,
            current_semester=semester,
            parent=parent,
        )
        admission.student = student
        if admission.email:
            _queue_credentials_email(admission.email, admission, ROLE_STUDENT,
                                     username, password)

        AdmissionLog.objects.create(
            admission=admission,
            actor=actor,
            action='STUDENT_CREATED',
            notes=f'Student {username} created with parent {parent.username}',
            from_status=admission.status,
            to_status=admission.status,
        )
        logger.info("Admission %s provisioned student %s", admission.application_number, username)
        return student
