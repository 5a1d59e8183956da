import datetime

import pytest
from django.core import mail
from django.utils import timezone

from apps.admissions.models import AdmissionForm, AdmissionLog, Payment, VerificationToken
from apps.admissions.services import AdmissionError, AdmissionService
from apps.corecode.identity import ROLE_PARENT, ROLE_STUDENT, IdentityError, IdentityProvider
from apps.corecode.models import Course
from apps.students.models import Parent, Student

RECEIPT = "https://files.example.com/receipt.png"


@pytest.fixture
def applicant(course):
    return {
        "student_name": "Jane",
        "student_surname": "Doe",
        "email": "jane@example.com",
        "phone": "555-0101",
        "address": "2 Elm Street",
        "birthday": datetime.date(2005, 6, 1),
        "blood_type": "O+",
        "sex": "FEMALE",
        "img": "",
        "course": course,
        "parent_name": "John",
        "parent_phone": "555-0102",
        "parent_email": "john@example.com",
        "parent_address": "2 Elm Street",
    }


@pytest.fixture
def submit(applicant, django_capture_on_commit_callbacks):
    def _submit(receipt_url=RECEIPT, existing_parent=None, **overrides):
        with django_capture_on_commit_callbacks(execute=True):
            return AdmissionService.submit(
                dict(applicant, **overrides), receipt_url=receipt_url,
                existing_parent=existing_parent,
            )
    return _submit


def test_application_number_format(submit):
    admission = submit()
    month = timezone.now().strftime("%Y%m")
    assert admission.application_number == f"ADM-{month}-0001"
    assert submit(email=None).application_number == f"ADM-{month}-0002"


def test_submit_sends_verification_email_and_creates_payment(submit):
    admission = submit()
    token = VerificationToken.objects.get(admission=admission)

    assert admission.status == AdmissionForm.Status.PENDING
    assert admission.payment.status == Payment.Status.PENDING
    assert admission.payment.amount == 100
    assert len(mail.outbox) == 1
    message = mail.outbox[0]
    assert message.subject.startswith("Email Verification")
    assert message.to == ["john@example.com"]
    assert f"/admission/verify-parent/?token={token.token}" in message.body
    assert len(token.token) == 64


def test_submit_without_receipt_has_no_payment(submit):
    admission = submit(receipt_url="")
    assert not Payment.objects.filter(admission=admission).exists()


def test_submit_with_existing_parent_is_parent_verified(submit, parent):
    admission = submit(existing_parent=parent)

    assert admission.status == AdmissionForm.Status.PARENT_VERIFIED
    assert admission.parent == parent
    assert admission.parent_name == parent.full_name
    assert not VerificationToken.objects.exists()
    assert mail.outbox == []


def test_verify_invalid_token(db):
    with pytest.raises(AdmissionError) as exc:
        AdmissionService.verify_parent_email("nope")
    assert str(exc.value) == "Invalid verification token"


def test_verify_expired_token_keeps_token(submit):
    admission = submit()
    token = admission.verification_tokens.get()
    token.expires = timezone.now() - datetime.timedelta(minutes=1)
    token.save()

    with pytest.raises(AdmissionError) as exc:
        AdmissionService.verify_parent_email(token.token)

    assert str(exc.value) == "Verification token has expired"
    assert VerificationToken.objects.filter(pk=token.pk).exists()
    admission.refresh_from_db()
    assert admission.parent_verification_status == AdmissionForm.ParentVerification.PENDING


def test_verify_token_marks_parent_verified_and_deletes_token(submit):
    admission = submit()
    token = admission.verification_tokens.get().token

    admission = AdmissionService.verify_parent_email(token)

    assert admission.status == AdmissionForm.Status.PARENT_VERIFIED
    assert admission.parent_verified
    assert not VerificationToken.objects.exists()


def test_payment_only_is_payment_verified(submit, principal):
    admission = submit()
    admission = AdmissionService.verify_payment(admission.payment.pk, principal)

    assert admission.status == AdmissionForm.Status.PAYMENT_VERIFIED
    payment = Payment.objects.get(admission=admission)
    assert payment.status == Payment.Status.APPROVED
    assert payment.verified_by == principal
    assert payment.verified_at is not None


def test_completion_provisions_parent_and_student(
        submit, principal, semester1, django_capture_on_commit_callbacks):
    admission = submit()
    token = admission.verification_tokens.get().token
    AdmissionService.verify_parent_email(token)
    mail.outbox.clear()

    with django_capture_on_commit_callbacks(execute=True):
        admission = AdmissionService.verify_payment(admission.payment.pk, principal)

    assert admission.status == AdmissionForm.Status.COMPLETED
    student = Student.objects.get()
    parent = Parent.objects.get()
    assert admission.student == student
    assert admission.parent == parent
    assert student.parent == parent
    assert student.current_semester == semester1
    assert student.username.startswith("student_jane_")
    assert parent.username.startswith("parent_john_")
    assert parent.surname == "Doe"
    assert IdentityProvider.role_of(student.user) == ROLE_STUDENT
    assert IdentityProvider.role_of(parent.user) == ROLE_PARENT
    assert sorted(m.to[0] for m in mail.outbox) == ["jane@example.com", "john@example.com"]
    assert AdmissionLog.objects.filter(admission=admission, action="STUDENT_CREATED").count() == 1


def test_payment_first_then_parent_also_completes(submit, principal, semester1):
    admission = submit()
    AdmissionService.verify_payment(admission.payment.pk, principal)
    admission = AdmissionService.verify_parent_email(admission.verification_tokens.get().token)

    assert admission.status == AdmissionForm.Status.COMPLETED
    assert Student.objects.count() == 1


def test_completion_reuses_parent_with_same_email(submit, principal, make_parent, semester1):
    existing = make_parent("knownparent", email="JOHN@example.com")
    admission = submit()
    AdmissionService.verify_parent_email(admission.verification_tokens.get().token)
    admission = AdmissionService.verify_payment(admission.payment.pk, principal)

    assert admission.parent == existing
    assert Parent.objects.count() == 1


def test_existing_parent_is_linked_without_credentials_mail(
        submit, parent, principal, django_capture_on_commit_callbacks):
    admission = submit(existing_parent=parent, email=None)
    with django_capture_on_commit_callbacks(execute=True):
        admission = AdmissionService.verify_payment(admission.payment.pk, principal)

    assert admission.status == AdmissionForm.Status.COMPLETED
    assert Student.objects.get().parent == parent
    assert Parent.objects.count() == 1
    assert mail.outbox == []


def test_missing_first_semester_changes_nothing(submit, principal):
    course = Course.objects.create(name="Empty Course", duration=1)
    admission = submit(course=course)
    AdmissionService.verify_parent_email(admission.verification_tokens.get().token)

    with pytest.raises(AdmissionError):
        AdmissionService.verify_payment(admission.payment.pk, principal)

    admission.refresh_from_db()
    assert admission.status == AdmissionForm.Status.PARENT_VERIFIED
    assert Payment.objects.get(admission=admission).status == Payment.Status.PENDING
    assert not Student.objects.exists()
    assert not Parent.objects.exists()


def test_reject_payment_rejects_admission(submit, principal):
    admission = submit()
    admission = AdmissionService.reject_payment(admission.payment.pk, principal, "Blurry receipt")

    assert admission.status == AdmissionForm.Status.REJECTED
    assert admission.rejection_reason == "Blurry receipt"
    assert Payment.objects.get(admission=admission).status == Payment.Status.REJECTED


def test_terminal_admission_cannot_change(submit, principal):
    admission = submit()
    AdmissionService.reject_admission(admission.pk, principal)

    with pytest.raises(AdmissionError):
        AdmissionService.verify_payment(admission.payment.pk, principal)
    with pytest.raises(AdmissionError):
        AdmissionService.reject_admission(admission.pk, principal)


def test_completion_happens_once(submit, principal, semester1):
    admission = submit()
    AdmissionService.verify_parent_email(admission.verification_tokens.get().token)
    AdmissionService.verify_payment(admission.payment.pk, principal)

    with pytest.raises(AdmissionError):
        AdmissionService.verify_payment(admission.payment.pk, principal)
    assert Student.objects.count() == 1


def test_long_names_provision_distinct_accounts(submit, principal, semester1):
    long_parent, long_student = "P" * 160, "S" * 160
    for index in range(2):
        admission = submit(parent_name=long_parent, student_name=long_student,
                           parent_email=f"parent{index}@example.com", email=None)
        AdmissionService.verify_parent_email(admission.verification_tokens.get().token)
        admission = AdmissionService.verify_payment(admission.payment.pk, principal)
        assert admission.status == AdmissionForm.Status.COMPLETED

    usernames = [s.username for s in Student.objects.all()] + [p.username for p in Parent.objects.all()]
    assert len(set(usernames)) == 4
    assert all(len(name) <= 150 for name in usernames)


def test_account_failure_during_completion_is_an_admission_error(
        submit, principal, principal_client, semester1, monkeypatch):
    def exhausted(prefix, name):
        raise IdentityError("Username generation failed after multiple attempts")

    monkeypatch.setattr("apps.admissions.services.generate_username", exhausted)
    admission = submit()
    AdmissionService.verify_parent_email(admission.verification_tokens.get().token)

    response = principal_client.post(f"/admission/payments/{admission.payment.pk}/verify/")

    assert response.status_code == 302
    admission.refresh_from_db()
    assert admission.status == AdmissionForm.Status.PARENT_VERIFIED
    assert not Student.objects.exists()


# Views

def apply_data(course, **overrides):
    data = {
        "student_name": "Jane",
        "student_surname": "Doe",
        "phone": "555-0101",
        "address": "2 Elm Street",
        "birthday": "2005-06-01",
        "blood_type": "O+",
        "sex": "FEMALE",
        "course": course.pk,
        "parent_name": "John",
        "parent_phone": "555-0102",
        "parent_email": "john@example.com",
        "receipt_url": RECEIPT,
    }
    data.update(overrides)
    return data


def test_apply_view_creates_admission(client, course, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        response = client.post("/admission/", apply_data(course))

    assert response.status_code == 302
    assert response.url == "/admission/submitted/"
    admission = AdmissionForm.objects.get()
    assert admission.payment.img == RECEIPT
    assert len(mail.outbox) == 1


def test_apply_view_unknown_parent_username_is_form_error(client, course):
    response = client.post("/admission/", apply_data(
        course, has_existing_parent="on", parent_username="ghost"
    ))

    assert response.status_code == 200
    assert "parent_username" in response.context["form"].errors
    assert not AdmissionForm.objects.exists()


def test_apply_view_existing_parent(client, course, parent):
    response = client.post("/admission/", apply_data(
        course, has_existing_parent="on", parent_username=parent.username,
        parent_name="", parent_phone="", parent_email="",
    ))

    assert response.status_code == 302
    admission = AdmissionForm.objects.get()
    assert admission.parent == parent
    assert admission.status == AdmissionForm.Status.PARENT_VERIFIED


def test_verify_parent_view(client, submit):
    admission = submit()
    token = admission.verification_tokens.get().token
    response = client.get(f"/admission/verify-parent/?token={token}")

    assert response.status_code == 200
    admission.refresh_from_db()
    assert admission.parent_verified


def test_verify_parent_view_with_bad_token(client, db):
    response = client.get("/admission/verify-parent/?token=bad")
    assert response.status_code == 400
    assert b"Invalid verification token" in response.content


def test_parent_exists_api(client, parent):
    found = client.get(f"/admission/api/parent-exists/?username={parent.username}").json()
    missing = client.get("/admission/api/parent-exists/?username=nobody").json()

    assert found == {"exists": True, "parent": {"id": parent.pk, "name": parent.full_name}}
    assert missing == {"exists": False}


def test_pending_list_filters_and_sorts(principal_client, submit, principal):
    zoe = submit(student_name="Zoe")
    submit(student_name="Adam")
    AdmissionService.verify_payment(zoe.payment.pk, principal)

    pending = principal_client.get("/admission/pending/").context["payments"]
    verified = principal_client.get("/admission/pending/?status=verified").context["payments"]

    assert [p.admission.student_name for p in pending] == ["Adam"]
    assert [p.admission.student_name for p in verified] == ["Zoe"]


def test_pending_list_sort_desc(principal_client, submit):
    submit(student_name="Adam")
    submit(student_name="Zoe")
    payments = principal_client.get("/admission/pending/?sort=desc").context["payments"]
    assert [p.admission.student_name for p in payments] == ["Zoe", "Adam"]


def test_pending_list_requires_admin(client, login, teacher):
    login(teacher)
    assert client.get("/admission/pending/").status_code == 403


def test_verify_payment_view(principal_client, submit, semester1):
    admission = submit()
    response = principal_client.post(f"/admission/payments/{admission.payment.pk}/verify/")

    assert response.status_code == 302
    admission.refresh_from_db()
    assert admission.status == AdmissionForm.Status.PAYMENT_VERIFIED


def test_admission_detail_view(principal_client, submit):
    admission = submit()
    response = principal_client.get(f"/admission/{admission.pk}/")
    assert response.status_code == 200
    assert admission.application_number.encode() in response.content
