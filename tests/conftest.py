import datetime

import pytest

from apps.corecode.identity import (
    ROLE_ADMIN,
    ROLE_PARENT,
    ROLE_STUDENT,
    ROLE_TEACHER,
    IdentityProvider,
)
from apps.corecode.models import Course, Subject, SubjectOffering
from apps.students.models import Parent, Student
from apps.teachers.models import Teacher

PASSWORD = "S3cure-pass!"


@pytest.fixture
def make_account(db):
    def _make(username, role):
        return IdentityProvider.create_account(
            username=username,
            password=PASSWORD,
            first_name=username.title(),
            last_name="Test",
            role=role,
        )
    return _make


@pytest.fixture
def principal(make_account):
    return make_account("principal", ROLE_ADMIN)


@pytest.fixture
def make_teacher(make_account):
    def _make(username="teacher1"):
        return Teacher.objects.create(
            user=make_account(username, ROLE_TEACHER),
            username=username,
            name=username.title(),
            surname="Mentor",
            blood_type="O+",
            sex="FEMALE",
            birthday=datetime.date(1985, 5, 1),
        )
    return _make


@pytest.fixture
def teacher(make_teacher):
    return make_teacher()


@pytest.fixture
def course(db):
    course = Course.objects.create(name="Computer Science", duration=2)
    course.sync_semesters(4)
    return course


@pytest.fixture
def semester1(course):
    return course.semesters.get(number=1)


@pytest.fixture
def semester2(course):
    return course.semesters.get(number=2)


@pytest.fixture
def subject(db):
    return Subject.objects.create(name="Algorithms")


@pytest.fixture
def offering(subject, semester1, teacher):
    return SubjectOffering.objects.create(subject=subject, semester=semester1, teacher=teacher)


@pytest.fixture
def make_parent(make_account):
    def _make(username="parent1", email=None):
        return Parent.objects.create(
            user=make_account(username, ROLE_PARENT),
            username=username,
            name=username.title(),
            surname="Guardian",
            email=email,
            phone="555-0100",
            address="1 Main Street",
        )
    return _make


@pytest.fixture
def parent(make_parent):
    return make_parent()


@pytest.fixture
def make_student(make_account, course, semester1, parent):
    def _make(username="student1", semester=None, parent_profile=None):
        return Student.objects.create(
            user=make_account(username, ROLE_STUDENT),
            username=username,
            name=username.title(),
            surname="Learner",
            address="1 Main Street",
            blood_type="A+",
            sex="MALE",
            birthday=datetime.date(2004, 3, 9),
            course=course,
            current_semester=semester or semester1,
            parent=parent_profile or parent,
        )
    return _make


@pytest.fixture
def student(make_student):
    return make_student()


@pytest.fixture
def principal_client(client, principal):
    client.force_login(principal)
    return client


@pytest.fixture
def login(client):
    """Log the test client in as the account of a profile or a user"""
    def _login(profile_or_user):
        client.force_login(getattr(profile_or_user, "user", profile_or_user))
        return client
    return _login
