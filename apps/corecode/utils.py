"""
Utility functions for role scoped access to student records
"""
from apps.students.models import Student

from .identity import ROLE_ADMIN, ROLE_PARENT, ROLE_STUDENT, ROLE_TEACHER
from .mixins import request_role


def get_profile(user, role):
    """Return the Teacher/Student/Parent row of a user for the given role"""
    attr = {
        ROLE_TEACHER: 'teacher_profile',
        ROLE_STUDENT: 'student_profile',
        ROLE_PARENT: 'parent_profile',
    }.get(role)
    if attr is None or not user.is_authenticated:
        return None
    return getattr(user, attr, None)


def visible_students(request):
    """Students whose records the requesting user may read"""
    role = request_role(request)
    if role in (ROLE_ADMIN, ROLE_TEACHER):
        return Student.objects.all()
    if role == ROLE_STUDENT:
        return Student.objects.filter(user=request.user)
    if role == ROLE_PARENT:
        return Student.objects.filter(parent__user=request.user)
    return Student.objects.none()


def can_view_student(request, student):
    return visible_students(request).filter(pk=student.pk).exists()
