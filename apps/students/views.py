from django.urls import reverse_lazy
from django.views.generic import DetailView, TemplateView

from apps.announcements.models import Announcement
from apps.assignments.models import Assignment
from apps.attendance.services import student_attendance_summary
from apps.corecode.identity import ROLE_ADMIN, ROLE_STUDENT, ROLE_TEACHER
from apps.corecode.mixins import (
    ObjectCreateView,
    ObjectDeleteView,
    ObjectListView,
    ObjectUpdateView,
    RoleRequiredMixin,
)
from apps.corecode.models import Course, Semester
from apps.enrollments.models import Enrollment
from apps.lessons.models import Lesson
from apps.lessons.scheduling import group_by_day
from apps.teachers.models import Teacher

from .forms import ParentForm, StudentForm
from .models import Parent, Student


def lessons_for_student(student):
    """Lessons of the student's active enrollments"""
    return Lesson.objects.filter(
        subject_offering__enrollments__student=student,
        subject_offering__enrollments__status=Enrollment.Status.ACTIVE,
    ).select_related(
        'subject_offering__subject', 'subject_offering__teacher'
    ).distinct()


class StudentListView(ObjectListView):
    model = Student
    allowed_roles = (ROLE_ADMIN, ROLE_TEACHER)
    template_name = "students/student_list.html"
    columns = (("Name", "full_name"), ("Username", "username"), ("Course", "course"),
               ("Semester", "current_semester.number"), ("Parent", "parent.full_name"))
    search_fields = ("name", "surname", "username")
    create_url_name = "students:student_create"
    update_url_name = "students:student_update"
    delete_url_name = "students:student_delete"
    detail_url_name = "students:student_detail"

    def get_queryset(self):
        queryset = super().get_queryset().select_related('course', 'current_semester', 'parent')
        params = self.request.GET
        course_id = params.get('courseId')
        if course_id and course_id.isdigit():
            queryset = queryset.filter(course_id=course_id)
        semester_id = params.get('semesterId')
        if semester_id and semester_id.isdigit():
            queryset = queryset.filter(current_semester_id=semester_id)
        teacher_id = params.get('teacherId')
        if teacher_id and teacher_id.isdigit():
            queryset = queryset.filter(
                current_semester__subject_offerings__teacher_id=teacher_id
            ).distinct()
        return queryset

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['courses'] = Course.objects.all()
        context['semesters'] = Semester.objects.select_related('course')
        context['teachers'] = Teacher.objects.all()
        return context


class StudentDetailView(RoleRequiredMixin, DetailView):
    model = Student
    template_name = "students/student_detail.html"
    allowed_roles = (ROLE_ADMIN, ROLE_TEACHER)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        student = self.object
        context['enrollments'] = student.enrollments.select_related(
            'subject_offering__subject', 'subject_offering__teacher'
        )
        context['results'] = student.results.select_related('subject')
        context['attendance_summary'] = student_attendance_summary(student)
        context['timetable'] = group_by_day(lessons_for_student(student))
        return context


class StudentCreateView(ObjectCreateView):
    model = Student
    form_class = StudentForm
    success_url = reverse_lazy("students:student_list")
    success_message = "New student successfully added."


class StudentUpdateView(ObjectUpdateView):
    model = Student
    form_class = StudentForm
    success_url = reverse_lazy("students:student_list")
    success_message = "Record successfully updated."


class StudentDeleteView(ObjectDeleteView):
    model = Student
    success_url = reverse_lazy("students:student_list")
    success_message = "The student successfully deleted."


class StudentDashboardView(RoleRequiredMixin, TemplateView):
    template_name = "students/dashboard.html"
    allowed_roles = (ROLE_STUDENT,)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        student = getattr(self.request.user, 'student_profile', None)
        context['student'] = student
        if student is not None:
            context['timetable'] = group_by_day(lessons_for_student(student))
            context['assignments'] = Assignment.objects.for_student(student)[:5]
            context['attendance_summary'] = student_attendance_summary(student)
        context['announcements'] = Announcement.objects.active()
        return context


# Parents

class ParentListView(ObjectListView):
    model = Parent
    allowed_roles = (ROLE_ADMIN, ROLE_TEACHER)
    columns = (("Name", "full_name"), ("Username", "username"), ("Email", "email"),
               ("Phone", "phone"))
    search_fields = ("name", "surname", "username")
    create_url_name = "students:parent_create"
    update_url_name = "students:parent_update"
    delete_url_name = "students:parent_delete"


class ParentCreateView(ObjectCreateView):
    model = Parent
    form_class = ParentForm
    success_url = reverse_lazy("students:parent_list")
    success_message = "New parent successfully added."


class ParentUpdateView(ObjectUpdateView):
    model = Parent
    form_class = ParentForm
    success_url = reverse_lazy("students:parent_list")


class ParentDeleteView(ObjectDeleteView):
    model = Parent
    success_url = reverse_lazy("students:parent_list")
    success_message = "The parent successfully deleted."
