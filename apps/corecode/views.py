from django.db.models import Count
from django.shortcuts import redirect
from django.urls import reverse_lazy
from django.views.generic import TemplateView

from apps.admissions.models import AdmissionForm, Payment
from apps.announcements.models import Announcement
from apps.students.models import Parent, Student
from apps.teachers.models import Teacher

from .forms import CourseForm, SubjectForm, SubjectOfferingForm
from .identity import IdentityProvider
from .mixins import (
    ObjectCreateView,
    ObjectDeleteView,
    ObjectListView,
    ObjectUpdateView,
    RoleRequiredMixin,
)
from .models import Course, Subject, SubjectOffering
from .views_auth import dashboard_url_for


class HomeView(TemplateView):
    """Public landing page; signed-in users go to their dashboard"""
    template_name = "corecode/home.html"

    def get(self, request, *args, **kwargs):
        if IdentityProvider.role_of(request.user):
            return redirect(dashboard_url_for(request.user))
        return super().get(request, *args, **kwargs)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["courses"] = Course.objects.annotate(semester_total=Count("semesters"))
        return context


class AdminDashboardView(RoleRequiredMixin, TemplateView):
    template_name = "corecode/admin_dashboard.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["student_count"] = Student.objects.count()
        context["teacher_count"] = Teacher.objects.count()
        context["parent_count"] = Parent.objects.count()
        context["pending_payment_count"] = Payment.objects.filter(
            status=Payment.Status.PENDING
        ).count()
        context["pending_admission_count"] = AdmissionForm.objects.exclude(
            status__in=[AdmissionForm.Status.COMPLETED, AdmissionForm.Status.REJECTED]
        ).count()
        context["announcements"] = Announcement.objects.active()
        return context


# Courses

class CourseListView(ObjectListView):
    model = Course
    columns = (("Name", "name"), ("Code", "code"), ("Duration (years)", "duration"),
               ("Semesters", "semester_total"))
    search_fields = ("name", "code")
    create_url_name = "corecode:course_create"
    update_url_name = "corecode:course_update"
    delete_url_name = "corecode:course_delete"

    def get_queryset(self):
        return super().get_queryset().annotate(semester_total=Count("semesters"))


class CourseCreateView(ObjectCreateView):
    model = Course
    form_class = CourseForm
    success_url = reverse_lazy("corecode:course_list")
    success_message = "New course successfully added."


class CourseUpdateView(ObjectUpdateView):
    model = Course
    form_class = CourseForm
    success_url = reverse_lazy("corecode:course_list")
    success_message = "Course successfully updated."


class CourseDeleteView(ObjectDeleteView):
    model = Course
    success_url = reverse_lazy("corecode:course_list")
    success_message = "The course successfully deleted."


# Subjects

class SubjectListView(ObjectListView):
    model = Subject
    columns = (("Name", "name"),)
    search_fields = ("name",)
    create_url_name = "corecode:subject_create"
    update_url_name = "corecode:subject_update"
    delete_url_name = "corecode:subject_delete"


class SubjectCreateView(ObjectCreateView):
    model = Subject
    form_class = SubjectForm
    success_url = reverse_lazy("corecode:subject_list")
    success_message = "New subject successfully added."


class SubjectUpdateView(ObjectUpdateView):
    model = Subject
    form_class = SubjectForm
    success_url = reverse_lazy("corecode:subject_list")
    success_message = "Subject successfully updated."


class SubjectDeleteView(ObjectDeleteView):
    model = Subject
    success_url = reverse_lazy("corecode:subject_list")
    success_message = "The subject successfully deleted."


# Subject offerings

class SubjectOfferingListView(ObjectListView):
    model = SubjectOffering
    title = "Subject Offerings"
    columns = (("Subject", "subject"), ("Semester", "semester"), ("Teacher", "teacher.full_name"))
    search_fields = ("subject__name", "teacher__name", "teacher__surname", "semester__course__name")
    create_url_name = "corecode:offering_create"
    update_url_name = "corecode:offering_update"
    delete_url_name = "corecode:offering_delete"

    def get_queryset(self):
        return super().get_queryset().select_related("subject", "semester__course", "teacher")


class SubjectOfferingCreateView(ObjectCreateView):
    model = SubjectOffering
    form_class = SubjectOfferingForm
    title = "New Subject Offering"
    success_url = reverse_lazy("corecode:offering_list")


class SubjectOfferingUpdateView(ObjectUpdateView):
    model = SubjectOffering
    form_class = SubjectOfferingForm
    title = "Update Subject Offering"
    success_url = reverse_lazy("corecode:offering_list")


class SubjectOfferingDeleteView(ObjectDeleteView):
    model = SubjectOffering
    success_url = reverse_lazy("corecode:offering_list")
