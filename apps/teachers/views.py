from django.urls import reverse_lazy
from django.views.generic import DetailView, TemplateView

from apps.announcements.models import Announcement
from apps.corecode.identity import ROLE_ADMIN, ROLE_TEACHER
from apps.corecode.mixins import (
    ObjectCreateView,
    ObjectDeleteView,
    ObjectListView,
    ObjectUpdateView,
    RoleRequiredMixin,
)
from apps.lessons.models import Lesson
from apps.lessons.scheduling import group_by_day

from .forms import TeacherForm
from .models import Teacher


class TeacherListView(ObjectListView):
    model = Teacher
    allowed_roles = (ROLE_ADMIN, ROLE_TEACHER)
    columns = (("Name", "full_name"), ("Username", "username"), ("Email", "email"),
               ("Phone", "phone"))
    search_fields = ("name", "surname", "username")
    create_url_name = "teachers:teacher_create"
    update_url_name = "teachers:teacher_update"
    delete_url_name = "teachers:teacher_delete"
    detail_url_name = "teachers:teacher_detail"


class TeacherDetailView(RoleRequiredMixin, DetailView):
    model = Teacher
    template_name = "teachers/teacher_detail.html"
    allowed_roles = (ROLE_ADMIN, ROLE_TEACHER)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["offerings"] = self.object.subject_offerings.select_related(
            "subject", "semester__course"
        )
        context["timetable"] = group_by_day(
            Lesson.objects.filter(subject_offering__teacher=self.object).select_related(
                "subject_offering__subject"
            )
        )
        return context


class TeacherCreateView(ObjectCreateView):
    model = Teacher
    form_class = TeacherForm
    success_url = reverse_lazy("teachers:teacher_list")
    success_message = "New teacher successfully added."


class TeacherUpdateView(ObjectUpdateView):
    model = Teacher
    form_class = TeacherForm
    success_url = reverse_lazy("teachers:teacher_list")
    success_message = "Record successfully updated."


class TeacherDeleteView(ObjectDeleteView):
    model = Teacher
    success_url = reverse_lazy("teachers:teacher_list")
    success_message = "The teacher successfully deleted."


class TeacherDashboardView(RoleRequiredMixin, TemplateView):
    template_name = "teachers/dashboard.html"
    allowed_roles = (ROLE_TEACHER,)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        teacher = getattr(self.request.user, "teacher_profile", None)
        context["teacher"] = teacher
        if teacher is not None:
            context["offerings"] = teacher.subject_offerings.select_related(
                "subject", "semester__course"
            )
            context["timetable"] = group_by_day(
                Lesson.objects.filter(subject_offering__teacher=teacher).select_related(
                    "subject_offering__subject", "subject_offering__semester__course"
                )
            )
        context["announcements"] = Announcement.objects.active()
        return context
