from django.http import Http404
from django.views.generic import DetailView, TemplateView

from apps.announcements.models import Announcement
from apps.attendance.services import student_attendance_summary
from apps.corecode.identity import ROLE_PARENT
from apps.corecode.mixins import RoleRequiredMixin
from apps.lessons.scheduling import group_by_day
from apps.students.models import Student
from apps.students.views import lessons_for_student


class ParentRequiredMixin(RoleRequiredMixin):
    """Parent role and a parent profile"""
    allowed_roles = (ROLE_PARENT,)

    def get_parent(self):
        parent = getattr(self.request.user, 'parent_profile', None)
        if parent is None:
            raise Http404("No parent profile for this account")
        return parent


class ParentDashboardView(ParentRequiredMixin, TemplateView):
    template_name = 'parent/dashboard.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        parent = self.get_parent()
        wards = parent.students.select_related('course', 'current_semester')
        context.update({
            'parent': parent,
            'wards': wards,
            'announcements': Announcement.objects.active(),
        })
        return context


class WardDetailView(ParentRequiredMixin, DetailView):
    """View details of a specific ward"""
    template_name = 'parent/ward_detail.html'
    context_object_name = 'student'

    def get_queryset(self):
        # other parents' children are not found
        return Student.objects.filter(parent=self.get_parent()).select_related(
            'course', 'current_semester'
        )

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        student = self.object
        context['results'] = student.results.select_related('subject')
        context['attendance_summary'] = student_attendance_summary(student)
        context['timetable'] = group_by_day(lessons_for_student(student))
        return context
