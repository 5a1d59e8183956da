from django.urls import reverse_lazy
from django.views.generic import DetailView

from apps.corecode.identity import ROLE_ADMIN, ROLE_STUDENT, ROLE_TEACHER, ROLES
from apps.corecode.mixins import (
    ObjectCreateView,
    ObjectDeleteView,
    ObjectListView,
    ObjectUpdateView,
    RoleRequiredMixin,
    request_role,
)
from apps.corecode.models import Course, Semester

from .forms import AssignmentForm
from .models import Assignment

STAFF_ROLES = (ROLE_ADMIN, ROLE_TEACHER)


def assignments_for(request):
    queryset = Assignment.objects.select_related('course', 'semester')
    if request_role(request) == ROLE_STUDENT:
        student = getattr(request.user, 'student_profile', None)
        if student is None:
            return queryset.none()
        queryset = queryset.for_student(student)
    return queryset


class AssignmentListView(ObjectListView):
    model = Assignment
    template_name = "assignments/assignment_list.html"
    allowed_roles = ROLES
    columns = (("Title", "title"), ("Course", "course"), ("Semester", "semester.number"),
               ("Start", "start_date"), ("Due", "due_date"))
    search_fields = ("title",)
    create_url_name = "assignments:assignment_create"
    update_url_name = "assignments:assignment_update"
    delete_url_name = "assignments:assignment_delete"
    detail_url_name = "assignments:assignment_detail"

    def can_manage(self):
        return request_role(self.request) in STAFF_ROLES

    def get_base_queryset(self):
        return assignments_for(self.request)

    def get_queryset(self):
        queryset = super().get_queryset()
        course_id = self.request.GET.get('courseId')
        if course_id and course_id.isdigit():
            queryset = queryset.filter(course_id=course_id)
        semester_id = self.request.GET.get('semesterId')
        if semester_id and semester_id.isdigit():
            queryset = queryset.filter(semester_id=semester_id)
        return queryset

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['courses'] = Course.objects.all()
        context['semesters'] = Semester.objects.select_related('course')
        return context


class AssignmentDetailView(RoleRequiredMixin, DetailView):
    model = Assignment
    template_name = "assignments/assignment_detail.html"
    allowed_roles = ROLES

    def get_queryset(self):
        return assignments_for(self.request)


class AssignmentCreateView(ObjectCreateView):
    model = Assignment
    form_class = AssignmentForm
    allowed_roles = STAFF_ROLES
    success_url = reverse_lazy("assignments:assignment_list")


class AssignmentUpdateView(ObjectUpdateView):
    model = Assignment
    form_class = AssignmentForm
    allowed_roles = STAFF_ROLES
    success_url = reverse_lazy("assignments:assignment_list")


class AssignmentDeleteView(ObjectDeleteView):
    model = Assignment
    allowed_roles = STAFF_ROLES
    success_url = reverse_lazy("assignments:assignment_list")
