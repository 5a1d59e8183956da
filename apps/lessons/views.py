import logging

from django.contrib import messages
from django.core.exceptions import ValidationError
from django.shortcuts import redirect, render
from django.urls import reverse_lazy
from django.views import View
from django.views.generic import TemplateView

from apps.corecode.identity import ROLE_ADMIN, ROLE_TEACHER
from apps.corecode.mixins import (
    ObjectCreateView,
    ObjectDeleteView,
    ObjectUpdateView,
    RoleRequiredMixin,
    request_role,
)
from apps.corecode.models import Course, Semester

from .forms import LessonForm, PeriodFormSet, ScheduleSemesterForm
from .models import Day, Lesson
from .scheduling import create_weekly_schedule, group_by_day

logger = logging.getLogger(__name__)


def filter_lessons(queryset, params):
    """Apply the ``courseId``, ``semesterId`` and ``day`` query filters"""
    course_id = params.get('courseId')
    semester_id = params.get('semesterId')
    day = params.get('day')
    if course_id and course_id.isdigit():
        queryset = queryset.filter(subject_offering__semester__course_id=course_id)
    if semester_id and semester_id.isdigit():
        queryset = queryset.filter(subject_offering__semester_id=semester_id)
    if day in Day.values:
        queryset = queryset.filter(day=day)
    return queryset


class TimetableView(RoleRequiredMixin, TemplateView):
    """Lessons grouped by weekday"""
    template_name = 'lessons/timetable.html'
    allowed_roles = (ROLE_ADMIN, ROLE_TEACHER)

    def get_lessons(self):
        lessons = Lesson.objects.select_related(
            'subject_offering__subject',
            'subject_offering__teacher',
            'subject_offering__semester__course',
        )
        if request_role(self.request) == ROLE_TEACHER:
            lessons = lessons.filter(subject_offering__teacher__user=self.request.user)
        return filter_lessons(lessons, self.request.GET)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['timetable'] = group_by_day(self.get_lessons())
        context['courses'] = Course.objects.all()
        context['semesters'] = Semester.objects.select_related('course')
        context['days'] = Day.choices
        context['can_manage'] = request_role(self.request) == ROLE_ADMIN
        return context


class LessonCreateView(ObjectCreateView):
    model = Lesson
    form_class = LessonForm
    title = 'New Lesson'
    success_url = reverse_lazy('lessons:timetable')
    success_message = 'Lesson successfully created.'


class LessonUpdateView(ObjectUpdateView):
    model = Lesson
    form_class = LessonForm
    title = 'Update Lesson'
    success_url = reverse_lazy('lessons:timetable')
    success_message = 'Lesson successfully updated.'


class LessonDeleteView(ObjectDeleteView):
    model = Lesson
    success_url = reverse_lazy('lessons:timetable')
    success_message = 'Lesson successfully deleted.'


class WeeklyScheduleView(RoleRequiredMixin, View):
    """Create a batch of lessons for one semester in a single submit"""
    template_name = 'lessons/weekly_schedule.html'

    def get(self, request):
        return render(request, self.template_name, {
            'form': ScheduleSemesterForm(),
            'formset': PeriodFormSet(prefix='periods'),
        })

    def post(self, request):
        form = ScheduleSemesterForm(request.POST)
        formset = PeriodFormSet(request.POST, prefix='periods')

        if form.is_valid() and formset.is_valid():
            periods = [f.cleaned_data for f in formset if f.cleaned_data]
            try:
                lessons = create_weekly_schedule(form.cleaned_data['semester'], periods)
            except ValidationError as e:
                for message in e.messages:
                    messages.error(request, message)
            else:
                messages.success(request, f"Weekly schedule created with {len(lessons)} lessons.")
                return redirect('lessons:timetable')

        return render(request, self.template_name, {'form': form, 'formset': formset})
