import logging

from django.conf import settings
from django.contrib import messages
from django.db.models import Q
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils.dateparse import parse_date
from django.views import View
from django.views.generic import ListView

from apps.corecode.identity import ROLE_ADMIN, ROLE_TEACHER
from apps.corecode.mixins import RoleRequiredMixin, request_role
from apps.corecode.utils import can_view_student
from apps.students.models import Student

from .forms import AttendanceSheetForm
from .models import Attendance
from .services import (
    delete_attendance,
    get_attendance,
    record_attendance,
    student_attendance_summary,
    students_for_lesson,
    update_attendance,
)

logger = logging.getLogger(__name__)


class TeacherScopedMixin(RoleRequiredMixin):
    allowed_roles = (ROLE_ADMIN, ROLE_TEACHER)

    def get_teacher(self):
        if request_role(self.request) == ROLE_TEACHER:
            return getattr(self.request.user, 'teacher_profile', None)
        return None


class AttendanceSheetView(TeacherScopedMixin, View):
    """Take or edit attendance for one lesson on one date"""
    template_name = 'attendance/attendance_sheet.html'

    def get_form(self, data):
        return AttendanceSheetForm(data or None, teacher=self.get_teacher())

    def render_sheet(self, request, form):
        context = {'form': form}
        if form.is_bound and form.is_valid():
            lesson = form.cleaned_data['lesson']
            date = form.cleaned_data['date']
            existing = {a.student_id: a for a in get_attendance(lesson, date)}
            context.update({
                'lesson': lesson,
                'date': date,
                'existing': list(existing.values()),
                'rows': [
                    (student, existing[student.pk].present if student.pk in existing else False)
                    for student in students_for_lesson(lesson)
                ],
            })
        return render(request, self.template_name, context)

    def get(self, request):
        return self.render_sheet(request, self.get_form(request.GET))

    def post(self, request):
        form = self.get_form(request.POST)
        if not form.is_valid():
            messages.error(request, "Select a valid lesson and date.")
            return self.render_sheet(request, form)

        lesson = form.cleaned_data['lesson']
        date = form.cleaned_data['date']
        present_ids = set(request.POST.getlist('present'))
        marks = {
            student.pk: str(student.pk) in present_ids
            for student in students_for_lesson(lesson)
        }
        if not marks:
            messages.error(request, "No students found for this lesson.")
            return self.render_sheet(request, form)

        attendance_ids = [pk for pk in request.POST.getlist('attendance_ids') if pk.isdigit()]
        if attendance_ids:
            update_attendance(lesson, date, marks, attendance_ids=attendance_ids)
            messages.success(request, "Attendance updated successfully.")
        else:
            _, replaced = record_attendance(lesson, date, marks)
            if replaced:
                messages.success(request, "Attendance replaced successfully.")
            else:
                messages.success(request, "Attendance recorded successfully.")
        return redirect(f"{request.path}?lesson={lesson.pk}&date={date.isoformat()}")


class AttendanceDeleteView(TeacherScopedMixin, View):
    def post(self, request):
        form = AttendanceSheetForm(request.POST, teacher=self.get_teacher())
        if form.is_valid():
            deleted = delete_attendance(form.cleaned_data['lesson'], form.cleaned_data['date'])
            messages.success(request, f"{deleted} attendance records deleted.")
        else:
            messages.error(request, "Select a valid lesson and date.")
        return redirect('attendance:attendance_list')


class AttendanceListView(TeacherScopedMixin, ListView):
    model = Attendance
    template_name = 'attendance/attendance_list.html'
    context_object_name = 'attendances'

    def get_paginate_by(self, queryset):
        return settings.ITEM_PER_PAGE

    def get_queryset(self):
        queryset = Attendance.objects.select_related(
            'student', 'lesson__subject_offering__subject'
        )
        teacher = self.get_teacher()
        if teacher is not None:
            queryset = queryset.filter(lesson__subject_offering__teacher=teacher)
        lesson_id = self.request.GET.get('lessonId')
        if lesson_id and lesson_id.isdigit():
            queryset = queryset.filter(lesson_id=lesson_id)
        try:
            date = parse_date(self.request.GET.get('date') or '')
        except ValueError:
            date = None
        if date:
            queryset = queryset.filter(date=date)
        search = self.request.GET.get('search', '').strip()
        if search:
            queryset = queryset.filter(
                Q(student__name__icontains=search) | Q(student__surname__icontains=search)
            )
        return queryset


def student_attendance_api(request, pk):
    """GET /api/students/<id>/attendance/"""
    if not request.user.is_authenticated:
        return JsonResponse({'success': False, 'error': 'Authentication required'}, status=401)
    student = get_object_or_404(Student, pk=pk)
    if not can_view_student(request, student):
        return JsonResponse({'success': False, 'error': 'Forbidden'}, status=403)
    try:
        return JsonResponse({'attendance': student_attendance_summary(student)})
    except Exception:
        logger.exception("Failed to build attendance summary for student %s", pk)
        return JsonResponse({'success': False, 'error': 'Failed to fetch attendance'}, status=500)
