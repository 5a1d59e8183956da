import logging

from django.conf import settings
from django.contrib import messages
from django.db.models import Q
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect
from django.urls import reverse_lazy
from django.views import View
from django.views.generic import FormView, ListView

from apps.corecode.mixins import RoleRequiredMixin
from apps.corecode.utils import can_view_student
from apps.students.models import Student

from .forms import BatchEnrollmentForm, EnrollmentForm, PromotionForm
from .models import Enrollment
from .services import EnrollmentError, EnrollmentService, active_subjects_for

logger = logging.getLogger(__name__)


class EnrollmentListView(RoleRequiredMixin, ListView):
    model = Enrollment
    template_name = 'enrollments/enrollment_list.html'
    context_object_name = 'enrollments'

    def get_paginate_by(self, queryset):
        return settings.ITEM_PER_PAGE

    def get_queryset(self):
        queryset = Enrollment.objects.select_related(
            'student', 'subject_offering__subject',
            'subject_offering__semester__course', 'subject_offering__teacher',
        )
        student_id = self.request.GET.get('studentId')
        if student_id and student_id.isdigit():
            queryset = queryset.filter(student_id=student_id)
        offering_id = self.request.GET.get('subjectOfferingId')
        if offering_id and offering_id.isdigit():
            queryset = queryset.filter(subject_offering_id=offering_id)
        search = self.request.GET.get('search', '').strip()
        if search:
            queryset = queryset.filter(
                Q(student__name__icontains=search)
                | Q(student__surname__icontains=search)
                | Q(subject_offering__subject__name__icontains=search)
            )
        return queryset

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['search'] = self.request.GET.get('search', '')
        return context


class EnrollStudentView(RoleRequiredMixin, FormView):
    form_class = EnrollmentForm
    template_name = 'corecode/object_form.html'
    success_url = reverse_lazy('enrollments:enrollment_list')
    extra_context = {'title': 'Enroll Student', 'cancel_url': success_url}

    def form_valid(self, form):
        try:
            EnrollmentService.enroll(
                form.cleaned_data['student'], form.cleaned_data['subject_offering']
            )
        except EnrollmentError as e:
            form.add_error(None, str(e))
            return self.form_invalid(form)
        messages.success(self.request, "Student enrolled successfully.")
        return super().form_valid(form)


class BatchEnrollView(RoleRequiredMixin, FormView):
    form_class = BatchEnrollmentForm
    template_name = 'corecode/object_form.html'
    success_url = reverse_lazy('enrollments:enrollment_list')
    extra_context = {'title': 'Batch Enrollment', 'cancel_url': success_url}

    def form_valid(self, form):
        try:
            created, skipped = EnrollmentService.batch_enroll(
                [s.pk for s in form.cleaned_data['students']],
                [o.pk for o in form.cleaned_data['subject_offerings']],
            )
        except EnrollmentError as e:
            form.add_error(None, str(e))
            return self.form_invalid(form)
        if created:
            messages.success(self.request, f"Created {created} new enrollments ({skipped} skipped).")
        else:
            messages.info(self.request, "No new enrollments created. All enrollments already exist.")
        return super().form_valid(form)


class PromoteStudentsView(RoleRequiredMixin, FormView):
    form_class = PromotionForm
    template_name = 'corecode/object_form.html'
    success_url = reverse_lazy('enrollments:enrollment_list')
    extra_context = {'title': 'Promote Students', 'cancel_url': success_url}

    def form_valid(self, form):
        try:
            promoted = EnrollmentService.promote(
                form.cleaned_data['course'],
                form.cleaned_data['from_semester'],
                form.cleaned_data['to_semester'],
            )
        except EnrollmentError as e:
            form.add_error(None, str(e))
            return self.form_invalid(form)
        messages.success(self.request, f"{promoted} students promoted.")
        return super().form_valid(form)


class EnrollmentRemoveView(RoleRequiredMixin, View):
    def post(self, request, pk):
        try:
            EnrollmentService.remove(pk)
        except EnrollmentError as e:
            messages.error(request, str(e))
        else:
            messages.success(request, "Enrollment removed.")
        return redirect('enrollments:enrollment_list')


class EnrollmentBulkRemoveView(RoleRequiredMixin, View):
    def post(self, request):
        ids = [pk for pk in request.POST.getlist('enrollment_ids') if pk.isdigit()]
        try:
            count = EnrollmentService.bulk_remove(ids)
        except EnrollmentError as e:
            messages.error(request, str(e))
        else:
            messages.success(request, f"Successfully removed {count} enrollment(s)")
        return redirect('enrollments:enrollment_list')


def student_subjects_api(request, pk):
    """GET /api/students/<id>/subjects/"""
    if not request.user.is_authenticated:
        return JsonResponse({'success': False, 'error': 'Authentication required'}, status=401)
    student = get_object_or_404(Student, pk=pk)
    if not can_view_student(request, student):
        return JsonResponse({'success': False, 'error': 'Forbidden'}, status=403)
    return JsonResponse({'subjects': active_subjects_for(student)})
