import logging

from django.conf import settings
from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse, reverse_lazy
from django.utils.translation import gettext_lazy as _
from django.views import View
from django.views.decorators.http import require_GET
from django.views.generic import DetailView, FormView, ListView

from apps.corecode.identity import ROLE_ADMIN
from apps.corecode.mixins import RoleRequiredMixin

from .forms import AdmissionApplyForm, RejectionForm
from .models import AdmissionForm, Payment
from .services import AdmissionError, AdmissionService

logger = logging.getLogger(__name__)


class AdmissionApplyView(FormView):
    """Public view for submitting admission forms"""
    form_class = AdmissionApplyForm
    template_name = 'admissions/apply.html'
    success_url = reverse_lazy('admissions:submitted')

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['admission_fee'] = settings.ADMISSION_FEE
        return context

    def form_valid(self, form):
        admission = AdmissionService.submit(
            form.admission_data(),
            receipt_url=form.cleaned_data.get('receipt_url') or '',
            existing_parent=form.existing_parent,
        )
        self.request.session['application_number'] = admission.application_number
        return super().form_valid(form)


def admission_submitted(request):
    """Thank you page after the admission form is submitted"""
    return render(request, 'admissions/submitted.html', {
        'application_number': request.session.pop('application_number', None),
    })


def verify_parent(request):
    """Landing page of the link mailed to the parent"""
    token = request.GET.get('token', '')
    context = {}
    try:
        context['admission'] = AdmissionService.verify_parent_email(token)
    except AdmissionError as exc:
        context['error'] = str(exc)
    return render(request, 'admissions/verify_parent.html', context,
                  status=400 if 'error' in context else 200)


@require_GET
def parent_exists(request):
    username = request.GET.get('username', '').strip()
    parent = AdmissionService.find_parent(username)
    if parent is None:
        return JsonResponse({'exists': False})
    return JsonResponse({
        'exists': True,
        'parent': {'id': parent.pk, 'name': parent.full_name},
    })


class PendingPaymentListView(RoleRequiredMixin, ListView):
    """Admission payments awaiting (or past) verification"""
    model = Payment
    template_name = 'admissions/pending_list.html'
    context_object_name = 'payments'
    allowed_roles = (ROLE_ADMIN,)

    def get_paginate_by(self, queryset):
        return settings.ITEM_PER_PAGE

    def get_queryset(self):
        status = (Payment.Status.APPROVED if self.request.GET.get('status') == 'verified'
                  else Payment.Status.PENDING)
        ordering = '-admission__student_name' if self.request.GET.get('sort') == 'desc' \
            else 'admission__student_name'
        return Payment.objects.filter(status=status).select_related(
            'admission__course'
        ).order_by(ordering, 'pk')

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['status'] = self.request.GET.get('status', '')
        context['sort'] = self.request.GET.get('sort', 'asc')
        return context


class AdmissionDetailView(RoleRequiredMixin, DetailView):
    model = AdmissionForm
    template_name = 'admissions/admission_detail.html'
    context_object_name = 'admission'
    allowed_roles = (ROLE_ADMIN,)

    def get_queryset(self):
        return AdmissionForm.objects.select_related('course', 'parent', 'student')

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['payment'] = getattr(self.object, 'payment', None)
        context['logs'] = self.object.logs.select_related('actor')
        context['rejection_form'] = RejectionForm()
        return context


class AdmissionActionView(RoleRequiredMixin, View):
    """POST-only admin action on an admission or its payment"""
    allowed_roles = (ROLE_ADMIN,)
    http_method_names = ['post']
    success_text = ''

    def perform(self, obj, reason):
        raise NotImplementedError

    def get_admission(self, obj):
        return obj

    def post(self, request, pk):
        obj = get_object_or_404(self.model, pk=pk)
        form = RejectionForm(request.POST)
        reason = form.cleaned_data['reason'] if form.is_valid() else ''
        admission = self.get_admission(obj)
        try:
            self.perform(obj, reason)
        except AdmissionError as exc:
            messages.error(request, str(exc))
        else:
            messages.success(request, self.success_text)
        return redirect(reverse('admissions:admission_detail', kwargs={'pk': admission.pk}))


class VerifyPaymentView(AdmissionActionView):
    model = Payment
    success_text = _("Payment verified")

    def get_admission(self, obj):
        return obj.admission

    def perform(self, obj, reason):
        AdmissionService.verify_payment(obj.pk, self.request.user)


class RejectPaymentView(VerifyPaymentView):
    success_text = _("Payment rejected")

    def perform(self, obj, reason):
        AdmissionService.reject_payment(obj.pk, self.request.user, reason)


class RejectAdmissionView(AdmissionActionView):
    model = AdmissionForm
    success_text = _("Admission rejected")

    def perform(self, obj, reason):
        AdmissionService.reject_admission(obj.pk, self.request.user, reason)
