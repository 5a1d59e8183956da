import json
import logging

from django.conf import settings
from django.db.models import Q
from django.http import JsonResponse
from django.urls import reverse_lazy
from django.views.decorators.http import require_http_methods
from django.views.generic import ListView

from apps.corecode.identity import ROLE_ADMIN, ROLE_PARENT, ROLE_STUDENT, ROLE_TEACHER
from apps.corecode.mixins import (
    ObjectCreateView,
    ObjectDeleteView,
    ObjectUpdateView,
    RoleRequiredMixin,
    request_role,
)
from apps.corecode.utils import visible_students

from .forms import ResultForm
from .models import Result
from .utils import ResultUpsertError, upsert_results

logger = logging.getLogger(__name__)

STAFF_ROLES = (ROLE_ADMIN, ROLE_TEACHER)
ALL_ROLES = (ROLE_ADMIN, ROLE_TEACHER, ROLE_STUDENT, ROLE_PARENT)


def results_for(request):
    """Results the requesting user may see, filtered by the query string"""
    queryset = Result.objects.select_related('student', 'subject').filter(
        student__in=visible_students(request)
    )
    student_id = request.GET.get('studentId')
    if student_id:
        queryset = queryset.filter(student_id=student_id) if student_id.isdigit() else queryset.none()
    subject_id = request.GET.get('subjectId')
    if subject_id:
        queryset = queryset.filter(subject_id=subject_id) if subject_id.isdigit() else queryset.none()
    return queryset


class ResultListView(RoleRequiredMixin, ListView):
    model = Result
    template_name = 'result/result_list.html'
    context_object_name = 'results'
    allowed_roles = ALL_ROLES

    def get_paginate_by(self, queryset):
        return settings.ITEM_PER_PAGE

    def get_queryset(self):
        queryset = results_for(self.request)
        search = self.request.GET.get('search', '').strip()
        if search:
            queryset = queryset.filter(
                Q(student__name__icontains=search)
                | Q(student__surname__icontains=search)
                | Q(subject__name__icontains=search)
            )
        return queryset

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['search'] = self.request.GET.get('search', '')
        context['can_manage'] = request_role(self.request) in STAFF_ROLES
        return context


class ResultCreateView(ObjectCreateView):
    model = Result
    form_class = ResultForm
    allowed_roles = STAFF_ROLES
    success_url = reverse_lazy('result:result_list')
    success_message = 'Result successfully saved.'


class ResultUpdateView(ObjectUpdateView):
    model = Result
    form_class = ResultForm
    allowed_roles = STAFF_ROLES
    success_url = reverse_lazy('result:result_list')


class ResultDeleteView(ObjectDeleteView):
    model = Result
    allowed_roles = STAFF_ROLES
    success_url = reverse_lazy('result:result_list')


def error_response(message, status, details=None):
    body = {'success': False, 'error': message}
    if details is not None:
        body['details'] = details
    return JsonResponse(body, status=status)


@require_http_methods(["GET", "POST"])
def results_api(request):
    """
    GET  /api/results/  list results visible to the user
    POST /api/results/  upsert a batch of results
    """
    if not request.user.is_authenticated:
        return error_response('Authentication required', 401)
    role = request_role(request)

    if request.method == 'GET':
        if role not in ALL_ROLES:
            return error_response('Forbidden', 403)
        try:
            results = [r.to_dict() for r in results_for(request)]
        except Exception:
            logger.exception("Failed to fetch results")
            return error_response('Failed to fetch results', 500)
        return JsonResponse({'success': True, 'data': {'results': results}, 'count': len(results)})

    if role not in STAFF_ROLES:
        return error_response('Forbidden', 403)
    try:
        payload = json.loads(request.body or b'null')
    except ValueError:
        return error_response('Invalid JSON body', 400)

    try:
        saved = upsert_results(payload)
    except ResultUpsertError as e:
        logger.warning("Result upsert rejected: %s", e.message)
        return error_response(e.message, e.status, e.details)
    except Exception:
        logger.exception("Failed to save results")
        return error_response('Failed to process results', 500)

    return JsonResponse({
        'success': True,
        'message': f'Successfully processed {len(saved)} results',
        'data': {'results': [r.to_dict() for r in saved]},
        'count': len(saved),
    })
