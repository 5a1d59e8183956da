"""
Role gates and the generic list/form/delete views shared by the apps
"""
from functools import wraps

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.contrib.auth.mixins import LoginRequiredMixin
from django.contrib.messages.views import SuccessMessageMixin
from django.core.exceptions import PermissionDenied
from django.db.models import ProtectedError, Q
from django.shortcuts import redirect
from django.views.generic import ListView
from django.views.generic.edit import CreateView, DeleteView, UpdateView

from .identity import ROLE_ADMIN, IdentityProvider


def request_role(request):
    if hasattr(request, "role"):
        return request.role
    return IdentityProvider.role_of(request.user)


class RoleRequiredMixin(LoginRequiredMixin):
    """Allow only users whose role is in ``allowed_roles``"""

    allowed_roles = (ROLE_ADMIN,)

    def dispatch(self, request, *args, **kwargs):
        if not request.user.is_authenticated:
            return self.handle_no_permission()
        if request_role(request) not in self.allowed_roles:
            raise PermissionDenied
        return super().dispatch(request, *args, **kwargs)


def role_required(*roles):
    """Function-view counterpart of RoleRequiredMixin"""

    def decorator(view_func):
        @wraps(view_func)
        @login_required
        def wrapper(request, *args, **kwargs):
            if request_role(request) not in roles:
                raise PermissionDenied
            return view_func(request, *args, **kwargs)

        return wrapper

    return decorator


class ObjectListView(RoleRequiredMixin, ListView):
    """Searchable, paginated table of objects"""

    template_name = "corecode/object_list.html"
    title = ""
    columns = ()
    search_fields = ()
    create_url_name = None
    update_url_name = None
    delete_url_name = None
    detail_url_name = None

    def get_paginate_by(self, queryset):
        return settings.ITEM_PER_PAGE

    def get_base_queryset(self):
        return super().get_queryset()

    def get_queryset(self):
        queryset = self.get_base_queryset()
        search = self.request.GET.get("search", "").strip()
        if search and self.search_fields:
            query = Q()
            for field in self.search_fields:
                query |= Q(**{f"{field}__icontains": search})
            queryset = queryset.filter(query)
        return queryset

    def can_manage(self):
        return request_role(self.request) == ROLE_ADMIN

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update({
            "title": self.title or self.model._meta.verbose_name_plural.title(),
            "columns": self.columns,
            "search": self.request.GET.get("search", ""),
            "can_manage": self.can_manage(),
            "create_url_name": self.create_url_name,
            "update_url_name": self.update_url_name,
            "delete_url_name": self.delete_url_name,
            "detail_url_name": self.detail_url_name,
        })
        return context


class ObjectFormMixin(RoleRequiredMixin, SuccessMessageMixin):
    template_name = "corecode/object_form.html"
    title = ""

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["title"] = self.title or self.model._meta.verbose_name.title()
        context["cancel_url"] = self.success_url
        return context


class ObjectCreateView(ObjectFormMixin, CreateView):
    success_message = "Record successfully created."


class ObjectUpdateView(ObjectFormMixin, UpdateView):
    success_message = "Record successfully updated."


class ObjectDeleteView(RoleRequiredMixin, SuccessMessageMixin, DeleteView):
    template_name = "corecode/object_confirm_delete.html"
    success_message = "Record successfully deleted."

    def form_valid(self, form):
        try:
            return super().form_valid(form)
        except ProtectedError:
            messages.error(
                self.request,
                "This record is still referenced by other records and cannot be deleted.",
            )
            return redirect(self.get_success_url())
