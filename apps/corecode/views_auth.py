from django.contrib.auth.views import LoginView
from django.urls import reverse_lazy

from .identity import ROLE_ADMIN, ROLE_PARENT, ROLE_STUDENT, ROLE_TEACHER, IdentityProvider

DASHBOARDS = {
    ROLE_ADMIN: 'admin_dashboard',
    ROLE_TEACHER: 'teachers:dashboard',
    ROLE_STUDENT: 'students:dashboard',
    ROLE_PARENT: 'parent:dashboard',
}


def dashboard_url_for(user):
    name = DASHBOARDS.get(IdentityProvider.role_of(user))
    return reverse_lazy(name) if name else reverse_lazy('home')


class CustomLoginView(LoginView):
    """Login view redirecting each role to its own dashboard"""
    template_name = 'registration/login.html'
    redirect_authenticated_user = True

    def get_success_url(self):
        return self.get_redirect_url() or dashboard_url_for(self.request.user)
