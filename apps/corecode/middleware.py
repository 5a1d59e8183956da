from .identity import IdentityProvider


class RoleMiddleware:
    """Attach the role claim of the current user as ``request.role``"""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.role = IdentityProvider.role_of(request.user)

        response = self.get_response(request)

        return response
