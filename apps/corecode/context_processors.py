from django.conf import settings


def site_defaults(request):
    return {
        "school_name": settings.SCHOOL_NAME,
        "current_role": getattr(request, "role", None),
    }
