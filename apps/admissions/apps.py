from django.apps import AppConfig


class AdmissionsConfig(AppConfig):
    default_auto_field = "django.db.models.AutoField"
    name = "apps.admissions"
    verbose_name = "Admissions"
