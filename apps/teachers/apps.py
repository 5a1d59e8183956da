from django.apps import AppConfig


class TeachersConfig(AppConfig):
    default_auto_field = "django.db.models.AutoField"
    name = "apps.teachers"
