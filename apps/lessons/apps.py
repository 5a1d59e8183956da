from django.apps import AppConfig


class LessonsConfig(AppConfig):
    default_auto_field = "django.db.models.AutoField"
    name = "apps.lessons"
