"""
Celery configuration for the college portal.
Named celery_app.py to avoid conflict with celery package.
"""
import os
from celery import Celery

settings_module = os.environ.get('DJANGO_SETTINGS_MODULE', 'college_app.settings')

os.environ.setdefault('DJANGO_SETTINGS_MODULE', settings_module)

app = Celery('college_background_tasks')

# Using a string here means the worker doesn't have to serialize
# the configuration object to child processes.
app.config_from_object('django.conf:settings', namespace='CELERY')

app.autodiscover_tasks()

import tasks.admission_tasks  # noqa: E402,F401
import tasks.system_tasks  # noqa: E402,F401
