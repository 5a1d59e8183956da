"""
Celery settings for the portal, read before Django is configured.

Only ``os`` and ``logging`` may be imported here: ``college_app.settings``
imports this module.
"""
import os
import logging

logger = logging.getLogger(__name__)

# Shared hosting has no broker: ENV_TYPE=CPANEL runs every task in-process.
ENV_TYPE = os.environ.get('ENV_TYPE', 'STANDARD').upper()
RUN_IN_PROCESS = ENV_TYPE == 'CPANEL'

EMAIL_QUEUE = 'emails'
MAINTENANCE_QUEUE = 'maintenance'

TASK_CONFIG = {
    'USE_CELERY': not RUN_IN_PROCESS,
    'BROKER_URL': os.environ.get('CELERY_BROKER_URL', 'redis://localhost:6379/0'),
    'RESULT_BACKEND': os.environ.get('CELERY_RESULT_BACKEND', 'redis://localhost:6379/1'),
    'TASK_TRACK_STARTED': True,
    # mail delivery is the slowest job
    'TASK_TIME_LIMIT': 10 * 60,
    'TASK_SERIALIZER': 'json',
    'RESULT_SERIALIZER': 'json',
    'ACCEPT_CONTENT': ['json'],
    'TIMEZONE': os.environ.get('TIME_ZONE', 'UTC'),
    'TASK_ROUTES': {
        'admissions.*': {'queue': EMAIL_QUEUE},
        'system.*': {'queue': MAINTENANCE_QUEUE},
    },
    # seconds between two lesson status resets
    'LESSON_RESET_INTERVAL': int(os.environ.get('LESSON_RESET_INTERVAL', 60 * 60 * 24)),
}

logger.debug("Task settings: env=%s in_process=%s broker=%s",
             ENV_TYPE, RUN_IN_PROCESS, TASK_CONFIG['BROKER_URL'])
