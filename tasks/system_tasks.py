"""
System maintenance tasks run by celery beat.
"""

import logging

from celery import shared_task

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# LESSON STATUS RESET
# ---------------------------------------------------------------------------

@shared_task(
    bind=True,
    name="system.reset_lesson_statuses",
    autoretry_for=(Exception,),
    retry_backoff=300,
    retry_kwargs={"max_retries": 2},
)
def reset_lesson_statuses_task(self):
    """
    Put lessons that had attendance taken yesterday back to SCHEDULED so the
    weekly slot can be marked again.
    """
    from apps.attendance.services import reset_lesson_statuses

    updated = reset_lesson_statuses()

    logger.info(
        "[%s] Lesson statuses reset",
        self.request.id,
        extra={"updated": updated},
    )
    return {"success": True, "updated": updated}
