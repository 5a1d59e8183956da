"""
Signals keeping accounts in step with the profiles that own them
"""
import logging

from django.contrib.auth.models import User
from django.db.models.signals import post_delete, post_save

from apps.corecode.identity import IdentityProvider

logger = logging.getLogger(__name__)

PROFILE_MODELS = ('students.Student', 'students.Parent', 'teachers.Teacher')


def delete_account_with_profile(sender, instance, **kwargs):
    """
    Remove the login account when a profile row is deleted on its own
    (profile list views, Django admin). Deletions that started from the
    account cascade here and need nothing more.
    """
    if isinstance(kwargs.get('origin'), User):
        return
    user = User.objects.filter(pk=instance.user_id).first()
    if user is not None:
        IdentityProvider.delete_account(user)


def log_profile_changes(sender, instance, created, **kwargs):
    action = "created" if created else "updated"
    logger.info("%s %s: %s", sender.__name__, action, instance.username)


for model in PROFILE_MODELS:
    post_delete.connect(delete_account_with_profile, sender=model,
                        dispatch_uid=f"delete_account_{model}")
    post_save.connect(log_profile_changes, sender=model,
                      dispatch_uid=f"log_profile_{model}")
