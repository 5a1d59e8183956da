"""
Identity layer: user accounts and the role claim.

Accounts live in django.contrib.auth; the role of an account is its
membership of one of the role groups below.
"""
import logging
import re
import secrets
import string

from django import forms
from django.contrib.auth.models import Group, User
from django.db import transaction
from django.utils.translation import gettext_lazy as _

logger = logging.getLogger(__name__)

ROLE_ADMIN = "admin"
ROLE_TEACHER = "teacher"
ROLE_STUDENT = "student"
ROLE_PARENT = "parent"
ROLES = (ROLE_ADMIN, ROLE_TEACHER, ROLE_STUDENT, ROLE_PARENT)

PASSWORD_ALPHABET = string.ascii_letters + string.digits + "!@#$%^&*()"


class IdentityError(Exception):
    """Raised when an account cannot be created or changed"""
    pass


def generate_password(length=12):
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


def generate_username(prefix, name):
    """
    Build a username like ``student_jane_a1b2c3`` that is not taken yet.
    """
    safe = re.sub(r"[^a-z0-9_]", "", name.lower().replace(" ", "_")) or "user"
    # room for the prefix and the "_" + 6 hex suffix within 150 chars
    safe = safe[:150 - len(prefix) - 8]
    for _ in range(10):
        username = f"{prefix}_{safe}_{secrets.token_hex(3)}"
        if not User.objects.filter(username=username).exists():
            return username
    raise IdentityError("Username generation failed after multiple attempts")


class IdentityProvider:
    """Create, update and delete accounts carrying a role claim"""

    @classmethod
    def create_account(cls, *, username, password, first_name, last_name,
                       role, email=""):
        if role not in ROLES:
            raise IdentityError(f"Unknown role: {role}")
        if User.objects.filter(username=username).exists():
            raise IdentityError(f"Username '{username}' is already taken")

        with transaction.atomic():
            user = User.objects.create_user(
                username=username,
                email=email or "",
                password=password,
                first_name=(first_name or "")[:150],
                last_name=(last_name or "")[:150],
            )
            group, _ = Group.objects.get_or_create(name=role)
            user.groups.add(group)

        logger.info("Account created: %s (role=%s)", username, role)
        return user

    @classmethod
    def update_account(cls, user, *, username=None, password=None,
                       first_name=None, last_name=None, email=None):
        if username and username != user.username:
            if User.objects.filter(username=username).exclude(pk=user.pk).exists():
                raise IdentityError(f"Username '{username}' is already taken")
            user.username = username
        if first_name is not None:
            user.first_name = first_name[:150]
        if last_name is not None:
            user.last_name = last_name[:150]
        if email is not None:
            user.email = email
        if password:
            user.set_password(password)
        user.save()
        logger.info("Account updated: %s", user.username)
        return user

    @classmethod
    def delete_account(cls, user):
        username = user.username
        user.delete()
        logger.info("Account deleted: %s", username)

    @classmethod
    def role_of(cls, user):
        """Return the role claim of a user or None"""
        if user is None or not user.is_authenticated:
            return None
        if user.is_superuser:
            return ROLE_ADMIN
        names = set(user.groups.values_list("name", flat=True))
        for role in ROLES:
            if role in names:
                return role
        return None


class AccountFormMixin:
    """
    ModelForm mixin for profiles backed by an account.

    The form gets ``username`` and ``password`` fields; ``save()`` creates or
    updates the account together with the profile row.
    """

    account_role = None

    def add_account_fields(self):
        self.fields["username"] = forms.CharField(min_length=3, max_length=20)
        self.fields["password"] = forms.CharField(
            widget=forms.PasswordInput(render_value=False),
            min_length=8,
            required=not self.instance.pk,
            help_text=_("Leave empty to keep the current password")
            if self.instance.pk else "",
        )
        if self.instance.pk:
            self.fields["username"].initial = self.instance.username

    def clean_username(self):
        username = self.cleaned_data["username"]
        qs = User.objects.filter(username=username)
        if self.instance.pk and self.instance.user_id:
            qs = qs.exclude(pk=self.instance.user_id)
        if qs.exists():
            raise forms.ValidationError(_("This username is already taken"))
        return username

    def save(self, commit=True):
        profile = super().save(commit=False)
        data = self.cleaned_data
        profile.username = data["username"]
        with transaction.atomic():
            if profile.user_id:
                IdentityProvider.update_account(
                    profile.user,
                    username=data["username"],
                    password=data.get("password"),
                    first_name=profile.name,
                    last_name=profile.surname,
                    email=profile.email or "",
                )
            else:
                profile.user = IdentityProvider.create_account(
                    username=data["username"],
                    password=data["password"],
                    first_name=profile.name,
                    last_name=profile.surname,
                    role=self.account_role,
                    email=profile.email or "",
                )
            profile.save()
            self.save_m2m()
        return profile
