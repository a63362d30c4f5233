"""
Models for the users app.

A `UserProfile` model extends the built-in `auth.User` with the display
fields the marketplace shows next to listings and messages.  A
`OneToOneField` links each profile to its user.  The `UserProfile` is
created automatically via signals when a new user instance is saved.
"""
from django.contrib.auth.models import User
from django.db import models


class UserProfile(models.Model):
    """Extension of Django's built-in User model."""

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="profile")
    display_name = models.CharField(max_length=255, blank=True)
    phone_number = models.CharField(max_length=32, blank=True, default="")
    profile_image_url = models.URLField(max_length=500, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"Profile<{self.user.username}>"


def display_name_for(user) -> str:
    """Best-effort printable name for a user."""
    if user is None:
        return ""
    prof = getattr(user, "profile", None)
    name = (getattr(prof, "display_name", "") or user.get_full_name() or user.username or "").strip()
    return name or f"User {user.pk}"


def profile_image_for(user) -> str:
    prof = getattr(user, "profile", None)
    return getattr(prof, "profile_image_url", "") or ""
