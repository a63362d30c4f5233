"""
Signals for the users app.

Automatically create a `UserProfile` instance whenever a `User` is
created, seeding the display name from the user's full name.
"""
from django.contrib.auth import get_user_model
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import UserProfile

User = get_user_model()


@receiver(post_save, sender=User)
def ensure_profile(sender, instance, created, raw=False, **kwargs):
    """Ensure exactly one UserProfile exists for every User."""
    if raw or not created:
        return
    UserProfile.objects.get_or_create(
        user=instance,
        defaults={"display_name": instance.get_full_name()},
    )
