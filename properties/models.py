"""
Models for the properties app.

A `Property` is a rental or PG listing owned by a user.  The messaging
core only references listings by id and reads the title and cover image
for conversation summaries.
"""
from django.conf import settings
from django.db import models


class Property(models.Model):
    TYPE_APARTMENT = "apartment"
    TYPE_HOUSE = "house"
    TYPE_PG = "pg"
    TYPE_HOSTEL = "hostel"
    TYPE_ROOM = "room"
    TYPE_VILLA = "villa"
    PROPERTY_TYPE_CHOICES = [
        (TYPE_APARTMENT, "Apartment"),
        (TYPE_HOUSE, "House"),
        (TYPE_PG, "PG"),
        (TYPE_HOSTEL, "Hostel"),
        (TYPE_ROOM, "Room"),
        (TYPE_VILLA, "Villa"),
    ]

    LISTING_RENT = "rent"
    LISTING_PG = "pg"
    LISTING_TYPE_CHOICES = [
        (LISTING_RENT, "Rent"),
        (LISTING_PG, "PG"),
    ]

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="properties"
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    property_type = models.CharField(max_length=16, choices=PROPERTY_TYPE_CHOICES, default=TYPE_APARTMENT)
    listing_type = models.CharField(max_length=8, choices=LISTING_TYPE_CHOICES, default=LISTING_RENT)
    price = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    city = models.CharField(max_length=128, blank=True, default="")
    images = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "properties"

    def __str__(self):
        return self.title

    @property
    def cover_image(self) -> str:
        """First listing image, or an empty string."""
        images = self.images or []
        return images[0] if images else ""
