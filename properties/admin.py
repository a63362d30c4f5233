from django.contrib import admin

from .models import Property


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "owner", "property_type", "listing_type", "city", "price", "is_active", "created_at")
    list_filter = ("property_type", "listing_type", "is_active")
    search_fields = ("title", "city", "owner__username")
    ordering = ("-created_at",)
