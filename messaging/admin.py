# messaging/admin.py
from django.contrib import admin
from .models import Conversation, Message


class MessageInline(admin.TabularInline):
    model = Message
    extra = 0
    fields = ("sender", "receiver", "body", "is_read", "created_at")
    readonly_fields = ("created_at",)
    raw_id_fields = ("sender", "receiver")


@admin.register(Conversation)
class ConversationAdmin(admin.ModelAdmin):
    list_display = ("id", "user1", "user2", "property", "last_message_at", "created_at")
    list_filter = ("last_message_at",)
    search_fields = ("user1__username", "user2__username", "property__title")
    raw_id_fields = ("user1", "user2", "property")
    ordering = ("-last_message_at",)
    inlines = [MessageInline]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ("id", "conversation", "sender", "receiver", "is_read", "created_at")
    list_filter = ("is_read", "created_at")
    search_fields = ("sender__username", "receiver__username", "body")
    ordering = ("-created_at",)
