from __future__ import annotations

from django.conf import settings
from rest_framework import serializers

from users.models import display_name_for, profile_image_for

from .models import Conversation, Message


# ---------- input schemas ----------

class SendMessageSerializer(serializers.Serializer):
    """Body of ``POST /api/messages/``."""

    receiverId = serializers.IntegerField(min_value=1)
    propertyId = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    content = serializers.CharField(trim_whitespace=True, allow_blank=False, max_length=5000)

    def validate(self, attrs):
        request = self.context.get("request")
        me_id = getattr(getattr(request, "user", None), "id", None)
        if me_id is not None and attrs["receiverId"] == me_id:
            raise serializers.ValidationError({"receiverId": ["You cannot message yourself."]})
        return attrs


class JoinEventSerializer(serializers.Serializer):
    userId = serializers.IntegerField(min_value=1)


class TypingEventSerializer(serializers.Serializer):
    receiverId = serializers.IntegerField(min_value=1)
    isTyping = serializers.BooleanField()


class SocketMessageEventSerializer(serializers.Serializer):
    receiverId = serializers.IntegerField(min_value=1)
    message = serializers.JSONField()

    def validate_message(self, value):
        if not isinstance(value, dict) or not value:
            raise serializers.ValidationError("Message payload must be a non-empty object.")
        return value


# ---------- output schemas ----------

class MessageSerializer(serializers.ModelSerializer):
    conversationId = serializers.IntegerField(source="conversation_id", read_only=True)
    content = serializers.CharField(source="body", read_only=True)
    senderId = serializers.IntegerField(source="sender_id", read_only=True)
    senderName = serializers.SerializerMethodField()
    senderImage = serializers.SerializerMethodField()
    receiverId = serializers.IntegerField(source="receiver_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    isRead = serializers.BooleanField(source="is_read", read_only=True)

    class Meta:
        model = Message
        fields = [
            "id", "conversationId", "content",
            "senderId", "senderName", "senderImage",
            "receiverId", "createdAt", "isRead",
        ]
        read_only_fields = fields

    def get_senderName(self, obj):  # noqa
        return display_name_for(obj.sender)

    def get_senderImage(self, obj):  # noqa
        return profile_image_for(obj.sender)


def property_summary(prop):
    if prop is None:
        return None
    return {"id": prop.pk, "title": prop.title, "image": prop.cover_image}


class ConversationSummarySerializer(serializers.ModelSerializer):
    """
    One row of the conversation list, seen from the requesting user.

    Expects a queryset from ``services.conversations_for`` so the unread
    badge and last message come from annotations.
    """

    otherUser = serializers.SerializerMethodField()
    property = serializers.SerializerMethodField()
    lastMessage = serializers.SerializerMethodField()
    unreadCount = serializers.IntegerField(source="unread_count", read_only=True)
    lastMessageAt = serializers.DateTimeField(source="last_message_at", read_only=True)

    class Meta:
        model = Conversation
        fields = ["id", "otherUser", "property", "lastMessage", "unreadCount", "lastMessageAt"]
        read_only_fields = fields

    def _me_id(self):
        req = self.context.get("request")
        return getattr(getattr(req, "user", None), "id", None)

    def get_otherUser(self, obj):  # noqa
        other = obj.user2 if obj.user1_id == self._me_id() else obj.user1
        return {
            "id": other.pk,
            "displayName": display_name_for(other),
            "profileImageUrl": profile_image_for(other),
        }

    def get_property(self, obj):  # noqa
        return property_summary(obj.property)

    def get_lastMessage(self, obj):  # noqa
        body = getattr(obj, "last_body", None)
        if body is None:
            return None
        limit = getattr(settings, "MESSAGE_PREVIEW_LENGTH", 0)
        if limit and len(body) > limit:
            body = body[:limit].rstrip() + "…"
        created = getattr(obj, "last_created_at", None)
        return {
            "content": body,
            "createdAt": serializers.DateTimeField().to_representation(created) if created else None,
            "senderId": getattr(obj, "last_sender_id", None),
        }
