"""
Views for the messaging app.

Expose the REST endpoints used by the marketplace frontend to send
messages, list conversations with unread badges and read a conversation
with another user.  Authentication is required for all endpoints; domain
errors raised by the services are turned into responses by
``common.exceptions.api_exception_handler``.
"""
from __future__ import annotations

import logging

from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import permissions, serializers, status
from rest_framework.generics import GenericAPIView
from rest_framework.response import Response

from . import services
from .serializers import (
    ConversationSummarySerializer,
    MessageSerializer,
    SendMessageSerializer,
    property_summary,
)

logger = logging.getLogger(__name__)

CountResponse = inline_serializer(
    name="UnreadCountResponse",
    fields={"success": serializers.BooleanField(), "count": serializers.IntegerField()},
)


class SendMessageView(GenericAPIView):
    """POST /api/messages/: send a message, creating the conversation if needed."""

    permission_classes = [permissions.IsAuthenticated]
    serializer_class = SendMessageSerializer

    @extend_schema(responses={201: MessageSerializer})
    def post(self, request):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        message = services.post_message(
            sender_id=request.user.id,
            receiver_id=data["receiverId"],
            body=data["content"],
            property_id=data.get("propertyId"),
        )
        logger.info(
            "User %s sent message %s to user %s", request.user.id, message.pk, message.receiver_id
        )
        return Response(
            {"success": True, "message": MessageSerializer(message).data},
            status=status.HTTP_201_CREATED,
        )


class ConversationListView(GenericAPIView):
    """GET /api/messages/conversations/: the caller's conversations, newest first."""

    permission_classes = [permissions.IsAuthenticated]
    serializer_class = ConversationSummarySerializer

    def get_queryset(self):
        return services.conversations_for(self.request.user.id)

    def get(self, request):
        ser = self.get_serializer(self.get_queryset(), many=True)
        return Response({"success": True, "conversations": ser.data})


class ConversationUnreadView(GenericAPIView):
    """GET /api/messages/conversations/<id>/unread/"""

    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(responses=CountResponse)
    def get(self, request, conversation_id):
        count = services.count_unread_by_conversation(conversation_id, request.user.id)
        return Response({"success": True, "count": count})


class ConversationWithUserView(GenericAPIView):
    """
    GET /api/messages/conversation/<otherUserId>/

    Returns every message exchanged with the other user and marks the
    ones addressed to the caller as read.  No conversation is created
    when the pair has never talked.
    """

    permission_classes = [permissions.IsAuthenticated]
    serializer_class = MessageSerializer

    def get(self, request, other_user_id):
        conversation = services.find_conversation(request.user.id, other_user_id)
        if conversation is None:
            return Response(
                {"success": True, "conversationId": None, "messages": [], "property": None}
            )

        messages = services.list_messages(conversation, request.user.id)
        return Response({
            "success": True,
            "conversationId": conversation.pk,
            "messages": MessageSerializer(messages, many=True).data,
            "property": property_summary(conversation.property),
        })


class UnreadCountView(GenericAPIView):
    """GET /api/messages/unread/: total unread messages for the caller."""

    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(responses=CountResponse)
    def get(self, request):
        return Response({"success": True, "count": services.count_unread(request.user.id)})
