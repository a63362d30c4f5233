# messaging/services.py
"""
Conversation resolution, message storage and unread counting.

Every function here raises ``messaging.exceptions`` errors and never
builds HTTP responses; views and consumers translate the outcome.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.db.models import Count, OuterRef, Q, QuerySet, Subquery
from django.utils import timezone

from properties.models import Property

from .exceptions import NotFoundError, StorageError, ValidationError
from .models import Conversation, Message
from .relay import RECEIVE_MESSAGE, get_relay

logger = logging.getLogger(__name__)

User = get_user_model()


def canonical_pair(a: int, b: int) -> Tuple[int, int]:
    """Order two user ids so the smaller one comes first."""
    return (a, b) if a < b else (b, a)


def _clean_body(body) -> str:
    text = body.strip() if isinstance(body, str) else ""
    if not text:
        raise ValidationError("Message content is required.", field="content")
    return text


def _load_conversation(conversation) -> Conversation:
    if isinstance(conversation, Conversation):
        return conversation
    try:
        return Conversation.objects.get(pk=conversation)
    except (Conversation.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Conversation not found.")


# ---------- conversation resolver ----------

def resolve_conversation(user_a_id: int, user_b_id: int, property_id: Optional[int] = None) -> Conversation:
    """
    Return the unique conversation between two users, creating it on first use.

    The property only applies when the conversation is created; an
    existing conversation keeps the listing it started from.  A
    concurrent create of the same pair is settled by the unique
    constraint and ``get_or_create`` re-reads the winning row.
    """
    if user_a_id is None or user_b_id is None:
        raise ValidationError("Both participants are required.", field="receiverId")
    if user_a_id == user_b_id:
        raise ValidationError("You cannot message yourself.", field="receiverId")

    low, high = canonical_pair(user_a_id, user_b_id)
    try:
        conversation, created = Conversation.objects.get_or_create(
            user1_id=low,
            user2_id=high,
            defaults={"property_id": property_id, "last_message_at": timezone.now()},
        )
    except DatabaseError as exc:
        logger.exception("Could not resolve conversation for users %s and %s", low, high)
        raise StorageError() from exc

    if created:
        logger.info("Created conversation %s for users %s and %s", conversation.pk, low, high)
    return conversation


def find_conversation(user_a_id: int, user_b_id: int) -> Optional[Conversation]:
    """Read-only lookup of the conversation between two users."""
    if user_a_id is None or user_b_id is None or user_a_id == user_b_id:
        return None
    low, high = canonical_pair(user_a_id, user_b_id)
    return (
        Conversation.objects.select_related("property")
        .filter(user1_id=low, user2_id=high)
        .first()
    )


# ---------- message store ----------

def send_message(conversation, sender_id: int, receiver_id: int, body) -> Message:
    """
    Append a message and bump the conversation's ``last_message_at``.

    Both writes happen in one transaction with the conversation row
    locked, so the activity timestamp never lags behind its messages.
    """
    text = _clean_body(body)
    conversation_id = conversation.pk if isinstance(conversation, Conversation) else conversation

    try:
        with transaction.atomic():
            try:
                locked = Conversation.objects.select_for_update().get(pk=conversation_id)
            except (Conversation.DoesNotExist, ValueError, TypeError):
                raise NotFoundError("Conversation not found.")

            if not locked.has_participant(sender_id):
                raise ValidationError("Sender is not part of this conversation.", field="senderId")
            if receiver_id != locked.other_participant_id(sender_id):
                raise ValidationError("Receiver is not part of this conversation.", field="receiverId")

            message = Message.objects.create(
                conversation=locked,
                sender_id=sender_id,
                receiver_id=receiver_id,
                body=text,
            )
            locked.last_message_at = message.created_at
            locked.save(update_fields=["last_message_at", "updated_at"])
    except DatabaseError as exc:
        logger.exception("Failed to store message in conversation %s", conversation_id)
        raise StorageError() from exc

    if isinstance(conversation, Conversation):
        conversation.last_message_at = message.created_at
    logger.debug("Stored message %s in conversation %s", message.pk, conversation_id)
    return message


def post_message(
    sender_id: int,
    receiver_id: int,
    body,
    property_id: Optional[int] = None,
    notify: bool = True,
) -> Message:
    """
    Send a message from one user to another, resolving their conversation.

    Resolution and storage share one transaction: a failed send leaves
    no new conversation behind.  The receiver is notified only after
    the transaction commits.
    """
    text = _clean_body(body)
    if sender_id == receiver_id:
        raise ValidationError("You cannot message yourself.", field="receiverId")
    if not User.objects.filter(pk=receiver_id, is_active=True).exists():
        raise NotFoundError("Receiver not found.")
    if property_id is not None and not Property.objects.filter(pk=property_id).exists():
        raise NotFoundError("Property not found.")

    with transaction.atomic():
        conversation = resolve_conversation(sender_id, receiver_id, property_id)
        message = send_message(conversation, sender_id, receiver_id, text)
        if notify:
            transaction.on_commit(lambda: notify_receiver(message), robust=True)
    return message


def notify_receiver(message: Message) -> bool:
    """Push a stored message to its receiver if they are connected."""
    from .serializers import MessageSerializer

    payload = {"message": MessageSerializer(message).data}
    return get_relay().relay_sync(RECEIVE_MESSAGE, message.receiver_id, payload)


def list_messages(conversation, for_user_id: int) -> List[Message]:
    """
    Return the conversation's messages oldest first and mark the viewer's as read.

    The returned objects reflect the state before the update, so
    messages that were unread until now still show ``is_read=False``.
    """
    conv = _load_conversation(conversation)
    if not conv.has_participant(for_user_id):
        raise NotFoundError("Conversation not found.")

    try:
        with transaction.atomic():
            messages = list(
                conv.messages.select_related("sender__profile").order_by("created_at", "id")
            )
            unread_ids = [m.pk for m in messages if m.receiver_id == for_user_id and not m.is_read]
            if unread_ids:
                Message.objects.filter(pk__in=unread_ids).update(is_read=True)
    except DatabaseError as exc:
        logger.exception("Failed to read conversation %s", conv.pk)
        raise StorageError() from exc
    return messages


# ---------- unread counter ----------

def count_unread(user_id: int) -> int:
    return Message.objects.filter(receiver_id=user_id, is_read=False).count()


def count_unread_by_conversation(conversation, user_id: int) -> int:
    conv = _load_conversation(conversation)
    if not conv.has_participant(user_id):
        raise NotFoundError("Conversation not found.")
    return Message.objects.filter(conversation=conv, receiver_id=user_id, is_read=False).count()


def conversations_for(user_id: int) -> QuerySet:
    """
    Conversations containing ``user_id``, most recent activity first.

    Rows are annotated with ``unread_count`` for the user and the latest
    message's ``last_body``, ``last_sender_id`` and ``last_created_at``.
    """
    latest = Message.objects.filter(conversation=OuterRef("pk")).order_by("-created_at", "-id")
    return (
        Conversation.objects.filter(Q(user1_id=user_id) | Q(user2_id=user_id))
        .select_related("user1__profile", "user2__profile", "property")
        .annotate(
            unread_count=Count(
                "messages",
                filter=Q(messages__receiver_id=user_id, messages__is_read=False),
            ),
            last_body=Subquery(latest.values("body")[:1]),
            last_sender_id=Subquery(latest.values("sender_id")[:1]),
            last_created_at=Subquery(latest.values("created_at")[:1]),
        )
        .order_by("-last_message_at", "-id")
    )
