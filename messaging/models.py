# messaging/models.py
from django.conf import settings
from django.db import models
from django.core.exceptions import ValidationError
from django.utils import timezone


class Conversation(models.Model):
    # 1:1 participants, canonical order user1_id < user2_id
    user1 = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE,
        related_name="conversations_as_user1",
    )
    user2 = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE,
        related_name="conversations_as_user2",
    )

    # listing the chat started from; metadata only, never part of identity
    property = models.ForeignKey(
        "properties.Property", null=True, blank=True,
        on_delete=models.SET_NULL, related_name="conversations",
    )

    last_message_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)
    created_at = models.DateTimeField(auto_now_add=True)

    # ---------- validation ----------
    def clean(self):
        super().clean()
        if not self.user1_id or not self.user2_id:
            raise ValidationError("Direct conversations require both user1 and user2.")
        if self.user1_id == self.user2_id:
            raise ValidationError("A conversation requires two distinct participants.")

    def save(self, *args, **kwargs):
        # keep pairs canonical (smaller id in user1)
        if self.user1_id and self.user2_id and self.user1_id > self.user2_id:
            self.user1_id, self.user2_id = self.user2_id, self.user1_id
        super().save(*args, **kwargs)

    def participants(self):
        return self.user1_id, self.user2_id

    def has_participant(self, user_id) -> bool:
        return user_id in (self.user1_id, self.user2_id)

    def other_participant_id(self, user_id):
        if user_id == self.user1_id:
            return self.user2_id
        if user_id == self.user2_id:
            return self.user1_id
        return None

    def __str__(self):
        return f"Conversation({self.user1_id}, {self.user2_id})"

    class Meta:
        ordering = ["-last_message_at", "-id"]
        constraints = [
            # One conversation per unordered user pair
            models.UniqueConstraint(
                fields=["user1", "user2"], name="uniq_conversation_user_pair",
            ),
            models.CheckConstraint(
                condition=models.Q(user1__lt=models.F("user2")),
                name="conversation_canonical_pair",
            ),
        ]


class Message(models.Model):
    conversation = models.ForeignKey(Conversation, on_delete=models.CASCADE, related_name="messages")
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="sent_messages")
    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="received_messages"
    )
    body = models.TextField()
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["conversation", "created_at"], name="msg_conv_created_idx"),
            models.Index(fields=["receiver", "is_read"], name="msg_receiver_read_idx"),
        ]

    def __str__(self):
        return f"Message({self.pk}) {self.sender_id}->{self.receiver_id}"
