"""
URL configuration for the messaging app.

These routes are included under the ``/api/messages/`` prefix at the
project level.
"""

from django.urls import path

from .views import (
    ConversationListView,
    ConversationUnreadView,
    ConversationWithUserView,
    SendMessageView,
    UnreadCountView,
)

app_name = "messaging"

urlpatterns = [
    path("", SendMessageView.as_view(), name="send"),
    path("conversations/", ConversationListView.as_view(), name="conversations"),
    path(
        "conversations/<int:conversation_id>/unread/",
        ConversationUnreadView.as_view(),
        name="conversation-unread",
    ),
    path(
        "conversation/<int:other_user_id>/",
        ConversationWithUserView.as_view(),
        name="conversation-with-user",
    ),
    path("unread/", UnreadCountView.as_view(), name="unread"),
]
