import pytest
from django.contrib.auth.models import User
from django.db import IntegrityError, transaction
from django.db.models.query import QuerySet

from messaging.exceptions import ValidationError
from messaging.models import Conversation
from messaging.services import canonical_pair, find_conversation, resolve_conversation


def test_canonical_pair_orders_ids():
    assert canonical_pair(7, 3) == (3, 7)
    assert canonical_pair(3, 7) == (3, 7)


@pytest.mark.django_db
def test_resolve_is_symmetric(user, other_user):
    a = resolve_conversation(user.id, other_user.id)
    b = resolve_conversation(other_user.id, user.id)
    assert a.pk == b.pk
    assert Conversation.objects.count() == 1
    assert a.user1_id < a.user2_id


@pytest.mark.django_db
def test_resolve_keeps_property_of_existing_conversation(user, other_user, property):
    first = resolve_conversation(user.id, other_user.id, property.id)
    assert first.property_id == property.id

    again = resolve_conversation(other_user.id, user.id, None)
    assert again.pk == first.pk
    assert again.property_id == property.id


@pytest.mark.django_db
def test_resolve_rejects_self_conversation(user):
    with pytest.raises(ValidationError) as exc:
        resolve_conversation(user.id, user.id)
    assert "receiverId" in exc.value.detail
    assert Conversation.objects.count() == 0


@pytest.mark.django_db
def test_resolve_rejects_missing_participant(user):
    with pytest.raises(ValidationError):
        resolve_conversation(user.id, None)


@pytest.mark.django_db
def test_find_conversation_does_not_create(user, other_user):
    assert find_conversation(user.id, other_user.id) is None
    assert Conversation.objects.count() == 0

    conv = resolve_conversation(user.id, other_user.id)
    assert find_conversation(other_user.id, user.id).pk == conv.pk


@pytest.mark.django_db
def test_save_swaps_reversed_pair(user, other_user):
    low, high = sorted([user.id, other_user.id])
    conv = Conversation.objects.create(user1_id=high, user2_id=low)
    assert (conv.user1_id, conv.user2_id) == (low, high)


@pytest.mark.django_db
def test_duplicate_pair_rejected_by_database(user, other_user):
    resolve_conversation(user.id, other_user.id)
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            Conversation.objects.create(user1=user, user2=other_user)


@pytest.mark.django_db
def test_conversation_removed_with_participant(user, other_user):
    resolve_conversation(user.id, other_user.id)
    User.objects.filter(pk=other_user.pk).delete()
    assert Conversation.objects.count() == 0


@pytest.mark.django_db
def test_concurrent_create_returns_existing_row(user, other_user, monkeypatch):
    existing = resolve_conversation(user.id, other_user.id)
    real_get = QuerySet.get
    misses = []

    def stale_get(self, *args, **kwargs):
        # first lookup misses as if another request created the row meanwhile
        if self.model is Conversation and not misses:
            misses.append(kwargs)
            raise Conversation.DoesNotExist()
        return real_get(self, *args, **kwargs)

    monkeypatch.setattr(QuerySet, "get", stale_get)
    resolved = resolve_conversation(other_user.id, user.id)

    assert misses
    assert resolved.pk == existing.pk
    assert Conversation.objects.count() == 1
