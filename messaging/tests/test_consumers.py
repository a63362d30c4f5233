import pytest
from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator
from django.contrib.auth.models import AnonymousUser
from rest_framework_simplejwt.tokens import AccessToken

from messaging.relay import get_relay
from messaging.routing import websocket_urlpatterns

application = URLRouter(websocket_urlpatterns)


async def connect_as(user):
    communicator = WebsocketCommunicator(application, "/ws/messages/")
    communicator.scope["user"] = user
    connected, _ = await communicator.connect()
    assert connected
    return communicator


async def join(communicator, user):
    await communicator.send_json_to({"type": "join", "userId": user.id})
    reply = await communicator.receive_json_from(timeout=1)
    assert reply == {"type": "joined", "userId": user.id}


@pytest.mark.django_db(transaction=True)
@pytest.mark.asyncio
async def test_anonymous_connection_rejected():
    communicator = WebsocketCommunicator(application, "/ws/messages/")
    communicator.scope["user"] = AnonymousUser()
    connected, code = await communicator.connect()
    assert not connected
    assert code == 4401


@pytest.mark.django_db(transaction=True)
@pytest.mark.asyncio
async def test_join_registers_connection(user):
    communicator = await connect_as(user)
    await join(communicator, user)
    assert get_relay().is_connected(user.id)

    await communicator.disconnect()
    assert not get_relay().is_connected(user.id)


@pytest.mark.django_db(transaction=True)
@pytest.mark.asyncio
async def test_cannot_join_as_someone_else(user, other_user):
    communicator = await connect_as(user)
    await communicator.send_json_to({"type": "join", "userId": other_user.id})
    reply = await communicator.receive_json_from(timeout=1)
    assert reply["type"] == "error"
    assert not get_relay().is_connected(other_user.id)
    await communicator.disconnect()


@pytest.mark.django_db(transaction=True)
@pytest.mark.asyncio
async def test_events_before_join_and_unknown_events(user, other_user):
    communicator = await connect_as(user)

    await communicator.send_json_to({"type": "typing", "receiverId": other_user.id, "isTyping": True})
    assert (await communicator.receive_json_from(timeout=1))["type"] == "error"

    await communicator.send_json_to({"type": "join"})
    assert (await communicator.receive_json_from(timeout=1))["type"] == "error"

    await join(communicator, user)
    await communicator.send_json_to({"type": "dance"})
    assert (await communicator.receive_json_from(timeout=1))["type"] == "error"

    await communicator.send_json_to(["not", "an", "object"])
    assert (await communicator.receive_json_from(timeout=1))["type"] == "error"
    await communicator.disconnect()


@pytest.mark.django_db(transaction=True)
@pytest.mark.asyncio
async def test_typing_and_message_relayed_between_users(user, other_user):
    sender = await connect_as(user)
    receiver = await connect_as(other_user)
    await join(sender, user)
    await join(receiver, other_user)

    await sender.send_json_to({"type": "typing", "receiverId": other_user.id, "isTyping": True})
    assert await receiver.receive_json_from(timeout=1) == {
        "type": "user_typing",
        "isTyping": True,
        "userId": user.id,
    }

    message = {"id": 10, "content": "Hello", "senderId": user.id}
    await sender.send_json_to({"type": "send_message", "receiverId": other_user.id, "message": message})
    assert await receiver.receive_json_from(timeout=1) == {"type": "receive_message", "message": message}
    assert await sender.receive_nothing()

    await sender.disconnect()
    await receiver.disconnect()


@pytest.mark.django_db(transaction=True)
@pytest.mark.asyncio
async def test_send_to_offline_user_is_silent(user, other_user):
    sender = await connect_as(user)
    await join(sender, user)
    await sender.send_json_to({"type": "send_message", "receiverId": other_user.id, "message": {"content": "Hi"}})
    assert await sender.receive_nothing()
    await sender.disconnect()


@pytest.mark.django_db(transaction=True)
@pytest.mark.asyncio
async def test_jwt_query_token_authenticates(user):
    from househub.asgi import application as asgi_application

    token = str(AccessToken.for_user(user))
    communicator = WebsocketCommunicator(
        asgi_application,
        f"/ws/messages/?token={token}",
        headers=[(b"origin", b"http://localhost")],
    )
    connected, _ = await communicator.connect()
    assert connected
    await join(communicator, user)
    await communicator.disconnect()


@pytest.mark.django_db(transaction=True)
@pytest.mark.asyncio
async def test_invalid_jwt_rejected():
    from househub.asgi import application as asgi_application

    communicator = WebsocketCommunicator(
        asgi_application,
        "/ws/messages/?token=not-a-token",
        headers=[(b"origin", b"http://localhost")],
    )
    connected, code = await communicator.connect()
    assert not connected
    assert code == 4401


@pytest.mark.django_db(transaction=True)
@pytest.mark.asyncio
async def test_relayed_message_carries_connection_sender(user, other_user):
    sender = await connect_as(user)
    receiver = await connect_as(other_user)
    await join(sender, user)
    await join(receiver, other_user)

    forged = {"id": 1, "senderId": 999, "content": "Pay deposit to account X"}
    await sender.send_json_to({"type": "send_message", "receiverId": other_user.id, "message": forged})
    frame = await receiver.receive_json_from(timeout=1)
    assert frame["type"] == "receive_message"
    assert frame["message"]["senderId"] == user.id
    assert frame["message"]["content"] == "Pay deposit to account X"

    await sender.send_json_to({"type": "send_message", "receiverId": other_user.id, "message": "plain text"})
    assert (await sender.receive_json_from(timeout=1))["type"] == "error"
    assert await receiver.receive_nothing()

    await sender.disconnect()
    await receiver.disconnect()
