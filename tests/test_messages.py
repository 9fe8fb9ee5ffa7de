"""
Tests for messaging: templates, conversation grouping, the coach inbox, the
client thread and the live notification feed.
"""

import asyncio
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from sqlalchemy.orm import Session
from starlette.websockets import WebSocketDisconnect

from test_fixtures import client, db_session, make_admin, make_customer, auth_headers
from adapters import realtime_adapter
from app.exceptions import NotFoundError, ServiceValidationError
from domain.conversations import group_conversations
from domain.models import Message
from domain.templates import MESSAGE_TEMPLATES, render_template
from services.auth_service import AuthService
from services.message_service import MessageService


def _claim(db, customer):
    """Let the client sign up for the profile the coach created"""
    _, token = AuthService.sign_up(db, customer.profile.email, "secret123", "Client")
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# TEMPLATES
# =============================================================================


def test_template_catalogue():
    assert [t.id for t in MESSAGE_TEMPLATES] == [
        "welcome",
        "checkin",
        "mealplan",
        "motivation",
        "reminder",
    ]


def test_render_template_substitutes_name_and_week():
    subject, body = render_template("mealplan", name="Sarah", week=3)
    assert subject == "Your new meal plan is ready!"
    assert body.startswith("Hi Sarah,")
    assert "week 3 is ready" in body


def test_render_template_keeps_missing_placeholders():
    _, body = render_template("mealplan")
    assert "{{name}}" in body
    assert "{{week}}" in body


def test_render_unknown_template():
    with pytest.raises(NotFoundError):
        render_template("birthday")


def test_render_endpoint_uses_recipient_name(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin, "athlete")

    r = client.post(
        "/messages/templates/render",
        json={"template_id": "welcome", "to_user_id": str(customer.user_id)},
        headers=auth_headers(admin),
    )
    assert r.status_code == 200
    assert r.json()["body"].startswith("Hi Michael Chen,")

    missing = client.post(
        "/messages/templates/render",
        json={"template_id": "nope"},
        headers=auth_headers(admin),
    )
    assert missing.status_code == 404

    listed = client.get("/messages/templates", headers=auth_headers(admin))
    assert len(listed.json()) == 5


# =============================================================================
# CONVERSATION GROUPING
# =============================================================================


def _msg(sender, recipient, minutes, is_read=False):
    base = datetime(2026, 5, 1, 9, 0, tzinfo=timezone.utc)
    return SimpleNamespace(
        from_user_id=sender,
        to_user_id=recipient,
        created_at=base + timedelta(minutes=minutes),
        is_read=is_read,
    )


def test_group_conversations_by_counterparty():
    me, anna, ben = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
    messages = [
        _msg(anna, me, 0),
        _msg(me, anna, 5, is_read=False),
        _msg(ben, me, 10),
        _msg(anna, me, 20, is_read=True),
        _msg(ben, me, 1),
    ]

    conversations = group_conversations(messages, me)

    assert [c.counterparty_id for c in conversations] == [anna, ben]
    anna_conv, ben_conv = conversations
    assert anna_conv.message_count == 3
    # Own unread outgoing messages are not counted
    assert anna_conv.unread_count == 1
    assert anna_conv.latest_message is messages[3]
    assert ben_conv.unread_count == 2
    assert ben_conv.latest_message is messages[2]


def test_group_conversations_handles_naive_timestamps():
    me, anna = uuid.uuid4(), uuid.uuid4()
    naive = _msg(anna, me, 30)
    naive.created_at = naive.created_at.replace(tzinfo=None)

    conversations = group_conversations([_msg(anna, me, 0), naive], me)
    assert conversations[0].latest_message is naive


# =============================================================================
# COACH MESSAGING
# =============================================================================


def test_send_and_read_inbox(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin)
    client_headers = _claim(db_session, customer)

    r = client.post(
        "/messages",
        json={
            "to_user_id": str(customer.user_id),
            "subject": "Hello",
            "body": "  Welcome aboard  ",
        },
        headers=auth_headers(admin),
    )
    assert r.status_code == 201
    assert r.json()["body"] == "Welcome aboard"
    assert r.json()["sender"]["id"] == str(admin.id)

    reply = client.post(
        "/client/messages", json={"body": "Thanks!"}, headers=client_headers
    )
    assert reply.status_code == 201
    assert reply.json()["subject"] == "Message from client"
    assert reply.json()["to_user_id"] == str(admin.id)

    inbox = client.get("/messages/inbox", headers=auth_headers(admin))
    assert [m["body"] for m in inbox.json()] == ["Thanks!"]
    assert inbox.json()[0]["sender"]["full_name"] == "Sarah Martinez"

    read = client.post(f"/messages/{reply.json()['id']}/read", headers=auth_headers(admin))
    assert read.status_code == 200
    assert read.json()["is_read"] is True


def test_send_to_unknown_recipient(db_session: Session):
    admin = make_admin(db_session)
    r = client.post(
        "/messages",
        json={"to_user_id": str(uuid.uuid4()), "subject": "Hi", "body": "Hello"},
        headers=auth_headers(admin),
    )
    assert r.status_code == 404


def test_send_blank_body_rejected(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin)
    with pytest.raises(ServiceValidationError):
        MessageService.send_message(db_session, admin, customer.user_id, "Hi", "   ")


def test_only_recipient_marks_read(db_session: Session):
    admin = make_admin(db_session)
    other_admin = make_admin(db_session, full_name="Other Coach")
    customer = make_customer(db_session, admin)
    message = MessageService.send_message(db_session, admin, customer.user_id, "Hi", "Hello")

    r = client.post(f"/messages/{message.id}/read", headers=auth_headers(other_admin))
    assert r.status_code == 403


def test_conversations_endpoint(db_session: Session):
    admin = make_admin(db_session)
    sarah = make_customer(db_session, admin, "default")
    michael = make_customer(db_session, admin, "athlete")
    sarah_headers = _claim(db_session, sarah)

    MessageService.send_message(db_session, admin, michael.user_id, "Hi", "First")
    client.post("/client/messages", json={"body": "Question"}, headers=sarah_headers)
    client.post("/client/messages", json={"body": "Another"}, headers=sarah_headers)

    r = client.get("/messages/conversations", headers=auth_headers(admin))
    assert r.status_code == 200
    conversations = r.json()
    assert [c["counterparty_id"] for c in conversations] == [
        str(sarah.user_id),
        str(michael.user_id),
    ]
    assert conversations[0]["unread_count"] == 2
    assert conversations[0]["latest_message"]["body"] == "Another"
    assert conversations[0]["counterparty"]["full_name"] == "Sarah Martinez"
    assert conversations[1]["unread_count"] == 0


def test_inbox_limit(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin)
    for n in range(3):
        db_session.add(
            Message(from_user_id=customer.user_id, to_user_id=admin.id, body=f"m{n}")
        )
    db_session.commit()

    r = client.get("/messages/inbox", params={"limit": 2}, headers=auth_headers(admin))
    assert len(r.json()) == 2

    bad = client.get("/messages/inbox", params={"limit": 0}, headers=auth_headers(admin))
    assert bad.status_code == 422


# =============================================================================
# CLIENT THREAD
# =============================================================================


def test_client_thread_marks_incoming_read(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin)
    headers = _claim(db_session, customer)
    MessageService.send_message(db_session, admin, customer.user_id, "One", "First")
    MessageService.send_message(db_session, admin, customer.user_id, "Two", "Second")
    client.post("/client/messages", json={"body": "Reply"}, headers=headers)

    r = client.get("/client/messages", headers=headers)
    assert r.status_code == 200
    assert [m["body"] for m in r.json()] == ["First", "Second", "Reply"]

    db_session.expire_all()
    unread = (
        db_session.query(Message)
        .filter(Message.to_user_id == customer.user_id, Message.is_read.is_(False))
        .count()
    )
    assert unread == 0
    # The coach's copy of the reply stays unread
    assert db_session.query(Message).filter(Message.is_read.is_(False)).count() == 1


def test_client_send_without_coach(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin)
    headers = _claim(db_session, customer)
    customer.assigned_admin_id = None
    db_session.commit()

    r = client.post("/client/messages", json={"body": "Hello?"}, headers=headers)
    assert r.status_code == 400
    assert "No coach" in r.json()["error"]["message"]


def test_client_send_blank_body_is_422(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin)
    headers = _claim(db_session, customer)

    r = client.post("/client/messages", json={"body": "   "}, headers=headers)
    assert r.status_code == 422


def test_client_routes_need_customer_record(db_session: Session):
    admin = make_admin(db_session)
    r = client.get("/client/messages", headers=auth_headers(admin))
    assert r.status_code == 403


# =============================================================================
# REALTIME
# =============================================================================


def test_realtime_publish_reaches_subscriber():
    user_id = uuid.uuid4()

    async def scenario():
        sub = realtime_adapter.subscribe(user_id)
        try:
            assert realtime_adapter.subscriber_count(user_id) == 1
            delivered = realtime_adapter.publish(user_id, {"type": "ping"})
            event = await asyncio.wait_for(sub.queue.get(), timeout=1)
            return delivered, event
        finally:
            realtime_adapter.unsubscribe(sub)

    delivered, event = asyncio.run(scenario())
    assert delivered == 1
    assert event == {"type": "ping"}
    assert realtime_adapter.subscriber_count(user_id) == 0


def test_realtime_publish_without_subscribers():
    assert realtime_adapter.publish(uuid.uuid4(), {"type": "ping"}) == 0


def test_websocket_rejects_bad_token(db_session: Session):
    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect("/ws/messages?token=garbage") as ws:
            ws.receive_json()
    assert exc.value.code == 1008


def test_websocket_receives_new_message(db_session: Session):
    admin = make_admin(db_session)
    customer = make_customer(db_session, admin)
    headers = _claim(db_session, customer)
    token = headers["Authorization"].split(" ", 1)[1]

    with client.websocket_connect(f"/ws/messages?token={token}") as ws:
        ready = ws.receive_json()
        assert ready == {"type": "ready", "user_id": str(customer.user_id)}

        sent = client.post(
            "/messages",
            json={"to_user_id": str(customer.user_id), "subject": "Ping", "body": "Hello"},
            headers=auth_headers(admin),
        )
        event = ws.receive_json()

    assert event["type"] == "message.created"
    assert event["message"]["id"] == sent.json()["id"]
    assert event["message"]["subject"] == "Ping"
