"""WebSocket echo channel."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from todoapi.api.v1.echo.ws import EchoGateway
from todoapi.app import create_app
from todoapi.logger import LoggerService
from todoapi.ws.connection_manager import ConnectionManager


@pytest.fixture
def gateway():
    return EchoGateway(MagicMock(spec=LoggerService), ConnectionManager())


def test_handle_message_answers_pong_with_same_data(gateway):
    assert gateway.handle_message("client-1", {"n": 1}) == {"event": "pong", "data": {"n": 1}}
    gateway.logger.log.assert_called_once_with(
        "WebsocketsGateway", "Message received from client id: client-1"
    )


def test_handle_frame_ignores_unknown_events(gateway):
    assert gateway.handle_frame("client-1", '{"event": "hello", "data": 1}') is None
    gateway.logger.debug.assert_called_once()


@pytest.mark.parametrize("raw", ["not json", '{"data": 1}', '{"event": ""}'])
def test_handle_frame_reports_invalid_payloads(gateway, raw):
    reply = gateway.handle_frame("client-1", raw)

    assert reply["event"] == "error"
    assert reply["data"]


@pytest.fixture
def ws_client(settings):
    return TestClient(create_app(settings))


def test_ping_is_answered_with_pong(ws_client):
    with ws_client.websocket_connect("/ws") as websocket:
        websocket.send_json({"event": "ping", "data": "hello"})

        assert websocket.receive_json() == {"event": "pong", "data": "hello"}


def test_invalid_frame_gets_error_event_and_connection_stays_open(ws_client):
    with ws_client.websocket_connect("/ws") as websocket:
        websocket.send_text("not json")
        assert websocket.receive_json()["event"] == "error"

        websocket.send_json({"event": "ping", "data": [1, 2]})
        assert websocket.receive_json() == {"event": "pong", "data": [1, 2]}


def test_clients_are_tracked_while_connected(ws_client):
    manager = ws_client.app.state.connection_manager

    with ws_client.websocket_connect("/ws") as websocket:
        websocket.send_json({"event": "ping"})
        websocket.receive_json()
        assert manager.client_count == 1

    assert manager.client_count == 0
