from types import SimpleNamespace

import paho.mqtt.client as mqtt
import pytest

from dagmq.adapters.paho import PahoTransport
from dagmq.core.types import TransportError


def _transport():
    t = PahoTransport({"client_id": "dagd-test"})
    events = []
    t.set_handlers(
        lambda rc: events.append(("connect", rc)),
        lambda rc: events.append(("disconnect", rc)),
        lambda topic, payload: events.append(("message", topic, payload)),
    )
    return t, events


def test_callbacks_are_forwarded():
    t, events = _transport()
    t._connected(None, None, None, SimpleNamespace(value=0), None)
    t._disconnected(None, None, None, SimpleNamespace(value=7), None)
    t._message(None, None, SimpleNamespace(topic="/sys/shutdown", payload=b"1"))
    assert events == [("connect", 0), ("disconnect", 7), ("message", "/sys/shutdown", b"1")]


def test_connect_refused_raises(monkeypatch):
    t, _ = _transport()

    def refuse(host, port, keepalive):
        raise ConnectionRefusedError(111, "Connection refused")

    monkeypatch.setattr(t._client, "connect", refuse)
    with pytest.raises(TransportError):
        t.connect("localhost", 1883, 3600)


def test_subscribe_error_raises(monkeypatch):
    t, _ = _transport()
    monkeypatch.setattr(t._client, "subscribe", lambda topic, qos: (mqtt.MQTT_ERR_NO_CONN, None))
    with pytest.raises(TransportError):
        t.subscribe("/mine/epoch", 1)


def test_publish_returns_rc(monkeypatch):
    t, _ = _transport()
    sent = []

    def publish(topic, payload, qos=0, retain=False):
        sent.append((topic, payload, qos, retain))
        return SimpleNamespace(rc=mqtt.MQTT_ERR_SUCCESS)

    monkeypatch.setattr(t._client, "publish", publish)
    assert t.publish("/mine/dag-cache", b"ok", 1, True) == 0
    assert sent == [("/mine/dag-cache", b"ok", 1, True)]


def test_loop_disconnected_is_not_fatal(monkeypatch):
    t, _ = _transport()
    monkeypatch.setattr(t._client, "loop", lambda timeout: mqtt.MQTT_ERR_CONN_LOST)
    t.loop(0.2)


def test_loop_other_errors_are_fatal(monkeypatch):
    t, _ = _transport()
    monkeypatch.setattr(t._client, "loop", lambda timeout: mqtt.MQTT_ERR_PROTOCOL)
    with pytest.raises(TransportError):
        t.loop(0.2)


def test_fileno_without_socket():
    t, _ = _transport()
    assert t.fileno() == -1
