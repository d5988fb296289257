import os
import tempfile

import pytest

os.environ.setdefault("DAGMQ_LOG_DIR", tempfile.mkdtemp(prefix="dagmq-logs-"))

from dagmq.adapters.transport import Transport  # noqa: E402
from dagmq.core.config import AppConfig  # noqa: E402
from dagmq.exec.bridge import Bridge  # noqa: E402


class FakeTransport(Transport):
    """Transporte em memória: grava chamadas e permite injetar mensagens."""

    def __init__(self, params=None):
        super().__init__(params)
        self.connected_to = None
        self.subscriptions = []
        self.published = []
        self.reconnects = 0
        self.publish_rc = 0
        self.inbox = []
        self.loops = []

    def connect(self, host, port, keepalive):
        self.connected_to = (host, port, keepalive)

    def reconnect(self):
        self.reconnects += 1

    def subscribe(self, topic, qos):
        self.subscriptions.append((topic, qos))

    def publish(self, topic, payload, qos, retain):
        self.published.append((topic, payload, qos, retain))
        return self.publish_rc

    def loop(self, timeout):
        self.loops.append(timeout)
        pending, self.inbox = self.inbox, []
        for topic, payload in pending:
            self.on_message(topic, payload)

    def fileno(self):
        return 7

    def deliver(self, topic, payload):
        if isinstance(payload, str):
            payload = payload.encode()
        self.on_message(topic, payload)


@pytest.fixture
def cfg():
    return AppConfig()


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def bridge(cfg, transport):
    return Bridge(cfg, transport)
