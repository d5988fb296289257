import time

from dagmq.adapters.transport import Transport
from dagmq.core.logging import get_logger

log = get_logger(__name__)


class StatusPublisher:
    """Publica o status no tópico de cache, no máximo 1x por segundo (exceto com force)."""

    def __init__(self, transport: Transport, topic: str, qos: int = 1, retain: bool = True,
                 clock=time.time):
        self.transport = transport
        self.topic = topic
        self.qos = qos
        self.retain = retain
        self.clock = clock
        self.last = 0   # segundo da última entrega
        self.sent = 0

    def publish(self, message: str, force: bool = False) -> bool:
        now = int(self.clock())
        if now == self.last and not force:
            return False
        self.last = now
        res = self.transport.publish(self.topic, message.encode("utf-8"), self.qos, self.retain)
        if res != 0:
            log.error(f"[status] publish ({self.topic}): {res}")
            return False
        self.sent += 1
        return True
