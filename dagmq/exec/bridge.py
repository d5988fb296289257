from typing import Any, Callable, Dict, Optional

from dagmq.adapters.transport import Transport
from dagmq.core.bus import NotificationBus
from dagmq.core.config import AppConfig
from dagmq.core.decoder import PayloadDecoder
from dagmq.core.logging import get_logger
from dagmq.core.session import SessionTracker
from dagmq.core.types import NotifyKind, PayloadError, SessionState, Topic, TransportError
from dagmq.core.utils import import_from_path
from dagmq.exec.status import StatusPublisher

log = get_logger(__name__)

_INBOUND = (Topic.EPOCH, Topic.MINED_STATE, Topic.SHUTDOWN)


class Bridge:
    """
    Liga o transporte MQTT ao modelo de eventos da aplicação:
    tópico/payload -> decoder -> tracker -> notificações.
    Tudo roda na thread que chama `poll()`.
    """

    def __init__(self, cfg: AppConfig, transport: Transport, resolver=None):
        self.cfg = cfg
        self.transport = transport
        if resolver is None:
            Resolver = import_from_path(cfg.algorithm.class_path)
            resolver = Resolver(**cfg.algorithm.params)
        self.tracker = SessionTracker(resolver, cfg.algorithm.baseline)
        self.decoder = PayloadDecoder(cfg.hold_prefix)
        self.bus = NotificationBus()
        self.status_pub = StatusPublisher(
            transport, cfg.topics.status, qos=cfg.qos.status, retain=cfg.status.retain
        )
        self._topics: Dict[str, Topic] = {getattr(cfg.topics, t.value): t for t in _INBOUND}
        self._stopping = False
        transport.set_handlers(self._connected, self._disconnected, self._message)

    # -------- lifecycle --------
    def start(self):
        b = self.cfg.broker
        log.info(f"[mqtt] connecting to {b.host}:{b.port}")
        self.transport.connect(b.host, b.port, b.keepalive)

    def stop(self):
        self._stopping = True
        self.transport.shutdown()

    # -------- API para a aplicação --------
    @property
    def state(self) -> SessionState:
        return self.tracker.state

    def subscribe(self, kind: NotifyKind, fn: Callable[[Any], None], user: Any = None):
        self.bus.subscribe(kind, fn, user)

    def status(self, text: str, flush: bool = False) -> bool:
        return self.status_pub.publish(text, force=flush)

    def poll(self, wait: bool = True):
        timeout = self.cfg.broker.poll_wait_ms / 1000.0 if wait else 0.0
        self.transport.loop(timeout)

    def fd(self) -> int:
        return self.transport.fileno()

    # -------- handlers do transporte --------
    def _connected(self, result: int):
        if result:
            log.error(f"[mqtt] connect failed: {result}")
            raise TransportError(f"connect failed: {result}")
        for name, topic in self._topics.items():
            qos = getattr(self.cfg.qos, topic.value)
            self.transport.subscribe(name, qos)
            log.debug(f"[mqtt] subscribed {name} qos={qos}")
        log.info("[mqtt] connected")

    def _disconnected(self, reason: int):
        if self._stopping:
            return
        log.warning(f"[mqtt] reconnecting (disconnect reason {reason})")
        try:
            self.transport.reconnect()
        except TransportError as e:
            log.error(f"[mqtt] {e}")
            raise

    def _message(self, topic: str, payload: bytes):
        kind = self.handle(topic, payload)
        if kind is not None:
            self.bus.publish(kind)

    def handle(self, topic: str, payload: bytes) -> Optional[NotifyKind]:
        """Decodifica e aplica uma mensagem. Payload inválido é logado e descartado."""
        t = self._topics.get(topic)
        if t is None:
            log.error(f"[mqtt] unrecognized topic '{topic}'")
            return None
        try:
            msg = self.decoder.decode(t, payload)
            return self.tracker.apply(msg)
        except PayloadError as e:
            log.error(f"[decode] {topic}: {e}")
            return None
