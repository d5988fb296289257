from typing import Any, Callable, List, Tuple

from dagmq.core.logging import get_logger
from dagmq.core.types import NotifyKind

log = get_logger(__name__)

Callback = Callable[[Any], None]


class NotificationBus:
    """
    Registro de notificações (tipo -> callback, contexto).
    Só cresce: não há unsubscribe. O dispatch é síncrono e na ordem de registro.
    """

    def __init__(self):
        self._subs: List[Tuple[NotifyKind, Callback, Any]] = []

    def subscribe(self, kind: NotifyKind, fn: Callback, user: Any = None):
        self._subs.append((NotifyKind(kind), fn, user))

    def publish(self, kind: NotifyKind):
        kind = NotifyKind(kind)
        for sub_kind, fn, user in list(self._subs):
            if sub_kind != kind:
                continue
            try:
                fn(user)
            except Exception:
                log.exception(f"[bus:{kind.value}] handler error")

    def __len__(self):
        return len(self._subs)
