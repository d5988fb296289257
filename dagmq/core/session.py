from dataclasses import replace
from typing import Optional

from dagmq.core.logging import get_logger
from dagmq.core.types import (
    DecodedMessage,
    EpochMessage,
    MinedStateMessage,
    NotifyKind,
    PayloadError,
    SessionState,
    ShutdownMessage,
)

log = get_logger(__name__)


class SessionTracker:
    """
    Mantém o estado derivado das mensagens (algoritmo/época, hold, shutdown)
    e decide se uma mensagem decodificada representa uma mudança a notificar.
    O estado só é alterado por `apply`; `state` devolve uma cópia.
    """

    def __init__(self, resolver, baseline: str = "ethash"):
        self.resolver = resolver
        self.baseline = baseline
        self._state = SessionState()

    @property
    def state(self) -> SessionState:
        return replace(self._state)

    def resolve_algo(self, name: Optional[str]) -> int:
        lookup = name if name is not None else self.baseline
        code = self.resolver.resolve(lookup)
        if code is None or code < 0:
            raise PayloadError(f'unknown algorithm "{lookup}"')
        return int(code)

    def apply(self, msg: DecodedMessage) -> Optional[NotifyKind]:
        """Atualiza o estado. Retorna o tipo a notificar, ou None se nada mudou."""
        st = self._state
        if isinstance(msg, EpochMessage):
            algo = self.resolve_algo(msg.algo_name)
            if algo == st.algo and msg.epoch == st.epoch:
                return None
            self._state = replace(st, algo=algo, epoch=msg.epoch)
            log.info(f"[state] epoch {st.epoch} -> {msg.epoch} algo {st.algo} -> {algo}")
            return NotifyKind.EPOCH

        if isinstance(msg, MinedStateMessage):
            if msg.holding == st.hold:
                return None
            log.debug(f"[state] {'begin' if msg.holding else 'end'} holding")
            st.hold = msg.holding
            return NotifyKind.MINED_STATE

        if isinstance(msg, ShutdownMessage):
            # sempre notifica, mesmo sem mudança
            st.shutdown_pending = msg.pending
            return NotifyKind.SHUTDOWN

        raise TypeError(f"unexpected message {msg!r}")
