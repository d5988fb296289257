"""Decodificação dos payloads recebidos, por tópico."""

from typing import Callable, Dict

from dagmq.core.types import (
    DecodedMessage,
    EpochMessage,
    MinedStateMessage,
    PayloadError,
    ShutdownMessage,
    Topic,
)
from dagmq.core.utils import parse_uint

HOLD_PREFIX = "epoch_upload "


def _text(payload: bytes) -> str:
    if isinstance(payload, str):
        return payload
    return bytes(payload).decode("utf-8", errors="replace")


def _number(text: str):
    """Número no início do texto; o resto precisa ser vazio ou começar com um espaço."""
    try:
        n, rest = parse_uint(text)
    except ValueError:
        raise PayloadError(f"bad number '{text}'") from None
    if rest and not rest.startswith(" "):
        raise PayloadError(f"bad number '{text}'")
    return n, rest


def decode_epoch(text: str) -> EpochMessage:
    n, rest = _number(text)
    # "<epoch> <algo>": o nome é tudo depois do primeiro espaço
    return EpochMessage(epoch=n, algo_name=rest[1:] if rest else None)


def decode_shutdown(text: str) -> ShutdownMessage:
    n, _ = _number(text)
    return ShutdownMessage(pending=bool(n))


class PayloadDecoder:
    def __init__(self, hold_prefix: str = HOLD_PREFIX):
        self.hold_prefix = hold_prefix
        self._handlers: Dict[Topic, Callable[[str], DecodedMessage]] = {
            Topic.EPOCH: decode_epoch,
            Topic.MINED_STATE: self.decode_mined_state,
            Topic.SHUTDOWN: decode_shutdown,
        }

    def decode_mined_state(self, text: str) -> MinedStateMessage:
        return MinedStateMessage(holding=text.startswith(self.hold_prefix))

    def decode(self, topic: Topic, payload: bytes) -> DecodedMessage:
        """Levanta PayloadError para tópico desconhecido ou payload malformado."""
        handler = self._handlers.get(topic)
        if handler is None:
            raise PayloadError(f"unrecognized topic '{topic}'")
        return handler(_text(payload))
