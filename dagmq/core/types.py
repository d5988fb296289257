from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Union


class NotifyKind(str, Enum):
    EPOCH = "epoch"
    MINED_STATE = "mined_state"
    SHUTDOWN = "shutdown"


class Topic(str, Enum):
    EPOCH = "epoch"
    MINED_STATE = "mined_state"
    SHUTDOWN = "shutdown"
    STATUS = "status"


class QoS(IntEnum):
    BEST_EFFORT = 0
    ACK = 1
    ONCE = 2


@dataclass(frozen=True)
class EpochMessage:
    epoch: int
    algo_name: Optional[str] = None


@dataclass(frozen=True)
class MinedStateMessage:
    holding: bool


@dataclass(frozen=True)
class ShutdownMessage:
    pending: bool


DecodedMessage = Union[EpochMessage, MinedStateMessage, ShutdownMessage]


@dataclass
class SessionState:
    algo: int = -1          # -1 = ainda não definido
    epoch: int = 0
    block: int = 0          # mantido, mas não alimentado pelo decoder
    hold: bool = False
    shutdown_pending: bool = False


class PayloadError(ValueError):
    """Payload malformado: a mensagem é descartada, sem alterar o estado."""


class TransportError(RuntimeError):
    """Falha no transporte MQTT; tratada como fatal pelo runner."""
