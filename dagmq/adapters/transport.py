from abc import ABC, abstractmethod
from typing import Callable, Optional

ConnectHandler = Callable[[int], None]
DisconnectHandler = Callable[[int], None]
MessageHandler = Callable[[str, bytes], None]


class Transport(ABC):
    """
    Conexão pub/sub usada pelo Bridge. As mensagens chegam de forma assíncrona
    pelos handlers, sempre dentro de `loop()`.
    Falhas de conexão/subscribe/loop levantam TransportError.
    """

    def __init__(self, params=None):
        self.params = params or {}
        self.on_connect: Optional[ConnectHandler] = None
        self.on_disconnect: Optional[DisconnectHandler] = None
        self.on_message: Optional[MessageHandler] = None

    def set_handlers(self, on_connect: ConnectHandler, on_disconnect: DisconnectHandler,
                     on_message: MessageHandler):
        self.on_connect = on_connect
        self.on_disconnect = on_disconnect
        self.on_message = on_message

    # -------- lifecycle --------
    @abstractmethod
    def connect(self, host: str, port: int, keepalive: int) -> None: ...

    @abstractmethod
    def reconnect(self) -> None: ...

    def shutdown(self) -> None:
        pass

    # -------- pub/sub --------
    @abstractmethod
    def subscribe(self, topic: str, qos: int) -> None: ...

    @abstractmethod
    def publish(self, topic: str, payload: bytes, qos: int, retain: bool) -> int:
        """Retorna 0 em caso de sucesso, ou o código de erro do transporte."""

    # -------- event loop --------
    @abstractmethod
    def loop(self, timeout: float) -> None: ...

    @abstractmethod
    def fileno(self) -> int:
        """Descritor do socket, para integrar com select/poll externos (-1 se desconectado)."""
