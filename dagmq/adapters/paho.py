import paho.mqtt.client as mqtt

from dagmq.adapters.transport import Transport
from dagmq.core.logging import get_logger
from dagmq.core.types import TransportError

log = get_logger(__name__)

# códigos do loop que significam só "sem conexão": tratados pelo on_disconnect
_LOOP_DISCONNECTED = (mqtt.MQTT_ERR_NO_CONN, mqtt.MQTT_ERR_CONN_LOST)


class PahoTransport(Transport):
    def __init__(self, params=None):
        super().__init__(params)
        self._client = mqtt.Client(
            mqtt.CallbackAPIVersion.VERSION2,
            client_id=self.params.get("client_id", ""),
            clean_session=True,
        )
        self._client.on_connect = self._connected
        self._client.on_disconnect = self._disconnected
        self._client.on_message = self._message

    # -------- callbacks paho -> Transport --------
    def _connected(self, client, userdata, flags, reason_code, properties):
        if self.on_connect:
            self.on_connect(int(reason_code.value))

    def _disconnected(self, client, userdata, flags, reason_code, properties):
        if self.on_disconnect:
            self.on_disconnect(int(reason_code.value))

    def _message(self, client, userdata, msg):
        if self.on_message:
            self.on_message(msg.topic, msg.payload)

    # -------- lifecycle --------
    def connect(self, host: str, port: int, keepalive: int) -> None:
        try:
            res = self._client.connect(host, port, keepalive)
        except (OSError, ValueError) as e:
            raise TransportError(f"mqtt connect {host}:{port} failed: {e}") from e
        if res != mqtt.MQTT_ERR_SUCCESS:
            raise TransportError(f"mqtt connect {host}:{port}: {mqtt.error_string(res)}")

    def reconnect(self) -> None:
        try:
            res = self._client.reconnect()
        except (OSError, ValueError) as e:
            raise TransportError(f"mqtt reconnect failed: {e}") from e
        if res != mqtt.MQTT_ERR_SUCCESS:
            raise TransportError(f"mqtt reconnect: {mqtt.error_string(res)}")

    def shutdown(self) -> None:
        try:
            self._client.disconnect()
        except Exception:
            log.exception("Erro ao desconectar do broker MQTT")

    # -------- pub/sub --------
    def subscribe(self, topic: str, qos: int) -> None:
        res, _mid = self._client.subscribe(topic, qos)
        if res != mqtt.MQTT_ERR_SUCCESS:
            raise TransportError(f"mqtt subscribe {topic}: {mqtt.error_string(res)}")

    def publish(self, topic: str, payload: bytes, qos: int, retain: bool) -> int:
        info = self._client.publish(topic, payload, qos=qos, retain=retain)
        return int(info.rc)

    # -------- event loop --------
    def loop(self, timeout: float) -> None:
        res = self._client.loop(timeout=timeout)
        if res != mqtt.MQTT_ERR_SUCCESS and res not in _LOOP_DISCONNECTED:
            raise TransportError(f"mqtt loop: {mqtt.error_string(res)}")

    def fileno(self) -> int:
        sock = self._client.socket()
        return sock.fileno() if sock is not None else -1
