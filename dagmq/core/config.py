from pydantic import BaseModel
from typing import Optional
import yaml

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 1883


class BrokerConfig(BaseModel):
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    keepalive: int = 3600
    client_id: str = ""            # vazio = id aleatório gerado pelo cliente
    poll_wait_ms: int = 200

    @classmethod
    def from_address(cls, address: Optional[str], **kwargs) -> "BrokerConfig":
        """Interpreta 'host[:port]'. Porta precisa ser um inteiro completo."""
        if not address:
            return cls(**kwargs)
        host, sep, port = address.partition(":")
        if not sep:
            return cls(host=host, **kwargs)
        try:
            port_n = int(port, 0)
        except ValueError:
            raise ValueError(f'invalid port "{port}"') from None
        return cls(host=host or DEFAULT_HOST, port=port_n, **kwargs)


class TopicsConfig(BaseModel):
    epoch: str = "/mine/epoch"
    mined_state: str = "/mine/mined-state"
    shutdown: str = "/sys/shutdown"
    status: str = "/mine/dag-cache"


class QoSConfig(BaseModel):
    epoch: int = 1
    mined_state: int = 0
    shutdown: int = 1
    status: int = 1


class StatusConfig(BaseModel):
    retain: bool = True
    heartbeat: bool = True          # runner publica status a cada volta do loop (rate-limited)


class AlgorithmConfig(BaseModel):
    class_path: str = "dagmq.core.algorithms.AlgorithmTable"
    params: dict = {}
    baseline: str = "ethash"


class TransportConfig(BaseModel):
    class_path: str = "dagmq.adapters.paho.PahoTransport"
    params: dict = {}


class AppConfig(BaseModel):
    log_level: str = "INFO"
    hold_prefix: str = "epoch_upload "
    broker: BrokerConfig = BrokerConfig()
    transport: TransportConfig = TransportConfig()
    topics: TopicsConfig = TopicsConfig()
    qos: QoSConfig = QoSConfig()
    status: StatusConfig = StatusConfig()
    algorithm: AlgorithmConfig = AlgorithmConfig()


def load_config(path="config.yaml") -> AppConfig:
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    return AppConfig(**(raw or {}))
