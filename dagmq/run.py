from pathlib import Path
import argparse
import sys

from pydantic import ValidationError
import yaml

from dagmq.adapters.transport import Transport
from dagmq.core.config import AppConfig, BrokerConfig, load_config
from dagmq.core.logging import get_logger, set_level
from dagmq.core.types import NotifyKind, TransportError
from dagmq.core.utils import import_from_path
from dagmq.exec.bridge import Bridge

PKG_DIR = Path(__file__).resolve().parent

log = get_logger(__name__)


def status_line(bridge: Bridge) -> str:
    st = bridge.state
    resolver = bridge.tracker.resolver
    name_of = getattr(resolver, "name_of", None)
    algo = (name_of(st.algo) if callable(name_of) else None) or str(st.algo)
    return f"epoch {st.epoch} algo {algo} hold {int(st.hold)}"


def _on_epoch(bridge: Bridge):
    st = bridge.state
    log.info(f"[notify] epoch={st.epoch} algo={st.algo}")
    bridge.status(status_line(bridge), flush=True)


def _on_mined_state(bridge: Bridge):
    log.info(f"[notify] hold={bridge.state.hold}")
    bridge.status(status_line(bridge), flush=True)


def _on_shutdown(bridge: Bridge):
    if bridge.state.shutdown_pending:
        log.warning("[notify] shutdown requested")
    else:
        log.info("[notify] shutdown cleared")


def build_bridge(cfg: AppConfig) -> Bridge:
    TransportCls = import_from_path(cfg.transport.class_path)
    params = {"client_id": cfg.broker.client_id, **cfg.transport.params}
    transport: Transport = TransportCls(params)
    bridge = Bridge(cfg, transport)
    bridge.subscribe(NotifyKind.EPOCH, _on_epoch, bridge)
    bridge.subscribe(NotifyKind.MINED_STATE, _on_mined_state, bridge)
    bridge.subscribe(NotifyKind.SHUTDOWN, _on_shutdown, bridge)
    return bridge


def run(bridge: Bridge) -> None:
    """Loop principal: poll até um shutdown pendente."""
    bridge.start()
    while not bridge.state.shutdown_pending:
        bridge.poll(wait=True)
        if bridge.cfg.status.heartbeat:
            bridge.status(status_line(bridge))
    log.info("Shutdown pendente. Encerrando conexão MQTT.")
    bridge.stop()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="dagmq MQTT bridge")
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help=f"Caminho para o arquivo de configuração YAML (default: {PKG_DIR / 'config.yaml'})",
    )
    parser.add_argument("-b", "--broker", default=None, help="Broker no formato host[:port]")
    parser.add_argument("--log-level", default=None, help="Sobrescreve log_level da config")
    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.config or str(PKG_DIR / "config.yaml"))
        if args.broker:
            cfg.broker = BrokerConfig.from_address(
                args.broker, **cfg.broker.model_dump(exclude={"host", "port"})
            )
    except (OSError, ValueError, ValidationError, yaml.YAMLError) as e:
        log.error(f"Config inválida: {e}")
        return 1

    set_level(args.log_level or cfg.log_level)

    bridge = build_bridge(cfg)
    try:
        run(bridge)
    except TransportError as e:
        log.error(f"[mqtt] fatal: {e}")
        return 1
    except KeyboardInterrupt:
        log.info("Interrompido pelo usuário (Ctrl+C). Encerrando...")
        bridge.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
