import pytest

from dagmq.core.config import AppConfig, BrokerConfig, load_config


def test_defaults_match_daemon():
    cfg = AppConfig()
    assert (cfg.broker.host, cfg.broker.port, cfg.broker.keepalive) == ("localhost", 1883, 3600)
    assert cfg.topics.epoch == "/mine/epoch"
    assert cfg.topics.status == "/mine/dag-cache"
    assert cfg.qos.mined_state == 0
    assert cfg.hold_prefix == "epoch_upload "


@pytest.mark.parametrize("address,expected", [
    ("broker.lan", ("broker.lan", 1883)),
    ("broker.lan:1884", ("broker.lan", 1884)),
    ("10.0.0.2:0x75b", ("10.0.0.2", 1883)),
    (None, ("localhost", 1883)),
])
def test_broker_from_address(address, expected):
    b = BrokerConfig.from_address(address)
    assert (b.host, b.port) == expected


@pytest.mark.parametrize("address", ["host:18x3", "host:"])
def test_broker_invalid_port(address):
    with pytest.raises(ValueError, match="invalid port"):
        BrokerConfig.from_address(address)


def test_load_config_yaml(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("broker:\n  host: mqtt.local\n  port: 2883\nqos:\n  epoch: 2\n", encoding="utf-8")
    cfg = load_config(p)
    assert cfg.broker.host == "mqtt.local"
    assert cfg.broker.port == 2883
    assert cfg.qos.epoch == 2
    assert cfg.qos.shutdown == 1


def test_load_empty_config(tmp_path):
    p = tmp_path / "empty.yaml"
    p.write_text("", encoding="utf-8")
    assert load_config(p) == AppConfig()


def test_shipped_config_loads():
    from dagmq.run import PKG_DIR

    cfg = load_config(PKG_DIR / "config.yaml")
    assert cfg == AppConfig()
