import json

import pytest
import requests

from bitaxecli.cli import main
from conftest import FakeResponse


@pytest.fixture
def missing_config(tmp_path):
    return str(tmp_path / "config.toml")


def test_status_empty_document(fake_device, no_env, missing_config, capsys):
    fake_device.response = FakeResponse(200, {})
    rc = main(["--host", "http://10.0.0.7", "--config", missing_config, "status"])
    assert rc == 0
    assert capsys.readouterr().out.splitlines() == ["Bitaxe Status"]


def test_status_prints_lines(fake_device, no_env, missing_config, capsys):
    fake_device.response = FakeResponse(200, {"temp": 60, "hashRate": 450.5, "unknown": 1})
    rc = main(["--host", "http://10.0.0.7", "--config", missing_config, "status"])
    assert rc == 0
    assert capsys.readouterr().out.splitlines() == [
        "Bitaxe Status",
        "Hashrate: 450.50 GH/s",
        "Core Temp: 60.0 °C",
    ]
    assert fake_device.calls == [("GET", "http://10.0.0.7/api/system/info", 5.0)]


def test_status_json(fake_device, no_env, missing_config, capsys):
    fake_device.response = FakeResponse(200, {"hostname": "bitaxe", "bestDiff": 12, "temp": "x"})
    rc = main(["--host", "http://10.0.0.7", "--config", missing_config, "status", "--json"])
    assert rc == 0
    assert json.loads(capsys.readouterr().out) == {"hostname": "bitaxe", "bestDiff": "12"}


def test_status_bad_json(fake_device, no_env, missing_config, capsys):
    fake_device.response = FakeResponse(200, text="not json")
    rc = main(["--host", "http://10.0.0.7", "--config", missing_config, "status"])
    assert rc == 1
    assert "invalid JSON" in capsys.readouterr().err


def test_restart_ok(fake_device, no_env, missing_config, capsys):
    rc = main(["--host", "http://10.0.0.7", "--config", missing_config, "restart"])
    assert rc == 0
    assert "Restart command sent" in capsys.readouterr().out
    assert fake_device.calls == [("POST", "http://10.0.0.7/api/system/restart", 5.0)]


def test_restart_503(fake_device, no_env, missing_config, capsys):
    fake_device.response = FakeResponse(503, text="")
    rc = main(["--host", "http://10.0.0.7", "--config", missing_config, "restart"])
    captured = capsys.readouterr()
    assert rc == 1
    assert "HTTP 503" in captured.err
    assert "restart" in captured.err
    assert "Restart command sent" not in captured.out


def test_transport_failure(fake_device, no_env, missing_config, capsys):
    fake_device.error = requests.Timeout("timed out")
    rc = main(["--host", "http://10.0.0.7", "--config", missing_config, "--timeout", "1", "status"])
    assert rc == 1
    assert "timed out" in capsys.readouterr().err
    assert fake_device.calls[0][2] == 1.0


def test_no_host_configured(fake_device, no_env, missing_config, capsys):
    rc = main(["--config", missing_config, "status"])
    assert rc == 2
    assert "No host configured" in capsys.readouterr().err
    assert fake_device.calls == []


def test_env_address(fake_device, monkeypatch, missing_config):
    monkeypatch.setenv("BITAXE_URL", "http://192.168.1.50")
    assert main(["--config", missing_config, "restart"]) == 0
    assert fake_device.calls[0][1] == "http://192.168.1.50/api/system/restart"


def test_config_file_address(fake_device, no_env, tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('host = "http://192.168.1.60"\n')
    assert main(["--config", str(path), "restart"]) == 0
    assert fake_device.calls[0][1] == "http://192.168.1.60/api/system/restart"


def test_malformed_config(fake_device, no_env, tmp_path, capsys):
    path = tmp_path / "config.toml"
    path.write_text("host = ")
    rc = main(["--config", str(path), "status"])
    assert rc == 2
    assert "not valid TOML" in capsys.readouterr().err
    assert fake_device.calls == []


def test_dashboard(fake_device, no_env, missing_config, capsys):
    fake_device.response = FakeResponse(200, {"hostname": "bitaxe", "frequency": 525})
    rc = main(["--host", "http://10.0.0.7", "--config", missing_config, "dashboard"])
    out = capsys.readouterr().out
    assert rc == 0
    assert "bitaxe" in out
    assert "525 MHz" in out


def test_config_show(no_env, monkeypatch, missing_config, capsys):
    monkeypatch.setenv("BITAXE_URL", "http://192.168.1.50")
    rc = main(["--config", missing_config, "config", "show", "--json"])
    assert rc == 0
    assert json.loads(capsys.readouterr().out) == {
        "url": "http://192.168.1.50",
        "source": "env",
        "config": missing_config,
    }


def test_status_with_huge_integer(fake_device, no_env, missing_config, capsys):
    fake_device.response = FakeResponse(200, text='{"sharesAccepted": 1' + "0" * 400 + ', "hostname": "x"}')
    rc = main(["--host", "http://10.0.0.7", "--config", missing_config, "status"])
    assert rc == 0
    assert capsys.readouterr().out.splitlines() == ["Bitaxe Status", "Hostname: x"]


def test_status_json_counters_are_ints(fake_device, no_env, missing_config, capsys):
    fake_device.response = FakeResponse(200, {"sharesAccepted": 1024, "temp": 60})
    rc = main(["--host", "http://10.0.0.7", "--config", missing_config, "status", "--json"])
    assert rc == 0
    assert capsys.readouterr().out.strip() == '{\n  "sharesAccepted": 1024,\n  "temp": 60\n}'
