"""
Tests for the command line client.
"""

import pytest

import simple_analytics.cli as cli
import simple_analytics.tracker as tracker_module
from simple_analytics.errors import HTTPStatusError
from simple_analytics.storage import JsonFileStore, OPTED_OUT_KEY


class RecordingTransport:
    sent = []
    error = None

    def __init__(self, endpoint, timeout):
        self.endpoint = endpoint

    async def send(self, event):
        RecordingTransport.sent.append(event)
        if RecordingTransport.error is not None:
            raise RecordingTransport.error

    def close(self):
        pass


@pytest.fixture(autouse=True)
def cli_env(tmp_path, monkeypatch):
    monkeypatch.setenv("SIMPLE_ANALYTICS_STORAGE_DIR", str(tmp_path / "state"))
    monkeypatch.setenv("SIMPLE_ANALYTICS_CONFIG", str(tmp_path / "missing.json"))
    monkeypatch.setattr(cli, "setup_logging", lambda debug=False: None)
    monkeypatch.setattr(cli, "stop_logging", lambda: None)
    monkeypatch.setattr(tracker_module, "Transport", RecordingTransport)
    RecordingTransport.sent = []
    RecordingTransport.error = None
    return tmp_path / "state"


def test_opt_out_and_in(cli_env, capsys):
    assert cli.main(["opt-out"]) == 0
    assert JsonFileStore(cli_env).get(OPTED_OUT_KEY) is True

    assert cli.main(["status"]) == 0
    assert "Opted out: True" in capsys.readouterr().out

    assert cli.main(["opt-in"]) == 0
    assert JsonFileStore(cli_env).get(OPTED_OUT_KEY) is False


def test_pageview(cli_env):
    assert cli.main(["--hostname", "app.example.com", "pageview", "List View", "Edit"]) == 0

    assert len(RecordingTransport.sent) == 1
    event = RecordingTransport.sent[0]
    assert event.path == "/list-view/edit"
    assert event.unique is True


def test_event_with_metadata(cli_env):
    args = ["--hostname", "app.example.com", "event", "signup", "--meta", "plan=premium"]
    assert cli.main(args) == 0

    event = RecordingTransport.sent[0]
    assert event.event == "signup"
    assert event.metadata == '{"plan":"premium"}'


def test_opted_out_sends_nothing(cli_env):
    cli.main(["opt-out"])
    assert cli.main(["--hostname", "app.example.com", "pageview"]) == 0
    assert RecordingTransport.sent == []


def test_delivery_failure_exits_non_zero(cli_env):
    RecordingTransport.error = HTTPStatusError(500)
    assert cli.main(["--hostname", "app.example.com", "pageview"]) == 1


def test_hostname_required(cli_env):
    with pytest.raises(SystemExit):
        cli.main(["pageview"])


def test_bad_metadata_rejected(cli_env):
    with pytest.raises(SystemExit):
        cli.main(["--hostname", "app.example.com", "event", "x", "--meta", "novalue"])
