"""Tests for the send-icon command line."""

from __future__ import annotations

from pathlib import Path

import pytest

from iconbundle.send import cli
from iconbundle.send.sender import SendRequest, SendResult


class _RecordingSender:
    requests: list[SendRequest] = []

    def __init__(self, runner=None, config=None) -> None:  # type: ignore[no-untyped-def]
        self.config = config

    def send(self, request: SendRequest) -> SendResult:
        type(self).requests.append(request)
        return SendResult()


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> type[_RecordingSender]:
    _RecordingSender.requests = []
    monkeypatch.setattr(cli, "IconSender", _RecordingSender)
    return _RecordingSender


@pytest.mark.parametrize(
    ("argv", "reason"),
    [
        ([], "No fileName"),
        (["mail.svg"], "No service name"),
        (["mail.svg", "mail"], "No instance"),
        (["mail.svg", "mail", "v25d1"], "No flags"),
    ],
)
def test_missing_arguments_print_usage(
    argv: list[str],
    reason: str,
    recorder: type[_RecordingSender],
    capsys: pytest.CaptureFixture[str],
) -> None:
    cli.main(argv)

    out = capsys.readouterr().out
    assert out.startswith(reason)
    assert "instance like v25d1, v5d3" in out
    assert recorder.requests == []


def test_dash_prefixed_flags_are_accepted(
    recorder: type[_RecordingSender], tmp_path: Path
) -> None:
    cli.main(["--config", str(tmp_path), "mail.svg", "mail", "v25d1", "-bs4t"])

    assert len(recorder.requests) == 1
    request = recorder.requests[0]
    assert request.file_name == Path("mail.svg")
    assert request.service == "mail"
    assert (request.dev, request.instance) == ("v25", "d1")
    assert request.flags == frozenset({"b", "s", "4", "t"})


def test_single_numeric_flag(recorder: type[_RecordingSender], tmp_path: Path) -> None:
    cli.main(["--config", str(tmp_path), "mail.png", "mail", "v5d3", "-4"])

    assert recorder.requests[0].flags == frozenset({"4"})


def test_unexpected_arguments_error(recorder: type[_RecordingSender], tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        cli.main(["mail.png", "mail", "v5d3", "-b", "--bogus"])
