from __future__ import annotations

import errno
import io
import sys
from typing import TYPE_CHECKING

from oneshot.__main__ import _parse_args, main
from oneshot.buffers import OverflowPolicy
from oneshot.exceptions import ConnectError, InputOverflowError
from oneshot.lowlevel.socket import IPv4SocketAddress

import pytest

if TYPE_CHECKING:
    from unittest.mock import MagicMock

    from pytest_mock import MockerFixture


class TestParseArgs:
    def test____defaults____loopback_endpoint(self) -> None:
        # Arrange

        # Act
        args = _parse_args([])

        # Assert
        assert args.address == IPv4SocketAddress("127.0.0.1", 1234)
        assert args.overflow is OverflowPolicy.TRUNCATE
        assert args.log_level == "WARNING"

    def test____options____custom_values(self) -> None:
        # Arrange

        # Act
        args = _parse_args(["--host", "10.0.0.1", "-p", "4000", "--overflow", "reject", "-v"])

        # Assert
        assert args.address == IPv4SocketAddress("10.0.0.1", 4000)
        assert args.overflow is OverflowPolicy.REJECT
        assert args.log_level == "DEBUG"

    @pytest.mark.parametrize(
        "argv",
        [
            pytest.param(["--host", "::1"], id="ipv6_host"),
            pytest.param(["-p", "70000"], id="port_out_of_range"),
            pytest.param(["-p", "abc"], id="port_not_an_integer"),
            pytest.param(["--overflow", "drop"], id="unknown_overflow_policy"),
        ],
    )
    def test____invalid____usage_error(self, argv: list[str], capsys: pytest.CaptureFixture[str]) -> None:
        # Arrange

        # Act
        with pytest.raises(SystemExit) as exc_info:
            _parse_args(argv)

        # Assert
        assert exc_info.value.code == 2
        assert "usage: oneshot" in capsys.readouterr().err


class TestMain:
    @pytest.fixture
    @staticmethod
    def mock_run_client(mocker: MockerFixture) -> MagicMock:
        return mocker.patch("oneshot.__main__.run_client", autospec=True, return_value=b"reply")

    @pytest.fixture(autouse=True)
    @staticmethod
    def stdin(monkeypatch: pytest.MonkeyPatch) -> io.TextIOWrapper:
        stdin = io.TextIOWrapper(io.BytesIO(b"hello\n"))
        monkeypatch.setattr("sys.stdin", stdin)
        return stdin

    def test____main____success(
        self,
        mock_run_client: MagicMock,
        stdin: io.TextIOWrapper,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        # Arrange

        # Act
        exit_code = main([])

        # Assert
        assert exit_code == 0
        mock_run_client.assert_called_once_with(
            IPv4SocketAddress("127.0.0.1", 1234),
            stdin=stdin.buffer,
            stdout=sys.stdout,
            overflow=OverflowPolicy.TRUNCATE,
        )
        assert capsys.readouterr().err == ""

    def test____main____session_error____report_on_stderr(
        self,
        mock_run_client: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        # Arrange
        mock_run_client.side_effect = ConnectError(errno.ECONNREFUSED, "connect(): Connection refused")

        # Act
        exit_code = main([])

        # Assert
        assert exit_code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == f"[{errno.ECONNREFUSED}] connect(): Connection refused\n"

    def test____main____input_overflow____failure(
        self,
        mock_run_client: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        # Arrange
        mock_run_client.side_effect = InputOverflowError(100, 63)

        # Act
        exit_code = main(["--overflow", "reject"])

        # Assert
        assert exit_code == 1
        assert capsys.readouterr().err.startswith(f"[{errno.EMSGSIZE}] input: ")

    def test____main____unexpected_error____propagates(self, mock_run_client: MagicMock) -> None:
        # Arrange
        mock_run_client.side_effect = RuntimeError("bug")

        # Act & Assert
        with pytest.raises(RuntimeError, match=r"^bug$"):
            main([])

    def test____main____keyboard_interrupt____failure(
        self,
        mock_run_client: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        # Arrange
        mock_run_client.side_effect = KeyboardInterrupt

        # Act
        exit_code = main([])

        # Assert
        assert exit_code == 1
        assert capsys.readouterr().err == ""
