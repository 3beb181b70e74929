"""Tests for the spiclient command-line interface."""

from __future__ import annotations

import base64
from pathlib import Path

import pytest

from spiclient.cli import main, parse_args
from spiclient.client.remote import RemoteCommandClient


@pytest.fixture
def config_file(tmp_path: Path, key_files) -> Path:
    path = tmp_path / "spiclient.yaml"
    path.write_text(
        "keys:\n"
        f"  public_key_path: {key_files.public}\n"
        f"  private_key_path: {key_files.private}\n"
    )
    return path


class TestParseArgs:
    def test_send(self) -> None:
        args = parse_args(["send", "ls -la", "--port", "9443", "--verify-tls"])
        assert args.command == "send"
        assert args.text == "ls -la"
        assert args.port == 9443
        assert args.verify_tls is True
        assert args.decrypt_response is False
        assert args.host is None

    def test_global_options(self) -> None:
        args = parse_args(["-v", "-c", "conf.yaml", "encrypt", "hi"])
        assert args.verbose is True
        assert args.config == Path("conf.yaml")

    def test_no_command(self) -> None:
        assert parse_args([]).command is None


class TestMain:
    def test_encrypt_then_decrypt(self, config_file: Path, capsys: pytest.CaptureFixture) -> None:
        assert main(["-c", str(config_file), "encrypt", "uname -a"]) == 0
        ciphertext_b64 = capsys.readouterr().out.strip()
        assert len(base64.b64decode(ciphertext_b64)) == 256

        assert main(["-c", str(config_file), "decrypt", ciphertext_b64]) == 0
        assert capsys.readouterr().out.strip() == "uname -a"

    def test_decrypt_garbage_fails(self, config_file: Path) -> None:
        garbage = base64.b64encode(b"\x00" * 256).decode("ascii")
        assert main(["-c", str(config_file), "decrypt", garbage]) == 1

    def test_missing_key_file(self, tmp_path: Path) -> None:
        path = tmp_path / "spiclient.yaml"
        path.write_text(f"keys:\n  public_key_path: {tmp_path / 'absent.pem'}\n")
        assert main(["-c", str(path), "encrypt", "ls"]) == 1

    def test_send_applies_overrides(
        self,
        config_file: Path,
        capsys: pytest.CaptureFixture,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        seen = {}

        async def fake_send(self, command: str) -> str:
            seen["url"] = self.url
            seen["config"] = self.config
            return f"Executed: {command}"

        monkeypatch.setattr(RemoteCommandClient, "send_command", fake_send)

        code = main([
            "-c", str(config_file), "send", "ls",
            "--host", "core.lan", "--port", "9443", "--verify-tls", "--decrypt-response",
        ])

        assert code == 0
        assert capsys.readouterr().out.strip() == "Executed: ls"
        assert seen["url"] == "https://core.lan:9443/api/exec"
        assert seen["config"].insecure_transport is False
        assert seen["config"].response_mode.value == "decrypt"
