"""
Tests for the platform clipboard transport
"""
import asyncio
import base64
import codecs
import io
import sys

import pytest

from prompt_studio.clipboard import client
from prompt_studio.clipboard.client import (
    ClipboardService,
    CopyResult,
    encode_for_command,
    resolve_clipboard_command,
)


class TtyStream(io.StringIO):
    def isatty(self):
        return True


class TestResolveCommand:

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("CLIPBOARD_COMMAND", "xclip -selection primary")

        assert resolve_clipboard_command() == ["xclip", "-selection", "primary"]

    def test_first_available_linux_tool(self, monkeypatch):
        monkeypatch.delenv("CLIPBOARD_COMMAND", raising=False)
        monkeypatch.setattr(client.shutil, "which", lambda name: "/usr/bin/xclip" if name == "xclip" else None)

        assert resolve_clipboard_command("linux") == ["xclip", "-selection", "clipboard"]

    def test_macos(self, monkeypatch):
        monkeypatch.delenv("CLIPBOARD_COMMAND", raising=False)
        monkeypatch.setattr(client.shutil, "which", lambda name: "/usr/bin/" + name)

        assert resolve_clipboard_command("darwin") == ["pbcopy"]

    def test_nothing_available(self, monkeypatch):
        monkeypatch.delenv("CLIPBOARD_COMMAND", raising=False)
        monkeypatch.setattr(client.shutil, "which", lambda name: None)

        assert resolve_clipboard_command("linux") is None
        assert resolve_clipboard_command("sunos5") is None


class TestEncodeForCommand:

    @pytest.mark.parametrize("command", [["clip"], ["CLIP.EXE"], ["C:\\Windows\\System32\\clip.exe"]])
    def test_windows_clip_gets_utf16_with_bom(self, command):
        data = encode_for_command(command, "Caf\u00e9 \u2192 na\u00efve")

        assert data.startswith(codecs.BOM_UTF16_LE)
        assert data.decode("utf-16") == "Caf\u00e9 \u2192 na\u00efve"

    @pytest.mark.parametrize("command", [["pbcopy"], ["wl-copy"], ["xclip", "-selection", "clipboard"]])
    def test_other_tools_get_utf8(self, command):
        assert encode_for_command(command, "Caf\u00e9") == "Caf\u00e9".encode("utf-8")


class TestWriteText:

    def test_success(self, tmp_path):
        target = tmp_path / "clip.txt"
        script = f"import sys; open({str(target)!r}, 'w', encoding='utf-8').write(sys.stdin.read())"
        service = ClipboardService(command=[sys.executable, "-c", script])

        result = asyncio.run(service.write_text("Goal: Ship fast"))

        assert result is CopyResult.SUCCESS
        assert target.read_text(encoding="utf-8") == "Goal: Ship fast"

    def test_non_zero_exit_is_failure(self):
        service = ClipboardService(command=[sys.executable, "-c", "import sys; sys.exit(3)"])

        assert asyncio.run(service.write_text("x")) is CopyResult.FAILURE

    def test_missing_tool_is_failure(self):
        service = ClipboardService(command=["definitely-not-a-clipboard-tool"])

        assert asyncio.run(service.write_text("x")) is CopyResult.FAILURE

    def test_no_tool_resolved(self, monkeypatch):
        monkeypatch.setattr(client, "resolve_clipboard_command", lambda: None)

        assert asyncio.run(ClipboardService().write_text("x")) is CopyResult.FAILURE


class TestFallbackCopy:

    def test_writes_osc52_sequence(self):
        stream = TtyStream()
        service = ClipboardService(command=[], stream=stream)

        assert service.fallback_copy("héllo") is True

        payload = base64.b64encode("héllo".encode("utf-8")).decode("ascii")
        assert stream.getvalue() == f"\033]52;c;{payload}\a"

    @pytest.mark.parametrize("stream", [io.StringIO(), object()])
    def test_requires_terminal(self, stream):
        service = ClipboardService(command=[], stream=stream)

        assert service.fallback_copy("x") is False
