"""Platform clipboard transport.

Architectural role:
    Places composed prompt text on the host clipboard for the copy handler in
    `prompt_studio.core.session`.

Copy flow:
    `PromptSession.copy` -> `ClipboardService.write_text` (async, platform
    tool such as `pbcopy`, `wl-copy`, `xclip`, `clip`) -> `CopyResult`.
    On `CopyResult.FAILURE` the caller runs `fallback_copy` synchronously,
    which writes an OSC 52 escape sequence so the terminal emulator performs
    the copy.

Retry behavior:
    No retry and no timeout. Each copy request is attempted once.

Failure handling model:
    Subprocess errors are logged and converted to `CopyResult.FAILURE`; the
    fallback reports success as a boolean. Nothing here raises to the caller.
"""

import asyncio
import base64
import codecs
import enum
import logging
import ntpath
import shutil
import sys

from prompt_studio.config import load_clipboard_command


logger = logging.getLogger(__name__)


class CopyResult(enum.Enum):
    """Outcome of the primary clipboard write."""

    SUCCESS = "success"
    FAILURE = "failure"


# Candidate tools per platform, tried in order.
CLIPBOARD_TOOLS = {
    "darwin": [["pbcopy"]],
    "win32": [["clip"]],
    "linux": [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ],
}

OSC52_TEMPLATE = "\033]52;c;{payload}\a"

# Windows `clip` reads stdin in the console code page unless it sees a
# UTF-16 byte order mark.
UTF16_TOOLS = ("clip", "clip.exe")


def resolve_clipboard_command(platform=None):
    """Return the argv of the first clipboard tool available on this host.

    Resolution order:
        1. `CLIPBOARD_COMMAND` environment override.
        2. Platform candidates from `CLIPBOARD_TOOLS` found on `PATH`.

    Returns:
        Command as a list of strings, or `None` when nothing is available.
    """
    override = load_clipboard_command()
    if override:
        return override

    platform = platform or sys.platform
    key = "linux" if platform.startswith("linux") else platform
    for candidate in CLIPBOARD_TOOLS.get(key, []):
        if shutil.which(candidate[0]):
            return candidate
    return None


def encode_for_command(command, text: str) -> bytes:
    """Encode `text` the way the clipboard tool `command` expects on stdin."""
    tool = ntpath.basename(command[0]).lower()
    if tool in UTF16_TOOLS:
        return codecs.BOM_UTF16_LE + text.encode("utf-16-le")
    return text.encode("utf-8")


class ClipboardService:
    """Best-effort clipboard with a synchronous terminal fallback.

    Args:
        command: Explicit clipboard argv. Resolved lazily when omitted.
        stream: Text stream receiving the OSC 52 fallback (stdout by default).
    """

    def __init__(self, command=None, stream=None):
        self._command = command
        self._stream = stream

    @property
    def command(self):
        if self._command is None:
            self._command = resolve_clipboard_command()
        return self._command

    async def write_text(self, text: str) -> CopyResult:
        """Pipe `text` into the platform clipboard tool.

        Failure scenarios:
            - No tool available -> `FAILURE`.
            - Tool missing at exec time or other OS error -> logged, `FAILURE`.
            - Non-zero exit status -> `FAILURE`.
        """
        command = self.command
        if not command:
            logger.debug("No clipboard tool available")
            return CopyResult.FAILURE

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
            await process.communicate(encode_for_command(command, text))
        except OSError:
            logger.exception("Clipboard command failed: %s", command[0])
            return CopyResult.FAILURE

        if process.returncode != 0:
            logger.debug("Clipboard command %s exited with %s", command[0], process.returncode)
            return CopyResult.FAILURE

        return CopyResult.SUCCESS

    def fallback_copy(self, text: str) -> bool:
        """Ask the terminal emulator to copy `text` via an OSC 52 sequence.

        Returns:
            `True` when the sequence was written to an interactive terminal,
            `False` when no terminal is attached.
        """
        stream = self._stream or sys.stdout
        isatty = getattr(stream, "isatty", None)
        if isatty is None or not isatty():
            return False

        payload = base64.b64encode(text.encode("utf-8")).decode("ascii")
        stream.write(OSC52_TEMPLATE.format(payload=payload))
        stream.flush()
        return True
