"""
Shared fixtures for Prompt Studio tests
"""
import pytest

from prompt_studio.clipboard.client import CopyResult
from prompt_studio.core.session import PromptSession, Toast


class FakeClipboard:
    """Clipboard double recording what was copied through each path"""

    def __init__(self, result=CopyResult.SUCCESS, fallback_ok=True):
        self.result = result
        self.fallback_ok = fallback_ok
        self.written = []
        self.fallback_written = []

    async def write_text(self, text):
        self.written.append(text)
        return self.result

    def fallback_copy(self, text):
        self.fallback_written.append(text)
        return self.fallback_ok


@pytest.fixture
def clipboard():
    return FakeClipboard()


@pytest.fixture
def toast():
    """Toast with a long duration so it stays visible during assertions"""
    return Toast(duration=60)


@pytest.fixture
def session(clipboard, toast):
    yield PromptSession(clipboard=clipboard, toast=toast, initial_template="blank")
    toast.hide()
