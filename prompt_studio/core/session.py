"""Interaction controller for one prompt-building session.

Architectural role:
    Owns the mutable state of a single form session (field store, current
    composition, creativity label, active tone preset, toast) and binds user
    triggers to handlers. Adapters never mutate the field store directly.

Control-flow model:
    1. An adapter dispatches a named trigger through `PromptSession.bindings()`.
    2. The handler mutates the field store or applies a template.
    3. The prompt is recomposed from the full store and renderers are notified.

Handler table:
    edit_field      -> update one field (refreshes the creativity label)
    reset           -> restore defaults
    start_fresh     -> alias of reset
    select_template -> remember selection and apply it
    load_template   -> apply the current selection again
    select_tone     -> overwrite tone with a preset phrase, mark it active
    copy            -> coroutine; clipboard write with synchronous fallback

Concurrency:
    Handlers run one at a time on the caller's thread. Only `copy` suspends
    (awaiting the clipboard tool). The toast hide timer runs on a daemon
    thread and only flips the toast's visibility.

Error handling strategy:
    - Unknown template names and tone preset keys are silent no-ops.
    - Unknown field names raise `KeyError` from the field store.
    - When both clipboard paths are unavailable the copy is logged and no
      acknowledgment is shown.
"""

import logging
import threading

from prompt_studio.clipboard.client import ClipboardService, CopyResult
from prompt_studio.config import DEFAULT_TEMPLATE, TOAST_SECONDS
from prompt_studio.prompting.fields import CREATIVITY_FIELD, FieldStore
from prompt_studio.prompting.prompt_builder import compose_prompt, creativity_label
from prompt_studio.prompting.templates import DEFAULT_TONE_PRESETS, apply_template


logger = logging.getLogger(__name__)


class Toast:
    """Transient acknowledgment that hides itself after `duration` seconds.

    Showing an already visible toast restarts its timer; an expiring timer
    that has been replaced is ignored.
    """

    def __init__(self, duration=TOAST_SECONDS, on_change=None):
        self.duration = duration
        self.visible = False
        self._on_change = on_change
        self._timer = None
        self._lock = threading.Lock()

    def show(self):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self.visible = True
            timer = threading.Timer(self.duration, lambda: self._expire(timer))
            timer.daemon = True
            self._timer = timer
            timer.start()
        self._notify()

    def _expire(self, timer):
        # A timer replaced by a later show() must not hide the new toast.
        with self._lock:
            if timer is not self._timer:
                return
            self._timer = None
            self.visible = False
        self._notify()

    def hide(self):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self.visible = False
        self._notify()

    def _notify(self):
        if self._on_change is not None:
            self._on_change(self.visible)


class PromptSession:
    """Context object for one form session.

    Args:
        tone_presets: Palette supplied by the rendering surface; defaults to
            `DEFAULT_TONE_PRESETS`.
        clipboard: Service exposing async `write_text` and sync
            `fallback_copy`.
        toast: Acknowledgment shown after a successful copy.
        on_render: Callback invoked with the session after each recomposition.
        initial_template: Template applied when the session starts.
    """

    def __init__(
        self,
        tone_presets=DEFAULT_TONE_PRESETS,
        clipboard=None,
        toast=None,
        on_render=None,
        initial_template=DEFAULT_TEMPLATE,
    ):
        self.store = FieldStore()
        self.tone_presets = {preset.key: preset for preset in tone_presets}
        self.active_tone = None
        self.selected_template = initial_template
        self.clipboard = clipboard if clipboard is not None else ClipboardService()
        self.toast = toast if toast is not None else Toast()
        self.creativity_label = creativity_label(self.store[CREATIVITY_FIELD])
        self._on_render = on_render
        self._handlers = {
            "edit_field": self.edit_field,
            "reset": self.reset,
            "start_fresh": self.reset,
            "select_template": self.select_template,
            "load_template": self.load_template,
            "select_tone": self.select_tone,
            "copy": self.copy,
        }

        self.output = compose_prompt(self.store)
        self.load_template()

    # ── Trigger table ─────────────────────────────────────────

    def bindings(self):
        """Return the trigger name -> handler table built at construction."""
        return dict(self._handlers)

    def dispatch(self, trigger, *args):
        """Run the handler bound to `trigger`.

        Raises:
            KeyError: when no handler is bound to `trigger`.
        """
        return self._handlers[trigger](*args)

    # ── Handlers ──────────────────────────────────────────────

    def edit_field(self, name, value):
        self.store[name] = value
        if name == CREATIVITY_FIELD:
            self.creativity_label = creativity_label(self.store[CREATIVITY_FIELD])
        self.recompose()

    def reset(self):
        self.store.reset()
        self.creativity_label = creativity_label(self.store[CREATIVITY_FIELD])
        self.recompose()

    def select_template(self, name):
        self.selected_template = name
        self.load_template()

    def load_template(self):
        """Apply the selected template; unknown names change nothing."""
        if apply_template(self.selected_template, self.store):
            self.recompose()
        else:
            logger.debug("Ignoring unknown template %r", self.selected_template)

    def select_tone(self, key):
        preset = self.tone_presets.get(key)
        if preset is None:
            return
        self.active_tone = preset.key
        self.store["tone"] = preset.phrase
        self.recompose()

    async def copy(self) -> bool:
        """Copy the current prompt text and acknowledge it.

        Returns:
            `True` when either clipboard path succeeded and the toast was
            shown, `False` when neither could run.
        """
        text = self.output.text
        result = await self.clipboard.write_text(text)

        if result is not CopyResult.SUCCESS and not self.clipboard.fallback_copy(text):
            logger.warning("Clipboard unavailable; prompt was not copied")
            return False

        self.toast.show()
        return True

    # ── Derived state ─────────────────────────────────────────

    def recompose(self):
        self.output = compose_prompt(self.store)
        if self._on_render is not None:
            self._on_render(self)

    def is_tone_active(self, key) -> bool:
        return self.active_tone == key

    def view(self) -> dict:
        """Snapshot of everything the rendering surface displays."""
        return {
            "fields": self.store.snapshot(),
            "prompt": self.output.text,
            "word_count": self.output.word_count,
            "word_count_label": self.output.word_count_label,
            "creativity_label": self.creativity_label,
            "rationale": list(self.output.rationale),
            "selected_template": self.selected_template,
            "active_tone": self.active_tone,
            "toast_visible": self.toast.visible,
        }
