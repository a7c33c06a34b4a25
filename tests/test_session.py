"""
Tests for the interaction controller (PromptSession) and the toast
"""
import asyncio
import time

import pytest

from prompt_studio.clipboard.client import CopyResult
from prompt_studio.core.session import PromptSession, Toast
from prompt_studio.prompting.fields import TEXT_FIELDS
from prompt_studio.prompting.prompt_builder import BALANCED, INVENTIVE, compose_prompt
from prompt_studio.prompting.templates import TEMPLATES, TonePreset

from conftest import FakeClipboard


class TestSessionStartup:

    def test_starts_from_blank_template(self, session):
        for name in TEXT_FIELDS:
            assert session.store[name] == TEMPLATES["blank"][name]
        assert session.store["creativity"] == "4"
        assert session.output == compose_prompt(session.store)
        assert session.creativity_label == f"Creativity: {BALANCED}"

    def test_unknown_initial_template_leaves_defaults(self, clipboard, toast):
        session = PromptSession(clipboard=clipboard, toast=toast, initial_template="missing")

        assert session.output.text == f"Creativity setting: {BALANCED}"

    def test_bindings_table(self, session):
        bindings = session.bindings()

        assert set(bindings) == {
            "edit_field", "reset", "start_fresh", "select_template",
            "load_template", "select_tone", "copy",
        }
        assert bindings["start_fresh"] == session.reset

    def test_dispatch_unknown_trigger(self, session):
        with pytest.raises(KeyError):
            session.dispatch("paste")


class TestFieldEdits:

    def test_edit_recomposes(self, session):
        session.dispatch("edit_field", "goal", "Ship fast")

        assert "Goal: Ship fast" in session.output.text

    def test_creativity_edit_updates_label(self, session):
        session.dispatch("edit_field", "creativity", "9")

        assert session.creativity_label == f"Creativity: {INVENTIVE}"
        assert f"Creativity setting: {INVENTIVE}" in session.output.text

    def test_other_edits_keep_label(self, session):
        session.dispatch("edit_field", "role", "a poet")

        assert session.creativity_label == f"Creativity: {BALANCED}"

    def test_unknown_field_raises(self, session):
        with pytest.raises(KeyError):
            session.dispatch("edit_field", "mood", "calm")

    def test_render_callback_receives_session(self, clipboard, toast):
        rendered = []
        session = PromptSession(clipboard=clipboard, toast=toast, on_render=rendered.append)
        rendered.clear()

        session.dispatch("edit_field", "goal", "x")

        assert rendered == [session]


class TestTemplates:

    def test_select_template(self, session):
        session.dispatch("select_template", "analysis")

        assert session.selected_template == "analysis"
        assert session.store["role"] == TEMPLATES["analysis"]["role"]

    def test_load_reapplies_selected_template(self, session):
        session.dispatch("select_template", "writing")
        session.dispatch("edit_field", "goal", "edited")
        session.dispatch("load_template")

        assert session.store["goal"] == TEMPLATES["writing"]["goal"]

    def test_template_keeps_creativity(self, session):
        session.dispatch("edit_field", "creativity", "10")
        session.dispatch("select_template", "coding")

        assert session.store["creativity"] == "10"

    def test_unknown_template_is_noop_without_render(self, clipboard, toast):
        rendered = []
        session = PromptSession(clipboard=clipboard, toast=toast, on_render=rendered.append)
        rendered.clear()
        before = session.store.snapshot()
        output_before = session.output

        session.dispatch("select_template", "haiku")

        assert session.store.snapshot() == before
        assert session.output == output_before
        assert rendered == []


class TestReset:

    def test_coding_playful_reset_scenario(self, session):
        session.dispatch("select_template", "coding")
        session.dispatch("edit_field", "tone", "Playful")
        session.dispatch("reset")

        assert all(session.store[name] == "" for name in TEXT_FIELDS)
        assert session.store["creativity"] == "4"
        assert session.output.text == "Creativity setting: Balanced (mix precision with light variation)."

    def test_start_fresh_refreshes_label(self, session):
        session.dispatch("edit_field", "creativity", "0")
        session.dispatch("start_fresh")

        assert session.creativity_label == f"Creativity: {BALANCED}"


class TestTonePresets:

    def test_select_sets_phrase_and_active(self, session):
        session.dispatch("select_tone", "playful")

        preset = session.tone_presets["playful"]
        assert session.store["tone"] == preset.phrase
        assert session.is_tone_active("playful")
        assert f"Tone and style: {preset.phrase}" in session.output.text

    def test_selecting_another_deactivates_previous(self, session):
        session.dispatch("select_tone", "playful")
        session.dispatch("select_tone", "direct")

        active = [key for key in session.tone_presets if session.is_tone_active(key)]
        assert active == ["direct"]

    def test_unknown_preset_ignored(self, session):
        before = session.store.snapshot()
        session.dispatch("select_tone", "sarcastic")

        assert session.store.snapshot() == before
        assert session.active_tone is None

    def test_custom_palette(self, clipboard, toast):
        palette = [TonePreset("calm", "Calm", "Quiet and calm.")]
        session = PromptSession(tone_presets=palette, clipboard=clipboard, toast=toast)
        session.dispatch("select_tone", "calm")

        assert session.store["tone"] == "Quiet and calm."


class TestCopy:

    def test_copy_success_shows_toast(self, session, clipboard):
        copied = asyncio.run(session.dispatch("copy"))

        assert copied is True
        assert clipboard.written == [session.output.text]
        assert clipboard.fallback_written == []
        assert session.toast.visible

    def test_failure_runs_fallback_then_toast(self, toast):
        clipboard = FakeClipboard(result=CopyResult.FAILURE)
        session = PromptSession(clipboard=clipboard, toast=toast)

        assert asyncio.run(session.copy()) is True
        assert clipboard.fallback_written == [session.output.text]
        assert toast.visible
        toast.hide()

    def test_both_paths_unavailable_is_silent(self, toast):
        clipboard = FakeClipboard(result=CopyResult.FAILURE, fallback_ok=False)
        session = PromptSession(clipboard=clipboard, toast=toast)

        assert asyncio.run(session.copy()) is False
        assert not toast.visible

    def test_copy_does_not_change_state(self, session):
        before = session.view()
        asyncio.run(session.copy())
        after = session.view()

        after.pop("toast_visible")
        before.pop("toast_visible")
        assert after == before


class TestToast:

    def test_hides_after_duration(self):
        changes = []
        toast = Toast(duration=0.05, on_change=changes.append)
        toast.show()
        assert toast.visible

        deadline = time.monotonic() + 2
        while toast.visible and time.monotonic() < deadline:
            time.sleep(0.01)

        assert not toast.visible
        assert changes == [True, False]

    def test_show_again_restarts(self):
        toast = Toast(duration=60)
        toast.show()
        first_timer = toast._timer
        toast.show()

        assert toast._timer is not first_timer
        assert not first_timer.is_alive() or first_timer.finished.is_set()
        toast.hide()

    def test_replaced_timer_does_not_hide_new_toast(self):
        changes = []
        toast = Toast(duration=60, on_change=changes.append)
        toast.show()
        stale = toast._timer
        toast.show()

        # The first timer firing late must leave the restarted toast up.
        toast._expire(stale)
        assert toast.visible
        assert changes == [True, True]

        toast._expire(toast._timer)
        assert not toast.visible
        assert toast._timer is None
        assert changes == [True, True, False]
