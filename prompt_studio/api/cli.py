"""
Interactive terminal adapter for Prompt Studio.

Architectural role:
- Exposes one `PromptSession` over stdin/stdout.
- Translates typed commands into session triggers via the session's handler
  table; never mutates the field store directly.

Request lifecycle (per line):
1. Read stdin.
2. Handle local control commands (`exit`/`quit`, `/help`, listings).
3. Dispatch editing commands (`/set`, `/template`, `/load`, `/tone`, `/reset`,
   `/fresh`, `/copy`) to the session.
4. Print the updated word count, or the full prompt for `/show`.

Input validation behavior:
- Empty input is ignored.
- Numeric creativity values are clamped to the slider range (0-10).
- Unknown commands, fields, templates, and tone presets print a short message
  and leave the session untouched.

Error handling strategy:
- EOF and keyboard interrupts terminate the loop without traceback output.
- Clipboard failures are reported as a single line.

Side effects:
- Writes to stdout for operator feedback.
- `/copy` runs the platform clipboard tool or writes an OSC 52 sequence.
"""

import asyncio
import sys

from prompt_studio.config import configure_logging
from prompt_studio.core.session import PromptSession, Toast
from prompt_studio.prompting.fields import CREATIVITY_FIELD, FIELD_NAMES, clamp_creativity
from prompt_studio.prompting.templates import get_template, template_names


HELP_TEXT = """
Commands:
 /set <field> <value>   Update a field (use \\n for line breaks)
 /template <name>       Select and apply a template
 /load                  Re-apply the selected template
 /tone [preset]         Apply a tone preset (no argument lists presets)
 /reset, /fresh         Clear every field (creativity back to 4)
 /copy                  Copy the prompt to the clipboard
 /show                  Print the composed prompt
 /fields                Print current field values
 /templates             List templates
 /help                  Show this help
 exit, quit             Leave
"""

SEPARATOR = "-" * 60


# =========================================================
# UTF-8 SAFE OUTPUT
# Best-effort stdout encoding normalization for interactive terminals.
# =========================================================

if hasattr(sys.stdout, "reconfigure"):
    try:
        sys.stdout.reconfigure(encoding="utf-8", errors="ignore")
    except Exception:
        pass


# =========================================================
# RENDERING
# =========================================================

def print_prompt(session):
    view = session.view()
    print(f"\n{view['prompt']}\n")
    print(SEPARATOR)
    print(f"{view['word_count_label']} | {view['creativity_label']}")
    print("Why this helps:")
    for message in view["rationale"]:
        print(f" - {message}")
    print(SEPARATOR)


def print_fields(session):
    for name, value in session.store.items():
        shown = value.replace("\n", "\\n")
        print(f"{name:>12}: {shown}")


def print_tones(session):
    for key, preset in session.tone_presets.items():
        marker = " (active)" if session.is_tone_active(key) else ""
        print(f" - {key}: {preset.phrase}{marker}")


def print_templates(session):
    for name in template_names():
        marker = " (selected)" if name == session.selected_template else ""
        print(f" - {name}{marker}")


def announce_toast(visible):
    if visible:
        print("Prompt copied to clipboard.")


# =========================================================
# COMMANDS
# =========================================================

def handle_command(session, line) -> bool:
    """
    Run one command line against `session`.

    Returns:
        `False` when the loop should stop, `True` otherwise.
    """
    lowered = line.lower()

    if lowered in ("exit", "quit"):
        return False

    parts = line.split(maxsplit=2)
    command = parts[0].lower()

    if command == "/help":
        print(HELP_TEXT)

    elif command == "/set":
        if len(parts) < 2:
            print("Usage: /set <field> <value>")
            return True
        name = parts[1].lower()
        if name not in FIELD_NAMES:
            print(f"Unknown field '{parts[1]}'. Fields: {', '.join(FIELD_NAMES)}")
            return True
        value = parts[2].replace("\\n", "\n") if len(parts) == 3 else ""
        if name == CREATIVITY_FIELD:
            value = clamp_creativity(value)
        session.dispatch("edit_field", name, value)
        if name == CREATIVITY_FIELD:
            print(session.creativity_label)
        print(session.output.word_count_label)

    elif command == "/template":
        if len(parts) < 2:
            print_templates(session)
            return True
        name = parts[1].lower()
        if get_template(name) is None:
            print(f"Template '{parts[1]}' not found.")
            return True
        session.dispatch("select_template", name)
        print(f"Loaded template: {name} ({session.output.word_count_label})")

    elif command == "/load":
        session.dispatch("load_template")
        print(f"Loaded template: {session.selected_template} ({session.output.word_count_label})")

    elif command == "/tone":
        if len(parts) < 2:
            print_tones(session)
            return True
        key = parts[1].lower()
        if key not in session.tone_presets:
            print(f"Tone preset '{parts[1]}' not found.")
            print_tones(session)
            return True
        session.dispatch("select_tone", key)
        print(f"Tone: {session.store['tone']}")

    elif command in ("/reset", "/fresh"):
        session.dispatch("reset" if command == "/reset" else "start_fresh")
        print("All fields cleared.")

    elif command == "/copy":
        if not asyncio.run(session.dispatch("copy")):
            print("Clipboard unavailable; use /show and copy manually.")

    elif command == "/show":
        print_prompt(session)

    elif command == "/fields":
        print_fields(session)

    elif command == "/templates":
        print_templates(session)

    else:
        print(f"Unknown command '{parts[0]}'. Type /help for commands.")

    return True


# =========================================================
# MAIN
# =========================================================

def main(session=None):
    """
    Run the interactive loop for one session.

    Error handling strategy:
    - EOF/interrupt end the session without stack traces.
    """
    configure_logging()

    if session is None:
        session = PromptSession(toast=Toast(on_change=announce_toast))

    print("Prompt Studio started. (Type /help for commands, 'exit' to quit)")
    print(f"Template: {session.selected_template}")
    print(SEPARATOR)
    print_prompt(session)

    while True:

        try:
            line = input("> ").strip()

        except EOFError:
            print("\nSession closed.")
            break

        except KeyboardInterrupt:
            print("\nOperation cancelled by user.")
            break

        if not line:
            continue

        if not handle_command(session, line):
            print("Shutting down.")
            break


if __name__ == "__main__":
    main()
