"""Prompt assembly from a field snapshot.

This module is intentionally narrow: it only turns already collected field
values into prompt text, a word count, and a rationale list. Field storage,
template application, clipboard access, and event handling happen elsewhere.

Design constraints:
    - Deterministic construction for identical inputs.
    - Fixed ordering of prompt segments.
    - No hidden side effects (no I/O, no global state mutation).

Prompt safety model:
    - Field values are interpolated as raw strings after trimming.
    - No escaping, sanitization, or length limits are applied here.
"""

import math
from dataclasses import dataclass
from typing import List


# =========================================================
# CREATIVITY DESCRIBER
# =========================================================
# Thresholds are evaluated low-to-high and never overlap:
#   value <= 2        -> literal
#   2 < value <= 6    -> balanced
#   value > 6         -> inventive

LITERAL = "Literal (focus on accuracy, avoid speculation)."
BALANCED = "Balanced (mix precision with light variation)."
INVENTIVE = "Inventive (offer fresh angles while staying on-topic)."


def _to_number(raw) -> float:
    try:
        numeric = float(raw)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(numeric):
        return 0.0
    return numeric


def describe_creativity(raw) -> str:
    """Map a creativity slider value to its qualitative description.

    Args:
        raw: Slider value as string or number. Missing, empty, or
            non-numeric input counts as 0.

    Returns:
        Exactly one of `LITERAL`, `BALANCED`, `INVENTIVE`.
    """
    numeric = _to_number(raw)
    if numeric <= 2:
        return LITERAL
    if numeric <= 6:
        return BALANCED
    return INVENTIVE


def creativity_label(raw) -> str:
    """Label text shown next to the creativity slider."""
    return f"Creativity: {describe_creativity(raw)}"


# =========================================================
# SEGMENT LAYOUT
# =========================================================
# Prompt segment order:
#   1) role          7) examples
#   2) goal          8) format
#   3) context       9) constraints
#   4) inputs       10) creativity (always present)
#   5) steps        11) priority
#   6) tone
# Each entry is (field, prefix); the segment is prefix + trimmed value.

SEGMENTS = (
    ("role", "You are "),
    ("goal", "Goal: "),
    ("context", "Context: "),
    ("inputs", "The user will provide: "),
    ("steps", "Follow these steps:\n"),
    ("tone", "Tone and style: "),
    ("examples", "Examples to mirror/avoid:\n"),
    ("format", "Respond using: "),
    ("constraints", "Constraints & guardrails: "),
    ("creativity", "Creativity setting: "),
    ("priority", "Prioritize: "),
)

SEGMENT_SEPARATOR = "\n\n"


# =========================================================
# RATIONALE
# =========================================================

RATIONALE_RULES = (
    ("role", "Role anchors the assistant's perspective."),
    ("steps", "Steps break down the work into verifiable pieces."),
    ("format", "Format guidance shapes the final output."),
)

RATIONALE_FALLBACK = "Add a role and goal to ground the prompt."


@dataclass(frozen=True)
class ComposedPrompt:
    """Derived output of one composition pass.

    Attributes:
        text: Joined prompt segments.
        word_count: Number of whitespace-delimited tokens in `text`.
        rationale: Ordered "why this helps" messages.
    """

    text: str
    word_count: int
    rationale: tuple

    @property
    def word_count_label(self) -> str:
        return f"{self.word_count} words"


def _clean(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def build_segments(values) -> List[str]:
    """Return the non-empty prompt segments for trimmed `values`, in order."""
    segments = []
    for name, prefix in SEGMENTS:
        if name == "creativity":
            segments.append(prefix + describe_creativity(values.get(name)))
        elif values.get(name):
            segments.append(prefix + values[name])
    return segments


def build_rationale(values) -> List[str]:
    """Explain which filled fields strengthen the prompt.

    Edge cases:
        When none of role, steps, or format is filled, the list holds only
        `RATIONALE_FALLBACK`.
    """
    messages = [message for name, message in RATIONALE_RULES if values.get(name)]
    if not messages:
        messages.append(RATIONALE_FALLBACK)
    return messages


def count_words(text: str) -> int:
    """Count maximal runs of non-whitespace characters."""
    return len(text.split())


def compose_prompt(fields) -> ComposedPrompt:
    """Build the prompt text, word count, and rationale from field values.

    Args:
        fields: `FieldStore` or any mapping of field name to value. Missing
            keys are treated as empty.

    Returns:
        `ComposedPrompt` recomputed from scratch.

    Determinism:
        Deterministic for identical field values.

    Edge cases:
        - Whitespace-only values are treated as empty and produce no segment
          and no extra separator.
        - The creativity segment is always present.
    """
    values = {name: _clean(fields.get(name)) for name, _ in SEGMENTS}

    text = SEGMENT_SEPARATOR.join(build_segments(values))

    return ComposedPrompt(
        text=text,
        word_count=count_words(text),
        rationale=tuple(build_rationale(values)),
    )
