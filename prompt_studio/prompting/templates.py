"""Template catalog and applier.

Architectural role:
    Provides the fixed preset bundles offered by the form and the operation
    that copies one of them into a `FieldStore`.

Catalog contract:
    - Four built-in templates: `blank`, `analysis`, `writing`, `coding`.
    - Each template defines every text field; none defines `creativity`.
    - Entries are read-only mapping proxies and are never mutated.

Applier contract:
    - Unknown template names are a silent no-op (returns `False`).
    - Known names overwrite only the fields the template defines.
    - Recomposition is the caller's job, and only after a successful apply.

Tone palette:
    Default tone presets offered next to the tone field. Rendering surfaces
    may supply their own palette; this one is used otherwise.
"""

from collections import namedtuple
from types import MappingProxyType

from prompt_studio.prompting.fields import FIELD_NAMES


# =========================================================
# TEMPLATE CATALOG
# =========================================================

_TEMPLATES = {
    "blank": {
        "role": "You are a helpful, detail-oriented assistant.",
        "goal": "Deliver a clear response for the user's request.",
        "context": "",
        "inputs": "",
        "steps": "",
        "tone": "Balanced, concise, and supportive.",
        "examples": "",
        "format": "Concise paragraphs with bullet points for key items.",
        "constraints": "Cite assumptions and ask one clarifying question if needed.",
        "priority": "Accuracy first, then brevity.",
    },
    "analysis": {
        "role": "You are a senior analyst who explains tradeoffs like a mentor.",
        "goal": "Evaluate options and recommend the best path with rationale.",
        "context": "Consider the decision context, stakeholders, and constraints.",
        "inputs": "List of options, audience, risk tolerance, timeline, and budget.",
        "steps": (
            "1) Summarize the objective in one line.\n"
            "2) Compare options with pros/cons.\n"
            "3) Flag risks and unknowns.\n"
            "4) Recommend the best option and why.\n"
            "5) Suggest next steps or data to gather."
        ),
        "tone": "Neutral, concrete, and transparent about uncertainty.",
        "examples": (
            "Good: recommendations that show evidence and make tradeoffs explicit.\n"
            "Avoid: opinions without reasoning or caveats."
        ),
        "format": "Markdown with headings: Objective, Comparison, Recommendation, Next steps.",
        "constraints": "Keep to under 250 words. Call out any missing info.",
        "priority": "Clarity over creativity; cite assumptions.",
    },
    "writing": {
        "role": "You are a writing coach who polishes text and strengthens intent.",
        "goal": "Rewrite the draft to match the target tone while keeping key facts.",
        "context": "Audience, medium (email, doc, announcement), and desired impression.",
        "inputs": "Original draft and any phrases to preserve.",
        "steps": (
            "1) Restate the goal and audience.\n"
            "2) Rewrite for clarity and flow.\n"
            "3) Suggest 2 subject lines or hooks.\n"
            "4) Offer 3 small edits the author can choose."
        ),
        "tone": "Warm, confident, and succinct.",
        "examples": (
            "Good: rewrites that keep author voice but sharpen impact.\n"
            "Avoid: generic fluff or removing key details."
        ),
        "format": "Rewritten draft, bullet notes for reasoning, then optional variations.",
        "constraints": "Keep under 180 words and avoid emojis.",
        "priority": "Preserve intent first, then polish tone.",
    },
    "coding": {
        "role": "You are a staff-level engineer who explains code step by step.",
        "goal": "Walk through the code, highlight risks, and propose improvements.",
        "context": "Language, framework, and key constraints (perf, security, readability).",
        "inputs": "Code snippet and the desired outcome (optimize, debug, refactor).",
        "steps": (
            "1) Summarize what the code does.\n"
            "2) Point out correctness and edge cases.\n"
            "3) Surface security or performance concerns.\n"
            "4) Suggest precise, minimal changes.\n"
            "5) Provide an improved snippet if helpful."
        ),
        "tone": "Direct, constructive, and concise.",
        "examples": (
            "Good: actionable suggestions with examples.\n"
            "Avoid: vague advice or large rewrites unless necessary."
        ),
        "format": "Bullets for issues, code blocks for snippets, then a short recap.",
        "constraints": "Stay within 200 words and avoid stylistic bikeshedding.",
        "priority": "Correctness and safety over style.",
    },
}

TEMPLATES = MappingProxyType(
    {name: MappingProxyType(values) for name, values in _TEMPLATES.items()}
)


def get_template(name):
    """Return the named template, or `None` when the catalog has no such entry."""
    if not isinstance(name, str):
        return None
    return TEMPLATES.get(name)


def template_names():
    """Return catalog keys in declaration order."""
    return list(TEMPLATES)


def apply_template(name, store) -> bool:
    """Copy a catalog entry into `store`.

    Args:
        name: Template name selected on the rendering surface.
        store: `FieldStore` (or any mutable mapping of field values).

    Returns:
        `True` when the template exists and was applied, `False` otherwise.

    Edge cases:
        - Unknown names leave `store` untouched.
        - Template keys that are not recognized fields are skipped.
        - Fields absent from the template (creativity) keep their value.
    """
    template = get_template(name)
    if template is None:
        return False

    for key, value in template.items():
        if key in FIELD_NAMES:
            store[key] = value
    return True


# =========================================================
# TONE PALETTE
# =========================================================

TonePreset = namedtuple("TonePreset", ["key", "label", "phrase"])

DEFAULT_TONE_PRESETS = (
    TonePreset("friendly", "Friendly", "Friendly, encouraging, and approachable."),
    TonePreset("professional", "Professional", "Professional, precise, and courteous."),
    TonePreset("playful", "Playful", "Playful, light-hearted, and witty."),
    TonePreset("direct", "Direct", "Direct, candid, and to the point."),
    TonePreset("empathetic", "Empathetic", "Empathetic, patient, and reassuring."),
    TonePreset("academic", "Academic", "Formal, rigorous, and well-referenced."),
)
