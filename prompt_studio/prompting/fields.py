"""Field store for the prompt form.

Architectural role:
    Holds the current value of every prompt-input field for one session. The
    composer reads it, the template applier and the interaction controller
    write it.

Data contract:
    - The field set is closed and ordered (`FIELD_NAMES`).
    - Every field is always present; values are strings and may be empty.
    - `creativity` is numeric-as-string (0-10, default `DEFAULT_CREATIVITY`).

Failure handling:
    Writing an unknown field name raises `KeyError`. Any string value is
    accepted verbatim.
"""

import math
from collections.abc import Mapping

from prompt_studio.config import CREATIVITY_MAX, CREATIVITY_MIN, DEFAULT_CREATIVITY


FIELD_NAMES = (
    "role",
    "goal",
    "context",
    "inputs",
    "steps",
    "tone",
    "examples",
    "format",
    "constraints",
    "creativity",
    "priority",
)

CREATIVITY_FIELD = "creativity"

TEXT_FIELDS = tuple(name for name in FIELD_NAMES if name != CREATIVITY_FIELD)


def clamp_creativity(value):
    """Pull a numeric creativity value into the slider range.

    Values inside `CREATIVITY_MIN`..`CREATIVITY_MAX` and non-numeric input
    are returned unchanged; the describer treats the latter as 0.
    """
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return value
    if math.isnan(numeric):
        return value
    if numeric < CREATIVITY_MIN:
        return str(CREATIVITY_MIN)
    if numeric > CREATIVITY_MAX:
        return str(CREATIVITY_MAX)
    return value


def default_values() -> dict:
    """Return the type-appropriate empty value for every field."""
    return {
        name: (DEFAULT_CREATIVITY if name == CREATIVITY_FIELD else "")
        for name in FIELD_NAMES
    }


class FieldStore(Mapping):
    """Ordered, always-complete mapping of field name to current value."""

    def __init__(self, values=None):
        self._values = default_values()
        if values:
            self.update(values)

    def __getitem__(self, name):
        return self._values[name]

    def __setitem__(self, name, value):
        if name not in self._values:
            raise KeyError(name)
        self._values[name] = "" if value is None else str(value)

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return f"FieldStore({self._values!r})"

    def update(self, values: Mapping) -> None:
        """Overwrite the given fields; every key must be a known field."""
        for name, value in values.items():
            self[name] = value

    def reset(self) -> None:
        """Restore every field to its empty default (creativity to `"4"`)."""
        self._values = default_values()

    def snapshot(self) -> dict:
        """Return a detached copy of the current values, in field order."""
        return dict(self._values)
