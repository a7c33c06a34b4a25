"""Core interaction package.

Architectural role:
    Exposes the interaction layer that sits between the HTTP/CLI adapters and
    the deterministic prompting helpers.

Composition:
    - `session`: `PromptSession` (interaction controller owning one field
      store) and `Toast` (transient copy acknowledgment).

Determinism and side effects:
    Package import is side-effect free. Clipboard access and timers are only
    started by session handlers.
"""
