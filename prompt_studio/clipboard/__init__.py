"""Clipboard access package.

Architectural role:
    Wraps the host platform's clipboard as a best-effort service used by the
    interaction layer's copy handler.

Module split:
    - `client`: asynchronous clipboard tool invocation plus the synchronous
      terminal fallback.
"""
