"""Prompt Studio adapter package.

Architectural role:
- Defines the external interaction boundary for HTTP and CLI interfaces.
- Performs transport-level validation and response shaping.
- Delegates composition and template handling to the prompting/core layers.

Scope:
- Request lifecycle control for adapter concerns only.
"""
