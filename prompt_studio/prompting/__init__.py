"""Prompting package.

This package contains the deterministic pieces of prompt assembly: the closed
field set and its store, the template catalog, and the composer that turns a
field snapshot into prompt text. It does not perform I/O, clipboard access, or
event handling.
"""
