"""Prompt Studio: assemble structured prompts from form fields."""

__version__ = "0.1.0"
