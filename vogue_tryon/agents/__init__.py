"""Prompt agents for the virtual try-on service."""

from .prompt_composer import DEFAULT_STYLING, TryOnPromptComposer

__all__ = [
    "DEFAULT_STYLING",
    "TryOnPromptComposer",
]
