"""
Draft generation prompt functions.

This module provides functions that select the mode and format the prompts for
draft question generation. The actual prompt strings are defined in draft_prompts.py.
"""

from typing import Optional

from draft_utils.draft_prompts import (
    CONTEXT_SECTION_TEMPLATE,
    DEFAULT_PROMPT,
    LOWERED_ENTRY_PROMPT,
    SYSTEM_PROMPT,
    USER_PROMPT_TEMPLATE,
)
from models.draft import GenerateRequest, Mode


def get_system_prompt() -> str:
    """
    Get the system prompt for draft generation.

    Returns:
        System prompt string
    """
    return SYSTEM_PROMPT


def select_mode(unheard_contexts: Optional[list[str]]) -> Mode:
    """
    Resolve the generation mode from the request shape.

    Args:
        unheard_contexts: Contexts whose voices are not being heard, if any

    Returns:
        Mode.LOWERED_ENTRY when unheard_contexts is non-empty, else Mode.DEFAULT
    """
    if unheard_contexts:
        return Mode.LOWERED_ENTRY
    return Mode.DEFAULT


def get_mode_prompt(mode: Mode) -> str:
    if mode == Mode.DEFAULT:
        return DEFAULT_PROMPT
    return LOWERED_ENTRY_PROMPT


def build_user_prompt(request: GenerateRequest, mode: Mode) -> str:
    """
    Build the user prompt for draft generation.

    Theme and background are interpolated verbatim. The unheard contexts, when
    present, are appended as a bulleted section.

    Args:
        request: Validated generate request
        mode: Resolved generation mode

    Returns:
        Formatted user prompt string
    """
    context_section = ""
    if request.unheard_contexts:
        context_lines = "\n".join(f"- {context}" for context in request.unheard_contexts)
        context_section = CONTEXT_SECTION_TEMPLATE.format(context_lines=context_lines)

    return USER_PROMPT_TEMPLATE.format(
        mode_prompt=get_mode_prompt(mode),
        theme=request.theme,
        background=request.background,
        context_section=context_section,
    )
