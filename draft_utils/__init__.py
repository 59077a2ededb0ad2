"""
Draft utilities module for organizing draft generation prompts and helpers.
"""

from draft_utils.draft_helpers import (
    build_user_prompt,
    get_system_prompt,
    select_mode,
)

__all__ = [
    "build_user_prompt",
    "get_system_prompt",
    "select_mode",
]
