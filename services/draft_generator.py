"""
Draft generator service.
Builds the prompt, makes a single completion call, and parses the result.
"""

import logging
from typing import Protocol

from draft_utils.draft_helpers import build_user_prompt, get_system_prompt
from models.draft import GeneratedStructure, GenerateRequest, Mode
from services.completion_client import Completion, UpstreamError
from services.structure_parser import parse_generated_structure

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    async def complete(self, system_prompt: str, user_prompt: str) -> Completion: ...


async def generate_draft(
    client: CompletionClient,
    request: GenerateRequest,
    mode: Mode,
) -> tuple[GeneratedStructure, Completion]:
    """
    Generate draft questions for a validated request.

    Args:
        client: Completion client to call
        request: Validated generate request
        mode: Resolved generation mode

    Returns:
        Tuple of (parsed structure, raw completion)

    Raises:
        UpstreamError: If the completion call fails
        StructureParseError: If the completion content cannot be parsed
    """
    user_prompt = build_user_prompt(request, mode)

    try:
        completion = await client.complete(get_system_prompt(), user_prompt)
    except UpstreamError:
        raise
    except Exception as e:
        raise UpstreamError(f"Completion call failed: {e}") from e

    structure = parse_generated_structure(completion.content)
    logger.debug(
        '{"event": "draft_generated", "mode": "%s", "num_questions": %d}',
        mode.value,
        len(structure.questions),
    )
    return structure, completion
