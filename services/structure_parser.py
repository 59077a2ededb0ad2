"""
Parser for the generated draft structure.
Extracts the JSON object embedded in model output and validates its shape.
"""

import json
import logging
import re
from typing import Any

from models.draft import GeneratedQuestion, GeneratedStructure

logger = logging.getLogger(__name__)

# Greedy: first "{" through last "}" in the whole content
JSON_BLOCK_PATTERN = re.compile(r"\{.*\}", re.DOTALL)

REQUIRED_FIELDS = ("explanation", "questions", "note")
REQUIRED_QUESTION_FIELDS = ("number", "title", "text", "type")


class StructureParseError(ValueError):
    """Base error for model output that cannot be turned into a structure"""


class NoJsonFound(StructureParseError):
    pass


class MalformedJson(StructureParseError):
    pass


class ShapeError(StructureParseError):
    """Valid JSON that does not have the expected shape"""


class MissingRequiredField(ShapeError):
    pass


class MissingQuestionField(ShapeError):
    pass


class MissingOptions(ShapeError):
    pass


def extract_json_block(content: str) -> dict[str, Any]:
    """
    Extract and decode the JSON object embedded in free text.

    Args:
        content: Raw text content returned by the model

    Returns:
        Decoded JSON object

    Raises:
        NoJsonFound: If the content has no "{...}" substring
        MalformedJson: If the substring is not valid JSON
    """
    match = JSON_BLOCK_PATTERN.search(content)
    if not match:
        raise NoJsonFound("JSON not found in generated content")

    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as json_error:
        logger.debug(
            '{"event": "structure_json_parse_failed", "content_length": %d, "error": "%s"}',
            len(content),
            str(json_error).replace('"', '\\"'),
        )
        raise MalformedJson(f"Generated content is not valid JSON: {json_error}") from json_error


def _parse_question(raw: Any) -> GeneratedQuestion:
    if not isinstance(raw, dict):
        raise MissingQuestionField("Question is not an object")

    # Truthiness, not presence: number 0 and empty strings are rejected
    missing = [name for name in REQUIRED_QUESTION_FIELDS if not raw.get(name)]
    if missing:
        raise MissingQuestionField(f"Question is missing required fields: {', '.join(missing)}")

    options = raw.get("options")
    if raw["type"] == "choice" and (not isinstance(options, list) or not options):
        raise MissingOptions("choice question requires non-empty options")

    # model_construct keeps values verbatim (no coercion)
    return GeneratedQuestion.model_construct(
        number=raw["number"],
        title=raw["title"],
        text=raw["text"],
        type=raw["type"],
        options=options,
    )


def parse_generated_structure(content: str) -> GeneratedStructure:
    """
    Parse model output into a GeneratedStructure.

    Args:
        content: Raw text content returned by the model

    Returns:
        GeneratedStructure with question fields copied through verbatim

    Raises:
        NoJsonFound: If no JSON-shaped substring exists
        MalformedJson: If the substring is not valid JSON
        MissingRequiredField: If explanation, questions (list) or note is missing
        MissingQuestionField: If a question lacks number, title, text or type
        MissingOptions: If a choice question has no non-empty options list
    """
    parsed = extract_json_block(content)

    missing = [
        name
        for name in REQUIRED_FIELDS
        if not (isinstance(parsed.get(name), list) if name == "questions" else parsed.get(name))
    ]
    if missing:
        raise MissingRequiredField(f"Missing required fields: {', '.join(missing)}")

    questions = [_parse_question(raw) for raw in parsed["questions"]]

    return GeneratedStructure.model_construct(
        explanation=parsed["explanation"],
        questions=questions,
        note=parsed["note"],
    )
