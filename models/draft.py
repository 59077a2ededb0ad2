"""
Pydantic models for draft question generation.
Request, response, and generated structure types for /api/generate.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Mode(str, Enum):
    """Prompt-selection strategy, derived from the request shape"""

    DEFAULT = "default"
    LOWERED_ENTRY = "lowered_entry"


class GenerateRequest(BaseModel):
    """Request model for draft generation.

    Fields are optional at the schema level; blank or missing theme/background
    is rejected by the endpoint with a 400 rather than a schema error.
    """

    theme: Optional[str] = Field(default=None, description="Topic the user wants to hear voices about")
    background: Optional[str] = Field(default=None, description="Situation and audience context")
    unheard_contexts: Optional[list[str]] = Field(
        default=None,
        description="People whose voices are not being heard; non-empty selects lowered_entry mode",
    )

    class Config:
        """Pydantic configuration"""

        json_schema_extra = {
            "example": {
                "theme": "地域の図書館",
                "background": "利用者アンケートの回答が少ない",
                "unheard_contexts": ["子育て中の人", "平日に働いている人"],
            }
        }


class GeneratedQuestion(BaseModel):
    """A single draft question, copied verbatim from model output"""

    number: int
    title: str
    text: str
    type: str = Field(..., description='"choice" or "text"')
    options: Optional[list[str]] = Field(
        default=None, description="Answer options; present for choice questions"
    )


class GeneratedStructure(BaseModel):
    """Explanation, draft questions, and closing note"""

    explanation: str
    questions: list[GeneratedQuestion]
    note: str


class GenerateResponse(BaseModel):
    """Response model for draft generation"""

    mode: Mode
    structure: GeneratedStructure


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "ok"
