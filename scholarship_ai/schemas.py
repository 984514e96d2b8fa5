"""Request and response bodies for the letter endpoints.

Wire names are camelCase to match the web client; Python attributes are
snake_case and mapped through aliases.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ContextIn(BaseModel):
    # GPA and friends are free text, but a client may send them as numbers
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True, extra="ignore")

    name: Optional[str] = None
    gpa: Optional[str] = None
    major: Optional[str] = None
    goals: Optional[str] = None
    achievements: Optional[str] = None
    involvement: Optional[str] = None
    financial_need: Optional[str] = Field(default=None, alias="financialNeed")
    existing_text: Optional[str] = Field(default=None, alias="existingText")


class LetterRequestIn(BaseModel):
    """Body shared by all three actions.

    Both fields are optional here so that a missing one is reported by the
    dispatcher as a 400 with a readable message.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    section: Optional[str] = None
    context: Optional[ContextIn] = None


class GeneratedTextOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    generated_text: str = Field(alias="generatedText")


class ImprovedTextOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    improved_text: str = Field(alias="improvedText")


class FeedbackTextOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    feedback_text: str = Field(alias="feedbackText")


class ErrorOut(BaseModel):
    error: str
