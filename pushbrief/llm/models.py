"""Pydantic models for structured LLM responses."""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class FileAnalysis(BaseModel):
    """Analysis of the changes to one file."""

    summary: str = ""
    quality_score: Optional[int] = None
    quality_reasons: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)

    @field_validator("quality_score")
    @classmethod
    def score_in_range(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and not 1 <= v <= 10:
            raise ValueError("quality_score must be between 1 and 10")
        return v


class ChangeAnalysis(BaseModel):
    """Analysis of a set of changed files."""

    overall_summary: str = ""
    files: dict[str, FileAnalysis] = Field(default_factory=dict)


@dataclass
class LLMResult:
    """Raw text returned by a provider, including token usage."""

    text: str
    model: str
    input_tokens: int
    output_tokens: int
