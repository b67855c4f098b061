"""
Core Pydantic schemas for the Brevit pipeline.

These schemas define the data contracts passed between the structural
analyzer, the strategy selector and the abbreviation engine.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import (
    Complexity,
    ImageOptimizationMode,
    InferredType,
    JsonOptimizationMode,
    TextOptimizationMode,
)


class DataAnalysis(BaseModel):
    """Aggregate shape metrics over one value tree."""

    depth: int = Field(default=0, ge=0, description="Maximum nesting depth reached (root = 0)")
    object_count: int = Field(default=0, ge=0)
    array_count: int = Field(default=0, ge=0)
    text_length: int = Field(
        default=0,
        ge=0,
        description="Sum of rendered scalar lengths"
    )
    has_uniform_arrays: bool = False
    has_primitive_arrays: bool = False
    has_nested_objects: bool = Field(
        default=False,
        description="True if any object is reached at depth > 0"
    )
    complexity: Complexity = Complexity.SIMPLE
    inferred_type: InferredType = InferredType.OBJECT


class StrategyCandidate(BaseModel):
    """
    A scored encoding strategy produced from a DataAnalysis.

    Override fields left as None fall back to the caller's base configuration.
    """

    model_config = ConfigDict(frozen=True, json_schema_extra={
        "example": {
            "name": "Flatten",
            "json_mode_override": "flatten",
            "score": 100,
            "reason": "Uniform object arrays detected - tabular format optimal"
        }
    })

    name: str
    json_mode_override: Optional[JsonOptimizationMode] = None
    text_mode_override: Optional[TextOptimizationMode] = None
    image_mode_override: Optional[ImageOptimizationMode] = None
    score: int = Field(..., ge=0, le=100)
    reason: str = ""
    is_custom: bool = Field(
        default=False,
        description="True when produced by a registered custom strategy"
    )

    def overrides(self) -> dict[str, object]:
        """Return the non-null configuration overrides of this candidate."""
        overrides: dict[str, object] = {}
        if self.json_mode_override is not None:
            overrides["json_mode"] = self.json_mode_override
        if self.text_mode_override is not None:
            overrides["text_mode"] = self.text_mode_override
        if self.image_mode_override is not None:
            overrides["image_mode"] = self.image_mode_override
        return overrides


class AbbreviationEntry(BaseModel):
    """A short alias substituted for a repeated top-level path segment."""

    model_config = ConfigDict(frozen=True)

    alias: str
    original_segment: str
    occurrence_count: int = Field(..., ge=1)

    def definition(self) -> str:
        """Render the definition line for this alias."""
        return f"@{self.alias}={self.original_segment}"
