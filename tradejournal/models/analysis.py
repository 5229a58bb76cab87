"""AnalysisResult data model."""

from pydantic import BaseModel, Field


class AnalysisResult(BaseModel):
    """Coaching feedback generated from closed trades."""

    summary: str = Field(..., description="Concise paragraph on performance and style")
    strengths: list[str] = Field(default_factory=list, description="What the trader does well")
    weaknesses: list[str] = Field(default_factory=list, description="Recurring problems")
    actionable_tips: list[str] = Field(default_factory=list, description="Specific next steps")
    discipline_score: int = Field(..., ge=0, le=100, description="Discipline/performance score")

    model_config = {"frozen": True}
