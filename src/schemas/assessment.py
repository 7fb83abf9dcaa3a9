from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from services.assessment_engine.models import AssessmentResult

class AssessmentRecord(BaseModel):
    """Stored form of a completed assessment, as written to the ``assessments`` table."""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    user_id: str = Field(..., alias="userId")
    assessment_type: str = Field(..., alias="assessmentType")
    score: int = Field(..., ge=0, le=100)
    results_json: Dict[str, Union[str, List[str]]] = Field(..., alias="resultsJson")
    career_suggestions: List[str] = Field(..., alias="careerSuggestions")
    completed_at: datetime = Field(..., alias="completedAt")

    @classmethod
    def from_result(
        cls,
        user_id: str,
        result: AssessmentResult,
        completed_at: Optional[datetime] = None,
    ) -> "AssessmentRecord":
        return cls(
            user_id=user_id,
            assessment_type=result.assessment_type,
            score=result.normalized_score,
            results_json=dict(result.raw_answers),
            career_suggestions=list(result.recommendations),
            completed_at=completed_at or datetime.now(timezone.utc),
        )
