from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)


class Option(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    value: str


class BranchRule(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    if_value: str = Field(..., alias="ifValue")
    go_to: str = Field(..., alias="goTo")


class _QuestionBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(..., min_length=1)
    prompt: str = Field(..., min_length=1, validation_alias=AliasChoices("questionText", "prompt"))


class _ChoiceQuestion(_QuestionBase):
    options: Tuple[Option, ...] = Field(..., min_length=1)
    scoring: Dict[str, int] = Field(default_factory=dict)
    branch_rules: Tuple[BranchRule, ...] = Field(
        default=(),
        validation_alias=AliasChoices("nextQuestionLogic", "branchRules", "branch_rules"),
    )

    @field_validator("scoring", "branch_rules", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        # Authoring exports write null for "not configured"
        if value is None:
            return {} if info.field_name == "scoring" else ()
        return value

    @property
    def option_values(self) -> List[str]:
        return [option.value for option in self.options]


class SingleChoiceQuestion(_ChoiceQuestion):
    type: Literal["single_choice"] = "single_choice"


class MultiChoiceQuestion(_ChoiceQuestion):
    type: Literal["multi_choice"] = "multi_choice"
    min_selections: int = Field(1, validation_alias=AliasChoices("minSelections", "min_selections"))
    max_selections: int = Field(1, validation_alias=AliasChoices("maxSelections", "max_selections"))

    @field_validator("min_selections", "max_selections", mode="before")
    @classmethod
    def _default_selection_bound(cls, value: Any) -> Any:
        return 1 if value is None else value

    @model_validator(mode="after")
    def _check_selection_bounds(self) -> "MultiChoiceQuestion":
        if not 1 <= self.min_selections <= self.max_selections <= len(self.options):
            raise ValueError(
                f"Question '{self.id}' needs 1 <= minSelections ({self.min_selections}) "
                f"<= maxSelections ({self.max_selections}) <= options ({len(self.options)})"
            )
        return self


class TextInputQuestion(_QuestionBase):
    type: Literal["text_input"] = "text_input"
    placeholder: Optional[str] = None
    max_length: Optional[int] = Field(
        None, gt=0, validation_alias=AliasChoices("maxLength", "max_length")
    )


Question = Annotated[
    Union[SingleChoiceQuestion, MultiChoiceQuestion, TextInputQuestion],
    Field(discriminator="type"),
]


class RecommendationRule(BaseModel):
    """
    A scored tier: inclusive ``[min, max]`` range mapped to a recommendation.

    Entries without a range are answer-combination conditions and never match
    on score alone.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    score_range: Optional[Tuple[int, int]] = Field(
        None, validation_alias=AliasChoices("ifScoreRange", "scoreRange", "score_range")
    )
    recommendation: str

    def contains(self, score: int) -> bool:
        if self.score_range is None:
            return False
        low, high = self.score_range
        return low <= score <= high


class QuestionGraphDocument(BaseModel):
    """Authoring-tool output describing one assessment."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    assessment_id: Optional[str] = Field(None, validation_alias=AliasChoices("assessmentId", "assessment_id"))
    name: str = ""
    description: str = ""
    duration: str = ""
    questions: List[Question] = Field(..., min_length=1)
    results_logic: List[RecommendationRule] = Field(
        default_factory=list, validation_alias=AliasChoices("resultsLogic", "results_logic")
    )

    @field_validator("results_logic", mode="before")
    @classmethod
    def _results_logic_none(cls, value: Any) -> Any:
        return [] if value is None else value


class ScoreBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw: int
    max: int
    normalized: int = Field(..., ge=0, le=100)


class AssessmentResult(BaseModel):
    """Outcome of a completed session. Owned by the caller once emitted."""
    model_config = ConfigDict(frozen=True)

    assessment_type: str
    normalized_score: int = Field(..., ge=0, le=100)
    raw_score: int
    max_score: int
    raw_answers: Dict[str, Union[str, List[str]]]
    recommendations: List[str]


# Custom Error Classes
class LoadError(ValueError):
    """Raised when a question-graph document cannot be turned into a QuestionGraph."""
    pass

class GraphIntegrityError(LookupError):
    """A branch target (or other id reference) is absent from the graph."""

    def __init__(self, question_id: str, source_id: Optional[str] = None):
        self.question_id = question_id
        self.source_id = source_id
        where = f" (referenced from '{source_id}')" if source_id else ""
        super().__init__(f"Question '{question_id}' is not in the graph{where}")

class AnswerValidationError(ValueError):
    """An answer is missing or fails the question's constraints."""

    def __init__(self, question_id: str, reason: str):
        self.question_id = question_id
        self.reason = reason
        super().__init__(f"Invalid answer for question '{question_id}': {reason}")

class SessionStateError(RuntimeError):
    """Operation not permitted in the session's current state."""
    pass

class PersistenceError(Exception):
    """Writing a completed assessment to storage failed. Safe to retry."""
    pass

class AssessmentUnavailableError(LookupError):
    """No usable graph exists for the requested assessment type."""
    pass
