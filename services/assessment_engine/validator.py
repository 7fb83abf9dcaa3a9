import logging
from collections.abc import Mapping
from typing import Any, Dict, FrozenSet, Iterator, List, Optional, Union

from pydantic import BaseModel, ConfigDict

from .graph import QuestionGraph
from .models import (
    AnswerValidationError,
    MultiChoiceQuestion,
    Question,
    SingleChoiceQuestion,
    TextInputQuestion,
)

logger = logging.getLogger(__name__)

# A single_choice/text_input answer is a string, a multi_choice answer a set of option values.
Answer = Union[str, FrozenSet[str]]

_SELECTION_TYPES = (set, frozenset, list, tuple)


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def rejected(cls, reason: str) -> "ValidationResult":
        return cls(valid=False, reason=reason)


class AnswerValidator:
    """
    Enforces the per-question-type answer constraints.

    ``text_max_length`` caps free-text answers for every question; a question's
    own ``max_length`` applies on top of it.
    """

    def __init__(self, text_max_length: Optional[int] = None):
        self.text_max_length = text_max_length or None

    def validate(self, question: Question, answer: Any) -> ValidationResult:
        if isinstance(question, SingleChoiceQuestion):
            return self._validate_single(question, answer)
        if isinstance(question, MultiChoiceQuestion):
            return self._validate_multi(question, answer)
        if isinstance(question, TextInputQuestion):
            return self._validate_text(question, answer)
        return ValidationResult.rejected(f"Unsupported question type for '{question.id}'")

    def _validate_single(self, question: SingleChoiceQuestion, answer: Any) -> ValidationResult:
        if not isinstance(answer, str):
            return ValidationResult.rejected("Choose exactly one option")
        if answer not in question.option_values:
            return ValidationResult.rejected(f"'{answer}' is not an option of this question")
        return ValidationResult.ok()

    def _validate_multi(self, question: MultiChoiceQuestion, answer: Any) -> ValidationResult:
        if not isinstance(answer, _SELECTION_TYPES):
            return ValidationResult.rejected("Select one or more options")
        selected = list(answer)
        if not all(isinstance(value, str) for value in selected):
            return ValidationResult.rejected("Selections must be option values")
        if len(set(selected)) != len(selected):
            return ValidationResult.rejected("An option was selected more than once")

        allowed = set(question.option_values)
        unknown = sorted(value for value in selected if value not in allowed)
        if unknown:
            return ValidationResult.rejected(f"Not options of this question: {unknown}")

        if not question.min_selections <= len(selected) <= question.max_selections:
            return ValidationResult.rejected(
                f"Select {question.min_selections} to {question.max_selections} options"
            )
        return ValidationResult.ok()

    def _validate_text(self, question: TextInputQuestion, answer: Any) -> ValidationResult:
        if not isinstance(answer, str) or not answer.strip():
            return ValidationResult.rejected("Please provide your answer")

        limits = [limit for limit in (self.text_max_length, question.max_length) if limit]
        if limits and len(answer) > min(limits):
            return ValidationResult.rejected(f"Answer must be at most {min(limits)} characters")
        return ValidationResult.ok()


def normalize_answer(question: Question, answer: Any) -> Answer:
    """Canonical stored form: frozensets for multi_choice, the string otherwise."""
    if isinstance(question, MultiChoiceQuestion):
        return frozenset(answer)
    return answer


class AnswerSheet(Mapping):
    """
    Answers keyed by question id.

    Writes go through the AnswerValidator and only valid answers for questions
    in the graph are stored, so every read returns a value of the shape its
    question expects.
    """

    def __init__(self, graph: QuestionGraph, validator: Optional[AnswerValidator] = None):
        self._graph = graph
        self._validator = validator or AnswerValidator()
        self._answers: Dict[str, Answer] = {}

    def record(self, question_id: str, answer: Any) -> ValidationResult:
        question = self._graph.get(question_id)
        if question is None:
            return ValidationResult.rejected(f"Unknown question '{question_id}'")

        result = self._validator.validate(question, answer)
        if result.valid:
            self._answers[question_id] = normalize_answer(question, answer)
        else:
            logger.debug(f"Rejected answer for '{question_id}': {result.reason}")
        return result

    def require(self, question_id: str) -> Answer:
        try:
            return self._answers[question_id]
        except KeyError:
            raise AnswerValidationError(question_id, "No answer recorded") from None

    def __getitem__(self, question_id: str) -> Answer:
        return self._answers[question_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._answers)

    def __len__(self) -> int:
        return len(self._answers)

    def to_raw(self) -> Dict[str, Union[str, List[str]]]:
        """JSON-friendly copy; multi_choice selections are listed in option order."""
        raw: Dict[str, Union[str, List[str]]] = {}
        for question_id, answer in self._answers.items():
            question = self._graph.require(question_id)
            if isinstance(question, MultiChoiceQuestion):
                raw[question_id] = [value for value in question.option_values if value in answer]
            else:
                raw[question_id] = answer
        return raw
