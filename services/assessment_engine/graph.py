import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .models import (
    GraphIntegrityError,
    LoadError,
    MultiChoiceQuestion,
    Question,
    QuestionGraphDocument,
    RecommendationRule,
    SingleChoiceQuestion,
)

logger = logging.getLogger(__name__)


class QuestionGraph:
    """
    Loaded assessment definition.

    Questions keep their authored order, which is the default traversal order.
    An id -> question index is built once here; branch targets that do not
    resolve are recorded in ``dangling_targets`` instead of failing the load,
    and are handled at traversal time.
    """

    def __init__(
        self,
        questions: Sequence[Question],
        *,
        name: str = "",
        description: str = "",
        duration: str = "",
        assessment_id: Optional[str] = None,
        results_logic: Sequence[RecommendationRule] = (),
    ):
        if not questions:
            raise LoadError("Assessment must contain at least one question")

        self._questions: Tuple[Question, ...] = tuple(questions)
        self._index: Dict[str, Question] = {}
        self._position: Dict[str, int] = {}
        for position, question in enumerate(self._questions):
            if question.id in self._index:
                raise LoadError(f"Duplicate question ID found: {question.id}")
            self._index[question.id] = question
            self._position[question.id] = position

        self.name = name
        self.description = description
        self.duration = duration
        self.assessment_id = assessment_id
        self.results_logic: Tuple[RecommendationRule, ...] = tuple(results_logic)

        self.dangling_targets: List[Tuple[str, str]] = [
            (question.id, rule.go_to)
            for question in self._questions
            for rule in self.branch_rules_of(question)
            if rule.go_to not in self._index
        ]
        for source_id, target in self.dangling_targets:
            logger.warning(
                f"Branch rule on '{source_id}' points to unknown question '{target}'; "
                "default order will be used when it matches."
            )

    @classmethod
    def from_document(cls, document: QuestionGraphDocument) -> "QuestionGraph":
        return cls(
            document.questions,
            name=document.name,
            description=document.description,
            duration=document.duration,
            assessment_id=document.assessment_id,
            results_logic=document.results_logic,
        )

    @staticmethod
    def branch_rules_of(question: Question):
        if isinstance(question, (SingleChoiceQuestion, MultiChoiceQuestion)):
            return question.branch_rules
        return ()

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(self._questions)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._index

    @property
    def questions(self) -> Tuple[Question, ...]:
        return self._questions

    @property
    def first(self) -> Question:
        return self._questions[0]

    @property
    def branch_rule_count(self) -> int:
        return sum(len(self.branch_rules_of(q)) for q in self._questions)

    def get(self, question_id: str) -> Optional[Question]:
        return self._index.get(question_id)

    def require(self, question_id: str, source_id: Optional[str] = None) -> Question:
        """Looks up a question, raising GraphIntegrityError if it is absent."""
        try:
            return self._index[question_id]
        except KeyError:
            raise GraphIntegrityError(question_id, source_id) from None

    def position_of(self, question_id: str) -> int:
        self.require(question_id)
        return self._position[question_id]

    def following(self, question_id: str) -> Optional[Question]:
        """The question after ``question_id`` in default order, or None at the end."""
        next_position = self.position_of(question_id) + 1
        if next_position >= len(self._questions):
            return None
        return self._questions[next_position]
