import logging
from enum import Enum
from typing import Any, List, Optional, Protocol, Tuple

from pydantic import BaseModel, ConfigDict

from .branching import BranchResolver
from .graph import QuestionGraph
from .models import (
    AnswerValidationError,
    AssessmentResult,
    MultiChoiceQuestion,
    PersistenceError,
    Question,
    ScoreBreakdown,
    SessionStateError,
    TextInputQuestion,
)
from .recommendations import (
    DEFAULT_FALLBACK_RECOMMENDATION,
    RecommendationMapper,
    career_suggestions,
    combine_recommendations,
)
from .scorer import ScoringEngine
from .validator import Answer, AnswerSheet, AnswerValidator, ValidationResult

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    SUBMIT_PENDING = "submit_pending"
    COMPLETED = "completed"


class ResultStore(Protocol):
    """Persistence collaborator that receives completed results."""

    async def save(self, user_id: str, result: AssessmentResult) -> Any:
        ...


class SessionProgress(BaseModel):
    model_config = ConfigDict(frozen=True)

    position: int
    total: int
    percent: int
    hint: str


def selection_hint(question: Question) -> str:
    if isinstance(question, MultiChoiceQuestion):
        return f"Select {question.min_selections} to {question.max_selections} options"
    if isinstance(question, TextInputQuestion):
        return "Please provide your answer"
    return "Choose the option that best describes you"


class AssessmentSession:
    """
    One attempt at an assessment: a strictly serial walk over a QuestionGraph.

    Nothing is persisted before ``submit()``; an abandoned session simply
    loses its answers, and retaking an assessment always starts a fresh
    session. Answers survive back/forward navigation.

    States: NOT_STARTED -> IN_PROGRESS -> (SUBMIT_PENDING) -> COMPLETED.
    SUBMIT_PENDING holds a computed result whose write failed; ``submit()``
    retries the write with that same result.
    """

    def __init__(
        self,
        graph: QuestionGraph,
        assessment_type: str,
        *,
        validator: Optional[AnswerValidator] = None,
        resolver: Optional[BranchResolver] = None,
        scoring_engine: Optional[ScoringEngine] = None,
        fallback_recommendation: str = DEFAULT_FALLBACK_RECOMMENDATION,
    ):
        self.graph = graph
        self.assessment_type = assessment_type
        self._validator = validator or AnswerValidator()
        self._resolver = resolver or BranchResolver()
        self._scoring_engine = scoring_engine or ScoringEngine()
        self._mapper = RecommendationMapper(graph.results_logic, fallback_recommendation)

        self._state = SessionState.NOT_STARTED
        self._current_id: Optional[str] = None
        self._history: List[str] = []
        self._answers = AnswerSheet(graph, self._validator)
        self._result: Optional[AssessmentResult] = None

    # --- State inspection ---

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def current_id(self) -> Optional[str]:
        return self._current_id

    @property
    def current_question(self) -> Question:
        self._require_state(SessionState.IN_PROGRESS)
        return self.graph.require(self._current_id)

    @property
    def history(self) -> Tuple[str, ...]:
        return tuple(self._history)

    @property
    def answers(self) -> AnswerSheet:
        return self._answers

    @property
    def result(self) -> Optional[AssessmentResult]:
        return self._result

    @property
    def can_go_back(self) -> bool:
        return self._state is SessionState.IN_PROGRESS and bool(self._history)

    def peek_next(self) -> Optional[str]:
        """Where ``next()`` would go with the current answer, without moving."""
        question = self.current_question
        return self._resolver.resolve(self.graph, question, self._answers.get(question.id))

    @property
    def is_terminal(self) -> bool:
        """True when the current question ends the traversal (submit instead of next)."""
        return self.peek_next() is None

    @property
    def progress(self) -> SessionProgress:
        question = self.current_question
        position = len(self._history) + 1
        total = len(self.graph)
        return SessionProgress(
            position=position,
            total=total,
            percent=min(100, round(position / total * 100)),
            hint=selection_hint(question),
        )

    # --- Transitions ---

    def start(self) -> Question:
        if self._state is not SessionState.NOT_STARTED:
            raise SessionStateError(
                f"Session already {self._state.value}; start a new session to retake the assessment"
            )
        self._state = SessionState.IN_PROGRESS
        self._current_id = self.graph.first.id
        self._history = []
        logger.info(f"Started '{self.assessment_type}' assessment at '{self._current_id}'.")
        return self.graph.first

    def answer(self, value: Any) -> ValidationResult:
        """
        Records an answer for the current question. Invalid answers are
        reported in the returned result and leave the session untouched.
        """
        question = self.current_question
        return self._answers.record(question.id, value)

    def next(self) -> Question:
        question = self.current_question
        answer = self._require_valid_answer(question)

        next_id = self._resolver.resolve(self.graph, question, answer)
        if next_id is None:
            raise SessionStateError(
                f"'{question.id}' is the last question of this path; submit the assessment instead"
            )
        self._history.append(question.id)
        self._current_id = next_id
        return self.graph.require(next_id)

    def previous(self) -> Question:
        self._require_state(SessionState.IN_PROGRESS)
        if not self._history:
            raise SessionStateError("Already at the first question")
        self._current_id = self._history.pop()
        return self.graph.require(self._current_id)

    async def submit(self, store: ResultStore, user_id: str) -> AssessmentResult:
        """
        Scores the attempt and hands the result to ``store``.

        Allowed only at the terminal question with a valid answer. If the store
        raises, the session stays SUBMIT_PENDING and keeps its result, so the
        next call retries the write without rescoring.
        """
        if self._state is SessionState.IN_PROGRESS:
            question = self.current_question
            self._require_valid_answer(question)
            if not self.is_terminal:
                raise SessionStateError(f"'{question.id}' is not the last question of this path")
            self._result = self._build_result()
            self._state = SessionState.SUBMIT_PENDING
        elif self._state is not SessionState.SUBMIT_PENDING:
            raise SessionStateError(f"Cannot submit a session that is {self._state.value}")

        try:
            await store.save(user_id, self._result)
        except PersistenceError as e:
            logger.error(f"Failed to store '{self.assessment_type}' result for user {user_id}: {e}")
            raise

        self._state = SessionState.COMPLETED
        logger.info(
            f"Assessment '{self.assessment_type}' completed for user {user_id} "
            f"with score {self._result.normalized_score}."
        )
        return self._result

    def retake(self) -> "AssessmentSession":
        """A fresh, started session over the same graph."""
        session = AssessmentSession(
            self.graph,
            self.assessment_type,
            validator=self._validator,
            resolver=self._resolver,
            scoring_engine=self._scoring_engine,
            fallback_recommendation=self._mapper.fallback,
        )
        session.start()
        return session

    # --- Helpers ---

    def score(self) -> ScoreBreakdown:
        return self._scoring_engine.score(self.graph, self._answers)

    def _build_result(self) -> AssessmentResult:
        breakdown = self.score()
        tier = self._mapper.recommend(breakdown.normalized)
        return AssessmentResult(
            assessment_type=self.assessment_type,
            normalized_score=breakdown.normalized,
            raw_score=breakdown.raw,
            max_score=breakdown.max,
            raw_answers=self._answers.to_raw(),
            recommendations=combine_recommendations(
                [tier], career_suggestions(self.assessment_type, breakdown.normalized)
            ),
        )

    def _require_state(self, expected: SessionState) -> None:
        if self._state is not expected:
            raise SessionStateError(
                f"Operation requires a session that is {expected.value}, not {self._state.value}"
            )

    def _require_valid_answer(self, question: Question) -> Answer:
        answer = self._answers.require(question.id)
        result = self._validator.validate(question, answer)
        if not result.valid:
            raise AnswerValidationError(question.id, result.reason or "Invalid answer")
        return answer
