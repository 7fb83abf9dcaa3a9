# services/assessment_engine/scorer.py
# Weighted scoring of an answered question graph.

import logging
import math
from collections.abc import Mapping
from typing import Any

from .graph import QuestionGraph
from .models import (
    AnswerValidationError,
    MultiChoiceQuestion,
    Question,
    ScoreBreakdown,
    SingleChoiceQuestion,
)

logger = logging.getLogger(__name__)

_SELECTION_TYPES = (set, frozenset, list, tuple)


def question_raw_score(question: Question, answer: Any) -> int:
    """
    Weight earned by one answer. Option values missing from ``scoring`` are
    worth 0 and free text is never scored.
    """
    if isinstance(question, SingleChoiceQuestion):
        if not isinstance(answer, str):
            raise AnswerValidationError(question.id, "Expected a single option value")
        return question.scoring.get(answer, 0)

    if isinstance(question, MultiChoiceQuestion):
        if not isinstance(answer, _SELECTION_TYPES):
            raise AnswerValidationError(question.id, "Expected a set of option values")
        return sum(question.scoring.get(value, 0) for value in set(answer))

    return 0


def question_max_score(question: Question) -> int:
    """
    Best attainable weight for one question.

    multi_choice takes the top-k weights with k = min(maxSelections, |options|),
    the best selection the count limits allow.
    """
    if not isinstance(question, (SingleChoiceQuestion, MultiChoiceQuestion)):
        return 0
    weights = sorted(question.scoring.values(), reverse=True)
    if not weights:
        return 0
    if isinstance(question, SingleChoiceQuestion):
        return weights[0]
    k = min(question.max_selections, len(question.options))
    return sum(weights[:k])


def normalize_score(raw: int, maximum: int) -> int:
    """raw/max as a rounded percentage, clamped to 0..100; 0 when max is not positive."""
    if maximum <= 0:
        return 0
    # Round half up rather than Python's half-to-even
    percentage = math.floor(raw / maximum * 100 + 0.5)
    return max(0, min(100, percentage))


class ScoringEngine:
    """
    Aggregates per-option weights into a normalized 0-100 score.

    ``raw`` sums the answered questions; ``max`` sums every question in the
    graph, including those a branch skipped over.
    """

    def score(self, graph: QuestionGraph, answers: Mapping) -> ScoreBreakdown:
        raw = 0
        maximum = 0
        for question in graph:
            maximum += question_max_score(question)
            if question.id in answers:
                raw += question_raw_score(question, answers[question.id])

        unknown = [question_id for question_id in answers if question_id not in graph]
        if unknown:
            logger.warning(f"Ignoring answers for questions not in the graph: {sorted(unknown)}")

        normalized = normalize_score(raw, maximum)
        logger.debug(f"Scored assessment: raw={raw} max={maximum} normalized={normalized}")
        return ScoreBreakdown(raw=raw, max=maximum, normalized=normalized)


def score_answers(graph: QuestionGraph, answers: Mapping) -> ScoreBreakdown:
    return ScoringEngine().score(graph, answers)
