# This file makes the 'assessment_engine' directory a Python package.

from .branching import BranchResolver, resolve_next_question
from .catalog import AssessmentCatalog
from .graph import QuestionGraph
from .loader import load_question_graph_data, load_question_graph_from_file
from .models import (
    AnswerValidationError,
    AssessmentResult,
    AssessmentUnavailableError,
    GraphIntegrityError,
    LoadError,
    PersistenceError,
    RecommendationRule,
    ScoreBreakdown,
    SessionStateError,
)
from .recommendations import RecommendationMapper, recommend
from .scorer import ScoringEngine, score_answers
from .session import AssessmentSession, ResultStore, SessionState
from .validator import AnswerSheet, AnswerValidator, ValidationResult

__all__ = [
    "AnswerSheet",
    "AnswerValidationError",
    "AnswerValidator",
    "AssessmentCatalog",
    "AssessmentResult",
    "AssessmentSession",
    "AssessmentUnavailableError",
    "BranchResolver",
    "GraphIntegrityError",
    "LoadError",
    "PersistenceError",
    "QuestionGraph",
    "RecommendationMapper",
    "RecommendationRule",
    "ResultStore",
    "ScoreBreakdown",
    "ScoringEngine",
    "SessionState",
    "SessionStateError",
    "ValidationResult",
    "load_question_graph_data",
    "load_question_graph_from_file",
    "recommend",
    "resolve_next_question",
    "score_answers",
]
