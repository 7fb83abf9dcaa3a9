import logging
from typing import Any, Optional

from .graph import QuestionGraph
from .models import BranchRule, GraphIntegrityError, MultiChoiceQuestion, Question

logger = logging.getLogger(__name__)


def rule_matches(question: Question, rule: BranchRule, answer: Any) -> bool:
    """single_choice rules compare by equality, multi_choice rules by membership."""
    if answer is None:
        return False
    if isinstance(question, MultiChoiceQuestion):
        return isinstance(answer, (set, frozenset, list, tuple)) and rule.if_value in answer
    return rule.if_value == answer


class BranchResolver:
    """
    Picks the id of the question that follows ``question`` given its answer.

    Rules are scanned in authored order and the first match decides. A match
    whose target is missing from the graph is logged and ignored, and the
    default order applies, as it does when nothing matches.
    """

    def resolve(self, graph: QuestionGraph, question: Question, answer: Any) -> Optional[str]:
        for rule in graph.branch_rules_of(question):
            if not rule_matches(question, rule, answer):
                continue
            try:
                return graph.require(rule.go_to, source_id=question.id).id
            except GraphIntegrityError as e:
                logger.warning(f"Ignoring branch rule '{rule.if_value}' -> '{rule.go_to}': {e}")
            break

        following = graph.following(question.id)
        return following.id if following is not None else None


def resolve_next_question(graph: QuestionGraph, question: Question, answer: Any) -> Optional[str]:
    return BranchResolver().resolve(graph, question, answer)
