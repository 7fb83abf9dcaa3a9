import logging
import re
from pathlib import Path
from typing import Dict, FrozenSet, Optional, Union

from .defaults import BUILTIN_ASSESSMENTS, assessment_title, builtin_graph
from .graph import QuestionGraph
from .loader import load_question_graph_from_file
from .models import AssessmentUnavailableError, LoadError

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIXES = (".json", ".yml", ".yaml")

# Assessment types double as file names under graphs_dir
SLUG_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]*$")


def is_valid_slug(assessment_type: str) -> bool:
    return bool(SLUG_PATTERN.match(assessment_type))


class AssessmentCatalog:
    """
    Resolves an assessment type (slug such as ``career-aptitude``) to a graph.

    Authored documents are looked up as ``<graphs_dir>/<slug>.json|.yml|.yaml``.
    When none loads, the built-in graph is used if ``builtin_fallback_enabled``;
    otherwise the assessment is unavailable.

    Only authored graphs and the named built-in graphs are cached. Unknown
    types get a freshly built generic sample each time.
    """

    def __init__(self, graphs_dir: Optional[Union[str, Path]] = None, builtin_fallback_enabled: bool = True):
        self.graphs_dir = Path(graphs_dir) if graphs_dir else None
        self.builtin_fallback_enabled = builtin_fallback_enabled
        self._cache: Dict[str, QuestionGraph] = {}

    @property
    def cached_types(self) -> FrozenSet[str]:
        return frozenset(self._cache)

    def find_document(self, assessment_type: str) -> Optional[Path]:
        if self.graphs_dir is None:
            return None
        if not is_valid_slug(assessment_type):
            logger.warning(f"Rejected assessment type {assessment_type!r}: not a valid slug.")
            return None
        for suffix in DOCUMENT_SUFFIXES:
            candidate = self.graphs_dir / f"{assessment_type}{suffix}"
            if candidate.is_file():
                return candidate
        return None

    def load(self, assessment_type: str) -> QuestionGraph:
        if assessment_type in self._cache:
            return self._cache[assessment_type]

        graph = self._load_authored(assessment_type)
        if graph is None:
            if not self.builtin_fallback_enabled:
                raise AssessmentUnavailableError(f"Assessment '{assessment_type}' is unavailable")
            logger.warning(f"Using built-in graph for assessment '{assessment_type}'.")
            graph = builtin_graph(assessment_type)
            if assessment_type not in BUILTIN_ASSESSMENTS:
                return graph

        self._cache[assessment_type] = graph
        return graph

    def title(self, assessment_type: str) -> str:
        return self.load(assessment_type).name or assessment_title(assessment_type)

    def _load_authored(self, assessment_type: str) -> Optional[QuestionGraph]:
        path = self.find_document(assessment_type)
        if path is None:
            logger.info(f"No authored graph for assessment '{assessment_type}'.")
            return None
        try:
            return load_question_graph_from_file(path)
        except LoadError as e:
            logger.error(f"Could not load assessment '{assessment_type}' from {path}: {e}")
            return None
