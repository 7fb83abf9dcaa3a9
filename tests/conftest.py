import copy

import pytest

from services.assessment_engine.loader import load_question_graph_data
from services.assessment_engine.templates import generate_template

# q1 branches on "A"; q2b only shows up in default order.
BRANCHING_DOCUMENT = {
    "name": "Branching Sample",
    "description": "Three questions, one branch",
    "duration": "5 minutes",
    "questions": [
        {
            "id": "q1",
            "type": "single_choice",
            "questionText": "Pick one",
            "options": [{"text": "A", "value": "A"}, {"text": "B", "value": "B"}],
            "scoring": {"A": 5, "B": 1},
            "nextQuestionLogic": [{"ifValue": "A", "goTo": "q2a"}],
        },
        {
            "id": "q2b",
            "type": "multi_choice",
            "questionText": "Pick some",
            "options": [
                {"text": "X", "value": "x"},
                {"text": "Y", "value": "y"},
                {"text": "Z", "value": "z"},
            ],
            "scoring": {"x": 1, "y": 2, "z": 3},
            "minSelections": 1,
            "maxSelections": 2,
        },
        {
            "id": "q2a",
            "type": "text_input",
            "questionText": "Tell us more",
            "placeholder": "Anything at all",
        },
    ],
    "resultsLogic": [
        {"ifScoreRange": [0, 10], "recommendation": "R1"},
        {"ifScoreRange": [11, 20], "recommendation": "R2"},
    ],
}


@pytest.fixture
def branching_document():
    """A deep copy of the branching sample document, safe to mutate."""
    return copy.deepcopy(BRANCHING_DOCUMENT)


@pytest.fixture
def branching_graph(branching_document):
    return load_question_graph_data(branching_document)


@pytest.fixture
def template_document():
    return generate_template()


@pytest.fixture
def template_graph(template_document):
    return load_question_graph_data(template_document)


class RecordingStore:
    """In-memory ResultStore that can be told to fail a number of times."""

    def __init__(self, failures: int = 0, error: Exception = None):
        self.failures = failures
        self.error = error
        self.saved = []
        self.attempts = 0

    async def save(self, user_id, result):
        self.attempts += 1
        if self.failures > 0:
            self.failures -= 1
            raise self.error
        self.saved.append((user_id, result))
        return result


@pytest.fixture
def recording_store():
    return RecordingStore()


@pytest.fixture
def failing_store():
    """Builds a RecordingStore whose first ``failures`` saves raise ``error``."""
    def _build(failures, error):
        return RecordingStore(failures=failures, error=error)
    return _build
