# services/assessment_engine/defaults.py
# Built-in assessment documents used when no authored graph is available.

from typing import Any, Dict

from .graph import QuestionGraph
from .loader import load_question_graph_data

GENERIC_ASSESSMENT = "generic"

BUILTIN_ASSESSMENTS: Dict[str, Dict[str, Any]] = {
    "career-aptitude": {
        "name": "Career Aptitude Test",
        "questions": [
            {
                "id": "q1",
                "type": "single_choice",
                "questionText": "How comfortable are you with analyzing complex data?",
                "options": [
                    {"text": "Very comfortable", "value": "very_comfortable"},
                    {"text": "Somewhat comfortable", "value": "somewhat_comfortable"},
                    {"text": "Neutral", "value": "neutral"},
                    {"text": "Somewhat uncomfortable", "value": "somewhat_uncomfortable"},
                    {"text": "Very uncomfortable", "value": "very_uncomfortable"},
                ],
                "scoring": {
                    "very_comfortable": 5,
                    "somewhat_comfortable": 4,
                    "neutral": 3,
                    "somewhat_uncomfortable": 2,
                    "very_uncomfortable": 1,
                },
            },
            {
                "id": "q2",
                "type": "single_choice",
                "questionText": "How much do you enjoy leading teams?",
                "options": [
                    {"text": "Love it", "value": "love"},
                    {"text": "Like it", "value": "like"},
                    {"text": "Neutral", "value": "neutral"},
                    {"text": "Dislike it", "value": "dislike"},
                    {"text": "Hate it", "value": "hate"},
                ],
                "scoring": {"love": 5, "like": 4, "neutral": 3, "dislike": 2, "hate": 1},
            },
        ],
    },
    "interest-profiler": {
        "name": "Interest Profiler",
        "questions": [
            {
                "id": "q1",
                "type": "multi_choice",
                "questionText": "Which environments appeal to you most? (Select up to 2)",
                "options": [
                    {"text": "Office setting", "value": "office"},
                    {"text": "Outdoor environment", "value": "outdoor"},
                    {"text": "Laboratory", "value": "lab"},
                    {"text": "Creative studio", "value": "studio"},
                    {"text": "Healthcare facility", "value": "healthcare"},
                ],
                "scoring": {"office": 3, "outdoor": 4, "lab": 5, "studio": 2, "healthcare": 4},
                "minSelections": 1,
                "maxSelections": 2,
            },
        ],
    },
    "personality-assessment": {
        "name": "Personality Assessment",
        "questions": [
            {
                "id": "q1",
                "type": "text_input",
                "questionText": "Describe your ideal work environment in a few sentences:",
                "placeholder": "e.g., collaborative team, quiet space, fast-paced environment...",
            },
        ],
    },
    GENERIC_ASSESSMENT: {
        "questions": [
            {
                "id": "q1",
                "type": "single_choice",
                "questionText": "This is a sample question for this assessment.",
                "options": [
                    {"text": "Option A", "value": "a"},
                    {"text": "Option B", "value": "b"},
                    {"text": "Option C", "value": "c"},
                    {"text": "Option D", "value": "d"},
                ],
                "scoring": {"a": 1, "b": 2, "c": 3, "d": 4},
            },
        ],
    },
}


def assessment_title(assessment_type: str) -> str:
    return assessment_type.replace("-", " ")


def builtin_graph(assessment_type: str) -> QuestionGraph:
    """
    The built-in graph for ``assessment_type``; unknown types get the generic
    sample, titled after the type.
    """
    document = BUILTIN_ASSESSMENTS.get(assessment_type)
    if document is None:
        document = dict(BUILTIN_ASSESSMENTS[GENERIC_ASSESSMENT], name=assessment_title(assessment_type))
    return load_question_graph_data(document)
