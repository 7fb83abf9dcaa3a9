import json
from pathlib import Path
from typing import Any, Dict, Union

TEMPLATE_FILE_NAME = "assessment-template.json"


def generate_template() -> Dict[str, Any]:
    """
    Sample authoring document showing every question type, branch rules and
    score tiers. Loading it yields three questions and two branch rules.
    """
    return {
        "assessmentId": "unique-assessment-id",
        "name": "Sample Assessment",
        "description": "A sample assessment to demonstrate the structure",
        "duration": "20-30 minutes",
        "questions": [
            {
                "id": "q1",
                "type": "single_choice",
                "questionText": "What energizes you the most?",
                "options": [
                    {"text": "Solving complex problems", "value": "problem_solving"},
                    {"text": "Creating something beautiful", "value": "creativity"},
                    {"text": "Helping others succeed", "value": "helping_others"},
                ],
                "scoring": {"problem_solving": 5, "creativity": 3, "helping_others": 4},
                "nextQuestionLogic": [
                    {"ifValue": "problem_solving", "goTo": "q2_technical"},
                    {"ifValue": "creativity", "goTo": "q2_creative"},
                ],
            },
            {
                "id": "q2_technical",
                "type": "multi_choice",
                "questionText": "Which technical skills do you enjoy using?",
                "options": [
                    {"text": "Coding", "value": "coding"},
                    {"text": "Data Analysis", "value": "data_analysis"},
                    {"text": "Network Management", "value": "network_management"},
                ],
                "scoring": {"coding": 2, "data_analysis": 3},
                "minSelections": 1,
                "maxSelections": 2,
            },
            {
                "id": "q2_creative",
                "type": "text_input",
                "questionText": "Describe your ideal creative work environment:",
                "placeholder": "e.g., collaborative studio, quiet space, fast-paced team...",
            },
        ],
        "resultsLogic": [
            {"ifScoreRange": [0, 10], "recommendation": "Introductory careers in your area of interest"},
            {"ifScoreRange": [11, 20], "recommendation": "Growth-oriented careers with leadership potential"},
        ],
    }


def write_template(path: Union[str, Path]) -> Path:
    """Writes the template as indented JSON. A directory gets ``assessment-template.json``."""
    target = Path(path)
    if target.is_dir():
        target = target / TEMPLATE_FILE_NAME
    with open(target, 'w', encoding='utf-8') as f:
        json.dump(generate_template(), f, indent=2)
    return target
