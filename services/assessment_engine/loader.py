import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import ValidationError

from .graph import QuestionGraph
from .models import LoadError, QuestionGraphDocument

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yml", ".yaml"}


def load_question_graph_data(data: Dict[str, Any]) -> QuestionGraph:
    """
    Validates a raw question-graph document and builds the QuestionGraph.

    Schema problems (missing questions, a question without id/type/prompt,
    choice questions without options, bad selection bounds) and duplicate
    ids are reported as LoadError. Unknown branch targets are not.
    """
    if not isinstance(data, dict):
        raise LoadError(f"Assessment document must be a mapping, got {type(data).__name__}")

    try:
        document = QuestionGraphDocument.model_validate(data)
    except ValidationError as e:
        raise LoadError(f"Invalid assessment document: {e}") from e

    graph = QuestionGraph.from_document(document)
    logger.info(
        f"Loaded assessment '{graph.name or graph.assessment_id or 'unnamed'}' "
        f"with {len(graph)} questions and {graph.branch_rule_count} branch rules."
    )
    return graph


def load_question_graph_from_file(file_path: Union[str, Path]) -> QuestionGraph:
    """
    Loads a question graph from a JSON or YAML file (chosen by suffix).
    """
    path = Path(file_path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except FileNotFoundError:
        raise LoadError(f"File not found: {path}")
    except yaml.YAMLError as e:
        raise LoadError(f"Error parsing YAML file {path}: {e}")
    except json.JSONDecodeError as e:
        raise LoadError(f"Invalid JSON file {path}: {e}")
    except UnicodeDecodeError as e:
        raise LoadError(f"Assessment file {path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise LoadError(f"Could not read assessment file {path}: {e}") from e

    if data is None:
        raise LoadError(f"Assessment file is empty or invalid: {path}")

    return load_question_graph_data(data)
