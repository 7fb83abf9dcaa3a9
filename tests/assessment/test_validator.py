import pytest

from services.assessment_engine.models import AnswerValidationError, TextInputQuestion
from services.assessment_engine.validator import AnswerSheet, AnswerValidator

validator = AnswerValidator()

# --- single_choice ---

@pytest.mark.parametrize("answer, expected", [
    ("A", True),
    ("B", True),
    ("C", False),
    ("", False),
    (None, False),
    (["A"], False),
    ({"A"}, False),
])
def test_single_choice_accepts_exactly_one_option(branching_graph, answer, expected):
    result = validator.validate(branching_graph.get("q1"), answer)
    assert result.valid is expected
    assert bool(result) is expected
    if not expected:
        assert result.reason

# --- multi_choice (min 1, max 2, options x/y/z) ---

@pytest.mark.parametrize("answer, expected", [
    ({"x"}, True),
    (["x", "z"], True),
    (frozenset({"y", "z"}), True),
    (("z",), True),
    (set(), False),
    ({"x", "y", "z"}, False),
    ({"x", "nope"}, False),
    (["x", "x"], False),
    ("x", False),
    (None, False),
])
def test_multi_choice_enforces_options_and_bounds(branching_graph, answer, expected):
    assert validator.validate(branching_graph.get("q2b"), answer).valid is expected

def test_multi_choice_reason_mentions_bounds(branching_graph):
    result = validator.validate(branching_graph.get("q2b"), {"x", "y", "z"})
    assert result.reason == "Select 1 to 2 options"

# --- text_input ---

@pytest.mark.parametrize("answer, expected", [
    ("A quiet office", True),
    ("  padded  ", True),
    ("", False),
    ("   \n\t", False),
    (42, False),
    (None, False),
])
def test_text_input_requires_non_blank_string(branching_graph, answer, expected):
    assert validator.validate(branching_graph.get("q2a"), answer).valid is expected

def test_text_input_global_max_length():
    question = TextInputQuestion(id="t", prompt="Say something")
    capped = AnswerValidator(text_max_length=5)
    assert capped.validate(question, "hello").valid
    result = capped.validate(question, "hello!")
    assert not result.valid
    assert "at most 5" in result.reason

def test_text_input_question_max_length_tightens_global_limit():
    question = TextInputQuestion(id="t", prompt="Say something", max_length=3)
    assert not AnswerValidator(text_max_length=10).validate(question, "four").valid
    assert AnswerValidator().validate(question, "abc").valid

def test_zero_max_length_disables_limit():
    question = TextInputQuestion(id="t", prompt="Say something")
    assert AnswerValidator(text_max_length=0).validate(question, "x" * 10_000).valid

# --- AnswerSheet ---

def test_answer_sheet_stores_only_valid_answers(branching_graph):
    sheet = AnswerSheet(branching_graph)
    assert sheet.record("q1", "A").valid
    assert not sheet.record("q1", "Z").valid
    assert sheet["q1"] == "A"
    assert len(sheet) == 1

def test_answer_sheet_rejects_unknown_question(branching_graph):
    sheet = AnswerSheet(branching_graph)
    result = sheet.record("q404", "A")
    assert not result.valid
    assert "q404" in result.reason
    assert "q404" not in sheet

def test_answer_sheet_normalizes_multi_choice_to_frozenset(branching_graph):
    sheet = AnswerSheet(branching_graph)
    sheet.record("q2b", ["z", "x"])
    assert sheet["q2b"] == frozenset({"x", "z"})

def test_answer_sheet_raw_lists_selections_in_option_order(branching_graph):
    sheet = AnswerSheet(branching_graph)
    sheet.record("q1", "B")
    sheet.record("q2b", ["z", "x"])
    sheet.record("q2a", "Outdoors")
    assert sheet.to_raw() == {"q1": "B", "q2b": ["x", "z"], "q2a": "Outdoors"}

def test_answer_sheet_require_missing_answer(branching_graph):
    sheet = AnswerSheet(branching_graph)
    with pytest.raises(AnswerValidationError, match="No answer recorded"):
        sheet.require("q1")
