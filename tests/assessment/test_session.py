import pytest

from services.assessment_engine.loader import load_question_graph_data
from services.assessment_engine.models import (
    AnswerValidationError,
    PersistenceError,
    SessionStateError,
)
from services.assessment_engine.session import AssessmentSession, SessionState


@pytest.fixture
def session(branching_graph):
    s = AssessmentSession(branching_graph, "career-aptitude")
    s.start()
    return s


# --- Lifecycle and traversal ---

def test_new_session_is_not_started(branching_graph):
    s = AssessmentSession(branching_graph, "career-aptitude")
    assert s.state is SessionState.NOT_STARTED
    assert s.current_id is None
    with pytest.raises(SessionStateError):
        s.next()

def test_start_points_at_first_question(session):
    assert session.state is SessionState.IN_PROGRESS
    assert session.current_id == "q1"
    assert session.history == ()
    assert len(session.answers) == 0

def test_start_twice_is_refused(session):
    with pytest.raises(SessionStateError):
        session.start()

def test_branch_rule_decides_next_question(session):
    assert session.answer("A").valid
    assert session.next().id == "q2a"
    assert session.current_id == "q2a"
    assert session.history == ("q1",)

def test_unmatched_answer_follows_default_order(session):
    session.answer("B")
    assert session.next().id == "q2b"

def test_invalid_answer_leaves_state_untouched(session):
    session.answer("A")
    result = session.answer("nope")
    assert not result.valid
    assert result.reason
    assert session.answers["q1"] == "A"
    assert session.current_id == "q1"

def test_next_without_answer_is_refused(session):
    with pytest.raises(AnswerValidationError):
        session.next()
    assert session.current_id == "q1"
    assert session.history == ()

def test_previous_restores_question_and_keeps_answers(session):
    session.answer("B")
    session.next()
    session.answer(["x", "y"])

    assert session.previous().id == "q1"
    assert session.history == ()
    assert session.answers["q1"] == "B"
    assert session.answers["q2b"] == frozenset({"x", "y"})

    # forward again: the earlier selection is still there
    session.next()
    assert session.current_id == "q2b"
    assert session.answers["q2b"] == frozenset({"x", "y"})

def test_previous_at_first_question_is_refused(session):
    assert not session.can_go_back
    with pytest.raises(SessionStateError):
        session.previous()

def test_terminal_question_refuses_next(session):
    session.answer("A")
    session.next()
    session.answer("I like quiet rooms")
    assert session.is_terminal
    assert session.peek_next() is None
    with pytest.raises(SessionStateError, match="submit"):
        session.next()
    assert session.current_id == "q2a"

def test_progress_reports_position_and_hint(session):
    progress = session.progress
    assert (progress.position, progress.total, progress.percent) == (1, 3, 33)
    assert progress.hint == "Choose the option that best describes you"

    session.answer("B")
    session.next()
    progress = session.progress
    assert (progress.position, progress.percent) == (2, 67)
    assert progress.hint == "Select 1 to 2 options"

    session.answer({"x"})
    session.next()
    assert session.progress.hint == "Please provide your answer"


# --- Submission ---

@pytest.mark.asyncio
async def test_submit_scores_and_stores_result(session, recording_store):
    session.answer("A")
    session.next()
    session.answer("Outdoors, with a team")

    result = await session.submit(recording_store, "user-1")

    assert session.state is SessionState.COMPLETED
    assert result.assessment_type == "career-aptitude"
    assert (result.raw_score, result.max_score, result.normalized_score) == (5, 10, 50)
    assert result.raw_answers == {"q1": "A", "q2a": "Outdoors, with a team"}
    # score 50 is outside both tiers, so the fallback leads
    assert result.recommendations == [
        "General Career Guidance Recommended",
        "Entry-level positions in Software Engineer",
        "Training programs recommended",
    ]
    assert recording_store.saved == [("user-1", result)]
    assert session.result == result

@pytest.mark.asyncio
async def test_submit_before_terminal_is_refused(session, recording_store):
    session.answer("B")
    with pytest.raises(SessionStateError):
        await session.submit(recording_store, "user-1")
    assert session.state is SessionState.IN_PROGRESS
    assert recording_store.attempts == 0

@pytest.mark.asyncio
async def test_submit_without_valid_answer_is_refused(session, recording_store):
    session.answer("A")
    session.next()
    with pytest.raises(AnswerValidationError):
        await session.submit(recording_store, "user-1")
    assert session.state is SessionState.IN_PROGRESS

@pytest.mark.asyncio
async def test_failed_write_keeps_result_for_retry(session, failing_store):
    store = failing_store(1, PersistenceError("database down"))
    session.answer("A")
    session.next()
    session.answer("Remote work")

    with pytest.raises(PersistenceError):
        await session.submit(store, "user-1")
    assert session.state is SessionState.SUBMIT_PENDING
    pending = session.result

    # navigation is frozen while the write is pending
    with pytest.raises(SessionStateError):
        session.previous()

    result = await session.submit(store, "user-1")
    assert result is pending
    assert session.state is SessionState.COMPLETED
    assert store.attempts == 2
    assert store.saved == [("user-1", pending)]

@pytest.mark.asyncio
async def test_completed_session_is_immutable(session, recording_store):
    session.answer("A")
    session.next()
    session.answer("Done")
    await session.submit(recording_store, "user-1")

    with pytest.raises(SessionStateError):
        session.answer("More")
    with pytest.raises(SessionStateError):
        session.start()
    with pytest.raises(SessionStateError):
        await session.submit(recording_store, "user-1")

@pytest.mark.asyncio
async def test_retake_starts_a_fresh_session(session, recording_store):
    session.answer("A")
    session.next()
    session.answer("Done")
    await session.submit(recording_store, "user-1")

    fresh = session.retake()
    assert fresh is not session
    assert fresh.state is SessionState.IN_PROGRESS
    assert fresh.current_id == "q1"
    assert len(fresh.answers) == 0

@pytest.mark.asyncio
async def test_same_answers_give_same_score(branching_graph, recording_store):
    scores = []
    for _ in range(2):
        s = AssessmentSession(branching_graph, "interest-profiler")
        s.start()
        s.answer("B")
        s.next()
        s.answer(["y", "z"])
        s.next()
        s.answer("Labs")
        scores.append((await s.submit(recording_store, "user-2")).normalized_score)
    assert scores == [60, 60]

@pytest.mark.asyncio
async def test_score_tier_from_results_logic(recording_store):
    graph = load_question_graph_data({
        "questions": [{
            "id": "only",
            "type": "single_choice",
            "questionText": "How ready are you?",
            "options": [{"text": "Low", "value": "low"}, {"text": "High", "value": "high"}],
            "scoring": {"low": 1, "high": 10},
        }],
        "resultsLogic": [
            {"ifScoreRange": [0, 50], "recommendation": "Explore"},
            {"ifScoreRange": [51, 100], "recommendation": "Specialize"},
        ],
    })
    s = AssessmentSession(graph, "career-aptitude")
    s.start()
    s.answer("high")
    assert s.is_terminal
    result = await s.submit(recording_store, "user-3")
    assert result.normalized_score == 100
    assert result.recommendations[0] == "Specialize"
    assert result.recommendations[1] == "Leadership roles in Software Engineer"
