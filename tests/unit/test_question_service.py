"""
Unit tests for QuestionService.

Run: pytest tests/unit/test_question_service.py -v
"""

import pytest

from services.question_service import QuestionService, filter_questions
from models.question import AnsweredFilter, VisibilityFilter, QuestionCreate, QuestionResponse
from exceptions import QuestionNotFoundError, AnswerNotFoundError

from tests.factories import QuestionFactory


@pytest.fixture
def qa_data(mock_supabase):
    """Two questions, the older one answered twice."""
    older = QuestionFactory.create(id="q-old", is_answered=True)
    newer = QuestionFactory.create(
        id="q-new",
        question_text="Does it run small?",
        is_visible=False,
        customer={"name": "Rahul", "email": "rahul@example.com"},
    )
    first = QuestionFactory.create_answer("q-old", id="a-first")
    second = QuestionFactory.create_answer("q-old", id="a-second", answer_text="Cold wash only")
    mock_supabase.set_table_data("vendor_questions", [older, newer])
    mock_supabase.set_table_data("vendor_answers", [second, first])
    return mock_supabase


class TestQuestionServiceGetAll:
    """Tests for QuestionService.get_all()"""

    def test_newest_first_with_answers_oldest_first(self, mock_db, qa_data):
        questions = QuestionService().get_all()

        assert [q.id for q in questions] == ["q-new", "q-old"]
        assert [a.id for a in questions[1].answers] == ["a-first", "a-second"]
        assert questions[0].answers == []

    def test_answered_filter(self, mock_db, qa_data):
        service = QuestionService()

        assert [q.id for q in service.get_all(answered=AnsweredFilter.ANSWERED)] == ["q-old"]
        assert [q.id for q in service.get_all(answered=AnsweredFilter.UNANSWERED)] == ["q-new"]

    def test_visibility_filter(self, mock_db, qa_data):
        questions = QuestionService().get_all(visibility=VisibilityFilter.HIDDEN)

        assert [q.id for q in questions] == ["q-new"]

    @pytest.mark.parametrize("term,expected", [
        ("RUN SMALL", ["q-new"]),
        ("rahul", ["q-new"]),
        ("cold wash", ["q-old"]),
        ("linen", ["q-new", "q-old"]),
        ("acme", ["q-new", "q-old"]),
        ("silk", []),
    ])
    def test_search(self, mock_db, qa_data, term, expected):
        questions = QuestionService().get_all(search=term)

        assert [q.id for q in questions] == expected


class TestFilterQuestions:
    """Tests for filter_questions()"""

    def test_filters_combine(self):
        questions = [
            QuestionResponse(id="1", question_text="Color fast?", is_answered=True, is_visible=True),
            QuestionResponse(id="2", question_text="Color fast in sun?", is_answered=True, is_visible=False),
            QuestionResponse(id="3", question_text="Fit?", is_answered=False, is_visible=True),
        ]

        result = filter_questions(
            questions,
            search="color",
            answered=AnsweredFilter.ANSWERED,
            visibility=VisibilityFilter.VISIBLE,
        )

        assert [q.id for q in result] == ["1"]


class TestQuestionServiceCreate:
    """Tests for QuestionService.create()"""

    def test_new_question_defaults(self, mock_db, mock_supabase):
        question = QuestionService().create(
            QuestionCreate(product_id="prod-1", customer_id="cust-1", question_text="Is it lined?")
        )

        assert question.is_answered is False
        assert question.is_approved is True
        assert question.is_visible is True
        assert mock_supabase.rows("vendor_questions")[0]["question_text"] == "Is it lined?"


class TestQuestionServiceModeration:
    """Tests for toggles and deletes"""

    def test_toggle_question_visibility(self, mock_db, qa_data):
        service = QuestionService()

        assert service.toggle_question_visibility("q-new") is True
        assert service.toggle_question_visibility("q-new") is False

    def test_toggle_question_approval(self, mock_db, qa_data):
        assert QuestionService().toggle_question_approval("q-old") is False

        stored = {row["id"]: row for row in qa_data.rows("vendor_questions")}
        assert stored["q-old"]["is_approved"] is False

    def test_toggle_answer_visibility(self, mock_db, qa_data):
        assert QuestionService().toggle_answer_visibility("a-first") is False

    def test_toggle_missing(self, mock_db, qa_data):
        service = QuestionService()

        with pytest.raises(QuestionNotFoundError):
            service.toggle_question_visibility("missing")
        with pytest.raises(AnswerNotFoundError):
            service.toggle_answer_visibility("missing")

        assert qa_data.calls_for("vendor_questions", "update") == []

    def test_delete_question(self, mock_db, qa_data):
        assert QuestionService().delete_question("q-old") is True
        assert [row["id"] for row in qa_data.rows("vendor_questions")] == ["q-new"]

    def test_delete_missing(self, mock_db, qa_data):
        with pytest.raises(QuestionNotFoundError):
            QuestionService().delete_question("missing")
        with pytest.raises(AnswerNotFoundError):
            QuestionService().delete_answer("missing")
