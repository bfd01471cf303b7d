"""
Vendor Q&A moderation.

Questions and answers are listed together for the admin panel and can be
hidden, unapproved or deleted.
"""

from typing import Optional
import structlog

from config import get_admin_client
from models.question import (
    AnsweredFilter,
    VisibilityFilter,
    QuestionCreate,
    QuestionResponse,
    AnswerResponse,
)
from exceptions import (
    QuestionNotFoundError,
    AnswerNotFoundError,
    DatabaseError,
)

logger = structlog.get_logger(__name__)

QUESTION_SELECT = (
    "*, product:products(id, name), "
    "vendor:vendor_id(name, email), customer:customer_id(name, email)"
)
ANSWER_SELECT = "*, vendor:vendor_id(name, email)"


def _name_of(related: Optional[dict]) -> str:
    return ((related or {}).get("name") or "").lower()


def matches_search(question: QuestionResponse, term: str) -> bool:
    """Case-insensitive match on question, product, people and answers."""
    term = term.lower()
    haystack = [
        question.question_text.lower(),
        _name_of(question.product),
        _name_of(question.customer),
        _name_of(question.vendor),
    ]
    haystack.extend(answer.answer_text.lower() for answer in question.answers)
    return any(term in text for text in haystack)


def filter_questions(
    questions: list[QuestionResponse],
    search: Optional[str] = None,
    answered: AnsweredFilter = AnsweredFilter.ALL,
    visibility: VisibilityFilter = VisibilityFilter.ALL
) -> list[QuestionResponse]:
    """Apply the moderation panel filters, keeping order."""
    result = []
    for question in questions:
        if search and not matches_search(question, search):
            continue
        if answered == AnsweredFilter.ANSWERED and not question.is_answered:
            continue
        if answered == AnsweredFilter.UNANSWERED and question.is_answered:
            continue
        if visibility == VisibilityFilter.VISIBLE and not question.is_visible:
            continue
        if visibility == VisibilityFilter.HIDDEN and question.is_visible:
            continue
        result.append(question)
    return result


class QuestionService:
    """
    Q&A business logic.

    Handles question creation and moderation of questions and answers.
    """

    def __init__(self):
        self.db = get_admin_client()
        self.table = "vendor_questions"
        self.answers_table = "vendor_answers"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(
        self,
        search: Optional[str] = None,
        answered: AnsweredFilter = AnsweredFilter.ALL,
        visibility: VisibilityFilter = VisibilityFilter.ALL
    ) -> list[QuestionResponse]:
        """
        Questions newest first, each with its answers oldest first.

        Args:
            search: Case-insensitive text to look for
            answered: Answered-status filter
            visibility: Visibility filter

        Returns:
            List of QuestionResponse
        """
        logger.info(
            "getting_questions",
            search=search,
            answered=answered.value,
            visibility=visibility.value
        )

        try:
            questions_result = (
                self.db.table(self.table)
                .select(QUESTION_SELECT)
                .order("created_at", desc=True)
                .execute()
            )
            answers_result = (
                self.db.table(self.answers_table)
                .select(ANSWER_SELECT)
                .order("created_at")
                .execute()
            )
        except Exception as e:
            logger.error("get_questions_failed", error=str(e))
            raise DatabaseError("select", str(e))

        answers_by_question: dict[str, list[AnswerResponse]] = {}
        for row in answers_result.data:
            answers_by_question.setdefault(row["question_id"], []).append(AnswerResponse(**row))

        questions = [
            QuestionResponse(**row, answers=answers_by_question.get(row["id"], []))
            for row in questions_result.data
        ]
        filtered = filter_questions(questions, search, answered, visibility)

        logger.info("questions_retrieved", total=len(questions), count=len(filtered))
        return filtered

    def _get_flags(self, table: str, row_id: str) -> Optional[dict]:
        try:
            result = (
                self.db.table(table)
                .select("id, is_visible, is_approved")
                .eq("id", row_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_moderation_flags_failed", table=table, id=row_id, error=str(e))
            raise DatabaseError("select", str(e))
        return result.data[0] if result.data else None

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, data: QuestionCreate) -> QuestionResponse:
        """Create a question; new questions are approved and visible."""
        logger.info(
            "creating_question",
            product_id=data.product_id,
            customer_id=data.customer_id
        )

        try:
            result = (
                self.db.table(self.table)
                .insert({
                    "product_id": data.product_id,
                    "vendor_id": data.vendor_id,
                    "customer_id": data.customer_id,
                    "question_text": data.question_text,
                    "is_answered": False,
                    "is_approved": True,
                    "is_visible": True,
                })
                .execute()
            )
            question = QuestionResponse(**result.data[0])

            logger.info("question_created", question_id=question.id)
            return question

        except Exception as e:
            logger.error("create_question_failed", error=str(e))
            raise DatabaseError("insert", "Failed to create question")

    def _toggle(self, table: str, row_id: str, flag: str) -> Optional[bool]:
        """Flip a boolean column and return its new value, None if missing."""
        current = self._get_flags(table, row_id)
        if current is None:
            return None

        new_value = not current.get(flag, True)
        try:
            self.db.table(table).update({flag: new_value}).eq("id", row_id).execute()
        except Exception as e:
            logger.error("toggle_flag_failed", table=table, id=row_id, flag=flag, error=str(e))
            raise DatabaseError("update", str(e))

        logger.info("moderation_flag_toggled", table=table, id=row_id, flag=flag, value=new_value)
        return new_value

    def toggle_question_visibility(self, question_id: str) -> bool:
        """
        Show or hide a question.

        Returns:
            New is_visible value

        Raises:
            QuestionNotFoundError: If question doesn't exist
        """
        value = self._toggle(self.table, question_id, "is_visible")
        if value is None:
            raise QuestionNotFoundError(question_id)
        return value

    def toggle_question_approval(self, question_id: str) -> bool:
        """
        Approve or unapprove a question.

        Returns:
            New is_approved value

        Raises:
            QuestionNotFoundError: If question doesn't exist
        """
        value = self._toggle(self.table, question_id, "is_approved")
        if value is None:
            raise QuestionNotFoundError(question_id)
        return value

    def toggle_answer_visibility(self, answer_id: str) -> bool:
        """
        Show or hide an answer.

        Raises:
            AnswerNotFoundError: If answer doesn't exist
        """
        value = self._toggle(self.answers_table, answer_id, "is_visible")
        if value is None:
            raise AnswerNotFoundError(answer_id)
        return value

    def delete_question(self, question_id: str) -> bool:
        """
        Delete a question; its answers go with it (FK cascade).

        Raises:
            QuestionNotFoundError: If question doesn't exist
        """
        logger.info("deleting_question", question_id=question_id)

        try:
            result = self.db.table(self.table).delete().eq("id", question_id).execute()
        except Exception as e:
            logger.error("delete_question_failed", question_id=question_id, error=str(e))
            raise DatabaseError("delete", str(e))

        if not result.data:
            raise QuestionNotFoundError(question_id)
        return True

    def delete_answer(self, answer_id: str) -> bool:
        """
        Delete an answer.

        Raises:
            AnswerNotFoundError: If answer doesn't exist
        """
        logger.info("deleting_answer", answer_id=answer_id)

        try:
            result = self.db.table(self.answers_table).delete().eq("id", answer_id).execute()
        except Exception as e:
            logger.error("delete_answer_failed", answer_id=answer_id, error=str(e))
            raise DatabaseError("delete", str(e))

        if not result.data:
            raise AnswerNotFoundError(answer_id)
        return True


# Singleton instance for convenience
_question_service: Optional[QuestionService] = None

def get_question_service() -> QuestionService:
    """Get or create QuestionService instance."""
    global _question_service
    if _question_service is None:
        _question_service = QuestionService()
    return _question_service
