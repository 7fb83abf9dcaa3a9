import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from services.assessment_engine.models import AssessmentResult, PersistenceError
from src.db.models import AssessmentRow
from src.schemas.assessment import AssessmentRecord

logger = logging.getLogger(__name__)


class SqlAlchemyResultStore:
    """
    Writes completed assessments to the ``assessments`` table.

    Database failures surface as PersistenceError so callers can retry.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    async def save(self, user_id: str, result: AssessmentResult) -> AssessmentRecord:
        record = AssessmentRecord.from_result(user_id, result)
        logger.info(f"Storing '{record.assessment_type}' result for user '{user_id}' (score {record.score}).")
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add(AssessmentRow(**record.model_dump()))
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not store assessment for user '{user_id}': {e}") from e
        return record

    async def list_for_user(self, user_id: str) -> List[AssessmentRecord]:
        """Stored records for a user, newest first."""
        try:
            async with self._session_factory() as session:
                rows = await session.execute(
                    select(AssessmentRow)
                    .where(AssessmentRow.user_id == user_id)
                    .order_by(AssessmentRow.completed_at.desc())
                )
                return [AssessmentRecord.model_validate(row) for row in rows.scalars().all()]
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not read assessments for user '{user_id}': {e}") from e
