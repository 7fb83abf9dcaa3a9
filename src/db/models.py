import uuid

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Index,
    Integer,
    MetaData,
    String,
    func,
)
from sqlalchemy.orm import declarative_base

# Define naming conventions for constraints and indexes
# https://alembic.sqlalchemy.org/en/latest/naming.html
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)
Base = declarative_base(metadata=metadata)


class AssessmentRow(Base):
    __tablename__ = "assessments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), nullable=False)
    assessment_type = Column(String(255), nullable=False)
    score = Column(Integer, nullable=False)
    results_json = Column(JSON, nullable=False)
    career_suggestions = Column(JSON, nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_assessments_user_id_completed_at", "user_id", "completed_at"),
    )

    def __repr__(self):
        return f"<AssessmentRow(id={self.id}, user_id={self.user_id}, assessment_type='{self.assessment_type}', score={self.score})>"
