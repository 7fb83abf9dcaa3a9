import logging
from typing import Optional

from services.assessment_engine.catalog import AssessmentCatalog
from services.assessment_engine.session import AssessmentSession
from services.assessment_engine.validator import AnswerValidator
from src.core.config import AssessmentSettings, settings as default_settings
from src.core.logging_config import setup_logging
from src.db.session import get_async_engine, get_session_factory
from src.services.storage import SqlAlchemyResultStore

logger = logging.getLogger(__name__)


class AssessmentService:
    """
    Wires the engine to configuration: resolves graphs through the catalog and
    hands out fresh sessions. Each call to ``start_session`` is a new attempt.
    """

    def __init__(self, catalog: AssessmentCatalog, config: AssessmentSettings):
        self.catalog = catalog
        self.config = config
        self._validator = AnswerValidator(text_max_length=config.text_max_length)

    def start_session(self, assessment_type: str) -> AssessmentSession:
        graph = self.catalog.load(assessment_type)
        session = AssessmentSession(
            graph,
            assessment_type,
            validator=self._validator,
            fallback_recommendation=self.config.fallback_recommendation,
        )
        session.start()
        return session


def create_assessment_service(config: Optional[AssessmentSettings] = None) -> AssessmentService:
    config = config or default_settings
    setup_logging(config.log_level)
    catalog = AssessmentCatalog(config.graphs_dir, builtin_fallback_enabled=config.builtin_fallback_enabled)
    return AssessmentService(catalog, config)


def create_result_store(config: Optional[AssessmentSettings] = None) -> SqlAlchemyResultStore:
    config = config or default_settings
    return SqlAlchemyResultStore(get_session_factory(get_async_engine(config.database_url)))
