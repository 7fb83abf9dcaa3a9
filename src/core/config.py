from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
import os

# Load .env file if it exists, for local development
# In production, environment variables should be set directly.
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()

class AssessmentSettings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./assessments.db"
    log_level: str = "INFO"
    graphs_dir: str = "assets/assessments"
    builtin_fallback_enabled: bool = True
    fallback_recommendation: str = "General Career Guidance Recommended"
    text_max_length: Optional[int] = 2000  # 0 or unset disables the limit

    model_config = SettingsConfigDict(env_prefix='ASSESSMENT_')

# Instantiate settings
settings = AssessmentSettings()
