"""
Application configuration.

Loads settings from environment variables and .env file for the
composition root. The adapter itself never reads the environment:
main.py builds its AdapterConfiguration from these settings.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from api_problem.domain.problem import PROBLEM_CONTENT_TYPE


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        adapter_log_level: Optional level for the api_problem loggers.
        problem_stack_trace: Include tracebacks in synthesized problems.
            Must be False in production.
        problem_content_type: Content-Type written on problem responses.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "api-problem"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    adapter_log_level: Optional[str] = None
    problem_stack_trace: bool = False
    problem_content_type: str = Field(default=PROBLEM_CONTENT_TYPE, min_length=1)


settings = Settings()
