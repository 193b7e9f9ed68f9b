from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_QUIZ_DIR = Path("quizzes")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="QUIZBOOK_")

    quiz_dir: Path = DEFAULT_QUIZ_DIR
    # presentation order of choices; deterministic unless enabled
    shuffle_choices: bool = False
    shuffle_seed: int | None = None
    max_sessions: int = Field(1024, ge=1)
    grade_rate_limit: str = "60/minute"
    # X-Forwarded-For is only honored for requests coming from these hosts
    trusted_proxies: list[str] = Field(default_factory=list)


settings = Settings()
