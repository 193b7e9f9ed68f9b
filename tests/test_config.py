from pathlib import Path

import pytest
from pydantic import ValidationError

from quizbook.config import DEFAULT_QUIZ_DIR, Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("QUIZBOOK_QUIZ_DIR", "QUIZBOOK_SHUFFLE_CHOICES", "QUIZBOOK_SHUFFLE_SEED"):
        monkeypatch.delenv(key, raising=False)
    settings = Settings(_env_file=None)  # type: ignore[call-arg]
    assert settings.quiz_dir == DEFAULT_QUIZ_DIR
    assert settings.shuffle_choices is False
    assert settings.shuffle_seed is None


def test_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QUIZBOOK_QUIZ_DIR", "/srv/book/quizzes")
    monkeypatch.setenv("QUIZBOOK_SHUFFLE_CHOICES", "true")
    monkeypatch.setenv("QUIZBOOK_SHUFFLE_SEED", "42")
    settings = Settings(_env_file=None)  # type: ignore[call-arg]
    assert settings.quiz_dir == Path("/srv/book/quizzes")
    assert settings.shuffle_choices is True
    assert settings.shuffle_seed == 42


def test_rejects_empty_session_store(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QUIZBOOK_MAX_SESSIONS", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)  # type: ignore[call-arg]


def test_trusted_proxies(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QUIZBOOK_TRUSTED_PROXIES", '["10.0.0.1"]')
    settings = Settings(_env_file=None)  # type: ignore[call-arg]
    assert settings.trusted_proxies == ["10.0.0.1"]
