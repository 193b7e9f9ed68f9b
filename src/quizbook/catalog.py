import asyncio
import logging
from pathlib import Path

from quizbook.loader import load_quiz_file
from quizbook.schemas.question import QuestionSet
from quizbook.schemas.response import QuizMetaResponse
from quizbook.utils.decos import in_thread

logger = logging.getLogger("uvicorn.error")


@in_thread
def _load_dir(quiz_dir: Path) -> dict[str, QuestionSet]:
    quizzes: dict[str, QuestionSet] = {}
    for path in sorted(quiz_dir.glob("*.toml")):
        quizzes[path.stem] = load_quiz_file(path)
    return quizzes


class QuizCatalog:
    """Every quiz of a directory, loaded once and shared read-only."""

    class CatalogException(Exception):
        "raised when incorrectly operated"

    class NotStarted(CatalogException):
        pass

    class AlreadyStarted(CatalogException):
        pass

    def __init__(self, quiz_dir: str | Path):
        self._quiz_dir = Path(quiz_dir)
        self._quizzes: dict[str, QuestionSet] = {}
        self._startup_event = asyncio.Event()

    @property
    def started(self) -> asyncio.Event:
        return self._startup_event

    @property
    def quiz_dir(self) -> Path:
        return self._quiz_dir

    async def startup(self) -> None:
        if self.started.is_set():
            raise self.AlreadyStarted()
        if not self._quiz_dir.is_dir():
            logger.warning("quiz directory %s does not exist", self._quiz_dir)
            quizzes: dict[str, QuestionSet] = {}
        else:
            quizzes = await _load_dir(self._quiz_dir)
        self._quizzes = quizzes
        logger.info("loaded %d quizzes from %s", len(quizzes), self._quiz_dir)
        self._startup_event.set()

    def _ensure_started(self) -> None:
        if not self.started.is_set():
            raise self.NotStarted()

    def get(self, name: str) -> QuestionSet | None:
        self._ensure_started()
        return self._quizzes.get(name)

    def names(self) -> list[str]:
        self._ensure_started()
        return list(self._quizzes)

    def list_quizzes(self) -> list[QuizMetaResponse]:
        self._ensure_started()
        return [
            QuizMetaResponse(name=name, count=qs.count)
            for name, qs in self._quizzes.items()
        ]
