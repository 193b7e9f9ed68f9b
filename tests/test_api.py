from collections.abc import Generator
from uuid import UUID, uuid4

import pytest
from httpx import AsyncClient
from limits import parse as parse_limit
from limits.aio.storage import MemoryStorage
from limits.aio.strategies import SlidingWindowCounterRateLimiter

from quizbook.api import deps


class TestQuizAPIs:
    async def test_list(self, test_client: AsyncClient) -> None:
        resp = await test_client.get("/api/v1/quiz/list")
        result = resp.json()
        assert resp.status_code == 200, result
        assert result == [
            {"name": "basics", "count": 4},
            {"name": "ch06-02-match", "count": 4},
            {"name": "ch10-04-inventory", "count": 6},
        ]

    async def test_get_quiz(self, test_client: AsyncClient) -> None:
        resp = await test_client.get("/api/v1/quiz/basics")
        result = resp.json()
        assert resp.status_code == 200, result
        assert result["name"] == "basics"
        questions = {q["id"]: q for q in result["questions"]}
        assert questions["mc-single"]["choices"] == ["5", "-1", "-2", "0"]
        assert questions["mc-multi"]["multiple"] is True
        assert questions["tracing-error"]["type"] == "Tracing"
        assert questions["tracing-error"]["choices"] is None
        for q in result["questions"]:
            assert "answer" not in q and "context" not in q

    async def test_get_missing_quiz(self, test_client: AsyncClient) -> None:
        resp = await test_client.get("/api/v1/quiz/ch99")
        assert resp.status_code == 404

    async def test_grade(self, test_client: AsyncClient) -> None:
        resp = await test_client.post(
            "/api/v1/quiz/basics/grade",
            json={"questionId": "mc-single", "submission": {"answer": "5"}},
        )
        result = resp.json()
        assert resp.status_code == 200, result
        assert result == {
            "correct": True,
            "explanation": "The first arm matches because the guard holds.",
        }

        resp = await test_client.post(
            "/api/v1/quiz/basics/grade",
            json={
                "questionId": "tracing-error",
                "submission": {"doesCompile": False, "lineNumber": 12},
            },
        )
        assert resp.status_code == 200
        assert resp.json()["correct"] is False

    async def test_grade_wrong_shape(self, test_client: AsyncClient) -> None:
        resp = await test_client.post(
            "/api/v1/quiz/basics/grade",
            json={
                "questionId": "mc-single",
                "submission": {"doesCompile": False, "lineNumber": 13},
            },
        )
        assert resp.status_code == 422
        assert "mc-single" in resp.json()["detail"]

    async def test_grade_unknown_question(self, test_client: AsyncClient) -> None:
        resp = await test_client.post(
            "/api/v1/quiz/basics/grade",
            json={"questionId": "nope", "submission": {"answer": "5"}},
        )
        assert resp.status_code == 404


class TestSessionAPIs:
    async def _start(self, test_client: AsyncClient, quiz: str = "basics") -> UUID:
        resp = await test_client.post("/api/v1/session/start", json={"quiz": quiz})
        result = resp.json()
        assert resp.status_code == 200, result
        assert result["name"] == quiz
        return UUID(result["sessionId"])

    async def test_attempt(self, test_client: AsyncClient) -> None:
        session_id = await self._start(test_client)

        resp = await test_client.post(
            f"/api/v1/session/{session_id}/answer",
            json={"questionId": "mc-multi", "submission": {"answer": ["u8", "i32"]}},
        )
        assert resp.status_code == 200, resp.json()
        assert resp.json()["correct"] is True

        resp = await test_client.post(
            f"/api/v1/session/{session_id}/answer",
            json={
                "questionId": "tracing-output",
                "submission": {"doesCompile": True, "stdout": "5 "},
            },
        )
        assert resp.status_code == 200
        assert resp.json()["correct"] is False

        resp = await test_client.post(f"/api/v1/session/{session_id}/finish")
        result = resp.json()
        assert resp.status_code == 200, result
        assert result["total"] == 4
        assert result["answered"] == 2
        assert result["correct"] == 1
        assert result["records"] == [
            {"questionId": "tracing-output", "correct": False},
            {"questionId": "mc-multi", "correct": True},
        ]

        # finished sessions are gone
        resp = await test_client.post(f"/api/v1/session/{session_id}/finish")
        assert resp.status_code == 404

    async def test_start_missing_quiz(self, test_client: AsyncClient) -> None:
        resp = await test_client.post("/api/v1/session/start", json={"quiz": "ch99"})
        assert resp.status_code == 404

    async def test_unknown_session(self, test_client: AsyncClient) -> None:
        resp = await test_client.post(
            f"/api/v1/session/{uuid4()}/answer",
            json={"questionId": "mc-single", "submission": {"answer": "5"}},
        )
        assert resp.status_code == 404

    async def test_answer_errors(self, test_client: AsyncClient) -> None:
        session_id = await self._start(test_client)
        resp = await test_client.post(
            f"/api/v1/session/{session_id}/answer",
            json={"questionId": "nope", "submission": {"answer": "5"}},
        )
        assert resp.status_code == 404
        resp = await test_client.post(
            f"/api/v1/session/{session_id}/answer",
            json={"questionId": "mc-multi", "submission": {"answer": "u8"}},
        )
        assert resp.status_code == 422


@pytest.fixture
def speedlimit() -> Generator[None, None, None]:
    deps.speedlimiter = SlidingWindowCounterRateLimiter(MemoryStorage())
    old_descriptor = deps.speedlimit_descriptor
    deps.speedlimit_descriptor = parse_limit("2/minute")
    yield
    deps.speedlimiter = None
    deps.speedlimit_descriptor = old_descriptor


class TestSpeedLimit:
    async def test_grade(self, test_client: AsyncClient, speedlimit: None) -> None:
        codes = []
        for _ in range(3):
            resp = await test_client.post(
                "/api/v1/quiz/basics/grade",
                json={"questionId": "mc-single", "submission": {"answer": "5"}},
            )
            codes.append(resp.status_code)
        assert codes == [200, 200, 429]

    async def test_start(self, test_client: AsyncClient, speedlimit: None) -> None:
        codes = []
        for _ in range(3):
            resp = await test_client.post(
                "/api/v1/session/start", json={"quiz": "basics"}
            )
            codes.append(resp.status_code)
        assert codes == [200, 200, 429]

    async def test_forwarded_for_is_not_trusted(
        self, test_client: AsyncClient, speedlimit: None
    ) -> None:
        codes = []
        for i in range(3):
            resp = await test_client.post(
                "/api/v1/quiz/basics/grade",
                headers={"X-Forwarded-For": f"198.51.100.{i}"},
                json={"questionId": "mc-single", "submission": {"answer": "5"}},
            )
            codes.append(resp.status_code)
        assert codes == [200, 200, 429]
