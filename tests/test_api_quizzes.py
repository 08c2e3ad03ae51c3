"""퀴즈 API 통합 테스트"""
from datetime import datetime, timezone

import pytest

CRYPTO_BASICS_CORRECT = [0, 0, 1, 1, 2]


def _submit_payload(quiz_id: str, selections: list[int | None], fid: int = 42, time_spent: float = 150, **user):
    return {
        "quizId": quiz_id,
        "answers": [
            {"questionId": f"{quiz_id}-q{i + 1}", "selectedOption": selected}
            for i, selected in enumerate(selections)
        ],
        "timeSpent": time_spent,
        "user": {"fid": fid, **user},
    }


def test_root_and_health(client):
    assert client.get("/").json()["message"] == "Gelora Quiz Backend API"
    assert client.get("/health").json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_list_quizzes_hides_answers(client, sample_quiz, add_quiz):
    await add_quiz("web3-advanced", is_active=False)

    response = client.get("/api/v1/quizzes/list")

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["count"] == 1
    quiz = data["quizzes"][0]
    assert quiz["id"] == "crypto-basics"
    assert quiz["category"] == "Cryptocurrency"
    assert quiz["totalQuestions"] == 5
    assert quiz["timeLimit"] == 300
    assert len(quiz["questions"]) == 5
    assert all(q["correctAnswer"] is None for q in quiz["questions"])
    assert quiz["questions"][1]["options"][0] == "21 million"


@pytest.mark.asyncio
async def test_get_quiz_detail(client, sample_quiz, add_completed_session):
    await add_completed_session("crypto-basics", fid=1, score=80, time_spent=100, username="alice")

    response = client.get("/api/v1/quizzes/crypto-basics")

    assert response.status_code == 200
    data = response.json()
    assert data["quiz"]["title"] == "Crypto Basics"
    assert [q["id"] for q in data["quiz"]["questions"]] == [f"crypto-basics-q{i}" for i in range(1, 6)]
    assert data["meta"] == {"questions_count": 5, "leaderboard_count": 1}
    assert data["leaderboard"][0]["username"] == "alice"
    assert data["leaderboard"][0]["userId"] == "1"
    assert data["leaderboard"][0]["rank"] == 1


def test_get_quiz_not_found(client):
    response = client.get("/api/v1/quizzes/does-not-exist")

    assert response.status_code == 404
    assert response.json()["detail"] == "Quiz not found: does-not-exist"


@pytest.mark.asyncio
async def test_inactive_quiz_not_found(client, add_quiz):
    await add_quiz("nft-knowledge", is_active=False)

    assert client.get("/api/v1/quizzes/nft-knowledge").status_code == 404
    submit = client.post("/api/v1/quizzes/submit", json=_submit_payload("nft-knowledge", [1, 1, 1, 1]))
    assert submit.status_code == 404


@pytest.mark.asyncio
async def test_submit_three_of_five(client, sample_quiz):
    """5문항 중 3개 정답 → 60점, 첫 참여자이므로 1위/100"""
    payload = _submit_payload("crypto-basics", [0, 0, 1, 0, 0], displayName="Alice")

    response = client.post("/api/v1/quizzes/submit", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["sessionId"]
    result = data["result"]
    assert result["quizId"] == "crypto-basics"
    assert result["userId"] == 42
    assert result["score"] == 60
    assert result["correctAnswers"] == 3
    assert result["totalQuestions"] == 5
    assert result["timeSpent"] == 150
    assert result["rank"] == 1
    assert result["percentile"] == 100
    assert [a["isCorrect"] for a in result["answers"]] == [True, True, True, False, False]
    assert all(a["timeSpent"] == 30 for a in result["answers"])

    entry = data["leaderboard"][0]
    assert entry["userId"] == "42"
    assert entry["username"] == "user_42"
    assert entry["displayName"] == "Alice"


@pytest.mark.asyncio
async def test_submit_ranks_against_existing_sessions(client, add_quiz, add_completed_session):
    """기존 100점/180초, 60점/220초 사이에 60점/200초가 2위"""
    quiz = await add_quiz("crypto-basics")
    await add_completed_session(quiz.id, fid=1, score=100, time_spent=180)
    await add_completed_session(quiz.id, fid=2, score=60, time_spent=220)

    response = client.post(
        "/api/v1/quizzes/submit",
        json=_submit_payload("crypto-basics", [0, 0, 1, 0, 0], fid=3, time_spent=200),
    )

    assert response.status_code == 200
    result = response.json()["result"]
    assert result["score"] == 60
    assert result["rank"] == 2
    assert result["percentile"] == 67

    leaderboard = response.json()["leaderboard"]
    assert [(e["userId"], e["rank"]) for e in leaderboard] == [("1", 1), ("3", 2), ("2", 3)]


@pytest.mark.asyncio
async def test_submit_persists_session(client, sample_quiz):
    client.post("/api/v1/quizzes/submit", json=_submit_payload("crypto-basics", CRYPTO_BASICS_CORRECT, fid=5))
    client.post("/api/v1/quizzes/submit", json=_submit_payload("crypto-basics", [3, 3, 3, 3, 3], fid=6))

    response = client.get("/api/v1/quizzes/crypto-basics/leaderboard")

    assert response.status_code == 200
    data = response.json()
    assert data["quizId"] == "crypto-basics"
    assert data["total"] == 2
    assert [(e["userId"], e["score"], e["rank"]) for e in data["leaderboard"]] == [("5", 100, 1), ("6", 0, 2)]


@pytest.mark.asyncio
async def test_leaderboard_limit_and_tie_break(client, sample_quiz, add_completed_session):
    early = datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc)
    late = datetime(2024, 1, 15, 11, 0, tzinfo=timezone.utc)
    await add_completed_session("crypto-basics", fid=10, score=80, time_spent=60, completed_at=late)
    await add_completed_session("crypto-basics", fid=11, score=80, time_spent=60, completed_at=early)
    await add_completed_session("crypto-basics", fid=12, score=40, time_spent=10)

    response = client.get("/api/v1/quizzes/crypto-basics/leaderboard", params={"limit": 2})

    data = response.json()
    assert data["total"] == 3
    assert [e["userId"] for e in data["leaderboard"]] == ["11", "10"]


def test_leaderboard_unknown_quiz(client):
    assert client.get("/api/v1/quizzes/missing/leaderboard").status_code == 404


@pytest.mark.parametrize(
    "payload",
    [
        {"quizId": "crypto-basics", "answers": []},
        {"quizId": "crypto-basics", "user": {"fid": -1}},
        {"quizId": "crypto-basics", "timeSpent": -5, "user": {"fid": 1}},
        {"answers": [], "user": {"fid": 1}},
    ],
)
def test_submit_validation_error(client, payload):
    response = client.post("/api/v1/quizzes/submit", json=payload)

    assert response.status_code == 422
    assert isinstance(response.json()["detail"], list)


def test_submit_blank_quiz_id(client):
    response = client.post("/api/v1/quizzes/submit", json=_submit_payload("  ", []))

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_rate_limit_after_max_requests(client, sample_quiz):
    """같은 클라이언트의 31번째 요청은 429"""
    headers = {"x-forwarded-for": "203.0.113.10", "user-agent": "pytest-agent"}
    responses = [client.get("/api/v1/quizzes/list", headers=headers) for _ in range(30)]

    assert all(r.status_code == 200 for r in responses)
    assert responses[0].headers["X-RateLimit-Limit"] == "30"
    assert responses[0].headers["X-RateLimit-Remaining"] == "29"

    denied = client.get("/api/v1/quizzes/list", headers=headers)
    assert denied.status_code == 429
    assert denied.json()["error"] == "Too Many Requests"
    assert int(denied.headers["Retry-After"]) > 0

    other_client = client.get("/api/v1/quizzes/list", headers={"x-forwarded-for": "203.0.113.11"})
    assert other_client.status_code == 200


def test_health_is_not_rate_limited(client):
    responses = [client.get("/health") for _ in range(40)]

    assert all(r.status_code == 200 for r in responses)
    assert "X-RateLimit-Limit" not in responses[-1].headers


def test_security_headers_on_api_responses(client):
    response = client.get("/api/v1/quizzes/missing")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-XSS-Protection"] == "1; mode=block"
    assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"


def test_cors_preflight_allows_mini_app_origin(client):
    response = client.options(
        "/api/v1/quizzes/list",
        headers={
            "Origin": "https://warpcast.com",
            "Access-Control-Request-Method": "GET",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "https://warpcast.com"
