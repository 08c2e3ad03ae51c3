"""클라이언트 지문 단위 요청 제한

프로세스 메모리에 상태를 두므로 인스턴스 간 공유되지 않는다.
"""
import logging
import math
import random
import threading
import time
from dataclasses import dataclass

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from gelora_quiz.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)

USER_AGENT_PREFIX_LENGTH = 50
BYPASS_PATHS = ("/health", "/health/db", "/api/health", "/api/status")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class RateLimitRecord:
    count: int
    reset_at_ms: int


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    count: int
    limit: int
    remaining: int
    reset_at_ms: int
    retry_after: int  # 초
    window_seconds: int | float

    def headers(self) -> dict[str, str]:
        headers = {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_at_ms),
            "X-RateLimit-Window": str(self.window_seconds),
        }
        if not self.allowed:
            headers["Retry-After"] = str(self.retry_after)
        return headers


class SlidingWindowRateLimiter:
    """고정 길이 윈도우 카운터

    첫 요청(또는 윈도우 만료 후 요청)이 새 윈도우를 연다. 윈도우 안에서는
    요청마다 카운트를 올리고, 올린 값이 max_requests를 넘으면 거부한다.
    """

    def __init__(
        self,
        window_ms: int = 60_000,
        max_requests: int = 30,
        cleanup_probability: float = 0.1,
        rng: random.Random | None = None,
    ):
        if window_ms <= 0 or max_requests <= 0:
            raise ValueError("window_ms와 max_requests는 양수여야 합니다")
        self.window_ms = window_ms
        self.max_requests = max_requests
        self.cleanup_probability = cleanup_probability
        self._rng = rng or random.Random()
        self._records: dict[str, RateLimitRecord] = {}
        self._lock = threading.Lock()

    @property
    def window_seconds(self) -> int | float:
        """윈도우 길이 (초), 1초 단위가 아니면 소수로"""
        seconds = self.window_ms / 1000
        return int(seconds) if seconds.is_integer() else seconds

    def __len__(self) -> int:
        return len(self._records)

    def check_and_consume(self, fingerprint: str, now_ms: int | None = None) -> RateLimitDecision:
        now = _now_ms() if now_ms is None else now_ms

        with self._lock:
            if self._rng.random() < self.cleanup_probability:
                self._purge_expired_locked(now)

            record = self._records.get(fingerprint)
            if record is None or now > record.reset_at_ms:
                record = RateLimitRecord(count=1, reset_at_ms=now + self.window_ms)
                self._records[fingerprint] = record
            else:
                record.count += 1

            count = record.count
            reset_at = record.reset_at_ms

        allowed = count <= self.max_requests
        return RateLimitDecision(
            allowed=allowed,
            count=count,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - count),
            reset_at_ms=reset_at,
            retry_after=max(0, math.ceil((reset_at - now) / 1000)),
            window_seconds=self.window_seconds,
        )

    def purge_expired(self, now_ms: int | None = None) -> int:
        """만료된 기록 삭제, 삭제 건수 반환"""
        now = _now_ms() if now_ms is None else now_ms
        with self._lock:
            return self._purge_expired_locked(now)

    def _purge_expired_locked(self, now: int) -> int:
        expired = [key for key, record in self._records.items() if now > record.reset_at_ms]
        for key in expired:
            del self._records[key]
        return len(expired)

    def get_status(self, fingerprint: str, now_ms: int | None = None) -> dict | None:
        """디버깅용 현재 상태"""
        now = _now_ms() if now_ms is None else now_ms
        with self._lock:
            record = self._records.get(fingerprint)
            if record is None:
                return None
            return {
                "count": record.count,
                "reset_at_ms": record.reset_at_ms,
                "remaining": max(0, self.max_requests - record.count),
                "reset_in_ms": max(0, record.reset_at_ms - now),
            }

    def reset(self) -> None:
        with self._lock:
            self._records.clear()


def get_client_fingerprint(request: Request) -> str:
    """IP(프록시 헤더 우선) + user-agent 앞 50자

    같은 NAT 뒤 사용자 간 충돌을 줄이기 위한 것으로 보안 경계가 아니다.
    """
    headers = request.headers
    forwarded = headers.get("x-forwarded-for", "")
    ip = (
        forwarded.split(",")[0].strip()
        or headers.get("x-real-ip", "").strip()
        or headers.get("cf-connecting-ip", "").strip()
        or (request.client.host if request.client else "")
        or "unknown"
    )
    user_agent = headers.get("user-agent", "")
    return f"{ip}_{user_agent[:USER_AGENT_PREFIX_LENGTH]}"


def is_rate_limited_path(path: str, prefixes: list[str]) -> bool:
    if path in BYPASS_PATHS:
        return False
    return any(path.startswith(prefix) for prefix in prefixes)


def rate_limit_exceeded_response(
    exc: RateLimitExceededError,
    decision: RateLimitDecision,
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": "Too Many Requests",
            "message": exc.message,
            "retryAfter": exc.retry_after,
            "limit": decision.limit,
            "windowMs": decision.window_seconds,
        },
        headers={**decision.headers(), "X-RateLimit-Remaining": "0"},
    )


class RateLimitMiddleware(BaseHTTPMiddleware):
    """지정된 경로 접두사에만 요청 제한 적용, /api/ 응답에 보안 헤더 추가"""

    def __init__(self, app, limiter: SlidingWindowRateLimiter, paths: list[str]):
        super().__init__(app)
        self.limiter = limiter
        self.paths = paths

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        decision: RateLimitDecision | None = None

        if is_rate_limited_path(path, self.paths):
            fingerprint = get_client_fingerprint(request)
            decision = self.limiter.check_and_consume(fingerprint)
            logger.debug(f"레이트 리밋 적용: {request.method} {path}, count={decision.count}")

            if not decision.allowed:
                logger.warning(
                    f"Rate limit exceeded: {fingerprint} ({decision.count}/{decision.limit})"
                )
                exc = RateLimitExceededError(decision.retry_after)
                response = rate_limit_exceeded_response(exc, decision)
                response.headers.update(SECURITY_HEADERS)
                return response

        response = await call_next(request)

        if decision is not None:
            response.headers.update(decision.headers())
        if path.startswith("/api/"):
            response.headers.update(SECURITY_HEADERS)
        return response
