import logging
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import text

from gelora_quiz.api.v1 import quizzes
from gelora_quiz.core.config import settings
from gelora_quiz.core.logging import setup_logging
from gelora_quiz.core.rate_limit import RateLimitMiddleware, SlidingWindowRateLimiter
from gelora_quiz.exceptions import BaseAppError
from gelora_quiz.models.base import get_engine

# 로깅 설정
setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Gelora Quiz Backend API",
    description="Farcaster Mini App 퀴즈 채점 및 리더보드 API",
    version="0.1.0",
)

rate_limiter = SlidingWindowRateLimiter(
    window_ms=settings.rate_limit_window_ms,
    max_requests=settings.rate_limit_max_requests,
    cleanup_probability=settings.rate_limit_cleanup_probability,
)
app.state.rate_limiter = rate_limiter

# 미들웨어는 나중에 추가한 것이 바깥쪽: CORS가 429 응답에도 적용되도록 마지막에 추가
app.add_middleware(
    RateLimitMiddleware,
    limiter=rate_limiter,
    paths=settings.rate_limited_paths,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=86400,
)

app.include_router(quizzes.router, prefix="/api/v1")


def create_cors_response(
    status_code: int,
    content: dict,
    request: Request,
) -> JSONResponse:
    """CORS 헤더를 포함한 JSONResponse 생성"""
    response = JSONResponse(
        status_code=status_code,
        content=content,
    )
    # 예외 핸들러에서도 CORS 헤더 보장
    origin = request.headers.get("origin")
    if origin and origin in settings.allowed_origins_list:
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Credentials"] = "true"
    return response


def _request_context(request: Request) -> dict:
    return {"path": request.url.path, "method": request.method}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """제출 본문/쿼리 검증 실패 → 422"""
    logger.warning(f"잘못된 요청: {request.method} {request.url.path}, errors={exc.errors()}")
    return create_cors_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(exc.errors())},
        request=request,
    )


@app.exception_handler(BaseAppError)
async def app_exception_handler(request: Request, exc: BaseAppError):
    """퀴즈 도메인 예외 → 예외에 지정된 상태 코드"""
    logger.warning(
        f"{exc.__class__.__name__}: {exc.message}",
        extra={**_request_context(request), "status_code": exc.status_code},
    )
    return create_cors_response(
        status_code=exc.status_code,
        content={"detail": exc.message},
        request=request,
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """DB 오류 → 500 (프로덕션에서는 원인 비공개)"""
    logger.error(f"DB 오류: {exc.__class__.__name__}", exc_info=True, extra=_request_context(request))
    is_production = settings.environment == "production"
    return create_cors_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database error occurred" if is_production else str(exc)},
        request=request,
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """처리되지 않은 예외 → 500"""
    logger.error(f"처리되지 않은 예외: {exc.__class__.__name__}", exc_info=True, extra=_request_context(request))
    if settings.environment == "production":
        content = {"detail": "Internal Server Error"}
    else:
        content = {"detail": str(exc), "type": exc.__class__.__name__}
    return create_cors_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
        request=request,
    )


@app.get("/")
async def root():
    return {"message": "Gelora Quiz Backend API", "version": app.version}


@app.get("/health")
async def health_check():
    """로드밸런서용 헬스 체크 (레이트 리밋 제외)"""
    return {"status": "healthy"}


@app.get("/health/db")
async def health_check_db():
    """DB 연결 확인"""
    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"DB 헬스 체크 실패: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "database": "disconnected"},
        )
    return {"status": "healthy", "database": "connected"}
