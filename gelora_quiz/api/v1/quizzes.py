from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gelora_quiz.models.base import get_db
from gelora_quiz.schemas import leaderboard as leaderboard_schema, quiz as quiz_schema, submission as submission_schema
from gelora_quiz.services import quiz_service

router = APIRouter(prefix="/quizzes", tags=["quizzes"])


@router.get("/list", response_model=quiz_schema.QuizListResponse)
async def list_quizzes(
    db: AsyncSession = Depends(get_db),
):
    """퀴즈 목록 조회 API"""
    return await quiz_service.list_quizzes(db)


@router.post("/submit", response_model=submission_schema.QuizSubmitResponse)
async def submit_quiz(
    request: submission_schema.QuizSubmitRequest,
    db: AsyncSession = Depends(get_db),
):
    """퀴즈 제출 API (채점, 저장, 순위 산정)"""
    return await quiz_service.submit_quiz(db, request)


@router.get("/{quiz_id}/leaderboard", response_model=leaderboard_schema.LeaderboardResponse)
async def get_leaderboard(
    quiz_id: str,
    limit: int | None = Query(None, ge=1, le=100, description="표시할 상위 N명"),
    db: AsyncSession = Depends(get_db),
):
    """리더보드 조회 API"""
    return await quiz_service.get_leaderboard(db, quiz_id, limit)


@router.get("/{quiz_id}", response_model=quiz_schema.QuizDetailResponse)
async def get_quiz(
    quiz_id: str,
    db: AsyncSession = Depends(get_db),
):
    """퀴즈 상세 조회 API (리더보드 포함)"""
    return await quiz_service.get_quiz_detail(db, quiz_id)
