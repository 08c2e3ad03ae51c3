"""채점 및 리더보드 순위 산정

I/O 없는 순수 함수만 둔다. DB 조회/저장은 quiz_service가 담당한다.
"""
import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone

from gelora_quiz.exceptions import InvalidQuizDefinitionError
from gelora_quiz.schemas.leaderboard import LeaderboardEntry, LeaderboardRow, RankedPosition
from gelora_quiz.schemas.quiz import QuizDefinition
from gelora_quiz.schemas.submission import GradedAnswer, QuizResult, SubmittedAnswer

logger = logging.getLogger(__name__)

# 점수·소요 시간이 같을 때 완료 시각 기준 정렬 방향
COMPLETION_TIE_BREAK_EARLIEST = "earliest"
COMPLETION_TIE_BREAK_LATEST = "latest"
COMPLETION_TIE_BREAK = COMPLETION_TIE_BREAK_EARLIEST


def round_half_up(numerator: int, denominator: int) -> int:
    """음이 아닌 정수 비율을 사사오입 (Python round()의 banker's rounding 회피)"""
    return (2 * numerator + denominator) // (2 * denominator)


def _as_utc(value: datetime) -> datetime:
    # SQLite는 tz 정보 없이 돌려준다
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def grade_submission(
    quiz: QuizDefinition,
    submitted_answers: Sequence[SubmittedAnswer],
    total_time_spent: float,
    user_id: int,
    completed_at: datetime | None = None,
) -> QuizResult:
    """제출 답안 채점

    답안은 question_id로 문항과 매칭한다. 퀴즈에 없는 문항의 답안과
    같은 문항에 대한 중복 답안(첫 번째 이후)은 무시하고, 답하지 않은
    문항은 오답으로 센다. 점수 분모는 항상 퀴즈의 문항 수다.

    Raises:
        InvalidQuizDefinitionError: 문항이 하나도 없는 퀴즈
    """
    if not quiz.questions:
        raise InvalidQuizDefinitionError(quiz.id)

    answers_by_question: dict[str, SubmittedAnswer] = {}
    for answer in submitted_answers:
        answers_by_question.setdefault(answer.question_id, answer)

    known_ids = {q.id for q in quiz.questions}
    unknown = [qid for qid in answers_by_question if qid not in known_ids]
    if unknown:
        logger.debug(f"퀴즈에 없는 문항 답안 무시: quiz_id={quiz.id}, question_ids={unknown}")

    matched = [
        (question, answers_by_question[question.id])
        for question in quiz.questions
        if question.id in answers_by_question
    ]

    default_time = total_time_spent / len(matched) if matched else 0.0

    graded: list[GradedAnswer] = []
    for question, answer in matched:
        graded.append(
            GradedAnswer(
                question_id=question.id,
                selected_option=answer.selected_option,
                is_correct=answer.selected_option is not None
                and answer.selected_option == question.correct_answer,
                time_spent=answer.time_spent if answer.time_spent is not None else default_time,
            )
        )

    correct_answers = sum(1 for a in graded if a.is_correct)
    total_questions = quiz.total_questions

    return QuizResult(
        quiz_id=quiz.id,
        user_id=user_id,
        score=round_half_up(100 * correct_answers, total_questions),
        total_questions=total_questions,
        correct_answers=correct_answers,
        time_spent=total_time_spent,
        answers=graded,
        completed_at=completed_at or datetime.now(timezone.utc),
    )


def leaderboard_sort_key(row: LeaderboardRow, tie_break: str = COMPLETION_TIE_BREAK) -> tuple:
    """점수 내림차순, 소요 시간 오름차순, 완료 시각(tie_break 방향), 세션 id

    저장 전 기록(session_id 없음)은 완전 동점인 저장된 기록 뒤에 놓인다.
    """
    completed = _as_utc(row.completed_at).timestamp()
    if tie_break == COMPLETION_TIE_BREAK_LATEST:
        completed = -completed
    elif tie_break != COMPLETION_TIE_BREAK_EARLIEST:
        raise ValueError(f"알 수 없는 tie_break 값: {tie_break}")
    return (-row.score, row.time_spent, completed, row.session_id is None, row.session_id or "")


def sort_leaderboard_rows(
    rows: Iterable[LeaderboardRow],
    tie_break: str = COMPLETION_TIE_BREAK,
) -> list[LeaderboardRow]:
    # 안정 정렬: 완전 동점이면 입력 순서 유지
    return sorted(rows, key=lambda r: leaderboard_sort_key(r, tie_break))


def calculate_percentile(rank: int, participants: int) -> int:
    """백분위 = round(100 * (N - rank + 1) / N), 참가자 0명이면 단독 참가로 간주"""
    if participants <= 0:
        return 100
    if not 1 <= rank <= participants:
        raise ValueError(f"rank 범위 오류: rank={rank}, participants={participants}")
    return round_half_up(100 * (participants - rank + 1), participants)


def result_to_row(result: QuizResult, session_id: str | None = None) -> LeaderboardRow:
    return LeaderboardRow(
        session_id=session_id,
        user_id=result.user_id,
        score=result.score,
        time_spent=result.time_spent,
        completed_at=result.completed_at,
    )


def rank_submission(
    result: QuizResult,
    existing_rows: Sequence[LeaderboardRow],
    tie_break: str = COMPLETION_TIE_BREAK,
) -> RankedPosition:
    """기존 완료 기록 사이에서 신규 결과의 순위/백분위 계산

    existing_rows에는 신규 결과를 포함하지 않는다. 신규 결과는 목록 끝에
    추가한 뒤 정렬하므로 완전 동점이면 기존 기록이 앞선다.
    """
    new_row = result_to_row(result)
    combined = [*existing_rows, new_row]
    ordered = sort_leaderboard_rows(combined, tie_break)

    rank = next(i for i, row in enumerate(ordered, start=1) if row is new_row)
    participants = len(ordered)
    return RankedPosition(
        rank=rank,
        percentile=calculate_percentile(rank, participants),
        participants=participants,
    )


def to_leaderboard_entry(row: LeaderboardRow, rank: int) -> LeaderboardEntry:
    """표시 정보 기본값: username → user_{fid}, display_name → username → User {fid}"""
    username = row.username or f"user_{row.user_id}"
    display_name = row.display_name or row.username or f"User {row.user_id}"
    return LeaderboardEntry(
        user_id=str(row.user_id),
        username=username,
        display_name=display_name,
        profile_image=row.profile_image,
        score=row.score,
        time_spent=row.time_spent,
        completed_at=row.completed_at,
        rank=rank,
    )


def build_leaderboard(
    rows: Iterable[LeaderboardRow],
    limit: int | None = None,
    tie_break: str = COMPLETION_TIE_BREAK,
) -> list[LeaderboardEntry]:
    """정렬 후 1부터 연속 순위 부여 (동점도 순위 공유 없음)"""
    ordered = sort_leaderboard_rows(rows, tie_break)
    if limit is not None:
        ordered = ordered[:limit]
    return [to_leaderboard_entry(row, rank) for rank, row in enumerate(ordered, start=1)]
