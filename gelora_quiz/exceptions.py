"""커스텀 예외 클래스 정의"""


class BaseAppError(Exception):
    """애플리케이션 기본 예외 클래스"""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class QuizNotFoundError(BaseAppError):
    """퀴즈를 찾을 수 없을 때 발생하는 예외 (404)"""

    def __init__(self, quiz_id: str):
        self.quiz_id = quiz_id
        super().__init__(f"Quiz not found: {quiz_id}", status_code=404)


class InvalidQuizDefinitionError(BaseAppError):
    """문항이 없는 퀴즈는 채점할 수 없음 (400)"""

    def __init__(self, quiz_id: str):
        self.quiz_id = quiz_id
        super().__init__(f"Quiz has no questions and cannot be scored: {quiz_id}", status_code=400)


class InvalidSubmissionError(BaseAppError):
    """잘못된 제출 요청 (400)

    개별 답안 오류(없는 문항, 범위 밖 선택지)는 오답으로 처리하며 이 예외를 쓰지 않는다.
    """

    def __init__(self, message: str = "Invalid submission"):
        super().__init__(message, status_code=400)


class RateLimitExceededError(BaseAppError):
    """요청 한도 초과 (429)"""

    def __init__(self, retry_after: int):
        self.retry_after = retry_after
        super().__init__(
            f"Rate limit exceeded. Try again in {retry_after} seconds.",
            status_code=429,
        )
