#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""로컬 개발용 .env 파일 생성"""
import os
from pathlib import Path

# 프로젝트 루트
project_root = Path(__file__).parent.parent.parent
env_file = project_root / ".env"

# 실제 DB 계정은 서버 담당자로부터 받아서 수동으로 입력 필요
env_content = """# Database
DATABASE_URL=postgresql+asyncpg://<DB_USER>:<DB_PASSWORD>@localhost:5432/gelora_quiz

# CORS (Farcaster 클라이언트 + 로컬)
ALLOWED_ORIGINS=https://warpcast.com,https://client.farcaster.xyz,http://localhost:3000,http://127.0.0.1:3000

# Rate limit (프로세스 단위)
RATE_LIMIT_WINDOW_MS=60000
RATE_LIMIT_MAX_REQUESTS=30
RATE_LIMIT_PATHS=/api/v1/quizzes/

# Leaderboard
LEADERBOARD_LIMIT=10
COMPLETION_TIE_BREAK=earliest

# Environment
# 로컬 개발 시 development로 두면 상세 에러 메시지 확인 가능
ENVIRONMENT=development
# LOG_LEVEL=INFO
"""


def create_env_file():
    """.env 파일 생성 (UTF-8, BOM 없음)"""
    print(f"[INFO] .env 파일 생성 중: {env_file}")

    # 기존 파일이 있으면 백업
    if env_file.exists():
        backup_file = project_root / ".env.backup"
        print(f"[INFO] 기존 .env 파일 백업: {backup_file}")
        backup_file.write_text(env_file.read_text(encoding="utf-8"), encoding="utf-8")

    with open(env_file, "w", encoding="utf-8", newline="\n") as f:
        f.write(env_content)

    print(f"[OK] .env 파일 생성 완료: {env_file}")

    if os.name != "nt":
        os.chmod(env_file, 0o600)
        print(f"[INFO] 파일 권한 설정: 600")


if __name__ == "__main__":
    try:
        create_env_file()
    except OSError as e:
        print(f"\n[ERROR] 에러 발생: {e.__class__.__name__}: {str(e)}")
        raise SystemExit(1)
