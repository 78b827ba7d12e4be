# Ro-Aviation/config.py
# (환경변수 기반 설정 + 로깅)

import logging
import os
from dotenv import load_dotenv

# .env 파일 로드
load_dotenv()


def _env_flag(name, default="false"):
    return os.getenv(name, default).lower() == "true"


DEBUG_MODE = _env_flag("DEBUG_MODE")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "ro-aviation-secret")

    # (모든 컬렉션 경로의 네임스페이스: artifacts/<APP_ID>/public/data/...)
    APP_ID = os.getenv("APP_ID", "default-app-id")

    # (레코드 스토어 접속 정보. 없으면 스토어 기능만 꺼지고 앱은 정상 기동)
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    STAFF_PASSWORD = os.getenv("STAFF_PASSWORD", "easyjetstaff2025!")
    INITIAL_AUTH_TOKEN = os.getenv("INITIAL_AUTH_TOKEN")

    NOTIFICATION_DELAY_MS = int(os.getenv("NOTIFICATION_DELAY_MS", 4000))

    ROBLOX_GROUP_LINK = "https://www.roblox.com/communities/35102208/UK-Flight-Simulator"

    DEBUG = DEBUG_MODE


# === Logging Configuration ===
def setup_logging():
    """애플리케이션 로깅 설정"""
    log_level = logging.DEBUG if DEBUG_MODE else logging.INFO

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[
            logging.StreamHandler(),
        ]
    )


def get_logger(name):
    """모듈별 로거 반환"""
    return logging.getLogger(name)


# config 임포트 시 로깅 초기화
setup_logging()
