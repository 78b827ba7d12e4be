# Ro-Aviation/ro_aviation/identity.py
# (인증 제공자: 세션별 불투명 사용자 ID 발급)

import uuid

from flask import current_app, session
from itsdangerous import BadSignature, URLSafeSerializer

from config import get_logger

logger = get_logger(__name__)

TOKEN_SALT = 'ro-aviation-auth'


def issue_token(uid, secret_key):
    """INITIAL_AUTH_TOKEN 으로 쓸 서명 토큰 생성 (운영자용)"""
    return URLSafeSerializer(secret_key, salt=TOKEN_SALT).dumps({'uid': uid})


def _uid_from_token(token, secret_key):
    try:
        payload = URLSafeSerializer(secret_key, salt=TOKEN_SALT).loads(token)
    except BadSignature:
        logger.error("인증 토큰 서명 검증 실패. 익명 로그인으로 대체합니다.")
        return None
    uid = payload.get('uid') if isinstance(payload, dict) else None
    if not uid:
        logger.error("인증 토큰에 uid가 없습니다. 익명 로그인으로 대체합니다.")
    return uid


def sign_in():
    """
    현재 세션의 사용자 ID를 확정합니다.
    토큰이 설정되어 있으면 토큰의 uid, 아니면 익명 uid를 발급합니다.
    이 ID는 '누가 만들었는지/고쳤는지' 기록용일 뿐 권한과는 무관합니다.
    """
    uid = session.get('uid')
    if uid:
        return uid

    token = current_app.config.get('INITIAL_AUTH_TOKEN')
    if token:
        uid = _uid_from_token(token, current_app.config['SECRET_KEY'])
        if uid:
            logger.info("토큰으로 로그인: %s", uid)

    if not uid:
        uid = f"anon-{uuid.uuid4().hex}"
        logger.info("익명 로그인: %s", uid)

    session['uid'] = uid
    return uid


def current_user_id():
    return session.get('uid') or sign_in()
