# Ro-Aviation/ro_aviation/app_state.py
# (화면 상태: 현재 뷰, 직원 인증 플래그, 알림 슬롯)

import hmac
import time

from flask import current_app, g, session

from config import get_logger

logger = get_logger(__name__)

VIEWS = ('home', 'booking', 'careers', 'photoAlbum', 'support', 'staffLogin', 'staffDashboard')
NOTIFICATION_KINDS = ('success', 'error')
DEFAULT_DELAY_MS = 4000


# --- (1) 알림 채널 ---
class NotificationChannel:
    """
    알림 한 칸짜리 슬롯. 대기열 없음.
    show()는 떠 있는 알림을 즉시 덮어쓰고 타이머를 새로 시작합니다.
    만료는 조회 시점에 clock()으로 판정합니다.
    """

    def __init__(self, delay_ms=DEFAULT_DELAY_MS, clock=time.time):
        self.delay_ms = delay_ms
        self.clock = clock
        self.kind = None
        self.text = ''
        self.expires_at = None

    def show(self, kind, text):
        if kind not in NOTIFICATION_KINDS:
            raise ValueError(f"Unknown notification kind: {kind}")
        self.kind = kind
        self.text = text
        self.expires_at = self.clock() + self.delay_ms / 1000.0

    def hide(self):
        self.kind = None
        self.text = ''
        self.expires_at = None

    @property
    def visible(self):
        if self.expires_at is not None and self.clock() >= self.expires_at:
            self.hide()
        return self.kind is not None

    def current(self):
        if not self.visible:
            return {'visible': False, 'kind': '', 'text': ''}
        return {'visible': True, 'kind': self.kind, 'text': self.text}

    def to_dict(self):
        if not self.visible:
            return None
        return {'kind': self.kind, 'text': self.text, 'expires_at': self.expires_at}

    def load(self, data):
        if not data:
            self.hide()
            return self
        self.kind = data.get('kind')
        self.text = data.get('text', '')
        self.expires_at = data.get('expires_at')
        return self


# --- (2) 앱 상태 + 뷰 라우터 ---
class AppState:
    """최상위 컨트롤러가 소유하는 상태 객체. 변경은 메서드로만 합니다."""

    def __init__(self, notifications=None, current_view='home', staff_authenticated=False):
        self.notifications = notifications or NotificationChannel()
        self.current_view = current_view
        self.staff_authenticated = staff_authenticated
        self.login_error = ''

    def navigate(self, view):
        """
        뷰 전환. 인증 없이 staffDashboard로 가면 staffLogin을 대신 보여줍니다.
        (리다이렉트가 아니라 같은 호출의 결과만 바뀜)
        """
        if view not in VIEWS:
            raise ValueError(f"Unknown view: {view}")
        if view == 'staffDashboard' and not self.staff_authenticated:
            view = 'staffLogin'
        self.current_view = view
        return view

    def notify(self, kind, text):
        self.notifications.show(kind, text)

    def to_dict(self):
        return {
            'current_view': self.current_view,
            'staff_authenticated': self.staff_authenticated,
            'notification': self.notifications.to_dict(),
        }

    @classmethod
    def from_dict(cls, data, delay_ms=DEFAULT_DELAY_MS, clock=time.time):
        data = data or {}
        channel = NotificationChannel(delay_ms=delay_ms, clock=clock).load(data.get('notification'))
        view = data.get('current_view', 'home')
        return cls(
            notifications=channel,
            current_view=view if view in VIEWS else 'home',
            staff_authenticated=bool(data.get('staff_authenticated', False)),
        )


# --- (3) 직원 게이트 ---
class StaffGate:
    """
    고정 비밀번호 하나와 비교하는 화면용 게이트.
    토큰도 만료도 없고, 데이터 접근 권한은 스토어 쪽 규칙이 따로 막아야 합니다.
    """

    def __init__(self, secret):
        self.secret = secret or ''

    def attempt_login(self, state, submitted):
        if not self.secret:
            # (비밀번호 미설정 상태에서는 어떤 입력도 통과시키지 않음)
            logger.error("STAFF_PASSWORD 미설정: 직원 로그인을 거부합니다.")
            return self._reject(state)

        if hmac.compare_digest((submitted or '').encode(), self.secret.encode()):
            state.staff_authenticated = True
            state.login_error = ''
            state.navigate('staffDashboard')
            state.notify('success', 'Staff login successful!')
            logger.info("직원 로그인 성공")
            return True

        logger.info("직원 로그인 실패")
        return self._reject(state)

    @staticmethod
    def _reject(state):
        state.login_error = 'Invalid password. Please try again.'
        state.navigate('staffLogin')
        state.notify('error', 'Login failed: Invalid password.')
        return False

    @staticmethod
    def logout(state):
        state.staff_authenticated = False
        state.navigate('home')


# --- (4) Flask 세션 연동 ---
def _clock():
    return current_app.extensions.get('ro_aviation_clock', time.time)


def load_state():
    """요청마다 세션에서 AppState 복원 (g.state)"""
    if 'state' not in g:
        g.state = AppState.from_dict(
            session.get('app_state'),
            delay_ms=current_app.config.get('NOTIFICATION_DELAY_MS', DEFAULT_DELAY_MS),
            clock=_clock(),
        )
    return g.state


def save_state(state):
    session['app_state'] = state.to_dict()
