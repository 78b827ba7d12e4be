# Ro-Aviation/ro_aviation/__init__.py
# (create_app 애플리케이션 팩토리)

from flask import Flask, g, session
from config import Config, get_logger
from .extensions import db

logger = get_logger(__name__)


def create_app(config_class=Config, store=None):
    app = Flask(__name__)

    # 1. 설정 로드
    app.config.from_object(config_class)

    # 2. 레코드 스토어 연결
    #    (테스트에서는 store를 직접 주입. 접속 정보가 없으면 스토어 없이 기동)
    if store is None and app.config.get('SQLALCHEMY_DATABASE_URI'):
        from .store import SqlRecordStore
        try:
            db.init_app(app)
            with app.app_context():
                from . import models
                db.create_all()
            store = SqlRecordStore(db)
        except Exception as e:
            logger.error("레코드 스토어 초기화 실패: %s", e)
            store = None
    elif store is None:
        logger.error("DATABASE_URL 미설정: 레코드 스토어 기능을 끈 채로 실행합니다.")
    app.extensions['record_store'] = store

    # 3. 요청마다 상태 복원/저장 + 구독 해제
    from .app_state import load_state, save_state
    from .identity import sign_in
    from .lists import close_record_lists

    @app.before_request
    def restore_state():
        sign_in()
        load_state()

    @app.after_request
    def persist_state(response):
        if 'state' in g:
            save_state(g.state)
        return response

    app.teardown_request(close_record_lists)

    # (모든 템플릿 공용: 내비게이션, 알림, 푸터의 사용자 ID)
    @app.context_processor
    def inject_state():
        state = load_state()
        return {
            'current_view': state.current_view,
            'staff_authenticated': state.staff_authenticated,
            'notification': state.notifications.current(),
            'user_id': session.get('uid'),
        }

    # 4. 블루프린트 등록
    with app.app_context():
        from . import main
        from . import auth
        from . import staff

        app.register_blueprint(main.main_bp)
        app.register_blueprint(auth.auth_bp, url_prefix='/staff')
        app.register_blueprint(staff.staff_bp, url_prefix='/staff')

    # === Error handling ===
    @app.errorhandler(500)
    def internal_error(error):
        logger.error("Internal Server Error: %s", error)
        return "Internal Server Error", 500

    return app
