# Ro-Aviation/ro_aviation/lists.py
# (요청 단위로 RecordList를 열고, 요청이 끝나면 구독 해제)

from flask import current_app, g

from .app_state import load_state
from .identity import current_user_id
from .record_list import RecordList


def get_store():
    return current_app.extensions.get('record_store')


def open_record_list(kind):
    """구독까지 마친 RecordList 반환. 요청 종료 시 close_record_lists()가 닫아줍니다."""
    state = load_state()
    record_list = RecordList(
        kind, get_store(), state.notifications,
        user_id=current_user_id(),
        app_id=current_app.config['APP_ID'],
    )
    g.setdefault('open_lists', []).append(record_list)
    return record_list.subscribe()


def close_record_lists(exc=None):
    for record_list in g.pop('open_lists', []):
        record_list.close()


def serialize_record(record):
    """JSON 응답용: datetime은 ISO 문자열로"""
    data = {}
    for key, value in record.items():
        data[key] = value.isoformat() if hasattr(value, 'isoformat') else value
    return data
