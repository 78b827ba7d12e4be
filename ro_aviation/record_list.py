# Ro-Aviation/ro_aviation/record_list.py
# (실시간 동기화 레코드 목록: 일곱 종류 공용)

from config import get_logger
from .store import SERVER_TIMESTAMP, StoreError

logger = get_logger(__name__)

STORE_NOT_READY = 'Record store not ready or user not authenticated.'


class RecordList:
    """
    컬렉션 하나의 현재 스냅샷을 메모리에 들고 있는 목록.
    - records: 마지막 스냅샷을 종류별 규칙으로 정렬한 결과 (각 레코드에 'id' 포함)
    - form / editing_id: 입력 폼 상태. 실패 시 그대로 남아 재시도할 수 있음
    모든 실패는 알림 채널에 정확히 한 번 보고합니다.
    """

    def __init__(self, kind, store, notifications, user_id=None, app_id='default-app-id'):
        self.kind = kind
        self.store = store
        self.notifications = notifications
        self.user_id = user_id
        self.path = kind.collection_path(app_id)
        self.records = []
        self.form = kind.empty_form()
        self.editing_id = None
        self._subscription = None

    # --- 구독 ---
    def subscribe(self):
        if self.store is None:
            logger.error("스토어 미설정: %s 구독 생략", self.path)
            return self
        if self._subscription is not None:
            return self
        self._subscription = self.store.subscribe(self.path, self._on_snapshot, self._on_error)
        return self

    def _on_snapshot(self, snapshot):
        # (매 스냅샷마다 통째로 교체 후 재정렬)
        records = [dict(data, id=record_id) for record_id, data in snapshot]
        self.records = self.kind.sort_records(records)

    def _on_error(self, error):
        logger.error("%s 불러오기 실패: %s", self.kind.name, error)
        self.notifications.show('error', self.kind.load_error)

    def close(self):
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None

    def __enter__(self):
        return self.subscribe()

    def __exit__(self, *exc):
        self.close()
        return False

    # --- 폼 ---
    def load_form(self, source):
        """요청 폼 값으로 입력 상태 채우기 (종류에 정의된 필드만)"""
        for field in self.kind.fields:
            if field in source:
                value = source.get(field)
                self.form[field] = '' if value is None else value
        return self.form

    def reset_form(self):
        self.form = self.kind.empty_form()

    def start_edit(self, record_id):
        record = self.find(record_id)
        if record is None:
            return False
        self.reset_form()
        self.load_form(record)
        self.editing_id = record_id
        return True

    def cancel_edit(self):
        self.editing_id = None
        self.reset_form()

    def find(self, record_id):
        for record in self.records:
            if record['id'] == record_id:
                return record
        return None

    # --- 검증 ---
    def validate(self, fields):
        """필수값 누락/허용되지 않은 값이면 오류 메시지, 정상이면 None"""
        for field in self.kind.required:
            if not str(fields.get(field) or '').strip():
                return self.kind.required_message
        for field, allowed in self.kind.choices.items():
            if fields.get(field) not in allowed:
                return f"{field.capitalize()} must be one of: {', '.join(allowed)}."
        for field in self.kind.numeric:
            value = str(fields.get(field) or '').strip()
            if value:
                try:
                    int(value)
                except ValueError:
                    return f"{field.capitalize()} must be a whole number."
        return None

    def _payload(self, fields):
        payload = {}
        for field in self.kind.fields:
            value = fields.get(field)
            value = '' if value is None else value
            if field in self.kind.numeric and str(value).strip():
                value = int(str(value).strip())
            payload[field] = value
        payload['timestamp'] = SERVER_TIMESTAMP
        payload[self.kind.editor_field] = self.user_id
        return payload

    def _ready(self):
        if self.store is None or not self.user_id:
            logger.error("스토어 미준비 또는 사용자 미인증: %s", self.path)
            self.notifications.show('error', STORE_NOT_READY)
            return False
        return True

    # --- 쓰기 ---
    def create(self, fields=None):
        fields = self.form if fields is None else fields
        self.load_form(fields)

        error = self.validate(fields)
        if error:
            self.notifications.show('error', error)
            return False
        if not self._ready():
            return False

        try:
            self.store.create(self.path, self._payload(fields))
        except StoreError as e:
            logger.error("%s 생성 실패: %s", self.kind.name, e.message)
            self.notifications.show('error', f"{self.kind.save_error}: {e.message}")
            return False

        self.notifications.show('success', f"{self.kind.label} added successfully!")
        self.reset_form()
        return True

    def update(self, record_id, fields=None):
        fields = self.form if fields is None else fields
        self.load_form(fields)
        self.editing_id = record_id

        error = self.validate(fields)
        if error:
            self.notifications.show('error', error)
            return False
        if not self._ready():
            return False

        try:
            self.store.update(self.path, record_id, self._payload(fields))
        except StoreError as e:
            logger.error("%s 수정 실패 (%s): %s", self.kind.name, record_id, e.message)
            self.notifications.show('error', f"{self.kind.save_error}: {e.message}")
            return False

        self.notifications.show('success', f"{self.kind.label} updated successfully!")
        self.editing_id = None
        self.reset_form()
        return True

    def save(self, fields=None):
        """편집 중이면 update, 아니면 create"""
        if self.editing_id:
            return self.update(self.editing_id, fields)
        return self.create(fields)

    def delete(self, record_id):
        # (확인 절차는 호출하는 대시보드 쪽 책임)
        if not self._ready():
            return False
        try:
            self.store.delete(self.path, record_id)
        except StoreError as e:
            logger.error("%s 삭제 실패 (%s): %s", self.kind.name, record_id, e.message)
            self.notifications.show('error', f"Failed to delete {self.kind.label.lower()} item: {e.message}")
            return False

        self.notifications.show('success', f"{self.kind.label} deleted successfully!")
        if self.editing_id == record_id:
            self.cancel_edit()
        return True
