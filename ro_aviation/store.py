# Ro-Aviation/ro_aviation/store.py
# (레코드 스토어 클라이언트: 인터페이스 + SQLAlchemy 구현)

import datetime
import secrets
import string
import threading
from collections import namedtuple

from sqlalchemy.exc import SQLAlchemyError

from config import get_logger

logger = get_logger(__name__)

# (스냅샷 안의 문서 하나)
RecordSnapshot = namedtuple('RecordSnapshot', ['id', 'data'])


class _ServerTimestamp:
    """필드 값 자리에 넣으면 스토어가 자기 시계로 채워 넣는 표식"""

    def __repr__(self):
        return 'SERVER_TIMESTAMP'


SERVER_TIMESTAMP = _ServerTimestamp()

_ID_ALPHABET = string.ascii_letters + string.digits


def new_record_id():
    """스토어가 부여하는 20자 문서 ID"""
    return ''.join(secrets.choice(_ID_ALPHABET) for _ in range(20))


class StoreError(Exception):
    """스토어 작업 실패 (네트워크, 권한, 잘못된 페이로드, 없는 문서 등)"""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class Subscription:
    """subscribe()가 돌려주는 핸들. close()는 여러 번 불러도 한 번만 해제합니다."""

    def __init__(self, release=None):
        self._release = release
        self.closed = False

    def close(self):
        if self.closed:
            return
        self.closed = True
        if self._release is not None:
            self._release()


class RecordStore:
    """
    레코드 스토어 클라이언트 인터페이스.
    - subscribe: 구독 즉시 현재 스냅샷 1회, 이후 쓰기가 커밋될 때마다 새 스냅샷
    - create/update/delete: 실패 시 StoreError
    """

    def subscribe(self, path, on_snapshot, on_error=None):
        raise NotImplementedError

    def create(self, path, fields):
        raise NotImplementedError

    def update(self, path, record_id, fields):
        raise NotImplementedError

    def delete(self, path, record_id):
        raise NotImplementedError

    def snapshot(self, path):
        raise NotImplementedError


class ListenerRegistry:
    """경로별 구독자 목록. 스토어 구현체들이 공유하는 푸시 로직"""

    def __init__(self):
        self._listeners = {}
        self._lock = threading.Lock()

    def add(self, path, on_snapshot, on_error):
        entry = (on_snapshot, on_error)
        with self._lock:
            self._listeners.setdefault(path, []).append(entry)

        def release():
            with self._lock:
                listeners = self._listeners.get(path, [])
                if entry in listeners:
                    listeners.remove(entry)
                if not listeners:
                    self._listeners.pop(path, None)

        return Subscription(release)

    def count(self, path=None):
        with self._lock:
            if path is not None:
                return len(self._listeners.get(path, []))
            return sum(len(v) for v in self._listeners.values())

    def notify(self, path, snapshot):
        with self._lock:
            listeners = list(self._listeners.get(path, []))
        for on_snapshot, _ in listeners:
            on_snapshot(list(snapshot))

    def fail(self, path, error):
        with self._lock:
            listeners = list(self._listeners.get(path, []))
        for _, on_error in listeners:
            if on_error is not None:
                on_error(error)


def _resolve_fields(fields, now):
    """SERVER_TIMESTAMP 표식을 스토어 시각으로 치환하고, 타임스탬프는 따로 분리"""
    stored = {}
    timestamp = None
    for key, value in fields.items():
        if value is SERVER_TIMESTAMP:
            if key == 'timestamp':
                timestamp = now
            else:
                stored[key] = now.isoformat()
        elif key == 'timestamp':
            # (클라이언트가 직접 넣은 타임스탬프는 받지 않음)
            raise StoreError("timestamp must be assigned by the store (use SERVER_TIMESTAMP).")
        else:
            stored[key] = value
    return stored, timestamp


class SqlRecordStore(RecordStore):
    """Flask-SQLAlchemy 테이블(StoredRecord) 위에 올린 레코드 스토어"""

    def __init__(self, db, clock=None):
        self.db = db
        self.clock = clock or datetime.datetime.now
        self.listeners = ListenerRegistry()

    # --- 조회 ---
    def snapshot(self, path):
        from .models import StoredRecord
        try:
            rows = StoredRecord.query.filter_by(Collection_Path=path).order_by(StoredRecord.Seq).all()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            logger.error("스냅샷 조회 실패 (%s): %s", path, e)
            raise StoreError(f"Could not read {path}: {e}") from e
        return [RecordSnapshot(row.Record_ID, row.to_data()) for row in rows]

    def subscribe(self, path, on_snapshot, on_error=None):
        subscription = self.listeners.add(path, on_snapshot, on_error)
        try:
            on_snapshot(self.snapshot(path))
        except StoreError as e:
            if on_error is None:
                raise
            on_error(e)
        return subscription

    def _push(self, path):
        try:
            snapshot = self.snapshot(path)
        except StoreError as e:
            self.listeners.fail(path, e)
            return
        logger.debug("스냅샷 전송: %s (%d건)", path, len(snapshot))
        self.listeners.notify(path, snapshot)

    def _get_row(self, path, record_id):
        from .models import StoredRecord
        row = StoredRecord.query.filter_by(Collection_Path=path, Record_ID=record_id).first()
        if row is None:
            raise StoreError(f"No document to update: {path}/{record_id}")
        return row

    # --- 쓰기 ---
    def create(self, path, fields):
        from .models import StoredRecord
        try:
            stored, timestamp = _resolve_fields(fields, self.clock())
            record_id = new_record_id()
            self.db.session.add(StoredRecord(
                Record_ID=record_id, Collection_Path=path,
                Fields=stored, Timestamp=timestamp
            ))
            self.db.session.commit()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            logger.error("문서 생성 실패 (%s): %s", path, e)
            raise StoreError(str(e)) from e
        logger.info("문서 생성: %s/%s", path, record_id)
        self._push(path)
        return record_id

    def update(self, path, record_id, fields):
        try:
            stored, timestamp = _resolve_fields(fields, self.clock())
            row = self._get_row(path, record_id)
            # (전달된 필드는 덮어쓰고, 나머지 기존 필드는 유지)
            merged = dict(row.Fields or {})
            merged.update(stored)
            row.Fields = merged
            if timestamp is not None:
                row.Timestamp = timestamp
            self.db.session.commit()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            logger.error("문서 수정 실패 (%s/%s): %s", path, record_id, e)
            raise StoreError(str(e)) from e
        logger.info("문서 수정: %s/%s", path, record_id)
        self._push(path)

    def delete(self, path, record_id):
        from .models import StoredRecord
        try:
            row = StoredRecord.query.filter_by(Collection_Path=path, Record_ID=record_id).first()
            # (없는 문서 삭제는 성공으로 취급)
            if row is not None:
                self.db.session.delete(row)
                self.db.session.commit()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            logger.error("문서 삭제 실패 (%s/%s): %s", path, record_id, e)
            raise StoreError(str(e)) from e
        logger.info("문서 삭제: %s/%s", path, record_id)
        self._push(path)
