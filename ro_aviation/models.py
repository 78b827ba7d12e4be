# Ro-Aviation/ro_aviation/models.py
# (레코드 스토어의 문서 테이블)

from .extensions import db


class StoredRecord(db.Model):
    """
    컬렉션 경로 하나에 속한 문서 하나.
    필드는 JSON 그대로 저장하고, 타임스탬프만 별도 컬럼으로 둡니다.
    """
    __tablename__ = 'stored_record'

    # (삽입 순서 보존용 내부 키)
    Seq = db.Column(db.Integer, primary_key=True, autoincrement=True)
    Record_ID = db.Column(db.String(20), unique=True, nullable=False)
    Collection_Path = db.Column(db.String(200), nullable=False, index=True)
    Fields = db.Column(db.JSON, nullable=False, default=dict)
    Timestamp = db.Column(db.DATETIME, nullable=True)

    def to_data(self):
        data = dict(self.Fields or {})
        if self.Timestamp is not None:
            data['timestamp'] = self.Timestamp
        return data

    def __repr__(self):
        return f"<StoredRecord {self.Record_ID} ({self.Collection_Path})>"
