# Ro-Aviation/check_records.py
# 컬렉션 내용 확인 스크립트 (화면과 같은 정렬 순서로 출력)

from ro_aviation import create_app
from ro_aviation.record_kinds import ALL_KINDS
from ro_aviation.store import StoreError


def check_records():
    app = create_app()

    with app.app_context():
        store = app.extensions.get('record_store')
        if store is None:
            print("레코드 스토어가 설정되지 않았습니다. DATABASE_URL 을 확인하세요.")
            return

        for kind in ALL_KINDS:
            path = kind.collection_path(app.config['APP_ID'])
            try:
                snapshot = store.snapshot(path)
            except StoreError as e:
                print(f"오류 발생 ({path}): {e.message}")
                continue

            records = kind.sort_records(dict(data, id=record_id) for record_id, data in snapshot)
            print("=" * 60)
            print(f"{kind.plural} ({len(records)}건) - {path}")
            print("-" * 60)
            for record in records:
                summary = " | ".join(f"{field}: {record.get(field, '')}" for field in kind.fields)
                print(f"{record['id']:20} | {summary}")


if __name__ == '__main__':
    check_records()
