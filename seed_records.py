# Ro-Aviation/seed_records.py
# 데모용 직원/기체/운항 데이터 생성 스크립트

from ro_aviation import create_app
from ro_aviation.record_kinds import STAFF_MEMBER, AIRCRAFT, LIVE_FLIGHT
from ro_aviation.store import SERVER_TIMESTAMP, StoreError

SEED_USER = 'seed-script'

DEMO_RECORDS = {
    STAFF_MEMBER: [
        {'name': 'Jane Doe', 'role': 'Chief Executive Officer', 'imageUrl': '', 'order': 1},
        {'name': 'Sam Carter', 'role': 'Senior Pilot', 'imageUrl': '', 'order': 2},
        {'name': 'Alex Reid', 'role': 'Community Manager', 'imageUrl': '', 'order': ''},
    ],
    AIRCRAFT: [
        {'type': 'Airbus A320', 'description': 'Our workhorse, perfect for short-haul flights.', 'imageUrl': '', 'order': 1},
        {'type': 'Airbus A321neo', 'description': 'Extra seats for our busiest routes.', 'imageUrl': '', 'order': 2},
    ],
    LIVE_FLIGHT: [
        {'flight': 'EZY123', 'origin': 'LGW', 'destination': 'AMS', 'status': 'En Route', 'eta': '14:35'},
        {'flight': 'EZY456', 'origin': 'AMS', 'destination': 'LGW', 'status': 'Scheduled', 'eta': '17:10'},
    ],
}


def seed_records():
    """데모 레코드 생성 (컬렉션에 이미 데이터가 있으면 건너뜀)"""
    app = create_app()

    with app.app_context():
        store = app.extensions.get('record_store')
        if store is None:
            print("레코드 스토어가 설정되지 않았습니다. DATABASE_URL 을 확인하세요.")
            return

        for kind, records in DEMO_RECORDS.items():
            path = kind.collection_path(app.config['APP_ID'])
            if store.snapshot(path):
                print(f"{kind.plural}: 이미 데이터가 존재합니다. 건너뜁니다.")
                continue
            try:
                for fields in records:
                    payload = dict(fields, timestamp=SERVER_TIMESTAMP)
                    payload[kind.editor_field] = SEED_USER
                    store.create(path, payload)
            except StoreError as e:
                print(f"오류 발생 ({kind.plural}): {e.message}")
                return
            print(f"{kind.plural}: {len(records)}건 생성")


if __name__ == '__main__':
    seed_records()
