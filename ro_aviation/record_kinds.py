# Ro-Aviation/ro_aviation/record_kinds.py
# (일곱 가지 레코드 종류 정의 + 정렬 규칙)

# --- 실시간 운항 상태 ---
FLIGHT_STATUSES = ('Scheduled', 'Departed', 'En Route', 'Arrived', 'Cancelled', 'Delayed')

# (숫자가 작을수록 위에 표시. 목록에 없는 상태는 99)
STATUS_RANK = {'En Route': 1, 'Departed': 2, 'Scheduled': 3, 'Arrived': 4, 'Cancelled': 5}
UNRANKED_STATUS = 99


# --- 정렬 규칙 ---
# (모두 안정 정렬이라 같은 키끼리는 스냅샷의 삽입 순서를 유지합니다)

def newest_first(records):
    """타임스탬프 내림차순. 타임스탬프가 없는 레코드는 맨 뒤로"""
    stamped = [r for r in records if r.get('timestamp') is not None]
    unstamped = [r for r in records if r.get('timestamp') is None]
    return sorted(stamped, key=lambda r: r['timestamp'], reverse=True) + unstamped


def by_status(records):
    return sorted(records, key=lambda r: STATUS_RANK.get(r.get('status'), UNRANKED_STATUS))


def _order_key(record):
    try:
        return (0, float(record.get('order')))
    except (TypeError, ValueError):
        # (order 없음/빈 값 -> 명시적 order 가진 레코드 전부 뒤)
        return (1, 0.0)


def by_order(records):
    return sorted(records, key=_order_key)


class RecordKind:
    """
    레코드 종류 하나의 기술자(descriptor).
    RecordList는 이 객체만 보고 검증, 저장 필드, 정렬을 결정합니다.
    """

    def __init__(self, name, label, required, optional=(), sort=newest_first,
                 editor_field='lastUpdatedBy', required_message=None,
                 load_error=None, choices=None, numeric=(), defaults=None,
                 staff_editable=True, public=True, plural=None,
                 save_error=None):
        self.name = name
        self.label = label
        self.plural = plural or f"{label}s"
        self.required = tuple(required)
        self.optional = tuple(optional)
        self.sort = sort
        self.editor_field = editor_field
        self.required_message = required_message or f"{', '.join(self.required)} are required."
        self.load_error = load_error or f"Failed to load {self.plural.lower()}."
        self.save_error = save_error or f"Failed to add/update {label.lower()}"
        self.choices = choices or {}
        self.numeric = tuple(numeric)
        self.defaults = defaults or {}
        self.staff_editable = staff_editable
        # (public=False: 방문자 화면과 API에 노출하지 않는 접수 기록)
        self.public = public

    @property
    def fields(self):
        return self.required + self.optional

    def collection_path(self, app_id):
        return f"artifacts/{app_id}/public/data/{self.name}"

    def empty_form(self):
        form = {field: '' for field in self.fields}
        form.update(self.defaults)
        return form

    def sort_records(self, records):
        return self.sort(list(records))

    def __repr__(self):
        return f"<RecordKind {self.name}>"


ANNOUNCEMENT = RecordKind(
    'announcements', 'Announcement',
    required=('title', 'message'), optional=('imageUrl',),
    editor_field='authorId',
    required_message='Title and Message are required.',
)

LIVE_FLIGHT = RecordKind(
    'liveFlights', 'Live flight',
    required=('flight', 'origin', 'destination', 'status'), optional=('eta',),
    sort=by_status,
    required_message='Flight, Origin, Destination, and Status are required.',
    load_error='Failed to load live flight data.',
    choices={'status': FLIGHT_STATUSES},
    defaults={'status': 'Scheduled'},
)

PHOTO = RecordKind(
    'photos', 'Photo',
    required=('src', 'title', 'description'),
    editor_field='uploadedBy',
    required_message='Image URL, Title, and Description are required.',
)

BOOKING_REQUEST = RecordKind(
    'bookingRequests', 'Booking request',
    required=('discordUser', 'robloxUser', 'from', 'to', 'date'),
    editor_field='userId',
    required_message='Discord user, Roblox user, From, To and Date are required.',
    save_error='Failed to send booking request',
    staff_editable=False,
    public=False,
)

SUPPORT_REQUEST = RecordKind(
    'supportRequests', 'Support request',
    required=('discordUser', 'robloxUser', 'subject', 'message'),
    editor_field='userId',
    required_message='Discord user, Roblox user, Subject and Message are required.',
    save_error='Failed to send support request',
    staff_editable=False,
    public=False,
)

STAFF_MEMBER = RecordKind(
    'staffTeam', 'Staff member',
    required=('name', 'role'), optional=('imageUrl', 'order'),
    sort=by_order,
    required_message='Name and Role are required for staff members.',
    load_error='Failed to load staff team data.',
    numeric=('order',),
)

AIRCRAFT = RecordKind(
    'fleet', 'Aircraft',
    plural='Aircraft',
    required=('type', 'description'), optional=('imageUrl', 'order'),
    sort=by_order,
    required_message='Aircraft Type and Description are required.',
    load_error='Failed to load fleet information.',
    numeric=('order',),
)

# (대시보드 탭 순서)
ALL_KINDS = (ANNOUNCEMENT, LIVE_FLIGHT, PHOTO, BOOKING_REQUEST, SUPPORT_REQUEST, STAFF_MEMBER, AIRCRAFT)
KINDS_BY_NAME = {kind.name: kind for kind in ALL_KINDS}


def get_kind(name):
    """이름으로 레코드 종류 조회 (없으면 None)"""
    return KINDS_BY_NAME.get(name)
