import pytest

from ro_aviation.record_kinds import (ALL_KINDS, ANNOUNCEMENT, BOOKING_REQUEST, LIVE_FLIGHT,
                                     STAFF_MEMBER, SUPPORT_REQUEST)
from ro_aviation.record_list import STORE_NOT_READY, RecordList
from ro_aviation.store import StoreError

APP_ID = 'test-app'


def _valid_fields(kind):
    fields = {field: f"{field}-value" for field in kind.required}
    if 'status' in fields:
        fields['status'] = 'En Route'
    return fields


@pytest.fixture()
def make_list(fake_store, notifications):
    def _make(kind, store=fake_store, user_id='user-1'):
        return RecordList(kind, store, notifications, user_id=user_id, app_id=APP_ID)
    return _make


@pytest.mark.parametrize('kind', ALL_KINDS, ids=lambda k: k.name)
def test_create_with_missing_required_field_never_calls_store(kind, make_list, fake_store, notifications):
    for missing in kind.required:
        fields = _valid_fields(kind)
        fields[missing] = '   '
        record_list = make_list(kind)
        assert record_list.create(fields) is False
        assert fake_store.calls == []
        assert notifications.current() == {'visible': True, 'kind': 'error', 'text': kind.required_message}
        # (input kept for retry)
        assert record_list.form[missing] == '   '


def test_invalid_status_rejected_locally(make_list, fake_store, notifications):
    fields = _valid_fields(LIVE_FLIGHT)
    fields['status'] = 'Teleported'
    assert make_list(LIVE_FLIGHT).create(fields) is False
    assert fake_store.calls == []
    assert notifications.current()['kind'] == 'error'


def test_non_numeric_order_rejected_locally(make_list, fake_store):
    assert make_list(STAFF_MEMBER).create({'name': 'Jo', 'role': 'Pilot', 'order': 'first'}) is False
    assert fake_store.calls == []


def test_create_success_stamps_and_clears_form(make_list, fake_store, notifications):
    record_list = make_list(ANNOUNCEMENT).subscribe()
    assert record_list.create({'title': 'Hello', 'message': 'World'}) is True

    (record_id, data), = fake_store.snapshot(record_list.path)
    assert data['title'] == 'Hello'
    assert data['imageUrl'] == ''
    assert data['authorId'] == 'user-1'
    assert data['timestamp'] is not None

    assert record_list.form == ANNOUNCEMENT.empty_form()
    assert notifications.current() == {'visible': True, 'kind': 'success',
                                       'text': 'Announcement added successfully!'}
    # (pushed back through the live subscription)
    assert [r['id'] for r in record_list.records] == [record_id]


def test_create_store_failure_keeps_form(make_list, fake_store, notifications):
    fake_store.fail_with = 'permission-denied'
    record_list = make_list(ANNOUNCEMENT)
    assert record_list.create({'title': 'Hello', 'message': 'World'}) is False
    assert record_list.form['title'] == 'Hello'
    assert notifications.current() == {'visible': True, 'kind': 'error',
                                       'text': 'Failed to add/update announcement: permission-denied'}
    assert fake_store.calls == ['create']


@pytest.mark.parametrize('kind, text', [
    (BOOKING_REQUEST, 'Failed to send booking request: quota'),
    (SUPPORT_REQUEST, 'Failed to send support request: quota'),
    (LIVE_FLIGHT, 'Failed to add/update live flight: quota'),
])
def test_store_failure_text_per_kind(kind, text, make_list, fake_store, notifications):
    fake_store.fail_with = 'quota'
    assert make_list(kind).create(_valid_fields(kind)) is False
    assert notifications.current()['text'] == text


def test_numeric_order_stored_as_int(make_list, fake_store):
    record_list = make_list(STAFF_MEMBER)
    record_list.create({'name': 'Jo', 'role': 'Pilot', 'order': ' 4 '})
    (_, data), = fake_store.snapshot(record_list.path)
    assert data['order'] == 4
    assert data['lastUpdatedBy'] == 'user-1'


def test_update_overwrites_all_fields_and_exits_edit_mode(make_list, fake_store, notifications):
    record_list = make_list(ANNOUNCEMENT).subscribe()
    record_list.create({'title': 'Old', 'message': 'Text', 'imageUrl': 'http://img'})
    record_id = record_list.records[0]['id']
    first_stamp = record_list.records[0]['timestamp']

    assert record_list.start_edit(record_id) is True
    assert record_list.form['title'] == 'Old'

    record_list.update(record_id, {'title': 'New', 'message': 'Text'})

    data = record_list.records[0]
    assert data['title'] == 'New'
    assert data['imageUrl'] == ''
    assert data['timestamp'] > first_stamp
    assert record_list.editing_id is None
    assert notifications.current()['text'] == 'Announcement updated successfully!'


def test_update_failure_keeps_edit_mode(make_list, fake_store, notifications):
    record_list = make_list(ANNOUNCEMENT)
    assert record_list.update('missing-id', {'title': 'New', 'message': 'Text'}) is False
    assert record_list.editing_id == 'missing-id'
    assert record_list.form['title'] == 'New'
    assert notifications.current()['text'].startswith('Failed to add/update announcement: No document to update')


def test_save_dispatches_on_edit_mode(make_list, fake_store):
    record_list = make_list(ANNOUNCEMENT).subscribe()
    record_list.save({'title': 'One', 'message': 'x'})
    record_list.start_edit(record_list.records[0]['id'])
    record_list.save({'title': 'Two', 'message': 'x'})
    assert fake_store.calls == ['create', 'update']
    assert len(record_list.records) == 1


def test_delete(make_list, fake_store, notifications):
    record_list = make_list(LIVE_FLIGHT).subscribe()
    record_list.create(_valid_fields(LIVE_FLIGHT))
    record_id = record_list.records[0]['id']

    assert record_list.delete(record_id) is True
    assert record_list.records == []
    assert notifications.current()['text'] == 'Live flight deleted successfully!'


def test_delete_failure_notifies_once(make_list, fake_store, notifications):
    fake_store.fail_with = 'unavailable'
    assert make_list(LIVE_FLIGHT).delete('abc') is False
    assert notifications.current()['text'] == 'Failed to delete live flight item: unavailable'


def test_every_snapshot_replaces_and_resorts(make_list, fake_store):
    record_list = make_list(LIVE_FLIGHT).subscribe()
    fake_store.seed(record_list.path, [{'flight': 'A', 'status': 'Arrived'}])
    assert [r['flight'] for r in record_list.records] == ['A']

    fake_store.seed(record_list.path, [{'flight': 'B', 'status': 'En Route'}])
    assert [r['flight'] for r in record_list.records] == ['B', 'A']
    assert all('id' in r for r in record_list.records)


def test_close_releases_subscription_once(make_list, fake_store):
    record_list = make_list(ANNOUNCEMENT).subscribe()
    assert fake_store.listeners.count(record_list.path) == 1
    record_list.close()
    record_list.close()
    assert fake_store.listeners.count(record_list.path) == 0

    fake_store.seed(record_list.path, [{'title': 'late', 'message': 'x'}])
    assert record_list.records == []


def test_context_manager_closes(make_list, fake_store):
    with make_list(ANNOUNCEMENT) as record_list:
        assert fake_store.listeners.count(record_list.path) == 1
    assert fake_store.listeners.count() == 0


def test_store_unavailable_degrades(make_list, notifications):
    record_list = make_list(ANNOUNCEMENT, store=None).subscribe()
    assert record_list.records == []
    assert record_list.create({'title': 'Hello', 'message': 'World'}) is False
    assert notifications.current()['text'] == STORE_NOT_READY
    assert record_list.form['title'] == 'Hello'


def test_subscription_error_notifies(make_list, fake_store, notifications):
    record_list = make_list(ANNOUNCEMENT).subscribe()
    fake_store.listeners.fail(record_list.path, StoreError('offline'))
    assert notifications.current() == {'visible': True, 'kind': 'error',
                                       'text': 'Failed to load announcements.'}
