import datetime

import pytest

from ro_aviation.record_kinds import (ALL_KINDS, AIRCRAFT, ANNOUNCEMENT, LIVE_FLIGHT,
                                      STAFF_MEMBER, get_kind)


def _stamp(minutes):
    return datetime.datetime(2025, 1, 1) + datetime.timedelta(minutes=minutes)


def test_live_flights_sorted_by_status_rank():
    records = [{'id': str(i), 'status': status}
               for i, status in enumerate(['Cancelled', 'En Route', 'Scheduled', 'Arrived'])]
    ordered = [r['status'] for r in LIVE_FLIGHT.sort_records(records)]
    assert ordered == ['En Route', 'Scheduled', 'Arrived', 'Cancelled']


def test_live_flights_with_same_status_keep_insertion_order():
    records = [{'id': 'a', 'status': 'Scheduled'}, {'id': 'b', 'status': 'En Route'},
               {'id': 'c', 'status': 'Scheduled'}]
    assert [r['id'] for r in LIVE_FLIGHT.sort_records(records)] == ['b', 'a', 'c']


def test_unranked_status_sorts_last():
    records = [{'id': 'a', 'status': 'Delayed'}, {'id': 'b', 'status': 'Cancelled'}]
    assert [r['id'] for r in LIVE_FLIGHT.sort_records(records)] == ['b', 'a']


@pytest.mark.parametrize('kind', [STAFF_MEMBER, AIRCRAFT])
def test_missing_order_sorts_after_explicit_order(kind):
    records = [{'id': 'none'}, {'id': 'blank', 'order': ''}, {'id': 'three', 'order': 3},
               {'id': 'one', 'order': 1}, {'id': 'zero', 'order': 0}]
    ordered = [r['id'] for r in kind.sort_records(records)]
    assert ordered == ['zero', 'one', 'three', 'none', 'blank']


def test_announcements_newest_first_and_unstamped_last():
    records = [{'id': 'old', 'timestamp': _stamp(1)}, {'id': 'pending'},
               {'id': 'new', 'timestamp': _stamp(5)}]
    assert [r['id'] for r in ANNOUNCEMENT.sort_records(records)] == ['new', 'old', 'pending']


@pytest.mark.parametrize('kind', ALL_KINDS, ids=lambda k: k.name)
def test_sorting_is_idempotent(kind):
    records = [{'id': 'a', 'status': 'Arrived', 'order': 2, 'timestamp': _stamp(2)},
               {'id': 'b', 'status': 'En Route', 'timestamp': _stamp(2)},
               {'id': 'c', 'status': 'Arrived', 'order': 1, 'timestamp': _stamp(9)}]
    first = [r['id'] for r in kind.sort_records(records)]
    second = [r['id'] for r in kind.sort_records(records)]
    assert first == second


def test_collection_path_and_lookup():
    assert ANNOUNCEMENT.collection_path('my-app') == 'artifacts/my-app/public/data/announcements'
    assert get_kind('fleet') is AIRCRAFT
    assert get_kind('nope') is None


def test_empty_form_uses_defaults():
    assert LIVE_FLIGHT.empty_form() == {'flight': '', 'origin': '', 'destination': '',
                                        'status': 'Scheduled', 'eta': ''}
