# Ro-Aviation/ro_aviation/main/main_views.py
# (공개 페이지: 홈, 예약 요청, 채용, 사진첩, 고객지원)

from . import main_bp
from ..app_state import load_state
from ..lists import open_record_list, serialize_record
from ..record_kinds import (ANNOUNCEMENT, LIVE_FLIGHT, PHOTO, BOOKING_REQUEST,
                            SUPPORT_REQUEST, STAFF_MEMBER, AIRCRAFT, get_kind)
from flask import render_template, request, redirect, url_for, jsonify, current_app, abort

# (채용 페이지 모집 분야)
OPENINGS = [
    ('Pilot (Experienced / Cadet)',
     'Fly our modern fleet across various routes. Requires strong communication and adherence to procedures.'),
    ('Air Traffic Controller (ATC)',
     'Guide our aircraft safely through the skies. Requires excellent situational awareness.'),
    ('Ground Staff',
     'Ensure smooth operations on the ground, from baggage handling to boarding.'),
    ('Discord Server Moderator',
     'Help manage our community, ensuring a friendly and engaging environment.'),
]


@main_bp.route('/')
def home():
    """홈: 공지, 실시간 운항, 직원 소개, 기체 소개"""
    load_state().navigate('home')
    return render_template('home.html',
                           announcements=open_record_list(ANNOUNCEMENT).records,
                           live_flights=open_record_list(LIVE_FLIGHT).records,
                           staff_team=open_record_list(STAFF_MEMBER).records,
                           fleet=open_record_list(AIRCRAFT).records,
                           roblox_group_link=current_app.config['ROBLOX_GROUP_LINK'])


def _request_form_page(kind, view, template, success_text):
    """
    예약/고객지원 공용 처리.
    성공하면 안내 메시지로 바꾸고 리다이렉트, 실패하면 입력값 그대로 다시 렌더링.
    """
    state = load_state()
    state.navigate(view)
    requests_list = open_record_list(kind)

    if request.method == 'POST':
        if requests_list.create(request.form):
            # (RecordList 기본 문구 대신 방문자용 안내로 교체)
            state.notify('success', success_text)
            return redirect(url_for(f'main.{view}', sent=1))

    return render_template(template,
                           form_data=requests_list.form,
                           sent=request.args.get('sent') == '1')


@main_bp.route('/booking', methods=['GET', 'POST'])
def booking():
    return _request_form_page(
        BOOKING_REQUEST, 'booking', 'booking.html',
        'Your booking request has been sent! We will contact you via Discord.')


@main_bp.route('/careers')
def careers():
    load_state().navigate('careers')
    return render_template('careers.html', openings=OPENINGS)


@main_bp.route('/photos')
def photo_album():
    load_state().navigate('photoAlbum')
    return render_template('photos.html', photos=open_record_list(PHOTO).records)


@main_bp.route('/support', methods=['GET', 'POST'])
def support():
    return _request_form_page(
        SUPPORT_REQUEST, 'support', 'support.html',
        'Your support enquiry has been sent! We will get back to you soon via Discord.')


# [!!!] 홈 화면 운항 표 폴링용 JSON (화면 순서 그대로) [!!!]
@main_bp.route('/api/records/<kind_name>')
def records_api(kind_name):
    kind = get_kind(kind_name)
    if kind is None:
        abort(404)
    if not kind.public and not load_state().staff_authenticated:
        abort(403)
    records = open_record_list(kind).records
    return jsonify({'kind': kind.name, 'records': [serialize_record(r) for r in records]})
