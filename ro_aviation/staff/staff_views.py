# Ro-Aviation/ro_aviation/staff/staff_views.py
# (직원 대시보드: 일곱 컬렉션 관리)

from . import staff_bp
from ..app_state import load_state
from ..auth.auth_views import render_login
from ..lists import open_record_list
from ..record_kinds import ALL_KINDS, ANNOUNCEMENT, get_kind
from flask import render_template, request, redirect, url_for, abort
from functools import wraps


# 직원 게이트 확인 데코레이터
# (화면만 막는 용도. 인증 전이면 같은 요청에서 로그인 화면을 대신 렌더링)
def staff_gate_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        state = load_state()
        if state.navigate('staffDashboard') != 'staffDashboard':
            return render_login(state)
        return f(*args, **kwargs)
    return decorated_function


def _kind_or_404(kind_name, editable=False):
    kind = get_kind(kind_name)
    if kind is None or (editable and not kind.staff_editable):
        abort(404)
    return kind


def _render_dashboard(record_list, status=200):
    return render_template('staff_dashboard.html',
                           kinds=ALL_KINDS,
                           kind=record_list.kind,
                           records=record_list.records,
                           form_data=record_list.form,
                           editing_id=record_list.editing_id), status


@staff_bp.route('/dashboard')
@staff_gate_required
def dashboard():
    """탭 하나(기본: 공지사항)의 목록과 입력 폼"""
    kind = _kind_or_404(request.args.get('tab', ANNOUNCEMENT.name))
    return _render_dashboard(open_record_list(kind))


# --- 추가/수정 ---
@staff_bp.route('/<kind_name>/save', methods=['POST'])
@staff_gate_required
def save(kind_name):
    kind = _kind_or_404(kind_name, editable=True)
    record_list = open_record_list(kind)

    # (editing_id가 있으면 수정 모드)
    record_list.editing_id = request.form.get('editing_id') or None
    if record_list.save(request.form):
        return redirect(url_for('staff.dashboard', tab=kind.name))

    # (실패: 입력값과 수정 모드 유지)
    return _render_dashboard(record_list)


@staff_bp.route('/<kind_name>/<record_id>/edit')
@staff_gate_required
def edit(kind_name, record_id):
    kind = _kind_or_404(kind_name, editable=True)
    record_list = open_record_list(kind)
    if not record_list.start_edit(record_id):
        load_state().notify('error', f"{kind.label} not found.")
        return redirect(url_for('staff.dashboard', tab=kind.name))
    return _render_dashboard(record_list)


# --- 삭제 (확인 화면 -> 실제 삭제) ---
@staff_bp.route('/<kind_name>/<record_id>/delete', methods=['GET', 'POST'])
@staff_gate_required
def delete(kind_name, record_id):
    kind = _kind_or_404(kind_name)
    record_list = open_record_list(kind)

    if request.method == 'POST':
        record_list.delete(record_id)
        return redirect(url_for('staff.dashboard', tab=kind.name))

    return render_template('confirm_delete.html',
                           kind=kind,
                           record=record_list.find(record_id),
                           record_id=record_id)
