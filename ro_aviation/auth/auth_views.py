# Ro-Aviation/ro_aviation/auth/auth_views.py
# (직원 로그인/로그아웃)

from . import auth_bp
from ..app_state import StaffGate, load_state
from flask import render_template, request, redirect, url_for, current_app


def render_login(state):
    return render_template('staff_login.html', error=state.login_error)


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    state = load_state()

    if request.method == 'POST':
        gate = StaffGate(current_app.config.get('STAFF_PASSWORD'))
        if gate.attempt_login(state, request.form.get('password')):
            return redirect(url_for('staff.dashboard'))
        return render_login(state)

    # (이미 로그인 상태면 대시보드로)
    if state.navigate('staffDashboard') == 'staffDashboard':
        return redirect(url_for('staff.dashboard'))
    return render_login(state)


@auth_bp.route('/logout')
def logout():
    StaffGate.logout(load_state())
    return redirect(url_for('main.home'))
