# Ro-Aviation/ro_aviation/auth/__init__.py

from flask import Blueprint

# 'auth' 블루프린트 정의 (직원 게이트)
auth_bp = Blueprint('auth', __name__, template_folder='../templates')

from . import auth_views
