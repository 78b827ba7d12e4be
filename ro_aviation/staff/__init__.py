# Ro-Aviation/ro_aviation/staff/__init__.py

from flask import Blueprint

# 'staff' 블루프린트 정의 (직원 대시보드)
staff_bp = Blueprint('staff', __name__, template_folder='../templates')

# staff_views.py 파일을 임포트해서 라우트들을 등록합니다.
from . import staff_views
