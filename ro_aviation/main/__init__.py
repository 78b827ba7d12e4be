# Ro-Aviation/ro_aviation/main/__init__.py

from flask import Blueprint

# 'main' 블루프린트 정의 (공개 페이지)
main_bp = Blueprint('main', __name__, template_folder='../templates')

# main_views.py 파일을 임포트해서 라우트들을 등록합니다.
from . import main_views
