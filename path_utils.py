"""
PyInstaller 빌드 환경에서도 올바른 경로를 반환하는 유틸리티
"""
import sys
from pathlib import Path


def get_base_path() -> Path:
    """
    번들된 리소스(폰트 등)를 찾을 기본 경로를 반환합니다.
    PyInstaller로 빌드된 경우 sys._MEIPASS를 사용하고,
    그렇지 않으면 이 파일이 있는 디렉토리를 사용합니다.
    """
    if getattr(sys, 'frozen', False):
        return Path(sys._MEIPASS)
    return Path(__file__).resolve().parent


def get_log_dir() -> Path:
    """
    오류 로그를 남길 디렉토리를 반환합니다.
    _MEIPASS는 종료 시 삭제되는 임시 폴더라서, 빌드된 경우에는 EXE 옆에 남깁니다.
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parent
