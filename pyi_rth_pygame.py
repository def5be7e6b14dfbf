"""
PyInstaller 런타임 훅: 처리되지 않은 예외를 파일로 저장
"""
import sys
import traceback
from pathlib import Path
from typing import Optional

from path_utils import get_log_dir

ERROR_LOG_NAME = "error_log.txt"


def write_error_log(exc_type, exc_value, exc_traceback, *, log_dir: Optional[Path] = None) -> Path:
    """트레이스백을 error_log.txt에 기록하고 그 경로를 반환"""
    error_log = (log_dir or get_log_dir()) / ERROR_LOG_NAME
    with open(error_log, "w", encoding="utf-8") as f:
        f.write("=" * 60 + "\n")
        f.write("Snake crashed\n")
        f.write("=" * 60 + "\n\n")
        f.write(f"Error type: {exc_type.__name__}\n")
        f.write(f"Message: {exc_value}\n\n")
        f.write("Traceback:\n")
        f.write("-" * 60 + "\n")
        traceback.print_exception(exc_type, exc_value, exc_traceback, file=f)
        f.write("\n" + "=" * 60 + "\n")
    return error_log


def handle_exception(exc_type, exc_value, exc_traceback):
    """예외 발생 시 파일로 저장하고 콘솔에 출력"""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return

    error_log = write_error_log(exc_type, exc_value, exc_traceback)

    print("\n" + "=" * 60)
    print("Snake crashed!")
    print("=" * 60)
    print(f"Error type: {exc_type.__name__}")
    print(f"Message: {exc_value}")
    print("\nTraceback:")
    print("-" * 60)
    traceback.print_exception(exc_type, exc_value, exc_traceback)
    print("\n" + "=" * 60)
    print(f"\nError log written to: {error_log}")
    print("\nPress Enter to exit...")
    try:
        input()
    except (EOFError, RuntimeError):
        # --windowed 빌드에는 stdin이 없다.
        pass


def install() -> None:
    sys.excepthook = handle_exception


# 런타임 훅으로 로드되면 바로 전역 예외 핸들러를 설정
if getattr(sys, 'frozen', False):
    install()
