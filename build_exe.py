"""
EXE 빌드 스크립트
PyInstaller를 사용하여 snake_game.py를 단일 실행 파일로 빌드합니다.
"""
import os
import subprocess
import sys
from pathlib import Path

APP_NAME = "Snake"
ENTRY_SCRIPT = "snake_game.py"
RUNTIME_HOOK = "pyi_rth_pygame.py"


def build_command(script_dir: Path) -> list:
    """pyinstaller 명령어를 구성합니다."""
    cmd = [
        "pyinstaller",
        f"--name={APP_NAME}",
        "--onefile",  # 단일 실행 파일
        "--windowed",  # 콘솔 창 숨기기
        f"--runtime-hook={RUNTIME_HOOK}",  # 오류 로그 훅
        "--clean",  # 빌드 전 캐시 정리
    ]
    # 폰트가 있으면 함께 포함 (구분자는 OS마다 다름: Windows ';', 그 외 ':')
    fonts_dir = script_dir / "assets" / "fonts"
    if fonts_dir.exists():
        cmd.append(f"--add-data=assets{os.sep}fonts{os.pathsep}assets{os.sep}fonts")
    cmd.append(ENTRY_SCRIPT)
    return cmd


def main():
    script_dir = Path(__file__).resolve().parent
    os.chdir(script_dir)

    try:
        import PyInstaller  # noqa: F401
        print("PyInstaller is already installed.")
    except ImportError:
        print("Installing PyInstaller...")
        subprocess.check_call([sys.executable, "-m", "pip", "install", "pyinstaller"])
        print("PyInstaller installed.")

    cmd = build_command(script_dir)
    print("Starting build...")
    print(f"Command: {' '.join(cmd)}")

    try:
        subprocess.check_call(cmd)
        print("\nBuild finished!")
        print(f"Executable: {script_dir / 'dist' / APP_NAME}")
    except subprocess.CalledProcessError as e:
        print(f"\nBuild failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
