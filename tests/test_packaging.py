import sys

import build_exe
import pyi_rth_pygame


def _exc_info():
    try:
        1 / 0
    except ZeroDivisionError:
        return sys.exc_info()


def test_write_error_log(tmp_path):
    path = pyi_rth_pygame.write_error_log(*_exc_info(), log_dir=tmp_path)

    assert path == tmp_path / "error_log.txt"
    text = path.read_text(encoding="utf-8")
    assert "ZeroDivisionError" in text
    assert "Traceback" in text


def test_handle_exception_logs_and_reports(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(pyi_rth_pygame, "get_log_dir", lambda: tmp_path)

    def no_stdin():
        raise EOFError

    monkeypatch.setattr("builtins.input", no_stdin)

    pyi_rth_pygame.handle_exception(*_exc_info())

    assert (tmp_path / "error_log.txt").exists()
    out = capsys.readouterr().out
    assert "ZeroDivisionError" in out
    assert str(tmp_path / "error_log.txt") in out


def test_install_sets_excepthook(monkeypatch):
    monkeypatch.setattr(sys, "excepthook", sys.__excepthook__)
    pyi_rth_pygame.install()
    assert sys.excepthook is pyi_rth_pygame.handle_exception


def test_build_command(tmp_path):
    cmd = build_exe.build_command(tmp_path)
    assert cmd[0] == "pyinstaller"
    assert "--onefile" in cmd
    assert "--runtime-hook=pyi_rth_pygame.py" in cmd
    assert cmd[-1] == "snake_game.py"
    assert not any(arg.startswith("--add-data") for arg in cmd)

    (tmp_path / "assets" / "fonts").mkdir(parents=True)
    cmd = build_exe.build_command(tmp_path)
    assert any(arg.startswith("--add-data") for arg in cmd)
