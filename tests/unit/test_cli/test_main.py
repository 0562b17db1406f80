# SPDX-License-Identifier: LGPL-3.0-or-later
import pytest

from vcd_extraconfig import __main__ as entry
from vcd_extraconfig.core.exceptions import Fatal


@pytest.mark.unit
class TestMain:
    def test_missing_config_exits_1(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as ei:
            entry.main(["-config", str(tmp_path / "absent.json"), "-action", "find", "-vm", "VM1"])

        assert ei.value.code == 1
        captured = capsys.readouterr()
        assert "Error loading configuration" in captured.err
        assert captured.out == ""

    def test_no_action_exits_1(self, capsys):
        with pytest.raises(SystemExit) as ei:
            entry.main([])

        assert ei.value.code == 1
        assert "action must be specified" in capsys.readouterr().err

    def test_unusable_log_file_exits_1(self, tmp_path, capsys):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("", encoding="utf-8")

        with pytest.raises(SystemExit) as ei:
            entry.main(["-action", "find", "--log-file", str(blocker / "run.log")])

        assert ei.value.code == 1
        assert "Error: cannot open log file" in capsys.readouterr().err

    def test_ctrl_c_exits_130(self, monkeypatch, capsys):
        def interrupted(argv=None):
            raise KeyboardInterrupt

        monkeypatch.setattr(entry, "run", interrupted)

        with pytest.raises(SystemExit) as ei:
            entry.main([])

        assert ei.value.code == 130

    def test_fatal_code_is_honored(self, monkeypatch, capsys):
        def fatal(argv=None):
            raise Fatal(code=3, msg="cannot continue")

        monkeypatch.setattr(entry, "run", fatal)

        with pytest.raises(SystemExit) as ei:
            entry.main([])

        assert ei.value.code == 3
        assert "Error: cannot continue" in capsys.readouterr().err

    def test_unexpected_exception_exits_1(self, monkeypatch, capsys):
        def broken(argv=None):
            raise RuntimeError("bug")

        monkeypatch.setattr(entry, "run", broken)

        with pytest.raises(SystemExit) as ei:
            entry.main([])

        assert ei.value.code == 1
        assert "UNHANDLED RuntimeError: bug" in capsys.readouterr().err
