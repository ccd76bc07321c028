import re
from datetime import datetime

from path2url.telemetry.run_logger import RunLogger, format_line

LINE_RE = re.compile(r"\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] \[(INFO|ERROR)\] .+")


def test_format_line():
    line = format_line("hello", "ERROR", now=datetime(2024, 3, 5, 7, 8, 9))
    assert line == "[2024-03-05 07:08:09] [ERROR] hello"


def test_events_are_appended(tmp_path):
    path = tmp_path / "logs" / "url_converter.log"
    path.parent.mkdir()
    path.write_text("[2000-01-01 00:00:00] [INFO] earlier run\n")

    run_logger = RunLogger(path)
    run_logger.info("first")
    run_logger.error("second")

    lines = path.read_text().splitlines()
    assert len(lines) == 3
    assert lines[0].endswith("earlier run")
    assert all(LINE_RE.fullmatch(line) for line in lines)
    assert lines[1].endswith("[INFO] first")
    assert lines[2].endswith("[ERROR] second")


def test_unwritable_log_does_not_raise(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    RunLogger(blocker / "run.log").info("ignored")
