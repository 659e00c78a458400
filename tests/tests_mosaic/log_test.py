import datetime
import json
import logging
import subprocess
import sys

from colorama import Fore, Style

import mosaic.log


def run_python(code, cwd):
    return subprocess.run(
        [sys.executable, "-c", "\n".join(code)], cwd=cwd, capture_output=True
    )


def test_log(tmp_path):
    p = run_python(
        (
            "import mosaic.log",
            'mosaic.log.activate(filename="log.txt")',
            'l = mosaic.log.getLogger("test_log")',
            'l.debug("this is a log record")',
        ),
        cwd=tmp_path,
    )
    assert p.returncode == 0

    with open(tmp_path / "log.txt") as f:
        line = f.readline()
    # Get datetime in the log
    log_datetime, _, message = line.partition(": ")
    assert "mosaic.test_log" in message
    assert "this is a log record" in message

    # Parse it and verify that it is it in GMT
    now = datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)
    logged = datetime.datetime.strptime(log_datetime, "%Y-%m-%d %H:%M:%S,%f")
    assert abs((now - logged).total_seconds()) < 60


def test_json_log(tmp_path):
    p = run_python(
        (
            "import mosaic.log",
            'mosaic.log.activate(filename="log.json", json_format=True)',
            'l = mosaic.log.getLogger("test_log")',
            'l.info("first record")',
            'l.error("second record")',
        ),
        cwd=tmp_path,
    )
    assert p.returncode == 0

    with open(tmp_path / "log.json") as f:
        records = [json.loads(line) for line in f if line.strip()]

    assert [r["message"] for r in records] == ["first record", "second record"]
    assert [r["levelname"] for r in records] == ["INFO", "ERROR"]
    assert {r["name"] for r in records} == {"mosaic.test_log"}
    assert all("asctime" in r for r in records)


def test_json_formatter_context():
    fmt = mosaic.log.JSONFormatter(context={"array": "main"})
    record = logging.LogRecord("mosaic.x", logging.INFO, __file__, 1, "msg", (), None)

    result = json.loads(fmt.format(record))
    assert result["array"] == "main"
    assert result["message"] == "msg"
    assert "exc_text" not in result


def test_debug_logger(tmp_path):
    p = run_python(
        (
            "import mosaic.log",
            'mosaic.log.activate(filename="silent.txt")',
            'mosaic.log.debug("hidden")',
        ),
        cwd=tmp_path,
    )
    assert p.returncode == 0
    assert "hidden" not in (tmp_path / "silent.txt").read_text()

    p = run_python(
        (
            "import mosaic.log",
            'mosaic.log.activate(filename="debug.txt", mosaic_debug=True)',
            'mosaic.log.debug("visible")',
        ),
        cwd=tmp_path,
    )
    assert p.returncode == 0
    assert "visible" in (tmp_path / "debug.txt").read_text()


def test_array_debug_logs(caplog):
    from mosaic.collection import MosaicArray

    with caplog.at_level(logging.DEBUG, logger="mosaic"):
        MosaicArray([1]).replace_target({"a": "b"}).preg_keys("a")

    assert "target replaced (1 entries)" in caplog.text
    assert "grep 'a' in 1 entries" in caplog.text


def test_pretty_handler(monkeypatch):
    monkeypatch.setattr(mosaic.log, "pretty_cli", True)
    handler = mosaic.log.add_log_handlers(
        logging.WARNING, "%(levelname)-8s %(message)s"
    )
    try:
        assert isinstance(handler, mosaic.log.TqdmHandler)
        assert handler.level == logging.WARNING
    finally:
        logging.getLogger("").removeHandler(handler)


def test_tqdm_handler_colors(monkeypatch):
    written = []
    monkeypatch.setattr(
        mosaic.log.tqdm, "write", lambda msg, file=None: written.append(msg)
    )

    handler = mosaic.log.TqdmHandler()
    handler.setFormatter(logging.Formatter("%(levelname)-8s %(message)s"))
    record = logging.LogRecord(
        "mosaic.test", logging.WARNING, __file__, 1, "first\nsecond", None, None
    )
    handler.emit(record)

    assert written == [
        Fore.YELLOW
        + "WARNING"
        + Fore.RESET
        + Style.RESET_ALL
        + "  first\n"
        + " " * 9
        + "second"
    ]


def test_tqdm_handler_unknown_level():
    handler = mosaic.log.TqdmHandler()
    assert handler.colorize("custom message") == "custom message"
    assert handler.colorize("DEBUG x").startswith(Fore.CYAN + "DEBUG")
