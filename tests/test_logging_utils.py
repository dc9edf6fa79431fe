import logging

from blackjack.common import logging_utils
from blackjack.common.logging_utils import get_logger, log_message, preview


def test_preview_cuts_long_frames():
    assert preview("abc") == "abc"
    assert preview("x" * 200, max_len=10) == "x" * 10 + " ... (+190 chars)"


def test_log_message_line(caplog, monkeypatch):
    monkeypatch.setattr(logging_utils, "LOG_RAW", True)
    log = get_logger("test.frames")
    with caplog.at_level(logging.DEBUG, logger="test.frames"):
        log_message(log, "IN", ("127.0.0.1", 3000), '{"a":1}', note="frame received")
        log_message(log, "OUT", None, "{}", parsed="Hit")
    first, second = (r.getMessage() for r in caplog.records)
    assert first == '[IN] 127.0.0.1:3000 | 7 chars | frame received | raw={"a":1}'
    assert second == "[OUT] - | 2 chars | message=Hit | raw={}"
