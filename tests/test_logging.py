import json
import logging

from seqpredict.config import Settings
from seqpredict.utils.logging import configure_logging


def _teardown():
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()


def test_json_lines(capsys):
    configure_logging(Settings(log_json=True, log_level="INFO"))
    try:
        logging.getLogger("seqpredict.test").info("hello", extra={"variant": "neural"})
        line = capsys.readouterr().out.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["msg"] == "hello"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "seqpredict.test"
        assert payload["variant"] == "neural"
    finally:
        _teardown()


def test_file_handler(tmp_path):
    log_file = tmp_path / "logs" / "seq.log"
    configure_logging(Settings(log_file=str(log_file), log_level="debug"))
    try:
        logging.getLogger("seqpredict.test").debug("written")
        for h in logging.getLogger().handlers:
            h.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "[DEBUG] seqpredict.test: written" in text
    finally:
        _teardown()
