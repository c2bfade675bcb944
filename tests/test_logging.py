import json
import logging

from file_processor.utils.logging import (
    JSONFormatter,
    StandardFormatter,
    file_logger,
    get_logger,
    request_id_var,
)


class _Collector(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


def _record(msg="Processed file", **extra):
    record = logging.LogRecord(
        name="file_processor.pipeline",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_get_logger_namespaced():
    assert get_logger("pipeline").name == "file_processor.pipeline"
    assert get_logger().name == "file_processor"


def test_json_formatter_includes_request_id_and_fields():
    token = request_id_var.set("req-1")
    try:
        output = json.loads(
            JSONFormatter().format(_record(extra_fields={"file_id": "file-1", "chunk_index": 2}))
        )
    finally:
        request_id_var.reset(token)

    assert output["message"] == "Processed file"
    assert output["level"] == "INFO"
    assert output["request_id"] == "req-1"
    assert output["file_id"] == "file-1"
    assert output["chunk_index"] == 2


def test_standard_formatter_appends_fields():
    line = StandardFormatter().format(_record(extra_fields={"file_id": "file-1"}))

    assert line.endswith("Processed file | file_id=file-1")


def test_standard_formatter_without_context():
    line = StandardFormatter().format(_record())

    assert line.endswith(" - INFO - Processed file")


def test_file_logger_binds_file_id_and_keeps_call_fields():
    logger = logging.getLogger("file_processor.tests.file_logger")
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    collector = _Collector()
    logger.addHandler(collector)
    try:
        log = file_logger(logger, "file-7")
        log.warning("Chunk 3 was not stored", extra={"extra_fields": {"chunk_index": 3}})
        log.info("Processed file")
    finally:
        logger.removeHandler(collector)

    assert collector.records[0].extra_fields == {"file_id": "file-7", "chunk_index": 3}
    assert collector.records[1].extra_fields == {"file_id": "file-7"}
