# tests/test_progress_log.py

import logging

from pu_pipeline.progress_log import LoggingProgressLog, OutputCapture


def test_capture_forwards_and_accumulates(list_log):
    cap = OutputCapture(forward_to=list_log)
    cap.write("one")
    cap.write("two\n")

    assert list_log.lines == ["one", "two"]
    assert cap.drain() == "one\ntwo\n"
    assert cap.drain() == ""


def test_logging_sink_writes_to_logger(caplog):
    with caplog.at_level(logging.INFO, logger="pu_pipeline.progress"):
        LoggingProgressLog().write("Running 'npm install'\n")
    assert caplog.messages == ["Running 'npm install'"]
