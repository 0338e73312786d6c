#!/usr/bin/env python
# -*- coding: utf-8 -*-

import datetime
import logging
import os
import sys

import pytest

from chatkit.common import path as chatkit_path
from chatkit.common.log import ColoredFormatter, Context, _excepthook, \
    _get_file_handler, set_debug_mode, set_logs_level

colorFormater = ColoredFormatter()


@pytest.fixture(autouse=True)
def restore_levels():
    loggers = [logging.getLogger(), logging.getLogger('chatkit'),
               logging.getLogger('chatkit.promise')]
    levels = [logger.level for logger in loggers]
    yield
    for logger, level in zip(loggers, levels):
        logger.setLevel(level)


@pytest.fixture
def log_dir(tmpdir, monkeypatch):
    monkeypatch.setattr(chatkit_path, 'get_log_dir', lambda: str(tmpdir))
    return str(tmpdir)


class TestLogFormating(object):

    def test_get_file_handler(self, log_dir):
        handler = _get_file_handler('test.log')
        try:
            assert handler.baseFilename.endswith('test.log')
            assert handler.baseFilename.startswith(log_dir)
        finally:
            handler.close()

    def test_get_file_handler_in_missing_folder(self, tmpdir, monkeypatch):
        missing = str(tmpdir.join('file-not-dir'))
        tmpdir.join('file-not-dir').write('')
        monkeypatch.setattr(chatkit_path, 'get_log_dir', lambda: missing)
        assert _get_file_handler('test.log') is None

    @pytest.mark.parametrize('color', ['DEBUG', 'INFO', 'WARNING', 'ERROR',
                                       'CRITICAL', 'NAME', 'DATE',
                                       'EXCEPTION_NAME', 'EXCEPTION_STR'])
    def test_colorize(self, color):
        assert colorFormater._colorize("plop", color) == \
            ColoredFormatter._colors[color] + "plop" + \
            ColoredFormatter._colors['RESET']

    def test_formatTime(self):
        record = logging.LogRecord(
            "record", logging.INFO, "/ici/", 123, "test", None, None)
        formated_record = colorFormater.formatTime(record, "%Y.%m.%d")
        expected_output = "\033[30;1m" + \
            datetime.date.today().strftime('%Y.%m.%d') + \
            ColoredFormatter._colors['RESET']

        assert formated_record == expected_output

    def test_formatException(self):
        try:
            raise Exception()
        except Exception:
            assert ColoredFormatter._colors['EXCEPTION_NAME'] + \
                "Exception" + ColoredFormatter._colors['RESET'] + \
                ":" + ColoredFormatter._colors['EXCEPTION_STR'] + \
                ColoredFormatter._colors['RESET'] in \
                colorFormater.formatException(sys.exc_info())

    def test_format_keeps_record_intact(self):
        record = logging.LogRecord(
            "chatkit", logging.INFO, "/ici/", 123, "test", None, None)
        colorFormater.format(record)
        assert record.name == 'chatkit'
        assert record.levelname == 'INFO'


class TestLogInit(object):

    def test_context(self, log_dir):
        logger = logging.getLogger()
        handlers_backup = list(logger.handlers)
        excepthook = sys.excepthook

        with Context():
            assert len(logger.handlers) == len(handlers_backup) + 2
            assert logging.getLogger().getEffectiveLevel() == logging.INFO
            chatkit_logger = logging.getLogger("chatkit")
            assert chatkit_logger.getEffectiveLevel() == logging.DEBUG
            assert sys.excepthook is _excepthook

            logging.getLogger('chatkit.test').info('Written in a file')

        assert logger.handlers == handlers_backup
        assert sys.excepthook is excepthook
        with open(os.path.join(log_dir, 'chatkit.log')) as log_file:
            assert 'chatkit.test - Written in a file' in log_file.read()

    def test_context_without_file(self):
        logger = logging.getLogger()
        handlers_backup = list(logger.handlers)

        with Context(filename=None):
            assert len(logger.handlers) == len(handlers_backup) + 1

        assert logger.handlers == handlers_backup

    def test_excepthook(self, caplog):
        try:
            raise ValueError('uncaught')
        except ValueError:
            _excepthook(*sys.exc_info())

        assert caplog.records[-1].levelno == logging.CRITICAL
        assert caplog.records[-1].exc_info[0] is ValueError


class TestLogLevels(object):

    def test_setDebugTrue(self):
        set_debug_mode(True)
        assert logging.getLogger().getEffectiveLevel() == logging.INFO
        assert logging.getLogger("chatkit").getEffectiveLevel() == \
            logging.DEBUG

    def test_setDebugFalse(self):
        set_debug_mode(False)
        assert logging.getLogger().getEffectiveLevel() == logging.WARNING
        assert logging.getLogger("chatkit").getEffectiveLevel() == \
            logging.INFO

    def test_set_logs_level(self):
        set_logs_level({'chatkit': 'error', 'chatkit.promise': 10})
        assert logging.getLogger('chatkit').level == logging.ERROR
        assert logging.getLogger('chatkit.promise').level == logging.DEBUG

    def test_set_invalid_logs_level(self, caplog):
        set_logs_level({'chatkit.promise': 'nope'})
        assert 'Invalid log level "NOPE"' in caplog.text
