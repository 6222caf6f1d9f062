#!/usr/bin/python3
# -*- encoding: utf-8 -*-

import pytest
import structlog

import Contrac.Codec as Codec

TK_BASE64 = "3UmKrtcQ2tfLE8UPSXHb4PtgRfE0E2xdSs+PGVIS8cc="


class RecordingLog(object):
    # stands in for a structlog logger and keeps every event

    def __init__(self):
        self.events = []

    def _record(self, level, event, **kw):
        self.events.append((level, event, kw))

    def debug(self, event, **kw):
        self._record("debug", event, **kw)

    def info(self, event, **kw):
        self._record("info", event, **kw)

    def warning(self, event, **kw):
        self._record("warning", event, **kw)

    def error(self, event, **kw):
        self._record("error", event, **kw)

    def names(self, level=None):
        return [event for (lvl, event, kw) in self.events if level is None or lvl == level]


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def tk_base64():
    return TK_BASE64


@pytest.fixture
def tk():
    return Codec.decode(TK_BASE64)


@pytest.fixture
def recording_log():
    return RecordingLog()
