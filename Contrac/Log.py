#!/usr/bin/python3
# -*- encoding: utf-8 -*-

"""Diagnostic logging.

Core objects take a ``log`` argument: anything with structlog's
``debug``/``info``/``warning``/``error`` signature (event name plus keyword
context). When none is given a structlog logger named after the module is
used. configure_logging() sets up rendering once, at program start; a
program that never calls it gets the environment defaults on the first
get_logger().

Environment:
    CONTRAC_LOG_LEVEL   level name, WARNING by default
    CONTRAC_LOG_FORMAT  "console" (default) or "json"
"""

import logging
import os
import sys

import structlog

LOG_LEVEL_ENV = "CONTRAC_LOG_LEVEL"
LOG_FORMAT_ENV = "CONTRAC_LOG_FORMAT"

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "console"


def _get_log_level(level=None):
    level_name = (level or os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)).upper()
    return getattr(logging, level_name, logging.WARNING)


def configure_logging(level=None, fmt=None):
    if fmt is None:
        fmt = os.getenv(LOG_FORMAT_ENV, DEFAULT_LOG_FORMAT)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    # diagnostics go to stderr, stdout belongs to the tool's output
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name=None, log=None):
    if log is not None:
        return log

    # structlog's own default prints every level to stdout
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)
