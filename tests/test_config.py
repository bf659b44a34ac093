"""Tests for runtime configuration, logging setup and the error hierarchy."""
import json
import logging
import os
import subprocess
import sys

import numpy as np
import pytest

import patchconv as pc
import patchconv.nn.functional as F
from patchconv.config import load_runtime_config
from patchconv.log import LOGGER_NAME, JsonLogFormatter, configure_logging


def test_defaults_from_empty_environment():
    cfg = load_runtime_config({})
    assert cfg.log_level is None
    assert cfg.log_format == 'plain'
    assert cfg.default_dtype == 'float32'


def test_environment_values_are_normalised():
    cfg = load_runtime_config({
        'PATCHCONV_LOG_LEVEL': 'debug',
        'PATCHCONV_LOG_FORMAT': 'JSON',
        'PATCHCONV_DEFAULT_DTYPE': ' Float64 ',
        'UNRELATED': 'ignored',
    })
    assert cfg.log_level == 'DEBUG'
    assert cfg.log_format == 'json'
    assert cfg.default_dtype == 'float64'


@pytest.mark.parametrize('key, value', [
    ('PATCHCONV_LOG_LEVEL', 'chatty'),
    ('PATCHCONV_LOG_FORMAT', 'xml'),
    ('PATCHCONV_DEFAULT_DTYPE', 'int8'),
])
def test_invalid_environment_raises(key, value):
    with pytest.raises(pc.ConfigurationError):
        load_runtime_config({key: value})


def test_config_is_frozen_and_strict():
    cfg = pc.RuntimeConfig()
    with pytest.raises(Exception):
        cfg.log_level = 'DEBUG'
    with pytest.raises(Exception):
        pc.RuntimeConfig(unknown=True)


def test_json_formatter_fields():
    record = logging.LogRecord('patchconv.nn.functional', logging.DEBUG,
                               __file__, 1, 'conv2d: %s', ('ok',), None)
    record.funcName = 'conv2d'
    payload = json.loads(JsonLogFormatter().format(record))
    assert sorted(payload) == ['function', 'level', 'logger', 'message', 'timestamp']
    assert payload['level'] == 'DEBUG'
    assert payload['logger'] == 'patchconv.nn.functional'
    assert payload['message'] == 'conv2d: ok'
    assert payload['function'] == 'conv2d'


def test_configure_logging_replaces_own_handler():
    previous = pc.get_config()
    saved_level = logging.getLogger(LOGGER_NAME).level
    try:
        logger = configure_logging('debug', 'json')
        configure_logging('info', 'json')
        own = [h for h in logger.handlers if getattr(h, '_patchconv_handler', False)]
        assert len(own) == 1
        assert isinstance(own[0].formatter, JsonLogFormatter)
        assert logger.name == LOGGER_NAME
        assert logger.level == logging.INFO
    finally:
        pc.set_config(previous)
        logging.getLogger(LOGGER_NAME).setLevel(saved_level)


def test_error_hierarchy():
    assert issubclass(pc.ShapeError, pc.PatchConvError)
    assert issubclass(pc.ShapeError, ValueError)
    assert issubclass(pc.ShapeMismatch, pc.PatchConvError)
    assert issubclass(pc.ShapeMismatch, ValueError)
    assert issubclass(pc.ConfigurationError, pc.PatchConvError)
    assert not issubclass(pc.ShapeMismatch, pc.ShapeError)


def test_debug_level_from_environment_traces_geometry(monkeypatch, caplog):
    logger = logging.getLogger(LOGGER_NAME)
    previous, saved_level = pc.get_config(), logger.level
    monkeypatch.setenv('PATCHCONV_LOG_LEVEL', 'DEBUG')
    try:
        pc.set_config(load_runtime_config())
        F.conv2d(np.zeros((1, 4, 4, 1)), np.zeros((1, 1, 2, 2)))
        traces = [r for r in caplog.records
                  if r.name == 'patchconv.nn.geometry' and r.levelno == logging.DEBUG]
        assert traces, "expected a DEBUG geometry record"
        assert 'resolved geometry' in traces[0].getMessage()
    finally:
        pc.set_config(previous)
        logger.setLevel(saved_level)


def test_import_applies_environment_logging():
    """Ops on raw arrays log without any factory call having run first."""
    code = (
        "import numpy as np\n"
        "import patchconv.nn.functional as F\n"
        "F.conv2d(np.zeros((1, 4, 4, 1)), np.zeros((1, 1, 2, 2)))\n"
    )
    env = dict(os.environ, PATCHCONV_LOG_LEVEL='DEBUG')
    result = subprocess.run([sys.executable, '-c', code], env=env,
                            capture_output=True, text=True, check=True)
    assert 'patchconv.nn.geometry' in result.stderr
    assert 'resolved geometry' in result.stderr


def test_default_config_leaves_host_level_alone():
    logger = logging.getLogger(LOGGER_NAME)
    previous, saved_level = pc.get_config(), logger.level
    try:
        logger.setLevel(logging.DEBUG)
        pc.set_config(pc.RuntimeConfig())
        pc.zeros(1)
        assert logger.level == logging.DEBUG
        own = [h for h in logger.handlers if getattr(h, '_patchconv_handler', False)]
        assert len(own) == 1
        assert isinstance(own[0], logging.NullHandler)
    finally:
        pc.set_config(previous)
        logger.setLevel(saved_level)
