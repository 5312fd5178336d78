import importlib
import logging

import pytest

from docwarp import config
from docwarp.geometry import Size


@pytest.fixture
def reload_config(monkeypatch):
    def reload(value):
        monkeypatch.setenv("DOCWARP_REFERENCE", value)
        return importlib.reload(config)

    yield reload
    monkeypatch.delenv("DOCWARP_REFERENCE", raising=False)
    importlib.reload(config)


def test_reference_from_environment(reload_config):
    assert reload_config("640x480").DETECTION_REFERENCE_SIZE == Size(640, 480)


@pytest.mark.parametrize("value", ["400", "abc", "x300", "0x400", "-5x10"])
def test_malformed_reference_keeps_default(reload_config, caplog, value):
    with caplog.at_level(logging.WARNING, logger="docwarp.config"):
        cfg = reload_config(value)
    assert cfg.DETECTION_REFERENCE_SIZE == Size(400, 400)
    assert "DOCWARP_REFERENCE" in caplog.text
