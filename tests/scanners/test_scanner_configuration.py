"""Tests for the per-scanner configuration cascade."""

import pytest

from bundle_provisioner.errors import ConfigurationError
from bundle_provisioner.properties import DictPropertyResolver
from bundle_provisioner.scanners.configuration import ScannerConfiguration

PID = "bundle_provisioner.scanner.obr"


def configuration(**values) -> ScannerConfiguration:
    return ScannerConfiguration(DictPropertyResolver(values), PID)


def test_unset_when_nothing_configured():
    config = configuration()
    assert config.start_level() is None
    assert config.should_start() is None
    assert config.should_update() is None


def test_reads_namespaced_keys():
    config = configuration(
        **{
            f"{PID}.startLevel": "6",
            f"{PID}.start": "false",
            f"{PID}.update": "TRUE",
        }
    )
    assert config.start_level() == 6
    assert config.should_start() is False
    assert config.should_update() is True


def test_unqualified_option_is_fallback():
    config = configuration(startLevel="3", start="no")
    assert config.start_level() == 3
    assert config.should_start() is False


def test_namespaced_key_beats_unqualified_option():
    config = configuration(**{f"{PID}.startLevel": "8", "startLevel": "3"})
    assert config.start_level() == 8


def test_other_namespace_is_ignored():
    config = configuration(**{"bundle_provisioner.scanner.file.startLevel": "8"})
    assert config.start_level() is None


@pytest.mark.parametrize("value", ["abc", "0", "-1"])
def test_invalid_start_level(value):
    with pytest.raises(ConfigurationError) as exc_info:
        configuration(**{f"{PID}.startLevel": value}).start_level()
    assert exc_info.value.key == f"{PID}.startLevel"


def test_invalid_boolean():
    with pytest.raises(ConfigurationError, match="maybe"):
        configuration(**{f"{PID}.start": "maybe"}).should_start()


def test_requires_pid():
    with pytest.raises(ValueError):
        ScannerConfiguration(DictPropertyResolver(), "")
