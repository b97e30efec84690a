import logging

import pytest

from auth import HashConfiguration, ConfigurationError

VARS = ("HASHER_ALGORITHM", "HASHER_ITERATIONS", "HASHER_KEY_SIZE", "HASHER_SALT_SIZE")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(caplog):
    with caplog.at_level(logging.WARNING, logger="auth.config"):
        cfg = HashConfiguration.from_env()
    assert cfg == HashConfiguration("HMACSHA256", 10000, 32, 16)
    assert "HASHER_ITERATIONS not set" in caplog.text


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("HASHER_ALGORITHM", "HMACSHA1")
    monkeypatch.setenv("HASHER_ITERATIONS", "20000")
    monkeypatch.setenv("HASHER_KEY_SIZE", "20")
    monkeypatch.setenv("HASHER_SALT_SIZE", "24")
    assert HashConfiguration.from_env() == HashConfiguration("HMACSHA1", 20000, 20, 24)


def test_custom_prefix(monkeypatch):
    monkeypatch.setenv("APP_ITERATIONS", "4096")
    assert HashConfiguration.from_env(prefix="APP_").iterations == 4096


def test_bad_integer_is_an_error(monkeypatch):
    monkeypatch.setenv("HASHER_ITERATIONS", "lots")
    with pytest.raises(ConfigurationError):
        HashConfiguration.from_env()


def test_bad_algorithm_is_an_error(monkeypatch):
    monkeypatch.setenv("HASHER_ALGORITHM", "SHA256")
    with pytest.raises(ConfigurationError):
        HashConfiguration.from_env()


def test_empty_configuration_is_invalid():
    with pytest.raises(ConfigurationError):
        HashConfiguration().validate()


def test_bool_is_not_a_size():
    with pytest.raises(ConfigurationError):
        HashConfiguration("HMACSHA256", 1000, True, 16).validate()


def test_low_iterations_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="auth.config"):
        HashConfiguration("HMACSHA256", 10, 32, 16).validate()
    assert "below" in caplog.text


def test_configuration_is_immutable():
    cfg = HashConfiguration("HMACSHA256", 1000, 32, 16)
    with pytest.raises(AttributeError):
        cfg.iterations = 1
    assert cfg.with_changes(iterations=2000).iterations == 2000
    assert cfg.iterations == 1000


@pytest.mark.parametrize("name,value", [
    ("HASHER_ITERATIONS", "2147483648"),
    ("HASHER_KEY_SIZE", "1099511627776"),
    ("HASHER_SALT_SIZE", "1025"),
])
def test_out_of_range_env_is_an_error(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigurationError):
        HashConfiguration.from_env()
