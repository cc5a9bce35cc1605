"""Pytest fixtures for paged-menu tests."""

import io

import pytest
from rich.console import Console


class KeyFeed:
    """Scripted replacement for readchar.readkey.

    Items are returned in order; an exception class or instance is raised
    instead (e.g. KeyboardInterrupt for Ctrl+C).
    """

    def __init__(self, keys):
        self.keys = list(keys)
        self.read = 0

    def __call__(self):
        if not self.keys:
            raise AssertionError(f"key feed exhausted after {self.read} keys")
        key = self.keys.pop(0)
        self.read += 1
        if isinstance(key, BaseException) or (
            isinstance(key, type) and issubclass(key, BaseException)
        ):
            raise key
        return key


def make_console(width=80, height=24, terminal=True):
    return Console(
        file=io.StringIO(),
        force_terminal=terminal,
        color_system="standard",
        width=width,
        height=height,
        legacy_windows=False,
    )


@pytest.fixture(autouse=True)
def terminal_env(monkeypatch):
    """Keep Rich from detecting a dumb terminal or colour overrides."""
    monkeypatch.setenv("TERM", "xterm-256color")
    for var in ("NO_COLOR", "FORCE_COLOR", "TTY_COMPATIBLE", "TTY_INTERACTIVE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def console():
    """An 80x24 terminal console writing into a StringIO."""
    return make_console()


@pytest.fixture
def small_console():
    """A 80x7 terminal console: three entries per page."""
    return make_console(height=7)


@pytest.fixture
def output():
    """Return everything a console has written so far."""

    def _output(con):
        return con.file.getvalue()

    return _output


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Redirect the paged-menu config directory into tmp_path."""
    from paged_menu import config

    cfg_dir = tmp_path / "paged-menu"
    cfg_dir.mkdir()
    monkeypatch.setattr(config, "get_config_dir", lambda: cfg_dir)
    monkeypatch.delenv(config.DEBUG_ENV_VAR, raising=False)
    return cfg_dir


@pytest.fixture
def key_feed():
    """Factory for scripted key readers: key_feed([UP, ENTER])."""
    return KeyFeed


@pytest.fixture
def write_config(config_dir):
    """Write a config.yaml into the redirected config directory."""
    import yaml

    def _write(data):
        path = config_dir / "config.yaml"
        path.write_text(yaml.safe_dump(data, sort_keys=False))
        return path

    return _write
