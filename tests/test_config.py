"""Tests for the configuration loader."""

from pathlib import Path

from config.loader import ConfigLoader


def _loader(tmp_path) -> ConfigLoader:
    return ConfigLoader(env_path=str(tmp_path / "missing.env"))


def test_default_when_unset(tmp_path, monkeypatch):
    monkeypatch.delenv("CMA_TEST_VALUE", raising=False)
    assert _loader(tmp_path).get("CMA_TEST_VALUE", 30.0) == 30.0


def test_typed_by_default(tmp_path, monkeypatch):
    loader = _loader(tmp_path)
    monkeypatch.setenv("CMA_TEST_VALUE", "12.5")
    assert loader.get("CMA_TEST_VALUE", 30.0) == 12.5
    monkeypatch.setenv("CMA_TEST_VALUE", "7")
    assert loader.get("CMA_TEST_VALUE", 1) == 7
    monkeypatch.setenv("CMA_TEST_VALUE", "yes")
    assert loader.get("CMA_TEST_VALUE", False) is True


def test_unparseable_number_falls_back(tmp_path, monkeypatch):
    monkeypatch.setenv("CMA_TEST_VALUE", "soon")
    assert _loader(tmp_path).get("CMA_TEST_VALUE", 30.0) == 30.0


def test_home_paths_are_expanded(tmp_path, monkeypatch):
    monkeypatch.delenv("CMA_TEST_PATH", raising=False)
    value = _loader(tmp_path).get("CMA_TEST_PATH", "~/.titan/credentials/claude.json")
    assert value == str(Path.home() / ".titan" / "credentials" / "claude.json")


def test_env_file_is_loaded(tmp_path, monkeypatch):
    monkeypatch.delenv("CMA_FROM_DOTENV", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("CMA_FROM_DOTENV=hello\n")
    loader = ConfigLoader(env_path=str(env_file))
    assert loader.get("CMA_FROM_DOTENV", "default") == "hello"
    monkeypatch.delenv("CMA_FROM_DOTENV", raising=False)
