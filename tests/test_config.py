import json

import pytest

from goodnews.config import Config, Settings


def test_defaults_without_file(monkeypatch):
    monkeypatch.delenv("GOODNEWS_NEWS__PAGE_SIZE", raising=False)
    cfg = Config()
    assert cfg.get("news.page_size") == 100
    assert cfg.get("sentiment.scorer") == "keyword"
    assert cfg.get("does.not.exist", "fallback") == "fallback"


def test_yaml_file_is_merged(tmp_path):
    path = tmp_path / "goodnews.yaml"
    path.write_text("transport:\n  always_use_proxy: true\nsentiment:\n  scorer: lexicon\n")

    cfg = Config(str(path))

    assert cfg.get("transport.always_use_proxy") is True
    assert cfg.get("sentiment.scorer") == "lexicon"
    assert cfg.get("sentiment.positive_threshold") == 1.0


def test_json_file_is_merged(tmp_path):
    path = tmp_path / "goodnews.json"
    path.write_text(json.dumps({"news": {"page_size": 25}}))

    assert Config(str(path)).get("news.page_size") == 25


def test_unsupported_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "goodnews.ini"
    path.write_text("[news]\npage_size = 5\n")

    assert Config(str(path)).get("news.page_size") == 100


@pytest.mark.parametrize("name, content", [
    ("list.yaml", "- news\n- sentiment\n"),
    ("scalar.yaml", "just a string\n"),
    ("list.json", "[1, 2, 3]"),
])
def test_non_mapping_file_falls_back_to_defaults(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content)

    cfg = Config(str(path))

    assert cfg.get("news.page_size") == 100
    assert cfg.get("sentiment.scorer") == "keyword"


def test_loading_does_not_mutate_defaults(tmp_path):
    path = tmp_path / "goodnews.yaml"
    path.write_text("news:\n  page_size: 7\n")
    Config(str(path))

    assert Config().get("news.page_size") == 100


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("GOODNEWS_NEWS__PAGE_SIZE", "40")
    monkeypatch.setenv("GOODNEWS_TRANSPORT__PROXY_URL", "http://proxy.test/api/news")

    cfg = Config()

    assert cfg.get("news.page_size") == 40
    assert cfg.get("transport.proxy_url") == "http://proxy.test/api/news"


def test_settings_snapshot(monkeypatch, tmp_path):
    monkeypatch.setenv("GOODNEWS_API_KEY", "client-key")
    path = tmp_path / "goodnews.yaml"
    path.write_text("transport:\n  trusted_context: true\nnews:\n  upstream_url: https://news.test/v2/\n")

    settings = Settings.from_config(Config(str(path)))

    assert settings.api_key == "client-key"
    assert settings.has_direct_credential
    assert settings.trusted_context is True
    assert settings.upstream_url == "https://news.test/v2"


def test_settings_without_credential(monkeypatch):
    monkeypatch.delenv("GOODNEWS_API_KEY", raising=False)
    assert not Settings.from_config(Config()).has_direct_credential
