import json
import logging

from drivehog.config import DEFAULT_CONFIG, compile_custom_patterns, load_config, load_settings


def test_defaults_when_missing(tmp_path):
    cfg = load_config(tmp_path / "nope.json")
    assert cfg == DEFAULT_CONFIG
    cfg["entropy"]["min_length"] = 1
    assert DEFAULT_CONFIG["entropy"]["min_length"] == 20


def test_user_file_is_merged(tmp_path):
    p = tmp_path / ".secrets-scanner.json"
    p.write_text(json.dumps({"entropy": {"hex_threshold": 3.5}, "scan_entropy": True}))
    cfg = load_config(p)
    assert cfg["entropy"] == {"base64_threshold": 4.5, "hex_threshold": 3.5, "min_length": 20}
    assert cfg["scan_entropy"] is True
    assert cfg["custom_patterns"] == {}


def test_broken_file_falls_back_with_warning(tmp_path, caplog):
    p = tmp_path / ".secrets-scanner.json"
    p.write_text("{not json")
    with caplog.at_level(logging.WARNING, logger="drivehog.config"):
        assert load_config(p) == DEFAULT_CONFIG
    assert "Failed to load" in caplog.text


def test_compile_custom_patterns_skips_bad_regex(caplog):
    with caplog.at_level(logging.WARNING, logger="drivehog.config"):
        rules = compile_custom_patterns({"custom_patterns": {"GOOD": "tok_[0-9]+", "BAD": "("}})
    assert list(rules) == ["GOOD"]
    assert rules["GOOD"].search(b"x tok_123")
    assert "BAD" in caplog.text


def test_load_settings_from_env(monkeypatch):
    monkeypatch.setenv("GOOGLE_DRIVE_TOKEN", "abc")
    monkeypatch.setenv("DRIVE_TIMEOUT", "12")
    monkeypatch.setenv("RATE_LIMIT_PER_MIN", "120")
    monkeypatch.delenv("GOOGLE_DRIVE_API", raising=False)
    settings = load_settings()
    assert settings.access_token == "abc"
    assert settings.timeout == 12.0
    assert settings.rate_limit_per_min == 120
    assert settings.base_url == "https://www.googleapis.com"
