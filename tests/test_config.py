import pytest

from log2curl.config import ConverterConfig, load_config


def test_defaults():
    cfg = load_config(None)
    assert cfg == ConverterConfig()
    assert cfg.lookback_chars == 300
    assert cfg.method_choices == ["GET", "POST", "PUT", "PATCH", "DELETE"]
    assert cfg.body_expected_methods == ["POST", "PUT", "PATCH"]


def test_yaml_overrides(tmp_path):
    p = tmp_path / "log2curl.yaml"
    p.write_text("json_indent: 4\nmax_input_chars: 1000\nmethod_choices: [GET, POST]\n", encoding="utf-8")
    cfg = load_config(p)
    assert cfg.json_indent == 4
    assert cfg.max_input_chars == 1000
    assert cfg.method_choices == ["GET", "POST"]
    assert cfg.default_accept == "application/json"


def test_empty_yaml_gives_defaults(tmp_path):
    p = tmp_path / "empty.yaml"
    p.write_text("", encoding="utf-8")
    assert load_config(p) == ConverterConfig()


def test_invalid_yaml_shapes(tmp_path):
    p = tmp_path / "list.yaml"
    p.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="must be a mapping"):
        load_config(p)
    p.write_text("bogus: 1\n", encoding="utf-8")
    with pytest.raises(ValueError, match="bogus"):
        load_config(p)
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_json_roundtrip():
    cfg = ConverterConfig(default_content_type="text/plain", lookback_chars=120)
    assert ConverterConfig.from_json(cfg.to_json()) == cfg
