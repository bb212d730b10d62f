import pytest
from pydantic import ValidationError

from usicheck.config import UsiConfig, load_config


def test_defaults_without_path():
    cfg = load_config(None)
    assert cfg == UsiConfig()
    assert cfg.input.strip_separators is False
    assert cfg.input.uppercase_prefix is True
    assert cfg.output.format == "text"
    assert cfg.logging.level == "WARNING"


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / ".usicheck.yaml"
    path.write_text("")
    assert load_config(path) == UsiConfig()


def test_yaml_overrides(tmp_path):
    path = tmp_path / ".usicheck.yaml"
    path.write_text(
        "input:\n"
        "  strip_separators: true\n"
        "output:\n"
        "  format: json\n"
        "logging:\n"
        "  level: DEBUG\n"
    )
    cfg = load_config(path)
    assert cfg.input.strip_separators is True
    assert cfg.input.uppercase_prefix is True
    assert cfg.output.format == "json"
    assert cfg.logging.level == "DEBUG"


@pytest.mark.parametrize(
    "text",
    [
        "unknown: 1\n",
        "input:\n  trim: true\n",
        "output:\n  format: xml\n",
        "logging:\n  level: LOUD\n",
        "- a\n- b\n",
        "just text\n",
    ],
)
def test_invalid_config_rejected(tmp_path, text):
    path = tmp_path / ".usicheck.yaml"
    path.write_text(text)
    with pytest.raises(ValidationError):
        load_config(path)
