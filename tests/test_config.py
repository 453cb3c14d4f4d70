import logging

import pytest
from PIL import Image

from spritestrip.config import Settings, load_settings
from spritestrip.errors import InvalidArgumentsError, InvalidPathError


def write_config(tmp_path, text):
    path = tmp_path / "spritestrip.yml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_without_path():
    settings = load_settings(None)
    assert settings == Settings()
    assert settings.overlap_fraction == 0.45
    assert settings.min_height == 200
    assert settings.resample_filter == Image.Resampling.BILINEAR


def test_values_from_yaml(tmp_path):
    path = write_config(tmp_path, "overlap_fraction: 0.3\nmin_height: 64\nresample: lanczos\nfuzz: 1\n")

    settings = load_settings(path)

    assert settings.overlap_fraction == 0.3
    assert settings.min_height == 64
    assert settings.fuzz == 1.0
    assert settings.resample_filter == Image.Resampling.LANCZOS
    assert settings.border_px == 5


def test_empty_file_gives_defaults(tmp_path):
    assert load_settings(write_config(tmp_path, "")) == Settings()


def test_unknown_key_is_ignored(tmp_path, caplog):
    path = write_config(tmp_path, "colour: red\nborder_px: 2\n")

    with caplog.at_level(logging.WARNING):
        settings = load_settings(path)

    assert settings.border_px == 2
    assert "colour" in caplog.text


@pytest.mark.parametrize(
    "text",
    [
        "min_height: tall\n",
        "border_px: true\n",
        "fuzz: 1.5\n",
        "min_height: 0\n",
        "overlap_fraction: .nan\n",
        "overlap_fraction: .inf\n",
        "overlap_fraction: -.inf\n",
        "resample: cubic\n",
        "- just\n- a list\n",
    ],
)
def test_invalid_values(tmp_path, text):
    with pytest.raises(InvalidArgumentsError):
        load_settings(write_config(tmp_path, text))


def test_yaml_syntax_error_reports_position(tmp_path):
    path = write_config(tmp_path, "overlap_fraction: [0.3\n")

    with pytest.raises(InvalidArgumentsError) as info:
        load_settings(path)

    assert "строка" in str(info.value)


def test_missing_file(tmp_path):
    with pytest.raises(InvalidPathError):
        load_settings(tmp_path / "absent.yml")
