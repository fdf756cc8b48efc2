"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from trint_batch.config import UploadDefaults, build_options, load_upload_config
from trint_batch.errors import ConfigurationError


class TestBuildOptions:
    """Tests for build_options()."""

    def test_defaults(self):
        options = build_options()
        assert options.concurrent == 1
        assert options.files == []
        assert options.patterns == []
        assert options.pattern_files == []
        assert not options.debug
        assert not options.dry_run

    @pytest.mark.parametrize("value", [1, 3, 6])
    def test_concurrent_in_range(self, value):
        assert build_options(concurrent=value).concurrent == value

    @pytest.mark.parametrize("value", [0, 7, -1])
    def test_concurrent_out_of_range(self, value):
        with pytest.raises(ConfigurationError, match="between 1 and 6"):
            build_options(concurrent=value)

    def test_pattern_file_paths_expand_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        options = build_options(pattern_files=["~/patterns.txt"])
        assert options.pattern_files == [tmp_path / "patterns.txt"]

    def test_options_are_immutable(self):
        options = build_options()
        with pytest.raises(Exception):
            options.concurrent = 4


class TestLoadUploadConfig:
    """Tests for load_upload_config()."""

    def test_loads_values(self, tmp_path):
        path = tmp_path / "upload.yaml"
        path.write_text(
            "server: http://localhost:8000/\nlanguage: fr\nconcurrent: 4\ntimeout: 60\n"
        )
        defaults = load_upload_config(path)
        assert defaults == UploadDefaults(
            server="http://localhost:8000/", language="fr", concurrent=4, timeout=60
        )

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "upload.yaml"
        path.write_text("")
        assert load_upload_config(path) == UploadDefaults()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot read config file"):
            load_upload_config(tmp_path / "missing.yaml")

    def test_invalid_concurrency(self, tmp_path):
        path = tmp_path / "upload.yaml"
        path.write_text("concurrent: 10\n")
        with pytest.raises(ConfigurationError, match="between 1 and 6"):
            load_upload_config(path)

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "upload.yaml"
        path.write_text("retries: 3\n")
        with pytest.raises(ConfigurationError):
            load_upload_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "upload.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_upload_config(Path(path))
