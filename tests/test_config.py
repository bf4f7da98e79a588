"""Tests for configuration loading."""

import pytest

from symdiff.config import DiffConfig, load_config
from symdiff.exceptions import ErrorCode, InvalidConfigError, SymdiffError


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep user/project config files and SYMDIFF_* vars out of the tests."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for key in ("IGNORE_INTERNAL", "OUTPUT_FORMAT", "SHOW_WARNINGS", "VERBOSITY"):
        monkeypatch.delenv(f"SYMDIFF_{key}", raising=False)
    return work


class TestDiffConfig:
    def test_defaults(self):
        config = DiffConfig()
        assert config.ignore_internal is False
        assert config.extensions == []
        assert config.output_format == "rich"
        assert config.show_warnings is True
        assert config.verbosity == "normal"

    def test_invalid_format(self):
        with pytest.raises(InvalidConfigError) as exc:
            DiffConfig(output_format="xml")
        assert exc.value.key == "output_format"
        assert exc.value.code is ErrorCode.SD400
        assert str(exc.value).startswith("[SD400] ")

    def test_invalid_verbosity(self):
        with pytest.raises(InvalidConfigError):
            DiffConfig(verbosity="loud")

    def test_invalid_extensions(self):
        with pytest.raises(InvalidConfigError):
            DiffConfig(extensions=[""])


class TestLoadConfig:
    def test_defaults_without_sources(self):
        assert load_config() == DiffConfig()

    def test_project_file(self, isolated_env):
        (isolated_env / "symdiff.toml").write_text(
            'ignore_internal = true\nextensions = ["docstring"]\n'
        )
        config = load_config()
        assert config.ignore_internal is True
        assert config.extensions == ["docstring"]

    def test_symdiff_table(self, isolated_env):
        (isolated_env / "symdiff.toml").write_text('[symdiff]\noutput_format = "json"\n')
        assert load_config().output_format == "json"

    def test_explicit_file_overrides_project(self, isolated_env, tmp_path):
        (isolated_env / "symdiff.toml").write_text('output_format = "json"\n')
        explicit = tmp_path / "custom.toml"
        explicit.write_text('output_format = "text"\n')
        assert load_config(config_file=explicit).output_format == "text"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(SymdiffError):
            load_config(config_file=tmp_path / "absent.toml")

    def test_invalid_toml(self, isolated_env):
        (isolated_env / "symdiff.toml").write_text("not = [valid")
        with pytest.raises(SymdiffError):
            load_config()

    def test_unknown_field(self, isolated_env):
        (isolated_env / "symdiff.toml").write_text("colour = true\n")
        with pytest.raises(SymdiffError):
            load_config()

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("SYMDIFF_IGNORE_INTERNAL", "yes")
        monkeypatch.setenv("SYMDIFF_OUTPUT_FORMAT", "text")
        config = load_config()
        assert config.ignore_internal is True
        assert config.output_format == "text"

    def test_invalid_env_bool(self, monkeypatch):
        monkeypatch.setenv("SYMDIFF_SHOW_WARNINGS", "maybe")
        with pytest.raises(SymdiffError):
            load_config()

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("SYMDIFF_OUTPUT_FORMAT", "text")
        assert load_config(output_format="json").output_format == "json"

    def test_none_overrides_ignored(self, isolated_env):
        (isolated_env / "symdiff.toml").write_text("ignore_internal = true\n")
        assert load_config(ignore_internal=None).ignore_internal is True

    def test_verbosity_flags(self):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
