"""Tests for configuration discovery and merging."""

import pytest

from logfocus.core.config import ConfigError, ConfigLoader


def write_user_config(home, text):
    config_dir = home / ".config" / "logfocus"
    config_dir.mkdir(parents=True, exist_ok=True)
    path = config_dir / "config.toml"
    path.write_text(text)
    return path


class TestDiscoverConfigs:
    """Tests for ConfigLoader.discover_configs method."""

    def test_discover_no_configs(self, tmp_path, isolated_home):
        """Should return empty list when no configs exist."""
        assert ConfigLoader().discover_configs(tmp_path) == []

    def test_discover_local_config(self, tmp_path, isolated_home):
        """Should find local logfocus.toml."""
        (tmp_path / "logfocus.toml").write_text("[filters]\nmax_filters = 5\n")

        configs = ConfigLoader().discover_configs(tmp_path)

        assert configs == [tmp_path / "logfocus.toml"]

    def test_discover_user_config(self, tmp_path, isolated_home):
        """Should find user config in ~/.config/logfocus/."""
        path = write_user_config(isolated_home, "[filters]\nmax_filters = 5\n")

        configs = ConfigLoader().discover_configs(tmp_path)

        assert configs == [path]

    def test_discover_git_root_config(self, tmp_path, isolated_home, monkeypatch):
        """Should find config at git root."""
        (tmp_path / ".git").mkdir()
        (tmp_path / "logfocus.toml").write_text("[filters]\nmax_filters = 5\n")
        subdir = tmp_path / "src" / "deep"
        subdir.mkdir(parents=True)
        monkeypatch.chdir(subdir)

        configs = ConfigLoader().discover_configs(subdir)

        assert configs == [tmp_path / "logfocus.toml"]

    def test_discover_precedence_order(self, tmp_path, isolated_home):
        """Should return configs in precedence order: user < git < local."""
        user = write_user_config(isolated_home, "[filters]\nmax_filters = 1\n")
        project = tmp_path / "project"
        (project / ".git").mkdir(parents=True)
        (project / "logfocus.toml").write_text("[filters]\nmax_filters = 2\n")
        local = project / "sub"
        local.mkdir()
        (local / "logfocus.toml").write_text("[filters]\nmax_filters = 3\n")

        configs = ConfigLoader().discover_configs(local)

        assert configs == [user, project / "logfocus.toml", local / "logfocus.toml"]

    def test_git_root_and_local_not_duplicated(self, tmp_path, isolated_home):
        (tmp_path / ".git").mkdir()
        (tmp_path / "logfocus.toml").write_text("")

        configs = ConfigLoader().discover_configs(tmp_path)

        assert len(configs) == 1

    def test_git_root_env_override(self, tmp_path, isolated_home, monkeypatch):
        shared = tmp_path / "shared"
        shared.mkdir()
        (shared / "logfocus.toml").write_text("")
        monkeypatch.setenv("LOGFOCUS_GIT_ROOT", str(shared))
        work = tmp_path / "work"
        work.mkdir()

        configs = ConfigLoader().discover_configs(work)

        assert configs == [shared / "logfocus.toml"]


class TestLoadMerged:
    """Tests for ConfigLoader.load_merged method."""

    def test_no_configs_gives_defaults(self, tmp_path, isolated_home):
        config = ConfigLoader().load_merged(tmp_path)
        assert config.max_filters == 20

    def test_later_config_overrides(self, tmp_path, isolated_home):
        write_user_config(
            isolated_home,
            '[filters]\nfile = "/user/filters.json"\nmax_filters = 10\n',
        )
        (tmp_path / "logfocus.toml").write_text("[filters]\nmax_filters = 4\n")

        config = ConfigLoader().load_merged(tmp_path)

        assert config.max_filters == 4
        assert str(config.filters_file) == "/user/filters.json"

    def test_extra_config_wins(self, tmp_path, isolated_home):
        (tmp_path / "logfocus.toml").write_text("[filters]\nmax_filters = 4\n")
        extra = tmp_path / "extra.toml"
        extra.write_text("[filters]\nmax_filters = 9\n")

        config = ConfigLoader().load_merged(tmp_path, extra=extra)

        assert config.max_filters == 9

    def test_missing_extra(self, tmp_path, isolated_home):
        with pytest.raises(FileNotFoundError):
            ConfigLoader().load_merged(tmp_path, extra=tmp_path / "missing.toml")

    def test_invalid_discovered_config(self, tmp_path, isolated_home):
        (tmp_path / "logfocus.toml").write_text("[filters\n")
        with pytest.raises(ConfigError):
            ConfigLoader().load_merged(tmp_path)

    def test_invalid_merged_value(self, tmp_path, isolated_home):
        (tmp_path / "logfocus.toml").write_text("[filters]\nmax_filters = 0\n")
        with pytest.raises(ConfigError):
            ConfigLoader().load_merged(tmp_path)


class TestDeepMerge:
    """Tests for ConfigLoader._deep_merge."""

    def test_nested_merge(self):
        loader = ConfigLoader()
        result = loader._deep_merge(
            {"filters": {"file": "a", "max_filters": 1}},
            {"filters": {"max_filters": 2}},
        )
        assert result == {"filters": {"file": "a", "max_filters": 2}}

    def test_inputs_not_modified(self):
        loader = ConfigLoader()
        base = {"filters": {"max_filters": 1}}
        loader._deep_merge(base, {"filters": {"max_filters": 2}})
        assert base == {"filters": {"max_filters": 1}}
