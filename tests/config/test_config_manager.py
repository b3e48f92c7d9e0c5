from __future__ import annotations

import time

import pytest
import yaml

from apifixture.core.config import ConfigManager, get_cached_config
from apifixture.core.exceptions import ConfigurationError


def write_yaml(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


class TestLayering:
    def test_bundled_defaults(self, isolated_project_env):
        cfg = ConfigManager(isolated_project_env).load_config()
        assert cfg["fixtures"]["baseDir"] == "tests/fixtures"
        assert cfg["fixtures"]["moduleDelimiter"] == "::"
        assert cfg["reinitialize"]["ignoreEnvPrefixes"] == ["PYTEST_"]
        assert cfg["logging"]["enabled"] is False

    def test_project_overrides_defaults(self, isolated_project_env):
        write_yaml(isolated_project_env / ".apifixture" / "config" / "fixtures.yaml", {"fixtures": {"baseDir": "data"}})
        cfg = ConfigManager(isolated_project_env).load_config()
        assert cfg["fixtures"]["baseDir"] == "data"
        assert cfg["fixtures"]["annotation"] == "api_data_fixture"

    def test_local_overrides_project(self, isolated_project_env):
        write_yaml(isolated_project_env / ".apifixture" / "config" / "fixtures.yaml", {"fixtures": {"baseDir": "data"}})
        write_yaml(
            isolated_project_env / ".apifixture" / "config.local" / "fixtures.yaml",
            {"fixtures": {"baseDir": "local-data"}},
        )
        assert ConfigManager(isolated_project_env).get("fixtures.baseDir") == "local-data"

    def test_project_files_merge_alphabetically(self, isolated_project_env):
        config_dir = isolated_project_env / ".apifixture" / "config"
        write_yaml(config_dir / "a.yaml", {"fixtures": {"baseDir": "from-a"}})
        write_yaml(config_dir / "b.yml", {"fixtures": {"baseDir": "from-b"}})
        assert ConfigManager(isolated_project_env).get("fixtures.baseDir") == "from-b"

    def test_array_append_marker(self, isolated_project_env):
        write_yaml(
            isolated_project_env / ".apifixture" / "config" / "reinit.yaml",
            {"reinitialize": {"ignoreEnvPrefixes": ["+", "COV_CORE_"]}},
        )
        cfg = ConfigManager(isolated_project_env).load_config()
        assert cfg["reinitialize"]["ignoreEnvPrefixes"] == ["PYTEST_", "COV_CORE_"]


class TestGet:
    def test_dot_keys(self, isolated_project_env):
        mgr = ConfigManager(isolated_project_env)
        assert mgr.get("fixtures.rollbackSuffix") == "_rollback"
        assert mgr.get("fixtures.nope") is None
        assert mgr.get("fixtures.baseDir.deeper", "dflt") == "dflt"


class TestEnvOverrides:
    def test_typed_coercion(self, isolated_project_env, monkeypatch):
        monkeypatch.setenv("APIFIXTURE_FIXTURES__ISOLATEREVERTFAILURES", "true")
        monkeypatch.setenv("APIFIXTURE_FIXTURES__BASEDIR", "env-data")
        monkeypatch.setenv("APIFIXTURE_REINITIALIZE__ENVKEYS", '["DATABASE_URL", "API_TOKEN"]')
        cfg = ConfigManager(isolated_project_env).load_config()

        assert cfg["fixtures"]["isolateRevertFailures"] is True
        assert cfg["fixtures"]["baseDir"] == "env-data"
        assert cfg["reinitialize"]["envKeys"] == ["DATABASE_URL", "API_TOKEN"]

    def test_append_and_index(self, isolated_project_env, monkeypatch):
        monkeypatch.setenv("APIFIXTURE_REINITIALIZE__IGNOREENVPREFIXES__APPEND", "COV_")
        cfg = ConfigManager(isolated_project_env).load_config()
        assert cfg["reinitialize"]["ignoreEnvPrefixes"] == ["PYTEST_", "COV_"]

        monkeypatch.setenv("APIFIXTURE_REINITIALIZE__IGNOREENVPREFIXES__0", "CI_")
        cfg = ConfigManager(isolated_project_env).load_config()
        assert cfg["reinitialize"]["ignoreEnvPrefixes"][0] == "CI_"

    def test_project_root_variable_is_not_an_override(self, isolated_project_env):
        cfg = ConfigManager(isolated_project_env).load_config()
        assert "project" not in cfg

    def test_malformed_key_is_rejected_when_validating(self, isolated_project_env, monkeypatch):
        monkeypatch.setenv("APIFIXTURE_FIXTURES____BASEDIR", "x")
        with pytest.raises(ConfigurationError, match="empty segment"):
            ConfigManager(isolated_project_env).load_config(validate=True)
        assert "fixtures" in ConfigManager(isolated_project_env).load_config(validate=False)

    def test_override_type_is_validated(self, isolated_project_env, monkeypatch):
        monkeypatch.setenv("APIFIXTURE_LOGGING__LEVEL", "LOUD")
        with pytest.raises(ConfigurationError) as exc:
            ConfigManager(isolated_project_env).load_config(validate=True)
        assert exc.value.context["errors"][0].startswith("logging.level")


class TestErrors:
    def test_invalid_yaml(self, isolated_project_env):
        bad = isolated_project_env / ".apifixture" / "config" / "broken.yaml"
        bad.write_text("fixtures: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Unable to load configuration"):
            ConfigManager(isolated_project_env).load_config()

    def test_non_mapping_file(self, isolated_project_env):
        write_yaml(isolated_project_env / ".apifixture" / "config" / "list.yaml", ["a", "b"])
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            ConfigManager(isolated_project_env).load_config()

    def test_schema_violation(self, isolated_project_env):
        write_yaml(
            isolated_project_env / ".apifixture" / "config" / "fixtures.yaml",
            {"fixtures": {"annotation": "not valid!"}},
        )
        with pytest.raises(ConfigurationError) as exc:
            ConfigManager(isolated_project_env).load_config(validate=True)
        assert any(e.startswith("fixtures.annotation") for e in exc.value.context["errors"])


class TestCache:
    def test_same_dict_until_files_change(self, isolated_project_env):
        first = get_cached_config(isolated_project_env)
        assert get_cached_config(isolated_project_env) is first

        time.sleep(0.01)
        write_yaml(isolated_project_env / ".apifixture" / "config" / "fixtures.yaml", {"fixtures": {"baseDir": "changed"}})
        second = get_cached_config(isolated_project_env)
        assert second is not first
        assert second["fixtures"]["baseDir"] == "changed"

    def test_env_changes_invalidate(self, isolated_project_env, monkeypatch):
        first = get_cached_config(isolated_project_env)
        monkeypatch.setenv("APIFIXTURE_FIXTURES__BASEDIR", "env-data")
        assert get_cached_config(isolated_project_env) is not first

    def test_clear_all_caches(self, isolated_project_env, monkeypatch):
        from apifixture.core.config import cache, clear_all_caches

        calls = []
        monkeypatch.setitem(cache._cache_clearers, "test-clearer", lambda: calls.append(1))
        first = get_cached_config(isolated_project_env)
        clear_all_caches()
        assert get_cached_config(isolated_project_env) is not first
        assert calls == [1]
