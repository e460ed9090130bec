# isogit Config Tests
# Tests for configuration loading and validation

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from isogit.config.defaults import DEFAULT_CONFIG, generate_default_config
from isogit.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    save_config,
    validate_config_file,
)
from isogit.config.schema import CloneConfig, IsogitConfig, SshConfig
from isogit.exceptions import ConfigurationError


@pytest.fixture
def config_file(temp_dir: Path, proxy_script: Path, identity_file: Path) -> Path:
    """Write a configuration file."""
    path = temp_dir / "config.yaml"
    data = {
        "ssh": {"proxy_script": str(proxy_script), "identity_file": str(identity_file)},
        "clone": {"clone_timeout": 300},
    }
    path.write_text(yaml.dump(data), encoding="utf-8")
    return path


class TestIsogitConfig:
    """Tests for IsogitConfig schema."""

    def test_defaults(self):
        config = IsogitConfig()
        assert config.ssh.proxy_script is None
        assert config.clone.clone_timeout == 600
        assert config.clone.command_timeout == 60
        assert config.output.verbose is False
        assert config.temp_root is None

    def test_default_dict_validates(self):
        config = IsogitConfig.model_validate(DEFAULT_CONFIG)
        assert config.clone.clone_timeout == 600

    def test_paths_expanded(self, temp_home):
        ssh = SshConfig(identity_file="~/.ssh/deploy", home="~")
        assert ssh.identity_file == str(temp_home / ".ssh" / "deploy")
        assert ssh.home == str(temp_home)

    def test_empty_path_is_none(self):
        assert SshConfig(known_hosts_file="").known_hosts_file is None

    def test_timeouts_must_be_positive(self):
        with pytest.raises(ValidationError):
            CloneConfig(clone_timeout=0)

    def test_build_endpoint(self, temp_home, identity_file, known_hosts_file):
        config = IsogitConfig(
            ssh=SshConfig(identity_file=str(identity_file), known_hosts_file=str(known_hosts_file))
        )
        endpoint = config.build_endpoint("git@example.com:org/app.git", "v1.0")
        assert endpoint.url == "git@example.com:org/app.git"
        assert endpoint.revision == "v1.0"
        assert endpoint.identity_file == identity_file
        assert endpoint.known_hosts_file == known_hosts_file
        assert endpoint.home is None

    def test_build_endpoint_default_revision(self, temp_home):
        assert IsogitConfig().build_endpoint("url").revision == "master"

    def test_resolve_proxy(self, proxy_script):
        config = IsogitConfig(ssh=SshConfig(proxy_script=str(proxy_script)))
        assert config.resolve_proxy() == proxy_script.resolve()

    def test_resolve_missing_proxy(self, temp_dir):
        config = IsogitConfig(ssh=SshConfig(proxy_script=str(temp_dir / "missing.sh")))
        with pytest.raises(ConfigurationError):
            config.resolve_proxy()

    def test_temp_root(self, temp_dir):
        config = IsogitConfig(clone=CloneConfig(temp_root=str(temp_dir)))
        assert config.temp_root == temp_dir


class TestLoader:
    """Tests for load/save."""

    def test_env_override(self, temp_dir, monkeypatch):
        monkeypatch.setenv("ISOGIT_CONFIG", str(temp_dir / "custom.yaml"))
        assert get_config_path() == temp_dir / "custom.yaml"

    def test_default_path(self, temp_home, monkeypatch):
        monkeypatch.delenv("ISOGIT_CONFIG", raising=False)
        assert get_config_path() == temp_home / ".config" / "isogit" / "config.yaml"

    def test_missing_file_gives_defaults(self, temp_dir):
        config = load_config(temp_dir / "missing.yaml")
        assert config == IsogitConfig()

    def test_load_merges_defaults(self, config_file, proxy_script):
        config = load_config(config_file)
        assert config.ssh.proxy_script == str(proxy_script)
        assert config.clone.clone_timeout == 300
        assert config.clone.command_timeout == 60

    def test_empty_file(self, temp_dir):
        path = temp_dir / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == IsogitConfig()

    def test_invalid_value(self, temp_dir):
        path = temp_dir / "bad.yaml"
        path.write_text("clone:\n  clone_timeout: -1\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(path)

    @pytest.mark.parametrize("content", ["- a\n- b\n", "just text\n"])
    def test_top_level_not_a_mapping(self, temp_dir, content):
        path = temp_dir / "list.yaml"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_save_roundtrip(self, temp_dir, config_file):
        config = load_config(config_file)
        target = save_config(config, temp_dir / "nested" / "saved.yaml")
        assert load_config(target) == config

    def test_ensure_config_exists(self, temp_dir):
        path = temp_dir / "cfg" / "config.yaml"
        assert ensure_config_exists(path) == (path, True)
        assert ensure_config_exists(path) == (path, False)
        assert load_config(path) == IsogitConfig()

    def test_ensure_config_force(self, config_file):
        assert ensure_config_exists(config_file, force=True) == (config_file, True)
        assert load_config(config_file).clone.clone_timeout == 600


class TestValidateConfigFile:
    """Tests for validate_config_file."""

    def test_valid(self, config_file):
        assert validate_config_file(config_file) == (True, [])

    def test_missing(self, temp_dir):
        valid, errors = validate_config_file(temp_dir / "missing.yaml")
        assert valid is False
        assert "not found" in errors[0]

    def test_bad_yaml(self, temp_dir):
        path = temp_dir / "bad.yaml"
        path.write_text("ssh: [unclosed\n", encoding="utf-8")
        valid, errors = validate_config_file(path)
        assert valid is False
        assert "Invalid YAML" in errors[0]

    def test_empty(self, temp_dir):
        path = temp_dir / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert validate_config_file(path) == (False, ["Configuration file is empty"])

    def test_schema_errors(self, temp_dir):
        path = temp_dir / "bad.yaml"
        path.write_text("clone:\n  command_timeout: zero\n", encoding="utf-8")
        valid, errors = validate_config_file(path)
        assert valid is False
        assert errors[0].startswith("clone -> command_timeout")


class TestDefaults:
    """Tests for generated default configuration."""

    def test_generated_yaml_matches_defaults(self):
        assert yaml.safe_load(generate_default_config()) == DEFAULT_CONFIG

    def test_has_header(self):
        assert generate_default_config().startswith("# isogit Configuration")
