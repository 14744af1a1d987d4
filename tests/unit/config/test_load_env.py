import pathlib

import pytest

from hdfs_itt.config import Env, ITTConfig, load_env
from hdfs_itt.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clear_itt_environment(monkeypatch: pytest.MonkeyPatch):
    for name in Env.types_map():
        monkeypatch.delenv(name, raising=False)


class TestLoadEnv:
    def test_defaults_without_sources(self, tmp_path: pathlib.Path):
        env = load_env(env_file=str(tmp_path / "missing.env"))

        assert env.ITT_PROVISIONER == "vagrant"
        assert env.ITT_READ_SCRIPT == "r:128m s:0 r:1m r:128m"
        assert env.ITT_WRITE_SCRIPT == "0 10% 50% 70%"
        assert env.ITT_N_C is None

    def test_env_file_values_are_typed(self, tmp_path: pathlib.Path):
        env_file = tmp_path / "itt.env"
        env_file.write_text(
            "ITT_PROVISIONER=docker\n"
            "ITT_N_C=5\n"
            "ITT_ENABLE_MKRMDIR_TEST=false\n"
            "UNRELATED=ignored\n"
        )

        env = load_env(env_file=str(env_file))

        assert env.ITT_PROVISIONER == "docker"
        assert env.ITT_N_C == 5
        assert env.ITT_ENABLE_MKRMDIR_TEST is False

    def test_env_file_overrides_environment(
        self,
        tmp_path: pathlib.Path,
        monkeypatch: pytest.MonkeyPatch,
    ):
        monkeypatch.setenv("ITT_TESTFILE", "from-environment.txt")
        monkeypatch.setenv("ITT_LOCALHOST", "127.0.0.1")
        env_file = tmp_path / "itt.env"
        env_file.write_text("ITT_TESTFILE=from-file.txt\n")

        env = load_env(env_file=str(env_file))

        assert env.ITT_TESTFILE == "from-file.txt"
        assert env.ITT_LOCALHOST == "127.0.0.1"

    def test_override_wins(self, tmp_path: pathlib.Path):
        env_file = tmp_path / "itt.env"
        env_file.write_text("ITT_TESTFILE=from-file.txt\n")

        env = load_env(
            env_file=str(env_file),
            override=Env(ITT_TESTFILE="override.txt"),
        )

        assert env.ITT_TESTFILE == "override.txt"

    def test_log_level_is_normalized(self, tmp_path: pathlib.Path):
        env_file = tmp_path / "itt.env"
        env_file.write_text("ITT_LOG_LEVEL= DEBUG\n")

        assert load_env(env_file=str(env_file)).ITT_LOG_LEVEL == "debug"

    def test_unknown_log_level_raises(self, tmp_path: pathlib.Path):
        env_file = tmp_path / "itt.env"
        env_file.write_text("ITT_LOG_LEVEL=verbose\n")

        with pytest.raises(ConfigurationError):
            load_env(env_file=str(env_file))

    def test_malformed_number_raises(self, tmp_path: pathlib.Path):
        env_file = tmp_path / "itt.env"
        env_file.write_text("ITT_N_C=three\n")

        with pytest.raises(ConfigurationError):
            load_env(env_file=str(env_file))


class TestITTConfig:
    def test_vagrant_defaults(self):
        config = ITTConfig.from_env(Env(ITT_PROVISIONER="vagrant"))

        assert config.node_count == 1
        assert config.hadoop_user == "vagrant"
        assert config.hdfs_source_path == "/user/vagrant/test-data/soc-pokec-relationships.txt"
        assert config.hdfs_target_path == "/user/vagrant/test-data/soc-pokec-relationships.txt.w"

    def test_docker_defaults(self):
        config = ITTConfig.from_env(Env(ITT_PROVISIONER="docker"))

        assert config.node_count == 3
        assert config.hadoop_user == "root"
        assert config.container_source_path == "/test-data/soc-pokec-relationships.txt"

    def test_explicit_node_count_and_directory(self):
        config = ITTConfig.from_env(
            Env(
                ITT_PROVISIONER="docker",
                ITT_N_C=2,
                ITT_HDFS_DIR="/tmp/itt/",
                ITT_TESTDATA_DIR="/var/itt",
            )
        )

        assert config.node_count == 2
        assert config.hdfs_source_path == "/tmp/itt/soc-pokec-relationships.txt"
        assert config.source_path == pathlib.Path("/var/itt/soc-pokec-relationships.txt")

    def test_unknown_log_level(self):
        with pytest.raises(ConfigurationError):
            ITTConfig.from_env(Env.model_construct(ITT_LOG_LEVEL="verbose"))

    def test_invalid_provisioner(self):
        with pytest.raises(ConfigurationError) as error:
            ITTConfig.from_env(Env(ITT_PROVISIONER="kubernetes"))

        assert "Invalid PROVISIONER setting" in str(error.value)

    def test_empty_cluster(self):
        with pytest.raises(ConfigurationError):
            ITTConfig.from_env(Env(ITT_PROVISIONER="docker", ITT_N_C=0))

    def test_config_is_frozen(self, itt_config: ITTConfig):
        with pytest.raises(Exception):
            itt_config.testfile = "other.txt"
