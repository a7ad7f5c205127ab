"""
Unit tests for keystore configuration
"""

from pathlib import Path

from drand_keystore.config import (
    CONFIG_FOLDER_FLAG,
    DEFAULT_FOLDER_NAME,
    HOME_ENV_VAR,
    KeyStoreConfig,
    default_config_folder,
)


class TestKeyStoreConfig:
    """Test cases for KeyStoreConfig"""

    def test_flag_name(self):
        assert CONFIG_FOLDER_FLAG == "homedir"

    def test_default_folder(self):
        """Test the default folder lives in the user's home"""
        assert default_config_folder() == Path.home() / DEFAULT_FOLDER_NAME

    def test_from_env_default(self):
        config = KeyStoreConfig.from_env({})

        assert config.base_folder == default_config_folder()
        assert config.verbose is False

    def test_from_env_override(self, tmp_path):
        config = KeyStoreConfig.from_env({HOME_ENV_VAR: str(tmp_path)})

        assert config.base_folder == tmp_path

    def test_from_process_environment(self, monkeypatch, tmp_path):
        """Test os.environ is used when no mapping is given"""
        monkeypatch.setenv(HOME_ENV_VAR, str(tmp_path / "node"))

        assert KeyStoreConfig.from_env().base_folder == tmp_path / "node"

    def test_with_overrides(self, tmp_path):
        """Test explicit settings take precedence and None keeps the current value"""
        config = KeyStoreConfig.from_env({})

        overridden = config.with_overrides(base_folder=str(tmp_path), verbose=True)
        unchanged = config.with_overrides()

        assert overridden.base_folder == tmp_path
        assert overridden.verbose is True
        assert unchanged == config
