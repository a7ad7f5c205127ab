"""
Configuration for drand keystore

Resolves the folder key material is stored in. The folder can be set with the
--homedir command-line flag or the DRAND_HOME environment variable, and
defaults to ~/.drand.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

# Name of the CLI flag changing the configuration folder, mimicking gpg
CONFIG_FOLDER_FLAG = "homedir"
HOME_ENV_VAR = "DRAND_HOME"
DEFAULT_FOLDER_NAME = ".drand"


def default_config_folder() -> Path:
    """Get the default configuration folder in the user's home"""
    return Path.home() / DEFAULT_FOLDER_NAME


@dataclass(frozen=True)
class KeyStoreConfig:
    """
    Settings for opening a key store

    Attributes:
        base_folder: Folder holding key/ and groups/
        verbose: Log informational messages
    """
    base_folder: Path
    verbose: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'KeyStoreConfig':
        """Build a configuration from environment variables"""
        environ = os.environ if environ is None else environ
        folder = environ.get(HOME_ENV_VAR)
        if folder:
            return cls(base_folder=Path(folder).expanduser())
        return cls(base_folder=default_config_folder())

    def with_overrides(self, base_folder: Optional[str] = None, verbose: Optional[bool] = None) -> 'KeyStoreConfig':
        """Return a copy with the given non-None settings replaced"""
        config = self
        if base_folder:
            config = replace(config, base_folder=Path(base_folder).expanduser())
        if verbose is not None:
            config = replace(config, verbose=verbose)
        return config
