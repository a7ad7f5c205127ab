"""
drand keystore
Storage of a drand node's identity, group and distributed key material
"""

from .version import __version__
from .exceptions import (
    KeyStoreError,
    StoreError,
    StoreErrorKind,
    StoreFileError,
    AbsentError,
    DecodeError,
    StoreInitError,
    KeyGenerationError,
)
from .tomler import Tomler, save, load
from .key import Identity, Pair, new_key_pair
from .group import Group, default_threshold
from .share import Share, DistPublic
from .store import Store, FileStore, new_file_store
from .config import KeyStoreConfig, CONFIG_FOLDER_FLAG, default_config_folder

__all__ = [
    '__version__',
    # Exceptions
    'KeyStoreError',
    'StoreError',
    'StoreErrorKind',
    'StoreFileError',
    'AbsentError',
    'DecodeError',
    'StoreInitError',
    'KeyGenerationError',
    # Serialization
    'Tomler',
    'save',
    'load',
    # Key material
    'Identity',
    'Pair',
    'new_key_pair',
    'Group',
    'default_threshold',
    'Share',
    'DistPublic',
    # Storage
    'Store',
    'FileStore',
    'new_file_store',
    # Configuration
    'KeyStoreConfig',
    'CONFIG_FOLDER_FLAG',
    'default_config_folder',
]
