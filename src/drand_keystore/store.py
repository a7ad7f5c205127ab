"""
Storage of drand's private and public cryptographic material

The Store interface decouples callers from where key material lives. The only
implementation, FileStore, keeps one TOML file per kind of material under a
base folder and writes the private ones owner-only.
"""

import sys
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from . import fs
from .exceptions import StoreInitError
from .group import Group
from .key import Pair
from .share import DistPublic, Share
from .tomler import load, save

logger = logging.getLogger(__name__)

# On-disk layout
KEY_FOLDER_NAME = "key"
GROUP_FOLDER_NAME = "groups"
KEY_FILE_NAME = "drand_id"
PRIVATE_EXTENSION = ".private"
PUBLIC_EXTENSION = ".public"
GROUP_FILE_NAME = "drand_group.toml"
SHARE_FILE_NAME = "dist_key.private"
DIST_KEY_FILE_NAME = "dist_key.public"

# Categories reported by FileStore.paths() and FileStore.status()
PRIVATE_KEY = "private_key"
PUBLIC_KEY = "public_key"
GROUP = "group"
SHARE = "share"
DIST_KEY = "dist_key"


class Store(ABC):
    """
    Loading and saving of private/public cryptographic material.

    Every load raises AbsentError when the material was never saved,
    StoreFileError when the file cannot be read, and DecodeError when its
    content does not describe the expected entity.
    """

    @abstractmethod
    def save_key_pair(self, pair: Pair) -> None:
        """Save the private key of the node and its public identity"""

    @abstractmethod
    def load_key_pair(self) -> Pair:
        """Load the private/public key pair of the node"""

    @abstractmethod
    def save_share(self, share: Share) -> None:
        """Save the private share of the distributed key"""

    @abstractmethod
    def load_share(self) -> Share:
        """Load the private share of the distributed key"""

    @abstractmethod
    def save_group(self, group: Group) -> None:
        """Save the group configuration"""

    @abstractmethod
    def load_group(self) -> Group:
        """Load the group configuration"""

    @abstractmethod
    def save_dist_public(self, dist: DistPublic) -> None:
        """Save the distributed public key of the group"""

    @abstractmethod
    def load_dist_public(self) -> DistPublic:
        """Load the distributed public key of the group"""


class FileStore(Store):
    """
    Store keeping key material in files under a base folder.

    The base folder and its key/ and groups/ subfolders are created owner-only
    on construction; existing folders have their permissions tightened.
    """

    def __init__(self, base_folder: Union[str, Path], log: Optional[logging.Logger] = None):
        """
        Initialize the file store

        Args:
            base_folder: Folder holding all key material
            log: Logger for informational messages (defaults to the module logger)

        Raises:
            StoreInitError: If a folder cannot be created or secured
        """
        self.log = log or logger

        if fs.create_secure_folder(base_folder) is None:
            raise StoreInitError(
                f"Can't create or secure config folder {base_folder}",
                "CONFIG_FOLDER_FAILED",
                {"path": str(base_folder)}
            )
        self.base_folder = Path(base_folder)

        key_folder = self._secure_subfolder(KEY_FOLDER_NAME)
        group_folder = self._secure_subfolder(GROUP_FOLDER_NAME)

        self.private_key_file = key_folder / (KEY_FILE_NAME + PRIVATE_EXTENSION)
        self.public_key_file = key_folder / (KEY_FILE_NAME + PUBLIC_EXTENSION)
        self.group_file = group_folder / GROUP_FILE_NAME
        self.share_file = group_folder / SHARE_FILE_NAME
        self.dist_key_file = group_folder / DIST_KEY_FILE_NAME

    def _secure_subfolder(self, name: str) -> Path:
        folder = fs.create_secure_folder(self.base_folder / name)
        if folder is None:
            raise StoreInitError(
                f"Can't create or secure folder {self.base_folder / name}",
                "SUBFOLDER_FAILED",
                {"path": str(self.base_folder / name)}
            )
        return Path(folder)

    def save_key_pair(self, pair: Pair) -> None:
        """Save the private key with tight permissions, then the public identity"""
        save(self.private_key_file, pair, True)
        self.log.info("Saved the key : %s at %s", pair.public.address, self.public_key_file)
        save(self.public_key_file, pair.public, False)

    def load_key_pair(self) -> Pair:
        """Load the private key first, then the public identity into the pair"""
        pair = Pair()
        load(self.private_key_file, pair)
        load(self.public_key_file, pair.public)
        return pair

    def save_share(self, share: Share) -> None:
        self.log.info("crypto store: saving private share in %s", self.share_file)
        save(self.share_file, share, True)

    def load_share(self) -> Share:
        share = Share()
        load(self.share_file, share)
        return share

    def save_group(self, group: Group) -> None:
        save(self.group_file, group, False)

    def load_group(self) -> Group:
        group = Group()
        load(self.group_file, group)
        return group

    def save_dist_public(self, dist: DistPublic) -> None:
        self.log.info("crypto store: saving public distributed key in %s", self.dist_key_file)
        save(self.dist_key_file, dist, False)

    def load_dist_public(self) -> DistPublic:
        dist = DistPublic()
        load(self.dist_key_file, dist)
        return dist

    def paths(self) -> Dict[str, Path]:
        """Return the file used for each kind of material"""
        return {
            PRIVATE_KEY: self.private_key_file,
            PUBLIC_KEY: self.public_key_file,
            GROUP: self.group_file,
            SHARE: self.share_file,
            DIST_KEY: self.dist_key_file,
        }

    def status(self) -> Dict[str, bool]:
        """Return which kinds of material have been saved"""
        return {category: fs.file_exists(path) for category, path in self.paths().items()}


def new_file_store(base_folder: Union[str, Path], log: Optional[logging.Logger] = None) -> FileStore:
    """
    Create the file store, terminating the process if its folders can't be
    secured.

    Args:
        base_folder: Folder holding all key material
        log: Logger handed to the store

    Returns:
        FileStore: A ready to use store
    """
    log = log or logger
    try:
        return FileStore(base_folder, log=log)
    except StoreInitError as e:
        log.critical(
            "Something went wrong with the config folder %s: %s. "
            "Make sure that you have the appropriate rights.", base_folder, e
        )
        sys.exit(1)
