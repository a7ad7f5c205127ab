"""
Command-line interface for drand keystore
Generates the node identity, assembles group files and inspects the store
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import CONFIG_FOLDER_FLAG, KeyStoreConfig
from .exceptions import AbsentError, KeyStoreError
from .group import Group, default_threshold
from .key import Identity, new_key_pair
from .store import PRIVATE_KEY, FileStore, new_file_store
from .tomler import Tomler, encode, load, save
from .version import __version__

logger = logging.getLogger(__name__)

SHOW_TARGETS = ('public', 'group', 'dist-key')


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='drand-keys',
        description='Manage the key material of a drand node'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'drand keystore {__version__}'
    )
    parser.add_argument(
        f'--{CONFIG_FOLDER_FLAG}',
        dest='homedir',
        help='Folder to keep key material in (default: $DRAND_HOME or ~/.drand)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log informational messages'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    keygen_parser = subparsers.add_parser('keygen', help='Generate and save the node identity')
    keygen_parser.add_argument('address', help='host:port the node is reachable at')
    keygen_parser.add_argument(
        '--force',
        action='store_true',
        help='Overwrite an existing key pair'
    )

    group_parser = subparsers.add_parser('group', help='Build a group file from public identities')
    group_parser.add_argument('identities', nargs='+', help='Public identity files (drand_id.public)')
    group_parser.add_argument(
        '--threshold',
        type=int,
        help='Number of shares needed to sign (default: 2n/3 + 1)'
    )
    group_parser.add_argument('--out', help='Write the group here instead of into the store')

    show_parser = subparsers.add_parser('show', help='Print stored public material')
    show_parser.add_argument('target', choices=SHOW_TARGETS, help='Material to print')

    subparsers.add_parser('status', help='List which material has been saved')

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )


def print_toml(entity: Tomler) -> None:
    print(encode(entity), end="")


def handle_keygen_command(args, store: FileStore) -> int:
    """Handle key generation command."""
    if store.status()[PRIVATE_KEY] and not args.force:
        print(
            f"Error: a key pair already exists in {store.base_folder} (use --force to replace it)",
            file=sys.stderr
        )
        return 1

    pair = new_key_pair(args.address)
    store.save_key_pair(pair)

    print(f"Generated key pair for {pair.public.address}")
    print(f"  Private: {store.private_key_file}")
    print(f"  Public:  {store.public_key_file}")
    return 0


def handle_group_command(args, store: FileStore) -> int:
    """Handle group creation command."""
    identities = []
    for path in args.identities:
        identity = Identity()
        load(path, identity)
        identities.append(identity)

    threshold = args.threshold if args.threshold is not None else default_threshold(len(identities))
    if threshold < 1 or threshold > len(identities):
        print(
            f"Error: threshold must be between 1 and {len(identities)}",
            file=sys.stderr
        )
        return 1

    group = Group.from_identities(identities, threshold)
    if args.out:
        save(args.out, group, False)
        destination = args.out
    else:
        store.save_group(group)
        destination = store.group_file

    print(f"Group of {len(group)} nodes (threshold {group.threshold}) written to {destination}")
    return 0


def handle_show_command(args, store: FileStore) -> int:
    """Handle printing of stored public material."""
    try:
        if args.target == 'public':
            print_toml(store.load_key_pair().public)
        elif args.target == 'group':
            print_toml(store.load_group())
        else:
            print_toml(store.load_dist_public())
    except AbsentError:
        print(f"Error: no {args.target} stored in {store.base_folder}", file=sys.stderr)
        return 1
    return 0


def handle_status_command(args, store: FileStore) -> int:
    """Handle listing of saved material."""
    print(f"Key store: {store.base_folder}")
    paths = store.paths()
    for category, present in store.status().items():
        state = 'present' if present else 'missing'
        print(f"  {category:<12} {state:<8} {paths[category]}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI

    Args:
        argv: Command line arguments (None to use sys.argv)

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    config = KeyStoreConfig.from_env().with_overrides(base_folder=args.homedir, verbose=args.verbose)
    configure_logging(config.verbose)

    handlers = {
        'keygen': handle_keygen_command,
        'group': handle_group_command,
        'show': handle_show_command,
        'status': handle_status_command,
    }

    try:
        store = new_file_store(config.base_folder)
        return handlers[args.command](args, store)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130
    except KeyStoreError as e:
        logger.debug("command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
