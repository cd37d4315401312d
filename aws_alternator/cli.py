"""Command-line interface for AWS Account Alternator."""

import argparse
import logging
import shutil
import sys

from tabulate import tabulate

from . import __version__
from .auth import authenticate, resolve_credentials
from .errors import AlternatorError, ProfileNotFoundError, ShellExitError
from .log import setup_logging
from .profiles import find_profile
from .prompts import create_credentials_profile, create_federated_profile, create_sso_profile
from .shell import launch_shell
from .store import ConfigStore, CredentialsStore, FederationStore

logger = logging.getLogger(__name__)

CREATE_OPTIONS = (
    ('s', 'Add a new SSO profile'),
    ('o', 'Add a new Okta profile'),
    ('c', 'Add a new credentials profile'),
    ('q', 'Quit'),
)


def print_banner(title):
    terminal_width = shutil.get_terminal_size().columns
    print(f"\n{title}")
    print("=" * min(80, terminal_width))
    print()


def format_profile_table(profiles):
    """Render profiles as a numbered table."""
    table_data = []
    for index, profile in enumerate(profiles, start=1):
        table_data.append([index, profile.name, profile.kind.value, profile.region or 'N/A'])

    headers = ['#', 'Profile', 'Type', 'Region']
    return tabulate(table_data, headers=headers, tablefmt='fancy_grid')


def list_profiles(profiles, config_path):
    """Print all profiles from the config file."""
    print_banner("🔐 AWS Account Alternator")

    if not profiles:
        print(f"❌ No AWS profiles found in {config_path}")
        return 0

    print(f"📋 Found {len(profiles)} profile(s)\n")
    print(format_profile_table(profiles))
    print()
    return 0


def select_profile(profiles, choice):
    """Find the profile for a menu answer: a row number or a profile name."""
    if choice.isdigit() and 1 <= int(choice) <= len(profiles):
        return profiles[int(choice) - 1]

    profile = find_profile(profiles, choice)
    if profile is None:
        raise ProfileNotFoundError(f"Profile '{choice}' not found")
    return profile


def authenticate_and_spawn_shell(profile, credentials_store=None):
    """Log in with a profile, then run a shell with its credentials."""
    print(f"\n👤 Using profile: {profile.name} [{profile.kind.value}]\n")

    authenticate(profile, credentials_store)
    credentials = resolve_credentials(profile)

    print("\n✅ Credentials obtained successfully!\n")
    launch_shell(profile.name, credentials)


def print_menu(profiles):
    print_banner("🔐 AWS Account Alternator")

    if profiles:
        print(format_profile_table(profiles))
    else:
        print("⚠️  No AWS profiles found.")
        print("   Let's create your first profile!")
    print()

    for key, label in CREATE_OPTIONS:
        print(f"   {key}) {label}")
    print()


def interactive_menu(profiles, config_store, credentials_store, federation_store):
    """
    Show the profile menu until a profile is chosen or the user quits.

    Errors while creating a profile are reported and the menu is shown
    again. Errors while authenticating or running the shell propagate.
    """
    creators = {
        's': lambda: create_sso_profile(config_store),
        'o': lambda: create_federated_profile(config_store, federation_store),
        'c': lambda: create_credentials_profile(config_store, credentials_store),
    }

    while True:
        print_menu(profiles)

        try:
            choice = input("Select a profile (number or name): ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\nCancelled.")
            return 0

        if not choice:
            continue

        if choice.lower() == 'q':
            print("Cancelled.")
            return 0

        if choice.lower() in creators:
            try:
                profile = creators[choice.lower()]()
            except AlternatorError as e:
                print(f"\n❌ Error creating profile: {e}\n")
                logger.debug("Profile creation failed", exc_info=True)
                continue
            except (KeyboardInterrupt, EOFError):
                print("\n⚠️  Profile creation cancelled.\n")
                continue
            profiles.append(profile)
        else:
            try:
                profile = select_profile(profiles, choice)
            except ProfileNotFoundError as e:
                print(f"\n❌ {e}\n")
                continue

        authenticate_and_spawn_shell(profile, credentials_store)
        return 0


def main(argv=None):
    """Main function to parse arguments and route to appropriate command."""
    parser = argparse.ArgumentParser(
        prog='aaa',
        description='AWS Account Alternator - Manage AWS profiles and open authenticated shells',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  aaa                # Choose or create a profile from the interactive menu
  aaa myprofile      # Log in with 'myprofile' and open a shell
  aaa --list         # List all profiles in the AWS config file
        """
    )

    parser.add_argument(
        'profile',
        nargs='?',
        help='Profile name to use (if not specified, shows interactive menu)'
    )

    parser.add_argument(
        '--list',
        action='store_true',
        help='List profiles and exit'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    args = parser.parse_args(argv)
    setup_logging('DEBUG' if args.verbose else 'WARNING')

    config_store = ConfigStore()
    credentials_store = CredentialsStore()
    federation_store = FederationStore()

    try:
        profiles = config_store.load()

        if args.list:
            return list_profiles(profiles, config_store.path)

        if args.profile:
            profile = find_profile(profiles, args.profile)
            if profile is None:
                raise ProfileNotFoundError(
                    f"Profile '{args.profile}' not found in {config_store.path}"
                )
            authenticate_and_spawn_shell(profile, credentials_store)
            return 0

        return interactive_menu(profiles, config_store, credentials_store, federation_store)

    except ShellExitError as e:
        print(f"\n⚠️  {e}\n")
        return 0
    except AlternatorError as e:
        print(f"\n❌ Error: {e}\n")
        logger.debug("Command failed", exc_info=True)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130


if __name__ == '__main__':
    sys.exit(main())
