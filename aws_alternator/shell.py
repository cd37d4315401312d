"""Launching an interactive shell with profile credentials."""

import logging
import os
import subprocess

from .errors import ShellExitError, ShellSpawnError

logger = logging.getLogger(__name__)

DEFAULT_SHELL = '/bin/bash'

# Variables owned by the credential map; stale copies are not inherited.
MANAGED_VARIABLES = (
    'AWS_ACCESS_KEY_ID',
    'AWS_SECRET_ACCESS_KEY',
    'AWS_SESSION_TOKEN',
    'AWS_REGION',
    'AWS_DEFAULT_REGION',
    'AWS_PROFILE',
)


def get_shell(environ=None):
    environ = os.environ if environ is None else environ
    return environ.get('SHELL') or DEFAULT_SHELL


def build_shell_environment(profile_name, credentials, environ=None):
    """
    Build the environment for the child shell.

    The child inherits the current environment (PATH, HOME, USER and the
    rest) with the credential variables laid over it.

    Args:
        profile_name: Name shown in the prompt prefix
        credentials: Variables from resolve_credentials()
        environ: Base environment, defaults to os.environ (never modified)

    Returns:
        dict: A new environment mapping
    """
    environ = os.environ if environ is None else environ
    env = {key: value for key, value in environ.items() if key not in MANAGED_VARIABLES}
    env.update(credentials)

    prefix = f'(aws:{profile_name}) '
    current_ps1 = environ.get('PS1')
    env['PS1'] = f'{prefix}{current_ps1}' if current_ps1 else f'{prefix}\\$ '
    return env


def launch_shell(profile_name, credentials):
    """
    Run an interactive shell with the credentials and wait for it to exit.

    Raises:
        ShellSpawnError: If the shell cannot be started
        ShellExitError: If the shell exits with a non-zero status
    """
    shell = get_shell()
    env = build_shell_environment(profile_name, credentials)

    print("🐚 Starting new shell with AWS credentials...")
    print(f"   Shell: {shell}")
    print()
    print("   Environment variables set:")
    for key in MANAGED_VARIABLES:
        if key in credentials:
            print(f"     - {key}")
    print()
    print("   Type 'exit' to return to the original shell.")
    print()

    logger.debug("Spawning %s for profile %s", shell, profile_name)
    try:
        result = subprocess.run([shell], env=env)
    except OSError as e:
        raise ShellSpawnError(f'Failed to spawn shell {shell}: {e}') from e

    if result.returncode != 0:
        raise ShellExitError(result.returncode)

    print()
    print("👋 Returned to original shell.")
