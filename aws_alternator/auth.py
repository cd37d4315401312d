"""Profile authentication and credential resolution."""

import logging
import subprocess

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .errors import (
    ConfigIncompleteError,
    CredentialsNotFoundError,
    LoginFailedError,
)
from .profiles import ProfileKind
from .store import CredentialsStore

logger = logging.getLogger(__name__)


def sso_login(profile):
    """
    Log in to AWS SSO for a profile by running aws sso login.

    Args:
        profile: SSO Profile to log in with

    Raises:
        LoginFailedError: If the AWS CLI is missing or exits non-zero
    """
    command = ['aws', 'sso', 'login', '--profile', profile.name]
    print(f"🔐 Initiating SSO login for profile: {profile.name}")
    print("   Please follow the instructions in your browser...\n")
    logger.debug("Running %s", command)

    try:
        result = subprocess.run(command)
    except FileNotFoundError as e:
        raise LoginFailedError(
            'AWS CLI not found. Please install the AWS CLI to use SSO login.'
        ) from e

    if result.returncode != 0:
        raise LoginFailedError(f'SSO login failed with exit code {result.returncode}')

    print("✅ SSO login successful!")


def build_okta_command(profile):
    """Build the okta-aws-cli web command line for a federated profile."""
    if not profile.okta_org_domain:
        raise ConfigIncompleteError(
            f"Okta org domain is required but not configured for profile '{profile.name}'"
        )
    if not profile.okta_oidc_client_id:
        raise ConfigIncompleteError(
            f"OIDC client ID is required but not configured for profile '{profile.name}'"
        )

    command = [
        'okta-aws-cli', 'web',
        '--org-domain', profile.okta_org_domain,
        '--oidc-client-id', profile.okta_oidc_client_id,
    ]
    if profile.okta_aws_account_federation_app_id:
        command += ['--aws-acct-fed-app-id', profile.okta_aws_account_federation_app_id]
    if profile.okta_aws_iam_role:
        command += ['--aws-iam-role', profile.okta_aws_iam_role]
    if profile.okta_aws_iam_idp:
        command += ['--aws-iam-idp', profile.okta_aws_iam_idp]

    command += [
        '--format', 'aws-credentials',
        '--profile', profile.name,
        '--write-aws-credentials',
    ]
    return command


def okta_login(profile):
    """
    Authenticate a federated profile through okta-aws-cli.

    okta-aws-cli writes the temporary credentials into the AWS
    credentials file under the profile name.

    Raises:
        ConfigIncompleteError: If the org domain or client ID is missing
        LoginFailedError: If okta-aws-cli is missing or exits non-zero
    """
    command = build_okta_command(profile)
    print(f"🔐 Initiating Okta authentication for profile: {profile.name}")
    print("   Your browser may open for authentication...\n")
    logger.debug("Running %s", command)

    try:
        result = subprocess.run(command)
    except FileNotFoundError as e:
        raise LoginFailedError(
            'okta-aws-cli not found. Make sure okta-aws-cli is installed and in your PATH.'
        ) from e

    if result.returncode != 0:
        raise LoginFailedError(f'Okta authentication failed with exit code {result.returncode}')

    print("✅ Okta authentication successful!")


def verify_static_credentials(profile, credentials_store=None):
    """Check that the credentials file has a section for a standard profile."""
    credentials_store = credentials_store or CredentialsStore()

    if not credentials_store.exists():
        raise CredentialsNotFoundError(
            f'Credentials file not found at {credentials_store.path}. '
            'Please configure your AWS credentials.'
        )
    if not credentials_store.has_profile(profile.name):
        raise CredentialsNotFoundError(
            f"Profile '{profile.name}' not found in credentials file"
        )

    print(f"✅ Credentials found in {credentials_store.path}")


def authenticate(profile, credentials_store=None):
    """Run the login flow that matches the profile kind."""
    if profile.kind == ProfileKind.FEDERATED:
        okta_login(profile)
    elif profile.kind == ProfileKind.SSO:
        sso_login(profile)
    else:
        print("🔑 Standard profile, using static credentials")
        verify_static_credentials(profile, credentials_store)


def resolve_credentials(profile):
    """
    Resolve credentials for a profile through the boto3 provider chain.

    Returns:
        dict: Environment variables to export into the shell
    """
    print("   Fetching credentials...")
    try:
        session = boto3.Session(profile_name=profile.name)
        credentials = session.get_credentials()
        if credentials is None:
            raise CredentialsNotFoundError(
                f"No credentials available for profile '{profile.name}'"
            )
        frozen = credentials.get_frozen_credentials()
    except (BotoCoreError, ClientError) as e:
        raise CredentialsNotFoundError(
            f"Failed to retrieve credentials for profile '{profile.name}': {e}"
        ) from e

    env = {
        'AWS_ACCESS_KEY_ID': frozen.access_key,
        'AWS_SECRET_ACCESS_KEY': frozen.secret_key,
    }
    if frozen.token:
        env['AWS_SESSION_TOKEN'] = frozen.token
    if profile.region:
        env['AWS_REGION'] = profile.region
        env['AWS_DEFAULT_REGION'] = profile.region
    env['AWS_PROFILE'] = profile.name

    logger.debug("Resolved %s credentials for %s",
                 'temporary' if frozen.token else 'static', profile.name)
    return env
