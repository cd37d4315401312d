"""Interactive creation of new profiles."""

import configparser
import getpass
import logging
import re

from .errors import DuplicateNameError, ValidationError
from .profiles import Profile, ProfileKind

logger = logging.getLogger(__name__)

DEFAULT_REGION = 'us-east-1'

PROFILE_NAME_RE = re.compile(r'^[A-Za-z0-9_-]+$')
ACCESS_KEY_ID_RE = re.compile(r'^[A-Za-z0-9]+$')
SECRET_ACCESS_KEY_RE = re.compile(r'^[A-Za-z0-9+/=]+$')
REGION_RE = re.compile(r'^[A-Za-z0-9-]+$')
ACCOUNT_ID_RE = re.compile(r'^[0-9]{12}$')

# configparser treats this section as defaults for every other section.
RESERVED_NAMES = (configparser.DEFAULTSECT,)


def validate_profile_name(name):
    if not PROFILE_NAME_RE.match(name):
        raise ValidationError(
            'Profile name can only contain alphanumeric characters, hyphens, and underscores'
        )
    if name in RESERVED_NAMES:
        raise ValidationError(f"Profile name '{name}' is reserved")
    return name


def validate_access_key_id(access_key_id):
    if not ACCESS_KEY_ID_RE.match(access_key_id):
        raise ValidationError('Access Key ID should only contain alphanumeric characters')
    return access_key_id


def validate_secret_access_key(secret_access_key):
    if not SECRET_ACCESS_KEY_RE.match(secret_access_key):
        raise ValidationError('Secret Access Key contains invalid characters')
    return secret_access_key


def validate_region(region):
    if not REGION_RE.match(region):
        raise ValidationError('Region should only contain alphanumeric characters and hyphens')
    return region


def validate_account_id(account_id):
    if not ACCOUNT_ID_RE.match(account_id):
        raise ValidationError('AWS account ID must be exactly 12 digits')
    return account_id


def prompt_required(label, hint=None, secret=False):
    """Ask for a value that must not be empty."""
    if hint:
        print(f"   ({hint})")
    read = getpass.getpass if secret else input
    value = read(f"   {label}: ").strip()
    if not value:
        raise ValidationError(f'{label} cannot be empty')
    return value


def prompt_optional(label, hint=None):
    """Ask for a value; empty input means absent."""
    if hint:
        print(f"   ({hint})")
    value = input(f"   {label} (optional): ").strip()
    return value or None


def prompt_with_default(label, default, hint=None):
    if hint:
        print(f"   ({hint})")
    value = input(f"   {label} [{default}]: ").strip()
    return value or default


def _print_heading(title):
    print()
    print(f"➕ {title}")
    print()


def _prompt_new_name(config_store, credentials_store=None):
    name = validate_profile_name(prompt_required('Profile name', 'a unique name, e.g. my-org-dev'))
    if config_store.has_profile(name):
        raise DuplicateNameError(f"Profile '{name}' already exists in config")
    if credentials_store is None:
        return name
    if credentials_store.has_header(name) or credentials_store.has_profile(name):
        raise DuplicateNameError(f"Profile '{name}' already exists in credentials file")
    return name


def _prompt_region(label='Default region'):
    return validate_region(prompt_with_default(label, DEFAULT_REGION))


def create_sso_profile(config_store):
    """Prompt for an SSO profile and append it to the config file."""
    _print_heading('Create New AWS SSO Profile')

    name = _prompt_new_name(config_store)
    profile = Profile(
        name=name,
        kind=ProfileKind.SSO,
        sso_start_url=prompt_required(
            'SSO start URL', 'e.g. https://my-sso-portal.awsapps.com/start'
        ),
        sso_region=_prompt_region('SSO region'),
        sso_account_id=validate_account_id(prompt_required('AWS account ID', 'the 12-digit account ID')),
        sso_role_name=prompt_required('SSO role name', 'e.g. PowerUserAccess'),
        region=_prompt_region(),
    )

    config_store.append(profile)
    logger.info("Created SSO profile %s", name)
    print("\n✅ Profile created successfully!\n")
    return profile


def create_federated_profile(config_store, federation_store):
    """Prompt for an Okta profile and write it to the config file and okta.yaml."""
    _print_heading('Create New Okta AWS Profile')

    name = _prompt_new_name(config_store)
    if name in federation_store.profiles():
        raise DuplicateNameError(f"Profile '{name}' already exists in {federation_store.path}")

    profile = Profile(
        name=name,
        kind=ProfileKind.FEDERATED,
        okta_org_domain=prompt_required('Okta org domain', 'e.g. my-org.okta.com'),
        okta_oidc_client_id=prompt_required('OIDC client ID', 'the OIDC native application client ID'),
        okta_aws_account_federation_app_id=prompt_optional(
            'AWS Account Federation App ID',
            'may be empty if the OIDC app has the okta.users.read.self grant',
        ),
        okta_aws_iam_role=prompt_optional(
            'AWS IAM Role ARN', 'e.g. arn:aws:iam::123456789012:role/MyRole'
        ),
        okta_aws_iam_idp=prompt_optional(
            'AWS IAM Identity Provider ARN', 'e.g. arn:aws:iam::123456789012:saml-provider/okta-idp'
        ),
        region=_prompt_region(),
    )

    config_store.append(profile)
    federation_store.append(profile)
    print(f"✅ Updated {federation_store.path} with profile '{name}'")
    logger.info("Created Okta profile %s", name)
    print("\n✅ Profile created successfully!\n")
    return profile


def create_credentials_profile(config_store, credentials_store):
    """Prompt for a static key pair profile and write it to both AWS files."""
    _print_heading('Create New AWS Credentials Profile')

    name = _prompt_new_name(config_store, credentials_store)
    access_key_id = validate_access_key_id(
        prompt_required('AWS Access Key ID', 'e.g. AKIA... or ASIA...')
    )
    secret_access_key = validate_secret_access_key(
        prompt_required('AWS Secret Access Key', secret=True)
    )
    profile = Profile(name=name, kind=ProfileKind.STANDARD, region=_prompt_region())

    config_store.append(profile)
    credentials_store.append(name, access_key_id, secret_access_key)
    logger.info("Created credentials profile %s", name)
    print("\n✅ Profile created successfully!\n")
    return profile
