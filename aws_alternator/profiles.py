"""AWS profile model and classification."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ProfileKind(Enum):
    STANDARD = 'Standard'
    SSO = 'SSO'
    FEDERATED = 'Okta'


# Keys whose presence decides the kind, checked in this order.
FEDERATED_DESIGNATOR = 'okta_org_domain'
SSO_DESIGNATOR = 'sso_start_url'

SSO_FIELDS = ('sso_start_url', 'sso_region', 'sso_account_id', 'sso_role_name')
FEDERATED_FIELDS = (
    'okta_org_domain',
    'okta_oidc_client_id',
    'okta_aws_account_federation_app_id',
    'okta_aws_iam_role',
    'okta_aws_iam_idp',
)
# Order in which fields are written to the config file.
CONFIG_FIELDS = SSO_FIELDS + FEDERATED_FIELDS + ('region',)

DEFAULT_PROFILE = 'default'
PROFILE_PREFIX = 'profile '


@dataclass
class Profile:
    """One named profile from the AWS config file."""

    name: str
    kind: ProfileKind = ProfileKind.STANDARD
    region: Optional[str] = None
    sso_start_url: Optional[str] = None
    sso_region: Optional[str] = None
    sso_account_id: Optional[str] = None
    sso_role_name: Optional[str] = None
    okta_org_domain: Optional[str] = None
    okta_oidc_client_id: Optional[str] = None
    okta_aws_account_federation_app_id: Optional[str] = None
    okta_aws_iam_role: Optional[str] = None
    okta_aws_iam_idp: Optional[str] = None

    @classmethod
    def from_section(cls, name, items):
        """Build a profile from the key/value pairs of a config section."""
        items = dict(items)
        fields = {key: items[key] for key in CONFIG_FIELDS if key in items}
        return cls(name=name, kind=classify(items), **fields)

    @property
    def section_name(self):
        return section_name(self.name)

    def config_items(self):
        """Return the (key, value) pairs to write, skipping absent fields."""
        items = []
        for key in CONFIG_FIELDS:
            value = getattr(self, key)
            if value is not None:
                items.append((key, value))
        return items


def classify(items):
    """Infer the profile kind from the keys present in a config section."""
    if FEDERATED_DESIGNATOR in items:
        return ProfileKind.FEDERATED
    if SSO_DESIGNATOR in items:
        return ProfileKind.SSO
    return ProfileKind.STANDARD


def section_name(profile_name):
    """Get the config file section name for a profile."""
    if profile_name == DEFAULT_PROFILE:
        return DEFAULT_PROFILE
    return f'{PROFILE_PREFIX}{profile_name}'


def profile_name_from_section(section):
    """Get the profile name for a config section, or None if it is not a profile."""
    if section == DEFAULT_PROFILE:
        return DEFAULT_PROFILE
    if section.startswith(PROFILE_PREFIX):
        return section[len(PROFILE_PREFIX):]
    return None


def find_profile(profiles, name):
    """Return the profile called name from profiles, or None."""
    for profile in profiles:
        if profile.name == name:
            return profile
    return None
