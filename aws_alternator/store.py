"""Reading and appending AWS config, credentials and okta-aws-cli files.

The stores are append-only: new sections are written at the end of the
file and existing sections are never rewritten.
"""

import configparser
import logging
import os
from pathlib import Path

import yaml

from .errors import DuplicateNameError, StoreIOError, StoreParseError
from .profiles import Profile, find_profile, profile_name_from_section

logger = logging.getLogger(__name__)


def get_config_path():
    """Get the AWS config file path, honouring AWS_CONFIG_FILE."""
    override = os.environ.get('AWS_CONFIG_FILE')
    if override:
        return Path(override).expanduser()
    return Path.home() / '.aws' / 'config'


def get_credentials_path():
    """Get the AWS credentials file path, honouring AWS_SHARED_CREDENTIALS_FILE."""
    override = os.environ.get('AWS_SHARED_CREDENTIALS_FILE')
    if override:
        return Path(override).expanduser()
    return Path.home() / '.aws' / 'credentials'


def get_okta_config_path():
    """Get the okta-aws-cli config file path."""
    return Path.home() / '.okta' / 'okta.yaml'


def _read_text(path):
    if not path.exists():
        return ''
    try:
        return path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise StoreParseError(f'Failed to parse {path}: not valid UTF-8 ({e})') from e
    except OSError as e:
        raise StoreIOError(f'Failed to read {path}: {e}') from e


def _parse(path, content):
    config = configparser.ConfigParser(interpolation=None)
    try:
        config.read_string(content, source=str(path))
    except configparser.Error as e:
        raise StoreParseError(f'Failed to parse {path}: {e}') from e
    return config


def has_section_header(content, section):
    """Check whether content has a line that is exactly the header [section]."""
    header = f'[{section}]'
    return any(line.strip() == header for line in content.splitlines())


def append_section(path, section, items, mode=None):
    """
    Append a [section] with the given key/value pairs to the end of path.

    Args:
        path: File to append to; it and its parent directory are created if missing
        section: Section name, written without brackets
        items: Iterable of (key, value) pairs
        mode: Permission bits to apply when the file is newly created

    Raises:
        DuplicateNameError: If the file already has a header for section
        StoreIOError: If the file cannot be read or written
    """
    existing = _read_text(path)
    if has_section_header(existing, section):
        raise DuplicateNameError(f'Section [{section}] already exists in {path}')

    lines = []
    if existing and not existing.endswith('\n'):
        lines.append('')
    lines.append(f'[{section}]')
    lines.extend(f'{key} = {value}' for key, value in items)

    is_new = not path.exists()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'a', encoding='utf-8') as f:
            f.write('\n'.join(lines) + '\n')
        if is_new and mode is not None:
            path.chmod(mode)
    except OSError as e:
        raise StoreIOError(f'Failed to write {path}: {e}') from e

    logger.debug("Appended section [%s] to %s", section, path)


class ConfigStore:
    """Profiles stored in the AWS config file."""

    def __init__(self, path=None):
        self.path = Path(path) if path else get_config_path()

    def load(self):
        """
        Load every profile from the config file.

        A missing file is created empty. Sections that are neither
        [default] nor [profile <name>] are skipped.

        Returns:
            list: Profile objects in file order
        """
        if not self.path.exists():
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text('', encoding='utf-8')
            except OSError as e:
                raise StoreIOError(f'Failed to create {self.path}: {e}') from e
            logger.debug("Created empty config file %s", self.path)
            return []

        profiles = self._parse_profiles(_read_text(self.path))
        logger.debug("Loaded %d profile(s) from %s", len(profiles), self.path)
        return profiles

    def _parse_profiles(self, content):
        if not content.strip():
            return []

        config = _parse(self.path, content)
        profiles = []
        for section in config.sections():
            name = profile_name_from_section(section)
            if name is None:
                logger.debug("Skipping non-profile section [%s]", section)
                continue
            profiles.append(Profile.from_section(name, config.items(section)))
        return profiles

    def has_profile(self, name):
        """
        Check whether a profile name is already taken.

        Matches the exact [section] header line, and also the parsed
        profile names, which catch [profile default] and headers followed
        by a comment. A missing file is not created.
        """
        content = _read_text(self.path)
        if has_section_header(content, Profile(name).section_name):
            return True
        return find_profile(self._parse_profiles(content), name) is not None

    def append(self, profile):
        """Append a profile section to the end of the config file."""
        append_section(self.path, profile.section_name, profile.config_items())


class CredentialsStore:
    """Static access keys stored in the AWS credentials file."""

    def __init__(self, path=None):
        self.path = Path(path) if path else get_credentials_path()

    def exists(self):
        return self.path.exists()

    def has_profile(self, name):
        """Check whether the credentials file parses and has a [name] section."""
        content = _read_text(self.path)
        if not content.strip():
            return False
        return _parse(self.path, content).has_section(name)

    def has_header(self, name):
        """Check for a [name] header line without parsing the file."""
        return has_section_header(_read_text(self.path), name)

    def append(self, name, access_key_id, secret_access_key):
        """Append a [name] section holding a static key pair."""
        items = [
            ('aws_access_key_id', access_key_id),
            ('aws_secret_access_key', secret_access_key),
        ]
        append_section(self.path, name, items, mode=0o600)


# Config file keys mapped to okta.yaml keys.
OKTA_YAML_KEYS = (
    ('okta_org_domain', 'org-domain'),
    ('okta_oidc_client_id', 'oidc-client-id'),
    ('okta_aws_account_federation_app_id', 'aws-acct-fed-app-id'),
    ('okta_aws_iam_role', 'aws-iam-role'),
    ('okta_aws_iam_idp', 'aws-iam-idp'),
)


class FederationStore:
    """Per-profile settings in the okta-aws-cli okta.yaml file."""

    def __init__(self, path=None):
        self.path = Path(path) if path else get_okta_config_path()

    def load(self):
        """Load okta.yaml, returning a document with an awscli.profiles mapping."""
        content = _read_text(self.path)
        try:
            document = yaml.safe_load(content) if content.strip() else None
        except yaml.YAMLError as e:
            raise StoreParseError(f'Failed to parse {self.path}: {e}') from e

        if not isinstance(document, dict) or not isinstance(document.get('awscli'), dict):
            document = {'awscli': {}}
        if not isinstance(document['awscli'].get('profiles'), dict):
            document['awscli']['profiles'] = {}
        return document

    def profiles(self):
        return self.load()['awscli']['profiles']

    def append(self, profile):
        """Add an entry for a federated profile under awscli.profiles."""
        document = self.load()
        entries = document['awscli']['profiles']
        if profile.name in entries:
            raise DuplicateNameError(f"Profile '{profile.name}' already exists in {self.path}")

        entry = {}
        for field, key in OKTA_YAML_KEYS:
            value = getattr(profile, field)
            if value is not None:
                entry[key] = value
        entries[profile.name] = entry

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(document, f, default_flow_style=False,
                               sort_keys=False, explicit_start=True)
        except OSError as e:
            raise StoreIOError(f'Failed to write {self.path}: {e}') from e

        logger.debug("Added profile %s to %s", profile.name, self.path)
