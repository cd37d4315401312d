"""AWS Account Alternator - Manage AWS profiles and open authenticated shells."""

__version__ = "1.0.0"
__author__ = "AgentGino"
__email__ = "himakar@qwik.tools"

from .profiles import Profile, ProfileKind
from .store import ConfigStore, CredentialsStore, FederationStore

__all__ = ["Profile", "ProfileKind", "ConfigStore", "CredentialsStore", "FederationStore"]
