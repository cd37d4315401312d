"""Exception types raised by aws-alternator."""


class AlternatorError(Exception):
    """Base class for all errors reported to the user."""


class StoreIOError(AlternatorError):
    """A config or credentials file could not be read or written."""


class StoreParseError(AlternatorError):
    """A config or credentials file is not well-formed."""


class DuplicateNameError(AlternatorError):
    """A profile with the same name already exists in the target file."""


class ValidationError(AlternatorError):
    """User input failed a format check."""


class ProfileNotFoundError(AlternatorError):
    """The requested profile is not in the config file."""


class CredentialsNotFoundError(AlternatorError):
    """No usable credentials exist for a profile."""


class ConfigIncompleteError(AlternatorError):
    """A federated profile is missing a required field."""


class LoginFailedError(AlternatorError):
    """An external login command failed or could not be run."""


class ShellSpawnError(AlternatorError):
    """The interactive shell could not be started."""


class ShellExitError(AlternatorError):
    """The interactive shell exited with a non-zero status."""

    def __init__(self, returncode):
        self.returncode = returncode
        super().__init__(f'Shell exited with status {returncode}')
