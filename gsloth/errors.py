"""Exception hierarchy shared across the CLI."""


class GslothError(Exception):
    """Base class for user-facing failures."""


class ConfigError(GslothError):
    """Configuration could not be found, parsed or materialised."""


class SessionError(GslothError):
    """An interactive session failed while processing a turn."""
