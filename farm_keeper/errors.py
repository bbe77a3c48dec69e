"""Exception hierarchy for the keeper run."""


class KeeperError(Exception):
    """Base class for every failure that aborts a keeper run."""


class SecretNotFound(KeeperError):
    """A required secret is missing or empty."""


class ChainQueryError(KeeperError):
    """A read-only contract call failed (network error or revert)."""


class ChainSubmissionError(KeeperError):
    """A deposit or withdraw transaction could not be submitted."""


class UndefinedYieldError(KeeperError):
    """Net position is zero, so the yield estimate has no meaning."""
