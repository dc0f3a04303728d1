"""Exception hierarchy for the hash benchmark harness."""


class HashBenchError(Exception):
    """Base class for all harness errors."""


class ConfigError(HashBenchError):
    """Invalid configuration file content or command-line override."""


class ImplementationUnavailableError(HashBenchError):
    """
    A hash implementation could not be loaded at startup.

    Raised before any measurement runs; the CLI turns it into a non-zero
    exit with the remediation text.
    """

    def __init__(self, name: str, target: str, reason: str, remediation: str = ""):
        self.name = name
        self.target = target
        self.reason = reason
        self.remediation = remediation
        message = f"{name} ({target}) is unavailable: {reason}"
        if remediation:
            message += f"\n{remediation}"
        super().__init__(message)
