"""Domain errors for devhost."""


class DevhostError(RuntimeError):
    """Raised when devhost cannot continue safely."""


class ProjectRootNotFoundError(DevhostError):
    """No version-control marker found above the working directory."""


class UnknownProjectTypeError(DevhostError):
    """The project matches none of the supported site layouts."""


class MalformedConfigurationError(DevhostError):
    """A site configuration file lacks a required credential."""


class CommandError(DevhostError):
    """An external command could not be run or exited non-zero."""
