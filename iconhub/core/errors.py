# iconhub/core/errors.py
from __future__ import annotations
from pathlib import Path

__all__ = [
    "IconhubError",
    "IconSourceError",
    "RemoteSourceError",
    "LocalSourceError",
    "LocalSourceMissingError",
    "LocalSourceInvalidError",
    "ArtifactError",
    "ArtifactReadError",
    "ArtifactWriteError",
    "ConfigError",
    "MissingServiceError",
]



class IconhubError(Exception):
    """Base class for every error raised on purpose by iconhub."""
    pass



# ----------------------------------------------
#                 Icon sources
# ----------------------------------------------

class IconSourceError(IconhubError):
    """A source loader could not produce icons."""
    source = "unknown"



class RemoteSourceError(IconSourceError):
    """
    The icon registry could not be read (network, missing pack, malformed data).
    Always fatal: the build must not continue with a silently empty icon set.
    """
    source = "remote"



class LocalSourceError(IconSourceError):
    """The local icon directory could not be loaded. Never fatal."""
    source = "local"

    def __init__(self, message: str, *, directory: Path | None = None) -> None:
        super().__init__(message)
        self.directory = directory



class LocalSourceMissingError(LocalSourceError):
    """The local icon directory does not exist. An expected configuration."""
    pass



class LocalSourceInvalidError(LocalSourceError):
    """The local icon directory exists but yields no usable icons."""
    pass



# ----------------------------------------------
#              Generated artifacts
# ----------------------------------------------

class ArtifactError(IconhubError):
    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path



class ArtifactReadError(ArtifactError):
    """Existing artifact is unreadable. Treated as a cache miss."""
    pass



class ArtifactWriteError(ArtifactError):
    """Artifact could not be written. Propagates to the caller."""
    pass



# ----------------------------------------------
#                     Misc
# ----------------------------------------------

class ConfigError(IconhubError):
    """Configuration file or values are invalid."""
    pass



class MissingServiceError(IconhubError):
    """A process-wide service was requested before it was registered."""
    pass
