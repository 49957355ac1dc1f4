"""Custom exceptions for bippi.

Only fatal conditions are exceptions. A lookup tier that simply finds
nothing (no MusicBrainz release, no playlist) reports that through a
LookupResult instead, so the resolver can move on to the next tier.
"""


class BippiError(Exception):
    """Base exception for bippi.

    Attributes:
        message: Human-readable description shown to the user.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ToolMissingError(BippiError):
    """The external downloader binary is not on PATH."""

    def __init__(self, binary: str = "yt-dlp") -> None:
        self.binary = binary
        super().__init__(
            f"{binary} was not found in PATH. Install it from "
            "https://github.com/yt-dlp/yt-dlp and try again."
        )


class DownloadError(BippiError):
    """The external downloader exited unsuccessfully.

    Attributes:
        returncode: Exit status of the process, or None if it never started.
    """

    def __init__(self, message: str, returncode: int | None = None) -> None:
        self.returncode = returncode
        super().__init__(message)

    @classmethod
    def from_returncode(
        cls, returncode: int, binary: str = "yt-dlp"
    ) -> "DownloadError":
        """Build the error reported for a non-zero exit status."""
        return cls(f"{binary} exited with status {returncode}", returncode)


class MetadataServiceError(BippiError):
    """Talking to MusicBrainz failed.

    Raised for transport errors, non-2xx responses and payloads that do
    not parse. Never raised for an empty search result.
    """


class EmptyReleaseError(MetadataServiceError):
    """A MusicBrainz release was found but has no usable tracks."""


class ConfigError(BippiError):
    """The persisted configuration is unreadable or a path is invalid."""


class AliasNotFoundError(ConfigError):
    """Tried to remove an alias that does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"alias '{name}' not found")
