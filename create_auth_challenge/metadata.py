"""
Challenge metadata wire format.

Cognito stores challengeMetadata with each session entry and hands it back on
the next CreateAuthChallenge invocation. We use it to carry the code:

    CODE-<digits>      e.g. CODE-042917
"""

import re
from dataclasses import dataclass
from typing import Optional

from create_auth_challenge.exceptions import MalformedMetadataError

METADATA_PREFIX = "CODE-"

_METADATA_PATTERN = re.compile(r"CODE-(\d+)", re.ASCII)


@dataclass(frozen=True)
class MetadataParseResult:
    """Outcome of parsing one challengeMetadata value."""

    metadata: object
    code: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.code is not None

    def unwrap(self) -> str:
        """Return the parsed code or raise MalformedMetadataError."""
        if self.code is None:
            raise MalformedMetadataError(self.metadata, self.error)
        return self.code


def format_challenge_metadata(code: str) -> str:
    return f"{METADATA_PREFIX}{code}"


def parse_challenge_metadata(metadata) -> MetadataParseResult:
    """
    Parse challengeMetadata written by a previous invocation.

    Args:
        metadata: Raw value from the session entry (may be None)

    Returns:
        MetadataParseResult with either ``code`` or ``error`` set
    """
    if metadata is None:
        return MetadataParseResult(metadata, error="metadata is missing")
    if not isinstance(metadata, str):
        return MetadataParseResult(metadata, error=f"expected a string, got {type(metadata).__name__}")

    match = _METADATA_PATTERN.fullmatch(metadata)
    if match is None:
        if metadata == METADATA_PREFIX:
            return MetadataParseResult(metadata, error="digits missing after CODE- prefix")
        return MetadataParseResult(metadata, error="expected CODE-<digits>")

    return MetadataParseResult(metadata, code=match.group(1))
