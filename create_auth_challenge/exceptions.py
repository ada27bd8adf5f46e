"""Errors raised by the CreateAuthChallenge trigger."""


class ChallengeError(Exception):
    """Base class for every failure of a challenge invocation."""


class ConfigurationError(ChallengeError):
    """Lambda environment is missing or has invalid settings."""


class MalformedMetadataError(ChallengeError):
    """Previous attempt's challengeMetadata is not a CODE-<digits> string."""

    def __init__(self, metadata, reason):
        self.metadata = metadata
        self.reason = reason
        super().__init__(f"Malformed challenge metadata {metadata!r}: {reason}")


class DeliveryError(ChallengeError):
    """Email or SMS transport rejected the code."""

    def __init__(self, channel, message):
        self.channel = channel
        super().__init__(f"{channel} delivery failed: {message}")


class NoDeliveryChannelError(ChallengeError):
    """User has neither an email nor a phone_number attribute."""
