"""
CreateAuthChallenge Lambda package.

Issues (or re-issues) the one-time login code for a Cognito custom auth flow.
"""

from create_auth_challenge.exceptions import (
    ChallengeError,
    ConfigurationError,
    DeliveryError,
    MalformedMetadataError,
    NoDeliveryChannelError,
)
from create_auth_challenge.issuer import ChallengeIssuer
from create_auth_challenge.models import ChallengeAttempt, ChallengeRequest, ChallengeResponse

__all__ = [
    "ChallengeAttempt",
    "ChallengeError",
    "ChallengeIssuer",
    "ChallengeRequest",
    "ChallengeResponse",
    "ConfigurationError",
    "DeliveryError",
    "MalformedMetadataError",
    "NoDeliveryChannelError",
]
