"""
Challenge request/response types and their mapping onto the Cognito event.

Cognito sends the same envelope in and expects it back:

    request.session[].challengeMetadata   -> ChallengeAttempt
    request.userAttributes.email          -> ChallengeRequest.email
    request.userAttributes.phone_number   -> ChallengeRequest.phone
    response.publicChallengeParameters    <- ChallengeResponse.public_parameters
    response.privateChallengeParameters   <- ChallengeResponse.private_parameters
    response.challengeMetadata            <- ChallengeResponse.metadata
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from aws_lambda_powertools.utilities.data_classes.cognito_user_pool_event import (
    ChallengeResult,
    CreateAuthChallengeTriggerEvent,
)


@dataclass(frozen=True)
class ChallengeAttempt:
    challenge_metadata: Optional[str]

    @classmethod
    def from_challenge_result(cls, result: ChallengeResult) -> "ChallengeAttempt":
        return cls(challenge_metadata=result.challenge_metadata)


@dataclass(frozen=True)
class ChallengeRequest:
    session: List[ChallengeAttempt] = field(default_factory=list)
    email: Optional[str] = None
    phone: Optional[str] = None

    @property
    def is_new_session(self) -> bool:
        return not self.session

    @property
    def latest_attempt(self) -> Optional[ChallengeAttempt]:
        return self.session[-1] if self.session else None

    @classmethod
    def from_event(cls, event: CreateAuthChallengeTriggerEvent) -> "ChallengeRequest":
        """
        Read the parts of a CreateAuthChallenge event the issuer needs.

        A missing or null session is treated the same as an empty one.
        """
        request = event.request
        session = []
        if request.get("session"):
            session = [ChallengeAttempt.from_challenge_result(result) for result in request.session]

        attributes = request.get("userAttributes") or {}
        return cls(
            session=session,
            email=attributes.get("email"),
            phone=attributes.get("phone_number"),
        )


@dataclass(frozen=True)
class ChallengeResponse:
    public_parameters: Dict[str, Optional[str]]
    private_parameters: Dict[str, str]
    metadata: str

    @property
    def secret_code(self) -> str:
        return self.private_parameters["secretLoginCode"]

    def apply_to_event(self, event: CreateAuthChallengeTriggerEvent) -> None:
        # Shown to the client app
        event.response.public_challenge_parameters = dict(self.public_parameters)

        # Only seen by the VerifyAuthChallengeResponse trigger
        event.response.private_challenge_parameters = dict(self.private_parameters)

        # Handed back to us in request.session on the next attempt
        event.response.challenge_metadata = self.metadata
