"""
CreateAuthChallenge Lambda
Issues the secret login code for a Cognito custom auth flow.

This Lambda:
1. Generates a 6-digit code on the first challenge of a session
2. Sends it via SES (email) and/or SNS (SMS)
3. Re-uses the code from challengeMetadata on retries
4. Returns challenge parameters to Cognito
"""

from typing import Any, Dict, Optional

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes.cognito_user_pool_event import (
    CreateAuthChallengeTriggerEvent,
)

from create_auth_challenge.config import IssuerConfig
from create_auth_challenge.exceptions import ChallengeError
from create_auth_challenge.issuer import ChallengeIssuer
from create_auth_challenge.models import ChallengeRequest

logger = Logger(service="create-auth-challenge")

# Built on first invocation and kept for the life of the container
_issuer: Optional[ChallengeIssuer] = None


def get_issuer() -> ChallengeIssuer:
    global _issuer
    if _issuer is None:
        _issuer = ChallengeIssuer.from_config(IssuerConfig.from_env())
    return _issuer


def set_issuer(issuer: ChallengeIssuer) -> None:
    global _issuer
    _issuer = issuer


def reset_issuer() -> None:
    set_issuer(None)


@logger.inject_lambda_context
def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Create the custom auth challenge.

    Args:
        event: Cognito CreateAuthChallenge event
        context: Lambda context

    Returns:
        Same event with response challenge parameters set
    """
    event.setdefault("response", {})
    trigger_event = CreateAuthChallengeTriggerEvent(event)

    request = ChallengeRequest.from_event(trigger_event)
    logger.info("CreateAuthChallenge invoked", extra={"session_length": len(request.session)})

    try:
        response = get_issuer().issue(request)
    except ChallengeError:
        logger.exception("CreateAuthChallenge failed")
        raise

    response.apply_to_event(trigger_event)

    logger.info("CreateAuthChallenge complete")
    return trigger_event.raw_event
