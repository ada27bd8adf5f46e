"""
Challenge Issuer

New auth session:      generate a code and send it by email and/or SMS.
Continuing session:    re-use the code stored in the last attempt's metadata,
                       so a user who mistypes the code can retry without
                       being sent a new one.
"""

from typing import Optional

import boto3
from aws_lambda_powertools import Logger

from create_auth_challenge.codes import generate_secret_code
from create_auth_challenge.config import IssuerConfig
from create_auth_challenge.delivery import EmailSender, SmsSender
from create_auth_challenge.exceptions import NoDeliveryChannelError
from create_auth_challenge.masking import mask_email, mask_phone
from create_auth_challenge.metadata import format_challenge_metadata, parse_challenge_metadata
from create_auth_challenge.models import ChallengeRequest, ChallengeResponse

logger = Logger(service="create-auth-challenge", child=True)


class ChallengeIssuer:
    def __init__(
        self,
        email_sender: Optional[EmailSender],
        sms_sender: Optional[SmsSender],
        require_delivery_channel: bool = True,
    ):
        self.email_sender = email_sender
        self.sms_sender = sms_sender
        self.require_delivery_channel = require_delivery_channel

    @classmethod
    def from_config(cls, config: IssuerConfig) -> "ChallengeIssuer":
        """Build an issuer with real SES and SNS clients."""
        ses = boto3.client("ses", region_name=config.region)
        sns = boto3.client("sns", region_name=config.region)
        return cls(
            email_sender=EmailSender(ses, config.source_address),
            sms_sender=SmsSender(sns),
            require_delivery_channel=config.require_delivery_channel,
        )

    def issue(self, request: ChallengeRequest) -> ChallengeResponse:
        """
        Issue the challenge for one CreateAuthChallenge invocation.

        Args:
            request: Session history and user contact attributes

        Returns:
            ChallengeResponse to write back onto the Cognito event

        Raises:
            MalformedMetadataError: last attempt's metadata has no code
            NoDeliveryChannelError: new session, no email or phone, and a channel is required
            DeliveryError: SES or SNS rejected the code
        """
        if request.is_new_session:
            code = self._start_session(request)
        else:
            code = self._resume_session(request)

        return ChallengeResponse(
            public_parameters={"email": request.email, "phone": request.phone},
            private_parameters={"secretLoginCode": code},
            metadata=format_challenge_metadata(code),
        )

    def _start_session(self, request: ChallengeRequest) -> str:
        if not request.email and not request.phone:
            if self.require_delivery_channel:
                raise NoDeliveryChannelError(
                    "User has no email or phone_number attribute to send the login code to"
                )
            logger.warning("New session for a user with no email or phone_number; code will not be delivered")

        code = generate_secret_code()
        logger.info(
            "New auth session, sending login code",
            extra={"email": mask_email(request.email), "phone": mask_phone(request.phone)},
        )

        # Sends run one after the other and both finish before we return
        if request.email:
            self._require(self.email_sender, "email").send(request.email, code)
        if request.phone:
            self._require(self.sms_sender, "sms").send(request.phone, code)

        return code

    def _resume_session(self, request: ChallengeRequest) -> str:
        previous = request.latest_attempt
        code = parse_challenge_metadata(previous.challenge_metadata).unwrap()
        logger.info("Continuing auth session, re-using login code", extra={"attempts": len(request.session)})
        return code

    @staticmethod
    def _require(sender, channel):
        if sender is None:
            raise NoDeliveryChannelError(f"No {channel} sender configured")
        return sender
