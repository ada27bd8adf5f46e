"""
Code delivery channels.

EmailSender sends via SES, SmsSender publishes via SNS. Both take an already
constructed boto3 client so tests can pass in a fake.
"""

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from create_auth_challenge.exceptions import DeliveryError
from create_auth_challenge.masking import mask_email, mask_phone

logger = Logger(service="create-auth-challenge", child=True)

EMAIL_SUBJECT = "Your secret login code"
CHARSET = "UTF-8"


def render_email_html(code: str) -> str:
    return f"<html><body><p>This is your secret login code:</p>\n<h3>{code}</h3></body></html>"


def render_text(code: str) -> str:
    return f"Your secret login code: {code}"


class EmailSender:
    channel = "email"

    def __init__(self, ses_client, source_address: str):
        self.ses_client = ses_client
        self.source_address = source_address

    def send(self, destination: str, code: str) -> None:
        """
        Email the code to a single recipient.

        Both an HTML and a plain-text body are sent; some mail clients
        only render one of them.

        Raises:
            DeliveryError: SES rejected the message
        """
        try:
            response = self.ses_client.send_email(
                Source=self.source_address,
                Destination={"ToAddresses": [destination]},
                Message={
                    "Subject": {"Charset": CHARSET, "Data": EMAIL_SUBJECT},
                    "Body": {
                        "Html": {"Charset": CHARSET, "Data": render_email_html(code)},
                        "Text": {"Charset": CHARSET, "Data": render_text(code)},
                    },
                },
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"SES send_email failed for {mask_email(destination)}: {e}")
            raise DeliveryError(self.channel, str(e)) from e

        logger.info(
            f"Sent login code email to {mask_email(destination)}",
            extra={"message_id": response.get("MessageId")},
        )


class SmsSender:
    channel = "sms"

    def __init__(self, sns_client):
        self.sns_client = sns_client

    def send(self, phone_number: str, code: str) -> None:
        """
        Text the code to a phone number.

        Raises:
            DeliveryError: SNS rejected the message
        """
        try:
            response = self.sns_client.publish(
                PhoneNumber=phone_number,
                Message=render_text(code),
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"SNS publish failed for {mask_phone(phone_number)}: {e}")
            raise DeliveryError(self.channel, str(e)) from e

        logger.info(
            f"Sent login code SMS to {mask_phone(phone_number)}",
            extra={"message_id": response.get("MessageId")},
        )
