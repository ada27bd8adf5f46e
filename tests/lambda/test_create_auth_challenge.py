"""
Unit tests for CreateAuthChallenge Lambda handler

Tests the full event round trip with fake SES/SNS clients.
"""

import re

import pytest
from unittest.mock import Mock

from create_auth_challenge import handler
from create_auth_challenge.delivery import EmailSender, SmsSender
from create_auth_challenge.exceptions import (
    DeliveryError,
    MalformedMetadataError,
    NoDeliveryChannelError,
)
from create_auth_challenge.issuer import ChallengeIssuer
from botocore.exceptions import ClientError


# Mock AWS Lambda context
class MockContext:
    def __init__(self):
        self.function_name = "test-function"
        self.memory_limit_in_mb = 128
        self.invoked_function_arn = "arn:aws:lambda:us-west-2:123456789012:function:test"
        self.aws_request_id = "test-request-id"


def create_event(session_history, user_attributes):
    """Helper to create Cognito event structure"""
    return {
        'version': '1',
        'triggerSource': 'CreateAuthChallenge_Authentication',
        'region': 'us-west-2',
        'userPoolId': 'us-west-2_test',
        'userName': 'test-user',
        'request': {
            'challengeName': 'CUSTOM_CHALLENGE',
            'session': session_history,
            'userAttributes': user_attributes
        },
        'response': {}
    }


class TestCreateAuthChallenge:
    """Test cases for CreateAuthChallenge Lambda"""

    def setup_method(self):
        """Install an issuer backed by fake SES and SNS clients"""
        self.ses = Mock()
        self.ses.send_email.return_value = {'MessageId': 'ses-message-id'}
        self.sns = Mock()
        self.sns.publish.return_value = {'MessageId': 'sns-message-id'}

        handler.set_issuer(ChallengeIssuer(
            email_sender=EmailSender(self.ses, 'noreply@example.com'),
            sms_sender=SmsSender(self.sns),
        ))

    def teardown_method(self):
        handler.reset_issuer()

    def test_new_session_with_email_sends_one_email(self):
        """
        Test: First challenge for a user with only an email
        Expected: One email, CODE-<6 digits> metadata, code in private params
        """
        # Arrange
        event = create_event([], {'email': 'a@b.com'})

        # Act
        result = handler.lambda_handler(event, MockContext())

        # Assert
        response = result['response']
        assert re.fullmatch(r'CODE-\d{6}', response['challengeMetadata'])
        code = response['privateChallengeParameters']['secretLoginCode']
        assert response['privateChallengeParameters'] == {'secretLoginCode': code}
        assert response['challengeMetadata'] == f'CODE-{code}'

        assert self.ses.send_email.call_count == 1
        assert self.sns.publish.call_count == 0
        kwargs = self.ses.send_email.call_args.kwargs
        assert kwargs['Destination'] == {'ToAddresses': ['a@b.com']}
        assert code in kwargs['Message']['Body']['Text']['Data']

        print("✅ PASS: New session emails a 6-digit code")

    def test_retry_reuses_code_without_sending(self):
        """
        Test: Second challenge in the same session (user mistyped the code)
        Expected: Same code from metadata, nothing sent
        """
        # Arrange
        session = [
            {
                'challengeName': 'CUSTOM_CHALLENGE',
                'challengeResult': False,
                'challengeMetadata': 'CODE-123456'
            }
        ]
        event = create_event(session, {'phone_number': '+15551234567'})

        # Act
        result = handler.lambda_handler(event, MockContext())

        # Assert
        assert result['response']['privateChallengeParameters'] == {'secretLoginCode': '123456'}
        assert result['response']['challengeMetadata'] == 'CODE-123456'
        self.ses.send_email.assert_not_called()
        self.sns.publish.assert_not_called()

        print("✅ PASS: Retry re-uses the code from session metadata")

    def test_public_parameters_echo_attributes(self):
        """
        Test: Public challenge parameters
        Expected: email and phone passed through, missing ones as None
        """
        event = create_event([], {'email': 'a@b.com'})

        result = handler.lambda_handler(event, MockContext())

        assert result['response']['publicChallengeParameters'] == {'email': 'a@b.com', 'phone': None}

    def test_returns_same_event(self):
        event = create_event([], {'email': 'a@b.com'})

        result = handler.lambda_handler(event, MockContext())

        assert result is event
        assert result['request']['challengeName'] == 'CUSTOM_CHALLENGE'

    def test_null_session_is_new_session(self):
        event = create_event(None, {'phone_number': '+15551234567'})

        result = handler.lambda_handler(event, MockContext())

        assert self.sns.publish.call_count == 1
        assert re.fullmatch(r'\d{6}', result['response']['privateChallengeParameters']['secretLoginCode'])

    def test_malformed_metadata_fails_invocation(self):
        """
        Test: Last attempt's metadata has no digits
        Expected: Invocation fails, no code fabricated
        """
        event = create_event([{'challengeMetadata': 'CODE-'}], {'email': 'a@b.com'})

        with pytest.raises(MalformedMetadataError):
            handler.lambda_handler(event, MockContext())

        assert 'privateChallengeParameters' not in event['response']
        self.ses.send_email.assert_not_called()

    def test_no_contact_attributes_fails_invocation(self):
        event = create_event([], {})

        with pytest.raises(NoDeliveryChannelError):
            handler.lambda_handler(event, MockContext())

        self.ses.send_email.assert_not_called()
        self.sns.publish.assert_not_called()

    def test_delivery_failure_fails_invocation(self):
        self.ses.send_email.side_effect = ClientError(
            {'Error': {'Code': 'MessageRejected', 'Message': 'Email address is not verified.'}},
            'SendEmail'
        )
        event = create_event([], {'email': 'a@b.com'})

        with pytest.raises(DeliveryError):
            handler.lambda_handler(event, MockContext())


class TestIssuerInitialization:
    """The handler builds its issuer from the environment on first use"""

    def teardown_method(self):
        handler.reset_issuer()

    def test_issuer_built_once_from_env(self, monkeypatch):
        monkeypatch.setenv('SES_FROM_ADDRESS', 'noreply@example.com')
        monkeypatch.setenv('AWS_REGION', 'eu-west-1')
        handler.reset_issuer()

        first = handler.get_issuer()
        second = handler.get_issuer()

        assert first is second
        assert first.email_sender.source_address == 'noreply@example.com'
        assert first.require_delivery_channel is True

    def test_missing_source_address_fails_at_startup(self, monkeypatch):
        from create_auth_challenge.exceptions import ConfigurationError

        monkeypatch.delenv('SES_FROM_ADDRESS', raising=False)
        handler.reset_issuer()

        with pytest.raises(ConfigurationError):
            handler.get_issuer()


if __name__ == '__main__':
    # Run tests
    pytest.main([__file__, '-v', '-s'])
