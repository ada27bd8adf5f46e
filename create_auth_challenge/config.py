"""
Lambda configuration.

Read once from the environment when the issuer is first built:

    SES_FROM_ADDRESS          verified SES sender (required)
    AWS_REGION                region for the SES/SNS clients
    REQUIRE_DELIVERY_CHANNEL  fail new sessions that have no email or phone (default true)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from create_auth_challenge.exceptions import ConfigurationError

DEFAULT_REGION = "us-west-2"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class IssuerConfig:
    source_address: str
    region: str = DEFAULT_REGION
    require_delivery_channel: bool = True

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Raise ConfigurationError if any setting is unusable."""
        if not self.source_address or not self.source_address.strip():
            raise ConfigurationError("SES_FROM_ADDRESS is not set")
        if "@" not in self.source_address:
            raise ConfigurationError(f"SES_FROM_ADDRESS is not an email address: {self.source_address!r}")
        if not self.region or not self.region.strip():
            raise ConfigurationError("AWS region is empty")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "IssuerConfig":
        """
        Build the configuration from Lambda environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Validated IssuerConfig
        """
        if environ is None:
            environ = os.environ

        require_channel = _parse_bool(
            "REQUIRE_DELIVERY_CHANNEL", environ.get("REQUIRE_DELIVERY_CHANNEL", "true")
        )
        return cls(
            source_address=environ.get("SES_FROM_ADDRESS", "").strip(),
            region=environ.get("AWS_REGION", DEFAULT_REGION),
            require_delivery_channel=require_channel,
        )
