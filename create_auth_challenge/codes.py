"""Secret login code generation."""

import secrets

CODE_LENGTH = 6


def generate_secret_code(length: int = CODE_LENGTH) -> str:
    """
    Generate a numeric one-time code.

    Each digit is drawn independently from 0-9, so leading zeros are possible
    and the code must always be handled as a string.
    """
    if length < 1:
        raise ValueError("Code length must be positive")
    return "".join(str(secrets.randbelow(10)) for _ in range(length))
