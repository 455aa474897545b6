"""Slack user token helpers."""

from ..exceptions import InvalidTokenError

TOKEN_PREFIX = "xoxp-"
MIN_TOKEN_LENGTH = 20

_MASK_HEAD = 10
_MASK_TAIL = 4


def mask_token(token: str) -> str:
    """Mask a token for display, keeping only its head and tail."""
    if len(token) <= _MASK_HEAD + _MASK_TAIL:
        return "*" * len(token)
    return f"{token[:_MASK_HEAD]}...{token[-_MASK_TAIL:]}"


def validate_token(token: str) -> None:
    """Raise InvalidTokenError unless ``token`` looks like a Slack user token."""
    if not token:
        raise InvalidTokenError("Token is empty")
    if not token.startswith(TOKEN_PREFIX):
        raise InvalidTokenError(f"User token must start with '{TOKEN_PREFIX}'")
    if len(token) < MIN_TOKEN_LENGTH:
        raise InvalidTokenError("Token length is invalid")
