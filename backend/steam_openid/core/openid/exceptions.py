"""
Steam OpenID exceptions.

Every rejected callback raises a subclass of SteamOpenIDError. The `kind`
attribute classifies the failure; `code` is the business error code returned
in the unified error response.
"""

from enum import Enum
from typing import Any

from fastapi import status

from steam_openid.common.exceptions import AppException


class OpenIDErrorKind(str, Enum):
    """Classified reasons a validation attempt can fail."""

    INVALID_MODE = "invalid_mode"
    RETURN_URL_MISMATCH = "return_url_mismatch"
    TRANSPORT_ERROR = "transport_error"
    NAMESPACE_MISMATCH = "namespace_mismatch"
    ASSERTION_INVALID = "assertion_invalid"
    MALFORMED_CLAIMED_ID = "malformed_claimed_id"
    DOWNSTREAM_ERROR = "downstream_error"
    MALFORMED_SIGNED_LIST = "malformed_signed_list"


class SteamOpenIDError(AppException):
    """Base exception for Steam OpenID validation."""

    kind: OpenIDErrorKind = OpenIDErrorKind.ASSERTION_INVALID
    default_code: int = 6000
    default_status: int = status.HTTP_401_UNAUTHORIZED
    default_message: str = "Steam OpenID validation failed"

    def __init__(self, message: str | None = None, *, data: Any = None):
        payload = {"kind": self.kind.value}
        if data:
            payload.update(data)
        super().__init__(
            status_code=self.default_status,
            message=message or self.default_message,
            code=self.default_code,
            data=payload,
        )


class InvalidModeError(SteamOpenIDError):
    """openid.mode of the callback is not id_res."""

    kind = OpenIDErrorKind.INVALID_MODE
    default_code = 6001
    default_message = 'mode must equal to "id_res"'


class ReturnUrlMismatchError(SteamOpenIDError):
    """openid.return_to does not echo the URL of the current request."""

    kind = OpenIDErrorKind.RETURN_URL_MISMATCH
    default_code = 6002
    default_message = 'the "return_to" url must match the url of current request'


class TransportError(SteamOpenIDError):
    """check_authentication round trip could not reach Steam."""

    kind = OpenIDErrorKind.TRANSPORT_ERROR
    default_code = 6003
    default_status = status.HTTP_502_BAD_GATEWAY
    default_message = "failed to reach the OpenID provider"

    def __init__(self, message: str | None = None, *, data: Any = None, original_error: Exception | None = None):
        if original_error is not None:
            data = {"error_type": type(original_error).__name__, **(data or {})}
        super().__init__(message, data=data)


class NamespaceMismatchError(SteamOpenIDError):
    """check_authentication response does not echo the OpenID 2.0 namespace."""

    kind = OpenIDErrorKind.NAMESPACE_MISMATCH
    default_code = 6004
    default_message = "wrong ns in the response"


class AssertionInvalidError(SteamOpenIDError):
    """Steam answered is_valid:false."""

    kind = OpenIDErrorKind.ASSERTION_INVALID
    default_code = 6005
    default_message = "unable to validate openid assertion"


class MalformedClaimedIdError(SteamOpenIDError):
    """openid.claimed_id is not a Steam community id URL."""

    kind = OpenIDErrorKind.MALFORMED_CLAIMED_ID
    default_code = 6006
    default_message = "invalid steam id pattern"


class DownstreamError(SteamOpenIDError):
    """Steam Web API profile lookup failed."""

    kind = OpenIDErrorKind.DOWNSTREAM_ERROR
    default_code = 6007
    default_status = status.HTTP_502_BAD_GATEWAY
    default_message = "steam profile lookup failed"


class MalformedSignedListError(SteamOpenIDError):
    """openid.signed is empty or names a field that is not a plain identifier."""

    kind = OpenIDErrorKind.MALFORMED_SIGNED_LIST
    default_code = 6008
    default_message = "openid.signed is not a valid field list"
