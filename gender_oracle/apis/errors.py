# gender_oracle/apis/errors.py

from typing import Optional


class GenderOracleError(Exception):
    """Base class for every failure raised by an inference client."""


class InvalidInputFormat(GenderOracleError):
    """Input could not be turned into a request (e.g. a malformed data URL)."""


class NetworkOrServiceFailure(GenderOracleError):
    """
    The external call itself failed: connectivity, auth, quota or a
    server-side error. `status_code` is the HTTP status when one came back.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponse(GenderOracleError):
    """The call succeeded but the payload is not a usable result."""
