"""
Error taxonomy for the auth core.

The HTTP layer (api/errors.py) maps each family to a status code:
- ValidationError     -> 400
- AuthenticationError -> 401
- AuthorizationError  -> 403
- NotFoundError       -> 404 (401 on the refresh/revoke endpoints)
- InternalError       -> 500
"""


class ChirpyError(Exception):
    """Base exception for chirpy"""
    pass


class ValidationError(ChirpyError):
    """Malformed input"""
    pass


class AuthenticationError(ChirpyError):
    """Missing, invalid or expired credential"""
    pass


class AuthorizationError(ChirpyError):
    """Authenticated, but not allowed to touch the resource"""
    pass


class NotFoundError(ChirpyError):
    """Unknown resource or token"""
    pass


class InternalError(ChirpyError):
    """Store, crypto or RNG failure"""
    pass


# Credential hasher
class HashingError(InternalError):
    pass


class InvalidHashFormat(ValidationError):
    pass


# Access tokens
class InvalidToken(AuthenticationError):
    """Token could not be decoded or failed a claim check"""
    pass


class InvalidSignature(InvalidToken):
    pass


class MalformedSubject(InvalidToken):
    pass


class TokenExpired(AuthenticationError):
    """Shared by access tokens and refresh tokens"""
    pass


# Refresh tokens
class RandomSourceError(InternalError):
    pass


class TokenNotFound(NotFoundError):
    pass


class TokenRevoked(AuthenticationError):
    pass


# Authorization header
class MissingHeader(AuthenticationError):
    pass


class MissingScheme(AuthenticationError):
    pass


class EmptyToken(AuthenticationError):
    pass


class Forbidden(AuthorizationError):
    pass
