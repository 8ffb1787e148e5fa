"""
Application error taxonomy.

ConfigError is fatal at startup. AuthError, PermissionDenied, InvalidTransition
and DataAccessError are recoverable and reach the caller as a message.
ConsistencyGap marks a partially applied multi-step write that could not be
compensated.
"""


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(AppError):
    status_code = 500


class AuthError(AppError):
    status_code = 401

    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message)
        self.status_code = status_code


class PermissionDenied(AppError):
    status_code = 403


class InvalidTransition(AppError):
    status_code = 409


class DataAccessError(AppError):
    status_code = 502

    def __init__(self, message: str, table: str = None):
        super().__init__(message)
        self.table = table


class ConsistencyGap(AppError):
    status_code = 500

    def __init__(self, message: str, identity_id: str = None):
        super().__init__(message)
        self.identity_id = identity_id
