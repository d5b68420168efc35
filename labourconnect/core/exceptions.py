from typing import Optional, Any

class LabourConnectError(Exception):
    """
    Base exception for LabourConnect application.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class ResourceNotFoundError(LabourConnectError):
    """
    Raised when a requested resource is not found.
    """
    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)

class AuthenticationError(LabourConnectError):
    """
    Raised when the caller has no authenticated session.
    """
    def __init__(self, message: str = "Please login first", details: Optional[Any] = None):
        super().__init__(message, code="AUTHENTICATION_REQUIRED", status_code=401, details=details)

class PermissionDeniedError(LabourConnectError):
    """
    Raised when the session identity has the wrong role for an action.
    """
    def __init__(self, message: str = "Permission denied", details: Optional[Any] = None):
        super().__init__(message, code="PERMISSION_DENIED", status_code=403, details=details)

class ValidationError(LabourConnectError):
    """
    Raised when input validation fails.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=422, details=details)

class DuplicateRegistrationError(LabourConnectError):
    """
    Raised when a mobile number is already registered.
    """
    def __init__(self, message: str = "User with this mobile number already exists. Please login.", details: Optional[Any] = None):
        super().__init__(message, code="ALREADY_EXISTS", status_code=409, details=details)
