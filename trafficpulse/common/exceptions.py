class TrafficPulseError(Exception):
    """Base exception for all TrafficPulse errors."""
    pass

class InvalidInputError(TrafficPulseError):
    """Raised when a caller-supplied coordinate or filter is malformed."""
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")

class MalformedRecordError(TrafficPulseError):
    """Raised when an incident record lacks a valid value for a required baseline field."""
    def __init__(self, center_id: str, field: str):
        self.center_id = center_id
        self.field = field
        super().__init__(f"Record for center {center_id!r} is missing or has an invalid value for required field {field!r}")

class StoreError(TrafficPulseError):
    """Raised when the persistent store fails or times out."""
    pass

class ConfigurationError(TrafficPulseError):
    """Raised when configuration is invalid."""
    pass

class AuthenticationError(TrafficPulseError):
    """Raised when admin credentials or tokens are rejected."""
    pass

class DuplicateCenterError(TrafficPulseError):
    """Raised when an admin is registered twice for the same center."""
    pass
