"""Domain-specific errors for kbremap."""


class KbRemapError(Exception):
    """Base error for kbremap."""


class LiteralParseError(KbRemapError):
    """Raised when a hexadecimal or decimal literal cannot be parsed."""


class KeyParseError(KbRemapError):
    """Raised when a key name cannot be parsed."""


class MappingParseError(KbRemapError):
    """Raised when a `SRC:DST` mapping token cannot be parsed."""


class KeyEncodingError(KbRemapError):
    """Raised when a key has no HID usage ID to serialize."""


class DeviceListingError(KbRemapError):
    """Raised when `hidutil list` output cannot be parsed."""


class DeviceSelectionError(KbRemapError):
    """Raised when device filters cannot resolve a target."""


class CommandError(KbRemapError):
    """Raised when an external command fails to run or exits non-zero."""


class ProfileValidationError(KbRemapError):
    """Raised when a profile file does not conform to schema or semantics."""


class ProfileLoadError(KbRemapError):
    """Raised when loading profile sources fails."""
