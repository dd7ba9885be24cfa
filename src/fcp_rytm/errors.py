"""Custom exception hierarchy for fcp-rytm.

Every failure a command can hit is one of the leaf classes below. The
message of each leaf is the human-readable diagnostic shown to the caller.
"""

from __future__ import annotations

SELECTOR_NAMES = (
    "pattern, pattern_wb, kit, kit_wb, global, global_wb, sound, sound_wb or settings"
)


class RytmError(Exception):
    """Base exception for all fcp-rytm errors."""


class ValidationError(RytmError, ValueError):
    """Invalid user input (selector, token, parameter, enum variant, etc.).

    Subclasses both RytmError and ValueError so plain ``except ValueError``
    handlers keep working.
    """


class StateError(RytmError):
    """Invalid operation given the current session state."""


class SerializationError(RytmError):
    """Error while reading or writing a project or dump file."""


class ConfigError(ValidationError):
    """Invalid configuration value (env var or session param)."""


class TypeMismatch(ValidationError):
    """A value accessor was used on the wrong value variant."""

    def __init__(self, expected: str, value: object, message: str | None = None) -> None:
        self.expected = expected
        self.value = value
        super().__init__(message or f"Type Error: Expected {expected} but got '{value}'.")


# ---------------------------------------------------------------------------
# Parse errors
# ---------------------------------------------------------------------------

class ParseError(ValidationError):
    """A command could not be turned into a list of parsed tokens."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Parse Error: {detail}")


class InvalidCommandType(ParseError):
    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(
            f"Invalid command type {command}. "
            "Currently supported commands are: get and set."
        )


class UnexpectedEnd(ParseError):
    def __init__(self) -> None:
        super().__init__(
            "The command has an unexpected end. "
            "Expected either an identifier or enum value."
        )


class InvalidToken(ParseError):
    pass


class InvalidFormat(ParseError):
    pass


class EnumRequiresValue(InvalidFormat):
    """A bare ``name:`` enum reference was used in a set command."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Enum '{name}:' requires a value. Try using '{name}:<your-value>' instead."
        )


class ExpectedKitElementIndex(ParseError):
    pass


class IndexOutOfRange(ParseError):
    pass


class InvalidIndexRange(ParseError):
    def __init__(self, min: int, max: int, value: int) -> None:
        self.min = min
        self.max = max
        self.value = value
        super().__init__(
            f"Invalid index range: Index {value} must be between {min} and {max} "
            "and an integer."
        )


class InvalidSelector(ParseError):
    def __init__(self) -> None:
        super().__init__(
            f"Invalid query selector. Query selector must be one of {SELECTOR_NAMES}."
        )


class QuerySelectorMissing(ParseError):
    def __init__(self) -> None:
        super().__init__(
            "Query selector missing. The command must be followed by a query "
            f"selector. Query selector must be one of {SELECTOR_NAMES}."
        )


class QuerySelectorIndexMissingOrInvalid(ParseError):
    def __init__(self) -> None:
        super().__init__(
            "Query selector index missing or invalid: This query selector must be "
            "followed by an integer index."
        )


class InvalidPlockOperation(ParseError):
    def __init__(self, op: str, hint: str) -> None:
        self.op = op
        super().__init__(f"Parameter lock operation {op} is invalid. {hint}")


class InvalidQueryFormat(ParseError):
    def __init__(self) -> None:
        super().__init__(
            "Invalid query format. The right format should be, <selector> [<index>]. "
            "Example: query pattern_wb or query pattern 0"
        )


class InvalidSendFormat(ParseError):
    def __init__(self) -> None:
        super().__init__(
            "Invalid send format. The right format should be, <selector> [<index>]. "
            "Example: send kit_wb or send kit 1"
        )


class InvalidExportFormat(ParseError):
    def __init__(self) -> None:
        super().__init__(
            "Invalid export format. The right format should be, <selector> [<index>] <path>. "
            "Example: export kit 1 ~/my_kit.sysex"
        )


# ---------------------------------------------------------------------------
# Query errors
# ---------------------------------------------------------------------------

class QueryError(ValidationError):
    """A device query request could not be built."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Query Error: {detail}")


# ---------------------------------------------------------------------------
# Field errors (raised by the dispatch engine)
# ---------------------------------------------------------------------------

class GetError(ValidationError):
    """A get command is well formed but cannot be answered as written."""

    label = "getter"
    kind = "format"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Command Error: Invalid {self.label} {self.kind}. {detail}")


class GetFormatError(GetError):
    pass


class GetRangeError(GetError):
    kind = "range"


class SetError(ValidationError):
    """A set command is well formed but its parameter is not acceptable."""

    label = "setter"
    kind = "format"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Command Error: Invalid {self.label} {self.kind}. {detail}")


class SetFormatError(SetError):
    pass


class SetRangeError(SetError):
    kind = "range"


class EnumError(ValidationError):
    """Unknown enum name or variant for the addressed object."""


class InvalidEnumType(EnumError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Enum Error: Invalid enum type. {name}")


class InvalidEnumValue(EnumError):
    def __init__(self, name: str, variant: str, suggestion: str | None = None) -> None:
        self.name = name
        self.variant = variant
        self.suggestion = suggestion
        message = f"Enum Error: Invalid variant '{variant}' for {name}."
        if suggestion:
            message += f" Did you mean '{name}:{suggestion}'?"
        super().__init__(message)


class IdentifierError(ValidationError):
    """Unknown identifier, or an identifier used in an unsupported direction."""


class InvalidIdentifierType(IdentifierError):
    def __init__(self, name: str, reason: str = "") -> None:
        self.name = name
        detail = f"{name} {reason}".strip()
        super().__init__(f"Identifier Error: Invalid identifier type. {detail}")


# ---------------------------------------------------------------------------
# Resource, framing and codec errors
# ---------------------------------------------------------------------------

class BusyError(RytmError):
    """The project lock could not be obtained within the configured bound."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(
            f"Busy: the project is in use by another request (waited {timeout:g}s). "
            "Please retry."
        )


class FramingError(ValidationError):
    """A byte arrived outside of an open SysEx frame."""

    def __init__(self, byte: int) -> None:
        self.byte = byte
        super().__init__(
            f"Invalid input: 0x{byte:02X}. Rytm only understands SysEx messages. "
            "Every message must start with 0xF0 and end with 0xF7."
        )


class CodecError(RytmError):
    """A complete frame could not be decoded into the project."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Sysex Error: {detail}")
