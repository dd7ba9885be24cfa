"""Field accessors: bind a command name to an attribute and a validation rule.

Every object in the project tree exposes its settable and readable state
through a table of these accessors (``name -> Field``). The dispatch engine
never touches model attributes directly; it looks a name up in the right
table and calls :meth:`Field.read` or :meth:`Field.write`.

Validation always happens before assignment, so a failed write leaves the
object untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

import pydantic
from fcp_core import suggest

from fcp_rytm.errors import (
    GetFormatError,
    GetRangeError,
    InvalidEnumValue,
    InvalidIdentifierType,
    SetFormatError,
    SetRangeError,
)
from fcp_rytm.parser.value import Float, Int, Number, Symbol, Value


@dataclass
class FieldArgs:
    """Everything that followed a field name in a parsed command."""

    params: list[Number] = field(default_factory=list)
    variant: str | None = None
    text: str | None = None


# ---------------------------------------------------------------------------
# Attribute path helpers
# ---------------------------------------------------------------------------

def resolve_attr(obj: Any, path: str) -> Any:
    for part in path.split("."):
        obj = getattr(obj, part)
    return obj


def assign_attr(obj: Any, path: str, value: Any) -> None:
    head, _, last = path.rpartition(".")
    target = resolve_attr(obj, head) if head else obj
    setattr(target, last, value)


# ---------------------------------------------------------------------------
# Scalar fields
# ---------------------------------------------------------------------------

class Field:
    """Base accessor for a single scalar attribute."""

    kind = "identifier"

    def __init__(
        self,
        name: str,
        attr: str,
        *,
        read_only: bool = False,
        write_only: bool = False,
    ) -> None:
        self.name = name
        self.attr = attr
        self.read_only = read_only
        self.write_only = write_only

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self.attr!r})"

    # -- conversion hooks --

    def to_value(self, native: Any) -> Value:
        raise NotImplementedError

    def coerce(self, number: Number) -> Any:
        raise NotImplementedError

    def describe(self) -> str:
        """Short human description of accepted values (used by help queries)."""
        return ""

    # -- access --

    def read_native(self, obj: Any) -> Any:
        return resolve_attr(obj, self.attr)

    def read(self, obj: Any, args: FieldArgs) -> Value:
        self.check_readable()
        if args.params:
            raise GetFormatError(f"{self.name} does not take a parameter in a get command.")
        return self.to_value(self.read_native(obj))

    def write(self, obj: Any, args: FieldArgs) -> None:
        self.check_writable()
        if not args.params:
            raise SetFormatError(
                f"{self.name} should be followed by a parameter. "
                "Allowed parameters are only integers or floats."
            )
        if len(args.params) > 1:
            raise SetFormatError(f"{self.name} takes exactly one parameter.")
        assign_attr(obj, self.attr, self.coerce(args.params[0]))

    def check_readable(self) -> None:
        if self.write_only:
            raise InvalidIdentifierType(self.name, "can only be used in a set command.")

    def check_writable(self) -> None:
        if self.read_only:
            raise InvalidIdentifierType(self.name, "is read-only.")


class IntField(Field):
    def __init__(self, name: str, attr: str, low: int, high: int, **kwargs: Any) -> None:
        super().__init__(name, attr, **kwargs)
        self.low = low
        self.high = high

    def to_value(self, native: Any) -> Value:
        return Int(int(native))

    def coerce(self, number: Number) -> int:
        value = number.get_int()
        if not self.low <= value <= self.high:
            raise SetRangeError(
                f"{self.name} must be an integer between {self.low} and {self.high}. "
                f"Got {number}."
            )
        return value

    def describe(self) -> str:
        return f"{self.low}..{self.high}"


class FloatField(Field):
    def __init__(self, name: str, attr: str, low: float, high: float, **kwargs: Any) -> None:
        super().__init__(name, attr, **kwargs)
        self.low = low
        self.high = high

    def to_value(self, native: Any) -> Value:
        return Float(float(native))

    def coerce(self, number: Number) -> float:
        value = number.get_float()
        if not self.low <= value <= self.high:
            raise SetRangeError(
                f"{self.name} must be a number between {self.low:g} and {self.high:g}. "
                f"Got {number}."
            )
        return value

    def describe(self) -> str:
        return f"{self.low:g}..{self.high:g} (float)"


class BoolField(Field):
    def to_value(self, native: Any) -> Value:
        return Int(1 if native else 0)

    def coerce(self, number: Number) -> bool:
        return number.as_bool_0_or_1(self.name)

    def describe(self) -> str:
        return "0 or 1"


class SymbolField(Field):
    """Read-only text attribute (sound type, turbo speed, ...)."""

    def __init__(self, name: str, attr: str) -> None:
        super().__init__(name, attr, read_only=True)

    def to_value(self, native: Any) -> Value:
        return Symbol(str(native))


class NameField(Field):
    """ASCII object name of at most ``max_len`` characters."""

    def __init__(self, name: str, attr: str, max_len: int = 15) -> None:
        super().__init__(name, attr)
        self.max_len = max_len

    def to_value(self, native: Any) -> Value:
        return Symbol(native)

    def write(self, obj: Any, args: FieldArgs) -> None:
        text = args.text
        if text is None:
            raise SetFormatError(
                f"Invalid parameter '{self.name}': name must be a symbol with maximum "
                f"{self.max_len} characters long and use only ascii characters."
            )
        if not text:
            raise SetFormatError("Invalid parameter: name must not be empty.")
        if len(text) > self.max_len or not text.isascii():
            raise SetRangeError(
                f"Invalid parameter '{self.name}': name must be a symbol with maximum "
                f"{self.max_len} characters long and use only ascii characters."
            )
        assign_attr(obj, self.attr, text)

    def describe(self) -> str:
        return f"ascii text, max {self.max_len} chars"


# ---------------------------------------------------------------------------
# Enum fields
# ---------------------------------------------------------------------------

class EnumField(Field):
    """Closed variant set, addressed as ``name:variant``."""

    kind = "enum"

    def __init__(self, name: str, attr: str, variants: Iterable[str], **kwargs: Any) -> None:
        super().__init__(name, attr, **kwargs)
        self.variants = tuple(variants)

    def to_value(self, native: Any) -> Value:
        return Symbol(native)

    def validate_variant(self, variant: str | None) -> str:
        if variant is None:
            raise SetFormatError(f"Enum value not provided. Try using '{self.name}:<your-value>'.")
        if variant not in self.variants:
            raise InvalidEnumValue(self.name, variant, suggest(variant, list(self.variants)))
        return variant

    def read(self, obj: Any, args: FieldArgs) -> Value:
        self.check_readable()
        if args.params:
            raise GetFormatError(f"{self.name}: does not take an index.")
        return self.to_value(self.read_native(obj))

    def write(self, obj: Any, args: FieldArgs) -> None:
        self.check_writable()
        if args.params:
            raise SetFormatError(f"{self.name}:<variant> does not take an index.")
        assign_attr(obj, self.attr, self.convert_variant(self.validate_variant(args.variant)))

    def convert_variant(self, variant: str) -> Any:
        return variant

    def check_readable(self) -> None:
        if self.write_only:
            raise GetFormatError(f"{self.name} can only be used in a set command.")

    def describe(self) -> str:
        if len(self.variants) <= 12:
            return " ".join(self.variants)
        return " ".join(self.variants[:10]) + f" ... ({len(self.variants)} variants)"


class MappedEnumField(EnumField):
    """Set-only enum that writes a mapped native value into another field."""

    def __init__(self, name: str, attr: str, mapping: dict[str, Any]) -> None:
        super().__init__(name, attr, mapping.keys(), write_only=True)
        self.mapping = dict(mapping)

    def convert_variant(self, variant: str) -> Any:
        return self.mapping[variant]


# ---------------------------------------------------------------------------
# Slotted fields (indexed sub-slots)
# ---------------------------------------------------------------------------

class SlotField(Field):
    """An indexed list attribute whose elements follow *inner*'s rules.

    Identifier form: get ``name <slot>``, set ``name <slot> <value>``.
    Enum form: get ``name:<slot>`` (or ``name: <slot>``),
    set ``name:<variant> <slot>``.
    """

    def __init__(self, inner: Field, count: int, slot_label: str = "index") -> None:
        super().__init__(inner.name, inner.attr, read_only=inner.read_only,
                         write_only=inner.write_only)
        self.inner = inner
        self.kind = inner.kind
        self.count = count
        self.slot_label = slot_label

    def describe(self) -> str:
        return f"<{self.slot_label} 0..{self.count - 1}> {self.inner.describe()}".strip()

    def _slot(self, number: Number | int, error: type) -> int:
        slot = number if isinstance(number, int) else number.get_int()
        if not 0 <= slot < self.count:
            raise error(f"The {self.slot_label} {slot} is out of range for {self.name}.")
        return slot

    def _read_slot(self, args: FieldArgs) -> int:
        if self.kind == "enum":
            if args.variant is not None:
                try:
                    return self._slot(int(args.variant), GetRangeError)
                except ValueError:
                    raise GetFormatError(
                        f"{self.name}:<integer> is the correct format. "
                        f"Example: {self.name}:2"
                    ) from None
            if len(args.params) == 1:
                return self._slot(args.params[0], GetRangeError)
            raise GetFormatError(
                f"{self.name}:<integer> is the correct format. Example: {self.name}:2"
            )
        if len(args.params) != 1:
            raise GetFormatError(
                f"{self.name} should be followed by an integer {self.slot_label}."
            )
        return self._slot(args.params[0], GetRangeError)

    def read(self, obj: Any, args: FieldArgs) -> Value:
        self.inner.check_readable()
        slot = self._read_slot(args)
        return self.inner.to_value(resolve_attr(obj, self.attr)[slot])

    def write(self, obj: Any, args: FieldArgs) -> None:
        self.inner.check_writable()
        if self.kind == "enum":
            if len(args.params) != 1:
                raise SetFormatError(
                    f"{self.name} should be followed by an integer {self.slot_label}. "
                    f"Format: {self.name}:<variant> <{self.slot_label}>. "
                    f"Example: {self.name}:{self._example()} 2"
                )
            slot = self._slot(args.params[0], SetRangeError)
            native = self.inner.convert_variant(self.inner.validate_variant(args.variant))
        else:
            if not args.params:
                raise SetFormatError(f"{self.name} should be followed by an index.")
            if len(args.params) != 2:
                raise SetFormatError(
                    f"{self.name} should be followed by an index and a value. "
                    f"Format: {self.name} <{self.slot_label}> <value>"
                )
            slot = self._slot(args.params[0], SetRangeError)
            native = self.inner.coerce(args.params[1])
        resolve_attr(obj, self.attr)[slot] = native

    def _example(self) -> str:
        variants = getattr(self.inner, "variants", ())
        return variants[min(6, len(variants) - 1)] if variants else "x"


class SlotFlagField(Field):
    """Indexed boolean flag set to a fixed value by its own verb.

    ``mute 3`` reads (get) or sets (set) the flag; a sibling ``unmute``
    field with ``flag=False`` and ``write_only=True`` clears it.
    """

    def __init__(
        self,
        name: str,
        attr: str,
        count: int,
        flag: bool,
        slot_label: str = "index",
        **kwargs: Any,
    ) -> None:
        super().__init__(name, attr, **kwargs)
        self.count = count
        self.flag = flag
        self.slot_label = slot_label

    def to_value(self, native: Any) -> Value:
        return Int(1 if native else 0)

    def describe(self) -> str:
        return f"<{self.slot_label} 0..{self.count - 1}>"

    def _slot(self, args: FieldArgs, fmt_error: type, range_error: type) -> int:
        if len(args.params) != 1:
            raise fmt_error(f"{self.name} should be followed by an integer {self.slot_label}.")
        slot = args.params[0].get_int()
        if not 0 <= slot < self.count:
            raise range_error(f"The {self.slot_label} {slot} is out of range for {self.name}.")
        return slot

    def read(self, obj: Any, args: FieldArgs) -> Value:
        self.check_readable()
        slot = self._slot(args, GetFormatError, GetRangeError)
        return self.to_value(resolve_attr(obj, self.attr)[slot])

    def write(self, obj: Any, args: FieldArgs) -> None:
        self.check_writable()
        slot = self._slot(args, SetFormatError, SetRangeError)
        resolve_attr(obj, self.attr)[slot] = self.flag


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

FieldTable = dict[str, Field]


def table(*fields: Field) -> FieldTable:
    out: FieldTable = {}
    for f in fields:
        if f.name in out:
            raise ValueError(f"duplicate field name {f.name!r}")
        out[f.name] = f
    return out


def names_of_kind(fields: FieldTable, kind: str) -> frozenset[str]:
    return frozenset(name for name, f in fields.items() if f.kind == kind)


def fixed_length(count: int) -> Any:
    """Exact size of a stored slot list, enforced when a project file is loaded."""
    return pydantic.Field(min_length=count, max_length=count)
