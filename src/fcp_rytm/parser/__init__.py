"""Parser package: values, selectors and parsed tokens.

The command grammar lives in :mod:`fcp_rytm.parser.command`; it depends on
the model field tables, so it is not re-exported here.
"""

from fcp_rytm.parser.selector import ObjectTypeSelector, resolve, resolve_values
from fcp_rytm.parser.tokens import ParsedToken
from fcp_rytm.parser.value import (
    Float,
    Int,
    Symbol,
    Value,
    ValueList,
    from_native,
    from_token,
    to_native,
    values_from_text,
)

__all__ = [
    "resolve",
    "resolve_values",
    "from_native",
    "from_token",
    "to_native",
    "values_from_text",
    "Float",
    "Int",
    "Symbol",
    "Value",
    "ValueList",
    "ObjectTypeSelector",
    "ParsedToken",
]
