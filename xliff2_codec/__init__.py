"""Public entry points for :mod:`xliff2_codec`.

Applications usually only need :class:`~xliff2_codec.serializer.Xliff2` and
the message node classes; the visitors live in their own modules.
"""

from .digest import digest, serialize_nodes
from .errors import I18nError, NestedIcuError, SourceLocation, Xliff2LoadError
from .i18n_ast import (
    Container,
    Icu,
    IcuPlaceholder,
    Message,
    Placeholder,
    TagPlaceholder,
    Text,
)
from .serializer import Serializer, Xliff2
from .tags import get_type_for_tag
from .validator import ValidationReport, Xliff2Validator

__all__ = [
    "Container",
    "I18nError",
    "Icu",
    "IcuPlaceholder",
    "Message",
    "NestedIcuError",
    "Placeholder",
    "Serializer",
    "SourceLocation",
    "TagPlaceholder",
    "Text",
    "ValidationReport",
    "Xliff2",
    "Xliff2LoadError",
    "Xliff2Validator",
    "digest",
    "get_type_for_tag",
    "serialize_nodes",
]
