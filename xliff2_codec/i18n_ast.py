"""Translatable message trees.

A :class:`Message` is the unit handed to a serializer: an ordered list of
nodes plus the free text metadata translators see.  The node vocabulary is
closed; serializers dispatch on the concrete class and reject anything else.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from .errors import SourceLocation


@dataclass
class Text:
    value: str
    location: Optional[SourceLocation] = None


@dataclass
class Container:
    """Groups nodes without rendering anything itself."""

    children: List["Node"] = field(default_factory=list)
    location: Optional[SourceLocation] = None


@dataclass
class Icu:
    """Plural or select expression, e.g. ``{count, plural, =0 {none}}``."""

    expression: str
    type: str
    cases: Dict[str, "Node"] = field(default_factory=dict)
    location: Optional[SourceLocation] = None


@dataclass
class TagPlaceholder:
    """A markup element kept around translated text.

    ``start_name`` and ``close_name`` are the placeholder names of the opening
    and closing tag (``START_BOLD_TEXT`` / ``CLOSE_BOLD_TEXT``).  Void elements
    such as ``<br>`` only use ``start_name`` and have no children.
    """

    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)
    start_name: str = ""
    close_name: str = ""
    children: List["Node"] = field(default_factory=list)
    is_void: bool = False
    location: Optional[SourceLocation] = None


@dataclass
class Placeholder:
    """An interpolation such as ``{{ user.name }}``.

    ``value`` holds the original expression.  Placeholders recovered from a
    translation only know their ``name`` and leave ``value`` empty.
    """

    value: str
    name: str
    location: Optional[SourceLocation] = None


@dataclass
class IcuPlaceholder:
    value: Icu
    name: str
    location: Optional[SourceLocation] = None


Node = Union[Text, Container, Icu, TagPlaceholder, Placeholder, IcuPlaceholder]


@dataclass
class Message:
    """A translatable message.

    :param nodes: Message content.
    :param meaning: Disambiguates otherwise identical messages; part of the id.
    :param description: Free text note for translators.
    :param id: Explicit id overriding the content digest when non-empty.
    """

    nodes: List[Node] = field(default_factory=list)
    meaning: str = ""
    description: str = ""
    id: str = ""
