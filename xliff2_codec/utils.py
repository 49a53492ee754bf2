"""Small XML utilities used across the codec.

These helpers wrap :mod:`lxml` so the writer, parser and converter deal in
plain sequences of *XML nodes*: a ``str`` for a text node or an element.
lxml itself stores text in ``text``/``tail`` slots, which is awkward for the
visitors that build and consume mixed content.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from lxml import etree

from .errors import I18nError, SourceLocation

VERSION = "2.0"
XMLNS = "urn:oasis:names:tc:xliff:document:2.0"
# TODO: accept the source language from the caller once extraction knows it.
SOURCE_LANG = "en"
DECLARATION = '<?xml version="1.0" encoding="UTF-8" ?>'

XLIFF_TAG = "xliff"
UNIT_TAG = "unit"
SOURCE_TAG = "source"
TARGET_TAG = "target"
PLACEHOLDER_TAG = "ph"
PLACEHOLDER_SPANNING_TAG = "pc"

MAX_CONTEXT = 100

XmlNode = Union[str, etree._Element]


def qname(tag: str) -> str:
    """Qualify ``tag`` with the XLIFF 2.0 namespace."""
    return f"{{{XMLNS}}}{tag}"


def make_element(
    tag: str,
    attrs: Optional[Dict[str, str]] = None,
    text: Optional[str] = None,
) -> etree._Element:
    """Create an XLIFF element with attributes in insertion order."""
    elem = etree.Element(qname(tag), nsmap={None: XMLNS})
    for key, value in (attrs or {}).items():
        elem.set(key, value)
    if text is not None:
        elem.text = text
    return elem


def append_child(parent: etree._Element, child: etree._Element, indent: int) -> None:
    """Append ``child`` on a new line indented by ``indent`` spaces."""
    _add_text(parent, "\n" + " " * indent)
    parent.append(child)


def close_children(parent: etree._Element, indent: int) -> None:
    """Put the closing tag of ``parent`` on a new line."""
    _add_text(parent, "\n" + " " * indent)


def append_nodes(parent: etree._Element, nodes: Sequence[XmlNode]) -> None:
    """Append mixed content to ``parent``.

    Strings are concatenated onto ``parent.text`` or the tail of the last
    child so their position relative to sibling elements is preserved.  An
    empty string still materializes as text, which keeps an otherwise empty
    element from serializing as self-closing.
    """
    for node in nodes:
        if isinstance(node, str):
            _add_text(parent, node)
        else:
            parent.append(node)


def _add_text(parent: etree._Element, value: str) -> None:
    """Append ``value`` after the current last piece of content of ``parent``.

    Text before the first child lives in ``parent.text``; anything after a
    child lives in that child's ``tail``.

    :param parent: Element receiving the text.
    :param value: Text to add.
    :raises ValueError: When ``value`` holds characters XML cannot carry,
        such as ASCII control characters.
    """
    if len(parent):
        last = parent[-1]
        last.tail = (last.tail or "") + value
    else:
        parent.text = (parent.text or "") + value


def iter_content(elem: etree._Element) -> Iterator[XmlNode]:
    """Yield the mixed content of ``elem`` in document order.

    Comments, processing instructions and entity references are yielded as
    nodes; consumers decide whether to skip or reject them.  Their tails are
    yielded like any other text.
    """
    if elem.text is not None:
        yield elem.text
    for child in elem:
        yield child
        if child.tail is not None:
            yield child.tail


def is_element(node: XmlNode) -> bool:
    """``True`` for real elements, ``False`` for text, comments, PIs and entities."""
    return isinstance(node, etree._Element) and isinstance(node.tag, str)


def is_entity(node: XmlNode) -> bool:
    """``True`` for an unexpanded entity reference such as ``&who;``."""
    return isinstance(node, etree._Entity)


def get_attr(elem: etree._Element, name: str) -> Optional[str]:
    """Read an attribute without namespace.

    Missing and empty attributes differ: an empty ``equiv=""`` is returned as
    ``""`` while a missing one gives ``None``.

    :param elem: Element to read from.
    :param name: Attribute name.
    :returns: The value or ``None``.
    """
    return elem.attrib.get(name)


def location_of(node: XmlNode, url: str) -> SourceLocation:
    """Locate ``node`` for error reporting.

    lxml only records line numbers on nodes, so text content gets the url
    alone.

    :param node: Text or element.
    :param url: Label of the document.
    :returns: The location of ``node``.
    """
    line = node.sourceline if isinstance(node, etree._Element) else None
    return SourceLocation(url, line)


def make_error(elem: etree._Element, url: str, msg: str) -> I18nError:
    """Build an error record pointing at ``elem``.

    The context is the serialized element cut to its first line and
    :data:`MAX_CONTEXT` characters, enough to spot it in the document.
    """
    context = etree.tostring(elem, encoding="unicode", with_tail=False)
    context = context.split("\n", 1)[0]
    if len(context) > MAX_CONTEXT:
        context = context[:MAX_CONTEXT] + "..."
    return I18nError(location_of(elem, url), msg, context)


def parse_xml(
    text: str, url: str, expand_entities: bool = False
) -> Tuple[List[etree._Element], List[I18nError]]:
    """Parse ``text`` into root nodes plus syntax errors.

    The XLIFF 2.0 namespace is stripped from element names so the visitors
    compare tags as written in the document.  Elements of any other
    namespace keep their qualified ``{uri}name`` and never match an XLIFF
    tag.  On a syntax error no nodes are returned.

    ``text`` is already decoded, so the encoding named in its XML declaration
    is ignored.

    :param text: XML document.
    :param url: Label used in error locations.
    :param expand_entities: Whether to resolve entity references.
    :returns: ``(roots, errors)``.
    """
    parser = etree.XMLParser(
        encoding="utf-8",
        remove_blank_text=False,
        resolve_entities=expand_entities,
        load_dtd=False,
        no_network=True,
    )
    try:
        root = etree.fromstring(text.encode("utf-8"), parser)
    except etree.XMLSyntaxError as exc:
        errors = [
            I18nError(SourceLocation(url, entry.line), entry.message)
            for entry in exc.error_log
        ]
        if not errors:
            errors.append(I18nError(SourceLocation(url, exc.lineno), str(exc)))
        return [], errors
    _strip_namespaces(root)
    return [root], []


def _strip_namespaces(root: etree._Element) -> None:
    for elem in root.iter("*"):
        name = etree.QName(elem)
        if name.namespace == XMLNS:
            elem.tag = name.localname
    etree.cleanup_namespaces(root)


def serialize(root: etree._Element) -> str:
    """Serialize an XLIFF tree with the XML declaration.

    Redundant namespace declarations are dropped so only the root declares
    the default XLIFF namespace.
    """
    etree.cleanup_namespaces(root)
    body = etree.tostring(root, encoding="unicode")
    return f"{DECLARATION}\n{body}\n"
