"""Extraction of translated fragments from an XLIFF 2.0 document.

The parser does not interpret translations.  It validates the document
structure and hands back, per ``<unit>`` id, the raw content of its
``<target>`` so :mod:`~xliff2_codec.converter` can turn it into message nodes.
Problems are collected instead of raised so a single run reports all of them.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple

from lxml import etree

from . import utils
from .errors import I18nError
from .utils import XmlNode


class Xliff2Parser:
    """Walks a parsed XLIFF 2.0 tree collecting ``<target>`` fragments.

    Unknown elements are descended into so wrappers such as ``<file>`` or
    ``<segment>`` need no special handling.  ``<source>`` is skipped since
    loading only needs the translation.
    """

    def __init__(self) -> None:
        self._url = ""
        self._unit_nodes: Optional[List[XmlNode]] = None
        self._errors: List[I18nError] = []
        self._nodes_by_msg_id: Dict[str, List[XmlNode]] = {}
        self._seen: Set[str] = set()
        self._duplicated: Set[str] = set()

    def parse(
        self, xliff: str, url: str
    ) -> Tuple[Dict[str, List[XmlNode]], List[I18nError]]:
        """Extract the target fragments of ``xliff``.

        :param xliff: Document text.
        :param url: Label used in error locations.
        :returns: ``(fragments_by_msg_id, errors)``.  Ids that are duplicated
            in the document have no entry.
        """
        self._url = url
        self._unit_nodes = None
        self._nodes_by_msg_id = {}
        self._seen = set()
        self._duplicated = set()

        roots, self._errors = utils.parse_xml(xliff, url, expand_entities=False)
        self._visit_all(roots)

        for msg_id in self._duplicated:
            self._nodes_by_msg_id.pop(msg_id, None)

        return self._nodes_by_msg_id, self._errors

    def _visit_all(self, nodes) -> None:
        for node in nodes:
            if utils.is_element(node):
                self._visit_element(node)

    def _visit_element(self, element: etree._Element) -> None:
        """Dispatch on the element name.

        An ``<xliff>`` root of another version is reported and its content
        skipped entirely, so none of its units are extracted.

        :param element: Element to visit.
        """
        name = element.tag

        if name == utils.UNIT_TAG:
            self._visit_unit(element)
        elif name == utils.SOURCE_TAG:
            pass
        elif name == utils.TARGET_TAG:
            self._unit_nodes = list(utils.iter_content(element))
        elif name == utils.XLIFF_TAG:
            version = utils.get_attr(element, "version")
            if version is not None and version != utils.VERSION:
                self._add_error(
                    element,
                    f"The XLIFF file version {version} is not compatible with "
                    f"XLIFF 2.0 serializer",
                )
            else:
                self._visit_all(element)
        else:
            self._visit_all(element)

    def _visit_unit(self, element: etree._Element) -> None:
        """Record the target fragment of a ``<unit>``.

        Units without an id are skipped.  A repeated id is reported once per
        extra occurrence and removed from the result in :meth:`parse`, since
        no occurrence can be trusted over the others.

        :param element: The ``<unit>`` element.
        """
        self._unit_nodes = None
        msg_id = utils.get_attr(element, "id")
        if msg_id is None:
            self._add_error(element, f'<{utils.UNIT_TAG}> misses the "id" attribute')
            return
        if msg_id in self._seen:
            self._add_error(element, f"Duplicated translations for msg {msg_id}")
            self._duplicated.add(msg_id)
            return
        self._seen.add(msg_id)

        self._visit_all(element)
        if self._unit_nodes is not None:
            self._nodes_by_msg_id[msg_id] = self._unit_nodes
        else:
            self._add_error(element, f"Message {msg_id} misses a translation")
        self._unit_nodes = None

    def _add_error(self, element: etree._Element, message: str) -> None:
        self._errors.append(utils.make_error(element, self._url, message))
