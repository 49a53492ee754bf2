"""Conversion of ``<target>`` content back into message nodes."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from lxml import etree

from . import i18n_ast as i18n
from . import utils
from .errors import I18nError
from .utils import XmlNode


class XmlToI18n:
    """Reads translated XLIFF 2.0 content.

    Only text, ``<ph>`` and ``<pc>`` are allowed in a translation.  The
    placeholders are matched through their ``equiv*`` names, so translators
    may reorder them freely; the numeric ``id`` is ignored.  Any other element
    is an error and its content is not looked at.
    """

    def __init__(self, url: str) -> None:
        self._url = url
        self._errors: List[I18nError] = []

    def convert(self, nodes: Sequence[XmlNode]) -> Tuple[List[i18n.Node], List[I18nError]]:
        """Convert a fragment, collecting every error found in it.

        :param nodes: Mixed content of a ``<target>`` element.
        :returns: ``(message_nodes, errors)``.
        """
        self._errors = []
        i18n_nodes = self._visit_all(nodes)
        return i18n_nodes, self._errors

    def _visit_all(self, nodes: Sequence[XmlNode]) -> List[i18n.Node]:
        result: List[i18n.Node] = []
        for node in nodes:
            result.extend(self._visit(node))
        return result

    def _visit(self, node: XmlNode) -> List[i18n.Node]:
        if isinstance(node, str):
            return [i18n.Text(node, utils.location_of(node, self._url))]
        if utils.is_entity(node):
            self._add_error(node, f"Unexpanded entity reference {node.text}")
            return []
        if not utils.is_element(node):
            # comments and processing instructions
            return []
        return self._visit_element(node)

    def _visit_element(self, el: etree._Element) -> List[i18n.Node]:
        """Convert one element of a translation.

        :param el: Element found in the ``<target>`` content.
        :returns: The placeholders (and, for ``<pc>``, the converted
            children) it stands for, or nothing when it is invalid.
        """
        location = utils.location_of(el, self._url)

        if el.tag == utils.PLACEHOLDER_TAG:
            name = utils.get_attr(el, "equiv")
            if name is not None:
                return [i18n.Placeholder("", name, location)]
            self._add_error(el, f'<{utils.PLACEHOLDER_TAG}> misses the "equiv" attribute')
            return []

        if el.tag == utils.PLACEHOLDER_SPANNING_TAG:
            start_name = utils.get_attr(el, "equivStart")
            end_name = utils.get_attr(el, "equivEnd")
            if start_name is None:
                self._add_error(
                    el, f'<{utils.PLACEHOLDER_SPANNING_TAG}> misses the "equivStart" attribute'
                )
            elif end_name is None:
                self._add_error(
                    el, f'<{utils.PLACEHOLDER_SPANNING_TAG}> misses the "equivEnd" attribute'
                )
            else:
                return [
                    i18n.Placeholder("", start_name, location),
                    *self._visit_all(list(utils.iter_content(el))),
                    i18n.Placeholder("", end_name, location),
                ]
            return []

        self._add_error(el, "Unexpected tag")
        return []

    def _add_error(self, el: etree._Element, message: str) -> None:
        self._errors.append(utils.make_error(el, self._url, message))
