"""Conversion of message nodes into XLIFF 2.0 ``<source>`` content.

Markup becomes placeholders: ``<ph/>`` for anything self-contained
(interpolations, void tags, ICU placeholders) and ``<pc>`` for elements that
wrap translatable text.  Each placeholder gets a numeric ``id`` in visitation
order and an ``equiv*`` name translators must keep intact.
"""

from __future__ import annotations

from typing import List, Sequence

from . import i18n_ast as i18n
from . import utils
from .errors import NestedIcuError
from .tags import get_type_for_tag
from .utils import XmlNode


class WriteVisitor:
    """Turns the nodes of one message into XML nodes.

    The placeholder counter and the ICU flag are reset by :meth:`serialize`,
    so a single instance can be reused for every message of a ``write`` call
    but must not be shared between concurrent calls.
    """

    def __init__(self) -> None:
        self._is_in_icu = False
        self._next_placeholder_id = 0

    def serialize(self, nodes: Sequence[i18n.Node]) -> List[XmlNode]:
        """Convert a message's nodes, numbering placeholders from ``0``."""
        self._is_in_icu = False
        self._next_placeholder_id = 0
        return self._visit_all(nodes)

    def _visit_all(self, nodes: Sequence[i18n.Node]) -> List[XmlNode]:
        result: List[XmlNode] = []
        for node in nodes:
            result.extend(self._visit(node))
        return result

    def _visit(self, node: i18n.Node) -> List[XmlNode]:
        """Convert a single node.

        :param node: Message node of any supported kind.
        :returns: Zero or more XML nodes; containers are flattened.
        :raises TypeError: For node classes outside the message vocabulary.
        """
        if isinstance(node, i18n.Text):
            return [node.value]
        if isinstance(node, i18n.Container):
            return self._visit_all(node.children)
        if isinstance(node, i18n.Icu):
            return self._visit_icu(node)
        if isinstance(node, i18n.TagPlaceholder):
            return self._visit_tag_placeholder(node)
        if isinstance(node, i18n.Placeholder):
            return [
                utils.make_element(
                    utils.PLACEHOLDER_TAG,
                    {
                        "id": self._next_id(),
                        "equiv": node.name,
                        "disp": f"{{{{{node.value}}}}}",
                    },
                )
            ]
        if isinstance(node, i18n.IcuPlaceholder):
            return [utils.make_element(utils.PLACEHOLDER_TAG, {"id": self._next_id()})]
        raise TypeError(f"Unsupported message node: {type(node).__name__}")

    def _next_id(self) -> str:
        ph_id = self._next_placeholder_id
        self._next_placeholder_id += 1
        return str(ph_id)

    def _visit_icu(self, icu: i18n.Icu) -> List[XmlNode]:
        """Reject nested ICUs; ICU content itself has no XLIFF 2.0 form yet.

        The cases are only walked to find nested ICUs.  Whatever they produce
        is dropped and the placeholder numbering is left untouched.
        """
        if self._is_in_icu:
            raise NestedIcuError()
        self._is_in_icu = True
        next_id = self._next_placeholder_id
        for case in icu.cases.values():
            self._visit(case)
        self._next_placeholder_id = next_id
        self._is_in_icu = False
        return []

    def _visit_tag_placeholder(self, ph: i18n.TagPlaceholder) -> List[XmlNode]:
        tag_type = get_type_for_tag(ph.tag)

        if ph.is_void:
            return [
                utils.make_element(
                    utils.PLACEHOLDER_TAG,
                    {
                        "id": self._next_id(),
                        "equiv": ph.start_name,
                        "type": tag_type,
                        "disp": f"<{ph.tag}/>",
                    },
                )
            ]

        pc = utils.make_element(
            utils.PLACEHOLDER_SPANNING_TAG,
            {
                "id": self._next_id(),
                "equivStart": ph.start_name,
                "equivEnd": ph.close_name,
                "type": tag_type,
                "dispStart": f"<{ph.tag}>",
                "dispEnd": f"</{ph.tag}>",
            },
        )
        children = self._visit_all(ph.children)
        utils.append_nodes(pc, children or [""])
        return [pc]
