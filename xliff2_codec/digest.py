"""Stable message identifiers.

The id of a message is what ties a translated ``<unit>`` back to its source,
so it must depend only on the message content: the serialized nodes and the
meaning.  The description is deliberately left out so editing a translator
note does not invalidate existing translations.
"""

from __future__ import annotations

import hashlib
from typing import List, Sequence

from . import i18n_ast as i18n


def digest(message: i18n.Message) -> str:
    """Compute the id of ``message``.

    :param message: Message to identify.
    :returns: The explicit ``message.id`` when set, otherwise a SHA-1 hex
        digest of the serialized content and meaning.
    """
    if message.id:
        return message.id
    content = "".join(serialize_nodes(message.nodes)) + f"[{message.meaning}]"
    return hashlib.sha1(content.encode("utf-8")).hexdigest()


def serialize_nodes(nodes: Sequence[i18n.Node]) -> List[str]:
    """Render each node to its canonical string form."""
    return [_serialize(node) for node in nodes]


def _serialize(node: i18n.Node) -> str:
    if isinstance(node, i18n.Text):
        return node.value
    if isinstance(node, i18n.Container):
        return "[" + ", ".join(serialize_nodes(node.children)) + "]"
    if isinstance(node, i18n.Icu):
        cases = ", ".join(
            f"{key} {{{_serialize(case)}}}" for key, case in node.cases.items()
        )
        return f"{{{node.expression}, {node.type}, {cases}}}"
    if isinstance(node, i18n.TagPlaceholder):
        if node.is_void:
            return f'<ph tag name="{node.start_name}"/>'
        children = ", ".join(serialize_nodes(node.children))
        return (
            f'<ph tag name="{node.start_name}">{children}'
            f'</ph name="{node.close_name}">'
        )
    if isinstance(node, i18n.Placeholder):
        if node.value:
            return f'<ph name="{node.name}">{node.value}</ph>'
        return f'<ph name="{node.name}"/>'
    if isinstance(node, i18n.IcuPlaceholder):
        return f'<ph icu name="{node.name}">{_serialize(node.value)}</ph>'
    raise TypeError(f"Unsupported message node: {type(node).__name__}")
