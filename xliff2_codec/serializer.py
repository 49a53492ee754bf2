"""Reading and writing XLIFF 2.0 translation files.

:class:`Xliff2` is the entry point.  ``write`` turns extracted messages into
a document for translators, ``load`` reads the translated document back into
message nodes keyed by message id.

See http://docs.oasis-open.org/xliff/xliff-core/v2.0/os/xliff-core-v2.0-os.html
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Set

from lxml import etree

from . import config
from . import i18n_ast as i18n
from . import utils
from .digest import digest
from .errors import Xliff2LoadError
from .validator import Xliff2Validator
from .writer import WriteVisitor


class Serializer(ABC):
    """Base class of translation file formats."""

    @abstractmethod
    def write(self, messages: Iterable[i18n.Message]) -> str:
        """Render ``messages`` as a translation file."""

    @abstractmethod
    def load(self, content: str, url: str) -> Dict[str, List[i18n.Node]]:
        """Read the translations of ``content`` keyed by message id."""

    def digest(self, message: i18n.Message) -> str:
        return digest(message)


class Xliff2(Serializer):
    """XLIFF 2.0 serializer.

    Each unique message becomes one ``<unit>`` whose id is the message
    digest.  Placeholders are written as ``<ph>``/``<pc>`` elements and read
    back through their ``equiv*`` names.  Instances keep no state between
    calls, so one serializer can be shared.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        if logger is None:
            logger = logging.getLogger("Xliff2")
            logger.setLevel(getattr(logging, config.LOG_LEVEL))
        self.logger = logger

    def write(self, messages: Iterable[i18n.Message]) -> str:
        """Serialize ``messages`` into an XLIFF 2.0 document.

        Messages sharing an id are written once; the first one wins, including
        its notes.

        :param messages: Messages in the order they should appear.
        :returns: The document text, XML declaration included.
        :raises NestedIcuError: When a message nests ICU expressions.  Nothing
            is returned in that case.
        :raises ValueError: When message text or metadata holds characters XML
            cannot carry, such as ASCII control characters.
        """
        visitor = WriteVisitor()
        visited: Set[str] = set()
        units: List[etree._Element] = []

        for message in messages:
            msg_id = self.digest(message)

            if msg_id in visited:
                self.logger.debug("Skipping duplicate message %s", msg_id)
                continue
            visited.add(msg_id)

            unit = utils.make_element(utils.UNIT_TAG, {"id": msg_id})

            if message.description or message.meaning:
                notes = utils.make_element("notes")
                if message.description:
                    utils.append_child(
                        notes,
                        utils.make_element(
                            "note", {"category": "description"}, message.description
                        ),
                        8,
                    )
                if message.meaning:
                    utils.append_child(
                        notes,
                        utils.make_element("note", {"category": "meaning"}, message.meaning),
                        8,
                    )
                utils.close_children(notes, 6)
                utils.append_child(unit, notes, 6)

            source = utils.make_element(utils.SOURCE_TAG)
            utils.append_nodes(source, visitor.serialize(message.nodes))

            segment = utils.make_element("segment")
            utils.append_child(segment, source, 8)
            utils.close_children(segment, 6)

            utils.append_child(unit, segment, 6)
            utils.close_children(unit, 4)
            units.append(unit)

        file_elem = utils.make_element(
            "file", {"original": config.FILE_ORIGINAL, "id": config.FILE_ID}
        )
        for unit in units:
            utils.append_child(file_elem, unit, 4)
        utils.close_children(file_elem, 2)

        xliff = utils.make_element(
            utils.XLIFF_TAG, {"version": utils.VERSION, "srcLang": utils.SOURCE_LANG}
        )
        utils.append_child(xliff, file_elem, 2)
        utils.close_children(xliff, 0)

        self.logger.info("Units written: %s", len(units))
        return utils.serialize(xliff)

    def load(self, content: str, url: str) -> Dict[str, List[i18n.Node]]:
        """Read translations from an XLIFF 2.0 document.

        :param content: Document text.
        :param url: Label used in error messages, usually the file path.
        :returns: Translated nodes keyed by the id of the source message.
        :raises Xliff2LoadError: With every structural and placeholder error
            found in the document.  No partial result is returned.
        """
        validator = Xliff2Validator(self.logger)
        nodes_by_msg_id, errors = validator.collect(content, url)
        if errors:
            raise Xliff2LoadError(errors)
        self.logger.info("Units loaded: %s", len(nodes_by_msg_id))
        return nodes_by_msg_id
