"""Check translated XLIFF 2.0 files without loading them.

Validation shares the extraction and conversion passes with
:meth:`~xliff2_codec.serializer.Xliff2.load` but reports problems instead of
raising, which suits tools that want to show translators everything wrong
with a file at once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from . import i18n_ast as i18n
from .converter import XmlToI18n
from .errors import I18nError
from .parser import Xliff2Parser


@dataclass
class ValidationReport:
    """Simple result object for :class:`Xliff2Validator`.

    ``details`` holds one human readable line per error, in document order.
    """

    passed: bool
    details: List[str]

    def __repr__(self) -> str:
        return f"ValidationReport(passed={self.passed}, details={self.details})"


class Xliff2Validator:
    """Validate the structure and placeholders of a translated file.

    Structural problems (version, unit ids, missing targets) come first,
    followed by placeholder problems found in each target.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def set_logger(self, logger: logging.Logger) -> None:
        """Swap out the logger used for reporting.

        :param logger: The logger instance to use.
        """

        self.logger = logger

    def collect(
        self, content: str, url: str
    ) -> Tuple[Dict[str, List[i18n.Node]], List[I18nError]]:
        """Extract and convert every translation in ``content``.

        Nothing is raised for problems in the document; each one is logged
        and returned so callers decide how strict to be.

        :param content: XLIFF 2.0 document text.
        :param url: Label used in error locations.
        :returns: ``(nodes_by_msg_id, errors)``.
        """
        fragments, errors = Xliff2Parser().parse(content, url)
        errors = list(errors)

        nodes_by_msg_id: Dict[str, List[i18n.Node]] = {}
        converter = XmlToI18n(url)
        for msg_id, fragment in fragments.items():
            nodes, conversion_errors = converter.convert(fragment)
            errors.extend(conversion_errors)
            nodes_by_msg_id[msg_id] = nodes

        for err in errors:
            self.logger.error("%s", err)
        return nodes_by_msg_id, errors

    def validate(self, content: str, url: str) -> ValidationReport:
        """Check ``content`` and summarize the outcome.

        :param content: XLIFF 2.0 document text.
        :param url: Label used in error locations.
        :returns: Object with ``passed`` boolean and message list.
        """
        self.logger.info("Start validate: %s", url)
        nodes_by_msg_id, errors = self.collect(content, url)
        self.logger.info("Units checked: %s", len(nodes_by_msg_id))
        self.logger.info("End validate")
        return ValidationReport(not errors, [str(err) for err in errors])
