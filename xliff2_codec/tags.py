"""Classification of markup tags into XLIFF 2.0 placeholder types."""

from __future__ import annotations

_TAG_TYPES = {
    "br": "fmt",
    "b": "fmt",
    "i": "fmt",
    "u": "fmt",
    "img": "image",
    "a": "link",
}


def get_type_for_tag(tag: str) -> str:
    """Return the ``type`` attribute used for ``tag`` on ``<ph>``/``<pc>``.

    Lookup is case-insensitive and unknown tags map to ``"other"``.

    :param tag: Source markup tag name such as ``"b"`` or ``"IMG"``.
    :returns: One of ``fmt``, ``image``, ``link`` or ``other``.
    """
    return _TAG_TYPES.get(tag.lower(), "other")
