"""Library configuration.

Defaults can be overridden with an external ``TOML`` file so tools embedding
the codec can tune logging and the ``<file>`` element without patching the
code.  ``XLIFF2_CODEC_CONFIG`` is read first; when it is unset a
``config.toml`` next to this module is used if present.
"""

from __future__ import annotations

import os
import pytoml

_CONFIG_PATH = os.environ.get(
    "XLIFF2_CODEC_CONFIG",
    os.path.join(os.path.dirname(__file__), "config.toml"),
)

if os.path.exists(_CONFIG_PATH):
    with open(_CONFIG_PATH, "r", encoding="utf-8") as _cfg:
        _CONF = pytoml.load(_cfg)
else:
    _CONF = {}

# Attributes of the single ``<file>`` element wrapping every unit.
FILE_ORIGINAL: str = "ng.template"
FILE_ID: str = "ngi18n"

# Default log level used by :class:`~xliff2_codec.serializer.Xliff2`.
LOG_LEVEL: str = "INFO"

# Override with TOML values if provided
FILE_ORIGINAL = str(_CONF.get("FILE_ORIGINAL", FILE_ORIGINAL))
FILE_ID = str(_CONF.get("FILE_ID", FILE_ID))
LOG_LEVEL = _CONF.get("LOG_LEVEL", LOG_LEVEL)
