"""
Metadata serialization.

The collection endpoint stores metadata as a string column, so the mapping
is encoded to compact JSON text here and sent as a plain string field.
"""

import json
import logging
from typing import Any, Mapping, Optional

from .errors import MetadataSerializationFailed

_LOG = logging.getLogger(__name__)


def _encode(metadata: Mapping[str, Any]) -> str:
    """Encode *metadata* as canonical JSON.

    Strings, numbers, booleans and nested containers are kept as JSON values;
    anything else is stored as its ``str()`` form.

    Raises:
        MetadataSerializationFailed: on non-string keys, non-finite floats,
            circular or too-deep nesting, or values whose ``str()`` fails.
    """
    try:
        if not all(isinstance(key, str) for key in metadata):
            raise MetadataSerializationFailed("Metadata keys must be strings")
        return json.dumps(
            dict(metadata),
            default=str,
            ensure_ascii=False,
            allow_nan=False,
            sort_keys=True,
            separators=(",", ":"),
        )
    except MetadataSerializationFailed:
        raise
    except Exception as e:
        raise MetadataSerializationFailed(str(e)) from e


def metadata_to_json_string(metadata: Optional[Mapping[str, Any]]) -> Optional[str]:
    """
    Serialize a metadata mapping into a JSON string.

    Args:
        metadata: Optional mapping, e.g. ``{"plan": "premium"}``

    Returns:
        JSON text, or None when metadata is missing, empty or not encodable
    """
    if not metadata:
        return None
    try:
        return _encode(metadata)
    except MetadataSerializationFailed as e:
        _LOG.warning("Error serializing metadata to JSON string: %s", e)
        return None
