"""
Payload serialization for work records.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import json

from ..constants import PAYLOAD_ENCODING
from ..exceptions import SerializationError
from ..models import WorkPayload


def serialize_payload(payload: WorkPayload) -> bytes:
    """
    Encode a payload as JSON bytes.

    Args:
        payload: String-keyed value bag

    Returns:
        UTF-8 encoded JSON

    Raises:
        SerializationError: If payload is not a dict or holds non-JSON values
    """
    if not isinstance(payload, dict):
        raise SerializationError(
            f"Payload must be a mapping of named values, got {type(payload).__name__}"
        )
    try:
        return json.dumps(payload, allow_nan=False).encode(PAYLOAD_ENCODING)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Payload cannot be serialized: {e}") from e


def deserialize_payload(data: bytes | str) -> WorkPayload:
    """
    Decode JSON bytes into a payload.

    Args:
        data: Bytes as stored on the node

    Returns:
        Decoded payload (empty dict for an empty node)

    Raises:
        SerializationError: If data is not valid JSON or not an object
    """
    if not data:
        return {}
    try:
        text = data.decode(PAYLOAD_ENCODING) if isinstance(data, bytes) else data
        decoded = json.loads(text)
    except (UnicodeDecodeError, ValueError) as e:
        raise SerializationError(f"Payload cannot be deserialized: {e}") from e

    if not isinstance(decoded, dict):
        raise SerializationError(
            f"Payload must decode to an object, got {type(decoded).__name__}"
        )
    return decoded
