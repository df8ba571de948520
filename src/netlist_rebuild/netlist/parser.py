"""
Netlist parsing.

Decodes ``.json`` / ``.enet`` netlist text into a :class:`NetlistDocument`.
The only structural check is that the top level is a JSON object; individual
components are decoded leniently so that one odd entry never rejects the file.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from netlist_rebuild.exceptions import ParseError, ParseErrorKind

from .models import (
    PROP_DESIGNATOR,
    PROP_DEVICE_NAME,
    PROP_SUPPLIER_PART,
    PROP_VALUE,
    ComponentRecord,
    NetlistDocument,
)

logger = logging.getLogger(__name__)

# File suffixes accepted for netlist input (without the dot)
NETLIST_EXTENSIONS = ("json", "enet")


def _text(value: Any) -> str:
    """Coerce a loosely typed field to a string; None becomes empty."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _decode_component(component_id: str, data: Any) -> ComponentRecord:
    if not isinstance(data, dict):
        logger.warning(f"Component {component_id} is not an object, treating as empty")
        return ComponentRecord()

    props = data.get("props")
    if not isinstance(props, dict):
        props = {}

    pins = data.get("pins")
    if not isinstance(pins, dict):
        pins = {}

    return ComponentRecord(
        designator=_text(props.get(PROP_DESIGNATOR)),
        device_name=_text(props.get(PROP_DEVICE_NAME)),
        value=_text(props.get(PROP_VALUE)),
        supplier_part=_text(props.get(PROP_SUPPLIER_PART)),
        pins={str(pin): _text(net) for pin, net in pins.items()},
    )


def parse_netlist(raw_text: str) -> NetlistDocument:
    """Parse netlist text.

    Args:
        raw_text: JSON text whose top level maps component ids to components

    Returns:
        NetlistDocument in declaration order

    Raises:
        ParseError: If the text is not JSON or the top level is not an object
    """
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise ParseError(
            "Netlist is not valid JSON",
            kind=ParseErrorKind.MALFORMED_FORMAT,
            context={"line": e.lineno, "column": e.colno, "reason": e.msg},
            suggestions=["Check that the file is a JSON or .enet netlist export"],
        ) from e
    except (ValueError, RecursionError) as e:
        # Well-formed but undecodable: oversized integer literals, excessive nesting
        raise ParseError(
            "Netlist JSON could not be decoded",
            kind=ParseErrorKind.MALFORMED_FORMAT,
            context={"reason": type(e).__name__},
        ) from e

    if not isinstance(data, dict):
        raise ParseError(
            "Netlist must be a JSON object mapping component ids to components",
            kind=ParseErrorKind.MALFORMED_FORMAT,
            context={"got": "null" if data is None else type(data).__name__},
        )

    entries = tuple(
        (str(component_id), _decode_component(str(component_id), component))
        for component_id, component in data.items()
    )
    logger.debug(f"Parsed netlist with {len(entries)} components")
    return NetlistDocument(entries=entries)


def parse_netlist_bytes(raw: bytes) -> NetlistDocument:
    """Decode UTF-8 netlist bytes (a leading BOM is tolerated) and parse them."""
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(
            "Netlist is not UTF-8 text",
            kind=ParseErrorKind.MALFORMED_FORMAT,
            context={"position": e.start},
        ) from e
    return parse_netlist(text)


def serialize_netlist(doc: NetlistDocument, indent: int | None = 2) -> str:
    """Serialize a document back to netlist JSON."""
    return json.dumps(doc.to_dict(), indent=indent, ensure_ascii=False)
