"""
Query Rewriting for Purchase Order Item Reads

Some navigation properties of the purchase order item are virtual: the core
service knows nothing about them and they are resolved locally after the
read (locations, arrival times). They have to be taken out of $expand and
$select before the request is forwarded, otherwise the core service rejects
the whole query.

Clients send the lists either plain ("a,b/c") or percent-encoded
("a%2Cb%2Fc"); the rewriter keeps whichever separator the client used.
"""
import re
from typing import List, Tuple
from urllib.parse import unquote

RECEIVING_LOCATION = "receivingLocation"
SUPPLIER_LOCATION = "supplierLocation"
PLANT_LOCATION = "plantLocation"
ARRIVAL_TIMES = "arrivalTimes"

LOCATION_FIELDS: Tuple[str, ...] = (RECEIVING_LOCATION, SUPPLIER_LOCATION, PLANT_LOCATION)
VIRTUAL_FIELDS: Tuple[str, ...] = LOCATION_FIELDS + (ARRIVAL_TIMES,)

COMMA = ","
COMMA_ENCODED = "%2C"
DIV = "/"
DIV_ENCODED = "%2F"

_REWRITTEN_OPTIONS = ("$expand", "$select")
_LIST_SEPARATOR = re.compile(f"({re.escape(COMMA)}|{COMMA_ENCODED})", re.IGNORECASE)
_PATH_SEPARATOR = re.compile(f"({re.escape(DIV)}|{DIV_ENCODED})", re.IGNORECASE)


def _split_query(uri: str) -> Tuple[str, List[str]]:
    path, _, query = uri.partition("?")
    return path, [param for param in query.split("&") if param]


def _option_name(param: str) -> str:
    return unquote(param.partition("=")[0]).strip()


def _path_segments(item: str) -> List[str]:
    return [part.strip() for part in unquote(item).split(DIV)]


def _truncate_at_virtual(item: str) -> str:
    """
    Cut a navigation path before its first virtual segment, keeping the
    client's encoding: "inboundDeliveryItems%2FarrivalTimes" becomes
    "inboundDeliveryItems", "receivingLocation/locationId" becomes "".
    """
    tokens = _PATH_SEPARATOR.split(item)
    segments = tokens[0::2]
    for index, segment in enumerate(segments):
        if unquote(segment).strip() in VIRTUAL_FIELDS:
            # segment i is preceded by 2*i tokens; drop the separator before it too
            return "".join(tokens[:max(2 * index - 1, 0)])
    return item


def _strip_virtual_items(param: str) -> str:
    """Drop virtual segments from one $expand/$select option; '' if nothing is left."""
    name, _, value = param.partition("=")
    tokens = _LIST_SEPARATOR.split(value)
    items = tokens[0::2]
    separators = tokens[1::2]
    separator = separators[0] if separators else COMMA

    kept = []
    seen = set()
    for item in items:
        item = _truncate_at_virtual(item)
        key = DIV.join(_path_segments(item))
        if not item.strip() or key in seen:
            continue
        seen.add(key)
        kept.append(item)
    if not kept:
        return ""
    return f"{name}={separator.join(kept)}"


def remove_unnecessary_expands(uri: str) -> str:
    """
    Remove receiving/supplier/plant location and arrival time segments from
    the $expand and $select options of a service-relative URI. A path through
    a real navigation property keeps that property
    ("inboundDeliveryItems/arrivalTimes" is forwarded as "inboundDeliveryItems").

    Separators left behind are collapsed and an option that ends up empty is
    dropped together with its '&'. Every other part of the URI is returned
    byte for byte.
    """
    path, params = _split_query(uri)
    if not params:
        return uri

    rewritten = []
    for param in params:
        if _option_name(param) in _REWRITTEN_OPTIONS:
            param = _strip_virtual_items(param)
        if param:
            rewritten.append(param)

    if not rewritten:
        return path
    return f"{path}?{'&'.join(rewritten)}"


def requested_paths(uri: str) -> List[str]:
    """Decoded navigation paths listed in $expand and $select."""
    _, params = _split_query(uri)
    paths = []
    for param in params:
        if _option_name(param) not in _REWRITTEN_OPTIONS:
            continue
        value = param.partition("=")[2]
        paths.extend(
            unquote(item).strip()
            for item in _LIST_SEPARATOR.split(value)[0::2]
            if item.strip()
        )
    return paths


def _is_requested(uri: str, fields: Tuple[str, ...]) -> bool:
    return any(
        part in fields
        for path in requested_paths(uri)
        for part in path.split(DIV)
    )


def is_location_requested(uri: str) -> bool:
    """True when any receiving, supplier or plant location is expanded."""
    return _is_requested(uri, LOCATION_FIELDS)


def is_arrival_times_requested(uri: str) -> bool:
    return _is_requested(uri, (ARRIVAL_TIMES,))
