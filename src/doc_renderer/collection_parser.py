"""Typed deserialization of Postman collection documents.

This module converts the raw JSON of a Postman v2.1 collection into the
Folder/Request tree used by the renderer. Everything past this boundary
operates on typed fields only.
"""

import logging
from typing import Any, Dict, List, Optional

from .errors import CollectionFormatError
from .models import CollectionNode, Folder, Request, RequestInfo

logger = logging.getLogger(__name__)


def parse_collection(data: Dict[str, Any]) -> Folder:
    """Build the collection tree from a Postman collection object.

    The root Folder takes its name and description from ``info``; every
    entry of ``item`` becomes a child.

    Args:
        data: The ``collection`` object returned by the Postman API

    Returns:
        Root Folder of the collection

    Raises:
        CollectionFormatError: If the document structure is not as expected
    """
    if not isinstance(data, dict):
        raise CollectionFormatError("collection", "expected an object")

    info = data.get('info')
    if not isinstance(info, dict):
        raise CollectionFormatError("info", "expected an object")

    root = Folder(
        name=_require_name(info, "info"),
        description=_text(info.get('description')),
    )
    root.children = _parse_items(data.get('item'), "item")
    logger.debug(f"Parsed collection '{root.name}' with {len(root.children)} top-level item(s)")
    return root


def _parse_items(items: Any, location: str) -> List[CollectionNode]:
    if items is None:
        return []
    if not isinstance(items, list):
        raise CollectionFormatError(location, "expected a list of items")

    nodes: List[CollectionNode] = []
    for index, item in enumerate(items):
        item_location = f"{location}.{index}"
        if not isinstance(item, dict):
            raise CollectionFormatError(item_location, "expected an object")
        nodes.append(_parse_item(item, item_location))
    return nodes


def _parse_item(item: Dict[str, Any], location: str) -> CollectionNode:
    name = _require_name(item, location)

    # Folders have no request of their own
    if item.get('request') is None:
        return Folder(
            name=name,
            description=_text(item.get('description')),
            children=_parse_items(item.get('item'), f"{location}.item"),
        )

    return Request(
        name=name,
        request=_parse_request(item['request'], f"{location}.request"),
        description=_text(item.get('description')),
    )


def _parse_request(request: Any, location: str) -> RequestInfo:
    # Postman accepts a bare URL string as a GET request shorthand
    if isinstance(request, str):
        return RequestInfo(method="GET", url=request)

    if not isinstance(request, dict):
        raise CollectionFormatError(location, "expected an object or URL string")

    return RequestInfo(
        method=str(request.get('method') or ''),
        url=_url(request.get('url')),
        description=_text(request.get('description')),
    )


def _require_name(obj: Dict[str, Any], location: str) -> str:
    name = obj.get('name')
    if not isinstance(name, str):
        raise CollectionFormatError(location, "missing 'name'")
    return name


def _url(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, dict):
        return str(value.get('raw') or '')
    return str(value)


def _text(value: Any) -> Optional[str]:
    """Read a description that is either a string or ``{content, type}``."""
    if value is None:
        return None
    if isinstance(value, dict):
        content = value.get('content')
        return None if content is None else str(content)
    return str(value)
