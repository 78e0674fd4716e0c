"""Rendering of Postman collections into Markdown documentation trees.

This package parses collection JSON into a typed Folder/Request tree and
writes it out as one Markdown file per request, mirroring folders as
directories.
"""

from .collection_parser import parse_collection
from .errors import (
    RendererError,
    PathConflictError,
    FilesystemError,
    CollectionFormatError,
)
from .models import CollectionNode, Folder, Request, RequestInfo, RenderedDocument
from .output_directory import prepare_output_directory
from .sanitizer import sanitize
from .tree_renderer import TreeRenderer, ensure_directory

__all__ = [
    'parse_collection',
    'RendererError',
    'PathConflictError',
    'FilesystemError',
    'CollectionFormatError',
    'CollectionNode',
    'Folder',
    'Request',
    'RequestInfo',
    'RenderedDocument',
    'prepare_output_directory',
    'sanitize',
    'TreeRenderer',
    'ensure_directory',
]
