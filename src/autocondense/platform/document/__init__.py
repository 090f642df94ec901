"""Layout document host: model, JSON codec and condense adapter."""

from .adapter import LayoutDocumentAdapter, TextSelection
from .io import DocumentFormatError, document_from_dict, document_to_dict, load_document, save_document
from .model import (
    Container,
    ContainerKind,
    LayoutDocument,
    Paragraph,
    Story,
    StoryLayout,
    advance_width,
    count_lines,
)

__all__ = [
    "Container",
    "ContainerKind",
    "DocumentFormatError",
    "LayoutDocument",
    "LayoutDocumentAdapter",
    "Paragraph",
    "Story",
    "StoryLayout",
    "TextSelection",
    "advance_width",
    "count_lines",
    "document_from_dict",
    "document_to_dict",
    "load_document",
    "save_document",
]
