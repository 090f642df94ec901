"""Read and write layout documents as JSON.

Format::

    {
      "name": "price-list",
      "stories": [
        {"id": "s1", "paragraphs": [{"text": "...", "scale": 100}]},
        {"id": "s2", "paragraphs": [{"text": "...", "scales": [100, 90, 90]}]}
      ],
      "containers": [
        {"id": "A1", "kind": "cell", "story": "s1", "width": 8, "max_lines": 2},
        {"id": "F1", "kind": "frame", "story": "s2", "width": 12, "max_lines": 4, "chain_index": 0}
      ]
    }

A paragraph carries either one ``scale`` for every character or a full
``scales`` list. Uniform paragraphs are written back with ``scale``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from autocondense.features.condense.domain import FULL_SCALE

from .model import Container, ContainerKind, LayoutDocument, Paragraph, Story


class DocumentFormatError(ValueError):
    """Raised when a layout document cannot be parsed."""

    def __init__(self, path: Path | None, detail: str) -> None:
        location = f"{path}: " if path is not None else ""
        super().__init__(f"{location}{detail}")
        self.path: Path | None = path


def _parse_paragraph(raw: Any, path: Path | None) -> Paragraph:
    if isinstance(raw, str):
        return Paragraph(text=raw)
    if not isinstance(raw, dict) or not isinstance(raw.get("text"), str):
        raise DocumentFormatError(path, f"invalid paragraph entry: {raw!r}")
    text: str = raw["text"]
    try:
        if "scales" in raw:
            scales = [float(value) for value in raw["scales"]]
        else:
            scales = [float(raw.get("scale", FULL_SCALE))] * len(text)
        return Paragraph(text=text, scales=scales)
    except (TypeError, ValueError) as exc:
        raise DocumentFormatError(path, f"invalid paragraph scales in {raw!r}: {exc}") from exc


def _entries(data: dict[str, Any], key: str, path: Path | None) -> list[dict[str, Any]]:
    entries = data.get(key, [])
    if not isinstance(entries, list):
        raise DocumentFormatError(path, f"{key!r} must be a list")
    for entry in entries:
        if not isinstance(entry, dict):
            raise DocumentFormatError(path, f"invalid {key} entry: {entry!r}")
    return entries


def document_from_dict(data: dict[str, Any], path: Path | None = None) -> LayoutDocument:
    """Build a ``LayoutDocument`` from decoded JSON."""

    document = LayoutDocument(name=str(data.get("name") or (path.stem if path else "untitled")))

    for raw_story in _entries(data, "stories", path):
        story_id = str(raw_story.get("id", ""))
        if not story_id:
            raise DocumentFormatError(path, "story without id")
        if story_id in document.stories:
            raise DocumentFormatError(path, f"duplicate story id {story_id!r}")
        raw_paragraphs = raw_story.get("paragraphs", [])
        if not isinstance(raw_paragraphs, list):
            raise DocumentFormatError(path, f"story {story_id!r} paragraphs must be a list")
        paragraphs = [_parse_paragraph(raw, path) for raw in raw_paragraphs]
        document.stories[story_id] = Story(id=story_id, paragraphs=paragraphs)

    for raw_container in _entries(data, "containers", path):
        try:
            container = Container(
                id=str(raw_container["id"]),
                kind=ContainerKind(raw_container.get("kind", ContainerKind.FRAME.value)),
                story_id=str(raw_container["story"]),
                width=float(raw_container["width"]),
                max_lines=int(raw_container["max_lines"]),
                chain_index=int(raw_container.get("chain_index", 0)),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise DocumentFormatError(path, f"invalid container entry {raw_container!r}: {exc}") from exc
        if container.id in document.containers:
            raise DocumentFormatError(path, f"duplicate container id {container.id!r}")
        if container.story_id not in document.stories:
            raise DocumentFormatError(
                path, f"container {container.id!r} refers to unknown story {container.story_id!r}"
            )
        document.containers[container.id] = container

    for story_id in document.stories:
        chain = document.chain(story_id)
        if any(c.kind is ContainerKind.CELL for c in chain) and len(chain) > 1:
            raise DocumentFormatError(path, f"cell story {story_id!r} cannot be linked")

    document.compose_all()
    return document


def document_to_dict(document: LayoutDocument) -> dict[str, Any]:
    """Serialise ``document`` to a JSON-compatible dictionary."""

    stories: list[dict[str, Any]] = []
    for story in document.stories.values():
        paragraphs: list[dict[str, Any]] = []
        for paragraph in story.paragraphs:
            entry: dict[str, Any] = {"text": paragraph.text}
            unique = set(paragraph.scales)
            if len(unique) <= 1:
                entry["scale"] = next(iter(unique)) if unique else FULL_SCALE
            else:
                entry["scales"] = list(paragraph.scales)
            paragraphs.append(entry)
        stories.append({"id": story.id, "paragraphs": paragraphs})

    containers = [
        {
            "id": container.id,
            "kind": container.kind.value,
            "story": container.story_id,
            "width": container.width,
            "max_lines": container.max_lines,
            "chain_index": container.chain_index,
        }
        for container in document.containers.values()
    ]
    return {"name": document.name, "stories": stories, "containers": containers}


def load_document(path: Path) -> LayoutDocument:
    """Load a layout document from ``path``."""

    try:
        with open(path, encoding="utf-8") as handle:
            data = json.load(handle)
    except json.JSONDecodeError as exc:
        raise DocumentFormatError(path, f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise DocumentFormatError(path, "top-level JSON value must be an object")
    return document_from_dict(data, path)


def save_document(document: LayoutDocument, path: Path) -> None:
    """Write ``document`` to ``path`` as indented UTF-8 JSON."""

    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(document_to_dict(document), ensure_ascii=False, indent=2)
    _ = path.write_text(content + "\n", encoding="utf-8")


__all__ = [
    "DocumentFormatError",
    "document_from_dict",
    "document_to_dict",
    "load_document",
    "save_document",
]
