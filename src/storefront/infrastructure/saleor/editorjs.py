"""Plain-text rendering of Editor.js rich text (product descriptions)."""

from __future__ import annotations

import json


def editorjs_to_text(description: str | None) -> str | None:
    """Render paragraph blocks as text separated by blank lines.

    Other block types are dropped. A description that is not Editor.js
    JSON is returned unchanged.
    """
    if not description:
        return None

    try:
        document = json.loads(description)
    except ValueError:
        return description

    blocks = document.get("blocks") if isinstance(document, dict) else None
    if not isinstance(blocks, list):
        return description

    paragraphs = [
        block["data"]["text"]
        for block in blocks
        if isinstance(block, dict)
        and block.get("type") == "paragraph"
        and isinstance(block.get("data"), dict)
        and isinstance(block["data"].get("text"), str)
    ]
    return "\n\n".join(paragraphs)
