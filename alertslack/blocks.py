"""Slack Block Kit element builders."""

from typing import Any

Block = dict[str, Any]

STYLE_PRIMARY = "primary"
STYLE_DANGER = "danger"


def plain_text(text: str, emoji: bool = True) -> dict[str, Any]:
    return {"type": "plain_text", "text": text, "emoji": emoji}


def mrkdwn(text: str) -> dict[str, Any]:
    return {"type": "mrkdwn", "text": text}


def header(text: str) -> Block:
    return {"type": "header", "text": plain_text(text)}


def divider() -> Block:
    return {"type": "divider"}


def section(text: dict[str, Any] | None = None, fields: list[dict[str, Any]] | None = None) -> Block:
    block: Block = {"type": "section"}
    if text is not None:
        block["text"] = text
    if fields:
        block["fields"] = fields
    return block


def button(action_id: str, label: str, url: str = "", style: str = "") -> dict[str, Any]:
    """Link button. An empty style renders as Slack's default button."""
    element: dict[str, Any] = {
        "type": "button",
        "action_id": action_id,
        "text": plain_text(label),
    }
    if url:
        element["url"] = url
    if style:
        element["style"] = style
    return element


def actions(block_id: str, elements: list[dict[str, Any]]) -> Block:
    return {"type": "actions", "block_id": block_id, "elements": elements}


def context(block_id: str, elements: list[dict[str, Any]]) -> Block:
    return {"type": "context", "block_id": block_id, "elements": elements}
