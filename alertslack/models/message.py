"""Outbound Slack message model."""

from typing import Any

from pydantic import BaseModel, Field


class OutboundMessage(BaseModel):
    """One Slack webhook message rendered from a chunk of alerts."""

    channel: str
    username: str
    text: str = Field(default="", description="Notification preview text")
    blocks: list[dict[str, Any]] = Field(default_factory=list, description="Block Kit blocks")

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "channel": self.channel,
            "username": self.username,
            "blocks": self.blocks,
        }
        if self.text:
            payload["text"] = self.text
        return payload
