"""Render alert batches into Slack webhook messages.

Alerts are grouped by status, cut into chunks of ``CHUNK_SIZE`` (Slack caps
the number of blocks per message) and every chunk becomes one message. The
functions here are pure: the same batch and settings always produce the same
messages.
"""

from collections.abc import Sequence
from datetime import datetime, timedelta, timezone
from typing import Any, TypeVar

from alertslack import blocks
from alertslack.buttons import build_buttons
from alertslack.config import Settings
from alertslack.humanize import extract_value
from alertslack.models.alert import Alert, AlertBatch
from alertslack.models.message import OutboundMessage

T = TypeVar("T")

CHUNK_SIZE = 7
LABEL_FIELDS_PER_BLOCK = 10

FIRING_EMOJI = "🆘"
RESOLVED_EMOJI = "🟢"

RFC822 = "%d %b %y %H:%M"
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_FNV32_OFFSET = 0x811C9DC5
_FNV32_PRIME = 0x01000193


def group_by_status(alerts: Sequence[Alert]) -> dict[str, list[Alert]]:
    """Group alerts by status, groups ordered by first appearance."""
    grouped: dict[str, list[Alert]] = {}
    for alert in alerts:
        grouped.setdefault(alert.status, []).append(alert)
    return grouped


def chunk_by(items: Sequence[T], size: int) -> list[list[T]]:
    if size <= 0:
        raise ValueError("chunk size must be positive")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def label_hash(labels: dict[str, str]) -> str:
    """FNV-1a 32-bit hash of the sorted label pairs, as a decimal string."""
    text = "".join(name + value for name, value in sorted(labels.items()))
    h = _FNV32_OFFSET
    for byte in text.encode("utf-8"):
        h ^= byte
        h = (h * _FNV32_PRIME) & 0xFFFFFFFF
    return str(h)


def _zone(moment: datetime) -> str:
    """Zone abbreviation, or a numeric offset like +0200 when the zone has no name."""
    if moment.utcoffset() == timedelta(0):
        return "UTC"
    name = moment.tzname()
    if name and name.isalpha():
        return name
    return moment.strftime("%z")


def format_time(moment: datetime | None, date_macros: bool = False) -> str:
    """RFC 822 style time; a missing time renders as the zero time."""
    if moment is None:
        moment = ZERO_TIME
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    fallback = f"{moment.strftime(RFC822)} {_zone(moment)}"
    if not date_macros:
        return fallback
    return f"<!date^{int(moment.timestamp())}^{{date_short_pretty}} {{time}}|{fallback}>"


def _quote_lines(text: str) -> str:
    lines = [line.removesuffix("\r") for line in text.split("\n")]
    if lines[-1] == "":
        lines.pop()
    return "".join(f"> {line} \n" for line in lines)


def _label_blocks(alert: Alert, mention_label: str) -> list[blocks.Block]:
    fields = []
    for name, value in sorted(alert.labels.items()):
        if name == mention_label:
            value = "@" + value
        fields.append(blocks.mrkdwn(f"*{name}*:\n`{value}`"))
    return [blocks.section(fields=chunk) for chunk in chunk_by(fields, LABEL_FIELDS_PER_BLOCK)]


def _context_elements(alert: Alert, date_macros: bool) -> list[dict[str, Any]]:
    element = blocks.mrkdwn if date_macros else blocks.plain_text
    elements = []
    if alert.value_string:
        elements.append(blocks.plain_text(f"Value: {extract_value(alert.value_string)}"))
    elements.append(element(f"Started at: {format_time(alert.starts_at, date_macros)}"))
    if alert.has_ended:
        elements.append(element(f"Ended at: {format_time(alert.ends_at, date_macros)}"))
    return elements


def render_alert(alert: Alert, settings: Settings) -> list[blocks.Block]:
    """Blocks for a single alert: header, description, labels, buttons, context."""
    emoji = RESOLVED_EMOJI if alert.is_resolved else FIRING_EMOJI
    alert_blocks = [blocks.header(f"{emoji} {alert.summary}")]

    if alert.description:
        alert_blocks.append(blocks.section(text=blocks.mrkdwn(_quote_lines(alert.description))))

    alert_blocks.extend(_label_blocks(alert, settings.mention_label))

    block_hash = label_hash(alert.labels)
    alert_blocks.append(blocks.actions(f"actions-{block_hash}", build_buttons(alert, settings)))
    alert_blocks.append(
        blocks.context(f"context-{block_hash}", _context_elements(alert, settings.slack_date_macros))
    )
    return alert_blocks


def render_chunk(alerts: Sequence[Alert], channel: str, username: str, settings: Settings) -> OutboundMessage:
    fired = ""
    resolved = ""
    message_blocks: list[blocks.Block] = []

    for i, alert in enumerate(alerts):
        if alert.is_resolved:
            resolved += f"[{alert.summary}] "
        else:
            fired += f"[{alert.summary}] "

        if i != 0:
            message_blocks.append(blocks.divider())
        message_blocks.extend(render_alert(alert, settings))

    if fired:
        preview = f"Fired: {fired}"
    elif resolved:
        preview = f"Resolved: {resolved}"
    else:
        preview = ""

    return OutboundMessage(channel=channel, username=username, text=preview, blocks=message_blocks)


def render(batch: AlertBatch, channel: str, username: str, settings: Settings) -> list[OutboundMessage]:
    """Turn one alert batch into the ordered list of Slack messages to send."""
    messages = []
    for alerts in group_by_status(batch.alerts).values():
        for chunk in chunk_by(alerts, CHUNK_SIZE):
            messages.append(render_chunk(chunk, channel, username, settings))
    return messages
