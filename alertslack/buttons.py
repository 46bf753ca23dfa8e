"""Action buttons attached to each rendered alert.

Every helper returns a button element or ``None`` when the button does not
apply to the alert. Link construction for the external Alertmanager mode is
best-effort: a link that cannot be built drops its button and is logged.
"""

import json
import logging
from typing import Any
from urllib.parse import parse_qs, quote, urlencode, urlsplit

from alertslack import blocks
from alertslack.config import Settings
from alertslack.errors import BestEffortParseError
from alertslack.models.alert import Alert

logger = logging.getLogger(__name__)

Button = dict[str, Any]

EXPR_PARAM = "g0.expr"


def _sorted_labels(alert: Alert) -> list[tuple[str, str]]:
    return sorted(alert.labels.items())


def alert_list_url(base_url: str, alert: Alert) -> str:
    search = ",".join(f"{name}={value}" for name, value in _sorted_labels(alert))
    return f"{base_url}/alerting/list?search={quote(search, safe='')}"


def explore_url(base_url: str, datasource: str, generator_url: str) -> str:
    """Build an Explore link from the query expression in a generator URL.

    Raises:
        BestEffortParseError: the generator URL cannot be parsed or carries
            no query expression.
    """
    try:
        query = urlsplit(generator_url).query
    except ValueError as e:
        raise BestEffortParseError(f"cannot parse generator URL {generator_url!r}: {e}") from e

    expressions = parse_qs(query).get(EXPR_PARAM)
    if not expressions or not expressions[0]:
        raise BestEffortParseError(f"no {EXPR_PARAM} in generator URL {generator_url!r}")

    left = {
        "datasource": datasource,
        "queries": [{"refId": "A", "expr": expressions[0]}],
        "range": {"from": "now-1h", "to": "now"},
    }
    encoded = quote(json.dumps(left, separators=(",", ":")), safe="")
    return f"{base_url}/explore?left={encoded}"


def silence_url(base_url: str, alertmanager: str, alert: Alert) -> str:
    params = [("alertmanager", alertmanager)]
    params.extend(("matcher", f"{name}={value}") for name, value in _sorted_labels(alert))
    return f"{base_url}/alerting/silence/new?{urlencode(params)}"


def details_button(alert: Alert, settings: Settings) -> Button:
    if settings.external_mode:
        url = alert_list_url(settings.external_base_url, alert)
    else:
        url = alert.generator_url
    return blocks.button(
        "generator",
        ":chart_with_upwards_trend: Details",
        url=url,
        style=blocks.STYLE_PRIMARY,
    )


def explore_button(alert: Alert, settings: Settings) -> Button | None:
    if not settings.external_mode:
        return None
    try:
        url = explore_url(settings.external_base_url, settings.explore_datasource, alert.generator_url)
    except BestEffortParseError as e:
        logger.warning(f"Skipping explore button: {e}")
        return None
    return blocks.button("explore", ":telescope: Explore", url=url)


def runbook_button(alert: Alert) -> Button | None:
    if alert.is_resolved or not alert.runbook_url:
        return None
    return blocks.button("runbook", ":page_with_curl: Runbook", url=alert.runbook_url)


def silence_button(alert: Alert, settings: Settings) -> Button | None:
    if alert.is_resolved or not settings.silence_buttons:
        return None
    if settings.external_mode:
        url = silence_url(settings.external_base_url, settings.alertmanager_name, alert)
    else:
        url = alert.silence_url
    if not url:
        logger.warning(f"Skipping silence button: alert {alert.fingerprint or alert.summary!r} has no silence URL")
        return None
    return blocks.button("silence", ":no_bell: Silence", url=url, style=blocks.STYLE_DANGER)


def build_buttons(alert: Alert, settings: Settings) -> list[Button]:
    """Buttons for one alert, in display order."""
    candidates = [
        details_button(alert, settings),
        explore_button(alert, settings),
        runbook_button(alert),
        silence_button(alert, settings),
    ]
    return [b for b in candidates if b is not None]
