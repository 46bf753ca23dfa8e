"""alertslack - relay Grafana alert webhooks to Slack."""

__version__ = "0.4.0"
