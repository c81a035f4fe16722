"""Cancellation implementation parts; import from ``genai_client.base.cancellation``."""
