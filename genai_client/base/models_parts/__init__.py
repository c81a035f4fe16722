"""Model parts package; import from ``genai_client.base.models``."""
