"""ACP marketplace API client package."""
