"""Left OverCook HTTP API."""
