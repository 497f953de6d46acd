"""Ice cream recipes API."""
