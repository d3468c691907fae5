"""Schema models shared by the API layer."""
