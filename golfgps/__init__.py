"""Golf course geometry, lie classification and editor override service."""
