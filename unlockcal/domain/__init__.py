"""Classification, filtering and ordering of parsed calendar events."""
