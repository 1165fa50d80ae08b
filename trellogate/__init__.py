"""Board-scoped access control in front of Trello tool operations."""
