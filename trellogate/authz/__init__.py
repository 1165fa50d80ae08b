"""Authorization / access-control layer (YAML allow-list driven).

This package is intentionally lightweight so admins can control which boards
tools may touch. Cards and lists inherit the decision of their owning board.
"""
