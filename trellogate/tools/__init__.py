"""Access-gated Trello tools.

One handler per operation, each taking a validated request model. `run_tool`
dispatches by name and returns a `ToolResult`.
"""
