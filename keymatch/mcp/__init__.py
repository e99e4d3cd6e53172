"""MCP server exposing accelerator tools (requires the ``mcp`` extra)."""
