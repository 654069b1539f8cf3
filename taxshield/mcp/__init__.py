"""Tax Shield MCP server (optional extra: pip install tax-shield[mcp])."""
