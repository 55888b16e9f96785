"""MCP transport for the URL fetcher."""
