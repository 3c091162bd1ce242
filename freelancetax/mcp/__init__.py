"""Freelance Tax MCP server."""
