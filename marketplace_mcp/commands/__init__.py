"""Click commands for the marketplace-mcp CLI."""
