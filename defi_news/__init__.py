"""DeFi news cache with live search fallback, served over MCP."""

__version__ = "1.0.0"
