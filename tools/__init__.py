# tools package for MCP server tools
# Modules in this package should expose a `get_tools(settings) -> dict[str, dict]`
# mapping tool name -> {"func": callable, "title": str, "description": str}.
# The server imports every public module here and registers the returned callables as MCP tools.
__all__ = []
