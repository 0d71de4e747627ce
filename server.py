from core.config import ConfigurationError, Settings, get_config, load_settings
from core.logging_config import setup_logging
from dotenv import find_dotenv, load_dotenv
from mcp.server.fastmcp import FastMCP
from pathlib import Path
from importlib import import_module
import logging
import pkgutil
import inspect
import sys
from typing import List, Optional

logger = logging.getLogger("server")

TOOLS_PACKAGE = "tools"

###################################################### MCP Tools ######################################################


def register_tools(mcp: FastMCP, settings: Settings, tools_path: Optional[Path] = None) -> List[str]:
    """Import every public module of the tools package and register what its `get_tools` returns."""
    logger.info("Loading MCP tools...")
    if tools_path is None:
        tools_path = Path(__file__).resolve().parent / TOOLS_PACKAGE

    registered_tool_names: List[str] = []
    if not tools_path.is_dir():
        logger.warning(f"Tools directory {tools_path} not found; no tools registered")
        return registered_tool_names

    for finder, name, ispkg in pkgutil.iter_modules([str(tools_path)]):
        if name.startswith("_"):
            continue
        module_name = f"{TOOLS_PACKAGE}.{name}"
        mod = import_module(module_name)
        logger.info(f"Imported tools module: {module_name}")
        if not hasattr(mod, "get_tools"):
            continue

        if len(inspect.signature(mod.get_tools).parameters) > 0:
            mapping = mod.get_tools(settings)
        else:
            mapping = mod.get_tools()

        # mapping: tool_name -> { 'func': callable, 'title': str, 'description': str }
        for tool_name, meta in mapping.items():
            if isinstance(meta, dict):
                func = meta.get("func")
                title = meta.get("title")
                description = meta.get("description")
            else:
                func, title, description = meta, None, None

            if not func:
                logger.warning(f"Tool {tool_name} in {module_name} did not provide a callable; skipping")
                continue

            mcp.add_tool(func, name=tool_name, title=title, description=description)
            logger.info(f"Registered tool '{tool_name}' (title={title}) from {module_name}")
            registered_tool_names.append(tool_name)

    logger.info(f"Total tools registered: {len(registered_tool_names)} , tool names: {registered_tool_names}")
    return registered_tool_names


def create_server(settings: Settings) -> FastMCP:
    mcp = FastMCP(settings.server_name)
    logger.info(f"MCP server instance created: {settings.server_name} {settings.server_version}")
    register_tools(mcp, settings)
    return mcp

###################################################### Startup ######################################################


def main() -> None:
    cfg = get_config() or {}
    log_cfg = cfg.get("logging", {}) or {}
    setup_logging(
        log_file_name=log_cfg.get("file_name", "server.log"),
        level=log_cfg.get("level", "INFO"),
    )
    logger.info("MCP server bootstrap starting.")

    # Variables already exported in the environment win over .env
    load_dotenv(find_dotenv(usecwd=True))
    try:
        settings = load_settings(config=cfg)
    except ConfigurationError as e:
        logger.critical(f"FATAL ERROR: {e}")
        sys.exit(1)

    mcp = create_server(settings)

    logger.info(f"Base API URL: {settings.base_api_url}")
    if settings.uses_api_key:
        logger.info("Using API Key authentication.")
    else:
        logger.info("No API Key provided (running without authentication).")
    logger.info("Tools registered and server ready.")

    logger.info("Starting MCP server on stdio...")
    try:
        mcp.run(transport="stdio")
        logger.info("MCP server shut down.")
    except Exception:
        logger.exception("Unhandled exception running MCP server")
        print("Unhandled exception occurred. See logs/ for details.", file=sys.stderr)
        sys.exit(-1)


if __name__ == "__main__":
    main()
