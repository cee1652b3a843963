#!/usr/bin/env python3
"""
MCP server for the fitness coach engine.
This server exposes program scheduling, workout generation and session history tools.
"""

import logging

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from fitness_coach.catalog.source import load_default_catalog
from fitness_coach.coach_client import CoachClient
from fitness_coach.config import Config, configure_logging
from fitness_coach.tools import register_all_tools

load_dotenv()

logger = logging.getLogger(__name__)


def create_server() -> FastMCP:
    """Build the MCP server with the catalog and collaborators wired in."""
    mcp = FastMCP("fitness-coach")

    catalog = load_default_catalog()
    if not len(catalog):
        logger.warning("Exercise catalog is empty; workouts will use fallback exercises")

    coach_client = CoachClient() if Config.COACH_BASE_URL else None
    if coach_client is None:
        logger.warning("COACH_BASE_URL not set; coaching text and program sync are disabled")

    register_all_tools(mcp, catalog, coach_client)
    return mcp


def main() -> None:
    """Main function to start the fitness coach MCP server."""
    configure_logging()
    logger.info("Starting fitness coach MCP server")
    create_server().run(transport="stdio")


if __name__ == "__main__":
    main()
