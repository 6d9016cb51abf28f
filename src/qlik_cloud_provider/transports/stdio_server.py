# Qlik Cloud Provider
# File: transports/stdio_server.py
# Version: v1

"""STDIO entrypoint for the Qlik Cloud provider.

This is the script behind the ``qlik-cloud-provider`` console command.

It configures the provider from QLIK_* environment variables, registers one
MCP tool per lifecycle operation and runs the built-in stdio transport.
"""

from __future__ import annotations

import logging
import os
import sys

from mcp.server.fastmcp import FastMCP

from ..provider import QlikProvider
from ..tools import register_all_tools

logger = logging.getLogger(__name__)


def main() -> None:
    """Synchronous entrypoint for console_scripts."""
    # stdout carries the protocol; logs go to stderr.
    logging.basicConfig(
        level=os.getenv("QLIK_LOG_LEVEL", "INFO").upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    provider = QlikProvider()
    diags = provider.configure({}, os.environ)
    if diags.has_error():
        for diag in diags.errors():
            logger.error("%s: %s", diag.summary, diag.detail)
        raise SystemExit(1)

    mcp = FastMCP("qlik-cloud-provider")
    register_all_tools(mcp, provider)

    # Let FastMCP handle stdio + event loop setup.
    mcp.run()


if __name__ == "__main__":
    main()
