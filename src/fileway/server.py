# SPDX-License-Identifier: MIT
"""fileway MCP server - browse and manage storage accounts over MCP.

This module initializes the FastMCP server and registers all tools.
Business logic is organized into submodules under tools/.
"""

from typing import Literal

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from .config import logger
from .descriptions import (
    CONFIGURE_ACCOUNT,
    COPY,
    DELETE,
    DRIVER_OPTIONS,
    GET_LINK,
    LIST_ACCOUNTS,
    LIST_DRIVERS,
    LIST_FOLDER,
    MAKE_FOLDER,
    MOVE,
    RESOLVE,
    STAT,
    UPLOAD,
)
from .tools import accounts, files

mcp = FastMCP("fileway")


# ==================== ACCOUNT TOOLS ====================
@mcp.tool(description=LIST_DRIVERS)
async def list_drivers():
    return await accounts.list_drivers()


@mcp.tool(description=DRIVER_OPTIONS)
async def driver_options(driver: str):
    return await accounts.driver_options(driver)


@mcp.tool(description=CONFIGURE_ACCOUNT)
async def configure_account(
    name: str,
    driver: str,
    root_folder: str,
    order_by: Literal["", "name", "size", "updated_at"] = "",
    order_direction: Literal["", "ASC", "DESC"] = "",
    index: int = 0,
):
    return await accounts.configure_account(name, driver, root_folder, order_by, order_direction, index)


@mcp.tool(description=LIST_ACCOUNTS)
async def list_accounts():
    return await accounts.list_accounts()


# ==================== FILE TOOLS ====================
@mcp.tool(description=STAT)
async def stat(account: str, path: str = ""):
    return await files.stat(account, path)


@mcp.tool(description=LIST_FOLDER)
async def list_folder(account: str, path: str = ""):
    return await files.list_folder(account, path)


@mcp.tool(description=RESOLVE)
async def resolve(account: str, path: str = ""):
    return await files.resolve(account, path)


@mcp.tool(description=GET_LINK)
async def get_link(account: str, path: str):
    return await files.get_link(account, path)


@mcp.tool(description=MAKE_FOLDER)
async def make_folder(account: str, path: str):
    return await files.make_folder(account, path)


@mcp.tool(description=MOVE)
async def move(account: str, src: str, dst: str):
    return await files.move(account, src, dst)


@mcp.tool(description=COPY)
async def copy(account: str, src: str, dst: str):
    return await files.copy(account, src, dst)


@mcp.tool(description=DELETE)
async def delete(account: str, path: str):
    return await files.delete(account, path)


@mcp.tool(description=UPLOAD)
async def upload(account: str, path: str, name: str, content_base64: str):
    return await files.upload(account, path, name, content_base64)


# ==================== SERVER ENTRYPOINT ====================
def main():
    """Run the MCP server over stdio.

    Accounts are loaded lazily from the store configured by
    FILEWAY_ACCOUNTS_FILE when tools are called.
    """
    load_dotenv()  # Load environment variables at runtime
    logger.info("Starting fileway MCP server over stdio")
    mcp.run()


if __name__ == "__main__":
    main()
