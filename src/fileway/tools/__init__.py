# SPDX-License-Identifier: MIT
"""MCP tools for browsing and managing storage accounts.

This package contains the FastMCP tool implementations organized by category:
- accounts: driver discovery and account configuration
- files: browse, link, and mutate files within an account

Tools are registered with FastMCP in ``fileway.server``.
"""
