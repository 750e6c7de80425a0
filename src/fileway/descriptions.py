# SPDX-License-Identifier: MIT
"""Tool descriptions for MCP server. Optimized for token efficiency."""

# ==================== ACCOUNT TOOL DESCRIPTIONS ====================

LIST_DRIVERS = """List registered storage drivers.

Returns: name, only_proxy (downloads always streamed through the service)"""

DRIVER_OPTIONS = """List configuration fields a driver accepts.

Params: driver (from list_drivers)

Returns: name, label, type (string|select), values (select choices), required"""

CONFIGURE_ACCOUNT = """Create or update a storage account and check the backend is reachable.

Params: name, driver, root_folder, order_by (name|size|updated_at), order_direction (ASC|DESC), index

On failure the account is still saved with the reason in status.

Example: configure_account("home", "Local", "/srv/files", order_by="size", order_direction="DESC")"""

LIST_ACCOUNTS = """List stored accounts with their status ("work" when usable)."""


# ==================== FILE TOOL DESCRIPTIONS ====================

STAT = """Describe one file or folder. Paths are relative to the account root ("" = root).

Params: account, path

Returns: name, size (0 for folders), type, is_dir, updated_at, driver"""

LIST_FOLDER = """List a folder's visible children, ordered by the account's order_by/order_direction.

Params: account, path ("" = root)"""

RESOLVE = """Describe a path; for folders also return ordered children.

Params: account, path

Returns: file, children (null for files)"""

GET_LINK = """Get the direct location of a file (not folders).

Params: account, path

Returns: path, link, proxy (true = stream through the service instead of redirecting)"""

MAKE_FOLDER = """Create a folder and any missing parents. No error if it already exists.

Params: account, path"""

MOVE = """Move a file or folder. If dst is an existing folder, src is moved inside it. Never overwrites.

Params: account, src, dst"""

COPY = """Copy a file or folder (recursive). If dst is an existing folder, src is copied inside it. Fails if dst is an existing file.

Params: account, src, dst"""

DELETE = """Permanently delete a file or folder (recursive). Cannot be undone.

Params: account, path"""

UPLOAD = """Upload base64 content to path/name, creating missing folders. Fails if the file already exists.

Params: account, path (folder, "" = root), name, content_base64

Example: upload("home", "notes", "todo.txt", "aGVsbG8=")"""
