import os
import re
from pathlib import Path
from urllib.parse import quote

from dotenv import load_dotenv

from sig_errors import ConfigurationError

# Env files, relative to the working directory
DEFAULT_ENV_TEMPLATE = "client_credentials/.env"
DEFAULT_ENV_CLIENT = "client_credentials/.env-client"

SHEET_ID_VAR = "GS_SHEET_ID"
DATA_ENTRY_URL_VAR = "GS_DATA_ENTRY_URL"

EDGES_SHEET = "edges"
NODES_SHEET = "nodes"

# Table columns
FROM_COL = "from"
TO_COL = "to"
NODE_COL = "node"
CONTEXT_COL = "node_context"
RESPONSIBLE_COL = "arrowkeeper"
STATUS_COL = "status"

HUMANS = "humans"
NOT_HUMAN = "not human"

_SHEET_ID_RE = re.compile(r"/d/([A-Za-z0-9_-]+)")


def load_env(env_file: str | Path) -> bool:
    """Load an env file into os.environ if it exists. Returns True when loaded."""
    path = Path(env_file)
    if not path.exists():
        return False
    return load_dotenv(path, override=True)


def extract_sheet_id(url: str) -> str | None:
    match = _SHEET_ID_RE.search(url or "")
    return match.group(1) if match else None


def resolve_sheet_id() -> str:
    """
    Sheet id from GS_SHEET_ID, falling back to the id embedded in
    GS_DATA_ENTRY_URL (https://docs.google.com/spreadsheets/d/<id>/edit).
    """
    sheet_id = os.getenv(SHEET_ID_VAR, "").strip()
    if not sheet_id:
        sheet_id = extract_sheet_id(os.getenv(DATA_ENTRY_URL_VAR, "")) or ""
    if not sheet_id:
        raise ConfigurationError("Sheet ID not found in env vars.")
    return sheet_id


def sheet_csv_url(sheet_id: str, sheet_name: str) -> str:
    # Public sheets export any worksheet as CSV without auth
    return (
        f"https://docs.google.com/spreadsheets/d/{sheet_id}"
        f"/gviz/tq?tqx=out:csv&sheet={quote(sheet_name)}"
    )
