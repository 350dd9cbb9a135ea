"""
Data sources for SIG tables.

Anything with get_edges() and get_nodes() returning DataFrames can feed
SigGraph. SigData reads both tables from a public Google Sheet configured
through an env file; StaticDataSource wraps tables already in memory.
"""
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

import pandas as pd

import sig_config
from sig_errors import InvalidArgumentError
from sig_validate import validate_tables

logger = logging.getLogger(__name__)

SOURCES = ("template", "client")


@runtime_checkable
class TableSource(Protocol):
    def get_edges(self) -> pd.DataFrame: ...

    def get_nodes(self) -> pd.DataFrame: ...


class StaticDataSource:
    """Edge and node tables handed over explicitly."""

    def __init__(self, edges: pd.DataFrame, nodes: pd.DataFrame):
        self.edges = edges
        self.nodes = nodes

    def get_edges(self) -> pd.DataFrame:
        return self.edges

    def get_nodes(self) -> pd.DataFrame:
        return self.nodes


class SigData:
    """
    Load SIG edges and nodes from the 'edges' and 'nodes' worksheets of a
    public Google Sheet.

    source="template" reads env_template, source="client" reads env_client.
    The env file is optional; GS_SHEET_ID / GS_DATA_ENTRY_URL may already be
    set in the environment.
    """

    def __init__(
        self,
        source: str = "template",
        env_template: str | Path = sig_config.DEFAULT_ENV_TEMPLATE,
        env_client: str | Path = sig_config.DEFAULT_ENV_CLIENT,
    ):
        if not isinstance(source, str) or source not in SOURCES:
            raise InvalidArgumentError(f"'source' must be one of {', '.join(SOURCES)}, got {source!r}")

        self.source = source
        env_file = env_template if source == "template" else env_client
        if sig_config.load_env(env_file):
            logger.debug("Loaded env file %s", env_file)

        self.sheet_id = sig_config.resolve_sheet_id()
        self.edges: pd.DataFrame | None = None
        self.nodes: pd.DataFrame | None = None
        self.refresh()

    def read_sheet(self, sheet_name: str) -> pd.DataFrame:
        if not isinstance(sheet_name, str) or not sheet_name:
            raise InvalidArgumentError("'sheet_name' must be a single non-empty string")

        url = sig_config.sheet_csv_url(self.sheet_id, sheet_name)
        logger.info("Reading sheet '%s' from %s", sheet_name, self.sheet_id)
        # Everything as text: ids must stay strings even when they look numeric
        return pd.read_csv(url, dtype=str)

    def refresh(self) -> "SigData":
        edges = self.read_sheet(sig_config.EDGES_SHEET)
        nodes = self.read_sheet(sig_config.NODES_SHEET)
        validate_tables(edges, nodes)

        self.edges, self.nodes = edges, nodes
        logger.info("Loaded %d edges and %d nodes", len(edges), len(nodes))
        return self

    def get_edges(self) -> pd.DataFrame:
        return self.edges

    def get_nodes(self) -> pd.DataFrame:
        return self.nodes
