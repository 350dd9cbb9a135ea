import warnings

import pandas as pd

from sig_config import FROM_COL, TO_COL, NODE_COL
from sig_errors import (
    MissingColumnError,
    NullValueError,
    InvalidTableError,
    EmptyInputWarning,
    NullValueWarning,
    DuplicateKeyWarning,
)


def _require_frame(table, name: str) -> None:
    if not isinstance(table, pd.DataFrame):
        raise InvalidTableError(f"{name.capitalize()} data must be a data frame, got {type(table).__name__}")


def _require_columns(table: pd.DataFrame, name: str, required: list[str]) -> None:
    missing = [c for c in required if c not in table.columns]
    if missing:
        raise MissingColumnError(name, missing)


def validate_edges(edges: pd.DataFrame) -> None:
    """
    Edge table checks:
    - must be a DataFrame with 'from' and 'to' columns (fatal)
    - empty table or null endpoints only warn
    """
    _require_frame(edges, "edges")
    _require_columns(edges, "edge", [FROM_COL, TO_COL])

    if len(edges) == 0:
        warnings.warn("No edges found in data", EmptyInputWarning, stacklevel=3)
        return

    if edges[FROM_COL].isna().any() or edges[TO_COL].isna().any():
        warnings.warn("NA values found in edge from/to columns", NullValueWarning, stacklevel=3)


def validate_nodes(nodes: pd.DataFrame) -> None:
    """
    Node table checks:
    - must be a DataFrame with a 'node' column (fatal)
    - null node ids are fatal, duplicates only warn
    """
    _require_frame(nodes, "nodes")
    _require_columns(nodes, "node", [NODE_COL])

    if len(nodes) == 0:
        warnings.warn("No nodes found in data", EmptyInputWarning, stacklevel=3)
        return

    if nodes[NODE_COL].isna().any():
        raise NullValueError("NA values found in node names")

    dupes = nodes.loc[nodes[NODE_COL].duplicated(), NODE_COL].unique().tolist()
    if dupes:
        warnings.warn(
            f"Duplicate node names detected: {', '.join(map(str, dupes))}",
            DuplicateKeyWarning,
            stacklevel=3,
        )


def validate_tables(edges: pd.DataFrame, nodes: pd.DataFrame) -> None:
    validate_edges(edges)
    validate_nodes(nodes)
