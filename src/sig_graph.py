import logging
import warnings
from enum import Enum

import numpy as np
import pandas as pd
import networkx as nx

from sig_config import FROM_COL, TO_COL, NODE_COL, CONTEXT_COL, HUMANS, NOT_HUMAN
from sig_data import TableSource
from sig_errors import InvalidArgumentError, MissingColumnError, UnresolvedReferenceWarning
from sig_validate import validate_tables

logger = logging.getLogger(__name__)


class Aggregation(str, Enum):
    NONE = "none"
    NODE_CONTEXT = "node_context"

    @classmethod
    def parse(cls, value) -> "Aggregation":
        if isinstance(value, cls):
            return value
        if value == "by-category":
            return cls.NODE_CONTEXT
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise InvalidArgumentError(f"'aggregation' must be one of {choices}, got {value!r}") from None


def _row_attrs(row: pd.Series) -> dict:
    # NaN cells become None attributes
    return {k: (None if pd.isna(v) else v) for k, v in row.items()}


def build_graph(edges: pd.DataFrame, nodes: pd.DataFrame) -> nx.MultiDiGraph:
    """
    Build a directed multigraph of the governance network.
    Vertices: every endpoint referenced by an edge, joined with node metadata
    Edges: one per complete row, remaining columns kept as attributes
    """
    complete = edges.dropna(subset=[FROM_COL, TO_COL])
    if len(complete) < len(edges):
        logger.debug("Skipping %d edges with a missing endpoint", len(edges) - len(complete))

    # First-appearance order over 'from', then 'to'
    names = pd.unique(np.concatenate([
        complete[FROM_COL].to_numpy(dtype=object),
        complete[TO_COL].to_numpy(dtype=object),
    ]))
    vertices = pd.DataFrame({"name": pd.Series(names, dtype=object)})

    # Left join; the first row wins for duplicated node ids
    node_meta = nodes.drop_duplicates(subset=NODE_COL, keep="first").drop(columns=["name"], errors="ignore")
    node_meta = node_meta.assign(**{NODE_COL: node_meta[NODE_COL].astype(object)})
    vertices = vertices.merge(node_meta, how="left", left_on="name", right_on=NODE_COL).drop(columns=NODE_COL)

    if CONTEXT_COL not in vertices.columns:
        vertices[CONTEXT_COL] = None
    vertices["object"] = np.where(vertices[CONTEXT_COL] == HUMANS, HUMANS, NOT_HUMAN)

    G = nx.MultiDiGraph()
    G.add_nodes_from((row["name"], _row_attrs(row)) for _, row in vertices.iterrows())

    for _, row in complete.iterrows():
        attrs = _row_attrs(row)
        source = attrs.pop(FROM_COL)
        target = attrs.pop(TO_COL)
        G.add_edges_from([(source, target, attrs)])

    return G


def node_context_of(nodes: pd.DataFrame, node) -> str | None:
    """
    Category of a node id.

    An id that is itself one of the categories maps to itself, so an
    already aggregated table can be aggregated again. Unknown ids warn and
    map to None.
    """
    if pd.isna(node):
        return None

    contexts = nodes[CONTEXT_COL]
    if (contexts == node).any():
        return node

    matches = contexts[nodes[NODE_COL] == node]
    if matches.empty:
        warnings.warn(f"Node context not found for node: {node}", UnresolvedReferenceWarning, stacklevel=2)
        return None

    context = matches.iloc[0]
    return None if pd.isna(context) else context


class SigGraph:
    """
    Assemble a SIG network from a table source.

    The edge and node tables are copied from the source, validated and
    turned into a networkx MultiDiGraph. set_aggregation("node_context")
    collapses nodes into their categories; it replaces the held tables, so
    going back needs a new SigGraph built from the original source.
    """

    def __init__(self, sig_dat: TableSource | None = None):
        if sig_dat is None:
            raise InvalidArgumentError("'sig_dat' cannot be None")
        if not isinstance(sig_dat, TableSource):
            raise InvalidArgumentError("'sig_dat' must have get_edges() and get_nodes() methods")

        self.sig_dat = sig_dat
        self.aggregation = Aggregation.NONE
        self.graph: nx.MultiDiGraph | None = None

        edges = sig_dat.get_edges()
        nodes = sig_dat.get_nodes()
        graph = self._assemble(edges, nodes, self.aggregation)
        # Own copies: edits on the held tables never reach the source
        self.edges = edges.copy()
        self.nodes = nodes.copy()
        self.graph = graph

    @staticmethod
    def _assemble(edges: pd.DataFrame, nodes: pd.DataFrame, aggregation: Aggregation) -> nx.MultiDiGraph:
        validate_tables(edges, nodes)
        graph = build_graph(edges, nodes)
        graph.graph["aggregation"] = aggregation.value

        logger.debug("Graph built: %d nodes, %d edges", graph.number_of_nodes(), graph.number_of_edges())
        return graph

    def get_graph(self) -> nx.MultiDiGraph | None:
        return self.graph

    def refresh(self) -> "SigGraph":
        """Re-validate the held tables and rebuild the graph from scratch."""
        self.graph = self._assemble(self.edges, self.nodes, self.aggregation)
        return self

    def node_count(self) -> int:
        if self.graph is None:
            return 0
        return self.graph.number_of_nodes()

    def edge_count(self) -> int:
        if self.graph is None:
            return 0
        return self.graph.number_of_edges()

    def set_aggregation(self, aggregation: Aggregation | str = Aggregation.NONE) -> "SigGraph":
        """
        Collapse nodes into their node_context.

        Held state only changes once the aggregated graph is built; an
        aborted call (fatal error or escalated warning) leaves tables,
        graph and mode as they were.
        """
        mode = Aggregation.parse(aggregation)
        if mode is Aggregation.NONE:
            return self

        if CONTEXT_COL not in self.nodes.columns:
            raise MissingColumnError("node", [CONTEXT_COL])

        nodes = self.nodes
        edges = self.edges.copy()
        edges[FROM_COL] = [node_context_of(nodes, n) for n in edges[FROM_COL]]
        edges[TO_COL] = [node_context_of(nodes, n) for n in edges[TO_COL]]

        contexts = nodes[CONTEXT_COL].dropna().drop_duplicates().tolist()
        context_nodes = pd.DataFrame({NODE_COL: contexts, CONTEXT_COL: contexts})

        for col in (FROM_COL, TO_COL):
            if edges[col].isna().any():
                warnings.warn(
                    f"Some '{col}' nodes could not be found in the nodes data frame.",
                    UnresolvedReferenceWarning,
                    stacklevel=2,
                )

        graph = self._assemble(edges, context_nodes, mode)
        self.edges, self.nodes, self.aggregation, self.graph = edges, context_nodes, mode, graph

        logger.info("Aggregated graph by %s: %d categories", CONTEXT_COL, len(contexts))
        return self
