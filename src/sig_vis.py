import argparse
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

import networkx as nx
from matplotlib.figure import Figure
from matplotlib.lines import Line2D

from sig_config import CONTEXT_COL, RESPONSIBLE_COL, STATUS_COL
from sig_data import SigData
from sig_errors import InvalidArgumentError, UnresolvedDependencyError
from sig_graph import Aggregation, SigGraph
from template_data import template_source

logger = logging.getLogger(__name__)

TITLE = "Structured intelligence governance"

STATUS_COLORS = {
    "operational": "tab:green",
    "buggy": "tab:orange",
    "not developed": "tab:red",
}
FALLBACK_COLORS = ["tab:blue", "tab:purple", "tab:brown", "tab:pink", "tab:olive", "tab:cyan"]
LINE_STYLES = ["solid", "dashed", "dotted", "dashdot"]
NODE_SHAPES = ["o", "s", "^", "D", "v", "p", "h", "8"]

NODE_SIZE = 2000


@runtime_checkable
class HasGraph(Protocol):
    def get_graph(self) -> nx.MultiDiGraph | None: ...


def _ordered_unique(values) -> list:
    return list(dict.fromkeys(values))


def _label(value) -> str:
    return "unknown" if value is None else str(value)


class SigVis:
    """
    Network plot of an assembled SIG graph.

    Takes anything exposing get_graph() (usually a SigGraph). The graph is
    captured at construction; later aggregation on the source is not seen.
    """

    def __init__(self, sig_graph: HasGraph | None = None):
        if sig_graph is None:
            raise InvalidArgumentError("'sig_graph' cannot be None")
        if not isinstance(sig_graph, HasGraph):
            raise InvalidArgumentError("'sig_graph' must provide a get_graph() method")

        graph = sig_graph.get_graph()
        if graph is None:
            raise UnresolvedDependencyError("Graph component cannot be None")

        self.graph = graph

    def get_graph(self) -> nx.MultiDiGraph:
        return self.graph

    def plot(self) -> Figure:
        G = self.graph
        if G is None:
            raise UnresolvedDependencyError("No graph available for plotting")

        # ---- Layout
        # Deterministic seed keeps repeated plots of the same sheet identical.
        pos = nx.spring_layout(G, seed=42)
        # Not registered with pyplot, so callers never need to close it
        fig = Figure(figsize=(12, 8))
        ax = fig.subplots()

        # ---- Nodes: one marker shape per node context
        contexts = _ordered_unique(G.nodes[n].get(CONTEXT_COL) for n in G.nodes)
        shapes = {c: NODE_SHAPES[i % len(NODE_SHAPES)] for i, c in enumerate(contexts)}

        for context, shape in shapes.items():
            nodelist = [n for n in G.nodes if G.nodes[n].get(CONTEXT_COL) == context]
            nx.draw_networkx_nodes(
                G, pos,
                nodelist=nodelist,
                node_shape=shape,
                node_size=NODE_SIZE,
                node_color="lightgrey",
                edgecolors="black",
                alpha=0.4,
                ax=ax,
            )

        # ---- Edges: colour by status, line style by responsible party
        edge_data = [d for _, _, d in G.edges(data=True)]
        statuses = _ordered_unique(d.get(STATUS_COL) for d in edge_data)
        keepers = _ordered_unique(d.get(RESPONSIBLE_COL) for d in edge_data)

        colors = {}
        for s in statuses:
            colors[s] = STATUS_COLORS.get(s) or FALLBACK_COLORS[len(colors) % len(FALLBACK_COLORS)]
        styles = {k: LINE_STYLES[i % len(LINE_STYLES)] for i, k in enumerate(keepers)}

        for u, v, key, d in G.edges(keys=True, data=True):
            # Parallel edges fan out with a growing arc
            rad = 0.1 + 0.15 * key if isinstance(key, int) else 0.1
            nx.draw_networkx_edges(
                G, pos,
                edgelist=[(u, v)],
                edge_color=colors[d.get(STATUS_COL)],
                style=styles[d.get(RESPONSIBLE_COL)],
                width=2,
                alpha=0.8,
                arrows=True,
                arrowstyle="-|>",
                arrowsize=16,
                node_size=NODE_SIZE,
                connectionstyle=f"arc3,rad={rad}",
                ax=ax,
            )

        # ---- Labels
        labels = {n: G.nodes[n].get("name", n) for n in G.nodes}
        nx.draw_networkx_labels(G, pos, labels=labels, font_size=9, ax=ax)

        # ---- Legend
        handles = [Line2D([0], [0], color=colors[s], lw=2, label=f"status: {_label(s)}") for s in statuses]
        handles += [
            Line2D([0], [0], color="black", linestyle=styles[k], lw=1.5, label=f"arrowkeeper: {_label(k)}")
            for k in keepers
        ]
        handles += [
            Line2D([0], [0], marker=shapes[c], linestyle="None", markersize=10,
                   markerfacecolor="lightgrey", markeredgecolor="black", label=_label(c))
            for c in contexts
        ]
        if handles:
            ax.legend(handles=handles, loc="upper left", bbox_to_anchor=(1.0, 1.0), fontsize=8, frameon=False)

        aggregated = G.graph.get("aggregation") == Aggregation.NODE_CONTEXT.value
        subtitle = "Aggregated by node context" if aggregated else "All elements"
        ax.set_title(f"{TITLE}\n{subtitle}", loc="left", fontsize=11)
        ax.axis("off")
        fig.tight_layout()
        return fig

    def save(self, out_path: str | Path, dpi: int = 200) -> Path:
        out_path = Path(out_path)
        out_path.parent.mkdir(parents=True, exist_ok=True)

        fig = self.plot()
        fig.savefig(out_path, dpi=dpi, bbox_inches="tight")

        logger.info("Saved plot to %s", out_path)
        return out_path


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Plot a structured intelligence governance network.")
    parser.add_argument(
        "--source",
        choices=["demo", "template", "client"],
        default="demo",
        help="demo uses the bundled template tables; template/client read the configured Google Sheet",
    )
    parser.add_argument("--aggregate", action="store_true", help="collapse nodes into their node_context")
    parser.add_argument("--out", type=Path, default=None, help="output PNG path")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    sig_dat = template_source() if args.source == "demo" else SigData(source=args.source)
    sig_graph = SigGraph(sig_dat)
    if args.aggregate:
        sig_graph.set_aggregation(Aggregation.NODE_CONTEXT)

    print(f"Graph loaded: {sig_graph.node_count()} nodes, {sig_graph.edge_count()} edges")

    suffix = "_by_context" if args.aggregate else ""
    out_path = args.out or Path.cwd() / "reports" / f"sig_network_{args.source}{suffix}.png"
    SigVis(sig_graph).save(out_path)

    print(f"✅ Saved graph visualization: {out_path}")


if __name__ == "__main__":
    main()
