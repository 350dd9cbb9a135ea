import matplotlib.pyplot as plt
import pytest
from matplotlib.figure import Figure

import sig_vis
from sig_errors import InvalidArgumentError, UnresolvedDependencyError
from sig_graph import SigGraph, build_graph
from sig_vis import HasGraph, SigVis


class GraphHolder:
    def __init__(self, graph):
        self.graph = graph

    def get_graph(self):
        return self.graph


def test_sig_graph_satisfies_has_graph(template_dat):
    assert isinstance(SigGraph(template_dat), HasGraph)


def test_takes_graph_from_sig_graph(template_dat):
    sig_graph = SigGraph(template_dat)
    vis = SigVis(sig_graph=sig_graph)

    assert vis.get_graph() is sig_graph.get_graph()


def test_rejects_none():
    with pytest.raises(InvalidArgumentError, match="cannot be None"):
        SigVis(sig_graph=None)


def test_rejects_null_graph():
    with pytest.raises(UnresolvedDependencyError, match="Graph component cannot be None"):
        SigVis(GraphHolder(None))


def test_rejects_object_without_graph_accessor():
    with pytest.raises(InvalidArgumentError, match="get_graph"):
        SigVis({"not_graph": "invalid"})


def test_plot_returns_figure(template_dat):
    fig = SigVis(SigGraph(template_dat)).plot()

    assert isinstance(fig, Figure)
    ax = fig.axes[0]
    assert ax.get_title(loc="left") == "Structured intelligence governance\nAll elements"
    assert ax.get_legend() is not None


def test_plot_marks_aggregated_graph(template_dat):
    sig_graph = SigGraph(template_dat).set_aggregation("node_context")
    fig = SigVis(sig_graph).plot()

    assert fig.axes[0].get_title(loc="left").endswith("Aggregated by node context")


def test_plot_from_plain_graph_holder(abc_dat):
    graph = build_graph(abc_dat.get_edges(), abc_dat.get_nodes())
    fig = SigVis(GraphHolder(graph)).plot()

    assert isinstance(fig, Figure)


def test_plot_handles_missing_attributes_and_parallel_edges(abc_dat):
    graph = build_graph(abc_dat.get_edges(), abc_dat.get_nodes())
    graph.add_edge("A", "B")
    graph.add_edge("C", "C", status="retired")

    fig = SigVis(GraphHolder(graph)).plot()

    assert isinstance(fig, Figure)


def test_save_writes_png(template_dat, tmp_path):
    out = SigVis(SigGraph(template_dat)).save(tmp_path / "plots" / "sig.png")

    assert out.exists()
    assert out.stat().st_size > 0


def test_main_demo_writes_plot(tmp_path, capsys):
    out = tmp_path / "demo.png"

    sig_vis.main(["--source", "demo", "--aggregate", "--out", str(out)])

    assert out.exists()
    printed = capsys.readouterr().out
    assert "Graph loaded: 4 nodes, 12 edges" in printed
    assert "Saved graph visualization" in printed


def test_plot_does_not_register_pyplot_figures(template_dat):
    vis = SigVis(SigGraph(template_dat))
    before = plt.get_fignums()

    figures = [vis.plot() for _ in range(3)]

    assert all(isinstance(fig, Figure) for fig in figures)
    assert plt.get_fignums() == before


def test_legend_entries_are_unique_and_ordered():
    assert sig_vis._ordered_unique(["buggy", None, "buggy", "operational", None]) == ["buggy", None, "operational"]
