import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from sig_data import StaticDataSource
from template_data import template_edges, template_nodes


@pytest.fixture
def edges() -> pd.DataFrame:
    return template_edges()


@pytest.fixture
def nodes() -> pd.DataFrame:
    return template_nodes()


@pytest.fixture
def template_dat(edges, nodes) -> StaticDataSource:
    return StaticDataSource(edges, nodes)


@pytest.fixture
def abc_dat() -> StaticDataSource:
    """A -> B -> C, each node in its own category."""
    return StaticDataSource(
        pd.DataFrame({"from": ["A", "B"], "to": ["B", "C"], "arrowkeeper": ["test", "test"],
                      "status": ["operational", "operational"]}),
        pd.DataFrame({"node": ["A", "B", "C"], "node_context": ["t1", "t2", "t3"]}),
    )
