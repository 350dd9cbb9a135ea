"""
Template SIG tables for demos and tests.

A small governance network: people who enter and steward data, the data
stores, the code that moves it and the outputs it feeds. Each call returns
a fresh DataFrame so callers can mutate their copy freely.
"""
import pandas as pd

from sig_data import StaticDataSource

EDGE_COLUMNS = ["from", "to", "to_minimum_requirements", "arrowkeeper", "status"]
NODE_COLUMNS = ["node", "node_context"]

STATUSES = ("operational", "buggy", "not developed")

_EDGES = [
    ("field team", "data entry sheet", "Daily entries with date and site", "data steward", "operational"),
    ("data steward", "data entry sheet", "Validation rules on every column", "data steward", "operational"),
    ("data entry sheet", "ETL pipeline", "Stable column names", "analyst", "buggy"),
    ("ETL pipeline", "warehouse", "Incremental load with audit log", "analyst", "operational"),
    ("warehouse", "R package", "Read-only service account", "analyst", "operational"),
    ("R package", "dashboard", "Tested plotting functions", "analyst", "not developed"),
    ("dashboard", "data steward", "Weekly quality summary", "data steward", "not developed"),
    ("dashboard", "analyst", "Filter by site and period", "analyst", "buggy"),
    ("analyst", "R package", "Code review before release", "analyst", "operational"),
    ("warehouse", "dashboard", "Nightly refresh", "data steward", "buggy"),
    ("data steward", "warehouse", "Access granted per role", "data steward", "operational"),
    ("field team", "dashboard", "Mobile friendly views", "data steward", "not developed"),
]

_NODES = [
    ("field team", "humans"),
    ("data steward", "humans"),
    ("analyst", "humans"),
    ("data entry sheet", "data"),
    ("warehouse", "data"),
    ("ETL pipeline", "code"),
    ("R package", "code"),
    ("dashboard", "outputs"),
]


def template_edges() -> pd.DataFrame:
    return pd.DataFrame(_EDGES, columns=EDGE_COLUMNS)


def template_nodes() -> pd.DataFrame:
    return pd.DataFrame(_NODES, columns=NODE_COLUMNS)


def template_source() -> StaticDataSource:
    return StaticDataSource(template_edges(), template_nodes())
