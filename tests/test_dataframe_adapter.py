# test_dataframe_adapter.py
import numpy as np
import polars as pl  # PL (Polars)

from propgraphml.adapters.dataframe_adapter import polars_dtype, to_dataframes
from propgraphml.core.graph import PropertyGraph
from propgraphml.io.meta import GRAPHML_ALLOWED, HETEROGENEOUS, ArrayType


class TestDataFrameAdapter:
    """Tests for Polars DataFrame adapter."""

    def test_tables_and_shapes(self, movies_graph):
        dfs = to_dataframes(movies_graph)
        assert "nodes" in dfs and "relationships" in dfs
        assert dfs["nodes"].height == 3
        assert dfs["relationships"].height == 3
        assert {"node_id", "labels", "name", "born"} <= set(dfs["nodes"].columns)
        assert {"rel_id", "source", "target", "type", "role"} <= set(dfs["relationships"].columns)

    def test_dtypes_follow_reconciled_types(self, movies_graph):
        nodes = to_dataframes(movies_graph)["nodes"]
        schema = nodes.schema
        assert schema["born"] == pl.Int64
        assert schema["released"] == pl.Int32
        assert schema["rating"] == pl.Float64
        assert schema["score"] == pl.Float32
        assert schema["active"] == pl.Boolean
        assert schema["name"] == pl.Utf8
        assert schema["years"] == pl.List(pl.Int32)
        assert schema["aliases"] == pl.List(pl.Utf8)

    def test_labels_column(self, movies_graph):
        nodes = to_dataframes(movies_graph)["nodes"]
        row = nodes.filter(pl.col("name") == "Keanu Reeves").to_dicts()[0]
        assert row["labels"] == ":Person:Actor"
        assert "labels" not in to_dataframes(movies_graph, include_labels=False)["nodes"].columns

    def test_widened_and_heterogeneous_columns(self):
        G = PropertyGraph()
        G.create_node(properties={"k": np.int32(1), "x": "a"})
        G.create_node(properties={"k": np.int64(2), "x": 3})
        G.create_node(properties={"x": True})
        nodes = to_dataframes(G)["nodes"]
        assert nodes.schema["k"] == pl.Int64
        assert nodes["k"].to_list() == [1, 2, None]
        assert nodes.schema["x"] == pl.Utf8
        assert nodes["x"].to_list() == ["a", "3", "True"]

    def test_long_and_double_column_keeps_fractions(self):
        G = PropertyGraph()
        G.create_node(properties={"k": np.int64(1)})
        G.create_node(properties={"k": np.float64(1.5)})
        nodes = to_dataframes(G)["nodes"]
        assert nodes.schema["k"] == pl.Float64
        assert nodes["k"].to_list() == [1.0, 1.5]

    def test_integral_doubles_stay_in_long_column(self):
        G = PropertyGraph()
        G.create_node(properties={"k": np.int64(1)})
        G.create_node(properties={"k": np.float64(2.0)})
        nodes = to_dataframes(G)["nodes"]
        assert nodes.schema["k"] == pl.Int64
        assert nodes["k"].to_list() == [1, 2]

    def test_allow_list(self):
        assert polars_dtype(np.int16) == pl.Int16
        assert polars_dtype(np.int16, GRAPHML_ALLOWED) == pl.Int32
        assert polars_dtype(HETEROGENEOUS) == pl.Utf8
        assert polars_dtype(ArrayType(np.int64)) == pl.List(pl.Int64)

    def test_relationship_endpoints(self, movies_graph):
        rels = to_dataframes(movies_graph)["relationships"]
        knows = rels.filter(pl.col("type") == "KNOWS").to_dicts()[0]
        assert (knows["source"], knows["target"]) == (0, 1)
        assert knows["role"] is None

    def test_empty_graph(self):
        dfs = to_dataframes(PropertyGraph())
        assert dfs["nodes"].height == 0
        assert dfs["relationships"].height == 0
        assert dfs["nodes"].columns == ["node_id", "labels"]
