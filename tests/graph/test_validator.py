"""Unit tests for GraphValidator class.

Tests cover:
- Validation report bookkeeping and summaries
- Cycle collection with path reporting
- Unreachable and isolated node detection
- Edge cases
"""

from depgraph.graph.dependency_graph import DependencyGraph
from depgraph.graph.validator import GraphValidator, ValidationReport


def build_graph(nodes, edges, circular=False):
    """Build a graph from node names and (from, to) dependency pairs."""
    graph = DependencyGraph(circular=circular)
    for node in nodes:
        graph.add_node(node)
    for from_node, to_node in edges:
        graph.add_dependency(from_node, to_node)
    return graph


class TestValidationReport:
    """Test ValidationReport functionality."""

    def test_initialization(self):
        """Test that ValidationReport initializes correctly."""
        report = ValidationReport()

        assert report.is_valid is True
        assert report.errors == []
        assert report.warnings == []
        assert report.cycles == []
        assert report.unreachable_nodes == []
        assert report.isolated_nodes == []

    def test_add_error(self):
        """Test adding errors marks validation as failed."""
        report = ValidationReport()
        report.add_error("Test error")

        assert not report.is_valid
        assert report.errors == ["Test error"]

    def test_add_warning(self):
        """Test adding warnings doesn't fail validation."""
        report = ValidationReport()
        report.add_warning("Test warning")

        assert report.is_valid
        assert report.warnings == ["Test warning"]

    def test_summary_empty_report(self):
        """Test summary generation for empty report."""
        summary = ValidationReport().summary()

        assert "Validation Status: PASS" in summary
        assert "Errors: 0" in summary
        assert "Warnings: 0" in summary

    def test_summary_with_cycles(self):
        """Test summary generation with cycle information."""
        report = ValidationReport()
        report.cycles = [["a", "b", "a"]]
        summary = report.summary()

        assert "Cycles: 1" in summary
        assert "1. a -> b -> a" in summary


class TestCycleCollection:
    """Test cycle collection."""

    def test_no_cycles_in_valid_graph(self):
        """Test that an acyclic graph validates cleanly."""
        graph = build_graph(["a", "b", "c"], [("a", "b"), ("b", "c")])

        report = GraphValidator().validate(graph)

        assert report.is_valid
        assert report.cycles == []

    def test_cycle_reported(self):
        """Test that a cycle is reported with its path."""
        graph = build_graph(
            ["a", "b", "c", "d"],
            [("a", "b"), ("b", "c"), ("c", "a"), ("d", "a")],
        )

        report = GraphValidator().validate(graph)

        assert not report.is_valid
        assert report.cycles == [["a", "b", "c", "a"]]
        assert "Cycle detected: a -> b -> c -> a" in report.errors

    def test_multiple_cycles(self):
        """Test that cycles in separate subgraphs are all reported."""
        graph = build_graph(
            ["a", "b", "x", "y"],
            [("a", "b"), ("b", "a"), ("x", "y"), ("y", "x")],
        )

        report = GraphValidator().validate(graph)

        assert report.cycles == [["a", "b", "a"], ["x", "y", "x"]]
        assert len(report.errors) == 2

    def test_strict_graph_does_not_raise(self):
        """Test that validation ignores the graph's own circular flag."""
        graph = build_graph(["a"], [("a", "a")])

        report = GraphValidator().validate(graph)

        assert report.cycles == [["a", "a"]]


class TestStructure:
    """Test unreachable and isolated nodes."""

    def test_unreachable_cycle_without_entry(self):
        """Test that an entry-less cyclic subgraph is unreachable."""
        graph = build_graph(
            ["root", "leaf", "c1", "c2"],
            [("root", "leaf"), ("c1", "c2"), ("c2", "c1")],
        )

        report = GraphValidator().validate(graph)

        assert report.unreachable_nodes == ["c1", "c2"]
        assert any("c1, c2" in warning for warning in report.warnings)

    def test_cycle_with_entry_is_reachable(self):
        """Test that a cycle below an entry node is reachable."""
        graph = build_graph(["d", "a", "b"], [("d", "a"), ("a", "b"), ("b", "a")])

        report = GraphValidator().validate(graph)

        assert report.unreachable_nodes == []

    def test_isolated_nodes(self):
        """Test that nodes without edges are listed but not warned about."""
        graph = build_graph(["a", "b", "lonely"], [("a", "b")])

        report = GraphValidator().validate(graph)

        assert report.isolated_nodes == ["lonely"]
        assert report.warnings == []
        assert report.is_valid

    def test_empty_graph(self):
        """Test validating an empty graph."""
        report = GraphValidator().validate(DependencyGraph())

        assert report.is_valid
        assert report.cycles == []
        assert report.unreachable_nodes == []

    def test_summary_lists_everything(self):
        """Test that the summary includes every section."""
        graph = build_graph(
            ["c1", "c2", "lonely"],
            [("c1", "c2"), ("c2", "c1")],
        )

        summary = GraphValidator().validate(graph).summary()

        assert "Validation Status: FAIL" in summary
        assert "c1 -> c2 -> c1" in summary
        assert "Unreachable Nodes: c1, c2" in summary
        assert "Isolated Nodes: lonely" in summary
