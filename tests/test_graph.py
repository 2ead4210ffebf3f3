"""Tests for the graph collaborator."""

from pyspringy.graph import Node, Edge, Graph


class TestNodeEdge:
    """Test Node and Edge classes."""

    def test_node_default_data(self):
        """Test node data defaults to an empty dict."""
        n = Node('a')
        assert n.id == 'a'
        assert n.data == {}

    def test_edge(self):
        """Test edge creation."""
        a, b = Node(0), Node(1)
        e = Edge('e', a, b, {'length': 2.0})
        assert e.source is a
        assert e.target is b
        assert e.data['length'] == 2.0


class TestGraph:
    """Test Graph class."""

    def test_new_node_ids(self):
        """Test new nodes get increasing ids."""
        g = Graph()
        a = g.new_node()
        b = g.new_node({'mass': 2.0})
        assert (a.id, b.id) == (0, 1)
        assert g.nodes == [a, b]
        assert b.data['mass'] == 2.0

    def test_add_node_twice(self):
        """Test re-adding a node id keeps a single entry."""
        g = Graph()
        g.add_node(Node('x'))
        g.add_node(Node('x'))
        assert len(g.nodes) == 1

    def test_new_edge(self):
        """Test edges are listed and indexed."""
        g = Graph()
        a, b = g.new_node(), g.new_node()
        e = g.new_edge(a, b)
        assert g.edges == [e]
        assert g.get_edges(a, b) == [e]
        assert g.get_edges(b, a) == []

    def test_add_edge_twice(self):
        """Test re-adding an edge id is ignored."""
        g = Graph()
        a, b = g.new_node(), g.new_node()
        e = Edge('e', a, b)
        g.add_edge(e)
        g.add_edge(e)
        assert len(g.edges) == 1
        assert len(g.get_edges(a, b)) == 1

    def test_parallel_edges(self):
        """Test parallel edges share an adjacency bucket."""
        g = Graph()
        a, b = g.new_node(), g.new_node()
        e1 = g.new_edge(a, b)
        e2 = g.new_edge(a, b)
        assert g.get_edges(a, b) == [e1, e2]

    def test_get_edges_unknown(self):
        """Test lookup for unconnected nodes."""
        g = Graph()
        assert g.get_edges(Node(1), Node(2)) == []
