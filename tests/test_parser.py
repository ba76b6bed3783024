"""
tests/test_parser.py
====================
Pytest test suite for the NEWICK reader.

Tree fixtures
-------------
Reference trees are loaded from .tree files in tests/trees/.  Ids are
allocated in order of appearance, root first:

  weighted_cherry.tree
      (A:1,B:2)C;

      Node IDs: C(root)=0  A=1  B=2

  balanced_4leaf.tree
      ((A,B),(C,D));

      Node IDs: root=0  AB=1  A=2  B=3  CD=4  C=5  D=6

  labelled_4leaf.tree
      ((A:0.1,B:0.2)AB:0.5,(C:0.3,D:0.4)CD:0.6)root;

      Same IDs as balanced_4leaf, with internal labels and weights.

  caterpillar_5leaf.tree
      (A:1,(B:1,(C:1,(D:1,E:1):1):1):1);

      Node IDs: root=0 A=1 BCDE=2 B=3 CDE=4 C=5 DE=6 D=7 E=8
"""

import logging
import os
import sys

import pytest

_TREES_DIR = os.path.join(os.path.dirname(__file__), "trees")

# Add parent directory to path so ramus can be imported regardless of
# whether the package has been installed.
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from ramus import NewickParseError, RootedTree, parse_newick


# ======================================================================== #
# Helper                                                                    #
# ======================================================================== #


def load_tree(filename: str) -> RootedTree:
    """
    Load a NEWICK string from *filename* (inside tests/trees/) and return a
    fully constructed RootedTree.
    """
    path = os.path.join(_TREES_DIR, filename)
    with open(path) as fh:
        newick = fh.read().strip()
    return RootedTree.from_newick(newick)


TREE_FILES = [
    "weighted_cherry.tree",
    "balanced_4leaf.tree",
    "labelled_4leaf.tree",
    "caterpillar_5leaf.tree",
    "unary_internal.tree",
]


# ======================================================================== #
# 1. Structure of parsed trees                                             #
# ======================================================================== #


class TestWeightedCherry:
    @pytest.fixture(scope="class")
    def cherry(self):
        return load_tree("weighted_cherry.tree")

    def test_root_is_zero(self, cherry):
        assert cherry.get_root() == 0

    def test_root_label(self, cherry):
        assert cherry.get_taxa(0) == "C"

    def test_children_and_weights(self, cherry):
        assert cherry.get_node_children(0) == [(1, 1.0), (2, 2.0)]

    def test_leaf_labels(self, cherry):
        assert cherry.get_taxa(1) == "A"
        assert cherry.get_taxa(2) == "B"

    def test_leaves_reclassified(self, cherry):
        assert cherry.is_leaf(1)
        assert cherry.is_leaf(2)
        assert not cherry.is_leaf(0)

    def test_parents(self, cherry):
        assert dict(cherry.get_parents()) == {0: None, 1: 0, 2: 0}


class TestBalanced:
    @pytest.fixture(scope="class")
    def balanced(self):
        return load_tree("balanced_4leaf.tree")

    def test_node_count(self, balanced):
        assert balanced.n_nodes == 7
        assert balanced.n_leaves == 4

    def test_children(self, balanced):
        assert dict(balanced.get_children()) == {
            0: [(1, None), (4, None)],
            1: [(2, None), (3, None)],
            2: [],
            3: [],
            4: [(5, None), (6, None)],
            5: [],
            6: [],
        }

    def test_internal_children_not_leaves(self, balanced):
        assert not balanced.is_leaf(1)
        assert not balanced.is_leaf(4)

    def test_unlabelled_internals(self, balanced):
        assert balanced.get_taxa(0) == ""
        assert balanced.get_taxa(1) == ""
        assert balanced.get_node(1).taxon is None

    def test_unweighted_edges(self, balanced):
        assert balanced.get_edge_weight(0, 1) is None


class TestLabelledInternals:
    @pytest.fixture(scope="class")
    def labelled(self):
        return load_tree("labelled_4leaf.tree")

    def test_internal_labels(self, labelled):
        assert labelled.get_taxa(0) == "root"
        assert labelled.get_taxa(1) == "AB"
        assert labelled.get_taxa(4) == "CD"

    def test_internal_weights(self, labelled):
        assert labelled.get_edge_weight(0, 1) == pytest.approx(0.5)
        assert labelled.get_edge_weight(0, 4) == pytest.approx(0.6)

    def test_leaf_weights(self, labelled):
        assert labelled.get_edge_weight(1, 2) == pytest.approx(0.1)
        assert labelled.get_edge_weight(4, 6) == pytest.approx(0.4)


class TestCaterpillar:
    def test_parents(self):
        tree = load_tree("caterpillar_5leaf.tree")
        assert dict(tree.get_parents()) == {
            0: None, 1: 0, 2: 0, 3: 2, 4: 2, 5: 4, 6: 4, 7: 6, 8: 6,
        }

    def test_leaf_names_in_order(self):
        tree = load_tree("caterpillar_5leaf.tree")
        assert [tree.get_taxa(n) for n, _ in tree.get_leaves()] == [
            "A", "B", "C", "D", "E",
        ]


# ======================================================================== #
# 2. Structural invariants over every reference tree                       #
# ======================================================================== #


class TestParsedInvariants:
    @pytest.mark.parametrize("tree_name", TREE_FILES)
    def test_shared_key_set(self, tree_name):
        tree = load_tree(tree_name)
        keys = set(tree.get_nodes())
        assert keys == set(tree.get_children()) == set(tree.get_parents())

    @pytest.mark.parametrize("tree_name", TREE_FILES)
    def test_child_listed_by_parent(self, tree_name):
        tree = load_tree(tree_name)
        for node_id, parent_id in tree.get_parents().items():
            if parent_id is None:
                assert node_id == tree.get_root()
                continue
            child_ids = [c for c, _ in tree.get_node_children(parent_id)]
            assert node_id in child_ids

    @pytest.mark.parametrize("tree_name", TREE_FILES)
    def test_parent_walk_terminates(self, tree_name):
        tree = load_tree(tree_name)
        parents = tree.get_parents()
        for node_id in tree.get_nodes():
            steps = 0
            current = node_id
            while parents[current] is not None:
                current = parents[current]
                steps += 1
                assert steps <= tree.n_nodes
            assert current == tree.get_root()

    @pytest.mark.parametrize("tree_name", TREE_FILES)
    def test_leaf_iff_childless(self, tree_name):
        tree = load_tree(tree_name)
        for node_id in tree.get_nodes():
            assert tree.is_leaf(node_id) == (not tree.get_node_children(node_id))

    @pytest.mark.parametrize("tree_name", TREE_FILES)
    def test_integrity_check_passes(self, tree_name):
        load_tree(tree_name).check_integrity()


# ======================================================================== #
# 3. Lexical details                                                        #
# ======================================================================== #


class TestLexical:
    def test_whitespace_ignored(self):
        spaced = parse_newick(" ( A : 1 ,\n B : 2 ) C ;\n")
        compact = parse_newick("(A:1,B:2)C;")
        assert dict(spaced.get_children()) == dict(compact.get_children())
        assert spaced.get_taxa(0) == "C"

    def test_whitespace_inside_label_is_dropped(self):
        tree = parse_newick("(Homo sapiens,Pan);")
        assert tree.get_taxa(1) == "Homosapiens"

    def test_trailing_content_ignored(self):
        tree = parse_newick("(A,B);(C,D);")
        assert tree.n_nodes == 3

    def test_missing_terminator_uses_end_of_input(self, caplog):
        with caplog.at_level(logging.WARNING, logger="ramus"):
            tree = parse_newick("(A,B)C")
        assert tree.get_taxa(0) == "C"
        assert "no terminating ';'" in caplog.text

    def test_empty_weight_is_unweighted(self):
        tree = parse_newick("(A:,B:1);")
        assert tree.get_edge_weight(0, 1) is None
        assert tree.get_edge_weight(0, 2) == 1.0

    def test_integer_and_decimal_weights(self):
        tree = parse_newick("(A:3,B:.25,C:0.5);")
        assert [w for _, w in tree.get_node_children(0)] == [3.0, 0.25, 0.5]

    def test_multifurcation_kept(self):
        tree = parse_newick("(A,B,C,D);")
        assert len(tree.get_node_children(0)) == 4

    def test_unlabelled_leaves(self):
        tree = parse_newick("(,);")
        assert tree.n_leaves == 2
        assert tree.get_taxa(1) == ""

    def test_single_node(self):
        tree = parse_newick("A;")
        assert tree.n_nodes == 1
        assert tree.get_taxa(0) == "A"
        assert tree.is_leaf(0)

    def test_root_weight_ignored(self):
        tree = parse_newick("(A,B)C:0.5;")
        assert tree.get_taxa(0) == "C"
        assert tree.get_node_parent(0) is None

    def test_parse_summary_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="ramus"):
            parse_newick("(A:1,B:2)C;")
        assert "Tree built: 3 nodes, 2 leaves" in caplog.text

    def test_from_newick_matches_parse_newick(self):
        a = RootedTree.from_newick("((A,B),C);")
        b = parse_newick("((A,B),C);")
        assert dict(a.get_children()) == dict(b.get_children())


# ======================================================================== #
# 4. Malformed input                                                        #
# ======================================================================== #


class TestMalformed:
    @pytest.mark.parametrize(
        "newick",
        [
            "((A,B);",
            "((A,B),(C,D);",
            "(A,B",
            "(",
        ],
    )
    def test_unclosed_group(self, newick):
        with pytest.raises(NewickParseError, match="ended abruptly"):
            parse_newick(newick)

    @pytest.mark.parametrize("newick", ["A,B;", "(A,B));", ")"])
    def test_unopened_group(self, newick):
        with pytest.raises(NewickParseError, match="no open group"):
            parse_newick(newick)

    def test_non_numeric_weight(self):
        with pytest.raises(NewickParseError, match="edge weight"):
            parse_newick("(A:1x,B);")

    def test_two_decimal_points(self):
        with pytest.raises(NewickParseError, match="Malformed edge weight"):
            parse_newick("(A:1.2.3,B);")

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_newick("((A,B);")


# ======================================================================== #
# 5. Deep input                                                             #
# ======================================================================== #


@pytest.mark.deep
class TestDeepInput:
    DEPTH = 5000

    @pytest.fixture(scope="class")
    def deep(self):
        newick = (
            "(" * self.DEPTH
            + "A"
            + "".join(f",L{i})" for i in range(self.DEPTH))
            + ";"
        )
        return parse_newick(newick)

    def test_node_count(self, deep):
        assert deep.n_nodes == 2 * self.DEPTH + 1

    def test_deepest_leaf_ancestry(self, deep):
        a = deep.find_taxon("A")
        assert len(deep.get_ancestors_pre(a)) == self.DEPTH

    def test_unweighted_depth(self, deep):
        a = deep.find_taxon("A")
        assert deep.distance_from_ancestor(a, deep.get_root(), weighted=False) == (
            float(self.DEPTH)
        )
