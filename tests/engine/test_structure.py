"""
Tests for engine.structuring validator, queries and assembler

Test Coverage:
- validate_blocks(): id continuity
- find_structure_issues(): parent/child consistency report
- queries: parent, root, sibling, previous, title lookups
- build_outline(): ordering, snapshots, missing children
"""
import pytest

from conftest import make_blocks
from freeout.core.errors import StructuralError
from freeout.core.models import Block, WordCount, WordStatistics
from freeout.engine.structuring.assembler import build_outline
from freeout.engine.structuring.queries import (
    get_block_ids_by_title,
    get_immediate_parent,
    get_next_sibling_id,
    get_previous_block_id,
    get_root_parent,
    has_block_id,
    iter_descendants,
)
from freeout.engine.structuring.validator import find_structure_issues, validate_blocks


@pytest.fixture
def tree():
    """
    1 (d1)
      2 (d2)
        3 (d4)
      4 (d2)
    5 (d1)
    """
    return make_blocks([1, 2, 4, 2, 1], [None, 1, 2, 1, None])


class TestValidateBlocks:
    """Tests for validate_blocks()."""

    def test_validate_when_dense_ids_then_passes(self, tree):
        validate_blocks(tree)

    def test_validate_when_empty_then_passes(self):
        validate_blocks({})

    def test_validate_when_first_id_missing_then_names_expected_one(self):
        blocks = {2: Block(id=2, depth=1), 3: Block(id=3, depth=1)}
        with pytest.raises(StructuralError, match="Expected block id 1 but found 2") as exc_info:
            validate_blocks(blocks)
        assert exc_info.value.expected == 1
        assert exc_info.value.found == 2

    def test_validate_when_gap_then_raises_error(self):
        blocks = {1: Block(id=1, depth=1), 3: Block(id=3, depth=1)}
        with pytest.raises(StructuralError) as exc_info:
            validate_blocks(blocks)
        assert exc_info.value.expected == 2


class TestFindStructureIssues:
    """Tests for find_structure_issues()."""

    def test_issues_when_consistent_then_empty(self, tree):
        assert find_structure_issues(tree) == []

    def test_issues_when_child_missing_then_reported(self, tree):
        tree[1].children_ids.append(9)
        issues = find_structure_issues(tree)
        assert any("child 9 does not exist" in issue for issue in issues)

    def test_issues_when_parent_deeper_then_reported(self, tree):
        tree[2].depth = 1
        assert any("depth" in issue for issue in find_structure_issues(tree))


class TestQueries:
    """Tests for tree query helpers."""

    def test_has_block_id_when_present_then_true(self, tree):
        assert has_block_id(tree, 3) is True
        assert has_block_id(tree, 6) is False

    def test_immediate_parent_when_level_skipped_then_nearest_shallower(self, tree):
        assert get_immediate_parent(tree, 3) == 2
        assert get_immediate_parent(tree, 4) == 1
        assert get_immediate_parent(tree, 5) is None

    def test_root_parent_when_deep_then_top_ancestor(self, tree):
        assert get_root_parent(tree, 3) == 1
        assert get_root_parent(tree, 1) is None

    def test_previous_block_when_first_then_none(self, tree):
        assert get_previous_block_id(tree, 1) is None
        assert get_previous_block_id(tree, 4) == 3

    def test_next_sibling_when_children_then_follows_parent_list(self, tree):
        assert get_next_sibling_id(tree, 2) == 4
        assert get_next_sibling_id(tree, 4) is None

    def test_next_sibling_when_roots_then_next_root(self, tree):
        assert get_next_sibling_id(tree, 1) == 5

    def test_ids_by_title_when_duplicates_then_all_sorted(self, tree):
        tree[4].title = "Block 2"
        assert get_block_ids_by_title(tree, "Block 2") == [2, 4]

    def test_iter_descendants_when_nested_then_document_order(self, tree):
        assert list(iter_descendants(tree, 1)) == [2, 3, 4]
        assert list(iter_descendants(tree, 5)) == []


class TestBuildOutline:
    """Tests for build_outline()."""

    def test_build_when_tree_then_roots_and_subitems_by_id(self, tree):
        outline = build_outline(tree)
        assert [item.id for item in outline.items] == [1, 5]
        assert [item.id for item in outline.items[0].subitems] == [2, 4]
        assert [item.id for item in outline.items[0].subitems[0].subitems] == [3]

    def test_build_when_arena_changes_later_then_outline_unchanged(self, tree):
        outline = build_outline(tree)
        tree[1].title = "Changed"
        tree[1].children_ids.append(99)
        assert outline.items[0].title == "Block 1"
        assert outline.items[0].block.children_ids == [2, 4]

    def test_build_when_statistics_given_then_attached(self, tree):
        stats = WordStatistics.of(WordCount(5, 20))
        assert build_outline(tree, stats).statistics == stats

    def test_build_when_child_missing_then_raises_error(self, tree):
        tree[5].children_ids.append(6)
        with pytest.raises(StructuralError) as exc_info:
            build_outline(tree)
        assert exc_info.value.found == 6

    def test_build_when_empty_then_no_items(self):
        assert build_outline({}).items == ()
