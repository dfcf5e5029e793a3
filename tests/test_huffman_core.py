import os
import sys

import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

from huffman_core import HuffmanInternal, HuffmanLeaf, HuffmanLogic
from huffman_errors import InvalidInputError


@pytest.fixture
def logic():
	return HuffmanLogic()


def test_count_frequencies(logic):
	assert logic.count_frequencies("aaabbc") == {'a': 3, 'b': 2, 'c': 1}


@pytest.mark.parametrize("seed", [None, "", "aaaa", 42, ['a', 'b']])
def test_count_frequencies_rejects_bad_seed(logic, seed):
	with pytest.raises(InvalidInputError):
		logic.count_frequencies(seed)


@pytest.mark.parametrize("table", [
	None,
	{},
	{'a': 4},
	{'a': 1, 'b': 0},
	{'a': 1, 'b': -3},
	{'a': 1, 'b': 1.5},
	{'a': 1, 'b': True},
	{'ab': 2, 'c': 1},
	{'': 1, 'a': 1},
	[('a', 1), ('b', 2)],
])
def test_validate_frequencies_rejects_bad_table(logic, table):
	with pytest.raises(InvalidInputError):
		logic.validate_frequencies(table)


def test_validate_frequencies_copies_table(logic):
	table = {'a': 1, 'b': 2}
	freqs = logic.validate_frequencies(table)
	table['c'] = 9
	assert freqs == {'a': 1, 'b': 2}


def test_build_tree_merges_lightest_first(logic):
	root = logic.build_tree({'a': 3, 'b': 2, 'c': 1})

	assert isinstance(root, HuffmanInternal)
	assert root.weight == 6
	assert isinstance(root.left, HuffmanLeaf)
	assert root.left.symbol == 'a'
	merged = root.right
	assert isinstance(merged, HuffmanInternal)
	assert merged.weight == 3
	assert (merged.left.symbol, merged.right.symbol) == ('c', 'b')


def test_build_tree_two_symbols_has_depth_one(logic):
	root = logic.build_tree({'x': 10, 'y': 1})
	assert root.left.is_leaf and root.right.is_leaf
	assert logic.generate_codes(root) == {'y': '0', 'x': '1'}


def test_build_tree_rejects_single_symbol(logic):
	with pytest.raises(InvalidInputError):
		logic.build_tree({'a': 1})


def test_internal_nodes_carry_no_symbol(logic):
	root = logic.build_tree({'a': 5, 'b': 1, 'c': 1, 'd': 2})
	stack = [root]
	while stack:
		node = stack.pop()
		if node.is_leaf:
			assert not hasattr(node, 'left')
		else:
			assert not hasattr(node, 'symbol')
			assert node.weight == node.left.weight + node.right.weight
			stack.extend([node.left, node.right])


def test_generate_codes_scenario(logic):
	codes = logic.generate_codes(logic.build_tree({'a': 3, 'b': 2, 'c': 1}))
	assert codes == {'a': '0', 'c': '10', 'b': '11'}


def test_generate_codes_uniform_four(logic):
	codes = logic.generate_codes(logic.build_tree({'d': 1, 'c': 1, 'b': 1, 'a': 1}))
	assert codes == {'a': '00', 'b': '01', 'c': '10', 'd': '11'}


def test_generate_codes_handles_deep_skewed_tree(logic):
	# Fibonacci weights give a maximally unbalanced tree
	weights = [1, 1]
	while len(weights) < 60:
		weights.append(weights[-1] + weights[-2])
	table = {f"s{i:02d}": w for i, w in enumerate(weights)}

	codes = logic.generate_codes(logic.build_tree(table))
	assert len(codes) == 60
	assert max(len(c) for c in codes.values()) == 59


def test_generate_codes_rejects_leaf_root(logic):
	with pytest.raises(InvalidInputError):
		logic.generate_codes(HuffmanLeaf('a', 1))


def test_mixed_symbol_types_use_table_order(logic):
	root = logic.build_tree({1: 2, 'a': 2})
	assert logic.generate_codes(root) == {1: '0', 'a': '1'}


def test_walk_decodes_and_restarts_at_root(logic):
	root = logic.build_tree({'a': 3, 'b': 2, 'c': 1})
	assert logic.walk(root, "01110") == ['a', 'b', 'c']
	assert logic.walk(root, "") == []


@pytest.mark.parametrize("bits", ["1", "0111", "2", "0a", "0 1"])
def test_walk_rejects_malformed_bits(logic, bits):
	root = logic.build_tree({'a': 3, 'b': 2, 'c': 1})
	with pytest.raises(InvalidInputError):
		logic.walk(root, bits)
