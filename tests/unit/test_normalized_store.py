"""Unit tests for the normalized store conversions and queries."""

import unittest

from conftest import make_node
from mindmap.config import ROOT_KEY
from mindmap.models import HeadingMeta, ListMeta, NormalizedData
from mindmap.mutations import delete_normalized_node
from mindmap.normalized_store import (
    collect_descendants, denormalize, empty_store, find_node, get_children, get_depth,
    get_parent_id, get_siblings, is_descendant, is_root, normalize, validate_store
)


def sample_roots():
    return [
        make_node('a', meta=HeadingMeta(level=1, line_number=1), children=[
            make_node('a1', children=[make_node('a1x'), make_node('a1y')]),
            make_node('a2', meta=ListMeta(ordered=True, indent=0, line_number=3)),
        ]),
        make_node('b', note='second map'),
    ]


class TestNormalize(unittest.TestCase):
    """Flattening trees into the three maps."""

    def test_empty_input(self):
        for value in (None, []):
            data = normalize(value)
            self.assertEqual(data.nodes, {})
            self.assertEqual(data.children_map, {ROOT_KEY: []})
            self.assertEqual(data.parent_map, {})

    def test_maps(self):
        data = normalize(sample_roots())
        self.assertEqual(data.root_ids, ['a', 'b'])
        self.assertEqual(data.children_map['a'], ['a1', 'a2'])
        self.assertEqual(data.children_map['a1'], ['a1x', 'a1y'])
        self.assertEqual(data.children_map['b'], [])
        self.assertEqual(data.parent_map['a1y'], 'a1')
        self.assertNotIn('a', data.parent_map)
        self.assertNotIn('children', data.nodes['a'])
        self.assertEqual(validate_store(data), [])

    def test_input_not_aliased(self):
        roots = sample_roots()
        data = normalize(roots)
        roots[1]['note'] = 'changed'
        self.assertEqual(data.nodes['b']['note'], 'second map')

    def test_duplicate_id_keeps_first(self):
        roots = [make_node('a', children=[make_node('x', text='first')]),
                 make_node('b', children=[make_node('x', text='second')])]
        data = normalize(roots)
        self.assertEqual(data.nodes['x']['text'], 'first')
        self.assertEqual(data.parent_map['x'], 'a')
        self.assertEqual(data.children_map['a'], ['x'])
        self.assertEqual(data.children_map['b'], [])
        self.assertEqual(validate_store(data), [])

    def test_duplicate_id_under_same_parent(self):
        data = normalize([make_node('a', children=[make_node('x'), make_node('x', text='again')])])
        self.assertEqual(data.children_map['a'], ['x'])
        self.assertEqual(data.nodes['x']['text'], 'x')
        self.assertEqual(validate_store(data), [])

    def test_duplicate_root_id(self):
        data = normalize([make_node('a'), make_node('b'), make_node('a', text='again')])
        self.assertEqual(data.root_ids, ['a', 'b'])
        self.assertEqual(validate_store(data), [])

    def test_delete_after_duplicate_leaves_no_dangling_ids(self):
        data = normalize([make_node('a', children=[make_node('x')]),
                          make_node('b', children=[make_node('x')])])
        data = delete_normalized_node(data, 'x')
        self.assertEqual(data.children_map['b'], [])
        self.assertEqual(validate_store(data), [])

    def test_reserved_root_id_skipped(self):
        data = normalize([make_node(ROOT_KEY), make_node('a')])
        self.assertEqual(data.root_ids, ['a'])
        self.assertNotIn(ROOT_KEY, data.nodes)

    def test_reserved_child_id_skipped(self):
        data = normalize([make_node('a', children=[make_node(ROOT_KEY)])])
        self.assertEqual(data.children_map['a'], [])
        self.assertEqual(validate_store(data), [])


class TestDenormalize(unittest.TestCase):
    """Rebuilding trees and the round trip."""

    def test_round_trip(self):
        roots = sample_roots()
        self.assertEqual(denormalize(normalize(roots)), roots)

    def test_normalize_is_idempotent(self):
        data = normalize(sample_roots())
        again = normalize(denormalize(data))
        self.assertEqual(again, data)

    def test_trees_are_fresh_copies(self):
        data = normalize(sample_roots())
        trees = denormalize(data)
        trees[0]['text'] = 'mutated'
        trees[0]['children'].clear()
        self.assertEqual(data.nodes['a']['text'], 'a')
        self.assertEqual(denormalize(data)[0]['children'][0]['id'], 'a1')

    def test_dangling_child_skipped(self):
        data = NormalizedData(
            nodes={'a': {'id': 'a'}},
            children_map={ROOT_KEY: ['a'], 'a': ['ghost']},
            parent_map={},
        )
        self.assertEqual(denormalize(data), [{'id': 'a', 'children': []}])

    def test_empty_store(self):
        self.assertEqual(denormalize(empty_store()), [])


class TestQueries(unittest.TestCase):
    """Lookups over a snapshot."""

    def setUp(self):
        self.data = normalize(sample_roots())

    def test_descendants(self):
        self.assertEqual(collect_descendants(self.data, 'a'), {'a1', 'a2', 'a1x', 'a1y'})
        self.assertEqual(collect_descendants(self.data, 'b'), set())

    def test_is_descendant(self):
        self.assertTrue(is_descendant(self.data, 'a', 'a1y'))
        self.assertFalse(is_descendant(self.data, 'a1y', 'a'))
        self.assertFalse(is_descendant(self.data, 'a', 'a'))

    def test_siblings_and_roots(self):
        self.assertEqual(get_siblings(self.data, 'a1x'), ['a1x', 'a1y'])
        self.assertEqual(get_siblings(self.data, 'b'), ['a', 'b'])
        self.assertTrue(is_root(self.data, 'b'))
        self.assertFalse(is_root(self.data, 'a1'))
        self.assertFalse(is_root(self.data, 'missing'))

    def test_lookups(self):
        self.assertEqual(find_node(self.data, 'a1')['text'], 'a1')
        self.assertIsNone(find_node(self.data, 'missing'))
        self.assertEqual(get_parent_id(self.data, 'a1x'), 'a1')
        self.assertIsNone(get_parent_id(self.data, 'a'))
        children = get_children(self.data, 'a')
        children.append('x')
        self.assertEqual(get_children(self.data, 'a'), ['a1', 'a2'])

    def test_depth(self):
        self.assertEqual(get_depth(self.data, 'a'), 0)
        self.assertEqual(get_depth(self.data, 'a1x'), 2)


class TestValidateStore(unittest.TestCase):
    """Invariant checks report broken snapshots."""

    def test_parent_map_mismatch(self):
        data = NormalizedData(
            nodes={'a': {'id': 'a'}, 'b': {'id': 'b'}},
            children_map={ROOT_KEY: ['a'], 'a': ['b'], 'b': []},
            parent_map={'b': 'x'},
        )
        self.assertTrue(validate_store(data))

    def test_unreachable_node(self):
        data = NormalizedData(
            nodes={'a': {'id': 'a'}, 'lost': {'id': 'lost'}},
            children_map={ROOT_KEY: ['a'], 'a': [], 'lost': []},
            parent_map={},
        )
        problems = validate_store(data)
        self.assertTrue(any('unreachable' in p for p in problems))

    def test_cycle(self):
        data = NormalizedData(
            nodes={'a': {'id': 'a'}, 'b': {'id': 'b'}},
            children_map={ROOT_KEY: ['a'], 'a': ['b'], 'b': ['a']},
            parent_map={'b': 'a', 'a': 'b'},
        )
        self.assertTrue(validate_store(data))


if __name__ == '__main__':
    unittest.main()
