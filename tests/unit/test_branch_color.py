"""Unit tests for branch coloring."""

import unittest

from conftest import make_node
from mindmap.branch_color import (
    assign_branch_colors, branch_color, find_branch_root, generate_branch_colors, get_color_set
)
from mindmap.config import ROOT_KEY
from mindmap.models import NormalizedData
from mindmap.mutations import add_normalized_node, move_normalized_node
from mindmap.normalized_store import normalize
from mindmap.themes import COLOR_SETS, FALLBACK_COLOR, NODE_COLORS, ROOT_COLOR

PALETTE = ['#111111', '#222222', '#333333']


def build_store():
    return normalize([
        make_node('r', children=[
            make_node('b0', children=[make_node('b0a', children=[make_node('b0a1')])]),
            make_node('b1', children=[make_node('b1a')]),
            make_node('b2'),
            make_node('b3'),
        ]),
        make_node('s', children=[make_node('s0')]),
    ])


class TestBranchColor(unittest.TestCase):

    def setUp(self):
        self.data = build_store()

    def test_root_color(self):
        self.assertEqual(branch_color('r', self.data, PALETTE), ROOT_COLOR)
        self.assertEqual(branch_color('s', self.data, PALETTE), ROOT_COLOR)

    def test_descendants_share_branch_color(self):
        for node_id in ('b0', 'b0a', 'b0a1'):
            self.assertEqual(branch_color(node_id, self.data, PALETTE), PALETTE[0])
        self.assertEqual(branch_color('b1a', self.data, PALETTE), PALETTE[1])

    def test_palette_wraps(self):
        self.assertEqual(branch_color('b3', self.data, PALETTE), PALETTE[0])

    def test_each_root_restarts_palette(self):
        self.assertEqual(branch_color('s0', self.data, PALETTE), PALETTE[0])

    def test_inconsistent_ancestry(self):
        data = NormalizedData(
            nodes={'x': {'id': 'x'}},
            children_map={ROOT_KEY: [], 'x': []},
            parent_map={'x': 'ghost'},
        )
        self.assertEqual(branch_color('x', data, PALETTE), FALLBACK_COLOR)

    def test_cycle_terminates(self):
        data = NormalizedData(
            nodes={'a': {'id': 'a'}, 'b': {'id': 'b'}},
            children_map={ROOT_KEY: [], 'a': ['b'], 'b': ['a']},
            parent_map={'a': 'b', 'b': 'a'},
        )
        self.assertIsNone(find_branch_root('a', data))
        self.assertEqual(branch_color('a', data, PALETTE), FALLBACK_COLOR)

    def test_stable_when_unrelated_branch_grows(self):
        before = branch_color('b1a', self.data, PALETTE)
        grown = add_normalized_node(self.data, 'b2', make_node('new'))
        self.assertEqual(branch_color('b1a', grown, PALETTE), before)

    def test_color_follows_branch_on_move(self):
        data = add_normalized_node(self.data, 'b0', make_node('b0b'))
        data = move_normalized_node(data, 'b0a', 'b0b')
        self.assertEqual(data.parent_map['b0a'], 'b0b')
        self.assertEqual(branch_color('b0a', data, PALETTE), PALETTE[0])
        self.assertEqual(branch_color('b0a1', data, PALETTE), PALETTE[0])

        data = move_normalized_node(data, 'b0a', 'b1')
        self.assertEqual(branch_color('b0a', data, PALETTE), PALETTE[1])
        self.assertEqual(branch_color('b0a1', data, PALETTE), PALETTE[1])

    def test_default_palette(self):
        self.assertEqual(branch_color('b0', self.data), NODE_COLORS[0])


class TestPalettes(unittest.TestCase):

    def test_get_color_set(self):
        self.assertEqual(get_color_set('nord'), COLOR_SETS['nord'])
        self.assertEqual(get_color_set('unknown'), NODE_COLORS)
        self.assertEqual(get_color_set(None), NODE_COLORS)

    def test_generate_branch_colors(self):
        shades = generate_branch_colors('#4ECDC4', steps=3)
        self.assertEqual(len(shades), 4)
        self.assertEqual(shades[0], '#4ECDC4')
        self.assertEqual(len(set(shades[1:])), 3)

    def test_assign_branch_colors(self):
        data = assign_branch_colors(build_store(), PALETTE)
        self.assertNotIn('color', data.nodes['r'])
        self.assertEqual(data.nodes['b1a']['color'], PALETTE[1])
        self.assertIs(assign_branch_colors(data, PALETTE), data)
