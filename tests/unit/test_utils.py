"""Unit tests for shared helpers."""

import logging
import unittest

from mindmap.utils import generate_node_id, handle_error, hex_to_rgb, rgb_to_hex, standard_response


class TestColorHelpers(unittest.TestCase):

    def test_hex_to_rgb(self):
        self.assertEqual(hex_to_rgb('#FF6B6B'), (255, 107, 107))
        self.assertEqual(hex_to_rgb('#333'), (51, 51, 51))
        self.assertEqual(hex_to_rgb('hsl(0, 100%, 50%)'), (255, 0, 0))

    def test_invalid_color_falls_back_to_gray(self):
        self.assertEqual(hex_to_rgb('#zzzzzz'), (128, 128, 128))

    def test_rgb_to_hex(self):
        self.assertEqual(rgb_to_hex(255, 107, 107), '#ff6b6b')


class TestResponses(unittest.TestCase):

    def test_standard_response(self):
        self.assertEqual(standard_response(True, 'ok', node_id='x'),
                         {'success': True, 'message': 'ok', 'node_id': 'x'})

    def test_handle_error(self):
        logger = logging.getLogger('mindmap.test_utils')
        with self.assertLogs(logger, level='ERROR'):
            message = handle_error(ValueError('boom'), logger, 'Failed')
        self.assertEqual(message, 'Failed: boom')

    def test_generate_node_id(self):
        ids = {generate_node_id() for _ in range(50)}
        self.assertEqual(len(ids), 50)
