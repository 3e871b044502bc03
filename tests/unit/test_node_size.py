"""Unit tests for the heuristic node size provider."""

import pytest

from mindmap.node_size import calculate_node_size, measure_text_width


def test_short_text_uses_minimum_width():
    size = calculate_node_size({'text': 'a'}, font_size=10)
    # four characters minimum plus padding
    assert size.width == pytest.approx(10 * 4 + 15)
    assert size.height == 22


def test_long_text_is_wider():
    short = calculate_node_size({'text': 'abc'}, font_size=14)
    long = calculate_node_size({'text': 'a much longer node label'}, font_size=14)
    assert long.width > short.width


def test_wide_characters_count_more():
    assert measure_text_width('漢字漢字', 10) > measure_text_width('abcd', 10)


def test_editing_minimum_is_wider():
    idle = calculate_node_size({'text': 'a'}, font_size=10)
    editing = calculate_node_size({'text': 'a'}, edit_text='a', is_editing=True, font_size=10)
    assert editing.width > idle.width


def test_multiline_height():
    one = calculate_node_size({'text': 'line'}, font_size=20)
    three = calculate_node_size({'text': 'line\nline\nline'}, font_size=20)
    assert one.height == 28
    assert three.height == pytest.approx(28 + 2 * 20 * 1.2)


def test_links_add_icon_width():
    plain = calculate_node_size({'text': 'node'}, font_size=14)
    linked = calculate_node_size({'text': 'node', 'links': ['https://example.com']}, font_size=14)
    assert linked.width > plain.width


def test_image_in_note():
    node = {'text': 'pic', 'note': '<img src="a.png" width="200" height="80">'}
    size = calculate_node_size(node, font_size=14)
    assert size.image_height == 80
    assert size.width >= 210
    assert size.height == 22 + 80


def test_markdown_image_uses_default_box():
    size = calculate_node_size({'text': 'pic', 'note': '![alt](img.png)'}, font_size=14)
    assert size.image_height == 105


def test_node_font_size_used_without_override():
    small = calculate_node_size({'text': 'same text', 'font_size': 10})
    large = calculate_node_size({'text': 'same text', 'font_size': 20})
    assert large.width > small.width
