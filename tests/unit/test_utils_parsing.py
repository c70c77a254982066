import pytest

from zee.utils.parsing import extract_json_array


def test_bare_array():
    assert extract_json_array('[{"a": 1}]') == [{"a": 1}]


def test_array_inside_prose():
    text = 'Sure! Here you go: [{"a": "has ] bracket"}] Hope it helps.'
    assert extract_json_array(text) == [{"a": "has ] bracket"}]


def test_fenced_block():
    assert extract_json_array("```json\n[1, 2]\n```") == [1, 2]


def test_nothing_to_parse():
    with pytest.raises(ValueError):
        extract_json_array("no arrays here")


def test_objects_are_skipped_for_the_following_array():
    text = 'Note:\n```json\n{"plan": "below"}\n```\n[{"instructions": ["a"]}]'
    assert extract_json_array(text) == [{"instructions": ["a"]}]


def test_bare_object_is_not_an_array():
    with pytest.raises(ValueError):
        extract_json_array('{"instructions": ["a"]}')
