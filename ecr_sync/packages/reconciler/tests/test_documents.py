import json

import pytest

from ..documents import documents_equal, parse_policy_document, read_policy_document


def equal(a: str, b: str) -> bool:
    return documents_equal(parse_policy_document(a), parse_policy_document(b))


class TestDocumentsEqual:
    def test_whitespace_is_ignored(self):
        assert equal('{"rules":[{"a":1}]}', '{\n  "rules": [ { "a": 1 } ]\n}\n')

    def test_key_order_is_ignored(self):
        assert equal('{"a": 1, "b": {"c": 2, "d": 3}}', '{"b": {"d": 3, "c": 2}, "a": 1}')

    def test_array_order_matters(self):
        assert not equal('{"rules": [1, 2]}', '{"rules": [2, 1]}')

    def test_numbers_compare_by_value(self):
        assert equal('{"countNumber": 1}', '{"countNumber": 1.0}')
        assert equal('{"countNumber": 1e2}', '{"countNumber": 100}')
        assert not equal('{"countNumber": 1}', '{"countNumber": 2}')

    def test_booleans_are_not_numbers(self):
        assert not equal('{"a": true}', '{"a": 1}')
        assert not equal('{"a": false}', '{"a": 0}')
        assert equal('{"a": true}', '{"a": true}')

    def test_null_is_only_equal_to_null(self):
        assert equal('{"a": null}', '{"a": null}')
        assert not equal('{"a": null}', "{}")
        assert not equal('{"a": null}', '{"a": false}')

    def test_strings_are_not_numbers(self):
        assert not equal('{"a": "1"}', '{"a": 1}')

    def test_extra_keys_differ(self):
        assert not equal('{"a": 1}', '{"a": 1, "b": 2}')

    def test_nested_differences_are_found(self):
        assert not equal(
            '{"rules": [{"selection": {"countNumber": 14}}]}',
            '{"rules": [{"selection": {"countNumber": 30}}]}',
        )

    def test_array_and_object_differ(self):
        assert not equal("[]", "{}")


def test_read_policy_document(tmp_path):
    path = tmp_path / "lifecycle.json"
    path.write_text('{"rules": []}', encoding="utf-8")
    assert read_policy_document(path) == '{"rules": []}'


def test_read_missing_document_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_policy_document(tmp_path / "missing.json")


def test_parse_invalid_document_raises():
    with pytest.raises(json.JSONDecodeError):
        parse_policy_document("{not json")


@pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
def test_parse_non_json_constant_raises(constant):
    with pytest.raises(ValueError, match="invalid JSON constant"):
        parse_policy_document(f'{{"x": {constant}}}')
