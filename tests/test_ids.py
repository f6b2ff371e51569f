import pytest

from library_api.app.core.errors import InvalidIdentifier
from library_api.app.core.ids import new_record_id, parse_record_id


def test_new_ids_are_unique_and_parseable():
    first, second = new_record_id(), new_record_id()
    assert first != second
    assert parse_record_id(first) == first


def test_parse_normalises_case():
    assert parse_record_id("ABCDEF" + "0" * 26) == "abcdef" + "0" * 26


@pytest.mark.parametrize("value", [None, 42, "", "abc", "g" * 32, "0" * 33])
def test_parse_rejects_malformed(value):
    with pytest.raises(InvalidIdentifier):
        parse_record_id(value)
