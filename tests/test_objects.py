import io

import pytest

from jsonpull.cursor import JsonIterError
from jsonpull.objects import ObjectReader, field_hash


def test_empty_object():
    assert ObjectReader('{}').read_object() == ""
    calls = []
    assert ObjectReader('{}').read_object_cb(lambda it, f: calls.append(f) or True)
    assert calls == []


def test_one_field():
    r = ObjectReader('{"a": "stream"}')
    assert r.read_object() == "a"
    assert r.read_string() == "stream"
    assert r.read_object() == ""


def test_one_field_cb():
    seen = []

    def cb(it, field):
        seen.append((field, it.read_string()))
        return True

    assert ObjectReader('{"a": "stream"}').read_object_cb(cb) is True
    assert seen == [("a", "stream")]


def test_two_fields():
    r = ObjectReader('{ "a": "stream" , "c": "d" }')
    assert r.read_object() == "a"
    assert r.read_string() == "stream"
    assert r.read_object() == "c"
    assert r.read_string() == "d"
    assert r.read_object() == ""


def test_null_object():
    assert ObjectReader("null").read_object() == ""
    assert ObjectReader("null").read_map_cb(lambda it, f: False) is True


def test_callback_stops_early():
    r = ObjectReader('{"a":"x","b":"y"}')
    assert r.read_map_cb(lambda it, f: False) is False
    assert r.depth == 0


def test_read_from_reader_small_buffer():
    r = ObjectReader(reader=io.BytesIO(b'{\n\t"agency": "x",\n\t"shift": "Standard"\n}'), buffer_size=3)
    fields = {}

    def cb(it, field):
        fields[field] = it.read_string()
        return True

    assert r.read_object_cb(cb)
    assert fields == {"agency": "x", "shift": "Standard"}


@pytest.mark.parametrize("text", ['{"a" 1}', "[1]", '{1:2}', '{"a":"b" "c":"d"}'])
def test_errors(text):
    def cb(it, field):
        it.read_string()
        return True

    with pytest.raises(JsonIterError):
        ObjectReader(text).read_object_cb(cb)


def test_field_hash_values():
    assert field_hash("", True) == 0x811C9DC5
    assert field_hash("ABC", False) == field_hash("abc", True)
    assert field_hash("ABC", True) != field_hash("abc", True)


def test_read_field_hash_matches():
    assert ObjectReader('"Abc" : 1').__class__._read_field_hash(ObjectReader('"Abc" : 1')) == field_hash("abc", False)
    r = ObjectReader('"A\\u0062c":1', case_sensitive=True)
    assert r._read_field_hash() == field_hash("Abc", True)