# jsonpull

A pull parser for JSON. Instead of turning a whole document into Python
objects in one go, you move through it with an `Iterator` and ask for the
next value in the shape you expect: a string, an integer of a given width, a
float, a bool, null, or the next field of an object. Values you do not need
can be skipped, or captured as raw bytes. Input can be bytes, a string, or a
binary reader that is consumed in chunks.

## Installing

```
pip install jsonpull
```

## Getting an iterator

All in `jsonpull.iterator`:

- `parse_bytes(data, case_sensitive=False, sloppy=False)` reads bytes in memory.
- `parse_string(text, case_sensitive=False, sloppy=False)` reads a `str`
  (encoded as UTF-8).
- `parse(reader, buffer_size=4096, case_sensitive=False, sloppy=False)` reads
  from any object with a binary `read(n)` method, refilling its buffer
  `buffer_size` bytes at a time.

An existing `Iterator` can be pointed at new input with `reset_bytes(data)`
or `reset(reader)`.

## Reading objects

`read_object()` returns the next field name, or `""` when the object ends
(a `null` in place of the object also gives `""`). After a field name, read
its value with whichever reader fits, or `skip()` it.

```python
from jsonpull.iterator import parse_string

it = parse_string('{"name": "widget", "tags": ["a", "b"], "size": 3}')
name, size = None, None
field = it.read_object()
while field:
    if field == "name":
        name = it.read_string()
    elif field == "size":
        size = it.read_int()
    else:
        it.skip()
    field = it.read_object()

assert (name, size) == ("widget", 3)
```

Objects can also be walked with a callback. `read_object_cb(callback)` and
`read_map_cb(callback)` call `callback(iterator, field)` for each field; the
callback reads the value and returns `True` to go on or `False` to stop,
in which case the method returns `False`.

```python
values = {}

def collect(it, field):
    values[field] = it.read_int()
    return True

it = parse_string('{"a": 1, "b": 2}')
assert it.read_object_cb(collect)
assert values == {"a": 1, "b": 2}
```

## Reading scalars

- `read_string()` decodes escapes, including `\uXXXX` and surrogate pairs;
  `null` reads as `""`. `read_string_as_slice()` returns the raw bytes
  between the quotes, escapes left as they are.
- `read_bool()` reads `true` or `false`; `read_nil()` consumes a `null` and
  returns `True`, or leaves the input alone and returns `False`.
- `read_int8`, `read_uint8`, `read_int16`, `read_uint16`, `read_int32`,
  `read_uint32`, `read_int64`, `read_uint64` check the value fits the width;
  `read_int` and `read_uint` are the 64-bit ones. An out-of-range value, or a
  number with a fractional part where an integer is expected, raises
  `JsonIterError`.
- `read_float64()` reads a double; `read_float32()` rounds to single
  precision.
- `read_big_int()` reads an integer of any size; `read_big_float()` reads a
  number exactly as a `decimal.Decimal`.
- `read_number()` returns the literal text as a `jsonpull.number.Number`, a
  `str` subclass with `float64()` and `int64()` conversions that raise
  `ValueError` when the text is invalid or out of range.
  `cast_json_number(value)` gives the text of a `Number`, or `None` for
  anything else.

## Skipping and capturing

`skip()` passes over the next value of any kind. `skip_and_return_bytes()`
does the same and returns the bytes it passed over;
`skip_and_append_bytes(buf)` returns `buf` followed by those bytes.

```python
it = parse_string('{"raw":[1, 2, 3]}')
assert it.read_object() == "raw"
assert it.skip_and_return_bytes() == b"[1, 2, 3]"
```

By default skipping validates what it passes over. With `sloppy=True`,
`skip()` only tracks brackets and string boundaries and does not check the
contents, which is faster on trusted input.

Nesting deeper than 10000 levels raises `JsonIterError` ("exceeded max
depth") when skipping or walking objects with callbacks.

## Pools

`IteratorPool(case_sensitive=False, sloppy=False)` hands out reusable
iterators and is safe to share between threads:

```python
from jsonpull.iterator import IteratorPool

pool = IteratorPool()
it = pool.borrow_iterator(b'{"count": 42}')
try:
    assert it.read_object() == "count"
    assert it.read_int() == 42
finally:
    pool.return_iterator(it)
```

Each iterator has an `attachment` slot for your own data; it is cleared when
the iterator goes back to the pool.

## Helpers

- `jsonpull.objects.field_hash(name, case_sensitive)` gives a signed 64-bit
  FNV-1a hash of a field name, lower-cased first unless `case_sensitive` is
  true. The iterator's `case_sensitive` setting selects the same folding for
  field names it hashes.
- `jsonpull.strings.encode_rune(code_point)` gives the UTF-8 bytes of a code
  point, with invalid ones (surrogates, out of range) replaced by U+FFFD.
- `jsonpull.numbers.validate_float(text)` returns why `text` is not an
  acceptable float literal, or `None`.
- `jsonpull.skipping.find_string_end(data)` finds the end of a string body:
  the index just past the closing quote (or -1) and whether escapes were seen.

## Errors

Malformed input raises `jsonpull.cursor.JsonIterError`, a `ValueError`
whose `operation`, `message`, `offset` and `context` attributes name the
failing operation and show the bytes around the failure.

## What it does not do

There is no reader for arrays element by element, and no call that turns a
whole document into Python lists and dicts; arrays can only be skipped or
captured as raw bytes. The package only reads: it has no writer for
producing JSON, and it does not bind documents to classes.