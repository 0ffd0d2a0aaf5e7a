# monads

Small, dependency-free containers for values that may be missing, operations
that may fail, and computations that thread state.

## Install

```
pip install monads
```

With the test dependencies:

```
pip install "monads[test]"
```

## Option

`monads.option.Option` either holds a value (`some`) or holds nothing
(`none`). An absent option may be given a `kind`, a type whose empty value
(`kind()`) is returned by `get()` and `or_empty()`.

```python
from monads.option import some, none, tuple_to_option, emptyable_to_option, pointer_to_option

some(42).or_else(1234)                              # 42
none(int).or_else(1234)                             # 1234
none(int).or_empty()                                # 0
none(int).get()                                     # (0, False)
some(21).map(lambda i: (i * 2, True)).must_get()    # 42
some("hi").map_value(str.upper).must_get()          # "HI"
list(some(7))                                       # [7]

tuple_to_option(5, False).is_absent()               # True
emptyable_to_option("").is_present()                # False
pointer_to_option(None, int).is_absent()            # True
```

`map`, `match` and `map_none` take callables returning a `(value, ok)` pair;
`flat_map` takes one returning an `Option`. `must_get()` on an absent option
raises `NoSuchElementError`.

### Encodings

```python
from monads.option import Option, some, none

some("foo").to_json()                          # '"foo"'
none(str).to_json()                            # 'null'
Option.from_json(b"null", str).get()           # ("", True)
some(42).to_text()                             # b'42'
some(42).to_binary()                           # b'\x01\x03\x04\x00T'
Option.from_binary(b"\x00", int).is_absent()   # True
Option.from_sql(b"ABC", str).must_get()        # "ABC"
Option.from_sql(None, str).is_absent()         # True
some(7).to_sql()                               # 7
```

Decoding JSON always gives a present option; `null` gives the empty value of
`kind`. The binary form is a presence byte followed by the gob wire encoding
of the value.

`monads.gob` encodes and decodes single `bool`, `int`, `float`, `complex`,
`bytes` and `str` values in the gob wire format (`encode(value)`,
`decode(data, kind)`), raising `GobError` on failure.

`monads.sqlconvert` turns values into database values (`None`, `bool`,
64-bit `int`, `float`, `bytes`, `str`, `datetime`) with `convert_value`, and
database values into a requested type with `convert_assign(kind, src)`,
raising `ConversionError` when information would be lost. An object takes
part as a value through a `to_sql()` method, and a class takes part as a
scan target through a `scan(src)` classmethod; `Option.from_sql` uses the
latter when `kind` provides it.

## Result

`monads.result.Result` holds either a value or an exception.

```python
from monads.result import Result, ok, err, errf, try_, tuple_to_result

ok(42).or_else(1234)                        # 42
err(ValueError("bad"), int).or_empty()      # 0
errf("boom: %s", "disk").error()            # Exception('boom: disk')
try_(lambda: 42).get()                      # (42, None)
tuple_to_result(1, KeyError("k")).is_error()  # True
ok(42).map(lambda i: i * 2).must_get()      # 84
ok("foo").to_json()                         # '{"result":"foo"}'
Result.from_json('{"error":{"message":"an error"}}').is_error()  # True
```

`map`, `map_err` and `match` call plain functions; an exception raised
inside them becomes an `Err`. `must_get()` on an error result raises the
stored exception.

## State

`monads.state.State` wraps a function from a state to a
`(result, new_state)` pair.

```python
from monads.state import new_state, return_state

counter = new_state(lambda s: (s, s + 1))
counter.run(10)                   # (10, 11)
return_state("x").run(3)          # ("x", 3)
counter.get().run(5)              # (5, 5)
counter.put(0).run(5)             # (None, 0)
counter.modify(lambda s: s * 2).run(5)  # (None, 10)
```

## Type classes

`monads.typeclass` defines the structural interfaces (`typing.Protocol`)
`Filterable`, `Foldable`, `Monadic` and `Monoid` for containers that want to
advertise those operations.

## What is not included

There are no asynchronous task, future or `Either` types, and no
command-line tool; the package is a library of the containers above.