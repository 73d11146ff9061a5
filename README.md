# fdoonboard

Building blocks for device onboarding:

- `fdoonboard.cborparser`: a CBOR array parser that splits only the
  top-level array of a message into its raw items. Items can then be read,
  replaced and written back byte for byte.
- `fdoonboard.cbor_items`: the low-level helpers it is built on
  (`MajorType`, `major_type_of`, `encode_item_start`, `read_len`) and the
  `ArrayParseError` exception.
- `fdoonboard.onboarding`: the "onboarding performed" marker file and the
  randomised delay between rendezvous retries.
- `fdoonboard.keygen`: generation of P-256 keys and self-signed
  certificates.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Parsing CBOR arrays

```python
from fdoonboard.cborparser import parse_array

array = parse_array(bytes([0x82, 0x01, 0x02]), size=2)
assert array.get(0) == 1
array.set(1, 3)
assert array.serialize() == bytes([0x82, 0x01, 0x03])
```

- `parse_array(data, size)` parses one array, which may be tagged. With a
  fixed `size`, a different number of items raises `ArrayParseError`
  (kind `"invalid_number_of_elements"`). With `size=None`, any length is
  accepted.
- `read_array(stream, size)` does the same from a binary stream. It raises
  `ArrayParseError` with kind `"no_data"` when the stream is already at
  its end.
- `parse_many(data, size)` reads consecutive arrays until the data runs
  out.
- `ParsedArray` supports the following:
  - `get(n)` decodes an item.
  - `get_raw(n)` and `raw_values()` return encoded bytes.
  - `serialize()` re-encodes the array.
  - `push(item)` appends an item, but only to arrays without a fixed size.
  - `set(n, value)` replaces an item, but only in arrays with a fixed size.
  - Indexes out of range raise `IndexError`.
- `ParsedArrayBuilder(size)` collects items with `set` and builds the
  array with `build()`. `build()` raises `ValueError` if any item was left
  unset.

Array and tag headers are written as single bytes only: an array being
serialized may hold at most 24 items.

## Onboarding helpers

- `marker_file_location()` returns the marker path. The default is
  `/etc/device_onboarding_performed`; the environment variable
  `DEVICE_ONBOARDING_EXECUTED_MARKER_FILE_PATH` overrides it.
- `mark_device_onboarding_executed()` writes the marker file and returns
  its path.
- `get_delay_between_retries(rv_entry_delay, rng=None)` returns whole
  seconds to wait:
  - for a delay of `0`, between 90 and 150;
  - otherwise, the given delay plus or minus a quarter.
- `sleep_between_retries(rv_entry_delay, sleep=time.sleep)` sleeps for
  that delay and returns it.

## Keys and certificates

```python
from fdoonboard.keygen import Subject, generate_key_and_cert

key_path, cert_path = generate_key_and_cert(Subject.OWNER, "keys")
```

This writes `owner_key.der` and `owner_cert.pem` into the directory, which
must already exist. The certificate is self-signed with SHA-256 and is
valid for 365 days. The subjects are `diun`, `manufacturer`, `device-ca`
and `owner`. `organization` and `country` default to `Example` and `US`.

## What this package does not do

This package is a library only:

- It installs no command-line program.
- It does not carry out the onboarding protocol exchanges with rendezvous
  or owner services.
- It does not start or supervise any onboarding services.