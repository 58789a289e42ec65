# ztdlib

Zero-knowledge-friendly data structures in pure Python, with no dependencies
outside the standard library.

## Modules

- `ztdlib.belt` — arithmetic in the Goldilocks field (p = 2^64 − 2^32 + 1).
  `Belt` is an immutable field element supporting `+`, `-`, unary `-`, `*`,
  `/`, `**`, `inv()`, `ordered_root()` (raises `FieldError` when the value is
  not a power of two with a known root), and `Belt.from_bytes` /
  `Belt.to_bytes` for little-endian 32-bit words. The same operations are
  available on plain integers: `badd`, `bsub`, `bneg`, `bmul`, `bpow`, `binv`,
  `reduce`, and the Montgomery helpers `montify`, `montiply`, `montwopow`,
  `mont_reduction`.
- `ztdlib.bpoly` — polynomials over the field as lists of `Belt`, lowest
  coefficient first: `degree`, `is_zero_poly`, `bpsub`, `bpmul`, `bpscal`,
  `bpdvr` (returns quotient and remainder; raises `ZeroDivisionError` on a
  zero divisor) and `bpegcd` (returns `d, u, v` with `u*a + v*b == d`).
- `ztdlib.base58` — `b58encode` / `b58decode` with the Bitcoin alphabet.
- `ztdlib.noun` — nouns: non-negative `int` atoms and `Cell` pairs, built
  with `cons`. Text form via `noun_to_string`, a JSON-friendly form (hex
  strings and two-item lists) via `noun_to_json` / `noun_from_json`, codecs
  for common shapes (`encode_bool`/`decode_bool`, `encode_string`/
  `decode_string`, `decode_int`, `encode_tuple`/`decode_tuple`,
  `encode_list`/`decode_list`, `encode_option`/`decode_option`,
  `encode_zeroable`/`decode_zeroable`), and the `jam` / `cue` bit
  serialisation with back-references. Decoders raise `ValueError` on nouns of
  the wrong shape.
- `ztdlib.tip5` — the Tip5 permutation `permute` and the sponge hashes
  `hash_varlen` (any number of elements) and `hash_fixed` (exactly ten).
- `ztdlib.hash` — `Digest`, five field elements with a base58 text form
  (`str(digest)`, `Digest.from_base58`), byte and noun conversions, and
  structural hashing: `hash_noun`, `hash_u64`, `hash_bool`, `hash_unit`,
  `hash_pair`, `hash_tuple`, `hash_list`, `hash_option`, `hash_zeroable`,
  `hash_string`, `hash_of_noun`.
- `ztdlib.zset` / `ztdlib.zmap` — `ZSet` and `ZMap`, treaps ordered by the
  hashes of their member (or key) nouns, with `insert`, `in`, `len`,
  iteration, `to_noun`, `from_noun` and `hash`. Values are taken to be nouns
  unless an `encode` (or `encode_key` / `encode_value`) function is given.
- `ztdlib.cheetah` — the Cheetah curve over the sextic extension field:
  `F6lt`, `f6_mul`, `f6_inv`, `f6_div`, `CheetahPoint` (base58 and noun
  forms, `in_curve`, `identity`), `ch_add`, `ch_double`, `ch_neg`, `ch_scal`
  and `trunc_g_order`. Errors are raised as `CheetahError`.

## Installation

```
pip install .
```

Install `pip install .[test]` and run `pytest` to check it.

## Example

```python
from ztdlib.noun import cons, jam, cue, noun_to_string
from ztdlib.hash import hash_of_noun, Digest

n = cons(1, cons(2, 3))
data = jam(n)
assert cue(data) == n
print(noun_to_string(n))            # [1 2 . 3]

digest = hash_of_noun(n)
text = str(digest)                  # base58
assert Digest.from_base58(text) == digest
```

```python
from ztdlib.zmap import ZMap
from ztdlib.noun import encode_string

m = ZMap(encode_key=encode_string)
m.insert("ver", 10)
m.insert("ve2", 11)
assert m.get("ver") == 10
assert len(m) == 2
```

## Limits

- `cue` raises `ValueError` on input that is not a valid jam.
- `hash_of_noun` only hashes nouns whose atoms fit in 64 bits, and
  `hash_string` only strings of at most eight UTF-8 bytes; both raise
  `ValueError` otherwise.
- This is a library only: there is no command-line tool, no network client
  and no transaction or wallet layer.