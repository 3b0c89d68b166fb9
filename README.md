# sigmacomp

Building blocks for turning statements about sigma zero-knowledge proofs into
code. The package covers the parts of such a compiler that do not depend on any
particular elliptic-curve group.

## Modules

- `sigmacomp.expr` parses a small expression language: integer literals (with
  optional type suffixes such as `5u128`), identifiers and `::` paths, unary
  `-`, `!` and `&`, the usual binary operators, assignment, parentheses,
  function calls, method calls and field access. `tokenize(text)` splits text
  into tokens and `parse_expr(text)` returns a tree of `Expr` nodes (`IntLit`,
  `Name`, `Unary`, `Reference`, `Paren`, `Binary`, `Call`, `MethodCall`,
  `Field`, `Assign`). `Expr.render()` gives back text that parses to the same
  tree. Malformed text raises `ExprParseError`.
- `sigmacomp.types` computes the type of an arithmetic expression.
  `expr_type(vars, expr)` returns an `AExprType` with a `kind` (`Kind.SCALAR`
  or `Kind.POINT`), `is_pub`, `is_vec` and, for public constant Scalars that
  fit in a signed 128-bit integer, the constant value in `val`. Arithmetic
  expressions may use variables from the dictionary, integer constants, `+`,
  `-` (binary or unary), `*`, `<<` between constants, `sum(v)` of a vector, and
  parentheses. Invalid expressions — an unknown variable, a Scalar added to a
  Point, two Points or two private values multiplied, a shift of a
  non-constant — raise `ExprTypeError`. `aexpr_type_from_str("pub vec Scalar")`
  (or the short form `"pvS"`) and `vardict_from_strs(pairs)` build types and
  variable dictionaries. Subclass `AExprFold` and override its hooks
  (`ident`, `const_i128`, `neg`, `paren`, `add_scalars`, `mul_scalar_point`,
  ...) to write your own fold over expressions.
- `sigmacomp.tokens` turns an arithmetic expression into code text that
  evaluates it. `expr_type_tokens(vars, expr)` returns the type and the text;
  constants become `Scalar::from_u128(...)` (with `.neg()` for negatives),
  operations on vectors become calls such as `add_vecs`, `mul_nv_vec` or
  `sigmacomp::vecutils::sum_vec`. `expr_type_tokens_id_closure` lets a callback
  choose the text for each variable. `AExprTokenFold`, `const_i128_tokens`,
  `tokens_paren_if_needed` and `tokens_add_maybe_vec` / `tokens_sub_maybe_vec` /
  `tokens_mul_maybe_vec` are available on their own.
- `sigmacomp.syntax` handles tagged declarations. `parse_tagged_scalar("pub vec x")`
  returns a `TaggedScalar` (tags `pub`, `rand`, `vec`; `pub` and `rand` exclude
  each other) and `parse_tagged_point("cind const A")` a `TaggedPoint` (tags
  `cind`, `const`, `vec`). Misplaced tags raise `TagError`.
  `taggedvardict_from_strs`, `taggedvardict_to_vardict` and
  `collect_cind_points` work on dictionaries of such declarations.
- `sigmacomp.vecutils` holds componentwise vector arithmetic (`add_vecs`,
  `add_vec_nv`, `add_nv_vec`, the `sub_` and `mul_` counterparts, and
  `sum_vec`).
- `sigmacomp.rangeutils` holds the bit decompositions used by range statements
  over a prime field, with scalars as Python integers modulo an odd prime:
  `bit_decomp_vartime`, `bit_decomp`, `bitrep_scalars_vartime` and
  `compute_bitrep`. Bounds that cannot be represented raise
  `VerificationFailure`.
- `sigmacomp.dumper` sends diagnostic text to standard output, or, after
  `dump_to_string()`, to a buffer that `dump_buffer()` returns and clears.

## Installing

From a checkout of the project:

```
pip install .
```

## Example

```python
from sigmacomp.expr import parse_expr
from sigmacomp.types import expr_type, vardict_from_strs
from sigmacomp.tokens import expr_type_tokens

vars = vardict_from_strs([("a", "S"), ("A", "pP"), ("v", "vS")])

print(expr_type(vars, parse_expr("(v-1)*(A+A)")))   # vec Point
print(expr_type(vars, parse_expr("1<<20")).val)      # 1048576

_, code = expr_type_tokens(vars, parse_expr("-77"))
print(code)   # Scalar::from_u128(77u128).neg()
```

Range representations over a prime-order field:

```python
from sigmacomp.rangeutils import bitrep_scalars_vartime, compute_bitrep

modulus = 2**252 + 27742317777372353535851937790883648493
reps = bitrep_scalars_vartime(100, modulus)   # [1, 2, 4, 8, 16, 32, 36]
bits = compute_bitrep(99, reps, modulus)
assert sum(r for r, b in zip(reps, bits) if b) == 99
```

## What the package does not do

It has no command-line tool and does not produce or check proofs. There is no
group or curve arithmetic, no parser for whole protocol specifications with
`AND`/`OR`/`THRESH` statement trees, and no substitution or disjunction
rewriting of such statements. The generated code text is returned as strings
for another tool to use; nothing in this package runs it.

## Running the tests

```
pip install -e .[test]
pytest
```