#!/usr/bin/env python3
# synthetic_js.py · v0.2.0
"""
Generate synthetic—yet lexically consistent—JavaScript snippets.

Every variable is declared with ``let`` before it is used, every value
matches the type of the variable it is bound to, and names declared inside
an ``if`` / ``else`` body are never referenced once that body closes.

Major features
--------------
* Deterministic output with --seed
* Plugin architecture for statement generators
* Scope-aware recursive ``if`` / ``if … else`` blocks with bounded depth
* No hidden global state
* --out to save directly to disk

Usage
-----
python javascript_gen.py 400
python javascript_gen.py 800 --seed 42 --max-depth 4 --out fake.js
"""
from __future__ import annotations

import argparse
import logging
import random
import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple, TypeVar

__all__ = [
    "CondKind",
    "Context",
    "JsConfig",
    "ScopeError",
    "ScopeStack",
    "VarType",
    "build_js",
    "generate",
    "generate_program",
]
__version__ = "0.2.0"

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ──────────────────────────────────────────────────────────────
# Types
# ──────────────────────────────────────────────────────────────


class VarType(Enum):
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"


class CondKind(Enum):
    IF = "if"
    IF_ELSE = "if_else"


class ScopeError(RuntimeError):
    """Broken scope-stack contract (unbalanced push/pop, duplicate name, …)."""


Binding = Tuple[str, VarType]

# ──────────────────────────────────────────────────────────────
# Configuration
# ──────────────────────────────────────────────────────────────

ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

JS_KEYWORDS = frozenset({
    "await","break","case","catch","class","const","continue","debugger",
    "default","delete","do","else","enum","export","extends","false","finally",
    "for","function","if","implements","import","in","instanceof","interface",
    "let","new","null","package","private","protected","public","return",
    "static","super","switch","this","throw","true","try","typeof","var",
    "void","while","with","yield","undefined","NaN","Infinity","arguments",
    "eval","of","async","get","set",
})


@dataclass(frozen=True, slots=True)
class JsConfig:
    size: int = 400
    block_size: int = 60
    seed: Optional[int] = None
    max_id_length: int = 12
    max_int: int = 128
    max_indent_level: int = 3
    max_attempts: int = 10_000
    indent: str = "    "
    var_types: Sequence[VarType] = (VarType.NUMBER, VarType.STRING, VarType.BOOLEAN)
    comparators: Sequence[str] = ("<", ">", "<=", ">=", "===", "!==")
    weights: Dict[str, float] = field(default_factory=lambda: {
        "declaration": 1.0,
        "assignment":  1.0,
        "conditional": 1.0,
    })

    def __post_init__(self) -> None:
        for name in ("max_id_length", "max_int", "max_indent_level", "max_attempts"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        # conditionals go empty at max depth, so something else must always fire
        if not any(self.weights.get(k, 0) > 0 for k in ("declaration", "assignment")):
            raise ValueError("weights need a positive 'declaration' or 'assignment' entry")


# ──────────────────────────────────────────────────────────────
# Lexical scopes
# ──────────────────────────────────────────────────────────────


class ScopeStack:
    """
    Stack of symbol tables, outermost first.

    The root scope is created with the stack and can never be popped, so
    ``depth`` is always at least 1.
    """

    def __init__(self, rng: random.Random) -> None:
        self.rng = rng
        self._scopes: List[Dict[str, VarType]] = [{}]
        self.pushes = 0
        self.pops = 0

    @property
    def depth(self) -> int:
        return len(self._scopes)

    def __len__(self) -> int:
        return len(self._scopes)

    def __contains__(self, name: object) -> bool:
        return name in self._scopes[-1]

    def push(self) -> None:
        self._scopes.append({})
        self.pushes += 1

    def pop(self) -> None:
        if len(self._scopes) <= 1:
            raise ScopeError("Cannot pop the root scope")
        self._scopes.pop()
        self.pops += 1

    @contextmanager
    def branch(self) -> Iterator[Dict[str, VarType]]:
        self.push()
        try:
            yield self._scopes[-1]
        finally:
            self.pop()

    def declare(self, name: str, var_type: VarType) -> None:
        scope = self._scopes[-1]
        if name in scope:
            raise ScopeError(f"{name!r} already declared in this scope")
        scope[name] = var_type

    def lookup(self, var_type: Optional[VarType] = None) -> Optional[Binding]:
        for scope in reversed(self._scopes):
            # shuffled so early declarations are not favoured
            names = list(scope)
            self.rng.shuffle(names)
            for name in names:
                if var_type is None or scope[name] is var_type:
                    return name, scope[name]
        return None

    def visible(self) -> Dict[str, VarType]:
        """Every name reachable from the innermost scope, inner bindings winning."""
        out: Dict[str, VarType] = {}
        for scope in self._scopes:
            out.update(scope)
        return out


# ──────────────────────────────────────────────────────────────
# Context passed to generators
# ──────────────────────────────────────────────────────────────


@dataclass(slots=True)
class Context:
    cfg: JsConfig
    rng: random.Random
    scopes: ScopeStack

    @classmethod
    def fresh(cls, cfg: JsConfig) -> "Context":
        rng = random.Random(cfg.seed)
        return cls(cfg=cfg, rng=rng, scopes=ScopeStack(rng))

    @property
    def depth(self) -> int:
        return self.scopes.depth

    @property
    def indentation(self) -> str:
        return self.cfg.indent * (self.scopes.depth - 1)

    # primitives ------------------------------------------------------------

    def random_int(self, bound: Optional[int] = None) -> int:
        bound = self.cfg.max_int if bound is None else bound
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return self.rng.randrange(bound)

    def random_identifier(self, max_length: Optional[int] = None) -> str:
        max_length = max_length or self.cfg.max_id_length
        length = self.rng.randint(1, max_length)
        return "".join(self.rng.choice(ALPHABET) for _ in range(length))

    def random_choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise ValueError("Cannot choose from an empty sequence")
        return seq[self.rng.randrange(len(seq))]


# ──────────────────────────────────────────────────────────────
# Values & conditions
# ──────────────────────────────────────────────────────────────


def generate_value(ctx: Context, var_type: VarType) -> str:
    if var_type is VarType.NUMBER:
        return str(ctx.random_int(ctx.cfg.max_int))
    if var_type is VarType.STRING:
        return f'"{ctx.random_identifier(ctx.cfg.max_id_length)}"'
    if var_type is VarType.BOOLEAN:
        return "true" if ctx.random_int(2) else "false"
    raise ValueError(f"Unknown variable type: {var_type!r}")


def generate_condition(ctx: Context) -> str:
    found = ctx.scopes.lookup()
    if found is None:
        return generate_value(ctx, VarType.BOOLEAN)
    name, var_type = found
    op = ctx.random_choice(ctx.cfg.comparators)
    return f"{name} {op} {generate_value(ctx, var_type)}"


# ──────────────────────────────────────────────────────────────
# Generator registry
# ──────────────────────────────────────────────────────────────

GeneratorFn = Callable[[Context], str]
_REGISTRY: Dict[str, GeneratorFn] = {}


def register(kind: str) -> Callable[[GeneratorFn], GeneratorFn]:
    def inner(fn: GeneratorFn) -> GeneratorFn:
        if kind in _REGISTRY:
            raise ValueError(f"Duplicate generator: {kind}")
        _REGISTRY[kind] = fn
        return fn

    return inner


# ──────────────────────────────────────────────────────────────
# Statement generators
# ──────────────────────────────────────────────────────────────


def generate_declaration(ctx: Context, var_type: VarType) -> str:
    for _ in range(ctx.cfg.max_attempts):
        name = ctx.random_identifier()
        value = generate_value(ctx, var_type)
        if name not in ctx.scopes and name not in JS_KEYWORDS:
            ctx.scopes.declare(name, var_type)
            return f"let {name} = {value}"
    raise ScopeError("Identifier space exhausted")


def generate_assignment(ctx: Context) -> str:
    found = ctx.scopes.lookup()
    if found is None:
        return generate_declaration(ctx, ctx.random_choice(ctx.cfg.var_types))
    name, var_type = found
    return f"{name} = {generate_value(ctx, var_type)}"


def generate_conditional(ctx: Context, kind: CondKind) -> str:
    if ctx.depth >= ctx.cfg.max_indent_level:
        logger.debug("depth %d reached, skipping %s block", ctx.depth, kind.value)
        return ""

    pad = ctx.indentation
    cond = generate_condition(ctx)
    with ctx.scopes.branch():
        then_body = generate(ctx, ctx.cfg.block_size)
    code = f"if ({cond}) {{\n{then_body}{pad}}}"

    if kind is CondKind.IF_ELSE:
        with ctx.scopes.branch():
            else_body = generate(ctx, ctx.cfg.block_size)
        code += f" else {{\n{else_body}{pad}}}"
    return code


@register("declaration")
def gen_declaration(ctx: Context) -> str:
    return generate_declaration(ctx, ctx.random_choice(ctx.cfg.var_types))


@register("assignment")
def gen_assignment(ctx: Context) -> str:
    return generate_assignment(ctx)


@register("conditional")
def gen_conditional(ctx: Context) -> str:
    return generate_conditional(ctx, ctx.random_choice(list(CondKind)))


# ──────────────────────────────────────────────────────────────
# Build pipeline
# ──────────────────────────────────────────────────────────────


def generate(ctx: Context, size: int) -> str:
    """
    Emit statements at the current scope depth until ``size`` characters
    are reached. Always emits at least one statement, even for ``size <= 0``.
    """
    parts: List[str] = []
    length = 0
    kinds, weights = zip(*ctx.cfg.weights.items())

    while not parts or length < size:
        kind = ctx.rng.choices(kinds, weights=weights, k=1)[0]
        chunk = _REGISTRY[kind](ctx)
        if not chunk:
            continue
        line = f"{ctx.indentation}{chunk}\n"
        parts.append(line)
        length += len(line)

    return "".join(parts)


def build_js(cfg: JsConfig) -> str:
    ctx = Context.fresh(cfg)
    logger.debug("generating %d chars (seed=%s)", cfg.size, cfg.seed)
    code = generate(ctx, cfg.size)
    if ctx.depth != 1 or ctx.scopes.pushes != ctx.scopes.pops:
        raise ScopeError(
            f"Unbalanced scopes after run: depth={ctx.depth}, "
            f"pushes={ctx.scopes.pushes}, pops={ctx.scopes.pops}"
        )
    logger.debug("generated %d chars across %d blocks", len(code), ctx.scopes.pushes)
    return code


def generate_program(size: Optional[int] = None, seed: Optional[int] = None) -> str:
    cfg = JsConfig(seed=seed) if size is None else JsConfig(size=size, seed=seed)
    return build_js(cfg)


# ──────────────────────────────────────────────────────────────
# CLI
# ──────────────────────────────────────────────────────────────


def _cli(argv: Optional[Sequence[str]] = None) -> None:
    p = argparse.ArgumentParser(description="Generate synthetic JavaScript snippets.")
    p.add_argument("size", nargs="?", type=int, default=400, help="Approx. character count")
    p.add_argument("--seed", type=int, help="Random seed for deterministic output")
    p.add_argument("--block-size", type=int, default=60, help="Character budget per if/else body")
    p.add_argument("--max-depth", type=int, default=3, help="Scope depth at which nesting stops")
    p.add_argument("--out", type=Path, help="Path to save generated code")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = JsConfig(
            size=args.size,
            block_size=args.block_size,
            seed=args.seed,
            max_indent_level=args.max_depth,
        )
        code = build_js(cfg)
    except (ScopeError, ValueError) as exc:
        print("Generation failed:", exc, file=sys.stderr)
        sys.exit(1)

    if args.out:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(code, encoding="utf-8")
        print(f"✔ Saved generated JavaScript to {args.out}")
    else:
        sys.stdout.write(code)


if __name__ == "__main__":
    _cli()
