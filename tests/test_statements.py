import re
import string

import pytest

from javascript_gen import (
    JS_KEYWORDS,
    CondKind,
    Context,
    JsConfig,
    ScopeError,
    VarType,
    generate_assignment,
    generate_condition,
    generate_conditional,
    generate_declaration,
    generate_value,
)

COND_RE = re.compile(r"^([A-Za-z]+) (<=|>=|===|!==|<|>) (.+)$")


def literal_type(value: str, max_int: int = 128) -> VarType:
    if value in ("true", "false"):
        return VarType.BOOLEAN
    if re.fullmatch(r'"[A-Za-z]+"', value):
        return VarType.STRING
    if re.fullmatch(r"\d+", value) and 0 <= int(value) < max_int:
        return VarType.NUMBER
    raise AssertionError(f"not a literal: {value!r}")


# primitives ----------------------------------------------------------------


def test_random_int_range(ctx):
    values = {ctx.random_int(5) for _ in range(500)}
    assert values == {0, 1, 2, 3, 4}
    assert all(0 <= ctx.random_int() < ctx.cfg.max_int for _ in range(200))


@pytest.mark.parametrize("bound", [0, -3])
def test_random_int_rejects_non_positive_bound(ctx, bound):
    with pytest.raises(ValueError):
        ctx.random_int(bound)


def test_random_identifier_length_and_alphabet(ctx):
    lengths = set()
    for _ in range(1000):
        ident = ctx.random_identifier()
        assert set(ident) <= set(string.ascii_letters)
        lengths.add(len(ident))
    assert lengths == set(range(1, 13))
    assert all(1 <= len(ctx.random_identifier(3)) <= 3 for _ in range(100))


def test_random_choice(ctx):
    assert ctx.random_choice(["only"]) == "only"
    with pytest.raises(ValueError):
        ctx.random_choice([])


# values & conditions -------------------------------------------------------


@pytest.mark.parametrize("var_type", list(VarType))
def test_generate_value_matches_type(ctx, var_type):
    for _ in range(50):
        assert literal_type(generate_value(ctx, var_type)) is var_type


def test_condition_without_variables_is_boolean_literal(ctx):
    assert generate_condition(ctx) in ("true", "false")


def test_condition_compares_visible_variable_with_same_type(ctx):
    ctx.scopes.declare("count", VarType.NUMBER)
    ctx.scopes.declare("label", VarType.STRING)
    for _ in range(100):
        m = COND_RE.match(generate_condition(ctx))
        assert m, "condition should be '<name> <op> <value>'"
        name, _, value = m.groups()
        assert literal_type(value) is ctx.scopes.visible()[name]


# declarations & assignments ------------------------------------------------


def test_declaration_registers_binding(ctx):
    line = generate_declaration(ctx, VarType.STRING)
    m = re.fullmatch(r'let ([A-Za-z]+) = ("[A-Za-z]+")', line)
    assert m
    assert ctx.scopes.visible() == {m.group(1): VarType.STRING}


def test_declarations_unique_within_scope():
    ctx = Context.fresh(JsConfig(seed=3, max_id_length=2))
    names = []
    for _ in range(300):
        names.append(generate_declaration(ctx, VarType.BOOLEAN).split()[1])
    assert len(names) == len(set(names))
    assert not set(names) & JS_KEYWORDS


def test_declaration_retry_cap_raises():
    ctx = Context.fresh(JsConfig(seed=0, max_id_length=1, max_attempts=50))
    with pytest.raises(ScopeError, match="exhausted"):
        for _ in range(53):
            generate_declaration(ctx, VarType.NUMBER)


def test_assignment_to_declared_number(ctx):
    ctx.scopes.declare("x", VarType.NUMBER)
    line = generate_assignment(ctx)
    m = re.fullmatch(r"x = (\d+)", line)
    assert m
    assert 0 <= int(m.group(1)) < ctx.cfg.max_int


def test_assignment_without_variables_declares_one(ctx):
    line = generate_assignment(ctx)
    assert line.startswith("let ")
    assert len(ctx.scopes.visible()) == 1


def test_assignment_keeps_declared_type(ctx):
    for var_type in VarType:
        generate_declaration(ctx, var_type)
    visible = ctx.scopes.visible()
    for _ in range(100):
        name, value = generate_assignment(ctx).split(" = ")
        assert literal_type(value) is visible[name]


# conditionals --------------------------------------------------------------


def test_if_else_at_root():
    ctx = Context.fresh(JsConfig(seed=11, max_indent_level=2))
    code = generate_conditional(ctx, CondKind.IF_ELSE)
    assert code.count("if (") == 1
    assert code.count("} else {") == 1
    assert code.count("{") == code.count("}")
    assert code.startswith("if (") and code.endswith("}")
    assert ctx.depth == 1


def test_plain_if_has_no_else():
    ctx = Context.fresh(JsConfig(seed=5, max_indent_level=2))
    code = generate_conditional(ctx, CondKind.IF)
    assert "else" not in code
    assert code.count("{") == code.count("}") == 1


def test_conditional_at_max_depth_is_empty(ctx):
    for _ in range(ctx.cfg.max_indent_level - 1):
        ctx.scopes.push()
    assert generate_conditional(ctx, CondKind.IF_ELSE) == ""
    assert ctx.scopes.pushes == ctx.cfg.max_indent_level - 1


def test_branch_bindings_do_not_leak(ctx):
    generate_declaration(ctx, VarType.NUMBER)
    generate_declaration(ctx, VarType.STRING)
    before = ctx.scopes.visible()
    for kind in list(CondKind) * 10:
        generate_conditional(ctx, kind)
        assert ctx.scopes.visible() == before
        assert ctx.depth == 1
    assert ctx.scopes.pushes == ctx.scopes.pops > 0
