import textwrap

from MiniC_Compiler.AST import (
    ARGUMENTS,
    ASSIGNMENT,
    CONDITION,
    ELSE,
    EXPRESSION,
    FOR_STATEMENT,
    FUNCTION_BODY,
    FUNCTION_CALL,
    FUNCTION_DECLARATION,
    IDENTIFIER,
    IF_BODY,
    IF_STATEMENT,
    LOOP_BODY,
    PARAMETERS,
    PROGRAM,
    RETURN,
    TYPE,
    VARIABLE_DECLARATION,
    WHILE_STATEMENT,
)
from MiniC_Compiler.Parser import StructuralParser, parse
from MiniC_Compiler.Tokenizer import tokenize

SAMPLE = textwrap.dedent("""\
    int add(int a, int b) {
        return a + b;
    }

    int main() {
        int x = 10;
        if (x > 5) {
            printf("big");
        } else {
            x = 0;
        }
        return 0;
    }
""")


def parse_(source):
    return parse(tokenize(source))


def body_of(program, index=0):
    return program.children[index].child(FUNCTION_BODY)


def kinds(node):
    return [child.kind for child in node.children]


def values(node):
    return [child.value for child in node.children]


def test_program_holds_function_declarations():
    program = parse_(SAMPLE)

    assert program.kind == PROGRAM
    assert kinds(program) == [FUNCTION_DECLARATION, FUNCTION_DECLARATION]
    add = program.children[0]
    assert kinds(add) == [TYPE, IDENTIFIER, PARAMETERS, FUNCTION_BODY]
    assert add.child(TYPE).value == "int"
    assert add.child(IDENTIFIER).value == "add"


def test_parameters_are_type_name_pairs():
    params = parse_(SAMPLE).children[0].child(PARAMETERS)
    assert len(params.children) == 2
    assert [(p.child(TYPE).value, p.child(IDENTIFIER).value) for p in params.children] == [
        ("int", "a"),
        ("int", "b"),
    ]


def test_parameter_scan_skips_unknown_tokens():
    params = parse_("void f(int a, unsigned b, char *c, double d) { }").children[0].child(PARAMETERS)
    assert [p.child(IDENTIFIER).value for p in params.children] == ["a", "d"]


def test_statement_shapes_in_main():
    body = body_of(parse_(SAMPLE), 1)
    assert kinds(body) == [VARIABLE_DECLARATION, IF_STATEMENT, RETURN]

    decl = body.children[0]
    assert kinds(decl) == [TYPE, IDENTIFIER, EXPRESSION]
    assert values(decl.child(EXPRESSION)) == ["10"]

    if_stmt = body.children[1]
    assert kinds(if_stmt) == [CONDITION, IF_BODY, ELSE]
    assert values(if_stmt.child(CONDITION)) == ["x", ">", "5"]

    call = if_stmt.child(IF_BODY).children[0]
    assert call.kind == FUNCTION_CALL
    assert call.child(IDENTIFIER).value == "printf"
    assert values(call.child(ARGUMENTS)) == ['"big"']

    assignment = if_stmt.child(ELSE).children[0]
    assert assignment.kind == ASSIGNMENT
    assert assignment.value == "="
    assert assignment.child(IDENTIFIER).value == "x"


def test_return_expression_is_raw_leaves():
    ret = body_of(parse_(SAMPLE)).children[0]
    assert ret.kind == RETURN
    assert values(ret.child(EXPRESSION)) == ["a", "+", "b"]
    assert kinds(ret.child(EXPRESSION)) == ["IDENTIFIER", "OPERATOR", "IDENTIFIER"]


def test_bare_return_has_no_expression():
    ret = body_of(parse_("void f() { return; }")).children[0]
    assert ret.kind == RETURN
    assert ret.children == []


def test_call_arguments_keep_only_literals_and_names():
    call = body_of(parse_('int main() { foo(1, "s", y, 2 + 3); }')).children[0]
    assert values(call.child(ARGUMENTS)) == ["1", '"s"', "y", "2", "3"]


def test_condition_keeps_balanced_parentheses():
    cond = body_of(parse_("int main() { if ((a + b) > c) { } }")).children[0].child(CONDITION)
    assert values(cond) == ["(", "a", "+", "b", ")", ">", "c"]


def test_nested_bare_blocks_track_brace_depth():
    program = parse_("int main() { { int a; { int b; } } int c; } int other() { return 1; }")

    assert [f.child(IDENTIFIER).value for f in program.children] == ["main", "other"]
    decls = body_of(program).children
    assert [d.child(IDENTIFIER).value for d in decls] == ["a", "b", "c"]
    assert kinds(body_of(program, 1)) == [RETURN]


def test_unrecognized_input_is_skipped_silently():
    program = parse_("int main() { x @ y; ; ; 42; +-*; } garbage ) ( }")
    assert kinds(program) == [FUNCTION_DECLARATION]
    assert body_of(program).children == []


def test_parser_never_raises_on_truncated_input():
    for source in ["int", "int main", "int main(", "int main() {", "int main() { int x =",
                   "int main() { if (", "int main() { for (;;", "int main() { foo(1,"]:
        program = parse_(source)
        assert program.kind == PROGRAM


def test_unterminated_block_keeps_parsed_statements():
    body = body_of(parse_("int main() {\n  int x = 1;\n"))
    assert kinds(body) == [VARIABLE_DECLARATION]
    assert body.end_line == 2


def test_expression_stops_before_closing_brace():
    program = parse_("int main() { return x } int g() { }")
    assert len(program.children) == 2
    assert values(body_of(program).children[0].child(EXPRESSION)) == ["x"]


def test_array_declaration_folds_dimensions_into_type():
    decls = body_of(parse_("int main() { int arr[10]; float grid[3][4]; int n = 2; }")).children
    assert [d.child(TYPE).value for d in decls] == ["int[10]", "float[3][4]", "int"]


def test_array_dimension_tokens_stay_as_type_leaves():
    (decl,) = body_of(parse_("int main() { int grid[n][m + 1]; }")).children
    type_node = decl.child(TYPE)
    assert type_node.value == "int[n][m+1]"
    assert values(type_node) == ["n", "m", "+", "1"]
    assert kinds(type_node) == ["IDENTIFIER", "IDENTIFIER", "OPERATOR", "NUMBER"]


def test_loops_have_condition_and_body():
    body = body_of(parse_(
        "int main() { for (int i = 0; i < n; i++) { while (x) { y = 1; } } }"
    ))
    loop = body.children[0]
    assert loop.kind == FOR_STATEMENT
    assert values(loop.child(CONDITION)) == ["int", "i", "=", "0", ";", "i", "<", "n", ";", "i", "++"]

    inner = loop.child(LOOP_BODY).children[0]
    assert inner.kind == WHILE_STATEMENT
    assert kinds(inner.child(LOOP_BODY)) == [ASSIGNMENT]


def test_else_if_chain_nests_inside_else():
    stmt = body_of(parse_("int main() { if (a) { } else if (b) { f(); } else { g(); } }")).children[0]
    nested = stmt.child(ELSE).children[0]
    assert nested.kind == IF_STATEMENT
    assert values(nested.child(CONDITION)) == ["b"]
    assert nested.child(ELSE).children[0].child(IDENTIFIER).value == "g"


def test_braceless_bodies_hold_one_statement():
    stmt = body_of(parse_("int main() { if (a) x = 1; else return 0; y++; }"))
    if_stmt, tail = stmt.children
    assert kinds(if_stmt.child(IF_BODY)) == [ASSIGNMENT]
    assert kinds(if_stmt.child(ELSE)) == [RETURN]
    assert tail.kind == ASSIGNMENT and tail.value == "++"


def test_prototype_without_body():
    program = parse_("int f(int a); int main() { return f(1); }")
    proto = program.children[0]
    assert kinds(proto) == [TYPE, IDENTIFIER, PARAMETERS]
    assert program.children[1].child(IDENTIFIER).value == "main"


def test_ids_are_unique_and_assigned_in_creation_order():
    parser = StructuralParser(tokenize(SAMPLE))
    program = parser.parse()

    nodes = list(program.walk())
    ids = [node.id for node in nodes]
    assert sorted(ids) == list(range(len(parser.arena)))
    assert program.id == 0
    for node in nodes:
        for child in node.children:
            assert child.id > node.id


def test_parsing_is_deterministic():
    assert parse_(SAMPLE).to_dict() == parse_(SAMPLE).to_dict()


def test_nodes_record_source_positions():
    body = body_of(parse_(SAMPLE), 1)
    decl = body.children[0]
    assert (decl.line, decl.column) == (6, 5)
    assert decl.child(IDENTIFIER).line == 6
    assert body.end_line == 13
