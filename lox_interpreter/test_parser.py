import sys
from . lexer import Lexer
from . parser import Parser
from . ast_printer import AstPrinter
from . errors import ErrorReporter, ErrorKind
from . import ast_nodes as ast

def parse(source_code):
    reporter = ErrorReporter()
    tokens = Lexer(source_code, reporter).scan_tokens()
    statements = Parser(tokens, reporter).parse()
    return statements, reporter


def parse_expression(source_code):
    reporter = ErrorReporter()
    tokens = Lexer(source_code, reporter).scan_tokens()
    return Parser(tokens, reporter).parse_expression(), reporter


def assert_ast(source_code, expected_ast_str):
    """Runs lexer -> parser -> ast_printer and compares line by line."""
    statements, reporter = parse(source_code)
    assert reporter.diagnostics == [], [str(d) for d in reporter.diagnostics]

    actual_ast_str = AstPrinter().print_program(statements)
    normalized_actual = "\n".join(line.strip() for line in actual_ast_str.strip().split('\n'))
    normalized_expected = "\n".join(line.strip() for line in expected_ast_str.strip().split('\n'))
    assert normalized_actual == normalized_expected


def test_expression_prefix_form():
    expr, reporter = parse_expression("-1 * (2 + 3)")
    assert not reporter.diagnostics
    printed = AstPrinter().print_expr(expr)
    assert printed == "(* (- 1) (group (+ 2 3)))"
    # Printing the same tree again gives the same text.
    assert AstPrinter().print_expr(expr) == printed


def test_variable_declaration_and_precedence():
    assert_ast("var x = 10 * (2 + 3);", "(var x (* 10 (group (+ 2 3))))")


def test_equality_and_comparison():
    assert_ast("1 + 1 == 2 != 1 < 3;", "(; (!= (== (+ 1 1) 2) (< 1 3)))")


def test_left_associative_binary():
    assert_ast("print 1 - 2 - 3;", "(print (- (- 1 2) 3))")


def test_right_associative_assignment_and_unary():
    assert_ast("a = b = !!c;", "(; (= a (= b (! (! c)))))")


def test_logical_precedence():
    assert_ast('print nil or "x" and false;', '(print (or nil (and "x" false)))')


def test_declaration_without_initializer():
    assert_ast("var y;", "(var y)")


def test_if_else_and_while():
    source = """
    if (a) print 1; else print 2;
    while (a < 3) a = a + 1;
    """
    expected = """
    (if-else a (print 1) (print 2))
    (while (< a 3) (; (= a (+ a 1))))
    """
    assert_ast(source, expected)


def test_for_loop_desugars_to_while():
    assert_ast(
        "for (var i = 0; i < 3; i = i + 1) print i;",
        "(block (var i 0) (while (< i 3) (block (print i) (; (= i (+ i 1))))))",
    )


def test_for_loop_without_clauses():
    assert_ast("for (;;) print 1;", "(while true (print 1))")


def test_function_declaration_and_calls():
    source = """
    fun add(a, b) { return a + b; }
    add(1, 2)(3);
    """
    expected = """
    (fun add (a b) (return (+ a b)))
    (; (call (call add 1 2) 3))
    """
    assert_ast(source, expected)


def test_recovers_after_malformed_statement():
    statements, reporter = parse("var = 1; print 1; var b = 2;")
    assert len(reporter.diagnostics) == 1
    assert reporter.diagnostics[0].kind is ErrorKind.SYNTAX
    assert str(reporter.diagnostics[0]) == "[line 1] Error at '=': Expect variable name."
    assert len(statements) == 2
    assert isinstance(statements[0], ast.Print)
    assert isinstance(statements[1], ast.Var)
    assert statements[1].name.lexeme == "b"


def test_recovers_inside_block():
    statements, reporter = parse("{ print ; print 2; }")
    assert len(reporter.diagnostics) == 1
    assert str(reporter.diagnostics[0]) == "[line 1] Error at ';': Expect expression."
    assert len(statements) == 1
    assert len(statements[0].statements) == 1


def test_invalid_assignment_target():
    _, reporter = parse("1 + 2 = 3;")
    assert [str(d) for d in reporter.diagnostics] == [
        "[line 1] Error at '=': Invalid assignment target."
    ]


def test_error_at_end():
    _, reporter = parse("print 1")
    assert str(reporter.diagnostics[0]) == "[line 1] Error at end: Expect ';' after value."


def test_return_outside_function_is_rejected():
    statements, reporter = parse("return 1; print 2;")
    assert str(reporter.diagnostics[0]) == "[line 1] Error at 'return': Can't return from top-level code."
    assert len(statements) == 1
    assert isinstance(statements[0], ast.Print)


def test_too_many_arguments_is_not_fatal():
    args = ", ".join(["1"] * 256)
    statements, reporter = parse(f"f({args});")
    assert [d.message for d in reporter.diagnostics] == ["Can't have more than 255 arguments."]
    assert len(statements) == 1
    assert len(statements[0].expression.arguments) == 256


def test_too_many_parameters_is_not_fatal():
    params = ", ".join(f"p{i}" for i in range(256))
    statements, reporter = parse(f"fun f({params}) {{ print 1; }}")
    assert [str(d) for d in reporter.diagnostics] == [
        "[line 1] Error at 'p255': Can't have more than 255 parameters."
    ]
    assert len(statements) == 1
    assert len(statements[0].params) == 256
    assert len(statements[0].body) == 1


def main():
    tests = [(name, fn) for name, fn in globals().items() if name.startswith("test_")]
    tests_passed = 0
    for name, test in tests:
        print(f"--- Running Parser Test: {name} ---")
        try:
            test()
        except AssertionError as e:
            print(f"FAIL: {name} {e}")
            continue
        print(f"PASS: {name}")
        tests_passed += 1

    print(f"\n--- Parser Test Summary ---")
    print(f"{tests_passed} / {len(tests)} tests passed.")

    if tests_passed != len(tests):
        sys.exit(1)

if __name__ == "__main__":
    main()
