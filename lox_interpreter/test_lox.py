import sys
import io
import inspect
import tempfile
from pathlib import Path
from contextlib import redirect_stdout, redirect_stderr
from unittest.mock import patch

from . lox import Lox, main, EXIT_USAGE, EXIT_SYNTAX_ERROR, EXIT_RUNTIME_ERROR
from . errors import ErrorKind

def run_lox(source):
    output = io.StringIO()
    lox = Lox(output=output)
    diagnostics = lox.run(source)
    return output.getvalue(), diagnostics


def test_successful_run_has_no_diagnostics():
    output, diagnostics = run_lox('print "hi";')
    assert output == "hi\n"
    assert diagnostics == []


def test_syntax_error_prevents_execution():
    output, diagnostics = run_lox('print "first";\nprint ;\nprint "third";')
    assert output == ""
    assert [str(d) for d in diagnostics] == ["[line 2] Error at ';': Expect expression."]


def test_lexical_and_syntax_errors_are_collected_together():
    _, diagnostics = run_lox("var a = 1 # 2;\nprint;")
    assert [d.kind for d in diagnostics] == [ErrorKind.LEXICAL, ErrorKind.SYNTAX, ErrorKind.SYNTAX]


def test_runtime_error_keeps_earlier_output():
    output, diagnostics = run_lox('print "ok";\nprint -"no";')
    assert output == "ok\n"
    assert [str(d) for d in diagnostics] == ["Operand must be a number.\n[line 2]"]


def test_globals_persist_between_runs():
    output = io.StringIO()
    lox = Lox(output=output)
    lox.run("var a = 1;")
    assert lox.run("print nope;")[0].kind is ErrorKind.RUNTIME
    # The earlier failure must not make later runs inert.
    assert lox.run("print a + 1;") == []
    assert output.getvalue() == "2\n"


def test_diagnostics_echo_to_stream():
    errors = io.StringIO()
    lox = Lox(error_stream=errors, output=io.StringIO())
    lox.run("print 1 +;")
    assert errors.getvalue() == "[line 1] Error at ';': Expect expression.\n"


def test_exit_codes(tmp_path):
    good = tmp_path / "good.lox"
    good.write_text('print "good";')
    bad_syntax = tmp_path / "bad_syntax.lox"
    bad_syntax.write_text("var;")
    bad_runtime = tmp_path / "bad_runtime.lox"
    bad_runtime.write_text("print missing;")

    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        assert main([str(good)]) == 0
        assert main([str(bad_syntax)]) == EXIT_SYNTAX_ERROR
        assert main([str(bad_runtime)]) == EXIT_RUNTIME_ERROR
        assert main(["one", "two"]) == EXIT_USAGE

    assert out.getvalue() == "good\nUsage: lox [script]\n"
    assert "Undefined variable 'missing'." in err.getvalue()


def test_prompt_runs_each_line():
    lines = iter(['var a = "x";', "print b;", "print a;"])

    def fake_input(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    out, err = io.StringIO(), io.StringIO()
    with patch("builtins.input", fake_input), redirect_stdout(out), redirect_stderr(err):
        assert main([]) == 0

    assert out.getvalue() == "x\n\n"
    assert err.getvalue() == "Undefined variable 'b'.\n[line 1]\n"


def test_deep_recursion_through_run():
    output, diagnostics = run_lox("""
    fun down(n) {
        if (n == 0) return 0;
        return down(n - 1);
    }
    print down(500);
    """)
    assert diagnostics == []
    assert output == "0\n"


def test_deep_expression_nesting_is_a_runtime_error():
    # Each '!' costs one parser frame but several interpreter frames.
    output, diagnostics = run_lox("print 1;\nprint " + "!" * 5000 + "true;")
    assert output == "1\n"
    assert [str(d) for d in diagnostics] == ["Stack overflow.\n[line 2]"]


def test_deep_grouping_is_a_syntax_error():
    source = "print " + "(" * 3000 + "1" + ")" * 3000 + ";\nprint 2;"
    output, diagnostics = run_lox(source)
    assert output == ""
    assert [str(d) for d in diagnostics] == ["[line 1] Error at '(': Too much nesting."]


def main_runner():
    tests = [(name, fn) for name, fn in globals().items() if name.startswith("test_")]
    tests_passed = 0
    for name, test in tests:
        print(f"--- Running Lox Test: {name} ---")
        try:
            if "tmp_path" in inspect.signature(test).parameters:
                with tempfile.TemporaryDirectory() as tmp:
                    test(Path(tmp))
            else:
                test()
        except AssertionError as e:
            print(f"FAIL: {name} {e}")
            continue
        print(f"PASS: {name}")
        tests_passed += 1

    print(f"\n--- Lox Test Summary ---")
    print(f"{tests_passed} / {len(tests)} tests passed.")

    if tests_passed != len(tests):
        sys.exit(1)

if __name__ == "__main__":
    main_runner()
