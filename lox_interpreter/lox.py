import sys
from typing import List, Optional, TextIO

from .errors import Diagnostic, ErrorReporter
from .lexer import Lexer
from .parser import Parser
from .interpreter import Interpreter

EXIT_USAGE = 64
EXIT_SYNTAX_ERROR = 65
EXIT_RUNTIME_ERROR = 70


class Lox:
    """
    Runs Lox source through the lexer, parser and interpreter. One instance
    keeps its global scope across calls to run(), which is what the
    interactive prompt relies on.
    """
    def __init__(self, error_stream: Optional[TextIO] = None, output: Optional[TextIO] = None):
        self.reporter = ErrorReporter(error_stream)
        self.interpreter = Interpreter(self.reporter, output)

    def run(self, source: str) -> List[Diagnostic]:
        """Runs one chunk of source and returns the errors it produced."""
        self.reporter.reset()

        tokens = Lexer(source, self.reporter).scan_tokens()
        statements = Parser(tokens, self.reporter).parse()

        # Never execute a program that failed to scan or parse.
        if self.reporter.had_error:
            return list(self.reporter.diagnostics)

        self.interpreter.interpret(statements)
        return list(self.reporter.diagnostics)

    def run_file(self, path: str) -> int:
        with open(path, 'r', encoding='utf-8') as f:
            source = f.read()
        self.run(source)
        return exit_code(self.reporter)

    def run_prompt(self):
        while True:
            try:
                line = input("> ")
            except (KeyboardInterrupt, EOFError):
                print()
                break
            # Errors are per line: run() resets them, so later lines still execute.
            self.run(line)


def exit_code(reporter: ErrorReporter) -> int:
    if reporter.had_error: return EXIT_SYNTAX_ERROR
    if reporter.had_runtime_error: return EXIT_RUNTIME_ERROR
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) > 1:
        print("Usage: lox [script]")
        return EXIT_USAGE

    lox = Lox(error_stream=sys.stderr)
    if len(args) == 1:
        return lox.run_file(args[0])
    lox.run_prompt()
    return 0


if __name__ == "__main__":
    sys.exit(main())
