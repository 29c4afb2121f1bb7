"""
MiniC - Compiler Orchestrator
Runs the front-end phases in sequence and collects their output.
"""

import json
import sys

from .Tokenizer import tokenize
from .Parser import parse
from .ScopeAnalysis import resolve_scopes
from .ControlFlow import build_control_flow
from .Complexity import estimate_complexity
from .Diagnostics import Diagnostic, ERROR


class CompilationResult:
    def __init__(self, tokens=None, syntax_tree=None, scopes=None,
                 control_flow=None, complexity=None, diagnostics=None):
        self.tokens = tokens or []
        self.syntax_tree = syntax_tree
        self.scopes = scopes or []
        self.control_flow = control_flow
        self.complexity = complexity
        self.diagnostics = diagnostics or []

    @classmethod
    def failed(cls, exc):
        return cls(diagnostics=[Diagnostic.fatal(exc)])

    @property
    def has_errors(self):
        return any(d.severity == ERROR for d in self.diagnostics)

    def to_dict(self):
        return {
            "tokens": [
                {"type": tok.kind.value, "value": tok.text, "line": tok.line, "column": tok.column}
                for tok in self.tokens
            ],
            "parseTree": self.syntax_tree.to_dict() if self.syntax_tree is not None else None,
            "scopes": [scope.to_dict() for scope in self.scopes],
            "controlFlow": self.control_flow.to_dict() if self.control_flow is not None else None,
            "complexity": self.complexity.to_dict() if self.complexity is not None else None,
            "errors": [d.to_dict() for d in self.diagnostics],
        }

    def to_json(self, indent=2):
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def compile_source(source, debug=False):
    """
    Run every front-end phase over MiniC source text.

    Parameters
    ----------
    source : source code string
    debug  : print each phase summary to stderr

    Returns
    -------
    CompilationResult. Never raises: an internal failure in any phase is
    reported as a single "Fatal error" diagnostic at line 1, column 1.
    """

    def log(msg):
        if debug:
            print(f"[minic] {msg}", file=sys.stderr)

    try:
        # ── Phase 1: Lexical Analysis ─────────────────────────────────────────
        log("Phase 1: Lexical analysis")
        tokens = tokenize(source)
        log(f"  {len(tokens)} tokens produced")

        # ── Phase 2: Parsing ──────────────────────────────────────────────────
        log("Phase 2: Parsing")
        tree = parse(tokens)
        log(f"  {len(tree.children)} function declaration(s)")

        # ── Phase 3: Scope Analysis ───────────────────────────────────────────
        log("Phase 3: Scope analysis")
        scopes, diagnostics = resolve_scopes(tree)
        log(f"  {len(scopes)} function scope(s), {len(diagnostics)} diagnostic(s)")

        # ── Phase 4: Control Flow ─────────────────────────────────────────────
        log("Phase 4: Control flow")
        control_flow = build_control_flow(tree)
        if control_flow is None:
            log("  no 'main' function, control flow skipped")

        # ── Phase 5: Complexity Estimation ────────────────────────────────────
        log("Phase 5: Complexity estimation")
        complexity = estimate_complexity(tree, control_flow, scopes)
        if complexity is not None:
            log(f"  time {complexity.time_notation}, space {complexity.space_notation}")
    except Exception as e:
        log(f"  Compilation failed: {e!r}")
        return CompilationResult.failed(e)

    log("  Compilation successful")
    return CompilationResult(tokens, tree, scopes, control_flow, complexity, diagnostics)


def compile_file(input_path, debug=False):
    """Read a source file and compile it."""
    with open(input_path, "r", encoding="utf-8") as f:
        source = f.read()
    return compile_source(source, debug=debug)
