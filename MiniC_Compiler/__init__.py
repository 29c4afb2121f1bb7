"""MiniC - a teaching compiler front end for a small C subset."""

from .Tokenizer import Token, TokenKind, tokenize
from .Parser import StructuralParser, parse
from .ScopeAnalysis import Scope, ScopeResolver, VariableInfo, resolve_scopes
from .ControlFlow import ControlFlowNode, build_control_flow
from .Complexity import COMPLEXITY_CLASSES, ComplexityInfo, estimate_complexity
from .Diagnostics import Diagnostic
from .Compiler import CompilationResult, compile_file, compile_source

__all__ = [
    "COMPLEXITY_CLASSES",
    "CompilationResult",
    "ComplexityInfo",
    "ControlFlowNode",
    "Diagnostic",
    "Scope",
    "ScopeResolver",
    "StructuralParser",
    "Token",
    "TokenKind",
    "VariableInfo",
    "build_control_flow",
    "compile_file",
    "compile_source",
    "estimate_complexity",
    "parse",
    "resolve_scopes",
    "tokenize",
]
