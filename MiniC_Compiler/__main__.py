"""
MiniC - Command Line Interface

Usage:
    minic input.c [-o result.json] [--stage STAGE] [--tokens] [--dot cfg.dot] [--debug]
    python -m MiniC_Compiler input.c
    cat input.c | minic -
"""

import argparse
import json
import sys

STAGES = ("all", "tokens", "tree", "scopes", "cfg", "complexity", "diagnostics")

_STAGE_KEYS = {
    "tokens": "tokens",
    "tree": "parseTree",
    "scopes": "scopes",
    "cfg": "controlFlow",
    "complexity": "complexity",
    "diagnostics": "errors",
}


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="minic",
        description="MiniC: tokens, parse tree, scopes, control flow and complexity for a C subset",
    )
    parser.add_argument("input", help="Path to the source file, or '-' to read stdin")
    parser.add_argument("-o", "--output", help="Write the JSON result to this path")
    parser.add_argument(
        "--stage",
        choices=STAGES,
        default="all",
        help="Limit the JSON output to one pipeline stage (default: all)",
    )
    parser.add_argument(
        "--tokens",
        action="store_true",
        help="Print the token table instead of JSON",
    )
    parser.add_argument(
        "--dot",
        metavar="PATH",
        help="Write the control-flow graph of main() as Graphviz DOT",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print compilation phase info to stderr",
    )

    args = parser.parse_args(argv)

    from .Compiler import compile_file, compile_source
    from .Tokenizer import format_token_table

    try:
        if args.input == "-":
            result = compile_source(sys.stdin.read(), debug=args.debug)
        else:
            result = compile_file(args.input, debug=args.debug)
    except FileNotFoundError:
        print(f"[minic] Error: Input file not found: {args.input!r}", file=sys.stderr)
        return 1

    if args.dot:
        if result.control_flow is None:
            print("[minic] No 'main' function, control-flow graph not written", file=sys.stderr)
        else:
            from .GraphExport import export_dot
            export_dot(result.control_flow, args.dot)
            print(f"[minic] Control-flow graph written → {args.dot!r}", file=sys.stderr)

    if args.tokens:
        print(format_token_table(result.tokens))
    else:
        payload = result.to_dict()
        if args.stage != "all":
            payload = payload[_STAGE_KEYS[args.stage]]
        text = json.dumps(payload, indent=2, ensure_ascii=False)
        if args.output:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(text)
            print(f"[minic] Compiled {args.input!r} → {args.output!r}", file=sys.stderr)
        else:
            print(text)

    for diag in result.diagnostics:
        print(f"{args.input}:{diag.line}:{diag.column}: {diag.severity}: {diag.message}", file=sys.stderr)

    return 1 if result.has_errors else 0


if __name__ == "__main__":
    sys.exit(main())
