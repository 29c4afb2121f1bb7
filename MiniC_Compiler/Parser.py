from .AST import *
from .Tokenizer import TokenKind

TYPE_KEYWORDS = {'int', 'void', 'char', 'float', 'double'}
DECLARATION_TYPES = {'int', 'char', 'float', 'double'}
CALLABLE_KEYWORDS = {'printf'}
ASSIGNMENT_OPERATORS = {
    '=', '+=', '-=', '*=', '/=', '%=', '&=', '|=', '^=', '++', '--',
}
ARGUMENT_KINDS = (TokenKind.STRING, TokenKind.NUMBER, TokenKind.IDENTIFIER)
EXPRESSION_STOPS = {';', ')', ','}
BLOCK_DELIMITERS = {'{', '}'}


class StructuralParser:
    """Recursive-descent recognizer for the C subset.

    The grammar is partial on purpose: any token that does not start a
    known shape is skipped, so parsing never fails on user input.

    Rules that can nest (functions, blocks, bodies, statements, if and
    loops) are generators. Instead of calling a nested rule they yield
    it, and _run drives them from an explicit stack, so nesting depth is
    bounded by memory rather than by the interpreter's recursion limit.
    """

    def __init__(self, tokens):
        self._tokens = list(tokens)
        self._pos = 0
        self.arena = NodeArena()

    # ------------------------------------------------------------------ helpers

    def _peek(self, offset=0):
        index = self._pos + offset
        if index < len(self._tokens):
            return self._tokens[index]
        return None

    def _advance(self):
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def _at_end(self):
        return self._pos >= len(self._tokens)

    def _check(self, text, offset=0):
        tok = self._peek(offset)
        return tok is not None and tok.kind != TokenKind.STRING and tok.text == text

    def _check_keyword(self, word):
        tok = self._peek()
        return tok is not None and tok.kind == TokenKind.KEYWORD and tok.text == word

    def _last_line(self):
        if self._pos == 0:
            return None
        return self._tokens[self._pos - 1].line

    def _run(self, rule):
        stack = [rule]
        result = None
        while stack:
            try:
                nested = stack[-1].send(result)
            except StopIteration as done:
                stack.pop()
                result = done.value
            else:
                stack.append(nested)
                result = None
        return result

    # ------------------------------------------------------------------ public

    def parse(self):
        program = self.arena.new(PROGRAM)
        while not self._at_end():
            if self._at_function_start():
                program.children.append(self._run(self._parse_function()))
            else:
                self._advance()
        return program

    # ------------------------------------------------------------------ declarations

    def _at_function_start(self):
        first, second = self._peek(), self._peek(1)
        return (
            first.kind == TokenKind.KEYWORD and first.text in TYPE_KEYWORDS
            and second is not None and second.kind == TokenKind.IDENTIFIER
            and self._check('(', 2)
        )

    def _parse_function(self):
        type_tok = self._advance()
        name_tok = self._advance()
        self._advance()  # (

        func = self.arena.new(FUNCTION_DECLARATION, token=type_tok)
        func.children.append(self.arena.new(TYPE, type_tok.text, type_tok))
        func.children.append(self.arena.new(IDENTIFIER, name_tok.text, name_tok))
        func.children.append(self._parse_parameters())

        if self._check('{'):
            func.children.append((yield self._parse_block(FUNCTION_BODY)))
        return func

    def _parse_parameters(self):
        params = self.arena.new(PARAMETERS, token=self._peek())
        depth = 1
        while not self._at_end():
            tok = self._peek()
            nxt = self._peek(1)
            if tok.text in BLOCK_DELIMITERS:
                break
            if tok.text == '(':
                depth += 1
            elif tok.text == ')':
                depth -= 1
                if depth == 0:
                    self._advance()
                    break
            elif (tok.kind == TokenKind.KEYWORD and tok.text in TYPE_KEYWORDS
                    and nxt is not None and nxt.kind == TokenKind.IDENTIFIER):
                param = self.arena.new(PARAMETER, token=tok)
                param.children.append(self.arena.new(TYPE, tok.text, tok))
                param.children.append(self.arena.new(IDENTIFIER, nxt.text, nxt))
                params.children.append(param)
                self._pos += 2
                if self._check(','):
                    self._advance()
                continue
            self._advance()
        return params

    # ------------------------------------------------------------------ blocks

    def _parse_block(self, kind):
        open_tok = self._advance()  # {
        block = self.arena.new(kind, token=open_tok)
        depth = 1
        while not self._at_end():
            tok = self._peek()
            if tok.text == '{':
                depth += 1
                self._advance()
                continue
            if tok.text == '}':
                depth -= 1
                self._advance()
                if depth == 0:
                    block.end_line = tok.line
                    return block
                continue

            stmt = yield self._parse_statement()
            if stmt is None:
                self._advance()
            else:
                block.children.append(stmt)

        # unterminated block runs to end of input
        block.end_line = self._last_line()
        return block

    def _parse_body(self, kind, anchor=None):
        if self._check('{'):
            return (yield self._parse_block(kind))
        body = self.arena.new(kind, token=anchor or self._peek())
        if not self._at_end():
            stmt = yield self._parse_statement()
            if stmt is not None:
                body.children.append(stmt)
        body.end_line = self._last_line()
        return body

    # ------------------------------------------------------------------ statements

    def _parse_statement(self):
        tok = self._peek()
        nxt = self._peek(1)

        if tok.kind == TokenKind.KEYWORD:
            if tok.text in DECLARATION_TYPES and nxt is not None and nxt.kind == TokenKind.IDENTIFIER:
                return self._parse_variable_declaration()
            if tok.text == 'if':
                return (yield self._parse_if())
            if tok.text in ('while', 'for'):
                return (yield self._parse_loop())
            if tok.text in CALLABLE_KEYWORDS and self._check('(', 1):
                return self._parse_call()
            if tok.text == 'return':
                return self._parse_return()
            return None

        if tok.kind == TokenKind.IDENTIFIER and nxt is not None:
            if self._check('(', 1):
                return self._parse_call()
            if nxt.kind == TokenKind.OPERATOR and nxt.text in ASSIGNMENT_OPERATORS:
                return self._parse_assignment()
        return None

    def _parse_variable_declaration(self):
        type_tok = self._advance()
        name_tok = self._advance()

        decl = self.arena.new(VARIABLE_DECLARATION, token=type_tok)
        type_node = self.arena.new(TYPE, type_tok.text, type_tok)
        decl.children.append(type_node)
        decl.children.append(self.arena.new(IDENTIFIER, name_tok.text, name_tok))

        if self._check('['):
            self._collect_dimensions(type_node)

        if self._check('='):
            self._advance()
            decl.children.append(self._parse_expression())

        if self._check(';'):
            self._advance()
        return decl

    def _collect_dimensions(self, type_node):
        # bracket text joins the type name, the tokens inside become its leaves
        while self._check('['):
            while not self._at_end():
                tok = self._peek()
                if tok.text in BLOCK_DELIMITERS or tok.text == ';':
                    return
                type_node.value += tok.text
                self._advance()
                if tok.text == ']':
                    break
                if tok.text != '[':
                    type_node.children.append(self.arena.leaf(tok))

    def _parse_if(self):
        if_tok = self._advance()
        node = self.arena.new(IF_STATEMENT, token=if_tok)

        if self._check('('):
            node.children.append(self._parse_condition())
        node.children.append((yield self._parse_body(IF_BODY)))

        if self._check_keyword('else'):
            else_tok = self._advance()
            if self._check_keyword('if'):
                else_node = self.arena.new(ELSE, token=else_tok)
                else_node.children.append((yield self._parse_if()))
                else_node.end_line = self._last_line()
            else:
                else_node = yield self._parse_body(ELSE, else_tok)
            node.children.append(else_node)
        return node

    def _parse_loop(self):
        loop_tok = self._advance()
        kind = WHILE_STATEMENT if loop_tok.text == 'while' else FOR_STATEMENT
        node = self.arena.new(kind, token=loop_tok)

        if self._check('('):
            node.children.append(self._parse_condition())
        node.children.append((yield self._parse_body(LOOP_BODY)))
        return node

    def _parse_condition(self):
        open_tok = self._advance()  # (
        cond = self.arena.new(CONDITION, token=open_tok)
        depth = 1
        while not self._at_end():
            tok = self._peek()
            if tok.text in BLOCK_DELIMITERS:
                break
            self._advance()
            if tok.text == '(':
                depth += 1
            elif tok.text == ')':
                depth -= 1
                if depth == 0:
                    break
            cond.children.append(self.arena.leaf(tok))
        return cond

    def _parse_call(self):
        name_tok = self._advance()
        self._advance()  # (

        call = self.arena.new(FUNCTION_CALL, token=name_tok)
        call.children.append(self.arena.new(IDENTIFIER, name_tok.text, name_tok))
        args = self.arena.new(ARGUMENTS, token=self._peek())
        depth = 1
        while not self._at_end():
            tok = self._peek()
            if tok.text in BLOCK_DELIMITERS or tok.text == ';':
                break
            self._advance()
            if tok.text == '(':
                depth += 1
            elif tok.text == ')':
                depth -= 1
                if depth == 0:
                    break
            elif tok.kind in ARGUMENT_KINDS:
                args.children.append(self.arena.leaf(tok))
        call.children.append(args)

        if self._check(';'):
            self._advance()
        return call

    def _parse_return(self):
        ret_tok = self._advance()
        node = self.arena.new(RETURN, token=ret_tok)
        nxt = self._peek()
        if nxt is not None and nxt.text not in EXPRESSION_STOPS and nxt.text not in BLOCK_DELIMITERS:
            node.children.append(self._parse_expression())
        if self._check(';'):
            self._advance()
        return node

    def _parse_assignment(self):
        target = self._advance()
        op = self._advance()
        node = self.arena.new(ASSIGNMENT, op.text, target)
        node.children.append(self.arena.new(IDENTIFIER, target.text, target))
        if op.text not in ('++', '--'):
            node.children.append(self._parse_expression())
        if self._check(';'):
            self._advance()
        return node

    # ------------------------------------------------------------------ expressions

    def _parse_expression(self):
        expr = self.arena.new(EXPRESSION, token=self._peek())
        while not self._at_end():
            tok = self._peek()
            if tok.text in EXPRESSION_STOPS or tok.text in BLOCK_DELIMITERS:
                break
            expr.children.append(self.arena.leaf(tok))
            self._advance()
        return expr


def parse(tokens):
    return StructuralParser(tokens).parse()
