from .AST import *
from .Diagnostics import Diagnostic, WARNING

NESTED_SCOPE_KINDS = (IF_BODY, ELSE, LOOP_BODY)
# nodes whose identifier leaves read a variable
USAGE_KINDS = (EXPRESSION, CONDITION, ARGUMENTS)

UNUSED_SUGGESTIONS = (
    "Remove the unused variable declaration",
    "Use the variable in your code",
)


class VariableInfo:
    def __init__(self, name, declared_type, declaration_line, declaration_column=None, used=False):
        self.name = name
        self.declared_type = declared_type
        self.declaration_line = declaration_line
        self.declaration_column = declaration_column
        self.used = used

    def to_dict(self):
        return {
            "name": self.name,
            "type": self.declared_type,
            "line": self.declaration_line,
            "used": self.used,
        }

    def __repr__(self):
        return f"VariableInfo({self.declared_type} {self.name}, line={self.declaration_line}, used={self.used})"


class Scope:
    def __init__(self, name, start, end):
        self.name = name
        self.start = start
        self.end = end
        self.variables = []
        self.children = []

    def walk(self):
        stack = [self]
        while stack:
            scope = stack.pop()
            yield scope
            stack.extend(reversed(scope.children))

    def find(self, name):
        for var in self.variables:
            if var.name == name:
                return var
        return None

    def _fields(self):
        return {
            "name": self.name,
            "start": self.start,
            "end": self.end,
            "variables": [var.to_dict() for var in self.variables],
            "children": [],
        }

    def to_dict(self):
        root = self._fields()
        stack = [(self, root)]
        while stack:
            scope, d = stack.pop()
            for child in scope.children:
                child_dict = child._fields()
                d["children"].append(child_dict)
                stack.append((child, child_dict))
        return root

    def __repr__(self):
        return f"Scope({self.name}, lines {self.start}-{self.end}, {len(self.variables)} vars)"


class ScopeResolver:
    """Builds one scope tree per function and reports unused variables.

    Variables belong only to the innermost block that declares them. An
    identifier read in an expression, condition, argument list or array
    dimension marks the nearest visible declaration as used.
    """

    def __init__(self):
        self.scopes = []
        self.diagnostics = []
        self.symbol_table = {}

    def warning(self, msg, line, column, context=None, suggestions=None):
        self.diagnostics.append(
            Diagnostic(msg, line, column, WARNING, context=context, suggestions=suggestions)
        )

    def resolve(self, tree):
        self.scopes = []
        self.diagnostics = []
        for index, node in enumerate(tree.children):
            if node.kind == FUNCTION_DECLARATION:
                self.scopes.append(self._function_scope(node, index))

        self._check_unused()
        return self.scopes, self.diagnostics

    # -------- FUNCTIONS --------
    def _function_scope(self, func, index):
        name_node = func.child(IDENTIFIER)
        name = name_node.value if name_node is not None else f"function_{index}"
        body = func.child(FUNCTION_BODY)

        end = func.line
        if body is not None and body.end_line is not None:
            end = body.end_line
        scope = Scope(name, func.line, end)

        self.symbol_table = {}
        if body is not None:
            self._visit_block(body, scope)
        return scope

    def _visit_block(self, block, scope):
        pending = list(reversed(self._open_block(block, scope)))
        while pending:
            node, scope = pending.pop()
            if isinstance(node, dict):
                self.symbol_table = node
                continue
            pending.extend(reversed(self.visit(node, scope)))

    def _open_block(self, block, scope):
        # bindings made inside the block stop being visible when it closes
        return [(stmt, scope) for stmt in block.children] + [(dict(self.symbol_table), None)]

    def visit(self, node, scope):
        """Handle one node and return the (node, scope) pairs to visit next."""
        # -------- VARIABLE DECL --------
        if node.kind == VARIABLE_DECLARATION:
            type_node = node.child(TYPE)
            if type_node is not None:
                self._mark_uses(type_node)
            init = node.child(EXPRESSION)
            if init is not None:
                self._mark_uses(init)

            ident = node.child(IDENTIFIER)
            if type_node is not None and ident is not None:
                var = VariableInfo(ident.value, type_node.value, ident.line, ident.column)
                scope.variables.append(var)
                self.symbol_table[var.name] = var
            return []

        # -------- NESTED BLOCKS --------
        if node.kind in NESTED_SCOPE_KINDS:
            end = node.end_line if node.end_line is not None else node.line
            child_scope = Scope(node.kind, node.line, end)
            scope.children.append(child_scope)
            return self._open_block(node, child_scope)

        # -------- READS --------
        if node.kind in USAGE_KINDS:
            self._mark_uses(node)
            return []

        return [(child, scope) for child in node.children]

    def _mark_uses(self, node):
        for leaf in node.walk():
            if leaf.kind == IDENTIFIER and leaf.value in self.symbol_table:
                self.symbol_table[leaf.value].used = True

    # -------- DIAGNOSTICS --------
    def _check_unused(self):
        for root in self.scopes:
            for scope in root.walk():
                for var in scope.variables:
                    if not var.used:
                        self.warning(
                            f"Warning: Variable '{var.name}' is declared but never used",
                            var.declaration_line,
                            var.declaration_column,
                            context=f"{var.declared_type} {var.name};",
                            suggestions=UNUSED_SUGGESTIONS,
                        )


def resolve_scopes(tree):
    return ScopeResolver().resolve(tree)
