PROGRAM = 'PROGRAM'
FUNCTION_DECLARATION = 'FUNCTION_DECLARATION'
TYPE = 'TYPE'
IDENTIFIER = 'IDENTIFIER'
PARAMETERS = 'PARAMETERS'
PARAMETER = 'PARAMETER'
FUNCTION_BODY = 'FUNCTION_BODY'
VARIABLE_DECLARATION = 'VARIABLE_DECLARATION'
ASSIGNMENT = 'ASSIGNMENT'
IF_STATEMENT = 'IF_STATEMENT'
CONDITION = 'CONDITION'
IF_BODY = 'IF_BODY'
ELSE = 'ELSE'
WHILE_STATEMENT = 'WHILE_STATEMENT'
FOR_STATEMENT = 'FOR_STATEMENT'
LOOP_BODY = 'LOOP_BODY'
FUNCTION_CALL = 'FUNCTION_CALL'
ARGUMENTS = 'ARGUMENTS'
RETURN = 'RETURN'
EXPRESSION = 'EXPRESSION'

BLOCK_KINDS = (FUNCTION_BODY, IF_BODY, ELSE, LOOP_BODY)
LOOP_KINDS = (WHILE_STATEMENT, FOR_STATEMENT)


class SyntaxNode:
    def __init__(self, id, kind, value=None, line=None, column=None):
        self.id = id
        self.kind = kind
        self.value = value
        self.children = []
        self.line = line
        self.column = column
        # line of the closing brace, for block nodes
        self.end_line = None

    def child(self, kind):
        for node in self.children:
            if node.kind == kind:
                return node
        return None

    def walk(self):
        """Yield this node and every descendant in preorder."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def text(self):
        return ' '.join(leaf.value for leaf in self.children if leaf.value is not None)

    def _fields(self):
        d = {"id": self.id, "type": self.kind}
        if self.value is not None:
            d["value"] = self.value
        if self.line is not None:
            d["line"] = self.line
            d["column"] = self.column
        d["children"] = []
        return d

    def to_dict(self):
        root = self._fields()
        stack = [(self, root)]
        while stack:
            node, d = stack.pop()
            for child in node.children:
                child_dict = child._fields()
                d["children"].append(child_dict)
                stack.append((child, child_dict))
        return root

    def __repr__(self):
        if self.value is None:
            return f"SyntaxNode({self.id}, {self.kind})"
        return f"SyntaxNode({self.id}, {self.kind}, {self.value!r})"


class NodeArena:
    """Hands out syntax nodes with ids numbered from zero in creation order.

    One arena belongs to one parse, so identical input always yields
    identical ids.
    """

    def __init__(self):
        self.nodes = []

    def new(self, kind, value=None, token=None):
        line = column = None
        if token is not None:
            line, column = token.line, token.column
        node = SyntaxNode(len(self.nodes), kind, value, line, column)
        self.nodes.append(node)
        return node

    def leaf(self, token):
        return self.new(token.kind.value, token.text, token)

    def __len__(self):
        return len(self.nodes)
