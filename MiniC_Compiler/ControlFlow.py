from .AST import *

ENTRY = 'ENTRY'
EXIT = 'EXIT'
IF = 'IF'
CALL = 'CALL'
RETURN_NODE = 'RETURN'
STATEMENT = 'STATEMENT'
WHILE = 'WHILE'
FOR = 'FOR'

UNCHAINED_KINDS = (IF, RETURN_NODE)

# edge labels
TRUE_BRANCH = 'true'
FALSE_BRANCH = 'false'
LOOP_BRANCH = 'body'

ENTRY_FUNCTION = 'main'


class ControlFlowNode:
    def __init__(self, id, kind, condition=None):
        self.id = id
        self.kind = kind
        self.condition = condition
        self.children = []
        # one label per child, None for plain fall-through
        self.labels = []

    def link(self, child, label=None):
        self.children.append(child)
        self.labels.append(label)

    def edges(self):
        return zip(self.children, self.labels)

    def _fields(self):
        d = {"id": self.id, "type": self.kind}
        if self.condition is not None:
            d["condition"] = self.condition
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
        return f"ControlFlowNode({self.id}, {self.kind})"


def iter_nodes(root):
    """Yield every node reachable from root in preorder."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def find_function(tree, name):
    for node in tree.children:
        if node.kind != FUNCTION_DECLARATION:
            continue
        ident = node.child(IDENTIFIER)
        if ident is not None and ident.value == name:
            return node
    return None


def build_control_flow(tree, function_name=ENTRY_FUNCTION):
    """Build the CFG of one function, or None when it is not declared."""
    func = find_function(tree, function_name)
    if func is None:
        return None

    entry = ControlFlowNode('entry', ENTRY)
    body = func.child(FUNCTION_BODY)
    if body is not None:
        _link_blocks(body, entry)

    last = entry
    while last.children:
        last = last.children[-1]
    last.link(ControlFlowNode('exit', EXIT))
    return entry


def _link_blocks(body, entry):
    """Convert body and every nested block, then wire the edges.

    Branch edges are added before fall-through edges, so a loop node's
    body comes ahead of its successor.
    """
    sequences = []
    pending = [(body, entry, None)]
    while pending:
        block, owner, label = pending.pop()
        nodes = []
        for stmt in block.children:
            node = _convert(stmt)
            if node is None:
                continue
            nodes.append(node)
            pending.extend((branch, node, branch_label)
                           for branch, branch_label in reversed(_branches(stmt)))
        sequences.append((owner, label, nodes))

    for owner, label, nodes in sequences:
        if nodes:
            owner.link(nodes[0], label)

    for _, _, nodes in sequences:
        for current, following in zip(nodes, nodes[1:]):
            if current.kind not in UNCHAINED_KINDS:
                current.link(following)


def _branches(stmt):
    if stmt.kind == IF_STATEMENT:
        labelled = ((IF_BODY, TRUE_BRANCH), (ELSE, FALSE_BRANCH))
    elif stmt.kind in LOOP_KINDS:
        labelled = ((LOOP_BODY, LOOP_BRANCH),)
    else:
        return []
    return [(stmt.child(kind), label) for kind, label in labelled if stmt.child(kind) is not None]


def _convert(stmt):
    if stmt.kind == IF_STATEMENT:
        cond = stmt.child(CONDITION)
        return ControlFlowNode(f"if_{stmt.id}", IF, cond.text() if cond is not None else '')

    if stmt.kind in LOOP_KINDS:
        cond = stmt.child(CONDITION)
        kind = WHILE if stmt.kind == WHILE_STATEMENT else FOR
        return ControlFlowNode(f"{kind.lower()}_{stmt.id}", kind, cond.text() if cond is not None else '')

    if stmt.kind == FUNCTION_CALL:
        return ControlFlowNode(f"call_{stmt.id}", CALL)
    if stmt.kind == RETURN:
        return ControlFlowNode(f"return_{stmt.id}", RETURN_NODE)
    if stmt.kind == VARIABLE_DECLARATION:
        return ControlFlowNode(f"decl_{stmt.id}", STATEMENT)
    if stmt.kind == ASSIGNMENT:
        return ControlFlowNode(f"assign_{stmt.id}", STATEMENT)
    return None
