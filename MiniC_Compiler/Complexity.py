from .AST import *

COMPLEXITY_CLASSES = {
    1: 'O(1)',
    2: 'O(log n)',
    3: 'O(n)',
    4: 'O(n log n)',
    5: 'O(n²)',
    6: 'O(n³)',
    7: 'O(2ⁿ)',
    8: 'O(n!)',
}

CONSTANT = 1
LOGARITHMIC = 2
LINEAR = 3
QUADRATIC = 5

# above this many declarations space is reported as logarithmic
MANY_VARIABLES = 10

NESTED_LOOP_SUGGESTION = {
    "title": "Consider optimizing nested loops",
    "description": "Nested loops lead to O(n²) time complexity. "
                   "Look for ways to combine or eliminate loops.",
}
UNUSED_VARIABLE_SUGGESTION = {
    "title": "Remove unused variables",
    "description": "Unused variables consume memory unnecessarily. "
                   "Consider removing them to optimize space usage.",
}


class ComplexityInfo:
    def __init__(self, time_class, factors, space_class, details, suggestions):
        self.time_class = time_class
        self.factors = factors
        self.space_class = space_class
        self.details = details
        self.suggestions = suggestions

    @property
    def time_notation(self):
        return COMPLEXITY_CLASSES[self.time_class]

    @property
    def space_notation(self):
        return COMPLEXITY_CLASSES[self.space_class]

    def to_dict(self):
        return {
            "time": {"bigO": self.time_class, "factors": list(self.factors)},
            "space": {"bigO": self.space_class, "details": list(self.details)},
            "suggestions": [dict(s) for s in self.suggestions],
        }

    def __repr__(self):
        return f"ComplexityInfo(time={self.time_notation}, space={self.space_notation})"


def has_nested_loops(tree):
    stack = [(tree, False)]
    while stack:
        node, in_loop = stack.pop()
        is_loop = node.kind in LOOP_KINDS
        if in_loop and is_loop:
            return True
        stack.extend((child, in_loop or is_loop) for child in node.children)
    return False


def count_kind(tree, *kinds):
    return sum(1 for node in tree.walk() if node.kind in kinds)


def has_arrays(tree):
    for node in tree.walk():
        if node.kind != VARIABLE_DECLARATION:
            continue
        type_node = node.child(TYPE)
        type_name = type_node.value if type_node is not None else ''
        if '[' in type_name or ']' in type_name:
            return True
    return False


def estimate_complexity(tree, control_flow, scopes=None):
    """Heuristic time/space classes for a parsed program.

    Returns None unless both the syntax tree and the control-flow graph
    are available. When scopes are given, unused variables add a
    suggestion.
    """
    if tree is None or control_flow is None:
        return None

    nested = has_nested_loops(tree)
    loop_count = count_kind(tree, *LOOP_KINDS)
    var_count = count_kind(tree, VARIABLE_DECLARATION)
    arrays = has_arrays(tree)

    if nested:
        time_class = QUADRATIC
    elif loop_count > 0:
        time_class = LINEAR
    else:
        time_class = CONSTANT

    if arrays:
        space_class = LINEAR
    elif var_count > MANY_VARIABLES:
        space_class = LOGARITHMIC
    else:
        space_class = CONSTANT

    factors = []
    if loop_count > 0:
        factors.append(f"{loop_count} loop(s) in the code")
    if nested:
        factors.append("Nested loops detected")
    if count_kind(tree, FUNCTION_CALL) > 0:
        factors.append("Function calls may contribute to runtime")

    details = [f"{var_count} variable(s) declared"]
    if arrays:
        details.append("Arrays or dynamic data structures detected")

    suggestions = []
    if nested:
        suggestions.append(dict(NESTED_LOOP_SUGGESTION))
    if scopes and _has_unused_variables(scopes):
        suggestions.append(dict(UNUSED_VARIABLE_SUGGESTION))

    return ComplexityInfo(time_class, factors, space_class, details, suggestions)


def _has_unused_variables(scopes):
    for root in scopes:
        for scope in root.walk():
            if any(not var.used for var in scope.variables):
                return True
    return False
