from pathlib import Path

import pydot

from .ControlFlow import ENTRY, EXIT, IF, WHILE, FOR, iter_nodes

NODE_SHAPES = {
    ENTRY: "oval",
    EXIT: "oval",
    IF: "diamond",
    WHILE: "hexagon",
    FOR: "hexagon",
}

NODE_COLORS = {
    ENTRY: "#A5D6A7",
    EXIT: "#EF9A9A",
    IF: "#FFE082",
    WHILE: "#90CAF9",
    FOR: "#90CAF9",
}


def build_graph(root):
    """Convert a control-flow graph into a pydot digraph."""
    graph = pydot.Dot(
        "control_flow",
        graph_type="digraph",
        rankdir="TB",
        fontname="Helvetica",
    )

    for node in iter_nodes(root):
        label = _escape(node.kind)
        if node.condition:
            label += "\\n" + _escape(node.condition)
        graph.add_node(
            pydot.Node(
                node.id,
                label=f'"{label}"',
                shape=NODE_SHAPES.get(node.kind, "box"),
                style="filled",
                fillcolor=NODE_COLORS.get(node.kind, "#ECEFF1"),
                fontname="Helvetica",
            )
        )

    for node in iter_nodes(root):
        for child, label in node.edges():
            attrs = {}
            if label is not None:
                attrs["label"] = label
            graph.add_edge(pydot.Edge(node.id, child.id, **attrs))

    return graph


def export_dot(root, output_path=None):
    """Render the graph as DOT text, writing it to output_path if given."""
    text = build_graph(root).to_string()
    if output_path is not None:
        output_path = Path(output_path)
        if output_path.parent and not output_path.parent.exists():
            output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")
    return text


def _escape(text):
    return text.replace("\\", "\\\\").replace('"', '\\"')
