"""Collection style resolution.

A collection's style is decided after its children are built:

1. an explicit style requested for this collection wins;
2. otherwise the representer-wide default style, if it is not AUTO;
3. otherwise flow when every child is a plain scalar, block when not.
"""

from .nodes import ScalarNode, FLOW, BLOCK, AUTO


def best_flow_style(children):
    """Return FLOW if every child is a plain scalar, BLOCK otherwise.

    An empty collection is FLOW. Any collection child forces BLOCK.
    """
    for child in children:
        if not (isinstance(child, ScalarNode) and child.is_plain()):
            return BLOCK
    return FLOW


def resolve_flow_style(requested, default, best):
    if requested is not AUTO:
        return requested
    if default is not AUTO:
        return default
    return best
