"""YAML node classes.

A node tree is the format-agnostic intermediate form a representer produces
from Python data and a serializer turns into events. Three node kinds exist:
scalars, sequences and mappings.

Scalar styles use the single-character codes of PyYAML:

    None    not specified, the representer's default scalar style applies
    ''      plain
    "'"     single-quoted
    '"'     double-quoted
    '|'     literal block
    '>'     folded block

Collection styles live in ``flow_style``: ``True`` for flow, ``False`` for
block and ``None`` for "not decided yet". A represented collection never
leaves the representer with ``flow_style`` still ``None``.
"""

PLAIN = ''
SINGLE_QUOTED = "'"
DOUBLE_QUOTED = '"'
LITERAL = '|'
FOLDED = '>'

SCALAR_STYLES = (None, PLAIN, SINGLE_QUOTED, DOUBLE_QUOTED, LITERAL, FOLDED)

FLOW = True
BLOCK = False
AUTO = None

NULL_TAG = 'tag:yaml.org,2002:null'
BOOL_TAG = 'tag:yaml.org,2002:bool'
INT_TAG = 'tag:yaml.org,2002:int'
FLOAT_TAG = 'tag:yaml.org,2002:float'
STR_TAG = 'tag:yaml.org,2002:str'
BINARY_TAG = 'tag:yaml.org,2002:binary'
TIMESTAMP_TAG = 'tag:yaml.org,2002:timestamp'
SEQ_TAG = 'tag:yaml.org,2002:seq'
MAP_TAG = 'tag:yaml.org,2002:map'
SET_TAG = 'tag:yaml.org,2002:set'


class Node:
    """Base class for YAML nodes.

    Attributes:
        tag: Semantic type label (opaque to the representer)
        value: Scalar text, list of child nodes, or list of (key, value) pairs
        start_mark: Source position, None for represented nodes
        end_mark: Source position, None for represented nodes
        shared: True once the node was reached from more than one place
            in the tree; the serializer gives such nodes an anchor
    """

    def __init__(self, tag=None, value=None, start_mark=None, end_mark=None):
        self.tag = tag
        self.value = value
        self.start_mark = start_mark
        self.end_mark = end_mark
        self.shared = False


class ScalarNode(Node):
    """Scalar node (strings, numbers, etc.)."""
    id = 'scalar'

    def __init__(self, tag, value, start_mark=None, end_mark=None, style=None):
        super().__init__(tag, value, start_mark, end_mark)
        self.style = style

    def is_plain(self):
        return self.style is None or self.style == PLAIN

    def __repr__(self):
        return '%s(tag=%r, value=%r, style=%r)' % (
            self.__class__.__name__, self.tag, self.value, self.style)


class CollectionNode(Node):
    """Base class for collection nodes."""

    def __init__(self, tag, value, start_mark=None, end_mark=None, flow_style=None):
        super().__init__(tag, value, start_mark, end_mark)
        self.flow_style = flow_style

    def __repr__(self):
        # Children are not shown: a collection may contain itself.
        return '%s(tag=%r, items=%d, flow_style=%r, shared=%r)' % (
            self.__class__.__name__, self.tag, len(self.value),
            self.flow_style, self.shared)


class SequenceNode(CollectionNode):
    """Sequence node (lists/arrays)."""
    id = 'sequence'


class MappingNode(CollectionNode):
    """Mapping node (dicts/objects)."""
    id = 'mapping'
