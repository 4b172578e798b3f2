"""Node tree to event stream.

Nodes the representer flagged ``shared`` get an anchor at their first
appearance in document order; every later appearance becomes an alias.
A node that appears twice without the flag (a converter handing out a
cached node) is anchored as well.
"""

import logging

from .error import YAMLError
from .events import (
    StreamStartEvent, StreamEndEvent,
    DocumentStartEvent, DocumentEndEvent,
    AliasEvent, ScalarEvent,
    SequenceStartEvent, SequenceEndEvent,
    MappingStartEvent, MappingEndEvent,
)
from .nodes import ScalarNode, SequenceNode, MappingNode
from .resolver import Resolver

log = logging.getLogger(__name__)


class SerializerError(YAMLError):
    """YAML serializer error (e.g., serializer state violations)."""
    pass


class Serializer:

    ANCHOR_TEMPLATE = 'id%03d'

    def __init__(self, resolver=None, explicit_start=None, explicit_end=None,
                 version=None, tags=None):
        if resolver is None:
            resolver = Resolver()
        self.resolver = resolver
        self.explicit_start = explicit_start
        self.explicit_end = explicit_end
        self.version = version
        self.tags = tags
        self.events = []
        self._serialized_nodes = set()
        self._anchors = {}
        self._last_anchor_id = 0
        self._opened = False
        self._closed = False

    def open(self):
        if self._closed:
            raise SerializerError("serializer is closed")
        if self._opened:
            raise SerializerError("serializer is already opened")
        self._opened = True
        self.events.append(StreamStartEvent())

    def close(self):
        if self._closed:
            raise SerializerError("serializer is closed")
        if not self._opened:
            raise SerializerError("serializer is not opened")
        self.events.append(StreamEndEvent())
        self._closed = True

    def serialize(self, node):
        """Append the events of one document rooted at node."""
        if self._closed:
            raise SerializerError("serializer is closed")
        if not self._opened:
            raise SerializerError("serializer is not opened")
        self.events.append(DocumentStartEvent(
            explicit=self.explicit_start, version=self.version,
            tags=self.tags))
        self._anchor_node(node, set())
        log.debug("document has %d anchor(s)", len(self._anchors))
        self._serialize_node(node)
        self.events.append(DocumentEndEvent(explicit=self.explicit_end))
        self._serialized_nodes = set()
        self._anchors = {}
        self._last_anchor_id = 0

    def generate_anchor(self, node):
        self._last_anchor_id += 1
        return self.ANCHOR_TEMPLATE % self._last_anchor_id

    def _anchor_node(self, node, visited):
        node_id = id(node)
        if node_id in visited:
            # Reused by a converter without being flagged shared
            if node_id not in self._anchors:
                self._anchors[node_id] = self.generate_anchor(node)
            return
        visited.add(node_id)
        if node.shared:
            self._anchors[node_id] = self.generate_anchor(node)
        if isinstance(node, SequenceNode):
            for item in node.value:
                self._anchor_node(item, visited)
        elif isinstance(node, MappingNode):
            for key_node, value_node in node.value:
                self._anchor_node(key_node, visited)
                self._anchor_node(value_node, visited)

    def _serialize_node(self, node):
        node_id = id(node)
        anchor = self._anchors.get(node_id)
        if node_id in self._serialized_nodes:
            self.events.append(AliasEvent(anchor))
            return
        self._serialized_nodes.add(node_id)
        if isinstance(node, ScalarNode):
            detected_tag = self.resolver.resolve(ScalarNode, node.value, (True, False))
            default_tag = self.resolver.resolve(ScalarNode, node.value, (False, True))
            implicit = (node.tag == detected_tag, node.tag == default_tag)
            self.events.append(ScalarEvent(
                anchor, node.tag, implicit, node.value, style=node.style))
        elif isinstance(node, SequenceNode):
            implicit = node.tag == self.resolver.resolve(SequenceNode, node.value, True)
            self.events.append(SequenceStartEvent(
                anchor, node.tag, implicit, flow_style=node.flow_style))
            for item in node.value:
                self._serialize_node(item)
            self.events.append(SequenceEndEvent())
        elif isinstance(node, MappingNode):
            implicit = node.tag == self.resolver.resolve(MappingNode, node.value, True)
            self.events.append(MappingStartEvent(
                anchor, node.tag, implicit, flow_style=node.flow_style))
            for key_node, value_node in node.value:
                self._serialize_node(key_node)
                self._serialize_node(value_node)
            self.events.append(MappingEndEvent())
        else:
            raise SerializerError("expected a node, but found %r" % (node,))
