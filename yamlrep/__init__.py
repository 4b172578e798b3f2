"""yamlrep - turn Python data into YAML node trees.

Representation is the first half of dumping YAML: Python values become a
tree of scalar, sequence and mapping nodes that an emitter can write out.
Shared and self-referencing data is detected by object identity; each
collection is given flow or block style once its children are known.

Usage:
    import yamlrep

    node = yamlrep.safe_represent({'name': 'Alice', 'tags': ['a', 'b']})
    events = yamlrep.serialize(node)

Supported API:
    - represent(data, Representer) / safe_represent(data)
    - serialize(node) / serialize_all(nodes)
    - add_representer(data_type, representer, Representer)
    - add_multi_representer(data_type, representer, Representer)
    - YAMLObject (subclasses with a yaml_tag represent themselves)
"""

__version__ = '0.1.0'

from . import nodes
from . import events
from . import registry
from . import representer
from . import resolver
from . import serializer

from .error import YAMLError
from .registry import ConverterRegistry, RegistryError
from .representer import (
    RepresenterError,
    NotRepresentableError,
    IdentityTracker,
    RepresentContext,
    BaseRepresenter,
    SafeRepresenter,
    Representer,
)
from .resolver import BaseResolver, Resolver
from .serializer import Serializer, SerializerError
from .nodes import (
    Node,
    ScalarNode,
    CollectionNode,
    SequenceNode,
    MappingNode,
)


def represent(data, Representer=None, **kwds):
    """Represent data as a node tree.

    Args:
        data: Python object to represent
        Representer: Representer class (default: Representer)
        **kwds: default_style, default_flow_style, sort_keys

    Returns:
        Root Node of the tree
    """
    if Representer is None:
        Representer = globals()['Representer']
    return Representer(**kwds).represent(data)


def safe_represent(data, **kwds):
    """Represent plain data only; arbitrary objects raise NotRepresentableError."""
    return represent(data, Representer=SafeRepresenter, **kwds)


def serialize_all(nodes, Serializer=None, **kwds):
    """Turn a sequence of node trees into one event stream.

    Args:
        nodes: Root nodes, one per document
        Serializer: Serializer class (default: Serializer)
        **kwds: resolver, explicit_start, explicit_end, version, tags

    Returns:
        List of events
    """
    if Serializer is None:
        Serializer = globals()['Serializer']
    serializer = Serializer(**kwds)
    serializer.open()
    for node in nodes:
        serializer.serialize(node)
    serializer.close()
    return serializer.events


def serialize(node, Serializer=None, **kwds):
    """Turn a node tree into an event stream."""
    return serialize_all([node], Serializer=Serializer, **kwds)


def add_representer(data_type, representer, Representer=None):
    """Add a representer for the given data type.

    Args:
        data_type: Python type to represent
        representer: Function(context, data) -> node
        Representer: Representer class to add it to (default: Representer)
    """
    if Representer is None:
        Representer = globals()['Representer']
    Representer.add_representer(data_type, representer)


def add_multi_representer(data_type, multi_representer, Representer=None):
    """Add a multi-representer for the given data type.

    Args:
        data_type: Python type (and subclasses) to represent
        multi_representer: Function(context, data) -> node
        Representer: Representer class to add it to (default: Representer)
    """
    if Representer is None:
        Representer = globals()['Representer']
    Representer.add_multi_representer(data_type, multi_representer)


class YAMLObjectMetaclass(type):
    """Metaclass for YAMLObject that auto-registers representers."""

    def __init__(cls, name, bases, kwds):
        super().__init__(name, bases, kwds)
        if 'yaml_tag' in kwds and kwds['yaml_tag'] is not None:
            yaml_representer = getattr(cls, 'yaml_representer', None)
            if yaml_representer is None:
                return
            if isinstance(yaml_representer, (list, tuple)):
                representers = yaml_representer
            else:
                representers = [yaml_representer]
            for representer_class in representers:
                representer_class.add_representer(cls, cls.to_yaml)


class YAMLObject(metaclass=YAMLObjectMetaclass):
    """Base class for objects that know how to represent themselves.

    Subclasses should define:
        yaml_tag: The YAML tag for this class (e.g., '!point')
        yaml_representer: Representer class(es) to register with
            (default: Representer)

    And optionally override:
        to_yaml(cls, context, data): Represent an instance as a node
    """
    yaml_tag = None
    yaml_flow_style = None
    yaml_representer = Representer

    @classmethod
    def to_yaml(cls, context, data):
        """Represent an instance as a mapping of its state."""
        return context.represent_yaml_object(cls.yaml_tag, data, cls,
                                             flow_style=cls.yaml_flow_style)
