"""YAML representer.

Turns Python data into a node tree (see ``yamlrep.nodes``).

Converters are looked up in the representer's ``ConverterRegistry`` and are
called as ``converter(context, data)``. The context belongs to one
``represent`` call. It owns the identity tracker and the pointer to the
object currently being represented. Converters use it to represent
children::

    def represent_point(context, point):
        return context.represent_mapping('!point', {'x': point.x, 'y': point.y})

    SafeRepresenter.add_representer(Point, represent_point)

Collections are registered in the identity tracker before their children
are represented, which is what lets self-referencing data terminate. A node
reached a second time is flagged ``shared``.

Representation recurses once per level of nesting, so data nested deeper
than the interpreter's recursion limit raises ``RecursionError``.
"""

import base64
import collections
import collections.abc
import copyreg
import datetime
import enum
import logging
import numbers
import types

from .error import YAMLError
from .nodes import (
    ScalarNode,
    SequenceNode,
    MappingNode,
    SCALAR_STYLES,
    FLOW,
    BLOCK,
    AUTO,
    LITERAL,
    NULL_TAG,
    BOOL_TAG,
    INT_TAG,
    FLOAT_TAG,
    STR_TAG,
    BINARY_TAG,
    TIMESTAMP_TAG,
    SEQ_TAG,
    MAP_TAG,
    SET_TAG,
)
from .registry import ConverterRegistry
from .styles import best_flow_style, resolve_flow_style

log = logging.getLogger(__name__)


class RepresenterError(YAMLError):
    pass


class NotRepresentableError(RepresenterError):
    """No exact or fallback converter matches the type of a value."""

    def __init__(self, data_type):
        super().__init__("cannot represent an object of type %s.%s"
                         % (data_type.__module__, data_type.__qualname__))
        self.data_type = data_type


class IdentityTracker:
    """Nodes built during one representation, keyed by object identity.

    Each object is held next to its node, so its ``id()`` cannot be handed
    to another object while the representation runs.
    """

    def __init__(self):
        self._entries = {}

    def get(self, data):
        """Return the node already built for data, flagging it shared."""
        entry = self._entries.get(id(data))
        if entry is None:
            return None
        node = entry[1]
        node.shared = True
        return node

    def put(self, data, node):
        self._entries[id(data)] = (data, node)

    def clear(self):
        self._entries.clear()

    def __contains__(self, data):
        return id(data) in self._entries

    def __len__(self):
        return len(self._entries)


class RepresentContext:
    """State of a single ``represent`` call, passed to every converter."""

    def __init__(self, representer):
        self.representer = representer
        self.registry = representer.registry
        self.null_representer = representer.yaml_null_representer
        self.default_style = representer.default_style
        self.default_flow_style = representer.default_flow_style
        self.sort_keys = representer.sort_keys
        self.tracker = IdentityTracker()
        self.object_to_represent = None

    def represent_data(self, data):
        """Represent data, reusing the node of an object already seen."""
        if data is None:
            converter = self.null_representer
            if converter is None:
                raise NotRepresentableError(type(None))
        else:
            node = self.tracker.get(data)
            if node is not None:
                return node
            converter = self.registry.lookup(data)
            if converter is None:
                log.debug("no converter for %r", type(data))
                raise NotRepresentableError(type(data))
        previous = self.object_to_represent
        self.object_to_represent = data
        try:
            return converter(self, data)
        finally:
            self.object_to_represent = previous

    def remember(self, node):
        """Record node as the representation of the current object.

        Must happen before any child of the object is represented.
        """
        if self.object_to_represent is not None:
            self.tracker.put(self.object_to_represent, node)

    def represent_scalar(self, tag, value, style=None):
        """Represent a scalar; style None means the default scalar style."""
        if style is None:
            style = self.default_style
        return ScalarNode(tag, value, style=style)

    def represent_sequence(self, tag, sequence, flow_style=None):
        value = []
        node = SequenceNode(tag, value, flow_style=flow_style)
        self.remember(node)
        for item in sequence:
            value.append(self.represent_data(item))
        node.flow_style = resolve_flow_style(
            flow_style, self.default_flow_style, best_flow_style(value))
        return node

    def represent_mapping(self, tag, mapping, flow_style=None):
        """Represent a mapping or an iterable of (key, value) pairs."""
        value = []
        node = MappingNode(tag, value, flow_style=flow_style)
        self.remember(node)
        if hasattr(mapping, 'items'):
            mapping = mapping.items()
        if self.sort_keys:
            mapping = list(mapping)
            try:
                mapping = sorted(mapping, key=lambda item: item[0])
            except TypeError:
                pass
        for item_key, item_value in mapping:
            node_key = self.represent_data(item_key)
            node_value = self.represent_data(item_value)
            value.append((node_key, node_value))
        children = [child for pair in value for child in pair]
        node.flow_style = resolve_flow_style(
            flow_style, self.default_flow_style, best_flow_style(children))
        return node

    def represent_yaml_object(self, tag, data, cls, flow_style=None):
        """Represent an object's state as a mapping with the given tag."""
        return self.represent_mapping(tag, _object_state(data),
                                      flow_style=flow_style)

    def dispose(self):
        self.tracker.clear()
        self.object_to_represent = None


def _object_state(data):
    getstate = getattr(data, '__getstate__', None)
    if getstate is not None:
        state = getstate()
    else:
        state = data.__dict__.copy()
    if state is None:
        return {}
    if isinstance(state, tuple) and len(state) == 2:
        # (instance dict, slots dict)
        merged = dict(state[0] or {})
        merged.update(state[1] or {})
        return merged
    return state


class BaseRepresenter:
    """Base representer: an empty converter table.

    Configuration:
        default_style: scalar style used when a converter does not ask for
            one (None is plain)
        default_flow_style: True (flow), False (block) or None (decide per
            collection from its children); an explicit style requested by a
            converter still wins
        sort_keys: sort mapping keys when they are comparable

    Each instance takes a frozen snapshot of its class's registry, and each
    ``represent`` call works on its own ``RepresentContext``.
    """
    yaml_representers = ConverterRegistry()
    yaml_null_representer = None

    def __init__(self, default_style=None, default_flow_style=None,
                 sort_keys=False):
        if default_style not in SCALAR_STYLES:
            raise RepresenterError(
                "invalid default scalar style %r" % (default_style,))
        if not any(default_flow_style is style for style in (FLOW, BLOCK, AUTO)):
            raise RepresenterError(
                "invalid default flow style %r" % (default_flow_style,))
        self.default_style = default_style
        self.default_flow_style = default_flow_style
        self.sort_keys = sort_keys
        self.registry = self.yaml_representers.frozen()

    @classmethod
    def add_representer(cls, data_type, representer):
        """Add a representer for exactly data_type."""
        # Copy the inherited registry before the first write
        if 'yaml_representers' not in cls.__dict__:
            cls.yaml_representers = cls.yaml_representers.copy()
        cls.yaml_representers.register_exact(data_type, representer)

    @classmethod
    def add_multi_representer(cls, data_type, representer):
        """Add a representer for data_type and its subclasses."""
        if 'yaml_representers' not in cls.__dict__:
            cls.yaml_representers = cls.yaml_representers.copy()
        cls.yaml_representers.register_fallback(data_type, representer)

    @classmethod
    def add_null_representer(cls, representer):
        cls.yaml_null_representer = representer

    def represent(self, data):
        """Represent data as a node tree.

        Raises NotRepresentableError if some value reachable from data has
        no converter; nothing is returned in that case.
        """
        context = RepresentContext(self)
        log.debug("representing %s", type(data).__name__)
        try:
            node = context.represent_data(data)
        finally:
            context.dispose()
        return node


# Safe converters

_INF = float('inf')


def represent_none(context, data):
    return context.represent_scalar(NULL_TAG, 'null')


def represent_str(context, data):
    return context.represent_scalar(STR_TAG, str(data))


def represent_bool(context, data):
    return context.represent_scalar(BOOL_TAG, 'true' if data else 'false')


def represent_int(context, data):
    return context.represent_scalar(INT_TAG, str(int(data)))


def represent_float(context, data):
    data = float(data)
    if data != data:
        value = '.nan'
    elif data == _INF:
        value = '.inf'
    elif data == -_INF:
        value = '-.inf'
    else:
        value = repr(data).lower()
        # 1e+17 is not a YAML 1.1 float, 1.0e+17 is
        if '.' not in value and 'e' in value:
            value = value.replace('e', '.0e', 1)
    return context.represent_scalar(FLOAT_TAG, value)


def represent_binary(context, data):
    """Represent bytes as base64-encoded binary with literal block style."""
    encoded = base64.standard_b64encode(bytes(data)).decode('ascii')
    return context.represent_scalar(BINARY_TAG, encoded, style=LITERAL)


def represent_datetime(context, data):
    return context.represent_scalar(TIMESTAMP_TAG, data.isoformat(' '))


def represent_date(context, data):
    return context.represent_scalar(TIMESTAMP_TAG, data.isoformat())


def represent_list(context, data):
    return context.represent_sequence(SEQ_TAG, data)


def represent_dict(context, data):
    return context.represent_mapping(MAP_TAG, data)


def represent_set(context, data):
    """Represent a set as a tagged mapping with null values."""
    return context.represent_mapping(SET_TAG, [(item, None) for item in data])


def represent_enum(context, data):
    return context.represent_scalar(STR_TAG, data.name)


class SafeRepresenter(BaseRepresenter):
    """Representer for plain data: scalars, collections, dates and bytes.

    Arbitrary objects are not representable.
    """
    pass


SafeRepresenter.add_null_representer(represent_none)

SafeRepresenter.add_representer(str, represent_str)
SafeRepresenter.add_representer(bool, represent_bool)
SafeRepresenter.add_representer(int, represent_int)
SafeRepresenter.add_representer(float, represent_float)
SafeRepresenter.add_representer(bytes, represent_binary)
SafeRepresenter.add_representer(bytearray, represent_binary)
SafeRepresenter.add_representer(datetime.datetime, represent_datetime)
SafeRepresenter.add_representer(datetime.date, represent_date)
SafeRepresenter.add_representer(list, represent_list)
SafeRepresenter.add_representer(tuple, represent_list)
SafeRepresenter.add_representer(dict, represent_dict)
SafeRepresenter.add_representer(collections.OrderedDict, represent_dict)
SafeRepresenter.add_representer(set, represent_set)
SafeRepresenter.add_representer(frozenset, represent_set)

# Order matters: enums before the str/int they may derive from, str before
# Sequence, datetime before its base class date, Mapping before Sequence.
SafeRepresenter.add_multi_representer(enum.Enum, represent_enum)
SafeRepresenter.add_multi_representer(str, represent_str)
SafeRepresenter.add_multi_representer(bytes, represent_binary)
SafeRepresenter.add_multi_representer(datetime.datetime, represent_datetime)
SafeRepresenter.add_multi_representer(datetime.date, represent_date)
SafeRepresenter.add_multi_representer(collections.abc.Mapping, represent_dict)
SafeRepresenter.add_multi_representer(collections.abc.Set, represent_set)
SafeRepresenter.add_multi_representer(collections.abc.Sequence, represent_list)
SafeRepresenter.add_multi_representer(numbers.Integral, represent_int)
SafeRepresenter.add_multi_representer(numbers.Real, represent_float)


# Full converters

def represent_python_tuple(context, data):
    return context.represent_sequence('tag:yaml.org,2002:python/tuple', data)


def represent_complex(context, data):
    if data.imag == 0.0:
        value = '%r' % data.real
    elif data.real == 0.0:
        value = '%rj' % data.imag
    elif data.imag > 0:
        value = '%r+%rj' % (data.real, data.imag)
    else:
        value = '%r%rj' % (data.real, data.imag)
    return context.represent_scalar('tag:yaml.org,2002:python/complex', value)


def represent_name(context, data):
    """Represent a class or function as !!python/name:..."""
    name = '%s.%s' % (data.__module__, data.__qualname__)
    return context.represent_scalar('tag:yaml.org,2002:python/name:' + name, '')


def represent_module(context, data):
    return context.represent_scalar(
        'tag:yaml.org,2002:python/module:' + data.__name__, '')


def represent_object(context, data):
    """Represent an arbitrary object through the __reduce__ protocol.

    Objects rebuilt by ``cls.__new__`` plus a state dict become a
    ``!!python/object:`` mapping of that state; everything else becomes a
    ``!!python/object/new:`` or ``!!python/object/apply:`` sequence of
    arguments or a mapping of args, state, listitems and dictitems.
    """
    cls = type(data)
    if cls in copyreg.dispatch_table:
        reduce = copyreg.dispatch_table[cls](data)
    elif hasattr(data, '__reduce_ex__'):
        reduce = data.__reduce_ex__(2)
    elif hasattr(data, '__reduce__'):
        reduce = data.__reduce__()
    else:
        raise RepresenterError("cannot represent an object: %r" % (data,))

    if isinstance(reduce, str):
        return context.represent_scalar(
            'tag:yaml.org,2002:python/name:' + reduce, '')

    reduce = (list(reduce) + [None] * 5)[:5]
    function, args, state, listitems, dictitems = reduce
    args = list(args)
    if state is None:
        state = {}
    if listitems is not None:
        listitems = list(listitems)
    if dictitems is not None:
        dictitems = dict(dictitems)

    if function.__name__ == '__newobj__':
        function = args[0]
        args = args[1:]
        tag = 'tag:yaml.org,2002:python/object/new:'
        newobj = True
    else:
        tag = 'tag:yaml.org,2002:python/object/apply:'
        newobj = False
    function_name = '%s.%s' % (function.__module__, function.__qualname__)

    if not args and not listitems and not dictitems \
            and isinstance(state, dict) and newobj:
        return context.represent_mapping(
            'tag:yaml.org,2002:python/object:' + function_name, state)
    if not listitems and not dictitems \
            and isinstance(state, dict) and not state:
        return context.represent_sequence(tag + function_name, args)

    value = {}
    if args:
        value['args'] = args
    if state or not isinstance(state, dict):
        value['state'] = state
    if listitems:
        value['listitems'] = listitems
    if dictitems:
        value['dictitems'] = dictitems
    return context.represent_mapping(tag + function_name, value)


class Representer(SafeRepresenter):
    """Full representer: also handles Python-specific types and any object."""
    pass


Representer.add_representer(tuple, represent_python_tuple)
Representer.add_representer(complex, represent_complex)
Representer.add_representer(types.FunctionType, represent_name)
Representer.add_representer(types.BuiltinFunctionType, represent_name)
Representer.add_representer(types.ModuleType, represent_module)
Representer.add_multi_representer(type, represent_name)
Representer.add_multi_representer(object, represent_object)
