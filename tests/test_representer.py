"""Tests for the representers: standard converters, errors, objects.

SafeRepresenter handles plain data; Representer also handles Python
specific types and arbitrary objects through the __reduce__ protocol.
"""

import collections
import datetime
import enum
import fractions
import os
import types

import pytest
import yamlrep
from yamlrep.nodes import (
    ScalarNode, SequenceNode, MappingNode,
    NULL_TAG, BOOL_TAG, INT_TAG, FLOAT_TAG, STR_TAG, BINARY_TAG,
    TIMESTAMP_TAG, SEQ_TAG, MAP_TAG, SET_TAG,
)


def _tree(node):
    """Structural summary of an acyclic node tree."""
    if isinstance(node, ScalarNode):
        return ('scalar', node.tag, node.value, node.style)
    if isinstance(node, SequenceNode):
        return ('seq', node.tag, node.flow_style,
                tuple(_tree(item) for item in node.value))
    return ('map', node.tag, node.flow_style,
            tuple((_tree(k), _tree(v)) for k, v in node.value))


def _scalar(data, **kwds):
    node = yamlrep.safe_represent(data, **kwds)
    assert isinstance(node, ScalarNode)
    return node.tag, node.value


class Color(enum.Enum):
    RED = 1
    GREEN = 2


class Level(enum.IntEnum):
    LOW = 1


class MyStr(str):
    pass


class MyDateTime(datetime.datetime):
    pass


class Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y


class Pair:
    def __init__(self, first, second):
        self.first = first
        self.second = second

    def __reduce__(self):
        return (Pair, (self.first, self.second))


class Monster(yamlrep.YAMLObject):
    yaml_tag = '!Monster'

    def __init__(self, name, hp):
        self.name = name
        self.hp = hp


class TestNull:
    """None has its own converter."""

    def test_represent_none(self):
        """None is a null scalar, not an error."""
        node = yamlrep.safe_represent(None)
        assert isinstance(node, ScalarNode)
        assert node.tag == NULL_TAG
        assert node.value == 'null'

    def test_base_representer_without_null_converter(self):
        with pytest.raises(yamlrep.NotRepresentableError) as excinfo:
            yamlrep.BaseRepresenter().represent(None)
        assert excinfo.value.data_type is type(None)

    def test_custom_null_representer(self):
        class TildeRepresenter(yamlrep.SafeRepresenter):
            pass

        TildeRepresenter.add_null_representer(
            lambda context, data: context.represent_scalar(NULL_TAG, '~'))
        node = TildeRepresenter().represent([None])
        assert node.value[0].value == '~'
        assert yamlrep.safe_represent(None).value == 'null'


class TestScalars:
    """Scalar converters."""

    def test_str(self):
        assert _scalar('hello') == (STR_TAG, 'hello')

    def test_str_subclass(self):
        tag, value = _scalar(MyStr('sub'))
        assert (tag, value) == (STR_TAG, 'sub')
        assert type(value) is str

    def test_bool(self):
        assert _scalar(True) == (BOOL_TAG, 'true')
        assert _scalar(False) == (BOOL_TAG, 'false')

    def test_int(self):
        assert _scalar(42) == (INT_TAG, '42')
        assert _scalar(-7) == (INT_TAG, '-7')

    def test_float(self):
        assert _scalar(0.5) == (FLOAT_TAG, '0.5')
        assert _scalar(1e17) == (FLOAT_TAG, '1.0e+17')

    def test_float_specials(self):
        assert _scalar(float('nan')) == (FLOAT_TAG, '.nan')
        assert _scalar(float('inf')) == (FLOAT_TAG, '.inf')
        assert _scalar(float('-inf')) == (FLOAT_TAG, '-.inf')

    def test_fraction_is_real(self):
        assert _scalar(fractions.Fraction(1, 2)) == (FLOAT_TAG, '0.5')

    def test_bytes(self):
        node = yamlrep.safe_represent(b'hello')
        assert node.tag == BINARY_TAG
        assert node.value == 'aGVsbG8='
        assert node.style == '|'

    def test_bytearray(self):
        node = yamlrep.safe_represent(bytearray(b'hello'))
        assert node.tag == BINARY_TAG
        assert node.value == 'aGVsbG8='

    def test_datetime(self):
        assert _scalar(datetime.datetime(2024, 1, 2, 3, 4, 5)) == \
            (TIMESTAMP_TAG, '2024-01-02 03:04:05')
        assert _scalar(datetime.datetime(2024, 1, 2, 3, 4, 5, 60)) == \
            (TIMESTAMP_TAG, '2024-01-02 03:04:05.000060')

    def test_aware_datetime(self):
        data = datetime.datetime(2024, 1, 2, 3, 4, 5,
                                 tzinfo=datetime.timezone.utc)
        assert _scalar(data) == (TIMESTAMP_TAG, '2024-01-02 03:04:05+00:00')

    def test_datetime_with_small_year(self):
        """Years below 1000 keep four digits and still read as timestamps."""
        node = yamlrep.safe_represent(datetime.datetime(5, 1, 2, 3, 4, 5))
        assert node.value == '0005-01-02 03:04:05'
        event = yamlrep.serialize(node)[2]
        assert event.implicit == (True, False)
        assert _scalar(datetime.date(5, 1, 2)) == (TIMESTAMP_TAG, '0005-01-02')

    def test_date(self):
        assert _scalar(datetime.date(2024, 1, 2)) == (TIMESTAMP_TAG, '2024-01-02')

    def test_datetime_subclass_uses_datetime_converter(self):
        """The datetime fallback is tried before its base class date."""
        data = MyDateTime(2024, 1, 2, 3, 4, 5)
        assert _scalar(data) == (TIMESTAMP_TAG, '2024-01-02 03:04:05')

    def test_enum(self):
        assert _scalar(Color.RED) == (STR_TAG, 'RED')

    def test_int_enum_uses_enum_converter(self):
        assert _scalar(Level.LOW) == (STR_TAG, 'LOW')


class TestCollections:
    """Collection converters."""

    def test_list(self):
        node = yamlrep.safe_represent([1, 'a'])
        assert isinstance(node, SequenceNode)
        assert node.tag == SEQ_TAG
        assert [child.value for child in node.value] == ['1', 'a']

    def test_tuple_is_sequence_in_safe(self):
        node = yamlrep.safe_represent((1, 2))
        assert node.tag == SEQ_TAG

    def test_tuple_is_python_tuple_in_full(self):
        node = yamlrep.represent((1, 2))
        assert node.tag == 'tag:yaml.org,2002:python/tuple'

    def test_dict_keeps_insertion_order(self):
        node = yamlrep.safe_represent({'b': 1, 'a': 2})
        assert isinstance(node, MappingNode)
        assert node.tag == MAP_TAG
        assert [key.value for key, _ in node.value] == ['b', 'a']

    def test_sort_keys(self):
        node = yamlrep.safe_represent({'b': 1, 'a': 2}, sort_keys=True)
        assert [key.value for key, _ in node.value] == ['a', 'b']

    def test_sort_keys_with_unorderable_keys(self):
        """Keys that cannot be compared keep their order."""
        node = yamlrep.safe_represent({'b': 1, 2: 'x'}, sort_keys=True)
        assert [key.value for key, _ in node.value] == ['b', '2']

    def test_ordered_dict(self):
        node = yamlrep.safe_represent(collections.OrderedDict([('z', 1), ('y', 2)]))
        assert node.tag == MAP_TAG
        assert [key.value for key, _ in node.value] == ['z', 'y']

    def test_set(self):
        node = yamlrep.safe_represent({'only'})
        assert node.tag == SET_TAG
        key, value = node.value[0]
        assert key.value == 'only'
        assert value.tag == NULL_TAG

    def test_frozenset(self):
        assert yamlrep.safe_represent(frozenset([1])).tag == SET_TAG

    def test_mapping_capability(self):
        node = yamlrep.safe_represent(types.MappingProxyType({'k': 'v'}))
        assert node.tag == MAP_TAG

    def test_sequence_capability(self):
        node = yamlrep.safe_represent(range(3))
        assert node.tag == SEQ_TAG
        assert [child.value for child in node.value] == ['0', '1', '2']

    def test_deque(self):
        node = yamlrep.safe_represent(collections.deque([1]))
        assert node.tag == SEQ_TAG

    def test_represented_nodes_have_no_marks(self):
        node = yamlrep.safe_represent({'a': [1]})
        assert node.start_mark is None
        assert node.end_mark is None


class TestNotRepresentable:
    """Values without a converter abort the call."""

    def test_object_in_safe_representer(self):
        with pytest.raises(yamlrep.NotRepresentableError) as excinfo:
            yamlrep.safe_represent(object())
        assert excinfo.value.data_type is object
        assert 'builtins.object' in str(excinfo.value)

    def test_nested_unrepresentable_value(self):
        with pytest.raises(yamlrep.NotRepresentableError) as excinfo:
            yamlrep.safe_represent({'a': [1, Point(1, 2)]})
        assert excinfo.value.data_type is Point

    def test_error_hierarchy(self):
        assert issubclass(yamlrep.NotRepresentableError, yamlrep.RepresenterError)
        assert issubclass(yamlrep.RepresenterError, yamlrep.YAMLError)

    def test_empty_base_representer(self):
        with pytest.raises(yamlrep.NotRepresentableError):
            yamlrep.BaseRepresenter().represent('text')


class TestFullRepresenter:
    """Python-specific types and arbitrary objects."""

    def test_plain_object(self):
        node = yamlrep.represent(Point(1, 2))
        assert isinstance(node, MappingNode)
        assert node.tag.startswith('tag:yaml.org,2002:python/object:')
        assert node.tag.endswith('.Point')
        assert [(k.value, v.value) for k, v in node.value] == [('x', '1'), ('y', '2')]

    def test_object_referencing_itself(self):
        point = Point(1, 2)
        point.x = point
        node = yamlrep.represent(point)
        assert node.value[0][1] is node
        assert node.shared

    def test_bare_object(self):
        node = yamlrep.represent(object())
        assert node.tag == 'tag:yaml.org,2002:python/object:builtins.object'
        assert node.value == []

    def test_reduce_with_arguments(self):
        node = yamlrep.represent(Pair(1, 'b'))
        assert isinstance(node, SequenceNode)
        assert node.tag.startswith('tag:yaml.org,2002:python/object/apply:')
        assert node.tag.endswith('.Pair')
        assert [child.value for child in node.value] == ['1', 'b']

    def test_complex(self):
        node = yamlrep.represent(complex(1, 2))
        assert node.tag == 'tag:yaml.org,2002:python/complex'
        assert node.value == '1.0+2.0j'
        assert yamlrep.represent(complex(0, -1)).value == '-1.0j'

    def test_class_and_function_names(self):
        node = yamlrep.represent(collections.OrderedDict)
        assert node.tag == 'tag:yaml.org,2002:python/name:collections.OrderedDict'
        assert node.value == ''
        node = yamlrep.represent(os.path.join)
        assert node.tag.startswith('tag:yaml.org,2002:python/name:')
        assert node.tag.endswith('.join')
        node = yamlrep.represent(len)
        assert node.tag == 'tag:yaml.org,2002:python/name:builtins.len'

    def test_module(self):
        node = yamlrep.represent(os)
        assert node.tag == 'tag:yaml.org,2002:python/module:os'

    def test_safe_types_unchanged(self):
        assert yamlrep.represent([1, {'a': None}]).tag == SEQ_TAG

    def test_yaml_object(self):
        node = yamlrep.represent(Monster('Cave spider', 16))
        assert node.tag == '!Monster'
        assert [(k.value, v.value) for k, v in node.value] == \
            [('name', 'Cave spider'), ('hp', '16')]

    def test_yaml_object_not_in_safe_representer(self):
        with pytest.raises(yamlrep.NotRepresentableError):
            yamlrep.safe_represent(Monster('Bat', 1))

    def test_yaml_object_custom_to_yaml(self):
        class MyRepresenter(yamlrep.SafeRepresenter):
            pass

        class Temperature(yamlrep.YAMLObject):
            yaml_tag = '!celsius'
            yaml_representer = MyRepresenter

            def __init__(self, degrees):
                self.degrees = degrees

            @classmethod
            def to_yaml(cls, context, data):
                return context.represent_scalar(cls.yaml_tag, str(data.degrees))

        node = MyRepresenter().represent([Temperature(21)])
        assert node.value[0].tag == '!celsius'
        assert node.value[0].value == '21'


class TestDeterminism:
    """Fixed registry and settings give structurally equal trees."""

    def test_repeated_calls_give_equal_trees(self):
        data = {'name': 'x', 'items': [1, 2.5, None, {'deep': [True]}],
                'when': datetime.date(2024, 1, 1)}
        representer = yamlrep.SafeRepresenter()
        first = representer.represent(data)
        second = representer.represent(data)
        assert first is not second
        assert _tree(first) == _tree(second)

    def test_module_function_matches_instance(self):
        data = ['a', {'b': (1, 2)}]
        assert _tree(yamlrep.safe_represent(data)) == \
            _tree(yamlrep.SafeRepresenter().represent(data))
