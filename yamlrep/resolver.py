"""Implicit tag resolution for plain scalars (YAML 1.1 rules).

The serializer asks the resolver which tag a plain scalar would get when
read back, and marks the scalar's tag implicit only when it matches. That
is how the emitter knows that the string ``null`` must be quoted.
"""

import re

from .nodes import (
    ScalarNode,
    SequenceNode,
    MappingNode,
    STR_TAG,
    SEQ_TAG,
    MAP_TAG,
)


class BaseResolver:
    """Base YAML tag resolver."""
    yaml_implicit_resolvers = {}

    DEFAULT_SCALAR_TAG = STR_TAG
    DEFAULT_SEQUENCE_TAG = SEQ_TAG
    DEFAULT_MAPPING_TAG = MAP_TAG

    @classmethod
    def add_implicit_resolver(cls, tag, regexp, first):
        """Add an implicit resolver.

        Args:
            tag: Tag given to plain scalars matching regexp
            regexp: Compiled pattern
            first: Characters a matching value may start with, None for any
        """
        if 'yaml_implicit_resolvers' not in cls.__dict__:
            cls.yaml_implicit_resolvers = {
                key: list(value)
                for key, value in cls.yaml_implicit_resolvers.items()}
        if first is None:
            first = [None]
        for ch in first:
            cls.yaml_implicit_resolvers.setdefault(ch, []).append((tag, regexp))

    def resolve(self, kind, value, implicit):
        """Resolve a tag for a node based on its kind and value.

        Args:
            kind: ScalarNode, SequenceNode or MappingNode
            value: Scalar text (ignored for collections)
            implicit: (plain, quoted) pair; resolvers apply only to plain
        """
        if kind is ScalarNode and implicit[0]:
            if value == '':
                resolvers = self.yaml_implicit_resolvers.get('', [])
            else:
                resolvers = self.yaml_implicit_resolvers.get(value[0], [])
            resolvers = resolvers + self.yaml_implicit_resolvers.get(None, [])
            for tag, regexp in resolvers:
                if regexp.match(value):
                    return tag
        if kind is ScalarNode:
            return self.DEFAULT_SCALAR_TAG
        elif kind is SequenceNode:
            return self.DEFAULT_SEQUENCE_TAG
        elif kind is MappingNode:
            return self.DEFAULT_MAPPING_TAG
        return self.DEFAULT_SCALAR_TAG


class Resolver(BaseResolver):
    """Standard YAML resolver with implicit resolvers for common types."""
    pass


Resolver.add_implicit_resolver(
    'tag:yaml.org,2002:bool',
    re.compile(r'''^(?:yes|Yes|YES|no|No|NO
                    |true|True|TRUE|false|False|FALSE
                    |on|On|ON|off|Off|OFF)$''', re.X),
    list('yYnNtTfFoO'))

Resolver.add_implicit_resolver(
    'tag:yaml.org,2002:float',
    re.compile(r'''^(?:[-+]?(?:[0-9][0-9_]*)\.[0-9_]*(?:[eE][-+][0-9]+)?
                    |\.[0-9][0-9_]*(?:[eE][-+][0-9]+)?
                    |[-+]?[0-9][0-9_]*(?::[0-5]?[0-9])+\.[0-9_]*
                    |[-+]?\.(?:inf|Inf|INF)
                    |\.(?:nan|NaN|NAN))$''', re.X),
    list('-+0123456789.'))

Resolver.add_implicit_resolver(
    'tag:yaml.org,2002:int',
    re.compile(r'''^(?:[-+]?0b[0-1_]+
                    |[-+]?0[0-7_]+
                    |[-+]?(?:0|[1-9][0-9_]*)
                    |[-+]?0x[0-9a-fA-F_]+
                    |[-+]?[1-9][0-9_]*(?::[0-5]?[0-9])+)$''', re.X),
    list('-+0123456789'))

Resolver.add_implicit_resolver(
    'tag:yaml.org,2002:merge',
    re.compile(r'^(?:<<)$'),
    ['<'])

Resolver.add_implicit_resolver(
    'tag:yaml.org,2002:null',
    re.compile(r'''^(?: ~
                    |null|Null|NULL
                    | )$''', re.X),
    ['~', 'n', 'N', ''])

Resolver.add_implicit_resolver(
    'tag:yaml.org,2002:timestamp',
    re.compile(r'^(?:[0-9][0-9][0-9][0-9]-[0-9][0-9]-[0-9][0-9]|[0-9][0-9][0-9][0-9]-[0-9][0-9]?-[0-9][0-9]?(?:[Tt]|[ \t]+)[0-9][0-9]?:[0-9][0-9]:[0-9][0-9](?:\.[0-9]*)?(?:[ \t]*(?:Z|[-+][0-9][0-9]?(?::[0-9][0-9])?))?)$'),
    list('0123456789'))

Resolver.add_implicit_resolver(
    'tag:yaml.org,2002:value',
    re.compile(r'^(?:=)$'),
    ['='])
