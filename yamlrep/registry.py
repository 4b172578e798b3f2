"""Converter registry.

Maps Python types to converter functions. A converter is called as
``converter(context, data)`` and returns a node.

Two tables are kept:

- exact entries, consulted first, matching only when ``type(data)`` is the
  registered type;
- fallback entries, an ordered list consulted when no exact entry matches.
  The first entry whose type ``data`` is an instance of wins, so abstract
  base classes (``collections.abc.Mapping``, ``numbers.Integral``, ...)
  work as capability checks. Registration order is priority order.

A registry is filled while the program sets itself up and then frozen;
representers only ever read a frozen registry.
"""

import logging

from .error import YAMLError

log = logging.getLogger(__name__)


class RegistryError(YAMLError):
    pass


class ConverterRegistry:
    """Exact-type and ordered fallback table of converters."""

    def __init__(self):
        self._exact = {}
        self._fallbacks = []
        self._frozen = False

    @property
    def is_frozen(self):
        return self._frozen

    def _check_mutable(self, data_type):
        if self._frozen:
            raise RegistryError(
                "cannot register a converter for %r: registry is frozen"
                % data_type)

    def register_exact(self, data_type, converter):
        """Use converter for values whose type is exactly data_type."""
        self._check_mutable(data_type)
        self._exact[data_type] = converter
        log.debug("registered exact converter for %r", data_type)

    def register_fallback(self, data_type, converter):
        """Use converter for instances of data_type not matched exactly.

        A type registered again keeps its place in the fallback order.
        """
        self._check_mutable(data_type)
        for index, (registered_type, _) in enumerate(self._fallbacks):
            if registered_type is data_type:
                self._fallbacks[index] = (data_type, converter)
                break
        else:
            self._fallbacks.append((data_type, converter))
        log.debug("registered fallback converter for %r", data_type)

    def lookup(self, data):
        """Return the converter for data, or None if nothing matches."""
        converter = self._exact.get(type(data))
        if converter is not None:
            return converter
        for data_type, converter in self._fallbacks:
            if isinstance(data, data_type):
                return converter
        return None

    def exact_types(self):
        return list(self._exact)

    def fallback_types(self):
        return [data_type for data_type, _ in self._fallbacks]

    def copy(self):
        """Return an unfrozen copy."""
        registry = ConverterRegistry()
        registry._exact = self._exact.copy()
        registry._fallbacks = list(self._fallbacks)
        return registry

    def frozen(self):
        """Return a frozen copy (self, if already frozen)."""
        if self._frozen:
            return self
        registry = self.copy()
        registry._frozen = True
        return registry

    def __contains__(self, data_type):
        if data_type in self._exact:
            return True
        return any(registered is data_type for registered, _ in self._fallbacks)

    def __len__(self):
        return len(self._exact) + len(self._fallbacks)

    def __repr__(self):
        return '%s(exact=%d, fallbacks=%d, frozen=%r)' % (
            self.__class__.__name__, len(self._exact), len(self._fallbacks),
            self._frozen)
