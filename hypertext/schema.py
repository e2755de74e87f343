"""
Registry of valid elements and attributes, consulted by the validator.
"""

import re
from collections import namedtuple

from hypertext.errors import DuplicateRegistration, SchemaFrozen
from hypertext.builtin_html import BUILTIN_HTML, GLOBAL_ATTRIBUTES, EVENT_HANDLERS, OPEN_PREFIXES, ATTRIBUTE_FAMILIES


########################################################################################################################################################
#####
#####  SCHEMA ENTRY
#####

SchemaEntry = namedtuple('SchemaEntry', 'element_name is_void allowed_attributes allow_custom_attributes')
SchemaEntry.__doc__ = "Immutable description of a valid element: its name, voidness and allowed attributes."


def _entry(element_name, is_void = False, allowed_attributes = (), allow_custom_attributes = False):
    if isinstance(allowed_attributes, str):
        allowed_attributes = allowed_attributes.split()
    return SchemaEntry(element_name, bool(is_void), frozenset(allowed_attributes), bool(allow_custom_attributes))


########################################################################################################################################################
#####
#####  REGISTRY
#####

class Registry:
    """
    A table of SchemaEntry records indexed by element name. Preloaded with standard HTML elements
    (unless builtin=False) and extensible by the application via register() and define_elements().
    All extension calls must happen before the first validation pass; after that the registry is frozen.
    """

    # autonomous custom elements, as defined by the HTML standard: lowercase, start with a letter, contain a hyphen
    CUSTOM_ELEMENT = re.compile(r'^[a-z][a-z0-9._]*-[a-z0-9._-]*$')

    entries  = None         # dict of {element_name: SchemaEntry}
    families = None         # set of enabled optional attribute families, see ATTRIBUTE_FAMILIES
    custom_elements = False # if True, any autonomous custom element name is accepted, with custom attributes
    frozen   = False        # set to True by the validator on first use; no changes allowed afterwards

    def __init__(self, builtin = True):
        self.entries  = {}
        self.families = set()
        if builtin:
            for name, is_void, attrs in BUILTIN_HTML:
                self.entries[name] = _entry(name, is_void, attrs)

    def _check_frozen(self, what):
        if self.frozen:
            raise SchemaFrozen(f"cannot {what}: the schema registry has already been used for validation",
                               hint = "extend the registry at startup, before any template is compiled")

    def register(self, element_name, is_void = False, allowed_attributes = (), allow_custom_attributes = False):
        """
        Add a new element to the registry and return its SchemaEntry.
        :param allowed_attributes: collection of attribute names, or a space-separated string of names
        :param allow_custom_attributes: if True, any attribute name is accepted on this element
        """
        self._check_frozen(f"register element <{element_name}>")
        if element_name in self.entries:
            raise DuplicateRegistration(f"element <{element_name}> is already registered",
                                        hint = "choose a different name or register the element only once")
        entry = _entry(element_name, is_void, allowed_attributes, allow_custom_attributes)
        self.entries[element_name] = entry
        return entry

    def define_elements(self, names, is_void = False, allowed_attributes = (), allow_custom_attributes = False):
        """Register many elements with the same settings. `names` can be a space-separated string."""
        if isinstance(names, str): names = names.split()
        return [self.register(name, is_void, allowed_attributes, allow_custom_attributes) for name in names]

    def allow_custom_elements(self):
        """Accept any autonomous custom element (e.g., <my-widget>) with arbitrary attributes."""
        self._check_frozen("allow custom elements")
        self.custom_elements = True

    def enable(self, *families):
        """Accept on every element the attributes of given optional families: 'htmx', 'alpine', 'hyperscript'."""
        self._check_frozen("enable attribute families")
        for family in families:
            if family not in ATTRIBUTE_FAMILIES:
                raise ValueError(f"unknown attribute family '{family}', expected one of: {', '.join(ATTRIBUTE_FAMILIES)}")
            self.families.add(family)

    def freeze(self):
        self.frozen = True

    def lookup(self, element_name):
        """SchemaEntry of a given element, or None if the name is not valid."""
        entry = self.entries.get(element_name)
        if entry is None and self.custom_elements and self.CUSTOM_ELEMENT.match(element_name):
            entry = _entry(element_name, allow_custom_attributes = True)
        return entry

    def __contains__(self, element_name):
        return self.lookup(element_name) is not None

    def is_attribute_allowed(self, entry, name):
        """True if attribute `name` can be used on the element described by `entry`."""
        if entry.allow_custom_attributes: return True
        if name in entry.allowed_attributes or name in GLOBAL_ATTRIBUTES or name in EVENT_HANDLERS: return True
        if name.startswith(OPEN_PREFIXES) and len(name) > 5: return True

        for family in self.families:
            names, prefixes = ATTRIBUTE_FAMILIES[family]
            if name in names: return True
            if prefixes and name.startswith(prefixes): return True
        return False


########################################################################################################################################################

registry = Registry()           # process-wide default registry, used by templates that don't specify their own


def register_element(element_name, is_void = False, allowed_attributes = (), allow_custom_attributes = False):
    """Register a custom element in the default registry. See Registry.register()."""
    return registry.register(element_name, is_void, allowed_attributes, allow_custom_attributes)
