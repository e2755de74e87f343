"""
Hypertext: HTML templates compiled ahead of rendering, in two syntaxes ("rsx" and "maud"),
with automatic escaping and validation of elements and attributes.
"""

from hypertext.errors import HError, SyntaxErrorEx, ValidationError, SchemaError, DuplicateRegistration, SchemaFrozen, \
    AllocationFailure, NotRenderable, BufferBusy, Violation, UnknownElement, UnknownAttribute, VoidElementHasChildren, \
    AmbiguousQuoting
from hypertext.escape import escape
from hypertext.schema import Registry, SchemaEntry, registry, register_element
from hypertext.runtime import Buffer, Lazy, Raw, Rendered
from hypertext.template import Template, rsx, maud

__version__ = '0.1.0'
