"""
Static validation of a template tree against the schema registry. All violations in a tree are collected
and reported together, in a single ValidationError.
"""

from hypertext.errors import ValidationError, UnknownElement, UnknownAttribute, VoidElementHasChildren, AmbiguousQuoting
from hypertext.tree import Element, Dynamic, BooleanToggle, Concat, walk


class Validator:
    """
    Checks elements and attributes of a template tree. Rules, in order of evaluation per element:
    1. element name must be registered (or allowed as a custom element);
    2. a void element must have no children;
    3. every attribute must be allowed for the element;
    4. a dynamic or toggle attribute must not be a string literal containing quote characters.
    Expressions are never evaluated, only their form is inspected.
    """

    registry   = None
    violations = None

    def __init__(self, registry):
        self.registry = registry

    def validate(self, nodes):
        """Validate a list of top-level nodes. Annotate elements with `void` flags and return `nodes` if valid."""
        self.registry.freeze()
        self.violations = []
        self._check_all(nodes)
        if self.violations:
            raise ValidationError(self.violations)
        return nodes

    def _check_all(self, nodes):
        for node in walk(nodes):
            if isinstance(node, Element):
                self._check_element(node)

    def _check_element(self, element):
        name  = element.name
        entry = self.registry.lookup(name)

        if entry is None:
            hint = f"did you mean <{name.lower()}>?" if name.lower() in self.registry else \
                   "register custom elements in the schema registry before compiling templates"
            self.violations.append(UnknownElement(f"<{name}> is not a known element", element.pos, hint))
            return

        element.void = entry.is_void
        if entry.is_void and element.children:
            self.violations.append(VoidElementHasChildren(f"void element <{name}> cannot have children", element.pos,
                                                          f"write <{name} .../> with attributes only"))

        for attr in element.attributes:
            if not self.registry.is_attribute_allowed(entry, attr.name):
                self.violations.append(UnknownAttribute(f"attribute '{attr.name}' is not allowed on <{name}>", attr.pos,
                                                        "use a data-* attribute for custom data"))
            self._check_quoting(attr)

    def _check_quoting(self, attr):
        value = attr.value
        if isinstance(value, (Dynamic, BooleanToggle)):
            exprs = [value.expr]
        elif isinstance(value, Concat):
            exprs = [part.expr for part in value.parts if isinstance(part, Dynamic)]
        else:
            return

        for expr in exprs:
            if expr.is_string_literal() and ('"' in expr.source[1:-1] or "'" in expr.source[1:-1]):
                self.violations.append(AmbiguousQuoting(
                    f"attribute '{attr.name}' is given as an expression made of a string literal with quote characters",
                    expr.pos or attr.pos, 'write the value as a plain literal: name="..." or pass it in a variable'))


def validate(nodes, registry):
    """Validate a template tree against `registry`, see Validator."""
    return Validator(registry).validate(nodes)
