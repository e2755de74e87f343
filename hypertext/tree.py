"""
Node tree: a syntax-independent representation of a parsed template, shared by all parsers,
the validator and the code generator.

Nodes compare by structure: positions in the source are ignored by __eq__, so that trees produced
from different syntaxes can be compared directly.
"""

import ast

from hypertext import config
from hypertext.errors import SyntaxErrorEx


#####################################################################################################################################################
#####
#####  BASE
#####

class Struct:
    """Base class for tree objects. Subclasses list their structural attributes in `fields`."""

    fields = ()
    pos    = None           # (line, column) of the node's start in the source text, 1-based

    def __eq__(self, other):
        return type(self) is type(other) and all(getattr(self, f) == getattr(other, f) for f in self.fields)

    __hash__ = None

    def __repr__(self):
        args = ', '.join(repr(getattr(self, f)) for f in self.fields)
        return f"{self.__class__.__name__}({args})"


class Expr(Struct):
    """
    An embedded host-language (Python) expression. It's compiled once, when the template is parsed,
    and evaluated at render time against the current scope. Its value is never inspected during compilation.
    """
    fields = ('source',)

    def __init__(self, source, pos = None):
        self.source = source.strip()
        self.pos = pos
        if not self.source:
            raise SyntaxErrorEx("expected an expression, found empty one", pos, hint = "put a Python expression inside the brackets")
        try:
            self.code = compile('(' + self.source + '\n)', config.TEMPLATE_NAME, 'eval')
        except SyntaxError as ex:
            raise SyntaxErrorEx(f"invalid expression: {ex.msg}", pos, excerpt = self.source) from None

    def evaluate(self, scope):
        return eval(self.code, scope)

    def constant(self):
        """
        Return a pair (is_constant, value): whether the expression is a literal constant, and its value if so.
        Only literals are recognized, no names nor operations beyond those accepted by ast.literal_eval().
        """
        try:
            return True, ast.literal_eval(self.source)
        except (ValueError, SyntaxError, TypeError, MemoryError, RecursionError):
            return False, None

    def is_string_literal(self):
        """True if the expression consists of a single string literal."""
        body = ast.parse('(' + self.source + '\n)', mode = 'eval').body
        return isinstance(body, ast.Constant) and isinstance(body.value, str)


TRUE = 'True'           # source of the expression assigned to bare (valueless) boolean attributes


#####################################################################################################################################################
#####
#####  VALUES
#####

class Literal(Struct):
    """Static text, known at compile time."""
    fields = ('value',)
    def __init__(self, value):
        self.value = value

class Dynamic(Struct):
    """Value of an expression. Escaped on output unless `raw` is True, which is set only by the explicit @raw construct."""
    fields = ('expr', 'raw')
    def __init__(self, expr, raw = False):
        self.expr = expr
        self.raw = raw

class BooleanToggle(Struct):
    """Attribute value that decides, at render time, whether the attribute is present (without a value) or absent."""
    fields = ('expr',)
    def __init__(self, expr):
        self.expr = expr

    def always(self):
        """True if this toggle is statically known to be on, like in a bare attribute: <input checked>."""
        const, value = self.expr.constant()
        return const and value is True

class Concat(Struct):
    """Attribute value composed of several Literal/Dynamic parts joined with single spaces; results from class shorthands."""
    fields = ('parts',)
    def __init__(self, parts):
        self.parts = parts


#####################################################################################################################################################
#####
#####  NODES
#####

class Node(Struct):
    """Base class for the nodes of a template tree."""

class Attribute(Struct):
    fields = ('name', 'value')
    def __init__(self, name, value, pos = None):
        self.name = name
        self.value = value          # Literal, Dynamic, BooleanToggle or Concat
        self.pos = pos

class Element(Node):
    fields = ('name', 'attributes', 'children')

    void = False                # set by the validator from the schema entry of this element

    def __init__(self, name, attributes = (), children = (), pos = None):
        self.name = name
        self.attributes = list(attributes)
        self.children = list(children)
        self.pos = pos

class Text(Node):
    fields = ('content',)
    def __init__(self, content, pos = None):
        self.content = content      # Literal or Dynamic
        self.pos = pos

    @property
    def literal(self):
        return isinstance(self.content, Literal)

class Doctype(Node):
    """The <!DOCTYPE html> declaration."""
    def __init__(self, pos = None):
        self.pos = pos

class ComponentCall(Node):
    """
    Invocation of a component: a callable (function, Template) referenced by name in the render scope.
    Its attributes are passed as keyword arguments; non-empty `children` are passed as a `children` keyword argument.
    """
    fields = ('reference', 'arguments', 'children')
    def __init__(self, reference, arguments = (), children = (), pos = None):
        self.reference = reference
        self.arguments = list(arguments)
        self.children = list(children)
        self.pos = pos


###  CONTROL  ###

class Control(Node):
    """Base class for control-flow nodes."""

    def bodies(self):
        """All nested lists of nodes."""
        raise NotImplementedError

class If(Control):
    fields = ('branches',)
    def __init__(self, branches, pos = None):
        self.branches = branches    # list of (condition, body) pairs; condition is None in the final @else branch
        self.pos = pos

    def bodies(self):
        return [body for _, body in self.branches]

class For(Control):
    fields = ('binding', 'iterable', 'body')
    def __init__(self, binding, iterable, body, pos = None):
        self.binding = binding      # list of names; values are unpacked if there's more than one
        self.iterable = iterable
        self.body = body
        self.pos = pos

    def bodies(self):
        return [self.body]

class Match(Control):
    fields = ('scrutinee', 'arms')
    def __init__(self, scrutinee, arms, pos = None):
        self.scrutinee = scrutinee
        self.arms = arms            # list of (pattern, body) pairs; pattern is None for the wildcard `_`
        self.pos = pos

    def bodies(self):
        return [body for _, body in self.arms]


#####################################################################################################################################################

def walk(nodes):
    """Iterate over all nodes of a tree in document order, depth first."""
    for node in nodes:
        yield node
        if isinstance(node, (Element, ComponentCall)):
            yield from walk(node.children)
        elif isinstance(node, Control):
            for body in node.bodies():
                yield from walk(body)
