"""
Run-time part of the engine: the output Buffer, render operations (RenderOp) produced by the compiler,
and the values that know how to render themselves into a buffer (Lazy, Raw).

A render is a synchronous, depth-first execution of a plan (list of RenderOps) against one Buffer.
Nested plans of control blocks and components write into the same buffer, strictly one after another.
"""

from contextlib import contextmanager

from hypertext.errors import AllocationFailure, BufferBusy, NotRenderable
from hypertext.escape import escape, to_text
from hypertext.tree import Literal, Dynamic, BooleanToggle, Concat


#####################################################################################################################################################
#####
#####  BUFFER
#####

class Rendered(str):
    """Complete output of a render: markup text that needs no further escaping."""


class Buffer:
    """
    Append-only output sink of a render. Text can be appended in two ways only: escaped, with push(),
    or verbatim, with dangerously_push_raw() - the name makes every unescaped write easy to spot.
    Contents can be retrieved with into_string() once no render into this buffer is in progress.
    """

    def __init__(self):
        self._parts = []        # appended pieces of text, joined on demand
        self._depth = 0         # no. of renders currently writing into this buffer (nested ones included)

    def push(self, value):
        """Append the text form of `value`, with & < > " ' replaced by entities. None appends nothing."""
        text, needs_escaping = to_text(value)
        self._append(escape(text) if needs_escaping else text)

    def dangerously_push_raw(self, text):
        """Append `text` verbatim, without escaping. The caller is responsible for `text` being safe markup."""
        self._append(text)

    def _append(self, text):
        if not text: return
        try:
            self._parts.append(text)
        except MemoryError as ex:
            raise AllocationFailure("output buffer cannot grow") from ex

    @contextmanager
    def rendering(self):
        """Mark the buffer as being written to, for the duration of a `with` block."""
        self._depth += 1
        try:
            yield self
        finally:
            self._depth -= 1

    def into_string(self):
        """The entire text appended so far, as Rendered string. Not allowed while a render is in progress."""
        if self._depth:
            raise BufferBusy("contents of the buffer requested while a render into it is still in progress")
        try:
            text = ''.join(self._parts)
        except MemoryError as ex:
            raise AllocationFailure("output buffer cannot grow") from ex
        self._parts = [text] if text else []
        return Rendered(text)


#####################################################################################################################################################
#####
#####  RENDERABLE VALUES
#####

class Raw:
    """
    Trusted markup, written to output without escaping. Can be created only through Raw.dangerously_create(),
    so that every place where escaping is bypassed can be found by searching the code for "dangerously".
    """
    __slots__ = ('text',)
    _key = object()

    def __init__(self, text, _key = None):
        if _key is not Raw._key:
            raise TypeError("Raw markup can only be created with Raw.dangerously_create()")
        self.text = text

    @classmethod
    def dangerously_create(cls, text):
        return cls(str(text), cls._key)

    def render_to(self, buffer):
        buffer.dangerously_push_raw(self.text)

    def __eq__(self, other):
        return isinstance(other, Raw) and other.text == self.text

    __hash__ = None

    def __repr__(self):
        return f"Raw({self.text!r})"


class Lazy:
    """
    Deferred render: a function that writes into a buffer, called only when the output is produced.
    Used for children of components and for templates bound to their context.
    """
    __slots__ = ('func',)

    def __init__(self, func):
        self.func = func            # function(buffer) -> None

    def render_to(self, buffer):
        with buffer.rendering():
            self.func(buffer)

    def render(self):
        """Render into a fresh buffer and return the text."""
        buffer = Buffer()
        self.render_to(buffer)
        return buffer.into_string()


def write_value(buffer, value):
    """
    Write a value of a dynamic expression placed in element content: objects with render_to() (Lazy, Raw,
    Template) render themselves into the same buffer; other values are escaped, except numbers; None is skipped.
    """
    render_to = getattr(value, 'render_to', None)
    if render_to is not None and not isinstance(value, type):
        render_to(buffer)
    else:
        buffer.push(value)


def argument_value(value, scope):
    """Python value of a component argument given in the form of an attribute value."""
    if isinstance(value, Literal):          return value.value
    if isinstance(value, Dynamic):          return value.expr.evaluate(scope)
    if isinstance(value, BooleanToggle):    return bool(value.expr.evaluate(scope))
    if isinstance(value, Concat):
        return join_values(argument_value(part, scope) for part in value.parts)
    raise TypeError(f"unknown type of an attribute value: {value!r}")


def join_values(values):
    """Space-separated text forms of `values`, with None and empty values skipped."""
    texts = (to_text(value)[0] for value in values)
    return ' '.join(text for text in texts if text)


#####################################################################################################################################################
#####
#####  RENDER OPERATIONS
#####

class RenderOp:
    """Base class for instructions of a render plan. Comparable by contents, for inspection in tests."""
    __slots__ = ()

    def run(self, buffer, scope):
        raise NotImplementedError

    def _values(self):
        return tuple(getattr(self, name) for name in self.__slots__)

    def __eq__(self, other):
        return type(self) is type(other) and self._values() == other._values()

    __hash__ = None

    def __repr__(self):
        return f"{self.__class__.__name__}{self._values()!r}"


class WriteLiteral(RenderOp):
    """Static markup computed during compilation. Its text is already escaped where necessary."""
    __slots__ = ('text',)

    def __init__(self, text):
        self.text = text

    def run(self, buffer, scope):
        buffer.dangerously_push_raw(self.text)


class WriteEscaped(RenderOp):
    """Value of an expression, escaped. In an attribute value, it's always written as text."""
    __slots__ = ('expr', 'attribute')

    def __init__(self, expr, attribute = False):
        self.expr = expr
        self.attribute = attribute

    def run(self, buffer, scope):
        value = self.expr.evaluate(scope)
        if self.attribute:
            buffer.push(value)
        else:
            write_value(buffer, value)


class WriteJoined(RenderOp):
    """
    Space-separated list of values inside an attribute, like a class list merged from shorthands, escaped as a whole.
    Parts that evaluate to None or to an empty string are left out together with their separators.
    """
    __slots__ = ('parts',)

    def __init__(self, parts):
        self.parts = parts              # list of literal strings and Exprs

    def run(self, buffer, scope):
        buffer.push(join_values(part if isinstance(part, str) else part.evaluate(scope) for part in self.parts))


class WriteRaw(RenderOp):
    """Value of an expression written without escaping. Produced only by the @raw(...) construct."""
    __slots__ = ('expr',)

    def __init__(self, expr):
        self.expr = expr

    def run(self, buffer, scope):
        value = self.expr.evaluate(scope)
        if value is not None:
            buffer.dangerously_push_raw(str(value))


class Invoke(RenderOp):
    """Execution of nested plan(s) of a control block, component or attribute toggle, into the same buffer."""
    __slots__ = ('target',)

    def __init__(self, target):
        self.target = target

    def run(self, buffer, scope):
        self.target.run(buffer, scope)


def execute(plan, buffer, scope):
    """Run all operations of a `plan` against `buffer`. `scope` is the dict of names visible to expressions."""
    for op in plan:
        op.run(buffer, scope)


#####################################################################################################################################################
#####
#####  TARGETS of Invoke
#####

class Target(RenderOp):
    """Base class for targets of Invoke: run-time logic that selects and executes nested plans."""
    __slots__ = ()

    def plans(self):
        """List of all nested plans."""
        raise NotImplementedError

    def map_plans(self, fn):
        """Replace every nested plan with fn(plan), in place. Return self."""
        raise NotImplementedError


class Branch(Target):
    __slots__ = ('branches',)

    def __init__(self, branches):
        self.branches = branches        # list of (condition, plan) pairs; condition is None for @else

    def plans(self):
        return [plan for _, plan in self.branches]

    def map_plans(self, fn):
        self.branches = [(cond, fn(plan)) for cond, plan in self.branches]
        return self

    def run(self, buffer, scope):
        for cond, plan in self.branches:
            if cond is None or cond.evaluate(scope):
                execute(plan, buffer, scope)
                return


class Loop(Target):
    __slots__ = ('binding', 'iterable', 'plan')

    def __init__(self, binding, iterable, plan):
        self.binding = binding
        self.iterable = iterable
        self.plan = plan

    def plans(self):
        return [self.plan]

    def map_plans(self, fn):
        self.plan = fn(self.plan)
        return self

    def run(self, buffer, scope):
        names = self.binding
        local = dict(scope)             # loop variables are visible inside the loop body only
        for item in self.iterable.evaluate(scope):
            if len(names) == 1:
                local[names[0]] = item
            else:
                values = tuple(item)
                if len(values) != len(names):
                    raise ValueError(f"cannot unpack {len(values)} value(s) into loop variables: {', '.join(names)}")
                local.update(zip(names, values))
            execute(self.plan, buffer, local)


class Switch(Target):
    __slots__ = ('scrutinee', 'arms')

    def __init__(self, scrutinee, arms):
        self.scrutinee = scrutinee
        self.arms = arms                # list of (pattern, plan) pairs; pattern is None for the wildcard `_`

    def plans(self):
        return [plan for _, plan in self.arms]

    def map_plans(self, fn):
        self.arms = [(pattern, fn(plan)) for pattern, plan in self.arms]
        return self

    def run(self, buffer, scope):
        value = self.scrutinee.evaluate(scope)
        for pattern, plan in self.arms:
            if pattern is None or pattern.evaluate(scope) == value:
                execute(plan, buffer, scope)
                return


class Call(Target):
    """Call of a component with keyword arguments; its result is written like a value of a dynamic expression."""
    __slots__ = ('reference', 'arguments', 'plan')

    def __init__(self, reference, arguments, plan):
        self.reference = reference
        self.arguments = arguments      # list of (name, value) pairs; values are attribute values of the tree
        self.plan = plan                # plan of children, passed to the component as a Lazy; None if no children

    def plans(self):
        return [self.plan] if self.plan is not None else []

    def map_plans(self, fn):
        if self.plan is not None: self.plan = fn(self.plan)
        return self

    def run(self, buffer, scope):
        component = self.reference.evaluate(scope)
        if not callable(component):
            raise NotRenderable(f"component '{self.reference.source}' is not callable, found {type(component).__name__}",
                                self.reference.pos)

        kwargs = {name: argument_value(value, scope) for name, value in self.arguments}
        if self.plan is not None:
            plan = self.plan
            kwargs['children'] = Lazy(lambda buf: execute(plan, buf, scope))

        write_value(buffer, component(**kwargs))


class Toggle(Target):
    """Boolean attribute: its plan (the attribute name) is written only if the condition is true."""
    __slots__ = ('expr', 'plan')

    def __init__(self, expr, plan):
        self.expr = expr
        self.plan = plan

    def plans(self):
        return [self.plan]

    def map_plans(self, fn):
        self.plan = fn(self.plan)
        return self

    def run(self, buffer, scope):
        if self.expr.evaluate(scope):
            execute(self.plan, buffer, scope)
