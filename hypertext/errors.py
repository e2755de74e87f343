########################################################################################################################################################

class HError(Exception):
    """
    Base class for all hypertext errors. Carries an optional location in the template source
    as a (line, column) pair of 1-based numbers, an excerpt of the offending source text, and a corrective hint.
    """
    line   = None
    column = None
    excerpt = None
    hint   = None

    def __init__(self, msg, pos = None, excerpt = None, hint = None):
        if pos: self.line, self.column = pos
        self.excerpt = excerpt
        self.hint = hint
        self.description = msg
        super().__init__(self.make_msg(msg))

    def make_msg(self, msg):
        if self.line is not None:
            msg += " at line %s, column %s" % (self.line, self.column)
        if self.excerpt:
            msg += " (%s)" % self.excerpt
        if self.hint:
            msg += "; hint: %s" % self.hint
        return msg

    @property
    def pos(self):
        return self.line, self.column


########################################################################################################################################################

class SyntaxErrorEx(HError, SyntaxError):
    """Malformed template source. The message describes the construct that was expected at the error location."""

class SchemaError(HError):          pass
class DuplicateRegistration(SchemaError):
    """An element with the same name is already present in the schema registry."""
class SchemaFrozen(SchemaError):
    """The schema registry was extended after it had been used for validation."""

class NotRenderable(HError, TypeError):
    """A component reference resolved at render time to an object that cannot be called."""

class BufferBusy(HError, RuntimeError):
    """The contents of a Buffer were requested while a render into this buffer was still in progress."""

class AllocationFailure(HError, MemoryError):
    """
    The output buffer could not grow. This is fatal: the render is aborted and no partial output is returned.
    Never caught inside the library.
    """


########################################################################################################################################################
#####
#####  VALIDATION
#####

class Violation:
    """A single problem found by the validator. Subclasses name the kind of the problem."""

    def __init__(self, msg, pos = None, hint = None):
        self.msg  = msg
        self.pos  = pos
        self.hint = hint

    @property
    def kind(self):
        return self.__class__.__name__

    def __str__(self):
        msg = "%s: %s" % (self.kind, self.msg)
        if self.pos: msg += " at line %s, column %s" % self.pos
        if self.hint: msg += "; hint: %s" % self.hint
        return msg

    def __repr__(self):
        return "<%s>" % self

class UnknownElement(Violation):            pass
class UnknownAttribute(Violation):          pass
class VoidElementHasChildren(Violation):    pass
class AmbiguousQuoting(Violation):          pass


class ValidationError(HError):
    """Raised once per validation pass, with all the violations that were found, in document order."""

    def __init__(self, violations):
        assert violations
        self.violations = list(violations)
        msg = "%s violation(s) found in template:\n  " % len(self.violations)
        msg += "\n  ".join(map(str, self.violations))
        super().__init__(msg, self.violations[0].pos)

    def make_msg(self, msg):
        return msg

    def kinds(self):
        return [v.kind for v in self.violations]
