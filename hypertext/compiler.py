"""
Code generator: compiles a validated template tree into a render plan - a list of RenderOps.
Generation emits static markup piece by piece; a separate post-pass, merge_literals(), coalesces
consecutive WriteLiteral operations, at every level of nesting.
"""

from hypertext import config
from hypertext.escape import escape, escape_attribute
from hypertext.tree import Literal, Dynamic, BooleanToggle, Concat, Element, Text, Doctype, ComponentCall, If, For, Match
from hypertext.runtime import WriteLiteral, WriteEscaped, WriteJoined, WriteRaw, Invoke, Branch, Loop, Switch, Call, Toggle, join_values


#####################################################################################################################################################
#####
#####  GENERATOR
#####

class Generator:
    """Depth-first translation of a tree to a plan. Every control block and component gets its own nested plan."""

    def generate(self, nodes):
        plan = []
        for node in nodes:
            self._node(node, plan)
        return plan

    def _node(self, node, plan):
        if isinstance(node, Element):
            self._element(node, plan)
        elif isinstance(node, Text):
            self._text(node, plan)
        elif isinstance(node, Doctype):
            plan.append(WriteLiteral(config.DOCTYPE))
        elif isinstance(node, If):
            plan.append(Invoke(Branch([(cond, self.generate(body)) for cond, body in node.branches])))
        elif isinstance(node, For):
            plan.append(Invoke(Loop(node.binding, node.iterable, self.generate(node.body))))
        elif isinstance(node, Match):
            plan.append(Invoke(Switch(node.scrutinee, [(pattern, self.generate(body)) for pattern, body in node.arms])))
        elif isinstance(node, ComponentCall):
            children = self.generate(node.children) if node.children else None
            arguments = [(arg.name, arg.value) for arg in node.arguments]
            plan.append(Invoke(Call(node.reference, arguments, children)))
        else:
            raise TypeError(f"unknown type of a template node: {node!r}")

    def _text(self, text, plan):
        content = text.content
        if isinstance(content, Literal):
            plan.append(WriteLiteral(escape(content.value)))
        elif content.raw:
            plan.append(WriteRaw(content.expr))
        else:
            plan.append(WriteEscaped(content.expr))

    def _element(self, element, plan):
        plan.append(WriteLiteral('<' + element.name))
        for attr in element.attributes:
            self._attribute(attr, plan)
        plan.append(WriteLiteral('>'))
        if element.void: return

        for child in element.children:
            self._node(child, plan)
        plan.append(WriteLiteral('</%s>' % element.name))

    def _attribute(self, attr, plan):
        name, value = attr.name, attr.value

        if isinstance(value, BooleanToggle):
            if value.always():
                plan.append(WriteLiteral(' ' + name))
            else:
                plan.append(Invoke(Toggle(value.expr, [WriteLiteral(' ' + name)])))
            return

        plan.append(WriteLiteral(' %s="' % name))
        if isinstance(value, Literal):
            plan.append(WriteLiteral(escape_attribute(value.value)))
        elif isinstance(value, Dynamic):
            plan.append(WriteEscaped(value.expr, attribute = True))
        elif isinstance(value, Concat):
            plan.append(self._joined(value.parts))
        else:
            raise TypeError(f"unknown type of an attribute value: {value!r}")
        plan.append(WriteLiteral('"'))

    @staticmethod
    def _joined(parts):
        """Op for a space-separated list of parts; a list of literals only is joined right away."""
        items = []
        for part in parts:
            if isinstance(part, Literal):   items.append(part.value)
            elif isinstance(part, Dynamic): items.append(part.expr)
            else:
                raise TypeError(f"unknown type of an attribute value: {part!r}")
        if all(isinstance(item, str) for item in items):
            return WriteLiteral(escape_attribute(join_values(items)))
        return WriteJoined(items)


#####################################################################################################################################################
#####
#####  LITERAL MERGING
#####

def merge_literals(plan):
    """
    Return a new plan where no two consecutive operations are WriteLiteral. Empty literals are dropped,
    invocations whose nested plans are all empty are removed, and @if branches with constant conditions
    are resolved, so that literals on both sides of such constructs get merged, too. Nested plans are merged recursively.
    """
    out = []
    for op in _simplify(plan):
        if isinstance(op, WriteLiteral):
            if not op.text: continue
            if out and isinstance(out[-1], WriteLiteral):
                out[-1] = WriteLiteral(out[-1].text + op.text)
                continue
        out.append(op)
    return out


def _simplify(plan):
    """Yield operations of `plan` with nested plans merged and statically decidable Invokes replaced by their contents."""
    for op in plan:
        if not isinstance(op, Invoke):
            yield op
            continue

        target = op.target.map_plans(merge_literals)
        if isinstance(target, Branch):
            resolved = _resolve_branch(target)
            if resolved is not None:
                yield from resolved
                continue

        if not isinstance(target, Call) and not any(target.plans()):
            continue                            # no output from any branch: nothing to do at run time
        yield op


def _resolve_branch(branch):
    """
    If the branch taken by an @if block can be determined during compilation (leading conditions are constants),
    return the plan of this branch; None otherwise. Branches with constant false conditions are removed in place.
    """
    remaining = []
    for cond, plan in branch.branches:
        if cond is None:
            if not remaining: return plan
            remaining.append((cond, plan))
            break
        const, value = cond.constant()
        if not const:
            remaining.append((cond, plan))
            continue
        if value:
            if not remaining: return plan
            remaining.append((None, plan))      # the last possible branch
            break
        # constant false condition: the branch is dropped
    branch.branches = remaining
    return None if remaining else []


#####################################################################################################################################################

def generate(nodes):
    """Compile a validated tree into a plan with merged literals."""
    return merge_literals(Generator().generate(nodes))


def walk_plan(plan):
    """Iterate over all operations of a plan and its nested plans, depth first."""
    for op in plan:
        yield op
        if isinstance(op, Invoke):
            for nested in op.target.plans():
                yield from walk_plan(nested)
