"""
Parsers of the two template syntaxes. Both produce the same syntax-independent Node tree (see tree.py):
a semantically equivalent template written in either syntax results in equal trees.
"""

import re

from parsimonious.grammar import Grammar as Parsimonious
from parsimonious.nodes import NodeVisitor
from parsimonious.exceptions import ParseError

from hypertext.errors import HError, SyntaxErrorEx
from hypertext.grammar import RSX, MAUD, EXPECTED
from hypertext.tree import Expr, TRUE, Literal, Dynamic, BooleanToggle, Concat, \
    Attribute, Element, Text, Doctype, ComponentCall, If, For, Match


#####################################################################################################################################################
#####
#####  UTILITIES
#####

def location(text, offset):
    """(line, column) of a given character offset in `text`; both numbers 1-based."""
    line = text.count('\n', 0, offset) + 1
    column = offset - text.rfind('\n', 0, offset)
    return line, column

def _opt(visited):
    """Result of an optional expression (x?) after visiting: the child's value, or None if nothing matched."""
    return visited[0] if isinstance(visited, list) and visited else None

def _list(visited):
    """Result of a repetition (x*) after visiting: a list of children's values, empty if nothing matched."""
    return visited if isinstance(visited, list) else []

def unquote(literal, pat = re.compile(r'\\(.)', re.S)):
    """Strip the surrounding quotes of a quoted text literal and decode its backslash escapes: \\" \\\\ \\n \\t"""
    special = {'n': '\n', 't': '\t'}
    return pat.sub(lambda m: special.get(m.group(1), m.group(1)), literal[1:-1])

def collapse_whitespace(text, pat = re.compile(r'(\s*)(.*?)(\s*)\Z', re.S)):
    """
    Normalize whitespace of a plain text fragment: every inner run of whitespace becomes a single space;
    a run at the start or end of the fragment is dropped if it contains a newline, or becomes a single space otherwise.
    A whitespace-only fragment is matched entirely as a leading run.
    """
    head, core, tail = pat.match(text).groups()
    edge = lambda space: ' ' if space and '\n' not in space else ''
    return edge(head) + re.sub(r'\s+', ' ', core) + edge(tail)

def flatten(items):
    """Flatten nested lists of nodes, drop Nones and empty texts, merge adjacent literal Text nodes into one."""
    out = []
    for item in _iter_nodes(items):
        if isinstance(item, Text) and item.literal:
            if not item.content.value: continue
            if out and isinstance(out[-1], Text) and out[-1].literal:
                out[-1] = Text(Literal(out[-1].content.value + item.content.value), out[-1].pos)
                continue
        out.append(item)
    return out

def _iter_nodes(items):
    for item in items:
        if item is None: continue
        if isinstance(item, list):
            yield from _iter_nodes(item)
        else:
            yield item


#####################################################################################################################################################
#####
#####  GRAMMAR
#####

class Grammar(Parsimonious):
    """Parsimonious grammar of one template syntax. Reports parsing failures as SyntaxErrorEx."""

    syntax = None           # name of the syntax, for error messages

    def __init__(self, rules, syntax):
        super(Grammar, self).__init__(rules)
        self.syntax = syntax

    def parse_source(self, text):
        """Parse `text` to a raw parsimonious tree, or raise SyntaxErrorEx."""
        try:
            return self.parse(text)
        except ParseError as ex:
            raise self.syntax_error(ex) from None

    def syntax_error(self, ex):
        """Convert parsimonious' ParseError to SyntaxErrorEx that describes what construct was expected and where."""
        name = getattr(ex.expr, 'name', '') or ''
        expected = EXPECTED.get(name, name.replace('_', ' ') or "valid syntax")
        rest = ex.text[ex.pos:].split('\n')[0]
        found = repr(rest[:20]) if rest else "end of line" if ex.pos < len(ex.text) else "end of template"
        return SyntaxErrorEx(f"expected {expected}, found {found}", (ex.line(), ex.column()),
                             hint = f"check the {self.syntax} syntax around this place")


#####################################################################################################################################################
#####
#####  TREE BUILDERS
#####

class TemplateParser(NodeVisitor):
    """
    Base class for parsers: converts the raw parsimonious tree of a template to a list of top-level Nodes.
    Implements the rules shared by both syntaxes: control blocks, raw output, expressions, attributes.
    Subclasses set `grammar` and implement syntax-specific rules.
    """

    grammar = None                      # instance of Grammar
    unwrapped_exceptions = (HError,)    # our own errors must not be wrapped in parsimonious' VisitationError

    # component references: a capitalized name, optionally preceded by dotted lowercase qualifiers (ui.Card)
    COMPONENT = re.compile(r'^(?:[a-z_]\w*\.)*[A-Z]\w*$')

    text = None                         # full source text of the template being parsed

    def parse(self, text):
        """Parse `text` and return the list of top-level nodes of the template."""
        self.text = text
        tree = self.grammar.parse_source(text)
        return self.visit(tree)

    def generic_visit(self, node, visited_children):
        return visited_children or node

    def _pos(self, node):
        return location(self.text, node.start)

    def _expr(self, node):
        return Expr(node.text, self._pos(node))

    def _attribute(self, name, value):
        """Create an Attribute from its name node and parsed value: Literal, Expr, BooleanToggle or None (no value)."""
        pos = self._pos(name)
        if value is None:
            value = BooleanToggle(Expr(TRUE, pos))
        elif isinstance(value, Expr):
            value = Dynamic(value)
        return Attribute(name.text, value, pos)

    def _element(self, node, name, attributes, children):
        """Element or ComponentCall, depending on the form of the name."""
        pos = self._pos(node)
        if self.COMPONENT.match(name.text):
            return ComponentCall(Expr(name.text, self._pos(name)), attributes, flatten(children), pos)
        return Element(name.text, attributes, flatten(children), pos)

    ###  control blocks

    def visit_control(self, node, ch):      return ch[0]

    def visit_if_block(self, node, ch):
        _, _, cond, body, elifs, else_ = ch
        branches = [(cond, body)] + _list(elifs)
        else_ = _opt(else_)
        if else_: branches.append(else_)
        return If(branches, self._pos(node))

    def visit_else_if(self, node, ch):      return ch[5], ch[6]
    def visit_else_block(self, node, ch):   return None, ch[3]

    def visit_for_block(self, node, ch):
        binding, iterable = ch[2]
        return For(binding, iterable, ch[4], self._pos(node))

    def visit_for_head(self, node, ch):     return ch[0]
    def visit_for_paren(self, node, ch):    return ch[2], ch[6]
    def visit_for_plain(self, node, ch):    return ch[0], ch[4]

    def visit_for_target(self, node, ch):
        names = node.text.strip().lstrip('(').rstrip(')')
        return [name.strip() for name in names.split(',')]

    def visit_match_block(self, node, ch):
        return Match(ch[2], _list(ch[5]), self._pos(node))

    def visit_match_arm(self, node, ch):    return ch[0], ch[4]
    def visit_pattern(self, node, ch):      return ch[0]
    def visit_wildcard(self, node, ch):     return None

    def visit_raw_output(self, node, ch):
        return Text(Dynamic(self._expr(ch[3]), raw = True), self._pos(node))

    ###  expressions

    def visit_cond(self, node, ch):         return self._expr(node)
    def visit_pattern_expr(self, node, ch): return self._expr(node)
    def visit_expr_body(self, node, ch):    return node

    ###  attributes & text

    def visit_attr_name(self, node, ch):    return node
    def visit_attr_literal(self, node, ch): return Literal(node.text[1:-1])

    def visit_single_quoted(self, node, ch):
        raise SyntaxErrorEx("expected double-quoted attribute value", self._pos(node), excerpt = node.text,
                            hint = 'attribute values are enclosed in double quotes: name="value"')

    def visit_quoted_text(self, node, ch):
        return Text(Literal(unquote(node.text)), self._pos(node))

    def visit_doctype(self, node, ch):
        return Doctype(self._pos(node))


class RsxParser(TemplateParser):
    """Parser of the "rsx" syntax: HTML-like tags, {expr} embeddings, plain text between tags."""

    grammar = Grammar(RSX, 'rsx')

    def visit_document(self, node, ch):     return flatten(ch[0])
    def visit_nodes(self, node, ch):        return list(_iter_nodes(ch))
    def visit_rsx_node(self, node, ch):     return ch[0]
    def visit_comment(self, node, ch):      return None
    def visit_fragment(self, node, ch):     return ch[1]

    def visit_element(self, node, ch):
        _, name, attributes, _, tail = ch
        children = []
        if tail is not None:
            children, closing = tail
            if closing.text != name.text:
                line, column = self._pos(name)
                raise SyntaxErrorEx(f"expected closing tag </{name.text}>, found </{closing.text}>", self._pos(closing),
                                    hint = f"<{name.text}> was opened at line {line}, column {column - 1}")
        return self._element(node, name, _list(attributes), children)

    def visit_tag_tail(self, node, ch):     return ch[0]
    def visit_self_close(self, node, ch):   return None
    def visit_tag_body(self, node, ch):     return ch[1], ch[2]
    def visit_closing_tag(self, node, ch):  return ch[2]
    def visit_tag_name(self, node, ch):     return node
    def visit_attributes(self, node, ch):   return ch

    def visit_attribute(self, node, ch):
        _, name, value = ch
        return self._attribute(name, _opt(value))

    def visit_attr_value(self, node, ch):   return ch[0]
    def visit_attr_toggle(self, node, ch):  return BooleanToggle(ch[3])
    def visit_attr_assign(self, node, ch):  return ch[3][0]

    def visit_block(self, node, ch):
        """Body of a control block; plain-text whitespace adjacent to the braces is removed."""
        nodes = ch[1]
        if nodes and getattr(nodes[0], 'bare', False):
            nodes[0] = self._bare(nodes[0].content.value.lstrip(), nodes[0].pos)
        if nodes and getattr(nodes[-1], 'bare', False):
            nodes[-1] = self._bare(nodes[-1].content.value.rstrip(), nodes[-1].pos)
        return flatten(nodes)

    def visit_dynamic_text(self, node, ch): return Text(Dynamic(ch[0]), self._pos(node))
    def visit_braced_expr(self, node, ch):  return self._expr(ch[1])

    def visit_bare_text(self, node, ch):
        return self._bare(collapse_whitespace(node.text), self._pos(node))

    @staticmethod
    def _bare(text, pos):
        """Text node made of plain (unquoted) text, marked as such, so that it can be trimmed at block edges."""
        text = Text(Literal(text), pos)
        text.bare = True
        return text


class MaudParser(TemplateParser):
    """Parser of the "maud" syntax: element names with brace blocks, .class/#id shorthands, quoted text only."""

    grammar = Grammar(MAUD, 'maud')

    def visit_document(self, node, ch):     return ch[1]
    def visit_maud_nodes(self, node, ch):   return flatten(item[0] for item in ch)
    def visit_maud_node(self, node, ch):    return ch[0]
    def visit_block(self, node, ch):        return ch[2]

    def visit_splice_text(self, node, ch):  return Text(Dynamic(ch[0]), self._pos(node))
    def visit_splice(self, node, ch):       return self._expr(ch[1])
    def visit_number(self, node, ch):       return Text(Literal(node.text), self._pos(node))

    def visit_element(self, node, ch):
        name, shorthands, attributes, _, children = ch
        if _list(shorthands):
            attributes = self._desugar(_list(shorthands), attributes)
        return self._element(node, name, attributes, children)

    def visit_m_tag_name(self, node, ch):   return node
    def visit_element_end(self, node, ch):  return ch[0]
    def visit_semicolon(self, node, ch):    return []

    def visit_shorthand(self, node, ch):
        mark, value = ch
        name = 'class' if mark.text == '.' else 'id'
        return Attribute(name, value, self._pos(node))

    def visit_short_value(self, node, ch):
        value = ch[0]
        if isinstance(value, Expr): return Dynamic(value)
        if isinstance(value, Text): return value.content
        return Literal(value.text)

    def visit_short_name(self, node, ch):   return node

    def visit_attr_list(self, node, ch):    return ch[0]
    def visit_paren_attrs(self, node, ch):  return [item[0] for item in _list(ch[3])]
    def visit_inline_attrs(self, node, ch): return [item[1] for item in ch]

    def visit_m_attribute(self, node, ch):
        name, value = ch
        return self._attribute(name, _opt(value))

    def visit_m_attr_value(self, node, ch):     return ch[0]
    def visit_m_attr_toggle(self, node, ch):    return BooleanToggle(self._expr(ch[1]))
    def visit_m_attr_assign(self, node, ch):    return ch[3][0]

    @staticmethod
    def _desugar(shorthands, attributes):
        """
        Merge .class and #id shorthands with explicit class/id attributes. All class values are joined
        with spaces, in source order, into one `class` attribute placed where the first class value occurs.
        More than one id is an error.
        """
        result  = []
        classes = []                # values of all class attributes & shorthands: Literal or Dynamic
        merged  = None              # the single `class` attribute of the result
        has_id  = False

        for attr in shorthands + attributes:
            if attr.name == 'class' and isinstance(attr.value, (Literal, Dynamic)):
                classes.append(attr.value)
                if merged is None:
                    merged = Attribute('class', None, attr.pos)
                    result.append(merged)
                continue
            if attr.name == 'id':
                if has_id:
                    raise SyntaxErrorEx("duplicate id of an element", attr.pos, hint = "an element can have only one id")
                has_id = True
            result.append(attr)

        if merged is not None:
            if all(isinstance(v, Literal) for v in classes):
                merged.value = Literal(' '.join(v.value for v in classes if v.value))
            else:
                merged.value = Concat(classes)
        return result


#####################################################################################################################################################

PARSERS = {
    'rsx':  RsxParser,
    'maud': MaudParser,
}

def parse(source, syntax = 'rsx'):
    """Parse template `source` written in a given syntax ('rsx' or 'maud'), return the list of top-level nodes."""
    try:
        parser = PARSERS[syntax]
    except KeyError:
        raise ValueError(f"unknown template syntax '{syntax}', expected one of: {', '.join(PARSERS)}") from None
    return parser().parse(source)
