"""
Tests of the parsers of both syntaxes. Run with: pytest tests/
"""

import pytest

from hypertext.errors import SyntaxErrorEx
from hypertext.parser import parse, collapse_whitespace, unquote, location
from hypertext.tree import Expr, Literal, Dynamic, BooleanToggle, Concat, Attribute, Element, Text, Doctype, \
    ComponentCall, If, For, Match


#####################################################################################################################################################
#####
#####  UTILITIES
#####

def E(name, attrs = (), children = ()):     return Element(name, attrs, children)
def A(name, value):                         return Attribute(name, value)
def T(text):                                return Text(Literal(text))
def D(source, raw = False):                 return Text(Dynamic(Expr(source), raw))
def L(value):                               return Literal(value)
def X(source):                              return Dynamic(Expr(source))
def B(source):                              return BooleanToggle(Expr(source))

def rsx(source):    return parse(source, 'rsx')
def maud(source):   return parse(source, 'maud')

def syntax_error(source, syntax = 'rsx'):
    with pytest.raises(SyntaxErrorEx) as info:
        parse(source, syntax)
    return info.value


#####################################################################################################################################################
#####
#####  TESTS
#####

def test_001_utilities():
    assert location("ab\ncd\nef", 0) == (1, 1)
    assert location("ab\ncd\nef", 4) == (2, 2)
    assert location("ab\ncd\nef", 6) == (3, 1)
    assert unquote(r'"say \"hi\"\n"') == 'say "hi"\n'
    assert unquote(r'"back\\slash"') == 'back\\slash'

def test_002_collapse_whitespace():
    assert collapse_whitespace('a  b\n\t c') == 'a b c'
    assert collapse_whitespace('  a \n b  ') == ' a b '
    assert collapse_whitespace('\n    Hello,\n    world!\n') == 'Hello, world!'
    assert collapse_whitespace(' \n ') == ''
    assert collapse_whitespace('   ') == ' '
    assert collapse_whitespace('') == ''

def test_003_rsx_elements():
    assert rsx('') == []
    assert rsx('<div class="item"><p>{x}</p></div>') == [E('div', [A('class', L('item'))], [E('p', [], [D('x')])])]
    assert rsx('<br/>') == rsx('<br />') == [E('br')]
    assert rsx('<p>Hello, {name}!</p>') == [E('p', [], [T('Hello, '), D('name'), T('!')])]
    assert rsx('<ul>\n  <li>a</li>\n  <li>b</li>\n</ul>') == [E('ul', [], [E('li', [], [T('a')]), E('li', [], [T('b')])])]

def test_004_rsx_attributes():
    tree = rsx('<input type="text" value={v} disabled checked?={on}/>')
    assert tree == [E('input', [A('type', L('text')), A('value', X('v')), A('disabled', B('True')), A('checked', B('on'))])]

    tree = rsx('<a href = "/" data-id={item.id} hx-get="/x" @click="go()">x</a>')
    assert [a.name for a in tree[0].attributes] == ['href', 'data-id', 'hx-get', '@click']

def test_005_rsx_text():
    assert rsx('<p>"<quoted>"  text</p>') == [E('p', [], [T('<quoted> text')])]
    assert rsx('<p>mail@example.com</p>') == [E('p', [], [T('mail@example.com')])]
    assert rsx('<p>a<!-- comment -->b</p>') == [E('p', [], [T('ab')])]
    assert rsx('<!DOCTYPE html><>a{b}</>') == [Doctype(), T('a'), D('b')]
    assert rsx('<p>{ {"k": 1}["k"] }</p>') == [E('p', [], [D('{"k": 1}["k"]')])]

def test_006_maud_elements():
    assert maud('') == []
    assert maud('div.item { p { (x) } }') == [E('div', [A('class', L('item'))], [E('p', [], [D('x')])])]
    assert maud('br;') == [E('br')]
    assert maud('p { "Hello, " (name) "!" }') == [E('p', [], [T('Hello, '), D('name'), T('!')])]
    assert maud('p { 42 }') == [E('p', [], [T('42')])]
    assert maud('!DOCTYPE html {}') == [Doctype(), E('html')]
    assert maud('// comment\np { "a" } // another\n') == [E('p', [], [T('a')])]

def test_007_maud_attributes():
    tree = maud('input type="text" value=(v) disabled checked[on];')
    assert tree == [E('input', [A('type', L('text')), A('value', X('v')), A('disabled', B('True')), A('checked', B('on'))])]

    tree = maud('a (href="/" title=(t),) { "home" }')
    assert tree == [E('a', [A('href', L('/')), A('title', X('t'))], [T('home')])]

def test_008_maud_shorthands():
    assert maud('div.a.b#main class="c" {}') == [E('div', [A('class', L('a b c')), A('id', L('main'))])]
    assert maud('div#main.a {}') == [E('div', [A('id', L('main')), A('class', L('a'))])]
    assert maud('span.(kind).big;') == [E('span', [A('class', Concat([X('kind'), L('big')]))])]
    assert maud('p."two words" {}') == [E('p', [A('class', L('two words'))])]

    # without shorthands, explicit attributes are kept as they are
    assert maud('p class="a" class="b" {}') == [E('p', [A('class', L('a')), A('class', L('b'))])]

    with pytest.raises(SyntaxErrorEx, match = 'duplicate id'):
        maud('div#a id="b" {}')

def test_009_control_blocks():
    tree = rsx('@if a { <b>x</b> } @else if b { "y" } @else { {z} }')
    assert tree == [If([(Expr('a'), [E('b', [], [T('x')])]), (Expr('b'), [T('y')]), (None, [D('z')])])]
    assert maud('@if a { b { "x" } } @else if b { "y" } @else { (z) }') == tree

    tree = rsx('@for (k, v) in pairs { <li>{k}</li> }')
    assert tree == [For(['k', 'v'], Expr('pairs'), [E('li', [], [D('k')])])]
    assert rsx('@for (x in range(3)) {}') == [For(['x'], Expr('range(3)'), [])]
    assert maud('@for k, v in pairs { li { (k) } }') == tree

    tree = rsx('@match kind { "a" => { <b>A</b> } 2 => { "two" }, _ => { other } }')
    assert tree == [Match(Expr('kind'), [(Expr('"a"'), [E('b', [], [T('A')])]), (Expr('2'), [T('two')]), (None, [T('other')])])]

def test_010_raw_and_components():
    assert rsx('<p>@raw(html)</p>') == [E('p', [], [D('html', raw = True)])]
    assert maud('p { @raw(html) }') == [E('p', [], [D('html', raw = True)])]

    tree = rsx('<Card title="Hi" wide>body</Card>')
    assert tree == [ComponentCall(Expr('Card'), [A('title', L('Hi')), A('wide', B('True'))], [T('body')])]
    assert maud('Card title="Hi" wide { "body" }') == tree
    assert rsx('<ui.Card/>') == [ComponentCall(Expr('ui.Card'))]

def test_011_positions():
    tree = rsx('<div>\n  <p title={t}>x</p>\n</div>')
    p = tree[0].children[0]
    assert tree[0].pos == (1, 1)
    assert p.pos == (2, 3)
    assert p.attributes[0].pos == (2, 6)
    assert p.attributes[0].value.expr.pos == (2, 13)

def test_012_syntax_errors():
    ex = syntax_error('<div><p>text</span></div>')
    assert 'expected closing tag </p>, found </span>' in str(ex)
    assert (ex.line, ex.column) == (1, 15)
    assert isinstance(ex, SyntaxError)

    ex = syntax_error('div { p { "x" }', 'maud')
    assert ex.description == 'expected "}", found end of template'
    assert ex.pos == (1, 16)

    ex = syntax_error('<p>x</p>}')
    assert ex.description == "expected end of template, found '}'"
    assert ex.pos == (1, 9)

    ex = syntax_error("<p>\n<a href='x'>y</a></p>")
    assert 'double-quoted' in str(ex) and ex.pos == (2, 9)
    assert ex.hint

    ex = syntax_error('<p>{}</p>')
    assert 'expected an expression' in str(ex)

    ex = syntax_error('<p>{x +}</p>')
    assert 'invalid expression' in str(ex) and ex.pos == (1, 5)

    with pytest.raises(ValueError, match = 'unknown template syntax'):
        parse('<p></p>', 'jinja')
