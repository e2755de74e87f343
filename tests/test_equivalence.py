"""
The same templates written in both syntaxes must parse to equal trees and render identically.
"""

import pytest

from hypertext import Template
from hypertext.parser import parse
from hypertext.schema import Registry


CARD = Template('<div class="card"><h3>{title}</h3>{children}</div>', registry = Registry())

CONTEXT = dict(x = "&", items = ["a<b", "c"], name = "Ann", done = True, url = "/x?a=1&b=2", external = False,
               n = 1, t = "T<", html = "<b>bold</b>", Card = CARD)

PAIRS = [
    ('<div class="item"><p>{x}</p></div>',
     'div.item { p { (x) } }'),

    ('<ul id="list">@for item in items { <li class="entry">{item}</li> }</ul>',
     'ul#list { @for item in items { li.entry { (item) } } }'),

    ('<p>Hello, {name}!</p>',
     'p { "Hello, " (name) "!" }'),

    ('<input type="checkbox" checked?={done} disabled/>',
     'input type="checkbox" checked[done] disabled;'),

    ('<a href={url} title="Go">@if external { "↗" } @else { "→" }</a>',
     'a href=(url) title="Go" { @if external { "↗" } @else { "→" } }'),

    ('<span>@match n { 0 => { "none" } 1 => { "one" } _ => { "many" } }</span>',
     'span { @match n { 0 => { "none" } 1 => { "one" } _ => { "many" } } }'),

    ('<!DOCTYPE html><html><head><title>{t}</title></head><body><br/></body></html>',
     '!DOCTYPE html { head { title { (t) } } body { br; } }'),

    ('<div>@raw(html)</div>',
     'div { @raw(html) }'),

    ('<Card title="x">"body"</Card>',
     'Card title="x" { "body" }'),

    ('<p>42</p>',
     'p { 42 }'),

    ('<table>\n  <tr>\n    <td colspan="2">{x}</td>\n  </tr>\n</table>',
     'table {\n  tr {\n    td colspan="2" { (x) }\n  }\n}'),
]


@pytest.mark.parametrize('rsx_source, maud_source', PAIRS)
def test_same_tree(rsx_source, maud_source):
    assert parse(rsx_source, 'rsx') == parse(maud_source, 'maud')

@pytest.mark.parametrize('rsx_source, maud_source', PAIRS)
def test_same_output(rsx_source, maud_source):
    a = Template(rsx_source, 'rsx', registry = Registry()).render(**CONTEXT)
    b = Template(maud_source, 'maud', registry = Registry()).render(**CONTEXT)
    assert a == b

def test_expected_output():
    rsx_source, maud_source = PAIRS[0]
    for source, syntax in [(rsx_source, 'rsx'), (maud_source, 'maud')]:
        template = Template(source, syntax, registry = Registry())
        assert template.render(x = 'VALUE') == '<div class="item"><p>VALUE</p></div>'
        assert template.render(x = '&') == '<div class="item"><p>&amp;</p></div>'

    out = Template(PAIRS[4][1], 'maud', registry = Registry()).render(**CONTEXT)
    assert out == '<a href="/x?a=1&amp;b=2" title="Go">→</a>'

    out = Template(PAIRS[8][0], registry = Registry()).render(**CONTEXT)
    assert out == '<div class="card"><h3>x</h3>body</div>'
