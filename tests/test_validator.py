import pytest

from hypertext import Template
from hypertext.errors import ValidationError, UnknownElement, UnknownAttribute, VoidElementHasChildren
from hypertext.parser import parse
from hypertext.schema import Registry
from hypertext.validator import validate


#####################################################################################################################################################

def violations(source, syntax = 'rsx', registry = None):
    with pytest.raises(ValidationError) as info:
        validate(parse(source, syntax), registry or Registry())
    return info.value

def check(source, syntax = 'rsx', registry = None):
    return validate(parse(source, syntax), registry or Registry())


#####################################################################################################################################################

def test_001_unknown_element():
    ex = violations('<div>\n  <dvi>x</dvi>\n</div>')
    assert ex.kinds() == ['UnknownElement']
    v = ex.violations[0]
    assert isinstance(v, UnknownElement)
    assert v.pos == (2, 3) and ex.pos == (2, 3)
    assert '<dvi>' in str(ex)

    ex = violations('dIv { "x" }', 'maud')
    assert ex.violations[0].hint == "did you mean <div>?"

def test_002_void_elements():
    ex = violations('<br>text</br>')
    assert isinstance(ex.violations[0], VoidElementHasChildren)
    ex = violations('input { "x" }', 'maud')
    assert ex.kinds() == ['VoidElementHasChildren']

    tree = check('<p><br/><input type="text"/></p>')
    br, input_ = tree[0].children
    assert br.void and input_.void and not tree[0].void

def test_003_attributes():
    ex = violations('<a src="x.png">link</a>')
    assert isinstance(ex.violations[0], UnknownAttribute)
    assert "'src'" in ex.violations[0].msg

    check('<a href="/" class="x" title="t" data-anything="1" aria-hidden="true" onclick="go()">y</a>')

    reg = Registry()
    reg.enable('htmx')
    check('<button hx-post="/save" hx-target="#out">Save</button>', registry = reg)
    violations('<button hx-post="/save">Save</button>')

def test_004_ambiguous_quoting():
    ex = violations("""<p title={'say "hi"'}>x</p>""")
    assert ex.kinds() == ['AmbiguousQuoting']
    assert ex.violations[0].pos == (1, 11)

    assert violations('p title=("it\'s") {}', 'maud').kinds() == ['AmbiguousQuoting']
    assert violations('input checked["\'"];', 'maud').kinds() == ['AmbiguousQuoting']
    assert violations('span.("a\\"b");', 'maud').kinds() == ['AmbiguousQuoting']

    check('<p title={"plain"} class={name + "\'s"}>x</p>')      # not a single string literal: no violation

def test_005_all_violations_reported():
    source = '<div foo="1"><blink>x</blink><br>y</br>@if ok { <a src="x">z</a> }</div>'
    ex = violations(source)
    assert ex.kinds() == ['UnknownAttribute', 'UnknownElement', 'VoidElementHasChildren', 'UnknownAttribute']
    assert str(ex).startswith('4 violation(s) found in template:')
    assert len(str(ex).splitlines()) == 5

def test_006_components_and_custom_elements():
    check('<Card anything="x"><p>body</p></Card>')              # components take any arguments
    violations('<Card><blink/></Card>')                         # ...but their children are validated

    reg = Registry()
    reg.register('my-chart', allowed_attributes = "series")
    check('<my-chart series={data}/>', registry = reg)
    assert violations('<my-chart kind="bar"/>', registry = reg).kinds() == ['UnknownAttribute']

def test_007_template_fails_early():
    reg = Registry()
    with pytest.raises(ValidationError):
        Template('<p><blink>x</blink></p>', registry = reg)
