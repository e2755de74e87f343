"""
Template: the compile-once, render-many entry point of the engine.

    >>> page = rsx('<div class="item"><p>{x}</p></div>')
    >>> page.render(x = "&")
    '<div class="item"><p>&amp;</p></div>'
"""

from hypertext import config
from hypertext.parser import parse
from hypertext.validator import validate
from hypertext.compiler import generate
from hypertext.schema import registry as default_registry
from hypertext.runtime import Buffer, Lazy, execute


class Template:
    """
    A template compiled from source text: parsed, validated against a schema registry, and translated
    to a render plan. All compilation happens in __init__(), so every syntax or validation error
    surfaces when the template is created, before anything gets rendered.
    """

    config_default = {
        'name':     config.TEMPLATE_NAME,   # name of the template shown in diagnostics
        'verbose':  False,                  # if True, print a summary of compilation
    }
    config = None

    source   = None         # template source text
    syntax   = None         # 'rsx' or 'maud'
    registry = None         # schema Registry the template was validated against
    tree     = None         # list of top-level nodes after parsing & validation
    plan     = None         # list of RenderOps

    def __init__(self, source, syntax = 'rsx', registry = None, **config_):
        self.config = self.config_default.copy()
        self.config.update(**config_)

        self.source = source
        self.syntax = syntax
        self.registry = registry if registry is not None else default_registry

        self.tree = validate(parse(source, syntax), self.registry)
        self.plan = generate(self.tree)

        if self.config['verbose'] or config.DEBUG:
            print(f"hypertext: compiled {self.config['name']} ({syntax}): "
                  f"{len(self.tree)} top-level node(s), {len(self.plan)} op(s)")

    def render(self, /, **context):
        """Render the template with a given context into a fresh buffer, return the resulting text."""
        buffer = Buffer()
        self.render_to(buffer, **context)
        return buffer.into_string()

    def render_to(self, buffer, /, **context):
        """Render the template into a caller-supplied `buffer`; for composition or streaming into a larger document."""
        with buffer.rendering():
            execute(self.plan, buffer, dict(context))

    def bind(self, /, **context):
        """Lazy rendering of this template with a given context, to be embedded in another template's output."""
        return Lazy(lambda buffer: self.render_to(buffer, **context))

    __call__ = bind             # templates can be used as components: <Card title="..."/>

    def __repr__(self):
        return f"<Template {self.config['name']} ({self.syntax})>"


#####################################################################################################################################################

_cache = {}         # compiled templates of rsx() and maud(), by (syntax, source)

def _compile(source, syntax, config_):
    if not config.CACHE_TEMPLATES or config_:
        return Template(source, syntax, **config_)
    key = (syntax, source)
    template = _cache.get(key)
    if template is None:
        template = _cache[key] = Template(source, syntax)
    return template

def rsx(source, **config_):
    """Compile a template written in the "rsx" syntax. Templates without extra configuration are cached."""
    return _compile(source, 'rsx', config_)

def maud(source, **config_):
    """Compile a template written in the "maud" syntax. Templates without extra configuration are cached."""
    return _compile(source, 'maud', config_)
