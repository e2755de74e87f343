"""
Integration with Django: rendered templates as HTTP responses.
"""

from django.http import HttpResponse

from hypertext import config
from hypertext.escape import escape
from hypertext.runtime import Rendered, Raw


def to_markup(content):
    """
    Convert response content to markup text: renderable objects (Template bindings, Lazy) are rendered,
    Rendered text and Raw markup are taken as they are, any other value is escaped as plain text.
    """
    if isinstance(content, Rendered): return content
    if isinstance(content, Raw): return content.text
    if hasattr(content, 'render') and not isinstance(content, type):
        return content.render()
    return escape(str(content))


class HtmlResponse(HttpResponse):
    """HttpResponse with HTML content type, whose content is produced from a template or any renderable."""

    def __init__(self, content = '', **kwargs):
        kwargs.setdefault('content_type', config.CONTENT_TYPE)
        super(HtmlResponse, self).__init__(to_markup(content), **kwargs)


def render_response(template, /, status = 200, **context):
    """Render `template` with a given context and wrap the output in an HtmlResponse."""
    return HtmlResponse(template.render(**context), status = status)
