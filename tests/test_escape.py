import html, random, re

from hypertext.escape import escape, to_text


# an ampersand that does not start one of the entities produced by escape()
BARE_AMPERSAND = re.compile(r'&(?!amp;|lt;|gt;|quot;|#x27;)')


def test_001_entities():
    assert escape('<a href="x">Tom & Jerry\'s</a>') == '&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&#x27;s&lt;/a&gt;'
    assert escape('plain text') == 'plain text'
    assert escape('') == ''
    assert escape('&amp;') == '&amp;amp;'           # existing entities are not recognized, just escaped


def test_002_roundtrip():
    rand = random.Random(2024)
    alphabet = '&<>"\'' + 'ab c;#x1\né中'
    for _ in range(1000):
        text = ''.join(rand.choice(alphabet) for _ in range(rand.randint(0, 40)))
        out = escape(text)
        assert not set('<>"\'') & set(out)
        assert not BARE_AMPERSAND.search(out)
        assert html.unescape(out) == text


def test_003_to_text():
    assert to_text(None) == ('', False)
    assert to_text(5) == ('5', False)
    assert to_text(-2.5) == ('-2.5', False)
    assert to_text(True) == ('True', True)          # bool is not treated as a number
    assert to_text('<b>') == ('<b>', True)

    class Evil(int):
        def __str__(self): return '<script>'
    assert to_text(Evil(1)) == ('<script>', True)
