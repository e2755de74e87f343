"""
PEG grammars (in parsimonious notation) of the two template syntaxes.

"rsx" syntax: HTML-like tags with {...} expressions:

    <div class="item" hidden?={collapsed}>
        <p>Hello, {user.name}!</p>
        @for (item in items) { <li>{item}</li> }
    </div>

"maud" syntax: element names followed by brace-delimited blocks, with CSS-selector shorthands:

    div.item hidden[collapsed] {
        p { "Hello, " (user.name) "!" }
        @for item in items { li { (item) } }
    }

Both syntaxes share the control blocks (@if, @for, @match), the raw-output construct @raw(...)
and the rules for embedded Python expressions, which are only matched for balanced brackets and string literals,
never interpreted during parsing.
"""

###  Rules common to both syntaxes. Each syntax defines its own `block`, `ws`, `space`, `quoted_text`.

SHARED = r"""

###  CONTROL BLOCKS

control          =  if_block / for_block / match_block

if_block         =  kw_if ws cond block else_if* else_block?
else_if          =  ws kw_else ws kw_if_plain ws cond block
else_block       =  ws kw_else ws block

for_block        =  kw_for ws for_head ws block
for_head         =  for_paren / for_plain
for_paren        =  "(" ws for_target space kw_in space cond close_paren
for_plain        =  for_target space kw_in space cond
for_target       =  ("(" ws name_list ws ")") / name_list
name_list        =  ~r"[A-Za-z_]\w*(?:\s*,\s*[A-Za-z_]\w*)*"

match_block      =  kw_match ws cond "{" ws match_arm* close_brace
match_arm        =  pattern ws arrow ws block ws ","? ws
pattern          =  wildcard / pattern_expr
wildcard         =  ~r"_(?![\w.(\[])"
arrow            =  "=>"

raw_output       =  kw_raw ws "(" expr_body close_paren

kw_if            =  ~r"@if\b"
kw_if_plain      =  ~r"if\b"
kw_else          =  ~r"@else\b"
kw_for           =  ~r"@for\b"
kw_in            =  ~r"in\b"
kw_match         =  ~r"@match\b"
kw_raw           =  ~r"@raw\b"

###  ATTRIBUTES

attr_name        =  ~r"[@:]?[A-Za-z_][\w\-.:]*"
attr_literal     =  ~r'"[^"]*"'
single_quoted    =  ~r"'[^']*'"

###  EXPRESSIONS

# a condition or an iterable: stops before the first top-level "{"
cond             =  (py_string / py_parens / py_brackets / cond_code)+
cond_code        =  ~r"[^(){}\[\]\"']+"

# a pattern of a @match arm: stops before the top-level "=>"
pattern_expr     =  (py_string / py_parens / py_brackets / pattern_code)+
pattern_code     =  ~r"(?:[^(){}\[\]\"'=]|=(?!>))+"

# expression inside brackets: any text with balanced brackets
expr_body        =  (py_string / py_parens / py_brackets / py_braces / py_code)*
py_parens        =  "(" expr_body ")"
py_brackets      =  "[" expr_body "]"
py_braces        =  "{" expr_body "}"
py_string        =  ~r"\"(?:\\.|[^\"\\\n])*\"|'(?:\\.|[^'\\\n])*'"
py_code          =  ~r"[^(){}\[\]\"']+"

close_brace      =  "}"
close_paren      =  ")"
close_bracket    =  "]"
end_of_input     =  ~r"\Z"
"""


###  Syntax "rsx"

RSX = r"""

document         =  nodes end_of_input
nodes            =  rsx_node*
rsx_node         =  comment / doctype / fragment / raw_output / control / element / dynamic_text / quoted_text / bare_text

comment          =  ~r"<!--[\s\S]*?-->"
doctype          =  ~r"<!DOCTYPE\s+html\s*>"i
fragment         =  "<>" nodes fragment_close
fragment_close   =  "</>"

element          =  "<" tag_name attributes ws tag_tail
tag_tail         =  self_close / tag_body
self_close       =  "/>"
tag_body         =  ">" nodes closing_tag
closing_tag      =  "</" ws tag_name ws ">"
tag_name         =  ~r"[A-Za-z][\w\-]*(?:[.:][A-Za-z_][\w\-]*)*"

attributes       =  attribute*
attribute        =  space attr_name attr_value?
attr_value       =  attr_toggle / attr_assign
attr_toggle      =  ws "?=" ws braced_expr
attr_assign      =  ws "=" ws (attr_literal / braced_expr / single_quoted)

block            =  "{" nodes close_brace

dynamic_text     =  braced_expr ""
braced_expr      =  "{" expr_body close_brace
quoted_text      =  ~r'"(?:[^"\\]|\\.)*"'
bare_text        =  ~r"(?:[^<{}@\"]|@(?!(?:if|else|for|match|raw)\b))+"

ws               =  ~r"\s*"
space            =  ~r"\s+"
""" + SHARED


###  Syntax "maud"

MAUD = r"""

document         =  ws maud_nodes end_of_input
maud_nodes       =  (maud_node ws)*
maud_node        =  doctype / raw_output / control / splice_text / quoted_text / number / block / element

doctype          =  "!DOCTYPE"
block            =  "{" ws maud_nodes close_brace

splice_text      =  splice ""
splice           =  "(" expr_body close_paren
quoted_text      =  ~r'"(?:[^"\\]|\\.)*"'
number           =  ~r"[-+]?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?(?![\w.])"

element          =  m_tag_name shorthand* attr_list ws element_end
m_tag_name       =  ~r"[A-Za-z][\w\-]*(?::[A-Za-z_][\w\-]*)?"
element_end      =  semicolon / block
semicolon        =  ";"

shorthand        =  ~r"[.#]" short_value
short_value      =  short_name / quoted_text / splice
short_name       =  ~r"[\w\-]+"

attr_list        =  paren_attrs / inline_attrs
paren_attrs      =  ws "(" ws (m_attribute ws ","? ws)* close_paren
inline_attrs     =  (space m_attribute)*
m_attribute      =  attr_name m_attr_value?
m_attr_value     =  m_attr_toggle / m_attr_assign
m_attr_toggle    =  "[" expr_body close_bracket
m_attr_assign    =  ws "=" ws (attr_literal / splice / single_quoted)

ws               =  ~r"(?:\s+|//[^\n]*)*"
space            =  ~r"\s+"
""" + SHARED


###  Human-readable names of grammar rules, for error messages: "expected <name>"

EXPECTED = {
    'end_of_input':     "end of template",
    'close_brace':      '"}"',
    'close_paren':      '")"',
    'close_bracket':    '"]"',
    'closing_tag':      "closing tag",
    'fragment_close':   'closing "</>" of a fragment',
    'tag_name':         "element name",
    'm_tag_name':       "element name",
    'tag_tail':         '">" or "/>"',
    'self_close':       '"/>"',
    'tag_body':         '">"',
    'attribute':        "attribute",
    'm_attribute':      "attribute",
    'attr_name':        "attribute name",
    'attr_value':       "attribute value",
    'attr_literal':     'double-quoted attribute value',
    'element_end':      '"{" or ";"',
    'semicolon':        '";"',
    'block':            '"{" opening a block',
    'cond':             "expression",
    'cond_code':        "expression",
    'pattern':          'pattern or "_"',
    'pattern_expr':     "pattern",
    'pattern_code':     "pattern",
    'arrow':            '"=>"',
    'match_arm':        "match arm: pattern => { ... }",
    'for_head':         "loop header: name in expression",
    'for_target':       "loop variable name",
    'name_list':        "loop variable name",
    'kw_in':            '"in"',
    'expr_body':        "expression",
    'py_code':          "expression",
    'py_string':        "expression",
    'py_parens':        "expression",
    'py_brackets':      "expression",
    'py_braces':        "expression",
    'quoted_text':      "quoted text",
    'shorthand':        "class or id shorthand",
    'short_value':      "class or id name",
    'short_name':       "class or id name",
}
