#
# Copyright (c) 2026, the kalens contributors
# All rights reserved.
# 
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#     * Redistributions of source code must retain the above copyright
#       notice, this list of conditions and the following disclaimer.
#     * Redistributions in binary form must reproduce the above copyright
#       notice, this list of conditions and the following disclaimer in the
#       documentation and/or other materials provided with the distribution.
#     * Neither the name of Nick Blundell nor the
#       names of its contributors may be used to endorse or promote products
#       derived from this software without specific prior written permission.
# 
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND
# ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED
# WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
# DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER BE LIABLE FOR ANY
# DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES
# (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES;
# LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND
# ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT
# (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS
# SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#
# Description:
#   Lenses for the statements of a brace-structured, line-oriented
#   configuration language: single-line fields and flags, and blocks of
#   nested statements with optional names.
#
#   Each statement lens carries a guard that recognises its keyword, so that
#   once a keyword is seen the statement is committed to and any mistake in
#   it is reported where it lies.
#

from .debug import *
from .util import *
from .base_lenses import *
from .util_lenses import *

# A keyword must not be followed by further word characters.
WORD_END = r"(?![^ \t\n{}#!])"
WORD = r"[A-Za-z0-9_.:-]+"
# The rest of a one-line block, e.g. the " }" of "global_defs { }".
ONE_LINE_CLOSE_REGEX = compile_pattern(r"[ \t]*\}")


def keyword(pattern) :
  """Regex matching exactly the whole keyword(s) of the pattern."""
  return "(?:%s)%s" % (pattern, WORD_END)


def field(key_pattern, value_lens) :
  """
  A statement of a keyword and a value on one line, e.g. "priority 100",
  which becomes the node priority = "100".
  """
  return Subtree(
    indent + Key(keyword(key_pattern)) + sep + value_lens + comment_or_eol,
    guard = r"[ \t]*(?:%s)[ \t]+[^ \t\n#!]" % key_pattern,
  )


def flag(key_pattern) :
  """A keyword alone on its line, e.g. "nopreempt", which becomes a valueless node."""
  return Subtree(
    indent + Key(keyword(key_pattern)) + comment_or_eol,
    guard = r"[ \t]*(?:%s)[ \t]*(?:[#!]|\n|\Z)" % key_pattern,
  )


class OpeningEol(Optional) :
  """
  Ends the opening line of a block, which a one-line block such as
  "global_defs {}" lacks.  Once such a block has statements to PUT, its line
  is broken here.
  """

  def __init__(self, **kargs) :
    super(OpeningEol, self).__init__(eol, **kargs)

  def _put(self, context, concrete_input_reader) :
    if has_value(concrete_input_reader) and has_value(context.cursor.peek()) \
        and concrete_input_reader.peek_match(ONE_LINE_CLOSE_REGEX) :
      context.broken_line = True
      return eol.put(context, None)
    return super(OpeningEol, self)._put(context, concrete_input_reader)


# The end of a closing brace's line.  A comment there is kept, as text only,
# so that it stays after the brace.
brace_eol = Del(r"[ \t]*(?:[#!][^\n]*)?(?:\n|\Z)", "\n", name="brace_eol")


def _block(title, body, guard) :
  # The closing brace takes the indentation of the opening line.
  entry = blank_line | comment_line | body
  return Subtree(
    indent + title + opt_sep + "{" + OpeningEol()
      + ZeroOrMore(entry)
      + indent + "}" + brace_eol,
    guard = guard,
  )


def block(key_pattern, body) :
  """
  A keyword followed by braces enclosing the statements matched by the
  body lens, e.g. "global_defs { ... }".  Blank lines and comment lines may
  appear anywhere within.
  """
  return _block(
    Key(keyword(key_pattern)),
    body,
    guard = r"[ \t]*(?:%s)[ \t]*\{" % key_pattern,
  )


def named_block(key_pattern, body, name_lens=None) :
  """
  A block whose keyword is followed by a name, e.g. "vrrp_instance VI_1 {",
  which becomes the value of the block's node.
  """
  if not has_value(name_lens) :
    name_lens = Store(WORD)
  return _block(
    Key(keyword(key_pattern)) + sep + name_lens,
    body,
    guard = r"[ \t]*(?:%s)[ \t]+[^ \t\n{#!]" % key_pattern,
  )


def named_block_arg(key_pattern, name_label, arg_label, body) :
  """
  A block whose keyword is followed by two words, e.g.
  "virtual_server 10.0.0.1 80 {", each of which becomes a labelled child
  (here, ip and port) ahead of the body's nodes.
  """
  return _block(
    Key(keyword(key_pattern))
      + sep + Subtree(Label(name_label) + Store(WORD))
      + sep + Subtree(Label(arg_label) + Store(WORD)),
    body,
    guard = r"[ \t]*(?:%s)[ \t]+[^ \t\n{#!]" % key_pattern,
  )
