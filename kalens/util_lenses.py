#
# Copyright (c) 2010-2011, Nick Blundell
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
# Author: Nick Blundell <blundeln [AT] gmail [DOT] com>
# Organisation: www.nickblundell.org.uk
#
# Description:
#   Useful lenses built from the core lenses: common repetitions and the
#   line-level pieces (indentation, line ends and comments) from which
#   line-oriented configuration grammars are assembled.
#

from .debug import *
from .exceptions import *
from .util import *
from .base_lenses import *


class Optional(Or) :
  """Wraps an Or with Empty."""
  def __init__(self, lens, **kargs) :
    super(Optional, self).__init__(lens, Empty(), **kargs)


class ZeroOrMore(Repeat) :
  def __init__(self, lens, **kargs) :
    kargs["min_count"] = 0
    super(ZeroOrMore, self).__init__(lens, **kargs)


class OneOrMore(Repeat) :
  def __init__(self, lens, **kargs) :
    kargs["min_count"] = 1
    super(OneOrMore, self).__init__(lens, **kargs)


class Indent(Del) :
  """
  Leading whitespace of a line.  In PUT, the original indentation is kept;
  a new node is indented like its siblings' parent plus one unit.
  """

  def __init__(self, unit="  ", **kargs) :
    super(Indent, self).__init__(r"[ \t]*", **kargs)
    self.unit = unit

  def _put(self, context, concrete_input_reader) :
    indent = None
    if has_value(concrete_input_reader) :
      at_line_start = concrete_input_reader.is_at_line_start()
      indent = concrete_input_reader.consume_match(self.regex)
      # Mid-line space is no indentation once the line has been broken.
      if context.broken_line and not at_line_start :
        indent = None
    if not has_value(indent) :
      indent = context.default_indent(self.unit)

    # Remember it, so the closing line of a block lines up with its opening.
    if not has_value(context.indent) :
      context.indent = indent
    return indent


#
# Patterns.
#

# Text of a comment, which is stripped of surrounding whitespace.
COMMENT_TEXT = r"[^ \t\n](?:[^\n]*[^ \t\n])?"
# The end of a line, or of the file, if it lacks a final newline.
EOL = r"[ \t]*(?:\n|\Z)"
SPACE = r"[ \t]+"
OPT_SPACE = r"[ \t]*"

#
# Line-level lenses.
#

indent = Indent()
sep = Del(SPACE, " ")
opt_sep = Del(OPT_SPACE, " ")
eol = Del(EOL, "\n")

# A line holding nothing (or just a bare comment marker).
blank_line = Del(r"[ \t]*[#!]?[ \t]*(?:\n|\Z)", "\n")

# A line holding only a comment, e.g. "  # maintenance window".
comment_line = Subtree(
  indent + Label("#comment") + Del(r"[#!][ \t]*", "# ") + Store(COMMENT_TEXT) + eol,
  guard = r"[ \t]*[#!]",
)

# A comment trailing some statement on its line.
eol_comment = Subtree(
  Del(r"[ \t]*[#!][ \t]*", " # ") + Label("#comment") + Store(COMMENT_TEXT) + eol,
  guard = r"[ \t]*[#!][ \t]*[^ \t\n]",
)

# Ends a statement line, keeping any trailing comment as a #comment child.
comment_or_eol = eol_comment | Del(r"[ \t]*(?:[#!][ \t]*)?(?:\n|\Z)", "\n")

auto_name_lenses(globals())
