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
#   Utilities of global use.
#
import re

# Type of a compiled regular expression.
PATTERN_TYPE = type(re.compile(""))


def has_value(var) :
  """To avoid possible comparison bugs with empty values vs None."""
  return var is not None


def compile_pattern(pattern) :
  """Accepts a regex string or an already compiled regex."""
  if isinstance(pattern, PATTERN_TYPE) :
    return pattern
  return re.compile(pattern)


def line_and_column(string, offset) :
  """Converts an offset into a (1-based) line and column of the string."""
  line = string.count("\n", 0, offset) + 1
  line_start = string.rfind("\n", 0, offset) + 1
  return line, offset - line_start + 1


def escape_for_display(s) :
  """Substitute certain chars to assist debug traces."""
  if len(s) == 0 :
    return "[EMPTY]"
  return s.replace("\n","[NL]").replace("\t","[TAB]") # Escape newlines so not to confuse debug output.

def truncate(s, max_len=10) :
  """Truncates a long string so is suitable for display."""
  display_string = escape_for_display(s)
  if len(s) > max_len :
    display_string = escape_for_display(s[0:max_len]) + "..."
  return display_string
