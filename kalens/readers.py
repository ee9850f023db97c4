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
#   Stateful string reader class (i.e. that can be rolled back for tentative
#   parsing), which also keeps the match record of a GET: the furthest
#   failure, for error reporting, and the provenance of each node GOT.
#

from .debug import *
from .exceptions import *
from .util import *
from .rollback import *
from .tree import Span, fingerprint


class ConcreteInputReader(Rollbackable):
  """Stateful reader of the concrete input string."""

  def __init__(self, input_string, position=0):

    # If input_string is in fact a ConcreteInputReader, copy its state, but
    # share its string and match record.
    if isinstance(input_string, self.__class__) :
      self.position = input_string.position
      self.string = input_string.string
      self.provenance = input_string.provenance
      self.failure = input_string.failure
    # Otherwise, initialise our state.
    else :
      assert_msg(isinstance(input_string, str), "Expected a string to read, not %s" % type(input_string))
      self.position  = position
      self.string    = input_string
      # node id -> Span, filled in as nodes are GOT.
      self.provenance = {}
      # [position, lens] of the furthest failure so far; a list so that
      # clones share it.
      self.failure = [-1, None]

  # Only the position is rolled back: the failure record survives rollback,
  # as it describes what was attempted.
  def _get_state(self) :
    return self.position

  def _set_state(self, state) :
    self.position = state

  def get_consumed_string(self, start_pos=0) :
    return self.string[start_pos:self.position]

  def get_pos(self):
    return self.position

  def set_pos(self, pos) :
    assert(isinstance(pos, int))
    self.position = pos

  def get_remaining(self) :
    """Return the text that remains to be parsed - useful for debugging."""
    return self.string[self.position:]

  def consume_string(self, length):
    """
    Consume a string of specified length from the input.
    """
    if self.position+length > len(self.string):
      raise EndOfStringException()
    start = self.position
    self.position += length
    return self.string[start:self.position]

  def consume_match(self, regex) :
    """
    Consumes and returns the text matched by the compiled regex at the
    current position, or returns None (consuming nothing) if it does not match.
    """
    match = regex.match(self.string, self.position)
    if not match :
      return None
    self.position = match.end()
    return match.group(0)

  def peek_match(self, regex) :
    """Tests if the regex matches here, without consuming anything."""
    return regex.match(self.string, self.position) is not None

  def is_fully_consumed(self):
    """
    Return whether the string is fully consumed
    """
    return self.position >= len(self.string)

  def is_at_line_start(self) :
    return self.position == 0 or self.string[self.position-1] == "\n"

  def is_aligned_with(self, other) :
    """Check if this reader is aligned with another."""
    return self.position == other.position and self.string is other.string

  #
  # Match record.
  #

  def record_span(self, node, start) :
    """Notes the provenance of a node GOT from string[start:position]."""
    self.provenance[node.id] = Span(start, self.position, fingerprint(node))

  def note_failure(self, lens, position) :
    """
    Remembers the furthest position at which a lens failed.  Since the
    innermost lens fails first, an outer lens failing at the same position
    does not replace it.
    """
    if position > self.failure[0] :
      self.failure[0], self.failure[1] = position, lens

  def parse_error(self, unconsumed=False) :
    """
    Creates a ParseError at the furthest failure, or at our position if none
    was noted.  For text left unconsumed, the error lies no earlier than our
    position, since everything before it was matched.
    """
    position, lens = self.failure
    if position < 0 or (unconsumed and position < self.position) :
      position, lens = self.position, None
    line, column = line_and_column(self.string, position)
    # Show the rest of the offending line.
    found = self.string[position:position+20].split("\n")[0]
    if not found :
      found = position < len(self.string) and "[NL]" or "[END]"
    return ParseError(position, line, column,
      lens = has_value(lens) and str(lens) or None,
      found = escape_for_display(found),
    )

  def __str__(self) :
    # Return a string representation of this reader, to help debugging.
    if self.is_fully_consumed() :
      return "END_OF_STRING"
    return truncate(self.string[self.position:])
  __repr__ = __str__
