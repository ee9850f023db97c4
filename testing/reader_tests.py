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
#   Tests of the concrete input reader, rollback and utilities, which must
#   have the suffix '_test' to be picked up for automated testing.
#

import pytest

from kalens import *
from kalens.util import line_and_column, escape_for_display, truncate


def concrete_input_reader_test() :
  concrete_input_reader = ConcreteInputReader("ABCD")
  output = ""
  for i in range(0,2) :
    output += concrete_input_reader.consume_string(1)
  assert(output == "AB")
  assert(concrete_input_reader.get_pos() == 2)
  assert(concrete_input_reader.get_remaining() == "CD")
  assert(concrete_input_reader.get_consumed_string(0) == "AB")

  with pytest.raises(EndOfStringException) :
    concrete_input_reader.consume_string(3)

  # A clone shares the string but not the position.
  cloned_reader = ConcreteInputReader(concrete_input_reader)
  assert(cloned_reader.is_aligned_with(concrete_input_reader))
  cloned_reader.consume_string(2)
  assert(cloned_reader.is_fully_consumed())
  assert(not concrete_input_reader.is_fully_consumed())


def consume_match_test() :
  concrete_input_reader = ConcreteInputReader("priority 100")
  word = compile_pattern("[a-z]+")
  space = compile_pattern(" +")

  assert(concrete_input_reader.peek_match(word))
  assert(concrete_input_reader.get_pos() == 0)
  assert(concrete_input_reader.consume_match(word) == "priority")
  # No match consumes nothing.
  assert(concrete_input_reader.consume_match(word) == None)
  assert(concrete_input_reader.get_pos() == 8)
  assert(concrete_input_reader.consume_match(space) == " ")
  assert(concrete_input_reader.get_remaining() == "100")


def rollback_test() :
  concrete_input_reader = ConcreteInputReader("abcdef")
  container = NodeContainer()
  container.store_node(Node("kept"))

  with pytest.raises(LensException) :
    with automatic_rollback(concrete_input_reader, container) :
      concrete_input_reader.consume_string(3)
      container.store_node(Node("discarded"))
      container.set_value("x")
      raise LensException("Testing rollback")

  assert(concrete_input_reader.get_pos() == 0)
  assert(container.children == [Node("kept")])
  assert(container.value == None)

  # Nothing is undone without a failure.
  with automatic_rollback(concrete_input_reader, None, container) :
    concrete_input_reader.consume_string(2)
  assert(concrete_input_reader.get_pos() == 2)

  # Other exceptions pass straight through, untouched.
  with pytest.raises(ParseError) :
    with automatic_rollback(concrete_input_reader) :
      concrete_input_reader.consume_string(1)
      raise concrete_input_reader.parse_error()
  assert(concrete_input_reader.get_pos() == 3)


def parse_error_test() :
  concrete_input_reader = ConcreteInputReader("ab\ncd")

  # With no failure noted, the error is at the current position.
  concrete_input_reader.set_pos(4)
  error = concrete_input_reader.parse_error()
  assert((error.offset, error.line, error.column) == (4, 2, 2))
  assert(error.found == "d")
  assert(error.lens == None)

  # The furthest failure wins, and the innermost lens at that position.
  concrete_input_reader.set_pos(0)
  inner_lens, outer_lens = Literal("x", name="inner"), Literal("y", name="outer")
  concrete_input_reader.note_failure(Literal("z"), 1)
  concrete_input_reader.note_failure(inner_lens, 3)
  concrete_input_reader.note_failure(outer_lens, 3)
  error = concrete_input_reader.parse_error()
  assert((error.offset, error.line, error.column) == (3, 2, 1))
  assert(error.lens == "Literal(inner)")
  assert("line 2, column 1" in str(error))

  # Failures at line ends and the end of input are shown clearly.
  concrete_input_reader.note_failure(outer_lens, 2)
  concrete_input_reader.set_pos(2)
  assert(concrete_input_reader.parse_error().found == "cd")

  # Text left unconsumed lies no earlier than the reader's position.
  concrete_input_reader.set_pos(4)
  error = concrete_input_reader.parse_error(unconsumed=True)
  assert((error.offset, error.lens) == (4, None))
  assert(concrete_input_reader.parse_error().offset == 3)

  assert(ConcreteInputReader("ab\ncd", 5).parse_error().found == "[END]")
  assert(ConcreteInputReader("ab\n", 2).parse_error().found == "[NL]")


def util_test() :
  assert(line_and_column("abc", 0) == (1, 1))
  assert(line_and_column("ab\ncd\n", 4) == (2, 2))
  assert(line_and_column("ab\ncd\n", 6) == (3, 1))
  assert(escape_for_display("a\tb\n") == "a[TAB]b[NL]")
  assert(escape_for_display("") == "[EMPTY]")
  assert(truncate("abcdefghijklmnop") == "abcdefghij...")
  assert(truncate("abc") == "abc")


def logging_test() :
  import logging
  from kalens.debug import logger

  level = logger.level
  try :
    handler = setup_logging("debug")
    assert(logger.level == logging.DEBUG)
    # Calling again replaces our handler rather than adding another.
    handler = setup_logging(logging.INFO)
    assert([h for h in logger.handlers if getattr(h, "_kalens_handler", False)] == [handler])
    assert(logger.level == logging.INFO)

    record = logging.LogRecord("kalens", logging.INFO, __file__, 1, "traced", None, None)
    assert(handler.filter(record))
    assert(record.indent == "")
  finally :
    for h in list(logger.handlers) :
      if getattr(h, "_kalens_handler", False) :
        logger.removeHandler(h)
    logger.setLevel(level)
