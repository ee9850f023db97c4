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
#   Exceptions used for rollback during tentative parsing, and those reported
#   to the user when GET or PUT cannot be completed.
#

# Thrown when tentative object state should be rolled back.
class RollbackException(Exception): pass


class LensException(RollbackException):
  """
  Thrown when parsing or creating lenses to trigger rollback, such that parsing
  may resume at a higher level (e.g. to try another lens path), if possible.
  """

  def __init__(self, msg=None):
    super(LensException, self).__init__(msg)
    self.msg = msg

  def __str__(self):
      return "LensException: %s" % self.msg


class EndOfStringException(LensException):
  pass

# Thrown when a lens must CREATE some text but has neither input nor a default.
class NoDefaultException(LensException):
  pass

class TooFewIterationsException(LensException):
  pass


class ParseError(Exception):
  """
  Reported when GET cannot match the input.  This is not a RollbackException,
  so it passes straight through any tentative parsing and aborts the whole
  GET.
  """

  def __init__(self, offset, line, column, lens=None, found=None):
    self.offset, self.line, self.column = offset, line, column
    # Display id of the innermost lens that failed.
    self.lens = lens
    self.found = found
    super(ParseError, self).__init__(str(self))

  def __str__(self) :
    message = "Parse error at line %s, column %s (offset %s)" % (self.line, self.column, self.offset)
    if self.found is not None :
      message += ": unexpected '%s'" % self.found
    if self.lens is not None :
      message += " whilst matching %s" % self.lens
    return message


class StructuralError(Exception):
  """
  Reported by PUT when the tree holds a node that no lens in the grammar can
  place, such as an unknown label or a missing required child.
  """

  def __init__(self, msg, node=None):
    super(StructuralError, self).__init__(msg)
    self.node = node
