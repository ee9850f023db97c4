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
#   Defines a Rollbackable class and util functions, so that tentative
#   parsing of some input (e.g. an alternative of an Or lens) can be undone.
#

import copy
from .debug import *
from .exceptions import *


class Rollbackable(object) :
  """
  A class that can have its state rolled back, to undo modifications.
  Subclasses should override _get_state and _set_state with something
  cheaper than the catch-all deep copy, since GET snapshots state at every
  alternative and every iteration.
  """

  def _get_state(self) :
    return copy.deepcopy(self.__dict__)

  def _set_state(self, state) :
    self.__dict__ = copy.deepcopy(state)


#
# Utility functions for getting and setting the state of multiple rollbackables.
#

def get_rollbackables_state(*rollbackables) :
  """Gets the state of multiple rollbackables, conviently ignoring those with value None."""
  # Note: rollbackables must be in same order for get and set.
  return [rollbackable._get_state() for rollbackable in rollbackables if isinstance(rollbackable, Rollbackable)]

def set_rollbackables_state(new_rollbackables_state, *rollbackables) :
  """Sets the state of multiple rollbackables, conviently ignoring those with value None."""
  states = iter(new_rollbackables_state)
  for rollbackable in rollbackables :
    if isinstance(rollbackable, Rollbackable) :
      rollbackable._set_state(next(states))


class automatic_rollback:
  """
  Allows rollback of reader and container state using the 'with' statement,
  for cleaner syntax.  Only a RollbackException triggers the rollback; other
  exceptions (e.g. ParseError) are let through untouched.
  """

  def __init__(self, *rollbackables) :
    # Note, for convenience, allow rollbackables to be None (e.g. when
    # PUTting without a concrete reader).
    self.rollbackables = rollbackables

  def __enter__(self) :
    self.start_state = get_rollbackables_state(*self.rollbackables)
    return self

  def __exit__(self, type, value, traceback) :
    if type and issubclass(type, RollbackException) :
      set_rollbackables_state(self.start_state, *self.rollbackables)
      if IN_DEBUG_MODE :
        d("Rolled back rollbackables to: %s." % str(self.rollbackables))

    # Note, by not returning True, we do not supress the exception, which gives
    # us maximum flexibility.
