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
#   Isolates all debugging functions.
#
#   Tracing goes through the 'kalens' logger.  Set KALENS_DEBUG=1 to switch on
#   tracing when the package is imported, and KALENS_LOG_LEVEL to choose the
#   level used by setup_logging().
#
import inspect
import logging
import os

from .exceptions import *

logger = logging.getLogger("kalens")
logger.addHandler(logging.NullHandler())

# Guards trace messages that are costly to format.
IN_DEBUG_MODE = os.environ.get("KALENS_DEBUG", "").lower() in ("1", "true", "yes")


def d(message) :
  """Emits a trace message, like print(...)."""
  logger.debug(message)

# More syntacticaly consistant assert function, for displaying explanations
def assert_msg(condition, msg) :
  assert condition, msg


def auto_name_lenses(local_variables) :
  """
  Gives names to lenses based on their local variable names, which is
  useful for tracing parsing and for reporting parse errors. Should be called
  with globals()/locals()
  """
  from .base_lenses import Lens
  for variable_name, obj in local_variables.items() :
    if isinstance(obj, Lens) and not obj.name :
      obj.name = variable_name


class LensIndentFilter(logging.Filter) :
  """
  Nicely indents the debug messages according to the hierarchy of lenses,
  by counting the GET and PUT frames on the stack.
  """

  def filter(self, record) :
    function_names = []
    caller_frame = inspect.currentframe()
    while caller_frame :
      function_names.append(caller_frame.f_code.co_name)
      caller_frame = caller_frame.f_back

    indent = 0
    # Includes 'get' and 'put' since get may be called directly in put (not _put), etc.
    for name in ["_put", "_get"] :
      indent += function_names.count(name)
    record.indent = " " * max(0, indent - 1)
    return True


def get_log_level() :
  """Get log level from environment."""
  level_str = os.environ.get("KALENS_LOG_LEVEL", IN_DEBUG_MODE and "DEBUG" or "WARNING").upper()
  return getattr(logging, level_str, logging.WARNING)


def setup_logging(level=None) :
  """
  Attaches a console handler to the 'kalens' logger.  Call once, from an
  application or a debugging session; the library itself only installs a
  NullHandler.
  """
  if level is None :
    level = get_log_level()
  elif isinstance(level, str) :
    level = getattr(logging, level.upper(), logging.WARNING)

  # Replace a handler added by an earlier call rather than stacking them.
  for handler in list(logger.handlers) :
    if getattr(handler, "_kalens_handler", False) :
      logger.removeHandler(handler)

  handler = logging.StreamHandler()
  handler._kalens_handler = True
  handler.addFilter(LensIndentFilter())
  handler.setFormatter(logging.Formatter("%(name)s: %(indent)s%(message)s"))
  logger.addHandler(handler)
  logger.setLevel(level)
  return handler


if IN_DEBUG_MODE :
  setup_logging()
