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
"""Main API for using kalens."""


# Imports all lenses
from .util_lenses import *
from .structure_lenses import *
from .tree import Node, Tree, Span, fingerprint
from .exceptions import ParseError, StructuralError
from .debug import setup_logging
from .keepalived import lns
from . import keepalived
from .version import VERSION


# Some lens abbreviations, for short-hand lens definitions.
ZM  = ZeroOrMore
OM  = OneOrMore
O   = Optional


##################################
# High-level API functions
##################################

def get(concrete_input, lens=None) :
  """
  Extracts a Tree of nodes from the string with the given lens (by default,
  that of keepalived.conf).  The whole string must be matched.

  Example: get("vrrp_instance VI_1 {\\n  priority 100\\n}\\n")
    -> [Node('vrrp_instance', 'VI_1', [Node('priority', '100')])]
  """
  lens = Lens._coerce_to_lens(has_value(lens) and lens or lns)
  concrete_input_reader = ConcreteInputReader(concrete_input)
  container = NodeContainer()

  try :
    lens.get(concrete_input_reader, container)
  except LensException :
    raise concrete_input_reader.parse_error()

  if not concrete_input_reader.is_fully_consumed() :
    raise concrete_input_reader.parse_error(unconsumed=True)

  tree = Tree(container.children, source=concrete_input)
  # Keep only the provenance of nodes that made it into the tree.
  for node in tree.walk() :
    tree.provenance[node.id] = concrete_input_reader.provenance[node.id]
  return tree


def put(tree, concrete_input=None, lens=None) :
  """
  Puts a (possibly modified) tree back into a string with the given lens (by
  default, that of keepalived.conf), weaving it into the string it was GOT
  from, if given, so that unchanged parts are reproduced exactly.

  Example: put(tree, original_string) -> modified_string
  """
  lens = Lens._coerce_to_lens(has_value(lens) and lens or lns)

  # A tree GOT by us remembers its string.
  if not has_value(concrete_input) :
    concrete_input = getattr(tree, "source", None)

  # The tree's provenance describes its own source string only.
  provenance, source = None, None
  if has_value(concrete_input) and getattr(tree, "source", None) == concrete_input :
    provenance, source = tree.provenance, concrete_input

  context = PutContext(children=tree, provenance=provenance, source=source)
  concrete_input_reader = has_value(concrete_input) and ConcreteInputReader(concrete_input) or None

  try :
    output = lens.put(context, concrete_input_reader)
  except LensException as e :
    raise StructuralError("Unable to PUT the tree: %s" % e.msg, context.cursor.peek())

  if not context.cursor.is_fully_consumed() :
    node = context.cursor.peek()
    raise StructuralError("No lens could PUT the node %r." % node, node)

  return output
