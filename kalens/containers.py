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
#  Containers for abstract storage of nodes: NodeContainer collects what
#  lenses GET for one node, and PutContext hands a node and its children to
#  the lenses that PUT them.
#

import re

from .debug import *
from .exceptions import *
from .util import *
from .rollback import *
from .tree import Node, fingerprint

INDENT_REGEX = re.compile(r"[ \t]*")


class NodeContainer(Rollbackable) :
  """
  Collects the label, value and child nodes GOT by the lenses within one
  Subtree (or, at the top level, the forest).

  We must be careful to allow the state of the container to be correctly
  captured and re-instated to facilitate efficient rollback.  Since lenses
  only ever append children, it is enough to remember how many there were.
  """

  def __init__(self) :
    self.label = None
    self.value = None
    self.children = []

  def set_label(self, label) :
    assert_msg(not has_value(self.label), "Container already has a label defined: %s" % self.label)
    self.label = label

  def set_value(self, value) :
    assert_msg(not has_value(self.value), "Container already has a value defined: %s" % self.value)
    self.value = value

  def store_node(self, node) :
    self.children.append(node)

  def to_node(self, lens=None) :
    assert_msg(has_value(self.label), "The subtree lens %s GOT no label for its node." % lens)
    return Node(self.label, self.value, self.children)

  def _get_state(self) :
    return (self.label, self.value, len(self.children))

  def _set_state(self, state) :
    self.label, self.value, no_children = state
    del self.children[no_children:]

  def __str__(self) :
    return "%s=%s %s" % (self.label, self.value, self.children)
  __repr__ = __str__


class NodeCursor(object) :
  """A consumable, ordered sequence of nodes to PUT."""

  def __init__(self, nodes) :
    self.nodes = list(nodes)
    self.position = 0

  def peek(self) :
    if self.is_fully_consumed() :
      return None
    return self.nodes[self.position]

  def consume(self) :
    node = self.peek()
    assert_msg(has_value(node), "There is no node left to consume.")
    self.position += 1
    return node

  def is_fully_consumed(self) :
    return self.position >= len(self.nodes)

  def __str__(self) :
    return str(self.nodes[self.position:])
  __repr__ = __str__


class PutContext(object) :
  """
  The node being PUT (for the Key, Label and Store lenses within its Subtree)
  and a cursor over its children (for nested Subtree lenses), together with
  the original string and provenance of the whole tree.
  """

  def __init__(self, node=None, children=(), parent=None, provenance=None, source=None) :
    self.node = node
    self.cursor = NodeCursor(children)
    self.parent = parent
    self.provenance = provenance or {}
    self.source = source
    # The indentation used for this node, once one is PUT.
    self.indent = None
    # Set when the opening line of a one-line block is broken, so that its
    # closing brace goes on a line of its own.
    self.broken_line = False

  def create_child(self, node) :
    return PutContext(node, node.children, self, self.provenance, self.source)

  def get_span(self, node) :
    """The span of the original string the node was GOT from, if known."""
    if not has_value(self.source) :
      return None
    return self.provenance.get(node.id)

  def is_unchanged(self, node) :
    span = self.get_span(node)
    return has_value(span) and span.fingerprint == fingerprint(node)

  def default_indent(self, unit) :
    """
    Indentation for a node with no original: that already used by this node
    (e.g. for a closing brace), that of its original siblings, or one unit
    more than the nearest indented ancestor.  Top-level nodes are not
    indented.
    """
    if has_value(self.indent) :
      return self.indent
    sibling_indent = self._sibling_indent()
    if has_value(sibling_indent) :
      return sibling_indent
    context = self.parent
    while has_value(context) and has_value(context.node) :
      if has_value(context.indent) :
        return context.indent + unit
      context = context.parent
    return ""

  def _sibling_indent(self) :
    """The indentation of the first original sibling that starts a line, if any."""
    if not (has_value(self.parent) and has_value(self.source)) :
      return None
    for sibling in self.parent.cursor.nodes :
      span = self.get_span(sibling)
      if has_value(span) and (span.start == 0 or self.source[span.start-1] == "\n") :
        return INDENT_REGEX.match(self.source, span.start).group(0)
    return None

  def __str__(self) :
    return "PutContext(%s, %s)" % (self.node, self.cursor)
  __repr__ = __str__
