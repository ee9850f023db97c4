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
#   The abstract structure that lenses GET into and PUT from: an ordered
#   forest of labelled nodes, plus the provenance of each parsed node.
#
import itertools
from collections import namedtuple

from .util import *

# Stable per-node identifiers, used to key provenance.
_node_ids = itertools.count(1)


# Where a parsed node came from: its span of the original string and a
# snapshot of its structure at the time, so that PUT can tell if it changed.
Span = namedtuple("Span", ["start", "end", "fingerprint"])


def fingerprint(node) :
  """A hashable snapshot of a node's label, value and (recursively) children."""
  return (node.label, node.value, tuple([fingerprint(child) for child in node.children]))


class Node(object) :
  """
  One element of the tree.  The label identifies the grammar role of the
  node (e.g. 'vrrp_instance', '#comment'), the value holds scalar data, if
  any, and children are ordered, since configuration files are positionally
  meaningful.
  """

  def __init__(self, label, value=None, children=None) :
    self.id = next(_node_ids)
    self.label = label
    self.value = value
    self.children = list(children or [])

  #
  # Child access.
  #

  def find(self, label) :
    """Returns the first child with the label, or None."""
    for child in self.children :
      if child.label == label :
        return child
    return None

  def find_all(self, label) :
    return [child for child in self.children if child.label == label]

  def append(self, node) :
    self.children.append(node)
    return node

  def insert(self, index, node) :
    self.children.insert(index, node)
    return node

  def index(self, node) :
    """Position of this very node (not merely an equal one) amongst the children."""
    for index, child in enumerate(self.children) :
      if child is node :
        return index
    raise ValueError("%r is not a child of %r" % (node, self))

  def remove(self, node) :
    del self.children[self.index(node)]

  def __iter__(self) :
    return iter(self.children)

  def __len__(self) :
    return len(self.children)

  def __getitem__(self, index) :
    return self.children[index]

  # Identity (self.id) plays no part in equality, so a re-parsed tree equals
  # the one that was PUT.
  def __eq__(self, other) :
    if not isinstance(other, Node) :
      return NotImplemented
    return self.label == other.label and self.value == other.value and self.children == other.children

  def __ne__(self, other) :
    result = self.__eq__(other)
    if result is NotImplemented :
      return result
    return not result

  __hash__ = None

  def __repr__(self) :
    args = [repr(self.label)]
    if has_value(self.value) :
      args.append(repr(self.value))
    if self.children :
      args.append(repr(self.children))
    return "Node(%s)" % ", ".join(args)


class Tree(list) :
  """
  An ordered forest of top-level nodes, as GOT from some string.  The tree
  remembers that string and the provenance of every node it contains, keyed
  by node id, which PUT uses to reproduce unchanged nodes verbatim.
  """

  def __init__(self, nodes=(), provenance=None, source=None) :
    super(Tree, self).__init__(nodes)
    self.provenance = provenance or {}
    self.source = source

  def find(self, label) :
    for node in self :
      if node.label == label :
        return node
    return None

  def find_all(self, label) :
    return [node for node in self if node.label == label]

  def walk(self) :
    """Yields every node of the forest, depth first."""
    stack = list(reversed(self))
    while stack :
      node = stack.pop()
      yield node
      stack.extend(reversed(node.children))

  def match(self, path) :
    """
    Finds nodes by a slash-separated path of labels, where '*' matches any
    label: e.g. tree.match("vrrp_instance/virtual_ipaddress/ipaddr").
    """
    nodes = list(self)
    for index, step in enumerate(path.strip("/").split("/")) :
      if index > 0 :
        nodes = [child for node in nodes for child in node.children]
      nodes = [node for node in nodes if step == "*" or node.label == step]
    return nodes

  def dump(self) :
    """Renders the tree as indented 'label = value' lines, to help debugging."""
    lines = []
    def dump_node(node, depth) :
      line = "  " * depth + node.label
      if has_value(node.value) :
        line += " = %s" % node.value
      lines.append(line)
      for child in node.children :
        dump_node(child, depth + 1)
    for node in self :
      dump_node(node, 0)
    return "\n".join(lines)
