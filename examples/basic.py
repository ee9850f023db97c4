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
#   Some tests that serve as simple examples
#
from kalens import *
from kalens.debug import d # Like print(...)


def fundamentals_test() :

  """
  If you are familiar with parsing of strings, then you will quickly pick up
  the concept of bi-directional programming (i.e. essentially parsing and then
  unparsing strings to and from, in this case, a tree of nodes).  A lens
  defines a grammar (or part of) to define this bi-directional transformation.

  An important concept of a lens is that we need to define which parts of the
  original string we are interested in manipulating in our tree and which we
  are not.  For example, in a configuration file we care about keywords and
  values but not about the whitespace between them.

  However, when we later wish to recreate the string to include our
  modifications, we would like to restore those artifacts (whitespace,
  comments, blank lines) where possible and create new such artifacts where we
  have added to the tree.

  Since the grammar works for both parsing and un-parsing, we describe parsing
  as GETing (the tree) and un-parsing as PUTing (the modified tree back into
  an appropriate string).
  """

  # A Subtree lens makes a node from whatever the lenses inside it find: here,
  # Key takes a word as the label of the node and Store takes a number as its
  # value, whilst Del consumes the space between them without storing it.
  lens = Subtree(Key("[a-z]+") + Del(" +", " ") + Store("[0-9]+"))

  # So when we GET from the string "priority   100" we extract a node.
  nodes = lens.get("priority   100")
  assert(nodes == [Node("priority", "100")])

  # Then, perhaps after modifying the node, we PUT it back.  Since we did not
  # pass the original string, the Del lens has to CREATE its output from its
  # default.
  nodes[0].value = "150"
  assert(lens.put(nodes) == "priority 150")

  # But if we GET a tree with the top-level get function, the tree remembers
  # where each node came from, so PUT copies the original string where we did
  # not change anything.
  tree = get("priority   100", lens)
  tree[0].value = "150"
  assert(put(tree, lens=lens) == "priority   150")


def keepalived_test() :

  # For keepalived.conf, the lens is ready made, so we can simply GET a tree
  # from the file's contents...
  text = "\n".join([
    "! Primary router",
    "vrrp_instance VI_1 {",
    "    state MASTER",
    "    priority 100     # highest wins",
    "",
    "    virtual_ipaddress {",
    "        192.168.1.1/24 dev eth0",
    "    }",
    "}",
  ]) + "\n"
  tree = get(text)
  d(tree.dump())

  # ...find what we are interested in...
  instance = tree.find("vrrp_instance")
  assert(instance.value == "VI_1")
  assert(instance.find("priority").value == "100")
  assert(tree.match("vrrp_instance/virtual_ipaddress/ipaddr/prefixlen")[0].value == "24")

  # ...and change it.  Note how everything we did not touch, including the
  # comments, the blank line and the indentation, is left as it was, and how
  # a new node is lined up with its siblings.
  instance.find("state").value = "BACKUP"
  instance.insert(1, Node("nopreempt"))
  assert(put(tree) == text.replace("MASTER", "BACKUP").replace("    priority", "    nopreempt\n    priority"))


def creating_test() :

  # We can also build a tree from scratch, in which case everything is
  # CREATED from the defaults of the lens.
  tree = [
    Node("global_defs", None, [
      Node("router_id", "LVS_DEVEL"),
    ]),
  ]
  assert(put(tree) == "global_defs {\n  router_id LVS_DEVEL\n}\n")

  # Of course, a node the grammar has no place for cannot be PUT.
  tree[0].append(Node("priority", "100"))
  try :
    put(tree)
    assert(False)
  except StructuralError as e :
    d(e)
