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
#   Tests of the core lenses and combinators, in both directions, which must
#   have the suffix '_test' to be picked up for automated testing.
#

import pytest

from kalens import *


def literal_test() :
  lens = Literal("{")
  d("GET")
  assert(lens.get("{") == [])
  with pytest.raises(LensException) :
    lens.get("}")
  with pytest.raises(LensException) :
    lens.get("")

  # A mismatch leaves the reader where it was, where the error lies.
  concrete_input_reader = ConcreteInputReader("{}x")
  concrete_input_reader.set_pos(1)
  with pytest.raises(LensException) :
    lens.get(concrete_input_reader)
  assert(concrete_input_reader.get_pos() == 1)

  d("PUT")
  assert(lens.put() == "{")
  assert(lens.put(None, "{") == "{")


def del_test() :
  lens = Del(r"[ \t]+", " ")
  d("GET")
  assert(lens.get(" \t ") == [])
  with pytest.raises(LensException) :
    lens.get("x")

  d("PUT")
  # Weave the original, if any, else the default.
  assert(lens.put(None, "\t\t") == "\t\t")
  assert(lens.put(None, "x") == " ")
  assert(lens.put() == " ")

  with pytest.raises(NoDefaultException) :
    Del("x+").put(None, "y")


def subtree_test() :
  lens = Subtree(Key("[a-z]+") + Del(" *=", "=") + Store("[0-9]+"))
  d("GET")
  assert(lens.get("size =3") == [Node("size", "3")])
  with pytest.raises(LensException) :
    lens.get("size=x")

  d("PUT")
  assert(lens.put([Node("count", "42")]) == "count=42")
  # A changed value replaces the original one.
  assert(lens.put(Node("count", 7), "size =3") == "count=7")

  # Only a node the lens could have produced may be PUT.
  with pytest.raises(StructuralError) :
    lens.put([Node("Size", "3")])
  with pytest.raises(StructuralError) :
    lens.put([Node("size")])
  with pytest.raises(StructuralError) :
    lens.put([])


def nested_subtree_test() :
  member = Subtree(Label("member") + Store("[a-z]+"))
  lens = Subtree(Label("group") + "(" + member + ZeroOrMore("," + member) + ")")

  d("GET")
  group = lens.get("(a,b,c)")[0]
  assert(group == Node("group", None, [Node("member", "a"), Node("member", "b"), Node("member", "c")]))

  d("PUT")
  group.append(Node("member", "d"))
  assert(lens.put([group]) == "(a,b,c,d)")

  # A child the lens has no place for.
  group.append(Node("leader", "e"))
  with pytest.raises(StructuralError) :
    lens.put([group])


def label_and_key_test() :
  assert(Key("[a-z]+").matches_label("state"))
  assert(not Key("[a-z]+").matches_label("state2"))
  assert(Label("ipaddr").matches_label("ipaddr"))
  assert(not Label("ipaddr").matches_label("ip"))

  lens = Subtree(Label("ipaddr") + Store("[0-9.]+"))
  assert(lens.can_put(Node("ipaddr", "10.0.0.1")))
  assert(not lens.can_put(Node("ipaddr")))
  assert(not lens.can_put(Node("route", "10.0.0.1")))
  # The label of a nested node is not that of its parent.
  assert(not Subtree(Label("a") + lens).can_put(Node("ipaddr")))


def and_test() :
  lens = Literal("a") + "b" + ("c" + Literal("d"))
  # Nested Ands are flattened.
  assert(len(lens.lenses) == 4)
  assert(lens.get("abcd") == [])
  with pytest.raises(LensException) :
    lens.get("abxd")
  assert(lens.put() == "abcd")


def or_test() :
  number = Subtree(Label("number") + Store("[0-9]+"))
  word = Subtree(Label("word") + Store("[a-z]+"))
  lens = number | word
  assert(len(lens.lenses) == 2)

  d("GET")
  assert(lens.get("abc") == [Node("word", "abc")])
  assert(lens.get("123") == [Node("number", "123")])
  with pytest.raises(LensException) :
    lens.get("_")

  d("PUT")
  # The node decides the alternative, not the order.
  assert(lens.put([Node("word", "xyz")]) == "xyz")
  assert(lens.put([Node("number", "7")], "abc") == "7")

  # Without nodes, the alternative used by the original is kept.
  lens = Del("-+", "-") | Del("=+", "=")
  assert(lens.put(None, "==") == "==")
  assert(lens.put(None, "--") == "--")
  assert(lens.put() == "-")


def guarded_or_test() :
  anything = Subtree(Label("text") + Store(r"[^\n]+"))

  # Unguarded, a failed alternative is rolled back and the next tried.
  pair = Subtree(Label("pair") + "(" + Store("[0-9]+") + ")")
  lens = pair | anything
  assert(lens.get("(1)") == [Node("pair", "1")])
  assert(lens.get("(x)") == [Node("text", "(x)")])

  # Once its guard matches, an alternative is committed to and its failure
  # is reported where it lies.
  pair = Subtree(Label("pair") + "(" + Store("[0-9]+") + ")", guard=r"\(")
  lens = pair | anything
  assert(lens.get("(1)") == [Node("pair", "1")])
  assert(lens.get("x)") == [Node("text", "x)")])
  with pytest.raises(ParseError) as excinfo :
    lens.get("(x)")
  assert((excinfo.value.offset, excinfo.value.line, excinfo.value.column) == (1, 1, 2))
  assert(excinfo.value.lens.startswith("Store("))


def optional_test() :
  lens = Subtree(Label("ipaddr") + Store("[0-9.]+") + Optional(Subtree(Label("prefixlen") + "/" + Store("[0-9]+"))))

  d("GET")
  assert(lens.get("10.0.0.1/8") == [Node("ipaddr", "10.0.0.1", [Node("prefixlen", "8")])])
  assert(lens.get("10.0.0.1") == [Node("ipaddr", "10.0.0.1")])

  d("PUT")
  assert(lens.put([Node("ipaddr", "10.0.0.2", [Node("prefixlen", "16")])]) == "10.0.0.2/16")
  assert(lens.put([Node("ipaddr", "10.0.0.2")]) == "10.0.0.2")

  # A text-only optional is kept only if the original had it.
  lens = Literal("a") + Optional(Del(";", ";"))
  assert(lens.put(None, "a;") == "a;")
  assert(lens.put(None, "a") == "a")


def repeat_test() :
  item = Subtree(Label("item") + Store("[0-9]+") + Del(";", ";"))
  lens = ZeroOrMore(Del(" +", " ") | item)

  d("GET")
  tree = get("1; 2;  3;", lens)
  assert(tree == [Node("item", "1"), Node("item", "2"), Node("item", "3")])

  d("PUT")
  # Unchanged.
  assert(put(tree, lens=lens) == "1; 2;  3;")

  # The spacing before a node stays with it.
  tree[1].value = "5"
  assert(put(tree, lens=lens) == "1; 5;  3;")
  tree.append(tree.pop(0))
  assert(put(tree, lens=lens) == " 5;  3;1;")
  del tree[1]
  assert(put(tree, lens=lens) == " 5;1;")
  tree.append(Node("item", "4"))
  assert(put(tree, lens=lens) == " 5;1;4;")

  # Created from scratch.
  assert(put([Node("item", "8"), Node("item", "9")], lens=lens) == "8;9;")


def repeat_counts_test() :
  item = Subtree(Label("item") + Store("[a-z]"))
  lens = Repeat(item, min_count=2, max_count=3)

  d("GET")
  assert(len(lens.get("abcd")) == 3)
  with pytest.raises(TooFewIterationsException) :
    lens.get("a1")

  d("PUT")
  assert(lens.put([Node("item", "x"), Node("item", "y")]) == "xy")
  with pytest.raises(StructuralError) :
    lens.put([Node("item", "x")])

  # The last of four nodes is left for some other lens.
  with pytest.raises(StructuralError) :
    put([Node("item", c) for c in "wxyz"], lens=lens)


def repeat_termination_test() :
  # An iteration matching nothing ends the repetition rather than spinning.
  lens = ZeroOrMore(Optional(Literal("a")))
  assert(lens.get("aab") == [])
  with pytest.raises(ParseError) as excinfo :
    get("aab", lens)
  assert(excinfo.value.offset == 2)

  # A text-only repetition weaves back the original.
  lens = ZeroOrMore(Del(" ", " "))
  assert(lens.put(None, "   ") == "   ")
  assert(lens.put() == "")


def repeat_line_end_test() :
  line = Subtree(Label("line") + Store("[a-z]+") + Del(r"\n|\Z", "\n"))
  lens = ZeroOrMore(line, line_end="\n")
  tree = get("a\nb", lens)
  assert(put(tree, lens=lens) == "a\nb")
  tree.append(Node("line", "c"))
  assert(put(tree, lens=lens) == "a\nb\nc\n")


def get_test() :
  lens = ZeroOrMore(Subtree(Key("[a-z]+") + "=" + Store("[0-9]+") + Del("\n", "\n")))
  tree = get("a=1\nb=2\n", lens)
  assert(isinstance(tree, Tree))
  assert(tree.source == "a=1\nb=2\n")
  assert(tree.provenance[tree[1].id].start == 4)
  assert(tree.provenance[tree[1].id].end == 8)

  # The whole input must be matched.
  with pytest.raises(ParseError) as excinfo :
    get("a=1\nb=x\n", lens)
  assert((excinfo.value.line, excinfo.value.column) == (2, 3))


def put_test() :
  lens = ZeroOrMore(Subtree(Key("[a-z]+") + Del(" *= *", "=") + Store("[0-9]+") + Del("\n", "\n")))
  text = "a = 1\nb = 2\n"
  tree = get(text, lens)

  # Unchanged nodes are reproduced verbatim; a changed node keeps its
  # separators.
  tree[1].value = "3"
  assert(put(tree, text, lens) == "a = 1\nb = 3\n")

  # A tree is only woven into the string it was GOT from.
  assert(put(tree, "c=4\n", lens) == "a=1\nb=3\n")
  assert(put(list(tree), lens=lens) == "a=1\nb=3\n")

  with pytest.raises(StructuralError) :
    put([Node("A", "1")], lens=lens)
