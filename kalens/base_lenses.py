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
#

"""Contains base lenses, from which all other lenses are derived."""

from .debug import *
from .exceptions import *
from .util import *
from .rollback import *
from .readers import *
from .containers import *
from .tree import *


#########################################################
# Base Lens
#########################################################

class Lens(object) :
  """Base lens, which handles most of the complexity."""

  def __init__(self, name=None, default=None, guard=None) :
    # For debugging purposes, allow a friendly name to be given to the lens,
    # otherwise an automated name will be displayed (e.g. "And(106)")
    self.name = name

    # The default output of this lens in the PUT direction, used when there is
    # no concrete input to weave from (i.e. when CREATING).
    self.default = default

    # A regex that, when it matches at the current position, commits an Or
    # to this lens: if the lens then fails, there is no point trying the
    # other alternatives, since the input is simply wrong.
    self.guard = has_value(guard) and compile_pattern(guard) or None

    # Composite lenses will store their sub-lenses in here, for consistency,
    # and to allow for some reasonning about a lens' structure (e.g. which
    # nodes it may PUT).
    self.lenses = []


  def get(self, concrete_input, current_container=None) :
    """
    The top-level API function to extract nodes from a given string with
    this lens.

    Arguments:
      concrete_input - concrete string or stateful concrete input reader
      current_container - outer container into which nodes (or the label and
      value of the enclosing node) are being extracted

    Returns the list of nodes this lens added to the container.

    This effectively wraps the _get function (GET proper) of the specific
    lens, handling the common tasks (e.g. input normalisation and noting
    where the lens failed, for error reporting).
    """
    concrete_input_reader = self._normalise_concrete_input(concrete_input)
    assert_msg(has_value(concrete_input_reader), "Cannot GET if there is no input string!")
    if not has_value(current_container) :
      current_container = NodeContainer()

    if IN_DEBUG_MODE :
      d("Initial state: in={concrete_input_reader}, cont={current_container}".format(
        concrete_input_reader = concrete_input_reader,
        current_container = current_container,
      ))

    # Remember where we started, so failures can be located.
    concrete_start_position = concrete_input_reader.get_pos()
    no_children = len(current_container.children)

    try :
      self._get(concrete_input_reader, current_container)
    except LensException :
      concrete_input_reader.note_failure(self, concrete_start_position)
      raise

    nodes = current_container.children[no_children:]
    if IN_DEBUG_MODE :
      d("GOT: %s" % (nodes or "NOTHING"))
    return nodes


  def put(self, context=None, concrete_input=None) :
    """
    The top-level API function to PUT nodes back into a string.

    Arguments:
      context - a PutContext holding the node being PUT and a cursor over its
      children (a node or list of nodes is wrapped in one, for convenience)
      concrete_input - concrete input for weaving between STORE lens values,
      or None if we are CREATING.

    Note that we make no distinction between PUT and CREATE (from the
    literature): a node that was previously GOT carries its provenance,
    which Subtree uses to find its original string; otherwise, default
    artifacts will be used (as in CREATE).
    """
    context = self._normalise_context(context)
    concrete_input_reader = self._normalise_concrete_input(concrete_input)

    if IN_DEBUG_MODE :
      d("Initial state: context={context}, in={concrete_input_reader}".format(
        context = context,
        concrete_input_reader = concrete_input_reader,
      ))

    # Use default (for CREATE), if we are not to PUT any nodes.
    if not has_value(concrete_input_reader) and has_value(self.default) and not self.produces_nodes() :
      output = str(self.default)
    else :
      output = self._put(context, concrete_input_reader)

    if IN_DEBUG_MODE :
      d("PUT: '%s'" % escape_for_display(output))
    return output


  def get_and_discard(self, concrete_input_reader) :
    """
    Sometimes we wish to consume input but discard any nodes GOTten, for
    example to keep the outer concrete reader aligned whilst a node is PUT
    from its own original string.  Returns whether anything matched.
    """
    try :
      with automatic_rollback(concrete_input_reader) :
        self.get(concrete_input_reader, NodeContainer())
      return True
    except LensException :
      return False

  def matches_at(self, concrete_input_reader) :
    """Tests if this lens could GET from the reader's position, consuming nothing."""
    start_position = concrete_input_reader.get_pos()
    matched = self.get_and_discard(concrete_input_reader)
    concrete_input_reader.set_pos(start_position)
    return matched


  #
  # Reasoning about the lens structure, for PUT.  Node-level questions
  # (produces_nodes, can_put) concern Subtree lenses; label/value questions
  # concern the lenses within a single Subtree.
  #

  def produces_nodes(self) :
    """Determines if this lens will GET and PUT nodes (i.e. contains a Subtree)."""
    return any(lens.produces_nodes() for lens in self.lenses)

  def can_put(self, node) :
    """Determines if this lens could PUT the given node next."""
    return False

  def is_nullable(self) :
    """Determines if this lens may match nothing at all."""
    return False

  def stores_value(self) :
    """Determines if this lens sets the value of its enclosing node."""
    return any(lens.stores_value() for lens in self.lenses)

  def matches_label(self, label) :
    """Determines if this lens could have set the label of its enclosing node."""
    return any(lens.matches_label(label) for lens in self.lenses)


  def set_sublens(self, sublens) :
    """Used if only a single sublens is required."""
    self.lenses = [self._preprocess_lens(sublens)]

  def extend_sublenses(self, new_sublenses) :
    """
    Adds new sublenses to this lens, being sure to preprocess them (e.g. convert
    strings to Literal lenses, etc.).
    """
    for new_sublens in new_sublenses :
      self.lenses.append(self._preprocess_lens(new_sublens))

  #
  # Helper methods.
  #

  def _normalise_concrete_input(self, concrete_input) :
    """If a string is passed, ensure it is normalised to a ConcreteInputReader."""
    if not has_value(concrete_input) :
      return None

    if isinstance(concrete_input, str) :
      concrete_input = ConcreteInputReader(concrete_input)

    assert_msg(isinstance(concrete_input, ConcreteInputReader), "Expected to have a ConcreteInputReader not a %s" % type(concrete_input))
    return concrete_input

  def _normalise_context(self, context) :
    """Wraps a node, or list of nodes, in a PutContext, for convenience."""
    if isinstance(context, PutContext) :
      return context
    if not has_value(context) :
      return PutContext()
    if isinstance(context, Node) :
      return PutContext(children=[context])
    return PutContext(children=context)

  @staticmethod
  def _coerce_to_lens(lens_operand):
    """
    Intelligently converts a type to a lens (e.g. string instance to a Literal
    lens) to ease lens definition.
    """
    if isinstance(lens_operand, str) :
      lens_operand = Literal(lens_operand)

    assert_msg(isinstance(lens_operand, Lens), "Unable to coerce %s to a lens" % lens_operand)
    return lens_operand

  def _preprocess_lens(self, lens) :
    """
    Preprocesses a lens to enable type-to-lens conversion. This will be
    called before processing lens arguments.
    """
    return Lens._coerce_to_lens(lens)


  #
  # Operator overloads to make for cleaner lens construction.
  #

  def __add__(self, other_lens): return And(self, self._preprocess_lens(other_lens))
  def __or__(self, other_lens): return Or(self, self._preprocess_lens(other_lens))

  # Reflected operators, so we can write: lens = "a string" + <some_lens>
  def __radd__(self, other_lens): return And(self._preprocess_lens(other_lens), self)
  def __ror__(self, other_lens): return Or(self._preprocess_lens(other_lens), self)


  #
  # Specialised lenses must override these to implement their GET and PUT
  # proper.
  #

  def _get(self, concrete_input_reader, current_container) :
    """GET proper for a specific lens."""
    raise NotImplementedError("")

  def _put(self, context, concrete_input_reader) :
    """
    PUT proper for a specific lens.

    Note, a lens that consumes input should do so from the
    concrete_input_reader, if there is one, so that the lenses after it stay
    aligned with the original string.
    """
    raise NotImplementedError("")


  #
  # For debugging
  #

  def _display_id(self) :
    """Useful for identifying specific lenses in debug traces."""
    # If we have a specic name, use it.
    if self.name :
      return self.name

    # If no name, a hash with small range gives us a reasonably easy way to
    # distinguish lenses in debug traces.
    return str(hash(self) % 256)

  # String representation.
  def __str__(self) :
    # Bolt on the class name, to ease debugging.
    return "%s(%s)" % (self.__class__.__name__, self._display_id())
  __repr__ = __str__



#########################################################
# Core lenses - required fundamental lenses.
#########################################################

class And(Lens) :
  """A lens that is formed from the ANDing of two sub-lenses."""

  def __init__(self, *lenses, **kargs):

    # Must always remember to invoke the parent lens, so it can initialise
    # common arguments.
    super(And, self).__init__(**kargs)

    # Flatten sub-lenses that are also Ands, so we don't have too much nesting,
    # which makes debugging lenses a nightmare.
    for lens in lenses :
      # Note, isinstance would be too vague - a subclass may behave differently.
      if lens.__class__ == self.__class__ and not has_value(lens.guard) :
        self.extend_sublenses(lens.lenses)
      else :
        self.extend_sublenses([lens])


  def _get(self, concrete_input_reader, current_container) :
    """Sequential GET on each lens."""
    for lens in self.lenses :
      lens.get(concrete_input_reader, current_container)

  def _put(self, context, concrete_input_reader) :
    """Sequential PUT on each lens."""
    # Simply concatenate output from the sub-lenses, which all consume from
    # the same concrete reader and node cursor.
    output = ""
    for lens in self.lenses :
      output += lens.put(context, concrete_input_reader)
    return output

  def is_nullable(self) :
    return all(lens.is_nullable() for lens in self.lenses)

  def can_put(self, node) :
    # The first sub-lens that must PUT a node decides.
    for lens in self.lenses :
      if not lens.produces_nodes() :
        continue
      if lens.can_put(node) :
        return True
      if not lens.is_nullable() :
        return False
    return False


class Or(Lens) :
  """
  This is the OR of two lenses, an ordered alternation: the first
  alternative that matches wins, so the lens should be designed accordingly
  to break ties over multiple valid paths.

  Each alternative is effectively a (predicate, lens) pair: if the
  alternative has a guard, the guard is the predicate and, once it matches,
  we are committed to that alternative, which never backtracks; otherwise
  the alternative is tried tentatively and rolled back if it fails.
  """

  def __init__(self, *lenses, **kargs):
    super(Or, self).__init__(**kargs)

    # Flatten sub-lenses that are also Ors, so we don't have too much nesting, which makes debugging lenses a nightmare.
    for lens in lenses :
      # Note, isinstance would be too vague - see my note in And.
      if lens.__class__ == self.__class__ and not has_value(lens.guard) :
        self.extend_sublenses(lens.lenses)
      else :
        self.extend_sublenses([lens])


  def _get(self, concrete_input_reader, current_container) :
    """Calls get on each lens until the firstmost succeeds."""
    for lens in self.lenses :

      # A guarded lens is committed to once its guard matches, so its failure
      # is reported rather than masked by trying the other lenses.
      if has_value(lens.guard) :
        if not concrete_input_reader.peek_match(lens.guard) :
          continue
        try :
          lens.get(concrete_input_reader, current_container)
        except LensException :
          raise concrete_input_reader.parse_error()
        return

      try :
        with automatic_rollback(concrete_input_reader, current_container) :
          lens.get(concrete_input_reader, current_container)
        return
      except LensException:
        pass

    raise LensException("We should have GOT one of the lenses %s." % self._display_id())


  def _put(self, context, concrete_input_reader) :
    """
    Rather than re-trying the alternatives in order, we dispatch on the node
    to be PUT: the first alternative that could have produced it PUTs it.
    If no node is for us, we weave a node-free alternative, preferring the
    one the original string used.
    """
    node = context.cursor.peek()
    if has_value(node) :
      for lens in self.lenses :
        if not (lens.produces_nodes() and lens.can_put(node)) :
          continue
        if has_value(concrete_input_reader) :
          # If the original used this alternative here, weave from it.
          if lens.matches_at(concrete_input_reader) :
            return lens.put(context, concrete_input_reader)
          # Otherwise, keep the outer reader aligned and CREATE.
          self.get_and_discard(concrete_input_reader)
        return lens.put(context, None)

    # Weave the alternative the original used, unless it held a node that has
    # since been removed, in which case we skip over it and CREATE.
    if has_value(concrete_input_reader) :
      for lens in self.lenses :
        if not lens.matches_at(concrete_input_reader) :
          continue
        if lens.produces_nodes() :
          lens.get_and_discard(concrete_input_reader)
          break
        return lens.put(context, concrete_input_reader)

    for lens in [lens for lens in self.lenses if not lens.produces_nodes()] :
      try :
        return lens.put(context, None)
      except NoDefaultException :
        pass

    raise StructuralError("None of the lenses %s could PUT %r." % (self._display_id(), node), node)

  def is_nullable(self) :
    return any(lens.is_nullable() for lens in self.lenses)

  def can_put(self, node) :
    return any(lens.can_put(node) for lens in self.lenses)

  def _display_id(self) :
    """For debugging clarity."""
    if self.name :
      return self.name
    display_id = " | ".join([str(lens) for lens in self.lenses])
    return truncate(display_id, 60)


class Repeat(Lens) :
  """
  Applies a repetition of the givien lens (i.e. kleene-star).
  """

  def __init__(self, lens, min_count=1, max_count=None, line_end=None, **kargs):
    """
    Arguments:
      lens - the lens to repeat
      min_count - the min repetitions
      max_count - maximum repetitions (must be > 0 if set)
      line_end - if set, PUT ensures each repetition is separated from the
      next by this string, which matters only when an original repetition
      (e.g. the last line of a file) lacked one.
    """
    super(Repeat, self).__init__(**kargs)
    assert(min_count >= 0)
    if has_value(max_count) :
      assert(max_count > 0 and max_count >= min_count)

    self.min_count, self.max_count = min_count, max_count
    self.line_end = line_end
    self.extend_sublenses([lens])


  def _get(self, concrete_input_reader, current_container) :
    """Calls a sequence of GETs on the sub-lens."""

    # Algorithm
    #
    # Loop until max count reached or lens fails.  An iteration that consumes
    # no input could happen indefinitely, so it is rolled back and ends the
    # loop (the grammar should be redesigned if this matters).

    # For brevity.
    lens = self.lenses[0]

    # For tracking how many successful GETs
    no_got = 0

    while not (has_value(self.max_count) and no_got == self.max_count) :
      start_position = concrete_input_reader.get_pos()
      try :
        with automatic_rollback(concrete_input_reader, current_container) :
          lens.get(concrete_input_reader, current_container)
          if concrete_input_reader.get_pos() == start_position :
            if IN_DEBUG_MODE :
              d("Lens %s consumed nothing during this iteration, so we must break out - or spin for ever" % lens)
            raise LensException("%s matched the empty string." % lens)
      except LensException :
        break
      no_got += 1

    if no_got < self.min_count :
      raise TooFewIterationsException("Expected at least %s successful GETs but got only %s" % (self.min_count, no_got))


  def _put(self, context, concrete_input_reader) :
    """Calls a sequence of PUTs on the sub-lens."""

    # Algorithm
    #
    # - If the sub-lens does not PUT nodes, all we can do is weave in what the
    # original had.
    # - Otherwise, we first GET through the original repetitions to leave the
    # outer reader aligned after them, noting the string of those that
    # produced no node (e.g. blank lines) against the node that followed
    # them.
    # - Then we PUT each node the sub-lens accepts, in tree order.  Each
    # Subtree finds its own original, so we pass no concrete reader, and
    # re-emit the residue that preceded the node originally.
    # - Finally, we emit any residue after the last original node.

    # For brevity.
    lens = self.lenses[0]

    if not self.produces_nodes() :
      if has_value(concrete_input_reader) :
        start_position = concrete_input_reader.get_pos()
        if self.get_and_discard(concrete_input_reader) :
          return concrete_input_reader.get_consumed_string(start_position)
      if self.min_count == 0 :
        return ""
      raise NoDefaultException("Cannot CREATE: a default should have been set on lens %s, or a higher lens." % self)

    residue, trailing_residue = {}, ""
    if has_value(concrete_input_reader) :
      residue, trailing_residue = self._get_residue(concrete_input_reader)

    output = ""
    no_put = 0
    while not (has_value(self.max_count) and no_put == self.max_count) :
      node = context.cursor.peek()
      if not (has_value(node) and lens.can_put(node)) :
        break
      span = context.get_span(node)
      piece = has_value(span) and residue.pop(span.start, "") or ""
      piece += lens.put(context, None)
      output = self._join(output, piece)
      no_put += 1

    if no_put < self.min_count :
      raise StructuralError("Expected at least %s nodes for %s but PUT only %s" % (self.min_count, self, no_put), context.cursor.peek())

    return self._join(output, trailing_residue)


  def _get_residue(self, concrete_input_reader) :
    """
    Consumes the original repetitions, returning the string of those that
    produced no node, keyed by the start position of the node that followed
    them, and that of any after the last node.
    """
    lens = self.lenses[0]
    residue, pending = {}, ""
    while True :
      start_position = concrete_input_reader.get_pos()
      container = NodeContainer()
      try :
        with automatic_rollback(concrete_input_reader) :
          lens.get(concrete_input_reader, container)
      except LensException :
        break
      if concrete_input_reader.get_pos() == start_position :
        break

      if container.children :
        first_node = container.children[0]
        residue[concrete_input_reader.provenance[first_node.id].start] = pending
        pending = ""
      else :
        pending += concrete_input_reader.get_consumed_string(start_position)

    return residue, pending

  def _join(self, output, piece) :
    if self.line_end and output and piece and not output.endswith(self.line_end) :
      output += self.line_end
    return output + piece

  def is_nullable(self) :
    return self.min_count == 0

  def can_put(self, node) :
    return self.lenses[0].can_put(node)


class Empty(Lens) :
  """
  Matches the empty string, used by Optional().
  """

  def __init__(self, **kargs):
    super(Empty, self).__init__(**kargs)
    self.default = ""

  def _get(self, concrete_input_reader, current_container) :
    pass

  def _put(self, context, concrete_input_reader) :
    # Here goes nothing!
    return ""

  def is_nullable(self) :
    return True


class Literal(Lens) :
  """
  A lens that deals with a constant string (i.e. delete-literal): it is
  always PUT as is.
  """

  def __init__(self, literal_string, **kargs):
    assert(isinstance(literal_string, str) and len(literal_string) > 0)
    super(Literal, self).__init__(**kargs)
    self.literal_string = literal_string
    self.default = self.literal_string

  def _get(self, concrete_input_reader, current_container) :
    start_position = concrete_input_reader.get_pos()
    try:
      input_string = concrete_input_reader.consume_string(len(self.literal_string))
    except EndOfStringException:
      raise LensException("Expected literal '%s' but at end of string." % (escape_for_display(self.literal_string)))
    if input_string != self.literal_string :
      # Leave the reader where the mismatch is, for error reporting.
      concrete_input_reader.set_pos(start_position)
      raise LensException("Expected the literal '%s' but got '%s'." % (escape_for_display(self.literal_string), escape_for_display(input_string)))

  def _put(self, context, concrete_input_reader) :
    # Keep the reader aligned, if it holds our literal.
    if has_value(concrete_input_reader) :
      self.get_and_discard(concrete_input_reader)
    return self.literal_string

  def _display_id(self) :
    """To aid debugging."""
    if self.name :
      return self.name
    return "'%s'" % escape_for_display(self.literal_string)


class PatternLens(Lens) :
  """Base for lenses that consume a match of a regular expression."""

  def __init__(self, pattern, **kargs):
    super(PatternLens, self).__init__(**kargs)
    self.regex = compile_pattern(pattern)

  def _consume(self, concrete_input_reader) :
    matched_string = concrete_input_reader.consume_match(self.regex)
    if not has_value(matched_string) :
      raise LensException("Expected to match /%s/ but got '%s'" % (self.regex.pattern, truncate(concrete_input_reader.get_remaining())))
    return matched_string

  def _display_id(self) :
    if self.name :
      return self.name
    return "/%s/" % truncate(self.regex.pattern, 20)


class Del(PatternLens) :
  """
  Consumes a match of the pattern but stores nothing (i.e. delete-by-pattern).
  In PUT, it re-emits what it consumed from the original string, if it is
  aligned with us, otherwise the default.
  """

  def __init__(self, pattern, default=None, **kargs):
    kargs["default"] = default
    super(Del, self).__init__(pattern, **kargs)

  def _get(self, concrete_input_reader, current_container) :
    self._consume(concrete_input_reader)

  def _put(self, context, concrete_input_reader) :
    if has_value(concrete_input_reader) :
      matched_string = concrete_input_reader.consume_match(self.regex)
      if has_value(matched_string) :
        return matched_string
    if not has_value(self.default) :
      raise NoDefaultException("Cannot CREATE: a default should have been set on lens %s, or a higher lens." % self)
    return self.default


class Store(PatternLens) :
  """
  Stores a match of the pattern as the value of the enclosing node.  The
  value is PUT as is: it is up to the user to keep an edited value valid.
  """

  def _get(self, concrete_input_reader, current_container) :
    current_container.set_value(self._consume(concrete_input_reader))

  def _put(self, context, concrete_input_reader) :
    # If this is PUT (vs CREATE) then first consume input.
    if has_value(concrete_input_reader) :
      concrete_input_reader.consume_match(self.regex)
    value = None
    if has_value(context.node) :
      value = context.node.value
    if not has_value(value) :
      raise StructuralError("%s expected the node %r to have a value." % (self, context.node), context.node)
    return str(value)

  def stores_value(self) :
    return True


class Key(PatternLens) :
  """Matches a token and uses it as the label of the enclosing node."""

  def _get(self, concrete_input_reader, current_container) :
    current_container.set_label(self._consume(concrete_input_reader))

  def _put(self, context, concrete_input_reader) :
    if has_value(concrete_input_reader) :
      concrete_input_reader.consume_match(self.regex)
    return context.node.label

  def matches_label(self, label) :
    return isinstance(label, str) and self.regex.fullmatch(label) is not None


class Label(Lens) :
  """Sets a fixed label on the enclosing node, without consuming any input."""

  def __init__(self, label, **kargs):
    super(Label, self).__init__(**kargs)
    self.label = label

  def _get(self, concrete_input_reader, current_container) :
    current_container.set_label(self.label)

  def _put(self, context, concrete_input_reader) :
    return ""

  def is_nullable(self) :
    return True

  def matches_label(self, label) :
    return label == self.label

  def _display_id(self) :
    if self.name :
      return self.name
    return "'%s'" % self.label


class Subtree(Lens) :
  """
  Creates a node from whatever label, value and child nodes the sub-lens
  GETs, and appends it to the enclosing container.  In PUT, takes the next
  node from the enclosing context's cursor.
  """

  def __init__(self, lens, **kargs):
    super(Subtree, self).__init__(**kargs)
    self.set_sublens(lens)

  def _get(self, concrete_input_reader, current_container) :
    start_position = concrete_input_reader.get_pos()
    node_container = NodeContainer()
    self.lenses[0].get(concrete_input_reader, node_container)
    node = node_container.to_node(self)

    # Give the node a lifeline back to where it came from.
    concrete_input_reader.record_span(node, start_position)
    current_container.store_node(node)


  def _put(self, context, concrete_input_reader) :

    # Algorithm
    #
    # Consume our original from the outer reader, if there is one, to keep
    # it aligned, since we will PUT from the node's own original.
    # if the node is unchanged since it was GOT
    #   return its original string verbatim
    # otherwise PUT it with the sub-lens, reading from its original string,
    # if it has one (to weave back separators, etc.), else CREATING.

    if has_value(concrete_input_reader) :
      self.get_and_discard(concrete_input_reader)

    node = context.cursor.peek()
    if not (has_value(node) and self.can_put(node)) :
      raise StructuralError("%s expected a node it could PUT but found %r." % (self, node), node)
    context.cursor.consume()

    span = context.get_span(node)
    if context.is_unchanged(node) :
      if IN_DEBUG_MODE :
        d("Node %s unchanged, so reusing its original string." % node.label)
      return context.source[span.start:span.end]

    node_input_reader = has_value(span) and ConcreteInputReader(context.source, span.start) or None
    node_context = context.create_child(node)
    output = self.lenses[0].put(node_context, node_input_reader)

    if not node_context.cursor.is_fully_consumed() :
      child = node_context.cursor.peek()
      raise StructuralError("The node %r has a child %r that does not fit %s." % (node.label, child, self), child)

    return output

  def produces_nodes(self) :
    return True

  def can_put(self, node) :
    sublens = self.lenses[0]
    return sublens.matches_label(node.label) and has_value(node.value) == sublens.stores_value()

  # The label and value of our node are not those of the enclosing node.
  def stores_value(self) :
    return False

  def matches_label(self, label) :
    return False
