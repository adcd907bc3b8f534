'''
### Envelope Module

This module defines the `Envelope` class, which represents an EnvelopePoint array in a
soundfont.

Classes:
    `Envelope`:
        Represents a single EnvelopePoint array.

Functionality:
    - Read an envelope from its `<Envelope>` element ('from_xml').
    - Emit the envelope as C ('to_c'), terminated by an implicit HANG command.

Intended Usage:
    Envelopes are read before anything else so instruments and drums can resolve them by name.
'''

from ...Enums import EnvelopeOpcodes
from ...Errors import MalformedInputError
from ...XMLParser import AttrSpec, parse_by_spec, parse_c_identifier, parse_u8, parse_s16

ENVELOPE_SPEC = (
  AttrSpec('Name',    False, parse_c_identifier, 'name'),
  AttrSpec('Release', False, parse_u8,           'release'),
)

POINT_SPEC = (
  AttrSpec('Delay', False, parse_s16, 'delay'),
  AttrSpec('Arg',   False, parse_s16, 'arg'),
)

GOTO_SPEC = (
  AttrSpec('Index', False, parse_s16, 'arg'),
)

# Commands without arguments
COMMANDS = {
  'Disable': EnvelopeOpcodes.DISABLE,
  'Restart': EnvelopeOpcodes.RESTART,
  'Hang':    EnvelopeOpcodes.HANG,
}

class Envelope:
  ''' Represents an array of EnvelopePoints '''
  def __init__(self):
    self.name: str | None = None # None for empty envelopes
    self.line = 0

    self.release = 0

    # EnvelopePoint array of (delay, arg)
    self.points: list[tuple[int, int]] = []

  @property
  def is_empty(self) -> bool:
    return self.name is None

  @classmethod
  def from_xml(cls, node):
    self = cls()
    self.line = node.line

    if node.is_empty:
      # <Envelope/>, emitted as 16 zero bytes when matching
      return self

    data = parse_by_spec(node, ENVELOPE_SPEC)
    self.name = data['name']
    self.release = data['release']

    for point in node.children:
      if point.tag == 'Point':
        data = parse_by_spec(point, POINT_SPEC)
        self.points.append((data['delay'], data['arg']))
      elif point.tag == 'Goto':
        data = parse_by_spec(point, GOTO_SPEC)
        self.points.append((EnvelopeOpcodes.GOTO, data['arg']))
      elif point.tag in COMMANDS:
        parse_by_spec(point, ())
        self.points.append((COMMANDS[point.tag], 0))
      else:
        raise MalformedInputError(f'Unexpected element node {point.tag} in envelope definition', point.line)

    return self

  @property
  def struct_size(self) -> int:
    if self.is_empty:
      return 0x10
    return 4 * (len(self.points) + 1) # + HANG

  def to_c(self, sf_index: int, empty_index: int = 0) -> str:
    if self.is_empty:
      return (
        f'NO_REORDER DATA EnvelopePoint SF{sf_index}_ENV_EMPTY_{empty_index}[] = {{\n'
        '    { 0, 0, },\n'
        '    { 0, 0, },\n'
        '    { 0, 0, },\n'
        '    { 0, 0, },\n'
        '};\n'
      )

    lines = [f'NO_REORDER DATA EnvelopePoint SF{sf_index}_{self.name}[] = {{']

    for delay, arg in self.points:
      if delay == EnvelopeOpcodes.DISABLE:
        lines.append('    ENVELOPE_DISABLE(),')
      elif delay == EnvelopeOpcodes.GOTO:
        lines.append(f'    ENVELOPE_GOTO({arg}),')
      elif delay == EnvelopeOpcodes.HANG:
        lines.append('    ENVELOPE_HANG(),')
      elif delay == EnvelopeOpcodes.RESTART:
        lines.append('    ENVELOPE_RESTART(),')
      else:
        lines.append(f'    ENVELOPE_POINT({delay:5d}, {arg:5d}),')

    # Automatically add a HANG command at the end
    lines.append('    ENVELOPE_HANG(),')
    lines.append('};')
    return '\n'.join(lines) + '\n'

if __name__ == '__main__':
  pass
