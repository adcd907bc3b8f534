'''
### Drum Module

This module defines the `Drum` class, which represents a drum group in a soundfont. A drum
group covers a contiguous semitone range of the drum pointer table, with one drum structure
per semitone whose tuning rises by one note each step.

Classes:
    `Drum`:
        Represents a single drum group.

Functionality:
    - Read a drum group from its `<Drum>` element ('from_xml').
    - Expand the group into per-semitone entries ('entries').
    - Emit the entry macro and the drum array as C ('to_c').
'''

from ...Errors import SemanticError
from ...Tuning import calc_tuning, wrap_note, z64_note_name
from ...XMLParser import AttrSpec, parse_by_spec, parse_c_identifier, parse_int, parse_u8, parse_note_number, parse_double

# The audio driver's drum pointer table holds 64 semitones
MAX_DRUM_SEMITONES: int = 64

F32_FMT: str = '%.22f'

DRUM_SPEC = (
  AttrSpec('Name',          False, parse_c_identifier, 'name'),
  AttrSpec('Semitone',      True,  parse_note_number,  'semitone'),
  AttrSpec('SemitoneStart', True,  parse_note_number,  'semitone_start'),
  AttrSpec('SemitoneEnd',   True,  parse_note_number,  'semitone_end'),
  AttrSpec('Pan',           False, parse_int,          'pan'),
  AttrSpec('Envelope',      False, parse_c_identifier, 'envelope_name'),
  AttrSpec('Release',       True,  parse_u8,           'release'),
  AttrSpec('Sample',        False, parse_c_identifier, 'sample_name'),
  AttrSpec('SampleRate',    True,  parse_double,       'sample_rate'),
  AttrSpec('BaseNote',      True,  parse_note_number,  'base_note'),
)

class Drum: # struct size = 0x10 per semitone
  ''' Represents a drum group in a soundfont '''
  def __init__(self):
    self.name: str | None = None # None for <Drum/>
    self.line = 0

    self.semitone_start = 0
    self.semitone_end   = 0
    self.pan = 64

    self.envelope_name = None
    self.envelope = None
    self.release = 0

    self.sample = None
    self.sample_rate = 0.0
    self.base_note = 0

  @property
  def is_placeholder(self) -> bool:
    return self.name is None

  @property
  def length(self) -> int:
    return self.semitone_end - self.semitone_start + 1

  @classmethod
  def from_xml(cls, node, envelope_registry, sample_registry):
    self = cls()
    self.line = node.line

    if not node.has_attributes:
      return self

    data = parse_by_spec(node, DRUM_SPEC)
    self.name = data['name']
    self.pan  = data['pan']

    self.envelope_name = data['envelope_name']
    self.envelope = envelope_registry.lookup(self.envelope_name)
    if self.envelope is None:
      raise SemanticError(f'Bad envelope name {self.envelope_name}', node.line)

    self.release = data.get('release', self.envelope.release)

    if 'semitone' not in data:
      if 'semitone_start' not in data or 'semitone_end' not in data:
        raise SemanticError('Incomplete semitone range specification', node.line)
      self.semitone_start = data['semitone_start']
      self.semitone_end   = data['semitone_end']
    else:
      if 'semitone_start' in data or 'semitone_end' in data:
        raise SemanticError('Overspecified semitone range', node.line)
      self.semitone_start = self.semitone_end = data['semitone']

    if self.semitone_end < self.semitone_start:
      raise SemanticError(f'Invalid drum semitone range: {self.semitone_start} - {self.semitone_end}', node.line)

    sample_name = data['sample_name']
    self.sample = sample_registry.lookup(sample_name)
    if self.sample is None:
      raise SemanticError(f'Bad sample name {sample_name} for drum {self.name}', node.line)

    self.sample_rate = data.get('sample_rate', self.sample.sample_rate)
    self.base_note = data.get('base_note', self.sample.base_note)

    return self

  def entries(self):
    ''' Yields (pointer table slot, note, tuning) for every semitone this group covers '''
    for note_offset in range(self.length):
      note = wrap_note(self.base_note + note_offset)
      yield self.semitone_start + note_offset, note, calc_tuning(self.sample_rate, note)

  def note_defines(self) -> list[tuple[str, int]]:
    return [(f'{self.name}_{z64_note_name(note)}', slot) for slot, note, _ in self.entries()]

  def to_c(self, sf_index: int) -> str:
    lines = [
      f'#define {self.name}_ENTRY(tuning) \\',
      '    { \\',
      f'        {self.release}, \\',
      f'        {self.pan}, \\',
      '        false, \\',
      f'        {{ &{self.sample.header_symbol(sf_index)}, (tuning) }}, \\',
      f'        SF{sf_index}_{self.envelope_name}, \\',
      '    }',
      f'NO_REORDER DATA Drum {self.name}[{self.length}] = {{',
    ]

    for _, _, tuning in self.entries():
      lines.append(f'    {self.name}_ENTRY({F32_FMT % tuning}f),')

    lines.append('};')
    return '\n'.join(lines) + '\n'

if __name__ == '__main__':
  pass
