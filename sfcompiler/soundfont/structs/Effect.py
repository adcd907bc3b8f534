'''
### Effect Module

This module defines the `SoundEffect` class, which represents a single entry of a soundfont's
sound effect list.

Classes:
    `SoundEffect`:
        Represents a single sound effect structure.

Functionality:
    - Read a sound effect from its `<Effect>` element ('from_xml').
    - Emit the sound effect as one C array entry ('to_c').

Notes:
    `<Effect/>` and `Sample="NONE"` both produce a NULL sample with a tuning of 0.
'''

from ...Errors import SemanticError
from ...Tuning import calc_tuning
from ...XMLParser import AttrSpec, parse_by_spec, parse_c_identifier, parse_note_number, parse_double

NO_SAMPLE: str = 'NONE'

F32_FMT: str = '%.22f'

EFFECT_SPEC = (
  AttrSpec('Name',       False, parse_c_identifier, 'name'),
  AttrSpec('Sample',     False, parse_c_identifier, 'sample_name'),
  AttrSpec('SampleRate', True,  parse_double,       'sample_rate'),
  AttrSpec('BaseNote',   True,  parse_note_number,  'base_note'),
)

class SoundEffect: # struct size = 0x08
  ''' Represents a sound effect structure in a soundfont '''
  def __init__(self):
    self.name: str | None = None # None for <Effect/>
    self.line = 0

    self.sample = None
    self.sample_rate = 0.0
    self.base_note = 0
    self.tuning = 0.0

  @property
  def is_placeholder(self) -> bool:
    return self.name is None

  @classmethod
  def from_xml(cls, node, sample_registry):
    self = cls()
    self.line = node.line

    if not node.has_attributes:
      return self

    data = parse_by_spec(node, EFFECT_SPEC)
    self.name = data['name']

    sample_name = data['sample_name']
    if sample_name == NO_SAMPLE:
      return self

    self.sample = sample_registry.lookup(sample_name)
    if self.sample is None:
      raise SemanticError(f'Bad sample name {sample_name} for effect {self.name}', node.line)

    self.sample_rate = data.get('sample_rate', self.sample.sample_rate)
    self.base_note = data.get('base_note', self.sample.base_note)
    self.tuning = calc_tuning(self.sample_rate, self.base_note)

    return self

  def to_c(self, sf_index: int) -> str:
    if self.sample is None:
      return '    { { NULL, 0.0f } },\n'
    return f'    {{ {{ &{self.sample.header_symbol(sf_index)}, {F32_FMT % self.tuning}f }} }},\n'

if __name__ == '__main__':
  pass
