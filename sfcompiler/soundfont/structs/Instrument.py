'''
### Instrument Module

This module defines the `Instrument` class, which represents the structure of an individual
instrument in a soundfont, and `InstrumentSample`, one of its three key-region samples.

Classes:
    `InstrumentSample`:
        A sample reference with its resolved base note, sample rate and tuning.

    `Instrument`:
        Represents a single instrument structure.

Functionality:
    - Read an instrument from its `<Instrument>` or `<InstrumentUnused>` element ('from_xml').
    - Resolve its envelope and low/mid/high samples by name, defaulting release, base notes
      and sample rates from what they reference.
    - Emit the instrument structure as C ('to_c').

Dependencies:
    `Tuning`:
        For computing sample tunings.

    `Quirks`:
        For the mid-sample tuning patch.

Intended Usage:
    Instruments are read after envelopes and samples. The soundfont keeps them in reading
    order for the header pointer table and separately in struct order for emission.
'''

from ...Errors import MalformedInputError, SemanticError
from ...Quirks import patch_mid_tuning
from ...Tuning import calc_tuning
from ...XMLParser import (AttrSpec, parse_by_spec, parse_c_identifier, parse_int, parse_u8,
                          parse_note_number, parse_double)

INSTR_LO_NONE: int = 0
INSTR_HI_NONE: int = 127

# printf("%.22f")
F32_FMT: str = '%.22f'

INSTRUMENT_SPEC = (
  AttrSpec('Name',         True,  parse_c_identifier, 'name'),
  AttrSpec('MatchOrder',   True,  parse_int,          'struct_index'),
  AttrSpec('Envelope',     False, parse_c_identifier, 'envelope_name'),
  AttrSpec('Release',      True,  parse_u8,           'release'),

  AttrSpec('Sample',       True,  parse_c_identifier, 'sample_mid'),
  AttrSpec('BaseNote',     True,  parse_note_number,  'base_note_mid'),
  AttrSpec('SampleRate',   True,  parse_double,       'sample_rate_mid'),

  AttrSpec('RangeLo',      True,  parse_note_number,  'range_lo'),
  AttrSpec('SampleLo',     True,  parse_c_identifier, 'sample_low'),
  AttrSpec('BaseNoteLo',   True,  parse_note_number,  'base_note_low'),
  AttrSpec('SampleRateLo', True,  parse_double,       'sample_rate_low'),

  AttrSpec('RangeHi',      True,  parse_note_number,  'range_hi'),
  AttrSpec('SampleHi',     True,  parse_c_identifier, 'sample_high'),
  AttrSpec('BaseNoteHi',   True,  parse_note_number,  'base_note_high'),
  AttrSpec('SampleRateHi', True,  parse_double,       'sample_rate_high'),
)

SLOTS = ('Low', 'Mid', 'High')

class InstrumentSample:
  ''' A TunedSample in an instrument '''
  def __init__(self, sample_name: str, base_note: int | None = None, sample_rate: float | None = None):
    self.sample_name = sample_name
    self.sample = None

    # Overrides until resolved
    self.base_note = base_note
    self.sample_rate = sample_rate
    self.tuning = 0.0

  def resolve(self, sample_registry, slot: str, line: int):
    self.sample = sample_registry.lookup(self.sample_name)
    if self.sample is None:
      raise SemanticError(f'Bad sample name {self.sample_name} for {slot.upper()} sample', line)

    if self.base_note is None:
      self.base_note = self.sample.base_note

    if self.sample_rate is None:
      self.sample_rate = self.sample.sample_rate

    self.tuning = calc_tuning(self.sample_rate, self.base_note)

  def to_c(self, sf_index: int) -> str:
    return f'{{ &{self.sample.header_symbol(sf_index)}, {F32_FMT % self.tuning}f }}'

class Instrument: # struct size = 0x20
  ''' Represents an instrument structure in a soundfont '''
  def __init__(self):
    self.name: str | None = None
    self.line = 0

    # Emission order for matching, independent of the pointer table order
    self.struct_index = -1
    self.unused = False

    self.envelope_name = None
    self.envelope = None
    self.release = 0

    self.range_lo = INSTR_LO_NONE
    self.range_hi = INSTR_HI_NONE

    self.low_sample: InstrumentSample | None = None
    self.prim_sample: InstrumentSample | None = None
    self.high_sample: InstrumentSample | None = None

  @property
  def is_placeholder(self) -> bool:
    ''' <Instrument/>, a NULL in the pointer table '''
    return self.name is None and not self.unused

  @classmethod
  def from_xml(cls, node, envelope_registry, sample_registry, default_struct_index: int):
    self = cls()
    self.line = node.line
    self.unused = node.tag == 'InstrumentUnused'

    if not node.has_attributes and not self.unused:
      return self

    data = parse_by_spec(node, INSTRUMENT_SPEC)

    self.name = data.get('name')
    if not self.unused and self.name is None:
      raise SemanticError('Instrument must be named', node.line)

    self.struct_index = data.get('struct_index', default_struct_index)

    self.envelope_name = data['envelope_name']
    self.envelope = envelope_registry.lookup(self.envelope_name)
    if self.envelope is None:
      raise SemanticError(f'Bad envelope name {self.envelope_name}', node.line)

    self.release = data.get('release', self.envelope.release)

    self.range_lo = data.get('range_lo', INSTR_LO_NONE)
    self.range_hi = data.get('range_hi', INSTR_HI_NONE)

    if 'sample_mid' in data:
      if node.children:
        raise MalformedInputError('Instrument has both a Sample attribute and a sample list', node.line)
      names = {'Low': data.get('sample_low'), 'Mid': data['sample_mid'], 'High': data.get('sample_high')}
    else:
      names = self._read_sample_list(node, data)

    for slot, name in names.items():
      if name is None:
        continue
      if slot == 'Low' and self.range_lo == INSTR_LO_NONE:
        raise SemanticError('Useless Low sample specified (RangeLo is unset)', node.line)
      if slot == 'High' and self.range_hi == INSTR_HI_NONE:
        raise SemanticError('Useless High sample specified (RangeHi is unset)', node.line)

    if names['Mid'] is None:
      raise SemanticError('Unset-but-used Mid sample', node.line)
    if names['Low'] is None and self.range_lo != INSTR_LO_NONE:
      raise SemanticError('Unset-but-used Low sample', node.line)
    if names['High'] is None and self.range_hi != INSTR_HI_NONE:
      raise SemanticError('Unset-but-used High sample', node.line)

    if names['Low'] is not None:
      self.low_sample = InstrumentSample(names['Low'], data.get('base_note_low'), data.get('sample_rate_low'))
      self.low_sample.resolve(sample_registry, 'Low', node.line)

    self.prim_sample = InstrumentSample(names['Mid'], data.get('base_note_mid'), data.get('sample_rate_mid'))
    self.prim_sample.resolve(sample_registry, 'Mid', node.line)
    self.prim_sample.tuning = patch_mid_tuning(self.prim_sample.tuning)

    if names['High'] is not None:
      self.high_sample = InstrumentSample(names['High'], data.get('base_note_high'), data.get('sample_rate_high'))
      self.high_sample.resolve(sample_registry, 'High', node.line)

    return self

  def _read_sample_list(self, node, data: dict) -> dict:
    ''' Reads <Sample Low|Mid|High="..."/> children '''
    if self.range_lo == INSTR_LO_NONE and self.range_hi == INSTR_HI_NONE:
      raise SemanticError('Instrument without a Sample attribute must set RangeLo or RangeHi', node.line)

    if 'sample_low' in data or 'sample_high' in data:
      raise MalformedInputError('SampleLo/SampleHi require the Sample attribute, use a sample list', node.line)

    if not node.children:
      raise MalformedInputError('Sample list is empty', node.line)

    names = dict.fromkeys(SLOTS)

    for sample_node in node.children:
      if sample_node.tag != 'Sample':
        raise MalformedInputError(f'Unexpected element node {sample_node.tag} in instrument sample list', sample_node.line)

      if not sample_node.has_attributes:
        raise MalformedInputError('Expected a Low/Mid/High sample path', sample_node.line)

      if len(sample_node.attributes) != 1:
        raise MalformedInputError('Instrument sample should have exactly one attribute', sample_node.line)

      [(slot, value)] = sample_node.attributes.items()

      if slot not in names:
        raise MalformedInputError(f'Unexpected attribute name {slot} for instrument sample', sample_node.line)

      if names[slot] is not None:
        raise MalformedInputError(f'Duplicate "{slot}" sample specifier in instrument sample', sample_node.line)

      try:
        names[slot] = parse_c_identifier(value)
      except ValueError as e:
        raise MalformedInputError(f'Bad instrument sample name: {e}', sample_node.line) from e

    return names

  def to_c(self, sf_index: int, unused_index: int = 0) -> str:
    symbol = f'_INSTR_UNUSED_{unused_index}' if self.unused else self.name

    lo = 'INSTR_SAMPLE_LO_NONE' if self.range_lo == INSTR_LO_NONE else f'{self.range_lo:3d}'
    hi = 'INSTR_SAMPLE_HI_NONE' if self.range_hi == INSTR_HI_NONE else f'{self.range_hi:3d}'

    low = self.low_sample.to_c(sf_index) if self.low_sample is not None else 'INSTR_SAMPLE_NONE'
    high = self.high_sample.to_c(sf_index) if self.high_sample is not None else 'INSTR_SAMPLE_NONE'

    return (
      f'NO_REORDER DATA Instrument {symbol} = {{\n'
      f'    false,\n'
      f'    {lo},\n'
      f'    {hi},\n'
      f'    {self.release},\n'
      f'    SF{sf_index}_{self.envelope_name},\n'
      f'    {low},\n'
      f'    {self.prim_sample.to_c(sf_index)},\n'
      f'    {high},\n'
      f'}};\n'
    )

if __name__ == '__main__':
  pass
