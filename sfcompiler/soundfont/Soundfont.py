'''
Soundfont Module

This module defines classes and functionality for reading a soundfont XML description into a
fully cross-referenced model, ready to be emitted as C.

Classes:
    `SoundfontInfo`:
        Represents the bank-level metadata held by the `<Soundfont>` root attributes.

    `Soundfont`:
        Represents the full content of a soundfont.

Functionality:
    - Load a soundfont from XML ('from_xml'), reading envelopes first, then samples, then
      instruments, drums and effects in document order, then match padding.
    - Maintain name registries for envelopes and samples so later readers resolve by name,
      and one for instrument, drum and effect names so no define is declared twice.
    - Keep instruments in both their logical order (pointer table) and their struct order
      (physical emission order).
    - Build the drum pointer table and the counts written into the declarations header.

Dependencies:
    `XMLParser`:
        For converting XML into useable data structures.

    `Waveform`:
        For loading the samplebank(s) the soundfont references.

    `soundfont.structs`:
        Includes individual soundfont structure representations.

Intended Usage:
    This module is intended to be used by the emitter. Once `from_xml` returns, the model is
    complete and is not mutated during emission.
'''

# Import Soundfont child structures
from .structs.Envelope import Envelope
from .structs.Sample import Sample, SAMPLES_SPEC
from .structs.Instrument import Instrument
from .structs.Drum import Drum, MAX_DRUM_SEMITONES
from .structs.Effect import SoundEffect
from .structs.MatchPadding import read_match_padding

from ..Enums import XMLTags, MEDIUM_NAMES, CACHE_POLICY_NAMES
from ..Errors import MalformedInputError, SemanticError
from ..Registry import Registry
from ..Waveform import load_samplebank
from ..XMLParser import AttrSpec, parse_by_spec, parse_c_identifier, parse_int, parse_bool, parse_text

SOUNDFONT_SPEC = (
  AttrSpec('Name',            False, parse_c_identifier, 'name'),
  AttrSpec('Index',           False, parse_int,          'index'),
  AttrSpec('Medium',          False, parse_text,         'medium'),
  AttrSpec('CachePolicy',     False, parse_text,         'cache_policy'),
  AttrSpec('SampleBank',      False, parse_text,         'samplebank_path'),
  AttrSpec('SampleBankDD',    True,  parse_text,         'samplebank_dd_path'),
  AttrSpec('Indirect',        True,  parse_int,          'pointer_index'),
  AttrSpec('PadToSize',       True,  parse_int,          'pad_to_size'),
  AttrSpec('LoopsHaveFrames', True,  parse_bool,         'loops_have_frames'),
)

class SoundfontInfo:
  ''' Represents a soundfont's metadata '''
  def __init__(self):
    self.name  = 'Soundfont'
    self.index = 0

    self.medium       = MEDIUM_NAMES['Cart']
    self.cache_policy = CACHE_POLICY_NAMES['Temporary']

    self.samplebank_path    = ''
    self.samplebank_dd_path = None

    self.pointer_index     = None
    self.pad_to_size       = 0
    self.loops_have_frames = False

  @classmethod
  def from_xml(cls, root):
    self = cls()
    data = parse_by_spec(root, SOUNDFONT_SPEC)

    self.name  = data['name']
    self.index = data['index']

    if data['medium'] not in MEDIUM_NAMES:
      raise MalformedInputError(f'Bad medium "{data["medium"]}", expected one of {", ".join(MEDIUM_NAMES)}', root.line)
    self.medium = MEDIUM_NAMES[data['medium']]

    if data['cache_policy'] not in CACHE_POLICY_NAMES:
      raise MalformedInputError(f'Bad cache policy "{data["cache_policy"]}", expected one of {", ".join(CACHE_POLICY_NAMES)}', root.line)
    self.cache_policy = CACHE_POLICY_NAMES[data['cache_policy']]

    self.samplebank_path    = data['samplebank_path']
    self.samplebank_dd_path = data.get('samplebank_dd_path')

    self.pointer_index     = data.get('pointer_index')
    self.pad_to_size       = data.get('pad_to_size', 0)
    self.loops_have_frames = data.get('loops_have_frames', False)

    if self.pad_to_size < 0:
      raise MalformedInputError(f'Bad PadToSize {self.pad_to_size}', root.line)

    return self

class Soundfont:
  ''' Represents a complete soundfont '''
  def __init__(self):
    self.info = SoundfontInfo()
    self.matching = False

    self.samplebank = None
    self.samplebank_dd = None

    self.envelopes: list[Envelope] = []
    self.samples: list[Sample] = []
    self.instruments: list[Instrument] = []
    self.drums: list[Drum] = []
    self.effects: list[SoundEffect] = []
    self.match_padding = b''

    # Indices into self.instruments, kept in descending struct index
    self.instrument_struct_order: list[int] = []

    # Name registries
    self.envelope_registry = Registry()
    self.sample_registry   = Registry()

    # Instrument, drum and effect names share the declarations header
    self.define_registry = Registry()

  @classmethod
  def from_xml(cls, root, base_dir=None, matching: bool = False, samplebank=None, samplebank_dd=None):
    ''' Reads a soundfont from its <Soundfont> root element '''
    self = cls()
    self.matching = matching

    if root.tag != XMLTags.SOUNDFONT.value:
      raise MalformedInputError('Root node must be <Soundfont>', root.line)

    self.info = SoundfontInfo.from_xml(root)

    # Samplebank paths are relative to the description
    self.samplebank = samplebank if samplebank is not None else load_samplebank(self.info.samplebank_path, base_dir)

    if samplebank_dd is not None:
      self.samplebank_dd = samplebank_dd
    elif self.info.samplebank_dd_path is not None:
      self.samplebank_dd = load_samplebank(self.info.samplebank_dd_path, base_dir)

    allowed = {tag.value for tag in XMLTags if tag is not XMLTags.SOUNDFONT}
    for node in root:
      if node.tag not in allowed:
        raise MalformedInputError(f'Unexpected element node {node.tag} in soundfont', node.line)

    # Envelopes and samples first irrespective of their position in the xml
    for node in self._lists(root, XMLTags.ENVELOPES):
      self._read_envelopes(node)

    for node in self._lists(root, XMLTags.SAMPLES):
      self._read_samples(node)

    for node in root:
      if node.tag == XMLTags.INSTRUMENTS.value:
        self._read_instruments(node)
      elif node.tag == XMLTags.DRUMS.value:
        self._read_drums(node)
      elif node.tag == XMLTags.EFFECTS.value:
        self._read_effects(node)

    for node in self._lists(root, XMLTags.MATCHPADDING):
      self.match_padding = read_match_padding(node)

    return self

  @staticmethod
  def _lists(root, tag: XMLTags):
    return [node for node in root if node.tag == tag.value]

  @staticmethod
  def _check_tag(node, expected: tuple[str, ...], list_name: str):
    if node.tag not in expected:
      raise MalformedInputError(f'Unexpected element node {node.tag} in {list_name} list', node.line)

  ''' Readers '''
  def _read_envelopes(self, envelopes_node):
    parse_by_spec(envelopes_node, ())

    for node in envelopes_node:
      self._check_tag(node, ('Envelope',), 'envelopes')
      envelope = Envelope.from_xml(node)

      if not envelope.is_empty:
        if envelope.name in self.envelope_registry:
          raise SemanticError(f'Duplicate envelope name {envelope.name}', node.line)
        self.envelope_registry.declare(envelope.name, envelope)

      self.envelopes.append(envelope)

  def _read_samples(self, samples_node):
    defaults = parse_by_spec(samples_node, SAMPLES_SPEC)

    for node in samples_node:
      self._check_tag(node, ('Sample',), 'samples')
      sample = Sample.from_xml(node, defaults, self.samplebank, self.samplebank_dd)

      if sample.name in self.sample_registry:
        raise SemanticError(f'Duplicate sample name {sample.name}', node.line)

      self.sample_registry.declare(sample.name, sample)
      self.samples.append(sample)

  def _read_instruments(self, instruments_node):
    parse_by_spec(instruments_node, ())

    last_struct_index = 0
    for node in instruments_node:
      self._check_tag(node, ('Instrument', 'InstrumentUnused'), 'instrument')
      instrument = Instrument.from_xml(node, self.envelope_registry, self.sample_registry, last_struct_index)
      self._declare_define(instrument, node)

      self.instruments.append(instrument)
      if instrument.is_placeholder:
        continue

      last_struct_index = instrument.struct_index + 1
      self._link_struct(len(self.instruments) - 1)

  def _declare_define(self, entity, node):
    if entity.name is None:
      return
    if entity.name in self.define_registry:
      raise SemanticError(f'Duplicate name {entity.name}', node.line)
    self.define_registry.declare(entity.name, entity)

  def _link_struct(self, index: int):
    ''' Insertion sort by struct index, highest to lowest '''
    struct_index = self.instruments[index].struct_index

    for pos, other in enumerate(self.instrument_struct_order):
      if struct_index >= self.instruments[other].struct_index:
        self.instrument_struct_order.insert(pos, index)
        return

    self.instrument_struct_order.append(index)

  def _read_drums(self, drums_node):
    parse_by_spec(drums_node, ())

    for node in drums_node:
      self._check_tag(node, ('Drum',), 'drums')
      drum = Drum.from_xml(node, self.envelope_registry, self.sample_registry)
      self._declare_define(drum, node)
      self.drums.append(drum)

  def _read_effects(self, effects_node):
    parse_by_spec(effects_node, ())

    for node in effects_node:
      self._check_tag(node, ('Effect',), 'effects')
      effect = SoundEffect.from_xml(node, self.sample_registry)
      self._declare_define(effect, node)
      self.effects.append(effect)

  ''' Derived Data '''
  def instruments_in_struct_order(self) -> list[Instrument]:
    return [self.instruments[i] for i in reversed(self.instrument_struct_order)]

  def pointer_table_instruments(self) -> list[Instrument]:
    ''' Instruments in header pointer table order, unused ones are not in the table '''
    return [instrument for instrument in self.instruments if not instrument.unused]

  def drum_pointer_table(self) -> list[tuple[Drum, int] | None]:
    ''' Semitone -> (drum group, entry index), None where no drum covers the semitone '''
    if not self.drums:
      return []

    table: list[tuple[Drum, int] | None] = [None] * MAX_DRUM_SEMITONES
    max_semitone = -1

    for drum in self.drums:
      if drum.is_placeholder:
        # <Drum/> reserves one more slot at the end of the table
        max_semitone += 1
        continue

      max_semitone = max(max_semitone, drum.semitone_end)

      if drum.semitone_end + 1 > MAX_DRUM_SEMITONES:
        raise SemanticError(f'Bad drum range for {drum.name}', drum.line)

      for note_offset in range(drum.length):
        table[drum.semitone_start + note_offset] = (drum, note_offset)

    table_len = max_semitone + 1
    if table_len > MAX_DRUM_SEMITONES:
      raise SemanticError(f'Bad drum pointer table length {table_len}')

    return table[:table_len]

  @property
  def num_instruments(self) -> int:
    return len(self.pointer_table_instruments())

  @property
  def num_drums(self) -> int:
    return len(self.drum_pointer_table())

  @property
  def num_effects(self) -> int:
    return len(self.effects)

if __name__ == '__main__':
  pass
