'''
### Sample Module

This module defines the `Sample` class, which represents the structure of an individual
sample in a soundfont.

Classes:
    `Sample`:
        Represents a single sample structure.

Functionality:
    - Read a sample from its `<Sample>` element and its samplebank waveform ('from_xml').
    - Emit the sample header as C ('to_c').
    - Validate that the waveform provides everything the sample header needs.

Dependencies:
    `Waveform`:
        Provides sample rate, base note, codec, size, codebook and loop.

    `Tuning`:
        For converting the waveform's MIDI base note.

    `Enums`:
        `AudioSampleCodec`:
            Enum defining supported codec types.

Intended Usage:
    Samples are read after envelopes and before instruments, drums and effects, which
    resolve them by name.
'''

from ...Enums import AudioSampleCodec
from ...Errors import WaveformError
from ...Tuning import midinote_to_z64note
from ...XMLParser import AttrSpec, parse_by_spec, parse_c_identifier, parse_double, parse_note_number, parse_bool

SAMPLE_SPEC = (
  AttrSpec('Name',       False, parse_c_identifier, 'name'),
  AttrSpec('SampleRate', True,  parse_double,       'sample_rate'),
  AttrSpec('BaseNote',   True,  parse_note_number,  'base_note'),
  AttrSpec('IsDD',       True,  parse_bool,         'is_dd'),
  AttrSpec('Cached',     True,  parse_bool,         'cached'),
)

SAMPLES_SPEC = (
  AttrSpec('IsDD',   True, parse_bool, 'is_dd'),
  AttrSpec('Cached', True, parse_bool, 'cached'),
)

def bool_str(value: bool) -> str:
  return 'true' if value else 'false'

class Sample: # struct size = 0x10
  ''' Represents a sample structure in a soundfont '''
  def __init__(self):
    self.name = 'Sample'
    self.line = 0

    self.sample_rate = 0.0
    self.base_note   = 0

    self.is_dd  = False
    self.cached = False

    # Name of the samplebank the waveform was found in
    self.samplebank_name = ''
    self.waveform = None

  @classmethod
  def from_xml(cls, node, defaults: dict, samplebank, samplebank_dd=None):
    self = cls()
    self.line = node.line

    data = parse_by_spec(node, SAMPLE_SPEC)
    self.name   = data['name']
    self.is_dd  = data.get('is_dd', defaults.get('is_dd', False))
    self.cached = data.get('cached', defaults.get('cached', False))

    provider = samplebank_dd if (self.is_dd and samplebank_dd is not None) else samplebank
    try:
      self.waveform = provider.get(self.name)
    except WaveformError as e:
      raise WaveformError(e.message, node.line) from e

    self.samplebank_name = provider.name

    self.sample_rate = data.get('sample_rate', self.waveform.sample_rate)

    if 'base_note' in data:
      self.base_note = data['base_note']
    elif self.waveform.has_inst:
      self.base_note = midinote_to_z64note(self.waveform.base_note)
    else:
      raise WaveformError(f'No basenote for sample {self.name} ({self.waveform.path})', node.line)

    if not self.waveform.has_book:
      raise WaveformError(f'No book for sample {self.name} ({self.waveform.path})', node.line)

    if not self.waveform.has_loop:
      raise WaveformError(f'No loop for sample {self.name} ({self.waveform.path})', node.line)

    return self

  @property
  def book(self):
    return self.waveform.book

  @property
  def loop(self):
    return self.waveform.loop

  @property
  def codec(self) -> AudioSampleCodec:
    return AudioSampleCodec.from_compression_type(self.waveform.compression_type)

  def header_symbol(self, sf_index: int) -> str:
    return f'SF{sf_index}_{self.name}_HEADER'

  def to_c(self, sf_index: int, book_name: str) -> str:
    return (
      f'NO_REORDER DATA Sample {self.header_symbol(sf_index)} = {{\n'
      f'    0, {self.codec.name}, {int(self.is_dd)}, {bool_str(self.cached)}, {bool_str(False)},\n'
      f'    0x{self.waveform.ssnd_size:06X},\n'
      f'    {self.samplebank_name}_{self.name}_Off,\n'
      f'    &SF{sf_index}_{self.name}_LOOP,\n'
      f'    &SF{sf_index}_{book_name}_BOOK,\n'
      f'}};\n'
    )

if __name__ == '__main__':
  pass
