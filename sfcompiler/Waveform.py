'''
### Waveform Module

This module defines the decoded waveform metadata a soundfont needs from its samples, and
the samplebank providers that hand it out by sample name.

Classes:
    `Waveform`:
        Sample rate, base note, codec, compressed size, codebook and loop of one waveform.

    `WaveformProvider`:
        Base class for anything that can look a waveform up by sample name.

    `Samplebank`:
        A provider backed by a samplebank YAML document.

Samplebank YAML layout:

    name: SampleBank_0
    samples:
      kick:
        sample rate: 32000
        base note: 60        # MIDI note number, omit when unknown
        codec: ADP9          # AIFC compression type
        size: 0x1C80         # compressed sound data size in bytes
        book:
          order: 2
          predictors:
            - [16 coefficients]
            - [16 coefficients]
        loop:
          start: 0
          end: 4096
          count: 0
          state: [16 values] # only needed when count != 0

Dependencies:
    `yaml`:
        For reading samplebank documents.

Intended Usage:
    The soundfont's sample reader asks the configured provider for each `<Sample>` and
    copies what it needs into its `Sample` struct.
'''

from pathlib import Path

import yaml

from .Enums import COMPRESSION_TYPES
from .Errors import WaveformError
from .soundfont.structs.Codebook import AdpcmBook
from .soundfont.structs.Loopbook import AdpcmLoop

class Waveform:
  ''' Decoded metadata for a single waveform '''
  def __init__(self):
    self.name = ''
    self.path = ''

    self.sample_rate = 32000.0
    self.base_note   = None # MIDI note, None when the waveform has no instrument data

    self.compression_type = 'ADP9'
    self.ssnd_size = 0

    self.book: AdpcmBook | None = None
    self.loop: AdpcmLoop | None = None

  @classmethod
  def from_yaml(cls, name: str, waveform_dict: dict, origin: str = ''):
    self = cls()
    self.name = name
    self.path = waveform_dict.get('path', f'{origin}:{name}')

    try:
      self.sample_rate = float(waveform_dict['sample rate'])
      self.base_note = waveform_dict.get('base note')
      self.compression_type = waveform_dict.get('codec', 'ADP9')
      self.ssnd_size = int(waveform_dict['size'])
    except (KeyError, TypeError, ValueError) as e:
      raise WaveformError(f'Bad waveform description for {name} in {origin}: {e}') from e

    if self.base_note is not None:
      if isinstance(self.base_note, bool) or not isinstance(self.base_note, int) or not 0 <= self.base_note <= 127:
        raise WaveformError(f'Bad base note {self.base_note!r} for {self.path}, expected a MIDI note in 0..127')

    if self.compression_type not in COMPRESSION_TYPES:
      raise WaveformError(f'Bad compression type {self.compression_type} for {self.path}')

    if not 0 <= self.ssnd_size <= 0xFFFFFF:
      raise WaveformError(f'Sound data size of {self.path} does not fit in 24 bits')

    book_dict = waveform_dict.get('book')
    loop_dict = waveform_dict.get('loop')

    try:
      self.book = AdpcmBook.from_yaml(book_dict, self.path) if book_dict is not None else None
      self.loop = AdpcmLoop.from_yaml(loop_dict, self.path) if loop_dict is not None else None
    except (KeyError, TypeError) as e:
      raise WaveformError(f'Bad book or loop for {self.path}: {e}') from e

    return self

  @property
  def has_inst(self) -> bool:
    return self.base_note is not None

  @property
  def has_book(self) -> bool:
    return self.book is not None

  @property
  def has_loop(self) -> bool:
    return self.loop is not None

class WaveformProvider:
  ''' Looks waveforms up by sample name '''
  name = ''

  def get(self, sample_name: str) -> Waveform:
    raise NotImplementedError

  def __contains__(self, sample_name: str) -> bool:
    raise NotImplementedError

class Samplebank(WaveformProvider):
  ''' A samplebank loaded from YAML '''
  def __init__(self):
    self.name = ''
    self.path = ''
    self.waveform_registry: dict[str, Waveform] = {}

  @classmethod
  def from_yaml(cls, samplebank_dict: dict, origin: str = ''):
    self = cls()
    self.path = origin

    if not isinstance(samplebank_dict, dict) or 'name' not in samplebank_dict:
      raise WaveformError(f'Samplebank {origin} must have a name')

    self.name = samplebank_dict['name']

    for name, waveform_dict in (samplebank_dict.get('samples') or {}).items():
      self.waveform_registry[name] = Waveform.from_yaml(name, waveform_dict, origin)

    return self

  @classmethod
  def from_file(cls, filename):
    try:
      with open(filename, 'r') as f:
        data = yaml.safe_load(f)
    except OSError as e:
      raise WaveformError(f'Could not read samplebank {filename}: {e.strerror}') from e
    except yaml.YAMLError as e:
      raise WaveformError(f'Could not parse samplebank {filename}: {e}') from e

    return cls.from_yaml(data, str(filename))

  def get(self, sample_name: str) -> Waveform:
    waveform = self.waveform_registry.get(sample_name)
    if waveform is None:
      raise WaveformError(f'Sample {sample_name} not found in samplebank {self.name}')
    return waveform

  def __contains__(self, sample_name: str) -> bool:
    return sample_name in self.waveform_registry

def load_samplebank(path, relative_to=None) -> Samplebank:
  path = Path(path)
  if relative_to is not None and not path.is_absolute():
    path = Path(relative_to) / path
  return Samplebank.from_file(path)

if __name__ == '__main__':
  pass
