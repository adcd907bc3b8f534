'''
### Codebook Module

This module defines the `AdpcmBook` class, which represents the ADPCM codebook of a
waveform and the C structures it is emitted as.

Classes:
    `AdpcmBook`:
        Represents a single ADPCM codebook.

Functionality:
    - Load an ADPCM codebook from samplebank YAML data ('from_yaml').
    - Expose the content the deduplicator keys books by ('state').
    - Emit the codebook header and predictor data as C ('to_c').

Intended Usage:
    Owned by a `Waveform`, emitted by the layout emitter right after the sample header
    that first references it.
'''

from itertools import islice

from ...Errors import WaveformError

class AdpcmBook: # struct size = 0x8 + (0x10 * order * num_predictors)
  ''' Represents an ADPCM codebook '''
  def __init__(self):
    self.order          = 2
    self.num_predictors = 2

    # Predictor arrays, 8 * order coefficients each
    self.predictor_arrays: list[list[int]] = []

  @classmethod
  def from_yaml(cls, codebook_dict: dict, origin: str = ''):
    self = cls()

    self.order = codebook_dict['order']
    self.predictor_arrays = [list(array) for array in codebook_dict['predictors']]
    self.num_predictors = codebook_dict.get('num predictors', len(self.predictor_arrays))

    if len(self.predictor_arrays) != self.num_predictors:
      raise WaveformError(f'Codebook in {origin} must have {self.num_predictors} predictor arrays')

    for array in self.predictor_arrays:
      if len(array) != 8 * self.order:
        raise WaveformError(f'Codebook predictors in {origin} must have {8 * self.order} coefficients')
      for value in array:
        if not -0x8000 <= value <= 0x7FFF:
          raise WaveformError(f'Codebook coefficient {value} in {origin} does not fit in s16')

    return self

  @property
  def state(self) -> list[int]:
    return [value for array in self.predictor_arrays for value in array]

  @property
  def struct_size(self) -> int:
    return 8 + (0x10 * self.order * self.num_predictors)

  def to_c(self, sf_index: int, book_name: str) -> str:
    lines = [
      f'NO_REORDER DATA ALIGNED(16) AdpcmBookHeader SF{sf_index}_{book_name}_BOOK_HEADER = {{',
      f'    {self.order}, {self.num_predictors},',
      '};',
      f'NO_REORDER DATA AdpcmBookData SF{sf_index}_{book_name}_BOOK_DATA = {{',
    ]

    values = iter(self.state)
    for _ in range(self.order * self.num_predictors):
      row = [f'(s16)0x{v & 0xFFFF:04X}' for v in islice(values, 8)]
      lines.append(f'    {", ".join(row[:4])}, {", ".join(row[4:])},')

    lines.append('};')
    lines.append(f'#pragma weak SF{sf_index}_{book_name}_BOOK = SF{sf_index}_{book_name}_BOOK_HEADER')
    return '\n'.join(lines) + '\n'

if __name__ == '__main__':
  pass
