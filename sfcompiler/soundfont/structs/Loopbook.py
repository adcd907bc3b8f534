'''
### Loopbook Module

This module defines the `AdpcmLoop` class, which represents the loop of a waveform and the
C structure it is emitted as.

Classes:
    `AdpcmLoop`:
        Represents a single ADPCM loop structure.

Functionality:
    - Load an ADPCM loop from samplebank YAML data ('from_yaml').
    - Emit the loop as C ('to_c'), either header-only or with its predictor state.
'''

from ...Errors import WaveformError

LOOP_COUNT_INFINITE: int = 0xFFFFFFFF

class AdpcmLoop: # struct size = 0x10 or 0x30
  ''' Represents an ADPCM loop structure '''
  def __init__(self):
    self.loop_start = 0
    self.loop_end   = 0
    self.loop_count = 0 # 0 or 0xFFFFFFFF in practice

    # Predictor state, only emitted when loop_count != 0
    self.predictor_array: list[int] = [0] * 16

  @classmethod
  def from_yaml(cls, loop_dict: dict, origin: str = ''):
    self = cls()

    self.loop_start = loop_dict['start']
    self.loop_end   = loop_dict['end']
    self.loop_count = loop_dict.get('count', 0) & 0xFFFFFFFF # -1 is accepted for infinite

    state = loop_dict.get('state')
    if state is not None:
      if len(state) != 16:
        raise WaveformError(f'Loop state in {origin} must have 16 values')
      self.predictor_array = list(state)

    return self

  @property
  def has_state(self) -> bool:
    return self.loop_count != 0

  @property
  def struct_size(self) -> int:
    return 0x30 if self.has_state else 0x10

  def to_c(self, sf_index: int, sample_name: str, frame_count: int) -> str:
    symbol = f'SF{sf_index}_{sample_name}_LOOP'

    if not self.has_state:
      # Header only, aliased like books are
      return (
        f'NO_REORDER DATA ALIGNED(16) AdpcmLoopHeader {symbol}_HEADER = {{\n'
        f'    {self.loop_start}, {self.loop_end}, {self.loop_count}, 0,\n'
        f'}};\n'
        f'#pragma weak {symbol} = {symbol}_HEADER\n'
      )

    count = f'0x{self.loop_count:08X}' if self.loop_count == LOOP_COUNT_INFINITE else str(self.loop_count)
    state = [f'(s16)0x{v & 0xFFFF:04X}' for v in self.predictor_array]

    lines = [
      f'NO_REORDER DATA ALIGNED(16) AdpcmLoop {symbol} = {{',
      f'    {{ {self.loop_start}, {self.loop_end}, {count}, {frame_count} }},',
      '    {',
    ]
    for i in range(0, 16, 4):
      lines.append(f'        {", ".join(state[i:i + 4])},')
    lines.append('    },')
    lines.append('};')
    return '\n'.join(lines) + '\n'

if __name__ == '__main__':
  pass
