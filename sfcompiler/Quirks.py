'''
### Quirks Module

Compatibility patches reproducing artifacts of the tools that built the original soundfonts.
Each is a self-contained policy function so a non-matching build can skip it without
touching the readers or the emitter.

Functions:
    `patch_mid_tuning`:
        Replaces the one mid-sample tuning value the original tool rounded differently.

    `codec_frame_size`:
        Bytes per 16-sample frame for an AIFC compression type.

    `loop_frame_count`:
        Recomputes a sample's frame count from its compressed size.
'''

from .Helpers import f2i, i2f

# 0.23740337789058685 -> 0.23740343749523163
MID_TUNING_FROM : int = 0x3E7319DF
MID_TUNING_TO   : int = 0x3E7319E3

def patch_mid_tuning(tuning: float) -> float:
  if f2i(tuning) == MID_TUNING_FROM:
    return i2f(MID_TUNING_TO)
  return tuning

def codec_frame_size(compression_type: str) -> int:
  if compression_type == 'ADP9':
    return 9
  if compression_type == 'ADP5':
    return 5
  return 16

def loop_frame_count(ssnd_size: int, compression_type: str) -> int:
  # The original encoder was occasionally off by one in its stored frame count,
  # so the count is always derived from the compressed size
  return (ssnd_size * 16) // codec_frame_size(compression_type)

if __name__ == '__main__':
  pass
