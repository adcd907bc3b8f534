'''
### Helpers Module

This module provides low-level utility functions to assist with alignment, float32
rounding and C identifier checks, commonly used throughout soundfont reading and emission.

Functions:
    `align_to_16`:
        Rounds the given integer up to the next multiple of 16.

    `padding_to_16`:
        Returns how many bytes are needed to reach the next multiple of 16.

    `f32`:
        Rounds a Python float to the nearest IEEE-754 single precision value.

    `f2i` / `i2f`:
        Reinterpret a float32 as its bit pattern and back.

    `is_c_identifier`:
        Checks a string is usable as a C identifier.

Dependencies:
    `struct`:
        Used for float32 bit reinterpretation.

Intended Usage:
    This module is intended to be imported whenever alignment or float32-exact arithmetic
    is required, ensuring the emitted C matches the original binary layout byte for byte.
'''

import struct

C_KEYWORDS: frozenset[str] = frozenset((
  'auto', 'break', 'case', 'char', 'const', 'continue', 'default', 'do',
  'double', 'else', 'enum', 'extern', 'float', 'for', 'goto', 'if',
  'inline', 'int', 'long', 'register', 'restrict', 'return', 'short', 'signed',
  'sizeof', 'static', 'struct', 'switch', 'typedef', 'union', 'unsigned', 'void',
  'volatile', 'while',
  '_Alignas', '_Alignof', '_Atomic', '_Bool', '_Complex', '_Generic', '_Imaginary', '_Noreturn',
  '_Static_assert', '_Thread_local',
))

''' Helper Functions '''
def align_to_16(data: int) -> int:
  return (data + 0x0F) & ~0x0F # or (size + 0xF) // 0x10 * 0x10

def padding_to_16(data: int) -> int:
  return (-data) & 0x0F # or (0x10 - (size % 0x10)) % 0x10

def f32(value: float) -> float:
  return struct.unpack('>f', struct.pack('>f', value))[0]

def f2i(value: float) -> int:
  return struct.unpack('>I', struct.pack('>f', value))[0]

def i2f(bits: int) -> float:
  return struct.unpack('>f', struct.pack('>I', bits))[0]

def is_c_identifier(text: str) -> bool:
  if not text or text[0].isdigit():
    return False

  # ASCII letters, digits and underscores only
  if not all(c == '_' or (c.isascii() and c.isalnum()) for c in text):
    return False

  return text not in C_KEYWORDS

if __name__ == '__main__':
  pass
