'''
### Errors Module

This module defines the exceptions raised while reading a soundfont description and
emitting its C structures. Every error aborts the compile; none are recoverable.

Classes:
    `SoundfontError`:
        Base class, carries a kind, a message and an optional source line number.

    `MalformedInputError`:
        Unexpected element, unparseable attribute value or missing required attribute.

    `SemanticError`:
        Unresolvable or duplicate names, over/underspecified attribute combinations,
        invalid ranges.

    `WaveformError`:
        A referenced waveform lacks data the soundfont requires (base note, book, loop).

    `InternalError`:
        A layout invariant was broken while emitting.
'''


class SoundfontError(Exception):
  kind = 'Error'

  def __init__(self, message: str, line: int | None = None):
    super().__init__(message)
    self.message = message
    self.line = line

  def __str__(self) -> str:
    if self.line is not None:
      return f'{self.message} (line {self.line})'
    return self.message


class MalformedInputError(SoundfontError):
  kind = 'Malformed input'


class SemanticError(SoundfontError):
  kind = 'Invalid soundfont'


class WaveformError(SoundfontError):
  kind = 'Waveform'


class InternalError(SoundfontError):
  kind = 'Internal'


if __name__ == '__main__':
  pass
