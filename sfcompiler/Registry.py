'''
### Registry Module

This module defines the `Registry` class, which maps a logical key (an entity name or a
content key) to whatever was first declared for it.

Classes:
    `Registry`:
        An insertion-ordered key -> value mapping with idempotent declaration.

Functionality:
    - Answer "already declared?" so repeated references reuse the first declaration.

Intended Usage:
    Used by the soundfont model to register envelopes and samples by name, by the book
    deduplicator to key books by content, and by the emitter to write each extern
    declaration exactly once.
'''

class Registry:
  ''' Maps a key to the value first declared for it '''
  def __init__(self):
    self.symbols: dict = {}

  def declare(self, key, value):
    ''' Records `value` for `key` unless `key` is already declared, returns the declared value '''
    if key in self.symbols:
      return self.symbols[key]

    self.symbols[key] = value
    return value

  def lookup(self, key, default=None):
    return self.symbols.get(key, default)

  def __contains__(self, key) -> bool:
    return key in self.symbols

  def __len__(self) -> int:
    return len(self.symbols)

if __name__ == '__main__':
  pass
