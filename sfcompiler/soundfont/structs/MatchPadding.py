'''
### MatchPadding Module

Reads the `<MatchPadding>` element: literal trailing bytes some original soundfonts carry
after their last structure, written as `0xHH` tokens separated by whitespace and/or commas.

    <MatchPadding>0x00, 0x00, 0x1A 0xFF</MatchPadding>
'''

from ...Errors import MalformedInputError

HEX_DIGITS: str = '0123456789ABCDEF'

def read_match_padding(node) -> bytes:
  if node.has_attributes:
    raise MalformedInputError('Unexpected attributes on <MatchPadding>', node.line)

  if node.children:
    raise MalformedInputError('Malformed padding data, expected text only', node.line)

  text = node.text
  if not text.strip():
    raise MalformedInputError('No padding data', node.line)

  padding = bytearray()
  for token in text.replace(',', ' ').split():
    if len(token) != 4 or token[:2] != '0x':
      raise MalformedInputError(f'Malformed padding data "{token}"', node.line)

    c1, c2 = token[2].upper(), token[3].upper()
    if c1 not in HEX_DIGITS or c2 not in HEX_DIGITS:
      raise MalformedInputError(f'Malformed padding data "{token}"', node.line)

    padding.append((HEX_DIGITS.index(c1) << 4) | HEX_DIGITS.index(c2))

  return bytes(padding)

if __name__ == '__main__':
  pass
