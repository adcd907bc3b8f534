'''
### XMLParser Module

This module provides the markup layer the soundfont readers are written against: a
line-numbered element tree built from an XML document, typed attribute coercion, and
declaration tables describing which attributes an element accepts.

Classes:
    `XMLNode`:
        A single element with its ordered attributes, element children, text and line.

    `AttrSpec`:
        One row of a declaration table (attribute name, optional flag, coercion, field).

Functions:
    `parse_xml_file` / `parse_xml_string`:
        Build an `XMLNode` tree from a file or a string.

    `parse_by_spec`:
        Coerce a node's attributes through a declaration table into a dictionary.

    `parse_c_identifier`, `parse_u8`, `parse_s16`, `parse_int`, `parse_double`,
    `parse_bool`, `parse_note_number`, `parse_text`:
        Attribute coercions.

Dependencies:
    `xml.parsers.expat`:
        Drives tree construction and reports the line of every start tag.

Intended Usage:
    This module is intended for internal use during soundfont reading. Every error it raises
    carries the line number of the offending element.
'''

from typing import NamedTuple, Callable, Any
from xml.parsers import expat

from .Errors import MalformedInputError
from .Helpers import is_c_identifier
from .Tuning import parse_note_number as _parse_note

class XMLNode:
  ''' An element in a soundfont description '''
  def __init__(self, tag: str, attributes: dict[str, str], line: int):
    self.tag = tag
    self.attributes = attributes # document order
    self.line = line
    self.children: list['XMLNode'] = []
    self.text_parts: list[str] = []

  @property
  def text(self) -> str:
    return ''.join(self.text_parts)

  @property
  def has_attributes(self) -> bool:
    return len(self.attributes) != 0

  @property
  def is_empty(self) -> bool:
    return not self.attributes and not self.children

  def get(self, name: str, default=None):
    return self.attributes.get(name, default)

  def __iter__(self):
    return iter(self.children)

  def __repr__(self) -> str:
    return f'<XMLNode {self.tag} line={self.line}>'

class _TreeBuilder:
  def __init__(self):
    self.parser = expat.ParserCreate()
    self.parser.ordered_attributes = True
    self.parser.StartElementHandler = self.start
    self.parser.EndElementHandler = self.end
    self.parser.CharacterDataHandler = self.data

    self.stack: list[XMLNode] = []
    self.root = None

  def start(self, tag, attrs):
    attributes = dict(zip(attrs[0::2], attrs[1::2]))
    node = XMLNode(tag, attributes, self.parser.CurrentLineNumber)

    if self.stack:
      self.stack[-1].children.append(node)
    else:
      self.root = node
    self.stack.append(node)

  def end(self, tag):
    self.stack.pop()

  def data(self, text):
    if self.stack:
      self.stack[-1].text_parts.append(text)

  def feed(self, data) -> XMLNode:
    try:
      self.parser.Parse(data, True)
    except expat.ExpatError as e:
      raise MalformedInputError(f'XML syntax error: {expat.ErrorString(e.code)}', e.lineno) from e
    return self.root

def parse_xml_string(data) -> XMLNode:
  return _TreeBuilder().feed(data)

def parse_xml_file(filename) -> XMLNode:
  with open(filename, 'rb') as f:
    data = f.read()
  return parse_xml_string(data)

''' Attribute Coercions '''
def parse_c_identifier(text: str) -> str:
  if not is_c_identifier(text):
    raise ValueError(f'"{text}" is not a valid C identifier')
  return text

def parse_int(text: str) -> int:
  text = text.strip()
  return int(text, 16) if text.lower().startswith(('0x', '-0x')) else int(text)

def _ranged(low: int, high: int, what: str) -> Callable[[str], int]:
  def parse(text: str) -> int:
    value = parse_int(text)
    if not low <= value <= high:
      raise ValueError(f'{value} does not fit in {what}')
    return value
  return parse

parse_u8  = _ranged(0, 0xFF, 'u8')
parse_s16 = _ranged(-0x8000, 0x7FFF, 's16')

def parse_double(text: str) -> float:
  return float(text)

def parse_bool(text: str) -> bool:
  value = text.strip().lower()
  if value in ('true', '1'):
    return True
  if value in ('false', '0'):
    return False
  raise ValueError(f'"{text}" is not a boolean')

def parse_note_number(text: str) -> int:
  return _parse_note(text)

def parse_text(text: str) -> str:
  return text

''' Declaration Tables '''
class AttrSpec(NamedTuple):
  name: str
  optional: bool
  parse: Callable[[str], Any]
  field: str

def parse_by_spec(node: XMLNode, spec: tuple[AttrSpec, ...]) -> dict[str, Any]:
  ''' Returns {field: value} for every attribute present; unknown and missing required attributes are errors '''
  by_name = {entry.name: entry for entry in spec}

  for attr_name in node.attributes:
    if attr_name not in by_name:
      raise MalformedInputError(f'Unexpected attribute "{attr_name}" on <{node.tag}>', node.line)

  values = {}
  for entry in spec:
    text = node.attributes.get(entry.name)

    if text is None:
      if not entry.optional:
        raise MalformedInputError(f'Missing required attribute "{entry.name}" on <{node.tag}>', node.line)
      continue

    try:
      values[entry.field] = entry.parse(text)
    except ValueError as e:
      raise MalformedInputError(f'Bad value for attribute "{entry.name}" on <{node.tag}>: {e}', node.line) from e

  return values

if __name__ == '__main__':
  pass
