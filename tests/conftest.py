import copy

import pytest
import yaml

from sfcompiler.Waveform import Samplebank
from sfcompiler.XMLParser import parse_xml_string
from sfcompiler.soundfont.Soundfont import Soundfont

BOOK = {
  'order': 2,
  'predictors': [
    [-0x0100, 0x0200, 0x0300, 0x0400, 0x0500, 0x0600, 0x0700, 0x0800,
     0x0900, 0x0A00, 0x0B00, 0x0C00, 0x0D00, 0x0E00, 0x0F00, 0x1000],
    [0x1100, 0x1200, 0x1300, 0x1400, 0x1500, 0x1600, 0x1700, 0x1800,
     0x1900, 0x1A00, 0x1B00, 0x1C00, 0x1D00, 0x1E00, 0x1F00, 0x2000],
  ],
}

OTHER_BOOK = {
  'order': 2,
  'predictors': [[1] * 16, [2] * 16],
}

def waveform(sample_rate=32000, base_note=60, size=0x900, book=BOOK, loop=None, codec='ADP9'):
  entry = {
    'sample rate': sample_rate,
    'codec': codec,
    'size': size,
    'book': copy.deepcopy(book),
    'loop': loop if loop is not None else {'start': 0, 'end': 4096, 'count': 0},
  }
  if base_note is not None:
    entry['base note'] = base_note
  return entry

SAMPLEBANK = {
  'name': 'SampleBank_0',
  'samples': {
    'kick':     waveform(),
    'snare':    waveform(sample_rate=16000),
    'hat':      waveform(book=OTHER_BOOK),
    'kick_alt': waveform(),
    'looped':   waveform(loop={'start': 0, 'end': 4096, 'count': -1, 'state': list(range(16))}),
    'no_note':  waveform(base_note=None),
    'no_loop':  waveform(),
  },
}
SAMPLEBANK['samples']['no_loop'].pop('loop')

SAMPLEBANK_DD = {
  'name': 'SampleBank_DD',
  'samples': {
    'kick': waveform(sample_rate=22050),
  },
}

ROOT_ATTRS = 'Name="Soundfont_Test" Index="0" Medium="Cart" CachePolicy="Temporary" SampleBank="samplebank.yaml"'

def soundfont_xml(body: str, attrs: str = '') -> str:
  return f'<?xml version="1.0" encoding="UTF-8"?>\n<Soundfont {ROOT_ATTRS} {attrs}>\n{body}\n</Soundfont>\n'

@pytest.fixture
def samplebank():
  return Samplebank.from_yaml(copy.deepcopy(SAMPLEBANK), 'samplebank.yaml')

@pytest.fixture
def samplebank_dd():
  return Samplebank.from_yaml(copy.deepcopy(SAMPLEBANK_DD), 'samplebank_dd.yaml')

@pytest.fixture
def make_soundfont(samplebank):
  ''' Builds a Soundfont from the body of a <Soundfont> element '''
  def make(body: str, attrs: str = '', matching: bool = False, samplebank_dd=None):
    root = parse_xml_string(soundfont_xml(body, attrs))
    return Soundfont.from_xml(root, matching=matching, samplebank=samplebank, samplebank_dd=samplebank_dd)
  return make

@pytest.fixture
def samplebank_file(tmp_path):
  path = tmp_path / 'samplebank.yaml'
  with open(path, 'w') as f:
    yaml.safe_dump(copy.deepcopy(SAMPLEBANK), f, sort_keys=False)
  return path

KICK_BODY = '''
  <Envelopes>
    <Envelope Name="Env0" Release="10">
      <Point Delay="10" Arg="5"/>
    </Envelope>
  </Envelopes>
  <Samples>
    <Sample Name="kick"/>
  </Samples>
  <Instruments>
    <Instrument Name="INST_KICK" Envelope="Env0" Sample="kick"/>
  </Instruments>
'''
