import pytest

from sfcompiler.Enums import AudioStorageMedium, CacheLoadType, EnvelopeOpcodes
from sfcompiler.Errors import MalformedInputError, SemanticError, WaveformError
from sfcompiler.Tuning import calc_tuning, midinote_to_z64note, NOTE_NUMBERS
from sfcompiler.Waveform import Samplebank

from conftest import waveform

ENVELOPES = '''
  <Envelopes>
    <Envelope Name="Env0" Release="10">
      <Point Delay="10" Arg="5"/>
    </Envelope>
    <Envelope Name="Env1" Release="200">
      <Point Delay="1" Arg="32700"/>
      <Point Delay="-5" Arg="-1"/>
      <Disable/>
      <Goto Index="1"/>
      <Restart/>
      <Hang/>
    </Envelope>
  </Envelopes>
'''

SAMPLES = '''
  <Samples>
    <Sample Name="kick"/>
    <Sample Name="snare" BaseNote="A4"/>
    <Sample Name="hat" SampleRate="16000"/>
  </Samples>
'''

def instruments(*lines: str) -> str:
  return ENVELOPES + SAMPLES + '<Instruments>\n' + '\n'.join(lines) + '\n</Instruments>'


''' Soundfont info '''
def test_soundfont_info(make_soundfont):
  sf = make_soundfont('', attrs='PadToSize="0x100" LoopsHaveFrames="true" Indirect="3"')

  assert sf.info.name == 'Soundfont_Test'
  assert sf.info.index == 0
  assert sf.info.medium is AudioStorageMedium.MEDIUM_CART
  assert sf.info.cache_policy is CacheLoadType.CACHE_LOAD_TEMPORARY
  assert sf.info.pad_to_size == 0x100
  assert sf.info.loops_have_frames is True
  assert sf.info.pointer_index == 3


def test_bad_medium(samplebank):
  from sfcompiler.XMLParser import parse_xml_string
  from sfcompiler.soundfont.Soundfont import Soundfont

  root = parse_xml_string('<Soundfont Name="A" Index="0" Medium="Floppy" CachePolicy="Temporary" SampleBank="x.yaml"/>')
  with pytest.raises(MalformedInputError, match='medium'):
    Soundfont.from_xml(root, samplebank=samplebank)


def test_root_must_be_soundfont(samplebank):
  from sfcompiler.XMLParser import parse_xml_string
  from sfcompiler.soundfont.Soundfont import Soundfont

  with pytest.raises(MalformedInputError, match='Root'):
    Soundfont.from_xml(parse_xml_string('<Bank/>'), samplebank=samplebank)


def test_unexpected_top_level_element(make_soundfont):
  with pytest.raises(MalformedInputError, match='Sequences'):
    make_soundfont('<Sequences/>')


''' Envelopes '''
def test_envelope_points(make_soundfont):
  sf = make_soundfont(ENVELOPES)
  env0, env1 = sf.envelopes

  assert env0.name == 'Env0'
  assert env0.release == 10
  assert env0.points == [(10, 5)]
  assert env0.struct_size == 8

  assert env1.points == [
    (1, 32700),
    (-5, -1),
    (EnvelopeOpcodes.DISABLE, 0),
    (EnvelopeOpcodes.GOTO, 1),
    (EnvelopeOpcodes.RESTART, 0),
    (EnvelopeOpcodes.HANG, 0),
  ]
  assert env1.struct_size == 4 * 7


def test_empty_envelope(make_soundfont):
  sf = make_soundfont('<Envelopes><Envelope/><Envelope Name="Env0" Release="1"><Hang/></Envelope></Envelopes>')
  empty, env0 = sf.envelopes

  assert empty.is_empty
  assert empty.struct_size == 0x10
  assert 'Env0' in sf.envelope_registry
  assert len(sf.envelope_registry) == 1


def test_duplicate_envelope(make_soundfont):
  body = '''
  <Envelopes>
    <Envelope Name="Env0" Release="1"><Hang/></Envelope>
    <Envelope Name="Env0" Release="2"><Hang/></Envelope>
  </Envelopes>'''
  with pytest.raises(SemanticError, match='Duplicate envelope') as e:
    make_soundfont(body)
  assert e.value.line == 6


def test_unexpected_envelope_command(make_soundfont):
  body = '<Envelopes><Envelope Name="Env0" Release="1"><Sustain/></Envelope></Envelopes>'
  with pytest.raises(MalformedInputError, match='Sustain'):
    make_soundfont(body)


def test_envelope_point_out_of_range(make_soundfont):
  body = '<Envelopes><Envelope Name="Env0" Release="1"><Point Delay="40000" Arg="0"/></Envelope></Envelopes>'
  with pytest.raises(MalformedInputError, match='Delay'):
    make_soundfont(body)


''' Samples '''
def test_sample_defaults_from_waveform(make_soundfont):
  sf = make_soundfont(SAMPLES)
  kick, snare, hat = sf.samples

  assert kick.sample_rate == 32000
  assert kick.base_note == NOTE_NUMBERS['C4']
  assert kick.samplebank_name == 'SampleBank_0'
  assert kick.is_dd is False and kick.cached is False

  assert snare.sample_rate == 16000
  assert snare.base_note == NOTE_NUMBERS['A4']

  assert hat.sample_rate == 16000


def test_samples_list_defaults(make_soundfont):
  sf = make_soundfont('<Samples Cached="true"><Sample Name="kick"/><Sample Name="hat" Cached="false"/></Samples>')
  kick, hat = sf.samples
  assert kick.cached is True
  assert hat.cached is False


def test_dd_samples_use_dd_samplebank(make_soundfont, samplebank_dd):
  sf = make_soundfont('<Samples><Sample Name="kick" IsDD="true"/></Samples>', samplebank_dd=samplebank_dd)
  [kick] = sf.samples

  assert kick.samplebank_name == 'SampleBank_DD'
  assert kick.sample_rate == 22050


def test_dd_sample_without_dd_samplebank(make_soundfont):
  sf = make_soundfont('<Samples><Sample Name="kick" IsDD="true"/></Samples>')
  assert sf.samples[0].samplebank_name == 'SampleBank_0'


def test_duplicate_sample(make_soundfont):
  with pytest.raises(SemanticError, match='Duplicate sample'):
    make_soundfont('<Samples><Sample Name="kick"/><Sample Name="kick"/></Samples>')


def test_unknown_sample(make_soundfont):
  with pytest.raises(WaveformError, match='not found') as e:
    make_soundfont('<Samples>\n<Sample Name="tuba"/></Samples>')
  assert e.value.line == 4


def test_sample_without_base_note(make_soundfont):
  with pytest.raises(WaveformError, match='basenote'):
    make_soundfont('<Samples><Sample Name="no_note"/></Samples>')

  sf = make_soundfont('<Samples><Sample Name="no_note" BaseNote="C4"/></Samples>')
  assert sf.samples[0].base_note == 39


@pytest.mark.parametrize('base_note', [128, 200, -1, -200, 60.5, '60', True])
def test_samplebank_base_note_out_of_range(base_note):
  samplebank = {'name': 'SampleBank_0', 'samples': {'kick': waveform(base_note=base_note)}}
  with pytest.raises(WaveformError, match='Bad base note'):
    Samplebank.from_yaml(samplebank, 'samplebank.yaml')


@pytest.mark.parametrize('base_note, z64_note', [(0, 107), (21, 0), (127, 106)])
def test_samplebank_base_note_bounds(base_note, z64_note):
  samplebank = Samplebank.from_yaml({'name': 'SampleBank_0', 'samples': {'kick': waveform(base_note=base_note)}})
  assert samplebank.get('kick').base_note == base_note
  assert midinote_to_z64note(base_note) == z64_note


def test_sample_without_loop(make_soundfont):
  with pytest.raises(WaveformError, match='No loop'):
    make_soundfont('<Samples><Sample Name="no_loop"/></Samples>')


''' Instruments '''
def test_instrument_attribute_form(make_soundfont):
  sf = make_soundfont(instruments(
    '<Instrument Name="INST_A" Envelope="Env0" Sample="kick"/>',
    '<Instrument Name="INST_B" Envelope="Env1" Release="3" RangeLo="10" SampleLo="hat" Sample="kick" RangeHi="60" SampleHi="snare" BaseNoteHi="C4"/>',
  ))
  a, b = sf.instruments

  assert a.release == 10
  assert a.envelope is sf.envelopes[0]
  assert a.low_sample is None and a.high_sample is None
  assert a.prim_sample.sample is sf.samples[0]
  assert a.prim_sample.tuning == 1.0

  assert b.release == 3
  assert b.range_lo == 10
  assert b.range_hi == 60
  assert b.low_sample.tuning == calc_tuning(16000, NOTE_NUMBERS['C4'])
  # BaseNoteHi overrides the sample's A4
  assert b.high_sample.base_note == NOTE_NUMBERS['C4']
  assert b.high_sample.tuning == calc_tuning(16000, NOTE_NUMBERS['C4'])


def test_instrument_sample_list_form(make_soundfont):
  sf = make_soundfont(instruments(
    '<Instrument Name="FIRE_WIND" Envelope="Env0" RangeHi="62">',
    '  <Sample Mid="kick"/>',
    '  <Sample High="snare"/>',
    '</Instrument>',
  ))
  [instrument] = sf.instruments

  assert instrument.prim_sample.sample_name == 'kick'
  assert instrument.high_sample.sample_name == 'snare'
  assert instrument.low_sample is None


def test_instrument_unset_but_used_low(make_soundfont):
  with pytest.raises(SemanticError, match='Unset-but-used Low'):
    make_soundfont(instruments('<Instrument Name="INST_A" Envelope="Env0" RangeLo="10" Sample="kick"/>'))


def test_instrument_unset_but_used_high_in_sample_list(make_soundfont):
  with pytest.raises(SemanticError, match='Unset-but-used High'):
    make_soundfont(instruments(
      '<Instrument Name="INST_A" Envelope="Env0" RangeHi="60">',
      '  <Sample Mid="kick"/>',
      '</Instrument>',
    ))


def test_instrument_unset_but_used_mid(make_soundfont):
  with pytest.raises(SemanticError, match='Unset-but-used Mid'):
    make_soundfont(instruments(
      '<Instrument Name="INST_A" Envelope="Env0" RangeHi="60">',
      '  <Sample High="kick"/>',
      '</Instrument>',
    ))


@pytest.mark.parametrize('line', [
  '<Instrument Name="INST_A" Envelope="Env0" Sample="kick" SampleLo="hat"/>',
  '<Instrument Name="INST_A" Envelope="Env0" Sample="kick" SampleHi="hat"/>',
])
def test_instrument_useless_sample(make_soundfont, line):
  with pytest.raises(SemanticError, match='Useless'):
    make_soundfont(instruments(line))


def test_instrument_useless_sample_in_sample_list(make_soundfont):
  with pytest.raises(SemanticError, match='Useless Low'):
    make_soundfont(instruments(
      '<Instrument Name="INST_A" Envelope="Env0" RangeHi="60">',
      '  <Sample Low="hat"/>',
      '  <Sample Mid="kick"/>',
      '  <Sample High="snare"/>',
      '</Instrument>',
    ))


def test_instrument_without_sample_needs_a_range(make_soundfont):
  with pytest.raises(SemanticError, match='RangeLo or RangeHi'):
    make_soundfont(instruments(
      '<Instrument Name="INST_A" Envelope="Env0">',
      '  <Sample Mid="kick"/>',
      '</Instrument>',
    ))


@pytest.mark.parametrize('children, message', [
  ('<Sample Mid="kick"/><Sample Mid="kick"/>', 'Duplicate'),
  ('<Sample Mid="kick" High="snare"/>', 'exactly one attribute'),
  ('<Sample Middle="kick"/>', 'Unexpected attribute'),
  ('<Sample/>', 'Expected a Low/Mid/High'),
  ('<Tuning Mid="kick"/>', 'Unexpected element'),
  ('', 'Sample list is empty'),
])
def test_instrument_bad_sample_list(make_soundfont, children, message):
  with pytest.raises(MalformedInputError, match=message):
    make_soundfont(instruments(f'<Instrument Name="INST_A" Envelope="Env0" RangeHi="60">{children}</Instrument>'))


def test_instrument_unknown_envelope(make_soundfont):
  with pytest.raises(SemanticError, match='Bad envelope name Env9'):
    make_soundfont(instruments('<Instrument Name="INST_A" Envelope="Env9" Sample="kick"/>'))


def test_instrument_unknown_sample(make_soundfont):
  with pytest.raises(SemanticError, match='Bad sample name tuba'):
    make_soundfont(instruments('<Instrument Name="INST_A" Envelope="Env0" Sample="tuba"/>'))


def test_instrument_must_be_named(make_soundfont):
  with pytest.raises(SemanticError, match='must be named'):
    make_soundfont(instruments('<Instrument Envelope="Env0" Sample="kick"/>'))


def test_unused_and_placeholder_instruments(make_soundfont):
  sf = make_soundfont(instruments(
    '<Instrument/>',
    '<InstrumentUnused Envelope="Env0" Sample="kick"/>',
    '<Instrument Name="INST_A" Envelope="Env0" Sample="kick"/>',
  ))
  placeholder, unused, named = sf.instruments

  assert placeholder.is_placeholder
  assert placeholder.struct_index == -1
  assert unused.unused and not unused.is_placeholder
  assert unused.prim_sample.sample is sf.samples[0]

  assert sf.pointer_table_instruments() == [placeholder, named]
  assert sf.num_instruments == 2


''' Drums '''
def drums(*lines: str) -> str:
  return ENVELOPES + SAMPLES + '<Drums>\n' + '\n'.join(lines) + '\n</Drums>'


def test_drum_ranges(make_soundfont):
  sf = make_soundfont(drums(
    '<Drum Name="KICK" Semitone="3" Pan="64" Envelope="Env0" Sample="kick"/>',
    '<Drum Name="SNARE" SemitoneStart="4" SemitoneEnd="7" Pan="32" Envelope="Env1" Sample="snare" Release="5"/>',
    '<Drum/>',
  ))
  kick, snare, placeholder = sf.drums

  assert (kick.semitone_start, kick.semitone_end) == (3, 3)
  assert kick.release == 10
  assert kick.base_note == NOTE_NUMBERS['C4']

  assert (snare.semitone_start, snare.semitone_end, snare.length) == (4, 7, 4)
  assert snare.release == 5
  assert snare.pan == 32
  assert snare.base_note == NOTE_NUMBERS['A4']
  assert snare.sample_rate == 16000

  assert placeholder.is_placeholder


@pytest.mark.parametrize('attrs, message', [
  ('SemitoneStart="1"', 'Incomplete'),
  ('SemitoneEnd="1"', 'Incomplete'),
  ('', 'Incomplete'),
  ('Semitone="1" SemitoneEnd="2"', 'Overspecified'),
  ('SemitoneStart="5" SemitoneEnd="2"', 'Invalid drum semitone range'),
])
def test_drum_bad_ranges(make_soundfont, attrs, message):
  with pytest.raises(SemanticError, match=message):
    make_soundfont(drums(f'<Drum Name="KICK" {attrs} Pan="64" Envelope="Env0" Sample="kick"/>'))


''' Effects '''
def test_effects(make_soundfont):
  sf = make_soundfont(SAMPLES + '''
  <Effects>
    <Effect Name="SFX_KICK" Sample="kick"/>
    <Effect/>
    <Effect Name="SFX_SILENT" Sample="NONE"/>
    <Effect Name="SFX_SLOW" Sample="kick" SampleRate="16000" BaseNote="C4"/>
  </Effects>''')
  kick, placeholder, silent, slow = sf.effects

  assert kick.tuning == 1.0
  assert placeholder.is_placeholder and placeholder.sample is None
  assert silent.name == 'SFX_SILENT' and silent.sample is None and silent.tuning == 0.0
  assert slow.tuning == 0.5
  assert sf.num_effects == 4


def test_effect_unknown_sample(make_soundfont):
  with pytest.raises(SemanticError, match='Bad sample name'):
    make_soundfont(SAMPLES + '<Effects><Effect Name="SFX" Sample="tuba"/></Effects>')


''' Names '''
INSTRUMENT_X = '<Instrument Name="X" Envelope="Env0" Sample="kick"/>'
DRUM_X = '<Drum Name="X" Semitone="0" Pan="64" Envelope="Env0" Sample="kick"/>'
EFFECT_X = '<Effect Name="X" Sample="kick"/>'

@pytest.mark.parametrize('lists', [
  f'<Instruments>{INSTRUMENT_X}\n{INSTRUMENT_X}</Instruments>',
  f'<Instruments>{INSTRUMENT_X}</Instruments>\n<Drums>{DRUM_X}</Drums>',
  f'<Drums>{DRUM_X}</Drums>\n<Effects>{EFFECT_X}</Effects>',
  f'<Effects>{EFFECT_X}</Effects>\n<Instruments>{INSTRUMENT_X}</Instruments>',
  f'<Instruments><InstrumentUnused Name="X" Envelope="Env0" Sample="kick"/></Instruments>\n<Effects>{EFFECT_X}</Effects>',
])
def test_duplicate_names(make_soundfont, lists):
  # Envelopes and samples are read first wherever they are, so the lists start on line 3
  with pytest.raises(SemanticError, match='Duplicate name X') as e:
    make_soundfont(lists + ENVELOPES + SAMPLES)
  assert e.value.line == 4


def test_placeholders_are_not_duplicates(make_soundfont):
  sf = make_soundfont(ENVELOPES + SAMPLES + '''
  <Instruments><Instrument/><Instrument/></Instruments>
  <Drums><Drum/><Drum/></Drums>
  <Effects><Effect/><Effect/></Effects>''')

  assert len(sf.instruments) == len(sf.drums) == len(sf.effects) == 2
  assert len(sf.define_registry) == 0


''' Match padding '''
def test_match_padding(make_soundfont):
  sf = make_soundfont('<MatchPadding>0x00, 0x1A 0xff,0x7F\n  0x80</MatchPadding>')
  assert sf.match_padding == bytes([0x00, 0x1A, 0xFF, 0x7F, 0x80])


@pytest.mark.parametrize('body', [
  '<MatchPadding>0x0</MatchPadding>',
  '<MatchPadding>0x0G</MatchPadding>',
  '<MatchPadding>0x000x01</MatchPadding>',
  '<MatchPadding>00</MatchPadding>',
  '<MatchPadding></MatchPadding>',
  '<MatchPadding Size="1">0x00</MatchPadding>',
  '<MatchPadding><Byte/></MatchPadding>',
])
def test_bad_match_padding(make_soundfont, body):
  with pytest.raises(MalformedInputError):
    make_soundfont(body)
