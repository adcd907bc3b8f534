import os
import stat

import pytest

from conftest import KICK_BODY, soundfont_xml
from soundfont_compiler import main, parse_args

@pytest.fixture
def project(tmp_path, samplebank_file):
  ''' A directory holding samplebank.yaml, returns a function writing the soundfont xml beside it '''
  def write(body: str):
    path = tmp_path / 'Soundfont_Test.xml'
    path.write_text(soundfont_xml(body))
    return path
  return write

def outputs(tmp_path):
  return [tmp_path / 'sf.c', tmp_path / 'sf.h', tmp_path / 'sf.name']

def run(xml_path, tmp_path, *flags):
  return main([*flags, str(xml_path), *(str(p) for p in outputs(tmp_path))])


def test_parse_args():
  args = parse_args(['--matching', 'in.xml', 'out.c', 'out.h', 'out.name'])

  assert args.matching
  assert (args.xml, args.out_c, args.out_h, args.out_name) == ('in.xml', 'out.c', 'out.h', 'out.name')


def test_bad_usage_exits_with_1(capsys):
  with pytest.raises(SystemExit) as exc_info:
    parse_args(['in.xml', 'out.c', 'out.h'])

  assert exc_info.value.code == 1
  assert 'usage' in capsys.readouterr().err


def test_compiles_all_outputs(project, tmp_path):
  assert run(project(KICK_BODY), tmp_path) == 0

  out_c, out_h, out_name = outputs(tmp_path)
  assert out_c.read_text().startswith('#include "soundfont_file.h"\n\n// HEADER\n')
  assert 'NO_REORDER DATA Instrument INST_KICK = {' in out_c.read_text()
  assert '#define INST_KICK 0\n' in out_h.read_text()
  assert out_name.read_text() == 'Soundfont_Test'

  # No temporary files are left behind
  assert sorted(p.name for p in tmp_path.iterdir()) == ['Soundfont_Test.xml', 'samplebank.yaml', 'sf.c', 'sf.h', 'sf.name']


@pytest.mark.skipif(os.name != 'posix', reason='file modes are POSIX only')
def test_outputs_follow_umask(project, tmp_path):
  old_umask = os.umask(0o022)
  try:
    assert run(project(KICK_BODY), tmp_path) == 0
  finally:
    os.umask(old_umask)

  for path in outputs(tmp_path):
    assert stat.S_IMODE(path.stat().st_mode) == 0o644


def test_matching_flag(project, tmp_path):
  body = KICK_BODY.replace('<Envelopes>', '<Envelopes><Envelope/>')

  assert run(project(body), tmp_path) == 0
  assert 'ENV_EMPTY' not in outputs(tmp_path)[0].read_text()

  assert run(project(body), tmp_path, '--matching') == 0
  assert 'SF0_ENV_EMPTY_0' in outputs(tmp_path)[0].read_text()


def test_error_writes_nothing(project, tmp_path, capsys):
  body = KICK_BODY.replace('Sample="kick"/>', 'Sample="kick" RangeLo="10"/>')

  assert run(project(body), tmp_path) == 1
  assert not any(p.exists() for p in outputs(tmp_path))
  assert 'Unset-but-used Low sample' in capsys.readouterr().err


def test_missing_samplebank(tmp_path, capsys):
  path = tmp_path / 'Soundfont_Test.xml'
  path.write_text(soundfont_xml(KICK_BODY))

  assert run(path, tmp_path) == 1
  assert 'Could not read samplebank' in capsys.readouterr().err


def test_missing_xml(tmp_path, capsys):
  assert run(tmp_path / 'missing.xml', tmp_path) == 1
  assert 'Could not read' in capsys.readouterr().err
  assert not any(p.exists() for p in outputs(tmp_path))
