''' A script for compiling Zelda64 soundfont XML descriptions into C definitions, C declarations and a name marker '''

# Define current version
CURRENT_VERSION = '2025.06.14'

# Imports
import os
import sys
import argparse
import tempfile
from typing import Final

from sfcompiler.Diagnostics import error, report
from sfcompiler.Emitter import emit_soundfont, emit_declarations, emit_name
from sfcompiler.Errors import SoundfontError
from sfcompiler.XMLParser import parse_xml_file
from sfcompiler.soundfont.Soundfont import Soundfont

# Create ANSI formatting for terminal messages
# ANSI COLORS: https://talyian.github.io/ansicolors/
# TERMINAL TEXT COLORS
YELLOW_229 : Final = '\x1b[38;5;229m'
BLUE_39    : Final = '\x1b[38;5;39m'
GRAY_245   : Final = '\x1b[38;5;245m'
GRAY_248   : Final = '\x1b[38;5;248m'

# TERMINAL TEXT STYLES
RESET : Final = '\x1b[0m' # Resets all text styles and colors

class UsageParser(argparse.ArgumentParser):
  ''' Exits with status 1 on bad usage '''
  def error(self, message):
    self.print_usage(sys.stderr)
    print(f'{os.path.basename(sys.argv[0])}: error: {message}', file=sys.stderr)
    sys.exit(1)

# Argument Parser
def parse_args(argv=None):
  parser = UsageParser(
    formatter_class=argparse.RawDescriptionHelpFormatter,
    usage=f'{GRAY_248}[>_]{RESET} {YELLOW_229}python{RESET} {BLUE_39}{os.path.basename(sys.argv[0])}{RESET} {GRAY_245}[--matching]{RESET} {BLUE_39}<filename.xml> <out.c> <out.h> <out.name>{RESET}',
    description='''This script compiles a Zelda64 soundfont XML description into C source that rebuilds the soundfont.'''
  )

  parser.add_argument('xml',      help="the soundfont XML description")
  parser.add_argument('out_c',    help="output file for the soundfont C definitions")
  parser.add_argument('out_h',    help="output file for the soundfont C declarations")
  parser.add_argument('out_name', help="output file for the soundfont name marker")
  parser.add_argument(
    '--matching',
    action='store_true',
    help="emit the structures only the original soundfonts carry (empty envelopes)"
  )
  parser.add_argument('--version', action='version', version=CURRENT_VERSION)

  return parser.parse_args(argv)

''' File Writing Functions '''
def write_atomic(filename: str, text: str) -> None:
  ''' Writes to a temporary file beside the target, then moves it into place '''
  directory = os.path.dirname(os.path.abspath(filename))
  fd, temp_path = tempfile.mkstemp(dir=directory, prefix=f'.{os.path.basename(filename)}.', suffix='.tmp')

  try:
    with os.fdopen(fd, 'w', newline='\n') as f:
      f.write(text)

    # mkstemp creates 0600 files, published files follow the umask
    umask = os.umask(0)
    os.umask(umask)
    os.chmod(temp_path, 0o666 & ~umask)

    os.replace(temp_path, filename)
  except BaseException:
    os.unlink(temp_path)
    raise

''' Main Function '''
def main(argv=None) -> int:
  args = parse_args(argv)

  try:
    root = parse_xml_file(args.xml)
    soundfont = Soundfont.from_xml(root, os.path.dirname(os.path.abspath(args.xml)), args.matching)

    # Everything is emitted before anything is written
    outputs = {
      args.out_c:    emit_soundfont(soundfont),
      args.out_h:    emit_declarations(soundfont),
      args.out_name: emit_name(soundfont),
    }
  except SoundfontError as e:
    report(e)
    return 1
  except OSError as e:
    error(f'Could not read {args.xml}: {e.strerror}')
    return 1

  for filename, text in outputs.items():
    write_atomic(filename, text)

  return 0

if __name__ == '__main__':
  sys.exit(main())
