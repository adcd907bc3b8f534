'''
### Diagnostics Module

Colored terminal messages for errors and warnings, written to standard error.
'''

import sys
from typing import Final

# Create ANSI formatting for terminal messages
# ANSI COLORS: https://talyian.github.io/ansicolors/
# TERMINAL TEXT COLORS
BRIGHT_RED   : Final = '\x1b[91m'
MAGENTA      : Final = '\x1b[95m'
BRIGHT_WHITE : Final = '\x1b[97m'
GRAY_245     : Final = '\x1b[38;5;245m'
BLUE_39      : Final = '\x1b[38;5;39m'

# TERMINAL TEXT STYLES
RESET : Final = '\x1b[0m' # Resets all text styles and colors

def error(message: str, kind: str | None = None, line: int | None = None, file=None) -> None:
  file = file if file is not None else sys.stderr
  prefix = f'{kind}: ' if kind else ''
  suffix = f' {GRAY_245}(line {line}){BRIGHT_WHITE}' if line is not None else ''
  print(f'{BRIGHT_RED}Error: {BRIGHT_WHITE}{prefix}{message}{suffix}{RESET}', file=file)

def warning(message: str, file=None) -> None:
  file = file if file is not None else sys.stderr
  print(f'{MAGENTA}Warning: {BRIGHT_WHITE}{message}{RESET}', file=file)

def report(exc, file=None) -> None:
  ''' Print a SoundfontError as a diagnostic '''
  error(exc.message, exc.kind, exc.line, file)

if __name__ == '__main__':
  pass
