'''
### Tuning Module

This module holds the audio driver's pitch table and the note naming used by soundfont
descriptions, and computes the tuning value stored alongside every sample reference.

Functions:
    `calc_tuning`:
        Computes the float32 playback ratio for a sample rate and a base note.

    `midinote_to_z64note`:
        Converts a MIDI note number (middle C = 60) to a Z64 note number (middle C = 39).

    `z64_note_name`:
        Returns the name of a Z64 note number (e.g. 39 -> "C4").

    `parse_note_number`:
        Parses a note given either by name or as a raw number.

Dependencies:
    `Helpers`:
        For float32 rounding.

Intended Usage:
    Imported by the soundfont structs when resolving tunings, and by the emitter when
    writing per-semitone drum defines.
'''

from .Helpers import f32

# Target samplerate in-game is 32KHz
PLAYBACK_SAMPLE_RATE: float = 32000.0

# gPitchFrequencies in the audio driver, 2^(note / 12) shifted so that C4 is 1.0
PITCH_FREQUENCIES: tuple[float, ...] = tuple(f32(f) for f in (
  0.105112,   0.111362,   0.117984,   0.125,      0.132433,   0.140308,   0.148651,   0.15749,    # A0   .. E1
  0.166855,   0.176777,   0.187288,   0.198425,   0.210224,   0.222725,   0.235969,   0.25,       # F1   .. C2
  0.264866,   0.280616,   0.297302,   0.31498,    0.33371,    0.353553,   0.374577,   0.39685,    # DF2  .. AF2
  0.420448,   0.445449,   0.471937,   0.5,        0.529732,   0.561231,   0.594604,   0.629961,   # A2   .. E3
  0.66742,    0.707107,   0.749154,   0.793701,   0.840897,   0.890899,   0.943875,   1.0,        # F3   .. C4
  1.059463,   1.122462,   1.189207,   1.259921,   1.33484,    1.414214,   1.498307,   1.587401,   # DF4  .. AF4
  1.681793,   1.781798,   1.887749,   2.0,        2.118926,   2.244924,   2.378414,   2.519842,   # A4   .. E5
  2.66968,    2.828428,   2.996615,   3.174803,   3.363586,   3.563596,   3.775498,   4.0,        # F5   .. C6
  4.237853,   4.489849,   4.756829,   5.039685,   5.33936,    5.656855,   5.993229,   6.349606,   # DF6  .. AF6
  6.727173,   7.127192,   7.550996,   8.0,        8.475705,   8.979697,   9.513658,   10.07937,   # A6   .. E7
  10.6787205, 11.31371,   11.986459,  12.699211,  13.454346,  14.254383,  15.101993,  16.0,       # F7   .. C8
  16.95141,   17.959395,  19.027315,  20.15874,   21.35744,   22.62742,   23.972918,  25.398422,  # DF8  .. AF8
  26.908691,  28.508766,  30.203985,  32.0,       33.90282,   35.91879,   38.05463,   40.31748,   # A8   .. E9
  42.71488,   45.25484,   47.945835,  50.796845,  53.817383,  57.017532,  60.40797,   64.0,       # F9   .. C10
  67.80564,   71.83758,   76.10926,   80.63496,   85.42976,   0.055681,   0.058992,   0.0625,     # DF10 .. C0
  0.066216,   0.070154,   0.074325,   0.078745,   0.083427,   0.088388,   0.093644,   0.099213,   # DF0  .. AF0
))

NOTE_NAMES: tuple[str, ...] = (
  'A0',  'BF0', 'B0',  'C1',  'DF1', 'D1',  'EF1', 'E1',   'F1',  'GF1',  'G1',  'AF1', 'A1',     'BF1',   'B1',
  'C2',  'DF2', 'D2',  'EF2', 'E2',  'F2',  'GF2', 'G2',   'AF2', 'A2',   'BF2', 'B2',  'C3',     'DF3',   'D3',
  'EF3', 'E3',  'F3',  'GF3', 'G3',  'AF3', 'A3',  'BF3',  'B3',  'C4',   'DF4', 'D4',  'EF4',    'E4',    'F4',
  'GF4', 'G4',  'AF4', 'A4',  'BF4', 'B4',  'C5',  'DF5',  'D5',  'EF5',  'E5',  'F5',  'GF5',    'G5',    'AF5',
  'A5',  'BF5', 'B5',  'C6',  'DF6', 'D6',  'EF6', 'E6',   'F6',  'GF6',  'G6',  'AF6', 'A6',     'BF6',   'B6',
  'C7',  'DF7', 'D7',  'EF7', 'E7',  'F7',  'GF7', 'G7',   'AF7', 'A7',   'BF7', 'B7',  'C8',     'DF8',   'D8',
  'EF8', 'E8',  'F8',  'GF8', 'G8',  'AF8', 'A8',  'BF8',  'B8',  'C9',   'DF9', 'D9',  'EF9',    'E9',    'F9',
  'GF9', 'G9',  'AF9', 'A9',  'BF9', 'B9',  'C10', 'DF10', 'D10', 'EF10', 'E10', 'F10', 'BFNEG1', 'BNEG1', 'C0',
  'DF0', 'D0',  'EF0', 'E0',  'F0',  'GF0', 'G0',  'AF0',
)

NOTE_NUMBERS: dict[str, int] = {name: i for i, name in enumerate(NOTE_NAMES)}

def calc_tuning(sample_rate: float, base_note: int) -> float:
  ''' (sample_rate / 32000) * 2^(base_note / 12), evaluated in float32 like the audio driver '''
  ratio = f32(f32(sample_rate) / PLAYBACK_SAMPLE_RATE)
  return f32(ratio * PITCH_FREQUENCIES[base_note])

def midinote_to_z64note(note: int) -> int:
  z64note = note - 21
  if z64note < 0: # % 128
    z64note += 128
  return z64note

def wrap_note(note: int) -> int:
  return note - 128 if note > 127 else note

def z64_note_name(note: int) -> str:
  return NOTE_NAMES[note]

def parse_note_number(text: str) -> int:
  ''' Accepts a note name ("C4", "BF3") or a number in 0..127 '''
  text = text.strip()
  if text in NOTE_NUMBERS:
    return NOTE_NUMBERS[text]

  note = int(text, 16) if text.lower().startswith('0x') else int(text)
  if not 0 <= note <= 127:
    raise ValueError(f'note number {note} out of range')
  return note

if __name__ == '__main__':
  pass
