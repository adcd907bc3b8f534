'''
### Emitter Module

This module walks a fully read `Soundfont` and writes the C definitions that reproduce the
original binary layout, the C declarations header, and the name marker.

Classes:
    `EmitterContext`:
        Output buffer, running byte offset, section offsets and the extern registry shared
        by every block emitter.

Functions:
    `emit_soundfont`:
        Returns the definitions (.c) text.

    `emit_declarations`:
        Returns the declarations (.h) text.

    `emit_name`:
        Returns the name marker text.

Block order:
    header -> samples -> envelopes -> instruments -> drums -> effects -> match padding

    Every block starts on a 16-byte boundary except match padding, which follows the effect
    list directly. Alignment inside blocks is written as SF_PAD4/SF_PAD8/SF_PADC statements.
'''

from .Errors import InternalError
from .Diagnostics import warning
from .Helpers import align_to_16, padding_to_16
from .Quirks import loop_frame_count
from .Registry import Registry
from .soundfont.Deduplication import BookDeduplicator

PADDING_STATEMENTS = {
  0x4: 'SF_PAD4();\n',
  0x8: 'SF_PAD8();\n',
  0xC: 'SF_PADC();\n',
}

class EmitterContext:
  ''' State shared by the block emitters '''
  def __init__(self, soundfont):
    self.soundfont = soundfont
    self.sf_index = soundfont.info.index

    self.out: list[str] = []
    self.size = 0

    # Block name -> offset from the start of the soundfont
    self.section_offsets: dict[str, int] = {}

    self.externs = Registry()

  def write(self, text: str):
    self.out.append(text)

  def extern(self, declaration: str):
    ''' Writes an extern declaration the first time it is seen '''
    if declaration not in self.externs:
      self.externs.declare(declaration, declaration)
      self.write(f'extern {declaration};\n')

  def emit_padding(self, pos: int):
    ''' Pads to the next 16-byte boundary, `pos` measured from a 16-byte aligned location '''
    amount = padding_to_16(pos)
    if amount == 0:
      return
    if amount not in PADDING_STATEMENTS:
      raise InternalError(f'Bad alignment generated ({amount} bytes)')
    self.write(PADDING_STATEMENTS[amount])

  def begin_section(self, name: str):
    if self.size % 0x10 != 0:
      raise InternalError(f'Section {name} starts unaligned at 0x{self.size:X}')
    self.section_offsets[name] = self.size

  def end_section(self, name: str):
    if self.size % 4 != 0:
      raise InternalError(f'Section {name} ends unaligned at 0x{self.size:X}')

  def text(self) -> str:
    return ''.join(self.out)

''' Block Emitters '''
def emit_header(ctx: EmitterContext):
  sf = ctx.soundfont
  i = ctx.sf_index
  ctx.begin_section('header')

  ctx.write('// HEADER\n\n')

  if sf.drums:
    ctx.extern(f'Drum* SF{i}_DRUMS_PTR_LIST[]')
    ctx.write('\n')

  if sf.effects:
    ctx.extern(f'SoundEffect SF{i}_SFX_LIST[]')
    ctx.write('\n')

  table = sf.pointer_table_instruments()

  if sf.instruments:
    for instrument in table:
      if not instrument.is_placeholder:
        ctx.extern(f'Instrument {instrument.name}')
    ctx.write('\n')

  # The drum and effect pointers are always written, even when NULL
  if sf.drums:
    ctx.write(f'NO_REORDER DATA Drum** SF{i}_DRUMS_PTR_LIST_PTR = SF{i}_DRUMS_PTR_LIST;\n')
  else:
    ctx.write(f'NO_REORDER DATA Drum** SF{i}_DRUMS_PTR_LIST_PTR = NULL;\n')

  if sf.effects:
    ctx.write(f'NO_REORDER DATA SoundEffect* SF{i}_SFX_LIST_PTR = SF{i}_SFX_LIST;\n')
  else:
    ctx.write(f'NO_REORDER DATA SoundEffect* SF{i}_SFX_LIST_PTR = NULL;\n')

  pos = 8

  if sf.instruments:
    ctx.write(f'NO_REORDER DATA Instrument* SF{i}_INSTRUMENT_PTR_LIST[] = {{\n')
    for instrument in table:
      if instrument.is_placeholder:
        ctx.write('    NULL,\n')
      else:
        ctx.write(f'    &{instrument.name},\n')
      pos += 4
    ctx.write('};\n')

  ctx.emit_padding(pos)
  ctx.write('\n')

  ctx.size += align_to_16(pos)
  ctx.end_section('header')

def emit_samples(ctx: EmitterContext):
  sf = ctx.soundfont
  i = ctx.sf_index
  if not sf.samples:
    return

  ctx.begin_section('samples')
  books = BookDeduplicator()

  for n, sample in enumerate(sf.samples):
    book_name, new_book = books.resolve(sample)

    ctx.write(f'// SAMPLE {n}\n\n')

    ctx.extern(f'u8 {sample.samplebank_name}_{sample.name}_Off[]')
    ctx.extern(f'AdpcmBook SF{i}_{book_name}_BOOK')
    ctx.extern(f'AdpcmLoop SF{i}_{sample.name}_LOOP')
    ctx.write('\n')

    ctx.write(sample.to_c(i, book_name))
    ctx.write('\n')
    ctx.size += 0x10

    if new_book:
      book_size = sample.book.struct_size
      ctx.write(sample.book.to_c(i, book_name))
      ctx.emit_padding(book_size)
      ctx.write('\n')
      ctx.size += align_to_16(book_size)

    frame_count = 0
    if sf.info.loops_have_frames:
      frame_count = loop_frame_count(sample.waveform.ssnd_size, sample.waveform.compression_type)

    ctx.write(sample.loop.to_c(i, sample.name, frame_count))
    ctx.write('\n')
    ctx.size += sample.loop.struct_size

  ctx.end_section('samples')

def emit_envelopes(ctx: EmitterContext):
  sf = ctx.soundfont
  if not sf.envelopes:
    return

  ctx.begin_section('envelopes')
  ctx.write('// ENVELOPES\n\n')

  empty_num = 0
  for envelope in sf.envelopes:
    if envelope.is_empty:
      # Only the original soundfonts carry these
      if not sf.matching:
        continue
      ctx.write(envelope.to_c(ctx.sf_index, empty_num))
      ctx.write('\n')
      empty_num += 1
      ctx.size += envelope.struct_size
      continue

    ctx.write(envelope.to_c(ctx.sf_index))
    ctx.emit_padding(envelope.struct_size)
    ctx.write('\n')
    ctx.size += align_to_16(envelope.struct_size)

  ctx.end_section('envelopes')

def emit_instruments(ctx: EmitterContext):
  sf = ctx.soundfont
  order = sf.instruments_in_struct_order()
  if not order:
    return

  ctx.begin_section('instruments')
  ctx.write('// INSTRUMENTS\n\n')

  unused_num = 0
  for instrument in order:
    ctx.write(instrument.to_c(ctx.sf_index, unused_num))
    ctx.write('\n')
    if instrument.unused:
      unused_num += 1
    ctx.size += 0x20

  ctx.end_section('instruments')

def emit_drums(ctx: EmitterContext):
  sf = ctx.soundfont
  i = ctx.sf_index
  if not sf.drums:
    return

  table = sf.drum_pointer_table()

  ctx.begin_section('drums')
  ctx.write('// DRUMS\n\n')

  for drum in sf.drums:
    if drum.is_placeholder:
      continue
    ctx.write(drum.to_c(i))
    ctx.write('\n')
    ctx.size += 0x10 * drum.length

  ctx.write(f'NO_REORDER DATA Drum* SF{i}_DRUMS_PTR_LIST[{len(table)}] = {{\n')

  for semitone, entry in enumerate(table):
    if entry is None:
      ctx.write('    NULL,\n')
      continue

    drum, n = entry
    # Space out drum groups
    if semitone != 0 and n == 0:
      ctx.write('\n')
    ctx.write(f'    &{drum.name}[{n}],\n')

  ctx.write('};\n')
  ctx.emit_padding(len(table) * 4)
  ctx.write('\n')

  ctx.size += align_to_16(len(table) * 4)
  ctx.end_section('drums')

def emit_effects(ctx: EmitterContext):
  sf = ctx.soundfont
  if not sf.effects:
    return

  ctx.begin_section('effects')
  ctx.write('// EFFECTS\n\n')

  ctx.write(f'NO_REORDER DATA SoundEffect SF{ctx.sf_index}_SFX_LIST[] = {{\n')
  for effect in sf.effects:
    ctx.write(effect.to_c(ctx.sf_index))
    ctx.size += 8
  ctx.write('};\n\n')

  ctx.end_section('effects')

def emit_match_padding(ctx: EmitterContext):
  sf = ctx.soundfont
  i = ctx.sf_index

  if sf.match_padding:
    # Never pad past the next 16-byte boundary
    amount = min(len(sf.match_padding), padding_to_16(ctx.size))

    if amount != 0:
      ctx.write('// MATCH PADDING\n\n')
      ctx.write(f'NO_REORDER DATA u8 SF{i}_MATCH_PADDING[] = {{\n')
      for value in sf.match_padding[:amount]:
        ctx.write(f'    0x{value:02X},\n')
      ctx.write('};\n\n')
      ctx.size += amount

  if sf.info.pad_to_size != 0:
    if sf.info.pad_to_size <= ctx.size:
      warning('PadToSize directive ignored.')
    else:
      amount = sf.info.pad_to_size - ctx.size
      ctx.write('// MATCH SIZE PADDING\n\n')
      ctx.write(f'NO_REORDER DATA u8 SF{i}_MATCH_PADDING_TO_SIZE[{amount}] = {{ 0 }};\n')
      ctx.size += amount

def build_definitions(soundfont) -> EmitterContext:
  ctx = EmitterContext(soundfont)
  ctx.write('#include "soundfont_file.h"\n\n')

  emit_header(ctx)
  emit_samples(ctx)
  emit_envelopes(ctx)
  emit_instruments(ctx)
  emit_drums(ctx)
  emit_effects(ctx)
  emit_match_padding(ctx)

  return ctx

def emit_soundfont(soundfont) -> str:
  return build_definitions(soundfont).text()

''' Declarations '''
def emit_declarations(soundfont) -> str:
  info = soundfont.info
  i = info.index
  out = []

  out.append(
    f'#ifndef SOUNDFONT_{i}_H_\n'
    f'#define SOUNDFONT_{i}_H_\n'
    '\n'
  )

  out.append(
    '#ifdef _LANGUAGE_ASEQ\n'
    '.pushsection .fonts, "", @note\n'
    f'    .byte {i} /*sf id*/\n'
    '.popsection\n'
    '#endif\n'
    '\n'
  )

  out.append(
    f'#define {info.name}_ID {i}\n'
    '\n'
    f'#define SF{i}_NUM_INSTRUMENTS {soundfont.num_instruments}\n'
    f'#define SF{i}_NUM_DRUMS       {soundfont.num_drums}\n'
    f'#define SF{i}_NUM_SFX         {soundfont.num_effects}\n'
    '\n'
  )

  out.append(
    f'#define SF{i}_MEDIUM       {info.medium.name}\n'
    f'#define SF{i}_CACHE_POLICY {info.cache_policy.name}\n'
  )
  if info.pointer_index is not None:
    out.append(f'#define SF{i}_INDIRECT     {info.pointer_index}\n')
  out.append('\n')

  # Pointer table index
  if soundfont.instruments:
    for n, instrument in enumerate(soundfont.pointer_table_instruments()):
      if not instrument.is_placeholder:
        out.append(f'#define {instrument.name} {n}\n')
    out.append('\n')

  # e.g. a drum "MY_DRUM" with a C4 base note covering semitones 0..1:
  #   #define MY_DRUM_C4  0
  #   #define MY_DRUM_DF4 1
  for drum in soundfont.drums:
    if drum.is_placeholder:
      continue
    for define, slot in drum.note_defines():
      out.append(f'#define {define} {slot}\n')
    out.append('\n')

  if soundfont.effects:
    for n, effect in enumerate(soundfont.effects):
      if not effect.is_placeholder:
        out.append(f'#define {effect.name} {n}\n')
    out.append('\n')

  out.append('#endif\n')
  return ''.join(out)

def emit_name(soundfont) -> str:
  return soundfont.info.name

if __name__ == '__main__':
  pass
