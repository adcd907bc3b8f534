'''
### sfcompiler Package

This package contains the modules that read a Zelda64 soundfont XML description and emit the
C definitions, C declarations and name marker that rebuild the soundfont byte for byte.

Modules:
    `Enums`:
        Defines enumeration classes for XML tags, codecs, storage mediums and cache policies.

    `Errors` / `Diagnostics`:
        Typed compile errors and the colored terminal messages they are reported with.

    `Helpers`:
        Provides alignment, float32 rounding and C identifier helpers.

    `XMLParser`:
        Builds a line-numbered element tree and coerces attributes through declaration tables.

    `Tuning`:
        The audio driver's pitch table, note names and the tuning calculation.

    `Quirks`:
        Compatibility patches reproducing artifacts of the original tools.

    `Registry`:
        Idempotent key -> value declarations.

    `Waveform`:
        Samplebank documents and the waveform metadata they provide.

    `Emitter`:
        Writes the soundfont model out as C.

    `soundfont.Soundfont`:
        Core classes representing an entire soundfont and its metadata.

    `soundfont.Deduplication`:
        Codebook sharing between samples.

    `soundfont.structs`:
        Individual soundfont structures: envelopes, samples, codebooks, loops, instruments,
        drums, sound effects and match padding.

Dependencies:
    `xml.parsers.expat`:
        For XML parsing with line numbers.

    `yaml`:
        For reading samplebank documents.

Intended Usage:
    Driven by `soundfont_compiler.py`, which parses the description, builds a `Soundfont` and
    publishes the emitted text.
'''
