'''
### Structs Package

This package provides class definitions for the structures a soundfont is made of, each with
an XML (or samplebank YAML) reader and a C emitter.

Modules:
    `Envelope`:
        Defines the `Envelope` class representing an EnvelopePoint array.

    `Sample`:
        Defines the `Sample` class representing a sample header.

    `Codebook`:
        Defines the `AdpcmBook` class representing an ADPCM codebook.

    `Loopbook`:
        Defines the `AdpcmLoop` class representing an ADPCM loop.

    `Instrument`:
        Defines the `Instrument` class and its low/mid/high `InstrumentSample` records.

    `Drum`:
        Defines the `Drum` class representing a drum group spanning a semitone range.

    `Effect`:
        Defines the `SoundEffect` class representing a sound effect list entry.

    `MatchPadding`:
        Reads the literal trailing bytes of a soundfont.

Functionality:
    - Read structures from XML elements (`from_xml`) or samplebank data (`from_yaml`).
    - Emit structures as C (`to_c`).
    - Validate names, ranges and references while reading.
'''
