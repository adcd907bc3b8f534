'''
### Enums Module

This module defines enumerations used throughout the project to classify and interpret
constants found in soundfont XML descriptions and the C structures emitted for them.

Classes:
    `XMLTags`:
        An enumeration of the top-level XML element tags allowed inside a `<Soundfont>`.

    `AudioSampleCodec`:
        Enumerates the sample encoding formats understood by the audio driver.

    `AudioStorageMedium`:
        Enumerates the storage mediums a soundfont or sample can reside in.

    `CacheLoadType`:
        Enumerates the cache policies a soundfont can be loaded with.

    `EnvelopeOpcodes`:
        Enumerates the reserved delay values used as envelope commands.

Functionality:
    - Provides strongly typed constants for use in parsing, validation, and emission logic.
    - Maps XML spellings and AIFC compression types onto their C enum names.

Dependencies:
    `enum`:
        Used for defining enumeration types.

Intended Usage:
    This module should be imported wherever constant classification or tag identification
    is needed during XML parsing or C emission.
'''

from enum import Enum, IntEnum


class XMLTags(Enum):
    SOUNDFONT = 'Soundfont'
    ENVELOPES = 'Envelopes'
    SAMPLES = 'Samples'
    INSTRUMENTS = 'Instruments'
    DRUMS = 'Drums'
    EFFECTS = 'Effects'
    MATCHPADDING = 'MatchPadding'


class AudioSampleCodec(IntEnum):
    CODEC_ADPCM = 0
    CODEC_S8 = 1
    CODEC_S16_INMEMORY = 2
    CODEC_SMALL_ADPCM = 3
    CODEC_REVERB = 4
    CODEC_S16 = 5

    @classmethod
    def from_compression_type(cls, compression_type: str):
        codec = COMPRESSION_TYPES.get(compression_type)
        if codec is None:
            raise ValueError(compression_type)
        return codec


# AIFC compression type -> codec
COMPRESSION_TYPES: dict[str, AudioSampleCodec] = {
    'ADP9': AudioSampleCodec.CODEC_ADPCM,
    'HPCM': AudioSampleCodec.CODEC_S8,
    'ADP5': AudioSampleCodec.CODEC_SMALL_ADPCM,
    'RVRB': AudioSampleCodec.CODEC_REVERB,
    'NONE': AudioSampleCodec.CODEC_S16,
}


class AudioStorageMedium(IntEnum):
    MEDIUM_RAM = 0
    MEDIUM_UNK = 1
    MEDIUM_CART = 2
    MEDIUM_DISK_DRIVE = 3
    MEDIUM_RAM_UNLOADED = 5


class CacheLoadType(IntEnum):
    CACHE_LOAD_PERMANENT = 0
    CACHE_LOAD_PERSISTENT = 1
    CACHE_LOAD_TEMPORARY = 2
    CACHE_LOAD_EITHER = 3
    CACHE_LOAD_EITHER_NOSYNC = 4


# XML spellings for the soundfont Medium and CachePolicy attributes
MEDIUM_NAMES: dict[str, AudioStorageMedium] = {
    'RAM': AudioStorageMedium.MEDIUM_RAM,
    'Unk': AudioStorageMedium.MEDIUM_UNK,
    'Cart': AudioStorageMedium.MEDIUM_CART,
    'Disk': AudioStorageMedium.MEDIUM_DISK_DRIVE,
    'RAMUnloaded': AudioStorageMedium.MEDIUM_RAM_UNLOADED,
}

CACHE_POLICY_NAMES: dict[str, CacheLoadType] = {
    'Permanent': CacheLoadType.CACHE_LOAD_PERMANENT,
    'Persistent': CacheLoadType.CACHE_LOAD_PERSISTENT,
    'Temporary': CacheLoadType.CACHE_LOAD_TEMPORARY,
    'Either': CacheLoadType.CACHE_LOAD_EITHER,
    'EitherNoSync': CacheLoadType.CACHE_LOAD_EITHER_NOSYNC,
}


class EnvelopeOpcodes(IntEnum):
    DISABLE = 0
    HANG = -1
    GOTO = -2
    RESTART = -3


if __name__ == '__main__':
    pass
