'''
### Soundfont Package

This package defines the in-memory model of a soundfont and the codebook deduplication used
when it is emitted.

Modules:
    `Soundfont`:
        Core classes representing an entire soundfont (`Soundfont`) and its bank-level
        metadata (`SoundfontInfo`), including the readers that populate them from XML.

    `Deduplication`:
        Resolves which sample owns each shared codebook.

    `structs`:
        Individual soundfont structure representations.
'''
