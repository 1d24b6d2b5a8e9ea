"""Core TOC logic.

Modules:
- models: content items, parts and the TOC view
- visibility: per-item visibility rule
- links: REST URL and link construction
- projector: raw book structure -> public TOC view
- media: mime whitelist, import validation and content wrapping
- structure_importer: load a structure file into the content store
"""

__all__ = [
    "models",
    "visibility",
    "links",
    "projector",
    "media",
    "structure_importer",
]
