from .chunks import materialize_chunks as materialize_chunks
from .digest import digest_file as digest_file, digest_range as digest_range
from .manifest import (
    Manifest as Manifest,
    ManifestEntry as ManifestEntry,
    build_manifest as build_manifest,
)
