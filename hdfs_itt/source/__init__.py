from .reference_source import ReferenceSource as ReferenceSource
