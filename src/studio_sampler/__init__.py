"""studio-sampler: audition remote instrument samples with fallback resolution."""

__version__ = '0.1.0'
