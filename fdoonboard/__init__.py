"""Device onboarding helpers: raw CBOR array parsing, retry delays, marker file and key generation."""

__version__ = "0.1.0"