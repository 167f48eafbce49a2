"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Computed keys, display precision, export settings
- exceptions: Custom exception hierarchy
- ingress: Request body decoding for the HTTP entry points
"""
