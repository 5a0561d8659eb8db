"""
jugglesim: siteswap parser and juggling pattern simulator

Turns juggling notation into an animated, renderer-agnostic simulation.

Core concepts:
- A siteswap string parses into an immutable Pattern (or a clear error)
- The scheduler owns hands and balls and advances them per frame
- Every ball is either held by exactly one hand or in flight
- Renderers only read FrameState snapshots; they never mutate the engine

See DESIGN.md for design notes.
"""

__version__ = "0.1.0"
