"""
Slide generation progress tracking.

This package is the only stateful part of the proposal pipeline. It is kept
apart from calculation and assembly so that:
- those stay pure functions of their inputs
- the progress store can be swapped (in-memory for one process, external for
  several) without touching anything else
"""
