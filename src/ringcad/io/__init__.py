"""I/O utilities for ringCAD."""

from .points import load_rings, save_rings, to_array, to_points, to_records
from .dxf import write_dxf

__all__ = ['load_rings', 'save_rings', 'to_array', 'to_points', 'to_records', 'write_dxf']
